import argparse
from dataclasses import dataclass
import logging
from typing import Optional, Sequence
from urllib.parse import urlsplit

from .errors import ConfigurationError


DEFAULT_HOST = '0.0.0.0'
DEFAULT_TIMEOUT = 30.0
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class Config:
    port: Optional[int] = None
    """
    The port to listen on.
    """

    origin: Optional[str] = None
    """
    The absolute URL of the server requests are forwarded to, without a trailing slash.
    """

    clear_cache: bool = False
    """
    Clear the cache and exit instead of starting the server.
    """

    host: str = DEFAULT_HOST
    timeout: Optional[float] = DEFAULT_TIMEOUT
    log_level: str = 'INFO'

    def validate(self) -> 'Config':
        """
        Check that the server can be started with this configuration.

        Nothing is required when only clearing the cache.

        @return
          This configuration.
        @throws ConfigurationError
          If the port or the origin is missing or invalid.
        """
        if self.clear_cache:
            return self

        if self.port is None or self.origin is None:
            raise ConfigurationError('You must specify both --port and --origin unless using --clear-cache.')
        if not 0 <= self.port <= 65535:
            raise ConfigurationError('Invalid port {}. Expected a number between 0 and 65535.'.format(self.port))

        parts = urlsplit(self.origin)
        if parts.scheme not in ('http', 'https') or not parts.netloc:
            raise ConfigurationError('Invalid origin {!r}. Expected an absolute http or https URL.'.format(self.origin))
        if parts.path not in ('', '/'):
            raise ConfigurationError('Invalid origin {!r}. Expected a URL without a path.'.format(self.origin))
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError('Invalid timeout {}. Expected a positive number of seconds.'.format(self.timeout))
        return self

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)


def _timeout(value: str) -> Optional[float]:
    # 0 disables the timeout.
    seconds = float(value)
    return seconds or None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='caching-proxy',
        description='Forward requests to an origin server and cache its successful responses.',
    )
    parser.add_argument('--port', type=int, help='Port on which the caching proxy server will run')
    parser.add_argument('--origin', help='The origin URL to which the requests will be forwarded')
    parser.add_argument('--clear-cache', action='store_true', help='Clear the cache and exit')
    parser.add_argument('--host', default=DEFAULT_HOST, help='Address to listen on (default: %(default)s)')
    parser.add_argument('--timeout', type=_timeout, default=DEFAULT_TIMEOUT,
                        help='Seconds to wait for the origin, 0 to wait forever (default: %(default)s)')
    parser.add_argument('--log-level', default='INFO', choices=LOG_LEVELS, type=str.upper,
                        help='Logging verbosity (default: %(default)s)')
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> Config:
    """
    Build a validated `Config` from command line arguments.

    @throws ConfigurationError
      If the arguments do not describe a usable configuration.
    @throws SystemExit
      If argparse rejects the arguments, e.g. a non-numeric port.
    """
    args = build_parser().parse_args(argv)
    origin = args.origin.rstrip('/') if args.origin else args.origin
    return Config(
        port=args.port,
        origin=origin,
        clear_cache=args.clear_cache,
        host=args.host,
        timeout=args.timeout,
        log_level=args.log_level,
    ).validate()
