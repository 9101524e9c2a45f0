import logging
import sys
from typing import Optional, Sequence

import uvicorn

from .cache import Cache, MemoryCache
from .config import Config, parse_args
from .dispatch import RequestDispatcher
from .errors import ConfigurationError
from .fetch import OriginFetcher
from . import server


logger = logging.getLogger(__name__)


def clear_cache(cache: Cache) -> None:
    cache.clear()
    logger.info('Cache cleared successfully.')


def create_server(config: Config, cache: Cache) -> uvicorn.Server:
    fetcher = OriginFetcher(timeout=config.timeout)
    dispatcher = RequestDispatcher(config.origin, cache, fetcher)
    return server.create_server((config.host, config.port), dispatcher)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the caching proxy.

    The listener stops on Ctrl-C. If it cannot bind, uvicorn exits the process with status 1.

    @return
      The process exit code.
    """
    try:
        config = parse_args(argv)
    except ConfigurationError as e:
        print('Error: {}'.format(e), file=sys.stderr)
        return 1

    logging.basicConfig(level=config.log_level_number,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    cache = MemoryCache()
    if config.clear_cache:
        clear_cache(cache)
        return 0

    proxy = create_server(config, cache)
    logger.info('Caching Proxy running on port {}, forwarding to {}'.format(config.port, config.origin))
    try:
        proxy.run()
    finally:
        cache.close()
    logger.info('Shut down.')
    return 0
