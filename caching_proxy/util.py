from typing import Iterable
from urllib.parse import urljoin

from urllib3 import HTTPHeaderDict


HOP_BY_HOP_HEADERS = frozenset({
    'connection',
    'keep-alive',
    'proxy-authenticate',
    'proxy-authorization',
    'te',
    'trailer',
    'transfer-encoding',
    'upgrade',
})


def is_success(status: int) -> bool:
    return 200 <= status < 300


def is_redirect(status: int) -> bool:
    return 300 <= status < 400


def strip_origin(url: str, origin: str) -> str:
    """
    Turn `url` back into a path relative to `origin`.

    A URL that the stripped path would not lead back to (another host, or an
    origin with a path of its own) is returned unchanged. It still resolves to
    itself when joined with the origin.
    """
    origin = origin.rstrip('/')
    if url == origin:
        path = '/'
    elif url.startswith(origin + '/') or url.startswith(origin + '?'):
        path = url[len(origin):]
    else:
        return url
    if urljoin(origin, path).rstrip('/') != url.rstrip('/'):
        return url
    return path


def end_to_end_headers(headers: HTTPHeaderDict, exclude: Iterable[str] = ()) -> HTTPHeaderDict:
    """
    Copy `headers`, leaving out hop-by-hop headers and anything in `exclude`.

    Headers named in a Connection header are hop-by-hop as well.
    """
    dropped = set(HOP_BY_HOP_HEADERS)
    dropped.update(name.lower() for name in exclude)
    for value in headers.getlist('Connection'):
        dropped.update(token.strip().lower() for token in value.split(',') if token.strip())

    result = HTTPHeaderDict()
    for name, value in headers.iteritems():
        if name.lower() not in dropped:
            result.add(name, value)
    return result

