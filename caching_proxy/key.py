import hashlib
from typing import Optional

from .model import Request


BODY_METHODS = frozenset({'POST', 'PUT', 'PATCH'})
"""
Methods whose body takes part in the cache key.
"""


def derive_key(method: str, path: str, body: Optional[bytes] = None) -> str:
    """
    Compute the cache key of a request.

    @param method
      The HTTP method, e.g. "GET".
    @param path
      The request path including the query string.
    @param body
      The complete request body, or `None` if the body should not be keyed.
      Never pass a partially received body.
    @return
      `METHOD|PATH`, or `METHOD|PATH|DIGEST` where `DIGEST` is the hex SHA-256
      of `body`.
    """
    key = '{}|{}'.format(method, path)
    if body is not None:
        key += '|' + hashlib.sha256(body).hexdigest()
    return key


def key_for(request: Request) -> str:
    body = request.body if request.method in BODY_METHODS else None
    return derive_key(request.method, request.path, body)
