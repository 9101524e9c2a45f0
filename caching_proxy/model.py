"""
Defines the types passed through the proxy pipeline.

These types are as simple as possible in order to most conveniently consume and
produce instances of them. Bodies are always fully buffered `bytes`.
"""

from dataclasses import dataclass, field

from urllib3 import HTTPHeaderDict


@dataclass
class Request:
    """
    Represents a request received from a client.
    """

    method: str
    """
    The HTTP method of the request. E.g., "GET".
    """

    path: str
    """
    The requested path, including the query string. E.g., "/a?b=c".
    """

    headers: HTTPHeaderDict = field(default_factory=HTTPHeaderDict)
    """
    All the headers sent with the request, in the order they were received.
    """

    body: bytes = b''
    """
    The complete request payload. Empty if the client sent none.
    """


@dataclass
class Response:
    """
    Represents a response, either from the origin or to be written to a client.

    We deliberately do not use the `requests` or urllib3 response types; we just
    want a type that does what we need, and nothing more.
    """

    status: int
    """
    The status code of the response. E.g., 200 or 404.
    """

    headers: HTTPHeaderDict = field(default_factory=HTTPHeaderDict)
    """
    All the headers of the response. Repeated headers (e.g., Set-Cookie) keep
    each of their values.
    """

    body: bytes = b''

    reason: str = ''
    """
    The reason phrase. When empty, the server picks the standard phrase for
    `status`.
    """


@dataclass(frozen=True)
class CacheEntry:
    """
    A snapshot of a successful origin response.

    Entries are never mutated. Writing the same key again replaces the entry
    as a whole.
    """

    headers: HTTPHeaderDict
    body: bytes
