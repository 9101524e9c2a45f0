class ProxyError(Exception):
    """
    Base class of all errors raised by the proxy.
    """


class ConfigurationError(ProxyError):
    """
    Raised when the startup parameters are missing or invalid.
    """


class FetchError(ProxyError):
    """
    Base class of the failures that end a fetch from the origin.
    """

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.__url = url

    @property
    def url(self) -> str:
        return self.__url


class OriginUnreachable(FetchError):
    """
    The origin could not be talked to: connection refused, DNS failure,
    timeout, or a malformed response.
    """


class TooManyRedirects(FetchError):
    def __init__(self, url: str, redirects: int) -> None:
        super().__init__(url, 'Too many redirects')
        self.__redirects = redirects

    @property
    def redirects(self) -> int:
        return self.__redirects
