import logging
from typing import Optional
from urllib.parse import urljoin

import requests
from urllib3 import HTTPHeaderDict
from urllib3.exceptions import HTTPError

from .errors import OriginUnreachable, TooManyRedirects
from .model import Request, Response
from .util import end_to_end_headers, is_redirect, strip_origin


logger = logging.getLogger(__name__)


MAX_REDIRECTS = 5


class OriginFetcher:
    """
    Fetches responses from the origin on behalf of a client request.

    Redirects are chased here rather than by `requests`, so that the number of hops is bounded and every hop is sent
    with the client's method and body. The fetcher never decides whether a response is cacheable.
    """

    def __init__(self,
                 session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None,
                 max_redirects: int = MAX_REDIRECTS) -> None:
        """
        @param session
          The session to send requests with. A new one is created if not given. Its default headers are dropped so
          that only the client's headers reach the origin.
        @param timeout
          Seconds to wait for the origin to connect and to send data. `None` waits forever.
        @param max_redirects
          The number of redirects to follow before giving up.
        """
        if session is None:
            session = requests.Session()
            session.headers.clear()
        self.__session = session
        self.__timeout = timeout
        self.__max_redirects = max_redirects

    def fetch(self, origin: str, path: str, request: Request, redirect_depth: int = 0) -> Response:
        """
        Send `request` to `origin` and return the first response that is not a redirect.

        @param origin
          The origin URL, e.g. "http://example.com".
        @param path
          The path to request, relative to `origin`. An absolute URL is used as is.
        @param request
          The client request. Its method, headers and body are sent on every hop.
        @param redirect_depth
          The number of redirects already followed for this client request.
        @return
          The terminal response, with its body fully read.
        @throws OriginUnreachable
          If the origin could not be reached or sent an invalid response.
        @throws TooManyRedirects
          If more than `max_redirects` redirects were chained.
        """
        target_url = urljoin(origin, path)
        response = self._send(target_url, request)

        location = response.headers.get('Location')
        if not (is_redirect(response.status) and location):
            return response

        redirect_url = urljoin(target_url, location)
        redirect_depth += 1
        if redirect_depth > self.__max_redirects:
            logger.error('Too many redirects! Gave up at {}'.format(redirect_url))
            raise TooManyRedirects(redirect_url, redirect_depth)

        logger.info('Redirecting to {}'.format(redirect_url))
        return self.fetch(origin, strip_origin(redirect_url, origin), request, redirect_depth)

    def _send(self, url: str, request: Request) -> Response:
        outbound = end_to_end_headers(request.headers, exclude=('Host', 'Content-Length'))
        logger.debug('Sending {} {}'.format(request.method, url))
        try:
            origin_response = self.__session.request(
                request.method,
                url,
                headers=dict(outbound.itermerged()),
                data=request.body or None,
                allow_redirects=False,
                stream=True,
                timeout=self.__timeout,
            )
            try:
                # The body is kept exactly as the origin encoded it, so its Content-Encoding header stays true.
                body = origin_response.raw.read(decode_content=False)
                headers = HTTPHeaderDict(origin_response.raw.headers)
            finally:
                origin_response.close()
        except (requests.RequestException, HTTPError) as e:
            logger.error('Error fetching from origin: {}'.format(e))
            raise OriginUnreachable(url, str(e)) from e

        status = origin_response.status_code
        if not isinstance(status, int) or not 100 <= status <= 599:
            logger.error('Origin sent an invalid status code: {!r}'.format(status))
            raise OriginUnreachable(url, 'Invalid status code {!r}'.format(status))

        return Response(status=status,
                        headers=headers,
                        body=body or b'',
                        reason=origin_response.reason or '')
