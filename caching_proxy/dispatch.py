import logging

from urllib3 import HTTPHeaderDict

from .cache import Cache
from .errors import FetchError, TooManyRedirects
from .fetch import OriginFetcher
from .key import key_for
from .model import CacheEntry, Request, Response
from .util import is_success


logger = logging.getLogger(__name__)


CACHE_STATUS_HEADER = 'X-Cache'


class RequestDispatcher:
    """
    Answers client requests from the cache, falling back to the origin.
    """

    def __init__(self, origin: str, cache: Cache, fetcher: OriginFetcher) -> None:
        self.origin = origin
        self.cache = cache
        self.fetcher = fetcher

    def handle(self, request: Request) -> Response:
        """
        Produce the response for a client request.

        Steps:
        1. Derive the cache key from the method, the path and (for POST, PUT and PATCH) the complete body.
        2. If the cache has an entry for the key, answer 200 with it, marked `X-Cache: HIT`.
        3. Otherwise fetch from the origin, following redirects:
          a. A 2xx response is cached under the key and returned marked `X-Cache: MISS`.
          b. Any other status is returned as is and not cached.
          c. A failure to fetch is answered with a plain-text 500. The cache is left alone.
        """
        key = key_for(request)
        logger.info('Checking cache for {}'.format(key))

        entry = self.cache.lookup(key)
        if entry is not None:
            logger.info('Serving cached response for {}'.format(key))
            return self._from_entry(entry)

        logger.info('Cache miss for {}. Fetching new response...'.format(key))
        try:
            response = self.fetcher.fetch(self.origin, request.path, request)
        except TooManyRedirects:
            return self._error('Too many redirects')
        except FetchError as e:
            return self._error('Error fetching from origin: {}'.format(e))

        if not is_success(response.status):
            logger.info('Received non-cacheable response ({}) for {}'.format(response.status, key))
            return response

        self.cache.store(key, CacheEntry(headers=HTTPHeaderDict(response.headers), body=response.body))
        logger.info('Caching response for {} with status {}'.format(key, response.status))
        response.headers[CACHE_STATUS_HEADER] = 'MISS'
        return response

    @staticmethod
    def _from_entry(entry: CacheEntry) -> Response:
        # Copy so that the entry's headers are never touched.
        headers = HTTPHeaderDict(entry.headers)
        headers[CACHE_STATUS_HEADER] = 'HIT'
        return Response(status=200, headers=headers, body=entry.body)

    @staticmethod
    def _error(message: str) -> Response:
        headers = HTTPHeaderDict()
        headers['Content-Type'] = 'text/plain'
        return Response(status=500, headers=headers, body=message.encode('utf-8'))
