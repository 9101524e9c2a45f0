from abc import ABC, abstractmethod
import logging
import threading
from typing import Dict, Optional

from .model import CacheEntry


logger = logging.getLogger(__name__)


class Cache(ABC):
    """
    An abstraction of a response cache.

    A response cache has a relatively narrow scope: to remember a response such that it can be recalled later for a
    request with the same key. Note that this deliberately precludes certain responsibilities such as expiration or
    eviction. Entries only ever go away all at once, through `clear()`.
    """

    @abstractmethod
    def lookup(self, key: str) -> Optional[CacheEntry]:
        """
        Retrieve the entry stored under `key`.

        @param key
          A cache key, as produced by `caching_proxy.key.derive_key()`.
        @return
          The cached entry, or `None` if there is none.
        """

    @abstractmethod
    def store(self, key: str, entry: CacheEntry) -> None:
        """
        Add an entry to the cache.

        Any entry already stored under `key` is silently replaced.

        @param key
          The key to store the entry under.
        @param entry
          The entry to store.
        """

    @abstractmethod
    def clear(self) -> None:
        """
        Remove every entry from the cache.
        """

    @abstractmethod
    def __contains__(self, key: str) -> bool:
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...

    def close(self):
        """
        Close any resources associated with the cache.
        """


class MemoryCache(Cache):
    """
    Keeps entries in a dictionary for the lifetime of the process.

    Requests are served from several threads, so all access goes through a single lock. The cache grows with every
    distinct key it sees.
    """

    def __init__(self) -> None:
        self.__entries: Dict[str, CacheEntry] = {}
        self.__lock = threading.Lock()

    def lookup(self, key: str) -> Optional[CacheEntry]:
        with self.__lock:
            return self.__entries.get(key)

    def store(self, key: str, entry: CacheEntry) -> None:
        with self.__lock:
            if key in self.__entries:
                logger.debug('Replacing the existing entry for {}'.format(key))
            self.__entries[key] = entry

    def clear(self) -> None:
        with self.__lock:
            count = len(self.__entries)
            self.__entries.clear()
        logger.info('Removed {} entries from the cache.'.format(count))

    def __contains__(self, key: str) -> bool:
        with self.__lock:
            return key in self.__entries

    def __len__(self) -> int:
        with self.__lock:
            return len(self.__entries)
