import logging
import threading
import typing

from unitex.core import environment
from unitex.core import iterables
from unitex.core import unit as unit_


logger = logging.getLogger(__name__)


K = typing.TypeVar('K', bound=typing.Hashable)
V = typing.TypeVar('V')


class Cache(iterables.ReprStrMixin, typing.Generic[K, V]):
    """A thread-safe store of computed values.

    Parameters
    ----------
    name : string
        A label for this cache. Only used in log messages.

    limit : int, optional
        The maximum number of entries. When a lookup finds more entries than
        this, the cache first discards all of them. The default is no limit.
    """

    def __init__(self, name: str, limit: int=None) -> None:
        self.name = name
        self.limit = limit
        self._store: typing.Dict[K, V] = {}
        self._lock = threading.RLock()
        self.display.register('name', 'limit', size='__len__')
        self.display['__str__'] = "{name} ({size} entries)"
        self.display['__repr__'] = "'{name}', limit={limit}, size={size}"

    def compute(self, key: K, factory: typing.Callable[[], V]) -> V:
        """Get the value of `key`, computing it first if necessary.

        Concurrent callers with equal keys receive the same object, and
        `factory` runs at most once per key between clearances. `factory` may
        itself use this cache, since the lock is re-entrant.
        """
        with self._lock:
            if self.limit is not None and len(self._store) > self.limit:
                logger.debug(
                    "Clearing %d entries from %s cache",
                    len(self._store), self.name,
                )
                self._store.clear()
            if key in self._store:
                return self._store[key]
            value = factory()
            self._store[key] = value
            return value

    def clear(self) -> None:
        """Discard all entries."""
        with self._lock:
            self._store.clear()

    def __contains__(self, key) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


class Registry(iterables.ReprStrMixin):
    """The memoization context of parsing and simplification.

    Each public operation accepts an optional instance of this class. Passing
    the same instance to related calls guarantees that equal strings produce
    identical unit objects.

    Parameters
    ----------
    limit : int, default=100
        The size bound of the simplification cache.
    """

    def __init__(self, limit: int=100) -> None:
        self.unknown: Cache[str, unit_.UnknownUnit] = Cache('unknown')
        """Placeholders for unrecognized symbols."""
        self.special: Cache[typing.Hashable, unit_.Unit] = Cache('special')
        """Units built from strings that are not bare catalog symbols."""
        self.simplified: Cache[typing.Hashable, str] = Cache(
            'simplified', limit=limit,
        )
        """Results of the simplification search."""
        self.display.register('unknown', 'special', 'simplified')
        self.display['__repr__'] = (
            "unknown={unknown}, special={special}, simplified={simplified}"
        )

    def unknown_unit(self, symbol: str) -> unit_.UnknownUnit:
        """Get the unique placeholder unit for `symbol`."""
        return self.unknown.compute(
            symbol,
            lambda: unit_.UnknownUnit(
                symbol, inner=unit_.UnknownUnit(symbol)
            ),
        )

    def clear(self) -> None:
        """Empty every cache."""
        for cache in (self.unknown, self.special, self.simplified):
            cache.clear()


DEFAULT = Registry(limit=environment.Environment().limit)
"""The registry that operations use when the caller does not give one.

Its simplification-cache bound comes from the ``limit`` setting of the
``[registry]`` section of ``unitex.ini``, if present.
"""


def resolve(registry: typing.Optional[Registry]) -> Registry:
    """Use `registry` if given, else the default registry."""
    return DEFAULT if registry is None else registry

