"""
Component 4: Variables

A Variable is a named probe into external (game/simulation) state. Its
provider function computes the current value for an execution context,
e.g. the agent whose view of the world is being queried.

Values are cached for the most recent context only. The cache stays valid
until DomainRegistry.invalidate_cached_values() is called, which callers
must do once per planning episode; otherwise values from a previous tick
or context leak into the search.
"""

from typing import Any, Callable, Dict, Generic, TypeVar

from cachetools import LRUCache

from component_1_identity import UidBase

T = TypeVar("T")

ValueProvider = Callable[[Any], T]


class Variable(UidBase, Generic[T]):
    """
    Planner-visible aspect of the world state.

    Attributes:
        uid: Identity issued by the owning DomainRegistry
        name: Display name
        provider: Computes the value for an execution context
    """

    def __init__(self, uid: int, name: str, provider: ValueProvider):
        self.uid = uid
        self.name = name
        self.provider = provider
        # Single slot keyed by id(context); the cached entry keeps a reference
        # to the context, so the id cannot be reused while it is cached.
        self._cache: LRUCache = LRUCache(maxsize=1)
        self._hits = 0
        self._misses = 0

    def value_for(self, context: Any) -> T:
        """
        Current value of the variable for context.

        Recomputed when context differs (by identity) from the cached one
        or after invalidate().
        """
        entry = self._cache.get(id(context))
        if entry is not None and entry[0] is context:
            self._hits += 1
            return entry[1]

        self._misses += 1
        value = self.provider(context)
        self._cache[id(context)] = (context, value)
        return value

    def invalidate(self) -> None:
        """Forget the cached value."""
        self._cache.clear()

    @property
    def is_cached(self) -> bool:
        return len(self._cache) > 0

    def cache_stats(self) -> Dict[str, int]:
        return {"hits": self._hits, "misses": self._misses}

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Variable({self.name!r}, uid={self.uid})"
