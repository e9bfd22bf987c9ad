"""
Component 1: Identity Source

Issues strictly increasing integer identities to domain objects
(Variables, Goals, Actions). The identity carries no meaning beyond
uniqueness and creation order; it is used for ordering and as a map key.

Each DomainRegistry owns its own IdentitySource, so independent domains
(e.g. one per test) never share a counter.
"""

import itertools
import threading
from functools import total_ordering


class IdentitySource:
    """Monotonic counter handing out UIDs, starting at 0."""

    def __init__(self, start: int = 0):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()
        self._last = start - 1

    def next_uid(self) -> int:
        with self._lock:
            self._last = next(self._counter)
            return self._last

    @property
    def last_uid(self) -> int:
        """Most recently issued UID (start - 1 if none was issued)."""
        return self._last


@total_ordering
class UidBase:
    """
    Mixin giving every instance a UID so domain objects can be sorted.

    Equality and hashing stay identity-based; only the ordering
    operators use the UID.
    """

    __slots__ = ()

    uid: int

    def __lt__(self, other: "UidBase") -> bool:
        if not isinstance(other, UidBase):
            return NotImplemented
        return self.uid < other.uid

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)
