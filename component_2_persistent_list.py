"""
Component 2: Persistent Linked List

Immutable singly linked list used by the planner to represent the actions
and open subgoals of partial plans. Children of a search node share the tail
of their parent's lists instead of copying them.

- LList: cons cell (first, rest); None is the empty list
- where: predicate filter that shares the longest unchanged suffix
- to_array: linearise into a tuple

Nodes are never mutated after construction; new lists are only built by
prepending.
"""

from typing import Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class LList(Generic[T]):
    """
    Cons cell of a persistent list.

    Attributes:
        first: Element stored in this cell
        rest: Remaining list (None for the end of the list)
    """

    __slots__ = ("first", "rest")

    first: T
    rest: Optional["LList[T]"]

    def __init__(self, first: T, rest: Optional["LList[T]"] = None):
        object.__setattr__(self, "first", first)
        object.__setattr__(self, "rest", rest)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __iter__(self) -> Iterator[T]:
        return iter_llist(self)

    def __len__(self) -> int:
        return llist_length(self)

    def __repr__(self) -> str:
        return f"LList({list(iter_llist(self))!r})"


def cons(first: T, rest: Optional[LList[T]] = None) -> LList[T]:
    """Prepend first to rest."""
    return LList(first, rest)


def llist(*items: T) -> Optional[LList[T]]:
    """Build a list holding items in the given order."""
    result: Optional[LList[T]] = None
    for item in reversed(items):
        result = LList(item, result)
    return result


def iter_llist(lst: Optional[LList[T]]) -> Iterator[T]:
    cell = lst
    while cell is not None:
        yield cell.first
        cell = cell.rest


def llist_length(lst: Optional[LList[T]]) -> int:
    length = 0
    cell = lst
    while cell is not None:
        length += 1
        cell = cell.rest
    return length


def where(
    lst: Optional[LList[T]],
    predicate: Callable[[T], bool],
    tail: Optional[LList[T]] = None,
) -> Optional[LList[T]]:
    """
    Return the elements of lst that satisfy predicate, followed by tail.

    Shares as much structure as possible with lst: if the kept elements
    form an unchanged suffix of lst ending at tail, that suffix is returned
    itself (no new cells). In particular, when predicate holds for every
    element and tail is None, lst is returned unchanged.

    Args:
        lst: Source list (not modified)
        predicate: Elements for which this is true are kept
        tail: List appended after the kept elements

    Returns:
        Filtered list
    """
    # Walk once, then rebuild from the back so long lists do not recurse.
    cells: List[LList[T]] = []
    cell = lst
    while cell is not None:
        cells.append(cell)
        cell = cell.rest

    result = tail
    for cell in reversed(cells):
        keep = predicate(cell.first)
        if keep and cell.rest is result:
            result = cell
        elif keep:
            result = LList(cell.first, result)
    return result


def to_array(lst: Optional[LList[T]]) -> Tuple[T, ...]:
    """Elements of lst, in order."""
    return tuple(iter_llist(lst))
