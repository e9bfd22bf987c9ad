"""
tests/test_persistent_list.py

Unit tests for the persistent linked list (component_2).

Tests cover:
- Construction and linearisation
- where(): filtering with structure sharing
- Immutability of cells
"""

import pytest

from component_2_persistent_list import (
    LList,
    cons,
    iter_llist,
    llist,
    llist_length,
    to_array,
    where,
)


class TestConstruction:
    """Tests for building and reading lists"""

    def test_llist_keeps_order(self):
        lst = llist(1, 2, 3)
        assert to_array(lst) == (1, 2, 3)

    def test_empty_list_is_none(self):
        assert llist() is None
        assert to_array(None) == ()
        assert llist_length(None) == 0

    def test_cons_prepends_and_shares_tail(self):
        tail = llist(2, 3)
        lst = cons(1, tail)
        assert lst.rest is tail
        assert to_array(lst) == (1, 2, 3)

    def test_iteration_and_len(self):
        lst = llist("a", "b")
        assert list(lst) == ["a", "b"]
        assert len(lst) == 2
        assert list(iter_llist(lst)) == ["a", "b"]

    def test_cells_are_immutable(self):
        lst = llist(1)
        with pytest.raises(AttributeError):
            lst.first = 5
        with pytest.raises(AttributeError):
            lst.rest = llist(2)


class TestWhere:
    """Tests for where() structure sharing"""

    def test_all_kept_returns_same_list(self):
        """Test: Predicate true everywhere returns the identical list"""
        lst = llist(1, 2, 3)
        assert where(lst, lambda x: True) is lst

    def test_none_kept_returns_tail(self):
        tail = llist(9)
        assert where(llist(1, 2, 3), lambda x: False, tail) is tail
        assert where(llist(1, 2, 3), lambda x: False) is None

    def test_filter_keeps_relative_order(self):
        lst = llist(1, 2, 3, 4, 5, 6)
        result = where(lst, lambda x: x % 2 == 0)
        assert to_array(result) == (2, 4, 6)

    def test_unchanged_suffix_is_shared(self):
        """Test: Only the cells before the last dropped element are copied"""
        lst = llist(1, 2, 3, 4)
        result = where(lst, lambda x: x != 2)
        assert to_array(result) == (1, 3, 4)
        suffix = lst.rest.rest  # (3, 4)
        assert result.rest is suffix

    def test_dropped_last_element_is_not_kept(self):
        """Test: Dropping the final element must not return the original list"""
        lst = llist(1, 2)
        result = where(lst, lambda x: x != 2)
        assert to_array(result) == (1,)
        assert result is not lst

    def test_tail_is_appended(self):
        tail = llist("x", "y")
        result = where(llist(1, 2, 3), lambda x: x > 1, tail)
        assert to_array(result) == (2, 3, "x", "y")
        assert result.rest.rest is tail

    def test_source_list_not_modified(self):
        lst = llist(1, 2, 3)
        where(lst, lambda x: x == 2)
        assert to_array(lst) == (1, 2, 3)

    def test_empty_source_returns_tail(self):
        tail = llist(1)
        assert where(None, lambda x: True, tail) is tail

    def test_long_list_does_not_recurse(self):
        lst = llist(*range(20000))
        result = where(lst, lambda x: x % 1000 != 0)
        assert llist_length(result) == 20000 - 20
        assert isinstance(result, LList)
