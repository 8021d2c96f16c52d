"""Tests for ordered iteration over name-keyed mappings."""

from __future__ import annotations

import pytest

from garment.errors import CorruptTemplateError
from garment.ordering import OrderedView, check_order, complete_order


def test_iterates_in_declared_order() -> None:
    view = OrderedView({"a": 1, "b": 2}, ["b", "a"])

    assert list(view) == [("b", 2), ("a", 1)]


def test_iteration_is_restartable() -> None:
    view = OrderedView({"a": 1, "b": 2}, ["a", "b"])

    assert list(view) == list(view)
    assert len(view) == 2


def test_missing_name_is_fatal() -> None:
    view = OrderedView({"a": 1}, ["a", "ghost"])
    iterator = iter(view)

    assert next(iterator) == ("a", 1)
    with pytest.raises(CorruptTemplateError, match="ghost"):
        next(iterator)


def test_check_order_rejects_duplicates_and_unknown_names() -> None:
    with pytest.raises(CorruptTemplateError, match="more than once"):
        check_order({"a": 1}, ["a", "a"], context="parameter_order")
    with pytest.raises(CorruptTemplateError, match="no entry"):
        check_order({"a": 1}, ["b"], context="parameter_order")


def test_complete_order_appends_unlisted_names_sorted() -> None:
    assert complete_order({"c": 1, "a": 2, "b": 3}, ["b"]) == ["b", "a", "c"]
