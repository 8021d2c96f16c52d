"""Iteration over name-keyed mappings in an externally declared order."""

from __future__ import annotations

from typing import Generic, Iterator, Mapping, Sequence, TypeVar

from .errors import CorruptTemplateError

T = TypeVar("T")

__all__ = ["OrderedView", "check_order", "complete_order"]


class OrderedView(Generic[T]):
    """Lazy ``(name, value)`` view of *items* following *order*.

    Every iteration starts from the beginning of the order. A name without an
    entry in *items* raises :class:`CorruptTemplateError`.
    """

    __slots__ = ("_items", "_order")

    def __init__(self, items: Mapping[str, T], order: Sequence[str]) -> None:
        self._items = items
        self._order = tuple(order)

    def __iter__(self) -> Iterator[tuple[str, T]]:
        for name in self._order:
            try:
                item = self._items[name]
            except KeyError as exc:
                raise CorruptTemplateError(f"item is in order, but doesn't exist: {name}") from exc
            yield name, item

    def __len__(self) -> int:
        return len(self._order)

    def names(self) -> tuple[str, ...]:
        return self._order


def check_order(items: Mapping[str, object], order: Sequence[str], *, context: str) -> None:
    """Fail when *order* repeats a name or names something absent from *items*."""

    seen: set[str] = set()
    for name in order:
        if name in seen:
            raise CorruptTemplateError(f"{context}: {name!r} is listed more than once")
        if name not in items:
            raise CorruptTemplateError(f"{context}: {name!r} is listed but has no entry")
        seen.add(name)


def complete_order(items: Mapping[str, object], order: Sequence[str]) -> list[str]:
    """Return *order* followed by unlisted keys of *items* sorted by name."""

    listed = set(order)
    return list(order) + sorted(name for name in items if name not in listed)
