"""Thread-safe render sink collecting paths and the running viewport."""

from __future__ import annotations

import threading
from typing import Any, Callable, Protocol, runtime_checkable

from garment.aabb import AABB, Shape, as_aabb

from .svg import PathElement, SvgDocument

__all__ = ["Render", "Target"]


class Target:
    """Accumulates drawing nodes and a bounding box from any number of threads.

    Each call to :meth:`add`, :meth:`resize_for` and :meth:`build` is a single
    critical section. The document is created on first use. Call :meth:`build`
    only after every renderer writing to this target has finished.
    """

    def __init__(
        self,
        *,
        include_origin: bool = False,
        document_factory: Callable[[], SvgDocument] = SvgDocument,
    ) -> None:
        self._lock = threading.Lock()
        self._document: SvgDocument | None = None
        self._document_factory = document_factory
        self._include_origin = include_origin
        self._view_box: AABB | None = AABB() if include_origin else None

    def add(self, node: PathElement) -> None:
        with self._lock:
            if self._document is None:
                self._document = self._document_factory()
            self._document.add(node)

    def resize_for(self, shape: Shape) -> None:
        box = as_aabb(shape)
        with self._lock:
            if self._view_box is None:
                self._view_box = AABB(box.rect)
            else:
                self._view_box.insert(box)

    def build(self) -> SvgDocument:
        """Hand out the document with its viewport set and start over."""

        with self._lock:
            document = self._document if self._document is not None else self._document_factory()
            view_box = self._view_box if self._view_box is not None else AABB()
            document.set_viewport(*view_box.rect.bounds())
            self._document = None
            self._view_box = AABB() if self._include_origin else None
            return document


@runtime_checkable
class Render(Protocol):
    """Something that draws itself onto a :class:`Target`."""

    def render(self, target: Target, context: Any) -> None:  # pragma: no cover - protocol definition only
        ...
