"""
Flat enumeration over a document.

The tree is flattened once, at construction, so later edits to the document
do not change what an existing iterator yields.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .document import Document
    from .dom import Element


class DocumentIterator:
    """Restartable pre-order cursor over every node below the root container."""

    def __init__(self, document: Document):
        self._elements: list[Element] = list(document.root.depth_first())
        self._position = 0

    def has_next(self) -> bool:
        return self._position < len(self._elements)

    def next(self) -> Element | None:
        """Return the next element, or None once exhausted."""
        if not self.has_next():
            return None
        element = self._elements[self._position]
        self._position += 1
        return element

    def reset(self) -> None:
        """Rewind to the first element. The snapshot is not rebuilt."""
        self._position = 0

    def __iter__(self) -> DocumentIterator:
        return self

    def __next__(self) -> Element:
        element = self.next()
        if element is None:
            raise StopIteration
        return element

    def __len__(self) -> int:
        return len(self._elements)
