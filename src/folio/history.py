"""
Reversible edits and the undo/redo log.

Each EditRecord remembers exactly where it touched the tree (parent container
and index), so revert() is a precise structural inverse of apply().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .logger import get_logger

if TYPE_CHECKING:
    from .document import Document, DocumentState
    from .dom import Container, Element

LOGGER = get_logger(__name__)


class EditRecord(ABC):
    """A unit of change that can be applied and reverted."""

    description = "edit"

    @abstractmethod
    def apply(self) -> None:
        ...

    @abstractmethod
    def revert(self) -> None:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {self.description}>"


class AddElementEdit(EditRecord):
    """
    Insert an element into a container.

    Defaults to appending to the document root. The position taken on first
    apply is remembered, so a redo puts the element back in the same slot.
    """

    description = "Add Element"

    def __init__(
        self,
        document: Document,
        element: Element,
        parent: Container | None = None,
        index: int | None = None,
    ):
        self.document = document
        self.element = element
        self.parent = parent if parent is not None else document.root
        self.index = index

    def apply(self) -> None:
        if self.index is None:
            self.index = len(self.parent.children)
        self.parent.insert(self.index, self.element)
        self.document.notify_observers()

    def revert(self) -> None:
        self.index = self.parent.remove(self.element)
        self.document.notify_observers()


class RemoveElementEdit(EditRecord):
    """Detach an element from its container, remembering where it was."""

    description = "Remove Element"

    def __init__(self, document: Document, element: Element):
        self.document = document
        self.element = element
        self.parent: Container | None = None
        self.index: int | None = None

    def apply(self) -> None:
        parent = self.element.parent
        if parent is None:
            raise ValueError(f"{self.element.type_tag()} element is not attached to a container")
        self.parent = parent
        self.index = parent.remove(self.element)
        self.document.notify_observers()

    def revert(self) -> None:
        assert self.parent is not None and self.index is not None  # only reverted after apply
        self.parent.insert(self.index, self.element)
        self.document.notify_observers()


class SetStateEdit(EditRecord):
    """Move the document to a lifecycle state, restoring the old one on revert."""

    description = "Set State"

    def __init__(self, document: Document, state: DocumentState):
        self.document = document
        self.state = state
        self.previous: DocumentState | None = None

    def apply(self) -> None:
        self.previous = self.document.state
        self.document.set_state(self.state)

    def revert(self) -> None:
        assert self.previous is not None  # only reverted after apply
        self.document.set_state(self.previous)


class EditHistory:
    """Undo and redo stacks of applied edits."""

    def __init__(self):
        self._undo: list[EditRecord] = []
        self._redo: list[EditRecord] = []

    def execute(self, record: EditRecord) -> None:
        """Apply a new edit. Any redo branch is discarded."""
        LOGGER.debug("Executing: %s", record.description)
        record.apply()
        self._undo.append(record)
        self._redo.clear()

    def undo(self) -> EditRecord | None:
        """Revert the most recent edit, or return None if there is none."""
        if not self._undo:
            LOGGER.info("Nothing to undo")
            return None
        record = self._undo.pop()
        LOGGER.debug("Undoing: %s", record.description)
        record.revert()
        self._redo.append(record)
        return record

    def redo(self) -> EditRecord | None:
        """Reapply the most recently undone edit, or return None if there is none."""
        if not self._redo:
            LOGGER.info("Nothing to redo")
            return None
        record = self._redo.pop()
        LOGGER.debug("Redoing: %s", record.description)
        record.apply()
        self._undo.append(record)
        return record

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
