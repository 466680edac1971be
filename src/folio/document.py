"""
Document: the root container plus lifecycle state and change observers.

Lifecycle states only change the notice returned by edit(). No state blocks
tree mutation, so a Published document still accepts new elements.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from .config import Config, get_config
from .dom import Container, Element
from .logger import get_logger
from .visitors import ElementCountVisitor

if TYPE_CHECKING:
    from .backends.base import RenderBackend
    from .visitors import DocumentVisitor

LOGGER = get_logger(__name__)


class DocumentState(Enum):
    """Lifecycle stage of a document. Any stage may move to any other."""

    DRAFT = ("Draft", "Editing in Draft mode - all changes allowed")
    REVIEW = ("Review", "Document in Review - limited editing allowed")
    PUBLISHED = ("Published", "Document is Published - editing locked!")

    def __init__(self, label: str, edit_notice: str):
        self.label = label
        self.edit_notice = edit_notice

    @classmethod
    def from_label(cls, label: str) -> DocumentState:
        """Look up a state by its label, case-insensitively."""
        for state in cls:
            if state.label.lower() == label.lower():
                return state
        raise ValueError(f"Unknown document state: {label!r}")


class DocumentObserver(Protocol):
    def on_document_changed(self, document: Document) -> None:
        ...


@dataclass
class PageSetup:
    """Page properties a document is created with."""
    paper_size: str = "A4"
    margin_top: int = 20
    margin_bottom: int = 20
    margin_left: int = 20
    margin_right: int = 20
    header: str = ""
    footer: str = ""

    @classmethod
    def from_config(cls, config: Config) -> PageSetup:
        page = config.page
        return cls(
            paper_size=page.paper_size,
            margin_top=page.margin_top,
            margin_bottom=page.margin_bottom,
            margin_left=page.margin_left,
            margin_right=page.margin_right,
        )


class Document:
    """Owns the root container, the lifecycle state and the observer list."""

    def __init__(self, config: Config | None = None, page: PageSetup | None = None):
        self.config = config or get_config()
        self.page = page or PageSetup.from_config(self.config)
        self._root = Container(name="Root")
        self._observers: list[DocumentObserver] = []
        self._state = DocumentState.DRAFT

    @property
    def root(self) -> Container:
        return self._root

    @property
    def state(self) -> DocumentState:
        return self._state

    def add_element(self, element: Element) -> Element:
        """Append to the root container, then notify observers."""
        self._root.add(element)
        self.notify_observers()
        return element

    def attach(self, observer: DocumentObserver) -> None:
        self._observers.append(observer)

    def detach(self, observer: DocumentObserver) -> None:
        self._observers = [o for o in self._observers if o is not observer]

    def notify_observers(self) -> None:
        """Call every observer synchronously, in registration order."""
        for observer in list(self._observers):
            observer.on_document_changed(self)

    def set_state(self, state: DocumentState) -> None:
        self._state = state
        LOGGER.info("Document state changed to: %s", state.label)

    def edit(self) -> str:
        """Notice describing what editing means in the current state."""
        return self._state.edit_notice

    def render(self, backend: RenderBackend) -> None:
        self._root.render(backend)

    def accept(self, visitor: DocumentVisitor) -> None:
        self._root.accept(visitor)


class DocumentBuilder:
    """Fluent construction of a Document with custom page setup."""

    def __init__(self, config: Config | None = None):
        self._config = config or get_config()
        self._page = PageSetup.from_config(self._config)

    def set_page_size(self, size: str) -> DocumentBuilder:
        self._page.paper_size = size
        return self

    def set_margins(self, top: int, bottom: int, left: int, right: int) -> DocumentBuilder:
        self._page.margin_top = top
        self._page.margin_bottom = bottom
        self._page.margin_left = left
        self._page.margin_right = right
        return self

    def set_header(self, header: str) -> DocumentBuilder:
        self._page.header = header
        return self

    def set_footer(self, footer: str) -> DocumentBuilder:
        self._page.footer = footer
        return self

    def build(self) -> Document:
        return Document(config=self._config, page=replace(self._page))


class StatusBar:
    """Observer keeping element and word totals current."""

    def __init__(self):
        self.element_count = 0
        self.word_count = 0

    def on_document_changed(self, document: Document) -> None:
        counter = ElementCountVisitor()
        for child in document.root.children:
            child.accept(counter)
        self.element_count = counter.elements
        self.word_count = counter.count
        LOGGER.debug("Elements: %d | Words: %d", self.element_count, self.word_count)

    @property
    def text(self) -> str:
        return f"Elements: {self.element_count} | Words: {self.word_count}"
