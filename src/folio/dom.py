"""
DOM - Document Object Model for Folio

Every document body is a tree of Elements rooted in a single Container.
Leaves hold content (text, images, tables); Containers hold ordered children;
wrappers (emphasis, deferred loading) stand in for exactly one other element.

Key invariant: a node has at most one owning Container. The only object that
may be shared between nodes is the immutable FormatDescriptor.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .formatting import FormatDescriptor
from .logger import get_logger

if TYPE_CHECKING:
    from .backends.base import RenderBackend
    from .visitors import DocumentVisitor

LOGGER = get_logger(__name__)

TEXT = "text"
IMAGE = "image"
TABLE = "table"
CONTAINER = "container"


@dataclass(frozen=True)
class ElementDescriptor:
    """What an element is (kind) and how it is emphasized, as separate axes."""
    kind: str
    bold: bool = False
    italic: bool = False

    @property
    def emphasized(self) -> bool:
        return self.bold or self.italic


class Element(ABC):
    """Base class for every node in the document tree."""

    parent: Container | None = None
    # set while an EmphasisWrapper owns this element
    wrapper: EmphasisWrapper | None = None

    @abstractmethod
    def render(self, backend: RenderBackend) -> None:
        """Describe this element to a backend."""
        ...

    @abstractmethod
    def duplicate(self) -> Element:
        """Return an independent copy with no owner."""
        ...

    @abstractmethod
    def accept(self, visitor: DocumentVisitor) -> None:
        """Dispatch to the visitor method matching this content kind."""
        ...

    @abstractmethod
    def type_tag(self) -> str:
        """Stable content-kind discriminator."""
        ...

    def descriptor(self) -> ElementDescriptor:
        return ElementDescriptor(kind=self.type_tag())

    @property
    def supports_emphasis(self) -> bool:
        """True if render_emphasized() is meaningful for this element."""
        return False

    def render_emphasized(self, backend: RenderBackend, bold: bool, italic: bool) -> None:
        """Render with emphasis flags. Elements without emphasis ignore them."""
        self.render(backend)


@dataclass(eq=False)
class TextBlock(Element):
    """A run of text, optionally pointing at a shared format."""
    text: str
    format: FormatDescriptor | None = None

    def render(self, backend: RenderBackend) -> None:
        backend.render_text(self.text)

    def render_emphasized(self, backend: RenderBackend, bold: bool, italic: bool) -> None:
        backend.render_text(self.text, bold, italic)

    @property
    def supports_emphasis(self) -> bool:
        return True

    def duplicate(self) -> TextBlock:
        # format is shared on purpose: descriptors are interned and immutable
        return TextBlock(text=self.text, format=self.format)

    def accept(self, visitor: DocumentVisitor) -> None:
        visitor.visit_text(self)

    def type_tag(self) -> str:
        return TEXT


@dataclass(eq=False)
class Picture(Element):
    """An image reference (path or identifier)."""
    ref: str

    def render(self, backend: RenderBackend) -> None:
        backend.render_image(self.ref)

    def duplicate(self) -> Picture:
        return Picture(ref=self.ref)

    def accept(self, visitor: DocumentVisitor) -> None:
        visitor.visit_image(self)

    def type_tag(self) -> str:
        return IMAGE


@dataclass(eq=False)
class Grid(Element):
    """A table shape. Dimensions are not validated."""
    rows: int
    cols: int

    def render(self, backend: RenderBackend) -> None:
        backend.render_table(self.rows, self.cols)

    def duplicate(self) -> Grid:
        return Grid(rows=self.rows, cols=self.cols)

    def accept(self, visitor: DocumentVisitor) -> None:
        visitor.visit_table(self)

    def type_tag(self) -> str:
        return TABLE


@dataclass(eq=False)
class Container(Element):
    """Named composite holding an ordered list of owned children."""
    name: str = ""
    children: list[Element] = field(default_factory=list)

    def __post_init__(self):
        children, self.children = self.children, []
        for child in children:
            self.add(child)

    def _adopt(self, child: Element) -> None:
        if child.parent is not None:
            raise ValueError(f"{child.type_tag()} element already belongs to container {child.parent.name!r}")
        if child.wrapper is not None:
            raise ValueError(f"{child.type_tag()} element is already wrapped by {type(child.wrapper).__name__}")
        node: Element | None = self
        while node is not None:
            if node is child:
                raise ValueError(f"container {self.name!r} cannot contain itself or one of its ancestors")
            node = node.parent if node.parent is not None else node.wrapper
        child.parent = self

    def add(self, child: Element) -> Element:
        """Append a child, take ownership and return it for chaining."""
        self._adopt(child)
        self.children.append(child)
        return child

    def insert(self, index: int, child: Element) -> Element:
        """Insert a child at a position (list.insert semantics)."""
        self._adopt(child)
        self.children.insert(index, child)
        return child

    def index(self, child: Element) -> int:
        """Position of this exact child object (identity, not equality)."""
        for i, existing in enumerate(self.children):
            if existing is child:
                return i
        raise ValueError(f"{child.type_tag()} element is not a child of container {self.name!r}")

    def remove(self, child: Element) -> int:
        """Detach a child and return the index it occupied."""
        i = self.index(child)
        del self.children[i]
        child.parent = None
        return i

    def render(self, backend: RenderBackend) -> None:
        backend.start_group()
        for child in self.children:
            child.render(backend)
        backend.end_group()

    def duplicate(self) -> Container:
        copy = Container(name=self.name)
        for child in self.children:
            copy.add(child.duplicate())
        return copy

    def accept(self, visitor: DocumentVisitor) -> None:
        visitor.visit_container(self)
        for child in self.children:
            child.accept(visitor)
        visitor.leave_container(self)

    def type_tag(self) -> str:
        return CONTAINER

    def depth_first(self) -> Iterator[Element]:
        """Yield every descendant in pre-order, excluding self."""
        for child in self.children:
            yield child
            if isinstance(child, Container):
                yield from child.depth_first()


class EmphasisWrapper(Element):
    """Presents exactly one inner element with emphasis applied."""

    bold = False
    italic = False

    def __init__(self, inner: Element):
        if inner.parent is not None or inner.wrapper is not None:
            raise ValueError(f"cannot wrap a {inner.type_tag()} element that already has an owner")
        inner.wrapper = self
        self.inner = inner

    def render(self, backend: RenderBackend) -> None:
        self.render_emphasized(backend, False, False)

    def render_emphasized(self, backend: RenderBackend, bold: bool, italic: bool) -> None:
        if self.inner.supports_emphasis:
            self.inner.render_emphasized(backend, bold or self.bold, italic or self.italic)
        else:
            self.inner.render(backend)

    @property
    def supports_emphasis(self) -> bool:
        return self.inner.supports_emphasis

    def duplicate(self) -> EmphasisWrapper:
        return type(self)(self.inner.duplicate())

    def accept(self, visitor: DocumentVisitor) -> None:
        self.inner.accept(visitor)

    def type_tag(self) -> str:
        return self.inner.type_tag()

    def descriptor(self) -> ElementDescriptor:
        inner = self.inner.descriptor()
        return ElementDescriptor(
            kind=inner.kind,
            bold=inner.bold or self.bold,
            italic=inner.italic or self.italic,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.inner!r})"


class Bold(EmphasisWrapper):
    bold = True


class Italic(EmphasisWrapper):
    italic = True


ImageLoader = Callable[[str], Picture]


class DeferredPicture(Element):
    """
    Stand-in for a Picture that is only built on first render.

    Holds just the reference until then. The loaded Picture is cached, so
    every later render reuses it.
    """

    def __init__(self, ref: str, loader: ImageLoader | None = None):
        self.ref = ref
        self._loader: ImageLoader = loader or Picture
        self._picture: Picture | None = None

    @property
    def is_loaded(self) -> bool:
        return self._picture is not None

    def load(self) -> Picture:
        """Materialize the real Picture once and return the cached instance."""
        if self._picture is None:
            LOGGER.info("Loading image: %s", self.ref)
            self._picture = self._loader(self.ref)
        return self._picture

    def render(self, backend: RenderBackend) -> None:
        self.load().render(backend)

    def duplicate(self) -> DeferredPicture:
        return DeferredPicture(self.ref, self._loader)

    def accept(self, visitor: DocumentVisitor) -> None:
        visitor.visit_deferred_image(self)

    def type_tag(self) -> str:
        return IMAGE

    def __repr__(self) -> str:
        state = "loaded" if self.is_loaded else "pending"
        return f"DeferredPicture({self.ref!r}, {state})"


def make_text(text: str, format: FormatDescriptor | None = None) -> TextBlock:
    return TextBlock(text=text, format=format)


def make_picture(ref: str) -> Picture:
    return Picture(ref=ref)


def make_grid(rows: int, cols: int) -> Grid:
    return Grid(rows=rows, cols=cols)


def make_container(name: str = "") -> Container:
    return Container(name=name)


def make_deferred_picture(ref: str, loader: ImageLoader | None = None) -> DeferredPicture:
    return DeferredPicture(ref, loader)


def bold(element: Element) -> Bold:
    return Bold(element)


def italic(element: Element) -> Italic:
    return Italic(element)
