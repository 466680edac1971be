"""
Visitors over the element tree.

Dispatch is driven by each element's accept(): containers visit themselves,
then each child left to right, then call leave_container(). The order is
always pre-order, depth-first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.sax.saxutils import escape, quoteattr

if TYPE_CHECKING:
    from .dom import Container, DeferredPicture, Grid, Picture, TextBlock


class DocumentVisitor:
    """Base visitor. Every hook is a no-op, override the ones you need."""

    def visit_text(self, block: TextBlock) -> None:
        pass

    def visit_image(self, picture: Picture) -> None:
        pass

    def visit_table(self, grid: Grid) -> None:
        pass

    def visit_container(self, container: Container) -> None:
        pass

    def visit_deferred_image(self, proxy: DeferredPicture) -> None:
        pass

    def leave_container(self, container: Container) -> None:
        pass


def count_words(text: str) -> int:
    """Number of whitespace-separated words."""
    return len(text.split())


class WordCountVisitor(DocumentVisitor):
    """Counts words in text blocks. Every other kind contributes zero."""

    def __init__(self):
        self.count = 0

    def visit_text(self, block: TextBlock) -> None:
        self.count += count_words(block.text)


class ElementCountVisitor(WordCountVisitor):
    """Counts visited nodes as well as words."""

    def __init__(self):
        super().__init__()
        self.elements = 0

    def visit_text(self, block: TextBlock) -> None:
        super().visit_text(block)
        self.elements += 1

    def visit_image(self, picture: Picture) -> None:
        self.elements += 1

    def visit_table(self, grid: Grid) -> None:
        self.elements += 1

    def visit_container(self, container: Container) -> None:
        self.elements += 1

    def visit_deferred_image(self, proxy: DeferredPicture) -> None:
        self.elements += 1


class XmlExportVisitor(DocumentVisitor):
    """
    Structured XML export, one line per node.

    Each container opens a <section> that is closed after its last child, so
    the output is always balanced. Children are indented two spaces deeper
    than their container.
    """

    HEADER = '<?xml version="1.0"?>'

    def __init__(self):
        self._lines: list[str] = [self.HEADER]
        self._open: list[Container] = []

    def _emit(self, line: str) -> None:
        self._lines.append("  " * len(self._open) + line)

    def visit_text(self, block: TextBlock) -> None:
        self._emit(f"<paragraph>{escape(block.text)}</paragraph>")

    def visit_image(self, picture: Picture) -> None:
        self._emit(f"<image src={quoteattr(picture.ref)} />")

    def visit_table(self, grid: Grid) -> None:
        self._emit(f'<table rows="{grid.rows}" cols="{grid.cols}" />')

    def visit_deferred_image(self, proxy: DeferredPicture) -> None:
        self._emit(f"<image-proxy src={quoteattr(proxy.ref)} />")

    def visit_container(self, container: Container) -> None:
        if container.name:
            self._emit(f"<section name={quoteattr(container.name)}>")
        else:
            self._emit("<section>")
        self._open.append(container)

    def leave_container(self, container: Container) -> None:
        if self._open and self._open[-1] is container:
            self._open.pop()
        self._emit("</section>")

    @property
    def depth(self) -> int:
        return len(self._open)

    def getvalue(self) -> str:
        return "\n".join(self._lines) + "\n"
