"""
Markup backend.

Emits HTML-like nested tags, indented two spaces per open section.
"""

from html import escape

from .base import RenderBackend, registry


@registry.register
class MarkupBackend(RenderBackend):
    """Nested <section> tags around <p>, <img> and <table> lines."""

    name = "markup"

    def __init__(self):
        super().__init__()
        self._depth = 0

    def _indent(self) -> str:
        return "  " * self._depth

    def render_text(self, text: str, bold: bool = False, italic: bool = False) -> None:
        html = escape(text)
        if bold:
            html = f"<strong>{html}</strong>"
        if italic:
            html = f"<em>{html}</em>"
        self.emit(f"{self._indent()}<p>{html}</p>")

    def render_image(self, ref: str) -> None:
        self.emit(f'{self._indent()}<img src="{escape(ref)}" />')

    def render_table(self, rows: int, cols: int) -> None:
        self.emit(f'{self._indent()}<table data-rows="{rows}" data-cols="{cols}"></table>')

    def start_group(self) -> None:
        self.emit(f"{self._indent()}<section>")
        self._depth += 1

    def end_group(self) -> None:
        # Unbalanced end_group calls clamp at the left margin
        self._depth = max(0, self._depth - 1)
        self.emit(f"{self._indent()}</section>")

    def clear(self) -> None:
        super().clear()
        self._depth = 0
