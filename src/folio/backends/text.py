"""
Plain-text backend.

One tagged line per call: emphasis as [BOLD]/[ITALIC] prefixes, images and
tables as bracketed placeholders, groups as start/end rulers.
"""

from .base import RenderBackend, registry


@registry.register
class PlainTextBackend(RenderBackend):
    """Tagged lines, no nesting."""

    name = "text"

    def render_text(self, text: str, bold: bool = False, italic: bool = False) -> None:
        prefix = ""
        if bold:
            prefix += "[BOLD]"
        if italic:
            prefix += "[ITALIC]"
        self.emit(f"{prefix} {text}")

    def render_image(self, ref: str) -> None:
        self.emit(f"[IMAGE: {ref}]")

    def render_table(self, rows: int, cols: int) -> None:
        self.emit(f"[TABLE: {rows}x{cols}]")

    def start_group(self) -> None:
        self.emit("--- Section Start ---")

    def end_group(self) -> None:
        self.emit("--- Section End ---")
