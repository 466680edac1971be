"""
CLI interface for Folio.

Builds the sample document, renders it through a chosen backend and
optionally appends the XML export, word count, element listing or an
export report.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from .backends import markup as _markup  # noqa: F401 - ensure markup backend is registered
from .backends import text as _text  # noqa: F401 - ensure text backend is registered
from .backends.base import registry
from .config import Config, get_config
from .document import Document, DocumentBuilder, DocumentState, StatusBar
from .dom import bold, italic, make_container, make_deferred_picture, make_grid, make_picture, make_text
from .export import DocumentExporter, ExportStrategy, MarkdownExportStrategy, PdfExportStrategy
from .formatting import FormatCache
from .history import AddElementEdit, EditHistory
from .iteration import DocumentIterator
from .logger import configure_logging
from .visitors import WordCountVisitor, XmlExportVisitor

EXPORTERS: dict[str, type[ExportStrategy]] = {
    "pdf": PdfExportStrategy,
    "markdown": MarkdownExportStrategy,
}


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="folio",
        description="Build, render and inspect a structured document",
    )

    parser.add_argument(
        "--backend",
        "-b",
        type=str,
        default="text",
        help=f"Render backend ({', '.join(registry.names)})",
    )

    parser.add_argument(
        "--xml",
        "-x",
        action="store_true",
        help="Append the structured XML export",
    )

    parser.add_argument(
        "--words",
        "-w",
        action="store_true",
        help="Append the word count",
    )

    parser.add_argument(
        "--list",
        "-l",
        action="store_true",
        dest="list_elements",
        help="Append a flat listing of every element",
    )

    parser.add_argument(
        "--state",
        type=str,
        help="Lifecycle state to move the document into (draft, review, published)",
    )

    parser.add_argument(
        "--export",
        type=str,
        choices=sorted(EXPORTERS),
        help="Run an export strategy and report the result",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress (image loads, state changes) to stderr",
    )

    parser.add_argument(
        "--font",
        type=str,
        help="Default font name (overrides config)",
    )

    parser.add_argument(
        "--size",
        type=int,
        help="Default font size (overrides config)",
    )

    return parser.parse_args(args)


def resolve_config(parsed: argparse.Namespace) -> Config:
    """Apply CLI overrides on top of the loaded config."""
    cfg = get_config()
    font = cfg.font
    if parsed.font:
        font = replace(font, default_name=parsed.font)
    if parsed.size is not None:
        font = replace(font, default_size=parsed.size)
    return replace(cfg, font=font)


def build_sample_document(config: Config | None = None) -> tuple[Document, StatusBar]:
    """The demo document: paragraphs, a chapter section, emphasis, a table and a lazy image."""
    doc = (
        DocumentBuilder(config)
        .set_margins(20, 20, 20, 20)
        .set_header("My Document")
        .set_footer("Page 1")
        .build()
    )
    status = StatusBar()
    doc.attach(status)

    formats = FormatCache()
    body = formats.default_format(doc.config)

    doc.add_element(make_text("Introduction paragraph", body))
    doc.add_element(make_text("This is the second paragraph", body))

    chapter = make_container("Chapter 1")
    chapter.add(make_text("Chapter 1 content", body))
    chapter.add(make_grid(2, 3))
    doc.add_element(chapter)

    doc.add_element(bold(make_text("Bold text", body)))
    doc.add_element(italic(make_text("Italic text", body)))
    doc.add_element(make_picture("logo.png"))
    doc.add_element(make_deferred_picture("photo.jpg"))

    history = EditHistory()
    history.execute(AddElementEdit(doc, make_text("Command pattern test", body)))
    return doc, status


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(logging.INFO if parsed.verbose else logging.WARNING)

    try:
        backend = registry.create(parsed.backend)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    state = None
    if parsed.state:
        try:
            state = DocumentState.from_label(parsed.state)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    doc, status = build_sample_document(resolve_config(parsed))
    if state is not None:
        doc.set_state(state)

    doc.render(backend)
    sections = [backend.getvalue()]

    if parsed.xml:
        exporter = XmlExportVisitor()
        doc.accept(exporter)
        sections.append(exporter.getvalue().rstrip("\n"))

    if parsed.words:
        counter = WordCountVisitor()
        doc.accept(counter)
        sections.append(f"Words: {counter.count}")

    if parsed.list_elements:
        listing = [
            f"{i}: {element.type_tag()}"
            for i, element in enumerate(DocumentIterator(doc), start=1)
        ]
        sections.append("\n".join(listing))

    if parsed.export:
        result = DocumentExporter(EXPORTERS[parsed.export]()).export(doc)
        sections.append(result.message)

    sections.append(f"[{doc.state.label}] {status.text}")
    print("\n\n".join(sections))
    return 0


if __name__ == "__main__":
    sys.exit(main())
