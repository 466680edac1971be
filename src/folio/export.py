"""
Export strategies.

The exporter delegates to whichever strategy is set. Producing real PDF or
Markdown bytes is left to the strategy implementations supplied by callers;
the built-in ones only describe what they would produce.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .logger import get_logger
from .visitors import ElementCountVisitor

if TYPE_CHECKING:
    from .document import Document

LOGGER = get_logger(__name__)


@dataclass
class ExportResult:
    """Outcome of an export attempt."""
    ok: bool
    message: str
    format: str | None = None


class ExportStrategy(ABC):
    """Base class for export formats."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def export(self, document: Document) -> ExportResult:
        ...


def _summary(document: Document) -> str:
    counter = ElementCountVisitor()
    document.accept(counter)
    # the root container is counted by the visitor but is not content
    return f"{counter.elements - 1} elements, {counter.count} words"


class PdfExportStrategy(ExportStrategy):

    @property
    def name(self) -> str:
        return "pdf"

    def export(self, document: Document) -> ExportResult:
        LOGGER.info("Exporting document as PDF")
        return ExportResult(ok=True, message=f"PDF export completed ({_summary(document)})", format=self.name)


class MarkdownExportStrategy(ExportStrategy):

    @property
    def name(self) -> str:
        return "markdown"

    def export(self, document: Document) -> ExportResult:
        LOGGER.info("Exporting document as Markdown")
        return ExportResult(ok=True, message=f"Markdown export completed ({_summary(document)})", format=self.name)


class DocumentExporter:
    """Runs the configured export strategy, if any."""

    def __init__(self, strategy: ExportStrategy | None = None):
        self.strategy = strategy

    def set_strategy(self, strategy: ExportStrategy | None) -> None:
        self.strategy = strategy

    def export(self, document: Document) -> ExportResult:
        if self.strategy is None:
            LOGGER.warning("No export strategy set")
            return ExportResult(ok=False, message="No export strategy set")
        return self.strategy.export(document)
