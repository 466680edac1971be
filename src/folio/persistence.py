"""
Save/load contract.

A real file format is out of scope: FileManager writes a marker file and
load() hands back a Document with placeholder content.
"""

from __future__ import annotations

from pathlib import Path

from .config import Config
from .document import Document
from .dom import make_text
from .logger import get_logger

LOGGER = get_logger(__name__)

SAVED_MARKER = "Document content saved\n"


class FileManager:
    """Facade over document persistence."""

    def __init__(self, config: Config | None = None):
        self.config = config

    def save(self, document: Document, destination: str | Path) -> bool:
        """Write the document to destination. Returns False if it could not be written."""
        path = Path(destination)
        LOGGER.info("Saving document to: %s", path)
        try:
            path.write_text(SAVED_MARKER, encoding="utf-8")
        except OSError as e:
            LOGGER.error("Could not save document to %s: %s", path, e)
            return False
        return True

    def load(self, source: str | Path) -> Document:
        """Return a Document for source, pre-populated with placeholder content."""
        LOGGER.info("Loading document from: %s", source)
        document = Document(config=self.config)
        document.add_element(make_text("Loaded content"))
        return document
