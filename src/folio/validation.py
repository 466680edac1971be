"""
Document validation pipeline.

validate() runs structure, spelling and grammar checks in that order and
stops at the first failure. Subclasses supply the spelling and grammar
checks; the structure check is shared.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .dom import Container, EmphasisWrapper, TextBlock
from .logger import get_logger
from .visitors import DocumentVisitor

if TYPE_CHECKING:
    from .document import Document

LOGGER = get_logger(__name__)


class DocumentValidator(ABC):

    def validate(self, document: Document) -> bool:
        LOGGER.info("Starting validation with %s", type(self).__name__)
        for check in (self.check_structure, self.check_spelling, self.check_grammar):
            if not check(document):
                LOGGER.warning("Validation failed at %s", check.__name__)
                return False
        LOGGER.info("Validation passed")
        return True

    def check_structure(self, document: Document) -> bool:
        """Every container child must point back at the container that holds it."""
        return _owners_consistent(document.root)

    @abstractmethod
    def check_spelling(self, document: Document) -> bool:
        ...

    @abstractmethod
    def check_grammar(self, document: Document) -> bool:
        ...


def _owners_consistent(container: Container) -> bool:
    for child in container.children:
        if child.parent is not container:
            return False
        inner = child
        while isinstance(inner, EmphasisWrapper):
            inner = inner.inner
        if isinstance(inner, Container) and not _owners_consistent(inner):
            return False
    return True


class BasicValidator(DocumentValidator):
    """Accepts any spelling and grammar."""

    def check_spelling(self, document: Document) -> bool:
        return True

    def check_grammar(self, document: Document) -> bool:
        return True


class _TextCollector(DocumentVisitor):
    def __init__(self):
        self.texts: list[str] = []

    def visit_text(self, block: TextBlock) -> None:
        self.texts.append(block.text)


def _words(document: Document) -> list[str]:
    collector = _TextCollector()
    document.accept(collector)
    return [word.strip(".,;:!?\"'()").lower() for text in collector.texts for word in text.split()]


class AdvancedValidator(DocumentValidator):
    """
    Dictionary spelling and a repeated-word grammar check.

    With no dictionary every word is accepted; otherwise each word of every
    text block (wrapped ones included) must appear in it, case-insensitively.
    """

    def __init__(self, dictionary: set[str] | None = None):
        self.dictionary = {word.lower() for word in dictionary} if dictionary is not None else None

    def check_spelling(self, document: Document) -> bool:
        LOGGER.info("Advanced spell check with dictionary")
        if self.dictionary is None:
            return True
        unknown = [word for word in _words(document) if word and word not in self.dictionary]
        if unknown:
            LOGGER.warning("Unknown words: %s", ", ".join(unknown))
        return not unknown

    def check_grammar(self, document: Document) -> bool:
        LOGGER.info("Advanced grammar check")
        words = _words(document)
        repeated = [a for a, b in zip(words, words[1:]) if a and a == b]
        if repeated:
            LOGGER.warning("Repeated words: %s", ", ".join(repeated))
        return not repeated
