"""
Shared character formatting.

Text blocks point at a FormatDescriptor instead of carrying their own font
fields. Descriptors are interned by (font, size, color), so two blocks with
the same style hold the very same object.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import Config, get_config
from .logger import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class FormatDescriptor:
    """Immutable (font, size, color) style triple."""
    font_name: str
    size: int
    color: str


class FormatCache:
    """Interns FormatDescriptors by their (font, size, color) key."""

    def __init__(self):
        self._formats: dict[tuple[str, int, str], FormatDescriptor] = {}

    def get_format(self, font: str, size: int, color: str) -> FormatDescriptor:
        """Return the shared descriptor for this triple, creating it on first use."""
        key = (font, size, color)
        fmt = self._formats.get(key)
        if fmt is None:
            fmt = FormatDescriptor(font_name=font, size=size, color=color)
            self._formats[key] = fmt
            LOGGER.debug("Created new format: %s_%s_%s", font, size, color)
        return fmt

    def default_format(self, config: Config | None = None) -> FormatDescriptor:
        """Descriptor for the configured default font."""
        cfg = (config or get_config()).font
        return self.get_format(cfg.default_name, cfg.default_size, cfg.default_color)

    def __len__(self) -> int:
        return len(self._formats)

    def __contains__(self, key: object) -> bool:
        return key in self._formats
