"""Central logging configuration for the library."""

from __future__ import annotations

import logging

_DEFAULT_LEVEL = logging.WARNING
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-level logger. Importing the library never configures handlers."""
    return logging.getLogger(name)


def configure_logging(level: int = _DEFAULT_LEVEL) -> None:
    """Install the default handler (once) and set the folio logger level. Called by the CLI."""
    if not logging.getLogger().handlers:
        logging.basicConfig(level=level, format=_FORMAT)
    logging.getLogger("folio").setLevel(level)
