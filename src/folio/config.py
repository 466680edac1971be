"""
Configuration for Folio.

All document defaults in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/folio/config.toml) if exists
3. Environment variables (FOLIO_*) override file
4. CLI flags override everything
"""

from __future__ import annotations

import contextlib
import os
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field
from pathlib import Path

from .logger import get_logger

LOGGER = get_logger(__name__)


@dataclass
class FontConfig:
    """Default character formatting for new text."""
    default_name: str = "Arial"
    default_size: int = 12
    default_color: str = "Black"


@dataclass
class PageConfig:
    """Default page setup for new documents."""
    paper_size: str = "A4"
    margin_top: int = 20
    margin_bottom: int = 20
    margin_left: int = 20
    margin_right: int = 20


@dataclass
class Config:
    """Root config with all settings."""
    font: FontConfig = field(default_factory=FontConfig)
    page: PageConfig = field(default_factory=PageConfig)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "folio" / "config.toml"
    return Path.home() / ".config" / "folio" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            # parse into a fresh Config so a bad value leaves no partial overrides
            config = _apply_toml(Config(), data)
        except (OSError, tomllib.TOMLDecodeError, ValueError) as e:
            LOGGER.warning("Ignoring unreadable config %s: %s", path, e)

    # env var overrides
    config = _apply_env(config)

    return config


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config."""
    if "font" in data:
        f = data["font"]
        if "default_name" in f:
            config.font.default_name = str(f["default_name"])
        if "default_size" in f:
            config.font.default_size = int(f["default_size"])
        if "default_color" in f:
            config.font.default_color = str(f["default_color"])

    if "page" in data:
        p = data["page"]
        if "paper_size" in p:
            config.page.paper_size = str(p["paper_size"])
        for side in ("top", "bottom", "left", "right"):
            key = f"margin_{side}"
            if key in p:
                setattr(config.page, key, int(p[key]))

    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, type]] = {
        "FOLIO_FONT_NAME": ("font", "default_name", str),
        "FOLIO_FONT_SIZE": ("font", "default_size", int),
        "FOLIO_FONT_COLOR": ("font", "default_color", str),
        "FOLIO_PAPER_SIZE": ("page", "paper_size", str),
        "FOLIO_MARGIN_TOP": ("page", "margin_top", int),
        "FOLIO_MARGIN_BOTTOM": ("page", "margin_bottom", int),
        "FOLIO_MARGIN_LEFT": ("page", "margin_left", int),
        "FOLIO_MARGIN_RIGHT": ("page", "margin_right", int),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError):
                setattr(getattr(config, section), attr, conv(val))

    return config


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() reloads it."""
    global _config
    _config = None
