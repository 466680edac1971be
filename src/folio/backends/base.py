"""
Base render backend interface and registry.

A backend only knows how to print each kind of content; which content gets
printed, and in what order, is decided by the element tree.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class RenderBackend(ABC):
    """Base class for output formats consumed by Element.render()."""

    name: str = ""

    def __init__(self):
        self.lines: list[str] = []

    @abstractmethod
    def render_text(self, text: str, bold: bool = False, italic: bool = False) -> None:
        ...

    @abstractmethod
    def render_image(self, ref: str) -> None:
        ...

    @abstractmethod
    def render_table(self, rows: int, cols: int) -> None:
        ...

    @abstractmethod
    def start_group(self) -> None:
        ...

    @abstractmethod
    def end_group(self) -> None:
        ...

    def emit(self, line: str) -> None:
        self.lines.append(line)

    def getvalue(self) -> str:
        """Everything emitted so far, one line per call."""
        return "\n".join(self.lines)

    def clear(self) -> None:
        self.lines.clear()


class BackendRegistry:
    """Registry of backend classes, looked up by name."""

    def __init__(self):
        self._by_name: dict[str, type[RenderBackend]] = {}

    def register(self, backend_cls: type[RenderBackend]) -> type[RenderBackend]:
        """Register a backend class. Usable as a class decorator."""
        if not backend_cls.name:
            raise ValueError(f"{backend_cls.__name__} has no name")
        # First registered wins for name conflicts
        self._by_name.setdefault(backend_cls.name, backend_cls)
        return backend_cls

    def get_by_name(self, name: str) -> type[RenderBackend] | None:
        return self._by_name.get(name)

    def create(self, name: str) -> RenderBackend:
        """Instantiate a fresh backend by name."""
        backend_cls = self.get_by_name(name)
        if backend_cls is None:
            raise ValueError(f"Unknown backend: {name!r}. Available: {', '.join(self.names)}")
        return backend_cls()

    @property
    def names(self) -> list[str]:
        return list(self._by_name)


# Global registry instance
registry = BackendRegistry()
