from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .converter import ConversionReport


class ConversionError(Exception):
    """Base class for everything the conversion pipeline raises on purpose."""


class InputNotFoundError(ConversionError):
    def __init__(self, path: Path | str):
        self.path = Path(path) if path else None
        super().__init__(f"File {path or '<empty>'} does not exist")


class InputReadError(ConversionError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Cannot read {path}: {reason}")


class OutputDirectoryError(ConversionError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Cannot create output directory {path}: {reason}")


class NoDiagramFoundError(ConversionError):
    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else None
        where = f" in {path}" if path else ""
        super().__init__(f"No Mermaid diagrams found{where}")


class RenderHostError(ConversionError):
    """The headless browser could not be started."""


class DiagramError(ConversionError):
    """Failure scoped to one diagram; the batch goes on without it."""

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"diagram {index}: {reason}")


class RenderTimeoutError(DiagramError):
    pass


class RenderEngineError(DiagramError):
    pass


class OutputWriteError(DiagramError):
    pass


class ConversionFailedError(ConversionError):
    def __init__(self, report: ConversionReport):
        self.report = report
        super().__init__(
            f"All {report.total} diagram(s) failed to render; no images were written"
        )
