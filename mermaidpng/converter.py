from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from .config import Settings
from .errors import (
    ConversionFailedError,
    DiagramError,
    InputNotFoundError,
    InputReadError,
    OutputDirectoryError,
    OutputWriteError,
)
from .extractor import extract, input_kind_for
from .models import ConversionRequest, DiagramSource, InputKind, RenderedImage, RenderOptions
from .naming import name_for
from .renderer import MermaidRenderer
from .utils import write_bytes_atomic


class DiagramRenderer(Protocol):
    async def __aenter__(self) -> DiagramRenderer: ...

    async def __aexit__(self, *exc_info: object) -> None: ...

    async def render(self, source: DiagramSource, options: RenderOptions) -> RenderedImage: ...


@dataclass
class DiagramFailure:
    index: int
    target: Path
    error: DiagramError


@dataclass
class ConversionReport:
    total: int
    written: list[Path] = field(default_factory=list)
    failures: list[DiagramFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.written)


def _read_input(path: Path) -> str:
    if not path.is_file():
        raise InputNotFoundError(path)
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise InputReadError(path, exc.strerror or str(exc)) from exc


def _ensure_output_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputDirectoryError(path, exc.strerror or str(exc)) from exc


async def convert(
    request: ConversionRequest,
    settings: Settings,
    renderer: DiagramRenderer | None = None,
) -> ConversionReport:
    """Render every diagram in ``request.input_path`` to PNG files.

    Per-diagram failures are logged and collected in the returned report.
    Raises InputNotFoundError / NoDiagramFoundError before the browser is
    started, RenderHostError if it cannot start, and ConversionFailedError
    when no image at all could be written.
    """
    logging.info("Converting %s to PNG...", request.input_path)
    content = _read_input(request.input_path)
    _ensure_output_dir(request.output_path.parent)

    kind = input_kind_for(request.input_path)
    sources = extract(content, kind, request.input_path)
    if kind is InputKind.COMPOSITE_DOCUMENT:
        logging.info("Found %d Mermaid diagram(s) in the Markdown file", len(sources))

    total = len(sources)
    report = ConversionReport(total=total)
    options = request.render_options()

    if renderer is None:
        renderer = MermaidRenderer(settings)

    async with renderer as host:
        for source in sources:
            target = name_for(request.output_path, source.index, total)
            try:
                image = await host.render(source, options)
                try:
                    write_bytes_atomic(target, image.data)
                except OSError as exc:
                    raise OutputWriteError(source.index, f"cannot write {target}: {exc}") from exc
            except DiagramError as exc:
                logging.error("Diagram %d/%d: %s", source.index, total, exc.reason)
                report.failures.append(DiagramFailure(index=source.index, target=target, error=exc))
                continue
            report.written.append(target)
            logging.info(
                "Successfully created PNG at %s (%dx%d px, %d bytes)",
                target,
                image.width,
                image.height,
                len(image.data),
            )

    if not report.ok:
        raise ConversionFailedError(report)
    if report.failures:
        logging.warning(
            "%d of %d diagram(s) failed; %d written", len(report.failures), total, len(report.written)
        )
    return report
