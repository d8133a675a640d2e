"""Locate Mermaid diagram text inside input files."""
from __future__ import annotations

import re
from pathlib import Path

from .errors import NoDiagramFoundError
from .models import DiagramSource, InputKind

DIAGRAM_TAG = "mermaid"
MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})

# Tag must be followed by whitespace so ```mermaidjs and friends are skipped;
# the closing fence need not sit on its own line.
_FENCE_RE = re.compile(r"```" + re.escape(DIAGRAM_TAG) + r"(?=\s)(.*?)```", re.DOTALL)


def input_kind_for(path: Path | str) -> InputKind:
    if Path(path).suffix.lower() in MARKDOWN_SUFFIXES:
        return InputKind.COMPOSITE_DOCUMENT
    return InputKind.STANDALONE_DIAGRAM


def extract_fenced(content: str) -> list[str]:
    return [m.group(1).strip() for m in _FENCE_RE.finditer(content)]


def extract(
    content: str, kind: InputKind, source_path: Path | str | None = None
) -> list[DiagramSource]:
    """Split ``content`` into diagram sources, in document order.

    Raises NoDiagramFoundError when a composite document holds no tagged
    blocks.
    """
    if kind is InputKind.STANDALONE_DIAGRAM:
        return [DiagramSource(text=content.strip(), index=1)]

    blocks = extract_fenced(content)
    if not blocks:
        raise NoDiagramFoundError(source_path)
    return [DiagramSource(text=b, index=i) for i, b in enumerate(blocks, start=1)]
