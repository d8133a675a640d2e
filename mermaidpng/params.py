from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from pathlib import Path

from .errors import InputNotFoundError
from .models import (
    DEFAULT_BACKGROUND,
    DEFAULT_HEIGHT,
    DEFAULT_SCALE,
    DEFAULT_WIDTH,
    ConversionRequest,
    Theme,
)
from .utils import normalize_path

PromptFn = Callable[[str, str], str]

THEMES = [t.value for t in Theme]


def _positional(args: Sequence[str], idx: int) -> str | None:
    if idx < len(args) and args[idx] is not None and str(args[idx]).strip():
        return str(args[idx]).strip()
    return None


def _ask(args: Sequence[str], idx: int, prompt_fn: PromptFn, question: str, default: str) -> str:
    value = _positional(args, idx)
    if value is not None:
        return value
    answer = (prompt_fn(question, default) or "").strip()
    return answer or default


def parse_theme(raw: str | None) -> Theme:
    try:
        return Theme((raw or "").strip())
    except ValueError:
        logging.debug("Unknown theme %r, using %s", raw, Theme.default.value)
        return Theme.default


def parse_positive_float(raw: str | None, default: float) -> float:
    try:
        value = float((raw or "").strip())
    except ValueError:
        return default
    if not math.isfinite(value) or value <= 0:
        return default
    return value


def parse_positive_int(raw: str | None, default: int) -> int:
    # "1280.9" -> 1280, mirroring how browsers parse pixel sizes
    value = parse_positive_float(raw, 0.0)
    if value < 1:
        return default
    return int(value)


def resolve(
    args: Sequence[str], prompt_fn: PromptFn, cwd: Path | None = None
) -> ConversionRequest:
    """Build a ConversionRequest from positional values, prompting for gaps.

    Positional order: input, output, theme, background, scale, width, height.
    Only a missing input file is an error; bad optional values fall back to
    their defaults.
    """
    cwd = cwd or Path.cwd()

    raw_input = _ask(args, 0, prompt_fn, "Enter the path to the Mermaid or Markdown file: ", "")
    if not raw_input:
        raise InputNotFoundError("")
    input_path = normalize_path(raw_input)
    if not input_path.exists():
        raise InputNotFoundError(raw_input)

    default_output = str(cwd / f"{input_path.stem}.png")
    output_path = normalize_path(
        _ask(
            args,
            1,
            prompt_fn,
            f"Enter the output PNG path (default: {default_output}): ",
            default_output,
        )
    )

    theme = parse_theme(
        _ask(
            args,
            2,
            prompt_fn,
            f"Enter theme [{', '.join(THEMES)}] (default: {Theme.default.value}): ",
            Theme.default.value,
        )
    )
    background = _ask(
        args,
        3,
        prompt_fn,
        f"Enter background color (white, transparent, or hex color) [{DEFAULT_BACKGROUND}]: ",
        DEFAULT_BACKGROUND,
    )
    scale = parse_positive_float(
        _ask(args, 4, prompt_fn, "Enter scale factor (1-5) [2]: ", ""), DEFAULT_SCALE
    )
    width = parse_positive_int(
        _ask(args, 5, prompt_fn, f"Enter width in pixels [{DEFAULT_WIDTH}]: ", ""), DEFAULT_WIDTH
    )
    height = parse_positive_int(
        _ask(args, 6, prompt_fn, f"Enter height in pixels [{DEFAULT_HEIGHT}]: ", ""),
        DEFAULT_HEIGHT,
    )

    return ConversionRequest(
        input_path=input_path,
        output_path=output_path,
        theme=theme,
        background_color=background,
        scale=scale,
        width=width,
        height=height,
    )
