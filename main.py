from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from logging.handlers import RotatingFileHandler

from dotenv import load_dotenv

from mermaidpng import __version__
from mermaidpng.config import Settings, load_settings
from mermaidpng.converter import convert
from mermaidpng.errors import ConversionError
from mermaidpng.params import THEMES, PromptFn, resolve
from mermaidpng.prompt import prompt

POSITIONALS = ("input", "output", "theme", "background", "scale", "width", "height")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mermaid-png",
        description=(
            "Render Mermaid diagrams (.mmd files or ```mermaid blocks in Markdown) to PNG. "
            "Missing arguments are asked for interactively."
        ),
    )
    parser.add_argument("input", nargs="?", help="Mermaid (.mmd) or Markdown (.md) file")
    parser.add_argument("output", nargs="?", help="output PNG path (default: ./<input>.png)")
    parser.add_argument("theme", nargs="?", help=f"one of: {', '.join(THEMES)}")
    parser.add_argument("background", nargs="?", help="white, transparent or any CSS color")
    parser.add_argument("scale", nargs="?", help="device scale factor (default: 2)")
    parser.add_argument("width", nargs="?", help="viewport width in pixels (default: 1920)")
    parser.add_argument("height", nargs="?", help="viewport height in pixels (default: 1080)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def _setup_logging(settings: Settings, verbose: bool = False) -> None:
    # Console always; optional rotating file
    log_format = "%(asctime)s %(levelname)s %(name)s %(message)s"
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=log_format)
    if settings.log_file:
        try:
            settings.log_file.parent.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(
                settings.log_file,
                maxBytes=settings.log_max_bytes,
                backupCount=settings.log_backups,
                encoding="utf-8",
            )
            fh.setLevel(level)
            fh.setFormatter(logging.Formatter(log_format))
            logging.getLogger().addHandler(fh)
        except Exception:
            logging.exception("Failed to set up file logging")


def main(argv: Sequence[str] | None = None, prompt_fn: PromptFn = prompt) -> int:
    """Run one conversion; returns the process exit code."""
    # Load .env if present
    load_dotenv()

    args = _parse_args(argv)
    settings = load_settings()
    _setup_logging(settings, args.verbose)

    positional = [getattr(args, name) or "" for name in POSITIONALS]
    try:
        request = resolve(positional, prompt_fn)
        logging.debug("Resolved request: %s", request)
        asyncio.run(convert(request, settings))
    except ConversionError as exc:
        logging.error("Error converting Mermaid to PNG: %s", exc)
        return 1
    return 0


def cli() -> None:
    try:
        code = main()
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    cli()
