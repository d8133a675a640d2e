"""Interactive line input with filesystem path completion."""
from __future__ import annotations

import glob
import os

try:
    import readline
except ImportError:  # Windows builds ship without GNU readline
    readline = None


def complete_path(partial: str) -> list[str]:
    """Return filesystem entries starting with ``partial``; directories end in '/'."""
    expanded = os.path.expanduser(partial)
    matches = []
    for m in sorted(glob.glob(glob.escape(expanded) + "*")):
        if os.path.isdir(m):
            m += os.sep
        if partial.startswith("~") and not expanded.startswith("~"):
            m = "~" + m[len(os.path.expanduser("~")):]
        matches.append(m)
    return matches


def _completer(text: str, state: int) -> str | None:
    # delimiters are tab/newline only, so text is the whole line typed so far
    options = complete_path(text)
    return options[state] if state < len(options) else None


def prompt(question: str, default: str = "") -> str:
    """Ask ``question`` on the terminal; empty answer or EOF yields ``default``."""
    if readline is not None:
        readline.set_completer_delims("\t\n")
        readline.set_completer(_completer)
        readline.parse_and_bind("tab: complete")
    try:
        answer = input(question)
    except EOFError:
        print()
        answer = ""
    finally:
        if readline is not None:
            readline.set_completer(None)
    return answer.strip() or default
