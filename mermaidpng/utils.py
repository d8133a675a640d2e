from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path


def normalize_path(raw: str) -> Path:
    """Expand ``~`` and make ``raw`` absolute against the current directory."""
    return Path(raw.strip()).expanduser().resolve()


def write_bytes_atomic(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` through a temp file in the same directory.

    Either the complete file appears at ``path`` or nothing does; the temp
    file is removed when the write or the rename fails.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.remove(tmp)
        raise
