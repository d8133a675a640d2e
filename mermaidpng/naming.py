from __future__ import annotations

from pathlib import Path

IMAGE_SUFFIX = ".png"


def ensure_png_suffix(path: Path) -> Path:
    if path.suffix == IMAGE_SUFFIX:
        return path
    return path.with_name(path.name + IMAGE_SUFFIX)


def name_for(base: Path | str, index: int, total: int) -> Path:
    """Output path for diagram ``index`` (1-based) out of ``total``.

    A single diagram keeps the base name; batches get ``_<index>`` before
    the suffix (``out.png`` -> ``out_2.png``). The result always ends in
    ``.png``.
    """
    if total < 1 or not 1 <= index <= total:
        raise ValueError(f"index {index} out of range for {total} diagram(s)")
    path = Path(base)
    if total > 1:
        path = path.with_name(f"{path.stem}_{index}{path.suffix}")
    return ensure_png_suffix(path)
