from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

DEFAULT_BACKGROUND = "white"
TRANSPARENT = "transparent"
DEFAULT_SCALE = 2.0
DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080


class Theme(str, Enum):
    """Mermaid themes accepted on the command line."""

    default = "default"
    dark = "dark"
    forest = "forest"
    neutral = "neutral"
    base = "base"
    coder = "coder"


class InputKind(Enum):
    STANDALONE_DIAGRAM = "standalone"
    COMPOSITE_DOCUMENT = "composite"


class RenderOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    theme: Theme = Theme.default
    background_color: str = DEFAULT_BACKGROUND
    scale: float = Field(default=DEFAULT_SCALE, gt=0)
    width: int = Field(default=DEFAULT_WIDTH, gt=0)
    height: int = Field(default=DEFAULT_HEIGHT, gt=0)

    @property
    def transparent(self) -> bool:
        return self.background_color.strip().lower() == TRANSPARENT


class ConversionRequest(RenderOptions):
    input_path: Path
    output_path: Path

    def render_options(self) -> RenderOptions:
        return RenderOptions(
            theme=self.theme,
            background_color=self.background_color,
            scale=self.scale,
            width=self.width,
            height=self.height,
        )


@dataclass(frozen=True)
class DiagramSource:
    text: str
    index: int  # 1-based position within the input


@dataclass(frozen=True)
class RenderedImage:
    data: bytes
    width: int
    height: int

    @property
    def has_alpha(self) -> bool:
        # IHDR color type 4 (gray+alpha) or 6 (RGBA)
        return len(self.data) > 25 and self.data[25] in (4, 6)


def png_dimensions(data: bytes) -> tuple[int, int]:
    """Return (width, height) from a PNG header.

    Raises ValueError if ``data`` does not start with a PNG IHDR chunk.
    """
    if len(data) < 24 or not data.startswith(PNG_SIGNATURE) or data[12:16] != b"IHDR":
        raise ValueError("Not a PNG image")
    width = int.from_bytes(data[16:20], "big")
    height = int.from_bytes(data[20:24], "big")
    return width, height
