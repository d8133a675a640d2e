import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MERMAID_JS_URL = "https://cdn.jsdelivr.net/npm/mermaid/dist/mermaid.min.js"


def _parse_browser_args(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    parts = (p.strip() for p in raw.replace(";", ",").split(","))
    return tuple(p for p in parts if p)


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Logging
    log_file: Path | None = None
    log_level: str = "INFO"
    log_max_bytes: int = 5 * 1024 * 1024
    log_backups: int = 5
    # Rendering host
    render_timeout_sec: float = Field(default=30.0, gt=0)
    mermaid_js_url: str = DEFAULT_MERMAID_JS_URL
    browser_args: tuple[str, ...] = ()
    font_family: str = "Arial"
    font_size: int = Field(default=14, gt=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return (v or "INFO").upper()

    @field_validator("log_file", mode="before")
    @classmethod
    def _ensure_log_path(cls, v: str | Path | None) -> Path | None:
        if not v:
            return None
        return Path(v).expanduser().resolve()

    @field_validator("browser_args", mode="before")
    @classmethod
    def _normalize_browser_args(cls, v: object) -> tuple[str, ...]:
        if v in (None, "", (), []):
            return ()
        if isinstance(v, (list, tuple)):
            return tuple(str(s).strip() for s in v if str(s).strip())
        return _parse_browser_args(str(v))

    @property
    def render_timeout_ms(self) -> float:
        return self.render_timeout_sec * 1000


def load_settings() -> Settings:
    # Logging
    log_file_raw = os.getenv("LOG_FILE", "").strip()
    log_file = Path(log_file_raw).expanduser().resolve() if log_file_raw else None
    log_level = (os.getenv("LOG_LEVEL", "INFO") or "INFO").upper()
    log_max_bytes = int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024)))
    log_backups = int(os.getenv("LOG_BACKUPS", "5"))

    # Rendering host
    timeout = float(os.getenv("RENDER_TIMEOUT_SEC", "30") or 30)
    mermaid_js_url = os.getenv("MERMAID_JS_URL", "").strip() or DEFAULT_MERMAID_JS_URL
    browser_args = _parse_browser_args(os.getenv("BROWSER_ARGS"))
    font_family = os.getenv("FONT_FAMILY", "").strip() or "Arial"
    font_size = int(os.getenv("FONT_SIZE", "14") or 14)

    return Settings(
        log_file=log_file,
        log_level=log_level,
        log_max_bytes=log_max_bytes,
        log_backups=log_backups,
        render_timeout_sec=timeout,
        mermaid_js_url=mermaid_js_url,
        browser_args=browser_args,
        font_family=font_family,
        font_size=font_size,
    )
