"""settings.py — Defaults for the converter, overridable from .env or the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

FORMATS = ("html", "pdf")
LANGUAGES = ("en", "es")


@dataclass
class Settings:
    output_format: str = "html"
    output_dir: Path = Path("output")
    lang: str = "en"
    pdf_page_size: str = "a4"
    pdf_font_size: float = 11.0


def _env_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    value = os.getenv(name, "").strip().lower() or default
    if value not in choices:
        raise ValueError(f"{name}={value!r} is not one of: {', '.join(choices)}")
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name}={raw!r} is not a number") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw}")
    return value


def load_settings(env_file: Path | None = None) -> Settings:
    """Read EPUBCONVERT_* variables, loading .env first (existing env wins)."""
    load_dotenv(env_file)
    return Settings(
        output_format=_env_choice("EPUBCONVERT_FORMAT", "html", FORMATS),
        output_dir=Path(os.getenv("EPUBCONVERT_OUTPUT_DIR", "").strip() or "output"),
        lang=_env_choice("EPUBCONVERT_LANG", "en", LANGUAGES),
        pdf_page_size=os.getenv("EPUBCONVERT_PDF_PAGE_SIZE", "").strip().lower() or "a4",
        pdf_font_size=_env_float("EPUBCONVERT_PDF_FONT_SIZE", 11.0),
    )
