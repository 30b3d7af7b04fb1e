"""
config.py — Central configuration for Infografix.
Loads settings from environment variables / .env file.
"""

from pathlib import Path

from pydantic_settings import BaseSettings
from pydantic import Field


# ── Project Paths ──────────────────────────────────────────────
ROOT_DIR = Path(__file__).resolve().parent
DATA_DIR = ROOT_DIR / "data"
LOG_DIR = DATA_DIR / "logs"

# Ensure data subdirectories exist at import time
LOG_DIR.mkdir(parents=True, exist_ok=True)


# ── Application Settings ──────────────────────────────────────
class Settings(BaseSettings):
    """Typed application settings — loaded from env vars / .env file."""

    # --- Gemini API ---
    gemini_api_key: str = Field(
        ..., description="Google Gemini API key"
    )
    gemini_text_model: str = Field(
        default="gemini-3-flash-preview",
        description="Model used to synthesise infographic content",
    )
    gemini_image_model: str = Field(
        default="gemini-2.5-flash-image",
        description="Image-modality model used by the studio",
    )

    # --- LLM Behaviour ---
    llm_temperature: float = Field(
        default=0.7, ge=0.0, le=2.0,
        description="Default sampling temperature",
    )
    llm_max_output_tokens: int = Field(
        default=8192, ge=256,
        description="Max output tokens per structured call",
    )
    llm_max_attempts: int = Field(
        default=1, ge=1,
        description="Attempts per API call (1 = single attempt, no retry)",
    )
    llm_retry_wait_seconds: int = Field(
        default=2, ge=1,
        description="Base wait between attempts (exponential backoff)",
    )

    # --- Rendering ---
    chart_dpi: int = Field(default=160, description="Matplotlib chart DPI")

    # --- Studio ---
    max_upload_mb: int = Field(
        default=16, ge=1,
        description="Largest accepted studio upload, in megabytes",
    )

    model_config = {
        "env_file": str(ROOT_DIR / ".env"),
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


def get_settings() -> Settings:
    """Factory that loads and returns validated settings."""
    return Settings()  # type: ignore[call-arg]
