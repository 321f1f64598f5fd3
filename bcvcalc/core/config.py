from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RATE_PROMPT = (
    "Cuál es la tasa oficial actual del dólar BCV en Venezuela? "
    "Responde únicamente con el número decimal usando punto, ejemplo: 36.50. "
    "Si no puedes encontrarla, responde con 40.00 como fallback."
)


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variables use the BCV_ prefix (e.g., BCV_DEBUG, BCV_DATA_DIR,
    BCV_RATE_PROVIDER, BCV_OPENAI_API_KEY).
    """

    model_config = SettingsConfigDict(
        env_prefix="BCV_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Basic app metadata
    app_name: str = "Calculadora Dólar BCV"
    debug: bool = True
    version: str = "0.1.0"

    # Data & persistence (theme preference only)
    data_dir: Path = Path("data")
    db_filename: str = "bcvcalc.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Rate lookup
    # Allowed: 'answer-service' (natural-language lookup), 'static' (fallback constant only)
    rate_provider: str = "answer-service"
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    rate_model: str = "gpt-4o-mini"
    rate_prompt: str = DEFAULT_RATE_PROMPT
    fallback_rate: Decimal = Decimal("40.00")
    http_timeout_seconds: float = 15.0

    # Widget behaviour
    copy_feedback_seconds: float = 1.5
    capture_scale: int = 3

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        self.data_dir.mkdir(parents=True, exist_ok=True)
        allowed = {"answer-service", "static"}
        if self.rate_provider not in allowed:
            raise ValueError(
                f"Unsupported rate_provider '{self.rate_provider}'. Allowed: {allowed}"
            )
        if self.fallback_rate <= 0:
            raise ValueError("fallback_rate must be positive")


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
