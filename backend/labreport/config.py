"""Application configuration using pydantic-settings."""

import warnings
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


# Find .env file: check backend dir first, then project root
_BACKEND_DIR = Path(__file__).parent.parent
_PROJECT_ROOT = _BACKEND_DIR.parent
_ENV_FILE = _BACKEND_DIR / ".env" if (_BACKEND_DIR / ".env").exists() else _PROJECT_ROOT / ".env"

# Age (years) below which "Children:" range clauses apply
DEFAULT_PEDIATRIC_AGE_CUTOFF = 14.0


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Template catalog: JSON file replacing the built-in table ("" = built-in)
    catalog_file: str = ""

    # Reference range resolution
    pediatric_age_cutoff: float = DEFAULT_PEDIATRIC_AGE_CUTOFF

    # HTTP
    cors_origins: str = "http://localhost:3000"

    # Application
    debug: bool = False
    log_level: str = "INFO"

    def model_post_init(self, __context) -> None:
        """Warn about a catalog file that cannot be found."""
        if self.catalog_file and not Path(self.catalog_file).exists():
            warnings.warn(
                f"CATALOG_FILE {self.catalog_file!r} does not exist; catalog loading will fail.",
                UserWarning,
                stacklevel=2,
            )


settings = Settings()
