import logging
import secrets
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("globalupi.config")


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    DATA_DIR, DB_FILENAME, JWT_SECRET, TOKEN_TTL_DAYS).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "GlobalUPI"
    debug: bool = False
    version: str = "0.1.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "globalupi.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided
    sqlite_timeout_seconds: float = 10.0

    # Bearer tokens
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    token_ttl_days: int = 7

    transaction_ref_prefix: str = "TXN"

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        # Ensure persistence directory exists
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        if not self.jwt_secret:
            logger.warning(
                "JWT_SECRET not set; using a random per-process secret, "
                "issued tokens will not survive a restart"
            )
            self.jwt_secret = secrets.token_urlsafe(32)
        if self.token_ttl_days <= 0:
            raise ValueError("token_ttl_days must be positive")


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
