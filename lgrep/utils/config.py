"""Configuration management -- reads from environment with sensible defaults."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Centralised settings read once from env vars."""

    # --- Engine ------------------------------------------------------------
    endpoint: str = field(
        default_factory=lambda: os.getenv("LGREP_ENDPOINT", "http://localhost:9200/")
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("LGREP_TIMEOUT", "30"))
    )

    # --- Search defaults ---------------------------------------------------
    default_size: int = field(
        default_factory=lambda: int(os.getenv("LGREP_DEFAULT_SIZE", "100"))
    )
    timestamp_field: str = field(
        default_factory=lambda: os.getenv("LGREP_TIMESTAMP_FIELD", "@timestamp")
    )
    default_format: str = field(
        default_factory=lambda: os.getenv("LGREP_FORMAT", ".message")
    )

    # --- Logging -----------------------------------------------------------
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING"))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))


# Module-level singleton -- import this everywhere.
settings = Settings()
