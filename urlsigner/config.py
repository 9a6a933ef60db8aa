# urlsigner/config.py
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .core.config import DEFAULT_ALGORITHM, DEFAULT_DIGEST, DEFAULT_TTL, SignerConfig, configure

# laad .env uit de werkmap (als die er is)
load_dotenv()


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    return value if value not in (None, "") else default


def _origins() -> List[str]:
    raw = _env("CORS_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()]


def _log_dir() -> Optional[Path]:
    raw = _env("LOG_DIR")
    return Path(raw) if raw else None


class Settings(BaseModel):
    APP_VERSION: str = Field(default_factory=lambda: _env("APP_VERSION", "1.0.0"))
    SIGNER_SECRET: Optional[str] = Field(default_factory=lambda: _env("SIGNER_SECRET"), repr=False)
    SIGNER_ALGORITHM: str = Field(default_factory=lambda: _env("SIGNER_ALGORITHM", DEFAULT_ALGORITHM))
    SIGNER_DIGEST: str = Field(default_factory=lambda: _env("SIGNER_DIGEST", DEFAULT_DIGEST))
    SIGNER_DEFAULT_TTL: int = Field(default_factory=lambda: int(_env("SIGNER_DEFAULT_TTL", str(DEFAULT_TTL))))
    DOWNLOADS_DIR: Path = Field(default_factory=lambda: Path(_env("DOWNLOADS_DIR", "./data/downloads")))
    LOG_DIR: Optional[Path] = Field(default_factory=_log_dir)
    LOG_LEVEL: str = Field(default_factory=lambda: _env("LOG_LEVEL", "INFO").upper())
    CORS_ORIGINS: List[str] = Field(default_factory=_origins)

    def signer_config(self) -> SignerConfig:
        """Raises ConfigurationError when SIGNER_SECRET is unset or an option is unusable."""
        return configure(
            self.SIGNER_SECRET,
            algorithm=self.SIGNER_ALGORITHM,
            digest=self.SIGNER_DIGEST,
            ttl=self.SIGNER_DEFAULT_TTL,
        )


def get_settings() -> Settings:
    return Settings()
