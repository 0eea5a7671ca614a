import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file from the project root
# This file: src/docregistry/config/settings.py
SERVER_ROOT = Path(__file__).resolve().parent.parent.parent.parent
ENV_PATH = SERVER_ROOT / ".env"

if ENV_PATH.exists():
    load_dotenv(ENV_PATH)
else:
    # Fallback to simple load_dotenv which looks in cwd
    load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


class Settings(BaseModel):
    """Global Application Settings"""

    # Environment
    ENV: str = Field(default="development", description="Environment: development, production, testing")
    LOG_LEVEL: str = Field(default="INFO", description="Log level")

    # Project Paths
    ROOT_DIR: Path = Field(default=SERVER_ROOT, description="Project root directory")

    # Storage
    STORE_BACKEND: str = Field(default="memory", description="Key-value backend: memory, sqlite")
    SQLITE_PATH: str = Field(default=str(SERVER_ROOT / "storage/docregistry.db"), description="Path to SQLite storage")
    SQLITE_TABLE: str = Field(default="documents", description="SQLite table holding documents")

    # Validation
    REQUIRE_DESCRIPTION: bool = Field(default=False, description="Reject documents without a description")

    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": True
    }


def load_settings() -> Settings:
    """Load settings from environment variables."""
    return Settings(
        ENV=os.getenv("ENV", "development"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        ROOT_DIR=SERVER_ROOT,
        STORE_BACKEND=os.getenv("STORE_BACKEND", "memory").strip().lower(),
        SQLITE_PATH=os.getenv("SQLITE_PATH", str(SERVER_ROOT / "storage/docregistry.db")),
        SQLITE_TABLE=os.getenv("SQLITE_TABLE", "documents"),
        REQUIRE_DESCRIPTION=_env_bool("REQUIRE_DESCRIPTION"),
    )

# Global settings instance
settings = load_settings()
