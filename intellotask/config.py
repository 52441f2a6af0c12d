"""
Unified configuration for the storage location and other settings.

This module provides a single source of truth for settings that works
consistently across:
- The command-line tool
- Library use (constructing a DataService directly)
- Tests

The storage path resolution:
1. Checks INTELLOTASK_STORAGE_PATH environment variable first
2. Falls back to a consistent default location under the project root
3. Always resolves to an absolute path

This module uses Pydantic Settings for type-safe configuration management
with support for .env files and environment variable overrides.
"""
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default storage directory, relative to the project root
DEFAULT_STORAGE_PATH = "data"

# Namespace shared by all persisted keys
DEFAULT_KEY_PREFIX = "intellotask_"


class Settings(BaseSettings):
    """Application settings for IntelloTask.

    All configuration values can be set via INTELLOTASK_* environment
    variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="INTELLOTASK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================================================
    # Storage Configuration
    # ============================================================================
    storage_backend: Literal["file", "memory"] = "file"
    storage_path: str = ""  # Will be resolved by validator
    key_prefix: str = DEFAULT_KEY_PREFIX
    reset_corrupt_collections: bool = False  # Reset to [] instead of raising CorruptStoreError
    seed_demo_data: bool = True

    # ============================================================================
    # Logging Configuration
    # ============================================================================
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"

    # ============================================================================
    # Reports
    # ============================================================================
    report_directory: str = "."

    @field_validator("storage_path", mode="before")
    @classmethod
    def resolve_storage_path(cls, v: Optional[str]) -> str:
        """
        Resolve the storage directory.

        Resolution order:
        1. Value from environment, .env file or constructor argument
        2. Project-relative default directory

        Returns:
            Absolute path to the storage directory
        """
        if v:
            return os.path.abspath(v)

        project_root = Path(__file__).resolve().parent.parent
        return os.path.abspath(str(project_root / DEFAULT_STORAGE_PATH))

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return str(v).upper()

    def collection_key(self, name: str) -> str:
        """Return the namespaced storage key for a collection name."""
        return f"{self.key_prefix}{name}"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def ensure_storage_directory(storage_path: Optional[str] = None) -> str:
    """
    Ensure the storage directory exists.

    Args:
        storage_path: Storage directory. If None, uses the configured path.

    Returns:
        The absolute storage directory
    """
    if storage_path is None:
        storage_path = get_settings().storage_path
    storage_path = os.path.abspath(storage_path)
    os.makedirs(storage_path, exist_ok=True)
    return storage_path
