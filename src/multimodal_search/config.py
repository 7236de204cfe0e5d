from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator


def _project_root() -> Path:
    """
    Resolve project root assuming this file lives in: <root>/src/multimodal_search/config.py
    """
    return Path(__file__).resolve().parents[2]


SUPPORTED_DIMENSIONS = (128, 256, 512, 1408)


class Settings(BaseModel):
    # --- Vertex AI ---
    # None lets the SDK fall back to the Application Default Credentials project
    google_cloud_project: Optional[str] = Field(default=None)
    google_cloud_location: str = Field(default="us-central1")
    embedding_model: str = Field(default="multimodalembedding@001")
    embedding_dimension: int = Field(default=1408)
    embed_max_attempts: int = Field(default=1, ge=1, description="1 means no retry")

    # --- Storage ---
    vector_store_dir: Path = Field(default_factory=lambda: _project_root() / "vector_store")
    collection_name: str = Field(default="multimodal", min_length=3)
    assets_dir: Path = Field(default_factory=_project_root)
    output_dir: Path = Field(default_factory=lambda: _project_root() / "output")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("embedding_dimension")
    @classmethod
    def dimension_supported(cls, v: int) -> int:
        if v not in SUPPORTED_DIMENSIONS:
            raise ValueError(f"embedding_dimension must be one of {SUPPORTED_DIMENSIONS}")
        return v


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Loads environment variables (optionally from .env) and validates Settings.

    Directories are NOT created here: the vector store directory only exists
    once ingestion has run, and the output directory must be provided.
    """
    if env_file is None:
        env_file = _project_root() / ".env"

    # Load .env if present; environment variables override .env by default
    if env_file.exists():
        load_dotenv(env_file, override=False)

    # Map environment variables -> Settings fields, leaving unset ones to their defaults
    env_map = {
        "google_cloud_project": "GOOGLE_CLOUD_PROJECT",
        "google_cloud_location": "GOOGLE_CLOUD_LOCATION",
        "embedding_model": "VERTEX_EMBEDDING_MODEL",
        "embedding_dimension": "EMBEDDING_DIMENSION",
        "embed_max_attempts": "EMBED_MAX_ATTEMPTS",
        "vector_store_dir": "VECTOR_STORE_DIR",
        "collection_name": "VECTOR_COLLECTION",
        "assets_dir": "ASSETS_DIR",
        "output_dir": "OUTPUT_DIR",
        "log_level": "LOG_LEVEL",
    }
    data = {field: os.environ[var] for field, var in env_map.items() if os.getenv(var)}

    try:
        return Settings(**data)
    except ValidationError as e:
        # Provide a clean error message for bad values
        raise RuntimeError(
            "Invalid configuration. Check the environment variables / .env file.\n"
            f"Details:\n{e}"
        ) from e


# Convenience singleton-style access
settings = load_settings()
