"""
Engine Settings

Loads runtime settings from environment variables and provides defaults.
A project-root .env file is loaded with python-dotenv when present.
Algorithm parameters live in RecommendationConfig (optionally from a JSON file).
"""

import json
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import ValidationError

from .embedding.embedding_strategy import EMBEDDING_DIMENSIONS, EMBEDDING_MODEL
from .embedding.provider import CachedEmbeddingProvider, OpenAIEmbeddingProvider
from .engine import RecommendationEngine
from .errors import ConfigurationError
from .models.config import DEFAULT_CONFIG, RecommendationConfig
from .services import (
    JsonInteractionLog,
    JsonPreferenceStore,
    JsonProfileStore,
    JsonRecipeCatalog,
    JsonSimilarityStore,
)

BASE_DIR = Path(__file__).resolve().parent.parent

root_env = BASE_DIR / ".env"
if root_env.exists():
    load_dotenv(root_env)


@dataclass
class EngineSettings:
    """Runtime settings."""

    # API Keys
    openai_api_key: Optional[str] = None

    # Embeddings
    embedding_model: str = EMBEDDING_MODEL
    embedding_dimensions: int = EMBEDDING_DIMENSIONS
    embedding_max_workers: Optional[int] = None

    # Paths
    data_dir: Path = BASE_DIR / "data"
    recommendation_config_path: Optional[Path] = None

    # IANA zone for session hour, day of week and request time of day (UTC when unset)
    timezone: Optional[str] = None

    # Start the profile refresh worker in create_engine
    background_refresh: bool = True

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Load settings from environment variables."""

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (BASE_DIR / p).resolve()

        workers = os.getenv("EMBEDDING_MAX_WORKERS")
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            embedding_model=os.getenv("EMBEDDING_MODEL", EMBEDDING_MODEL),
            embedding_dimensions=int(os.getenv("EMBEDDING_DIMENSIONS", str(EMBEDDING_DIMENSIONS))),
            embedding_max_workers=int(workers) if workers else None,
            data_dir=_path_env("TASTE_ENGINE_DATA_DIR", BASE_DIR / "data"),
            recommendation_config_path=_path_env("RECOMMENDATION_CONFIG_PATH"),
            timezone=os.getenv("TASTE_ENGINE_TIMEZONE") or None,
            background_refresh=os.getenv("BACKGROUND_REFRESH", "true").lower() not in ("0", "false", "no", "off"),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the settings.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if not self.openai_api_key:
            errors.append("OPENAI_API_KEY is not set")

        if self.embedding_dimensions <= 0:
            errors.append(f"EMBEDDING_DIMENSIONS must be positive: {self.embedding_dimensions}")

        if self.embedding_max_workers is not None and self.embedding_max_workers < 1:
            errors.append(f"EMBEDDING_MAX_WORKERS must be at least 1: {self.embedding_max_workers}")

        if self.recommendation_config_path and not self.recommendation_config_path.exists():
            errors.append(f"Recommendation config not found: {self.recommendation_config_path}")

        if self.timezone:
            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError):
                errors.append(f"Unknown TASTE_ENGINE_TIMEZONE: {self.timezone}")

        # Data dir is created on first write

        return len(errors) == 0, errors


def load_recommendation_config(
    path: Optional[Union[Path, str]] = None,
    max_workers: Optional[int] = None,
) -> RecommendationConfig:
    """
    Load RecommendationConfig from a nested JSON file, or the defaults when
    no path is given. max_workers overrides embedding.max_workers.
    """
    if path is None:
        config = DEFAULT_CONFIG
    else:
        try:
            with open(path, "r", encoding="utf-8") as f:
                config = RecommendationConfig.from_dict(json.load(f))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Could not read recommendation config {path}: {e}") from e
        except ValidationError as e:
            raise ConfigurationError(f"Invalid recommendation config {path}: {e}") from e

    if max_workers is not None:
        try:
            config = RecommendationConfig.model_validate(
                {**config.model_dump(), "embedding_max_workers": max_workers}
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid embedding worker count {max_workers}: {e}") from e
    return config


def local_clock(tz_name: Optional[str]) -> Optional[Callable[[], datetime]]:
    """Clock returning aware datetimes in tz_name, or None when no zone is set."""
    if not tz_name:
        return None
    try:
        zone = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown timezone {tz_name!r}: {e}") from e
    return lambda: datetime.now(zone)


def create_engine(settings: Optional[EngineSettings] = None) -> RecommendationEngine:
    """
    Build a RecommendationEngine over JSON stores in settings.data_dir and
    OpenAI embeddings, with a profile refresh queue attached. The refresh
    worker thread is started unless settings.background_refresh is off, in
    which case callers drain the queue with refresh_queue.run_pending().
    """
    settings = settings or get_settings()
    if not settings.openai_api_key:
        raise ConfigurationError("OPENAI_API_KEY is required to create the engine")

    config = load_recommendation_config(
        settings.recommendation_config_path, settings.embedding_max_workers
    )
    data_dir = settings.data_dir
    provider = CachedEmbeddingProvider(
        OpenAIEmbeddingProvider(
            api_key=settings.openai_api_key,
            model=settings.embedding_model,
            dimensions=settings.embedding_dimensions,
        )
    )
    engine = RecommendationEngine(
        catalog=JsonRecipeCatalog(data_dir / "recipes.json"),
        interaction_log=JsonInteractionLog(data_dir / "interactions.json"),
        preference_store=JsonPreferenceStore(data_dir / "preferences.json"),
        profile_store=JsonProfileStore(data_dir / "profiles.json"),
        similarity_store=JsonSimilarityStore(data_dir / "similarities.json"),
        provider=provider,
        config=config,
        clock=local_clock(settings.timezone),
    )
    engine.enable_background_refresh(start=settings.background_refresh)
    return engine


# Global settings instance
_settings: Optional[EngineSettings] = None


def get_settings() -> EngineSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = EngineSettings.from_env()
    return _settings


def reload_settings() -> EngineSettings:
    """Reload settings from environment."""
    global _settings
    _settings = None
    return get_settings()
