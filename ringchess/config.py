"""Service configuration.

Settings are read from ``RINGCHESS_*`` environment variables or an optional
``.env.ringchess`` file. Command line flags override them per invocation.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from .engine.rules import GameMode


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RINGCHESS_",
        env_file=".env.ringchess",
        env_file_encoding="utf-8",
    )

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Live games kept in memory before the least recently used is dropped
    max_sessions: int = 1024

    # Mode used when a new game is created without naming one
    default_mode: GameMode = GameMode.STANDARD
