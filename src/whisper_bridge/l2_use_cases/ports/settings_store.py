"""Port: persistent settings storage."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from whisper_bridge.l1_entities.config import WhisperConfig


class SettingsStore(Protocol):
    """Abstract settings store keyed by dotted names such as ``whisper.model``."""

    def get(self, key: str, default: Any = None) -> Any:
        """Read a single value."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Persist a single value immediately."""
        ...

    def whisper_config(self) -> WhisperConfig:
        """Return a fresh snapshot of the ``whisper.*`` settings."""
        ...

    def library_path(self) -> Path:
        """Root directory for user-installed binaries and models."""
        ...

    def cache_path(self) -> Path:
        """Directory for transcription artifacts and materialized uploads."""
        ...
