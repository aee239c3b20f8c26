"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

WhisperService = Literal['local', 'cloudflare', 'azure', 'openai']

WHISPER_SERVICES: tuple[str, ...] = ('local', 'cloudflare', 'azure', 'openai')


class ModelDescriptor(BaseModel):
    """A catalog model found on disk. Regenerated on every catalog scan."""

    model_config = ConfigDict(frozen=True)

    type: str
    name: str
    size: str
    url: str
    save_path: str


class WhisperConfig(BaseModel):
    """The persisted ``whisper.*`` settings."""

    service: WhisperService = 'local'
    model: str | None = None
    available_models: list[ModelDescriptor] = Field(default_factory=list)
    models_path: str | None = None


class PathsConfig(BaseModel):
    library: str
    cache: str
    bundled: str


class AppConfig(BaseModel):
    paths: PathsConfig
    process_timeout: float = Field(gt=0, description='Seconds before a whisper process is killed')
