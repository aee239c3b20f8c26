"""Port: on-disk model catalog."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from whisper_bridge.l1_entities.config import ModelDescriptor


class ModelCatalog(Protocol):
    """Abstract model catalog — maps the configured selection to a model file."""

    def resolve_models(self, models_dir: Path) -> list[ModelDescriptor]:
        """Scan *models_dir* for supported models and persist the result."""
        ...

    def current_model(self) -> str | None:
        """Save path of the selected model, or None when nothing usable is selected."""
        ...
