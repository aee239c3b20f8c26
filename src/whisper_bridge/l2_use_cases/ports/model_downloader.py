"""Port: model download."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class ModelDownloader(Protocol):
    def download(self, model_name: str, models_dir: Path) -> str:
        """Fetch a catalog model into *models_dir* and return its local path."""
        ...
