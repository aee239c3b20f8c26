"""Gateway: filesystem model catalog — implements ModelCatalog port."""

from __future__ import annotations

import logging
from pathlib import Path

from whisper_bridge.l1_entities.config import ModelDescriptor
from whisper_bridge.l1_entities.whisper_models import find_model_option
from whisper_bridge.l2_use_cases.ports.settings_store import SettingsStore

log = logging.getLogger('wb.whisper')


class FsModelCatalog:
    """Matches files in the models directory against the supported-model table."""

    def __init__(self, settings: SettingsStore) -> None:
        self._settings = settings

    def resolve_models(self, models_dir: Path) -> list[ModelDescriptor]:
        models_dir.mkdir(parents=True, exist_ok=True)
        models: list[ModelDescriptor] = []
        for entry in sorted(models_dir.iterdir(), key=lambda p: p.name):
            option = find_model_option(entry.name)
            if option is None:
                continue
            models.append(ModelDescriptor(**option.model_dump(), save_path=str(models_dir / entry.name)))

        self._settings.set('whisper.available_models', [m.model_dump() for m in models])
        self._settings.set('whisper.models_path', str(models_dir))
        log.debug('Found %d whisper models in %s', len(models), models_dir)
        return models

    def current_model(self) -> str | None:
        config = self._settings.whisper_config()
        if not config.available_models:
            return None
        if not config.model:
            first = config.available_models[0]
            self._settings.set('whisper.model', first.name)
            log.info('No whisper model selected, defaulting to %s', first.name)
            return first.save_path

        for model in config.available_models:
            if model.name == config.model:
                return model.save_path
        log.warning('Selected whisper model %s is not installed', config.model)
        return None
