"""Gateway: YAML-backed settings store — implements SettingsStore port."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from whisper_bridge.l1_entities.config import WhisperConfig
from whisper_bridge.l1_entities.errors import SettingsError

log = logging.getLogger('wb.settings')


class YamlSettingsStore:
    """Persists dotted keys (``whisper.model``) as nested YAML mappings.

    Every ``set`` rewrites the whole file through a temp-file rename, so a
    crash mid-write leaves the previous settings intact.
    """

    def __init__(self, settings_file: Path, library_path: Path, cache_path: Path) -> None:
        self._file = settings_file
        self._library_path = library_path
        self._cache_path = cache_path

    @property
    def settings_file(self) -> Path:
        return self._file

    def library_path(self) -> Path:
        return self._library_path

    def cache_path(self) -> Path:
        self._cache_path.mkdir(parents=True, exist_ok=True)
        return self._cache_path

    def get(self, key: str, default: Any = None) -> Any:
        node: Any = self._read()
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        *parents, leaf = key.split('.')
        node = data
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[leaf] = value
        self._write(data)
        log.debug('Set %s', key)

    def whisper_config(self) -> WhisperConfig:
        raw = self.get('whisper', {}) or {}
        try:
            return WhisperConfig.model_validate(raw)
        except ValidationError as exc:
            raise SettingsError(f'Invalid whisper settings in {self._file}: {exc}') from exc

    def _read(self) -> dict:
        if not self._file.exists():
            return {}
        try:
            data = yaml.safe_load(self._file.read_text(encoding='utf-8'))
        except yaml.YAMLError as exc:
            raise SettingsError(f'Failed to parse settings file {self._file}: {exc}') from exc
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self._file.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._file.parent, prefix='.settings-', suffix='.yaml')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
            os.replace(tmp, self._file)
        except OSError as exc:
            Path(tmp).unlink(missing_ok=True)
            raise SettingsError(f'Failed to write settings file {self._file}: {exc}') from exc
