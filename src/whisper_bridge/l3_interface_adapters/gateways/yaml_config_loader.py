"""Gateway: YAML configuration loader."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from whisper_bridge.l1_entities.errors import SettingsError
from whisper_bridge.l3_interface_adapters.gateways.paths import DEFAULT_CONFIG_PATHS

log = logging.getLogger('wb.settings')


class YamlConfigLoader:
    """Reads the user's config.yaml. Merging and validation happen in L4."""

    def find_config(self, config_path: str | None = None) -> Path | None:
        """Explicit *config_path* (must exist), else the first default location present."""
        if config_path is not None:
            path = Path(config_path)
            if not path.exists():
                raise FileNotFoundError(f'Config file not found: {path}')
            return path
        return next((p for p in DEFAULT_CONFIG_PATHS if p.exists()), None)

    def load_raw(self, config_path: str | None = None) -> dict:
        """Parsed YAML mapping, or ``{}`` when no config file is present.

        Raises ``yaml.YAMLError`` for unparsable files and ``SettingsError`` when
        the document is not a mapping.
        """
        path = self.find_config(config_path)
        if path is None:
            return {}
        log.debug('Loading config from %s', path)
        data = yaml.safe_load(path.read_text(encoding='utf-8'))
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SettingsError(f'Config file {path} must contain a mapping, got {type(data).__name__}')
        return data
