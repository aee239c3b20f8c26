"""Tests for YAML config loader gateway."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

import whisper_bridge.l3_interface_adapters.gateways.yaml_config_loader as mod
from whisper_bridge.l1_entities.errors import SettingsError
from whisper_bridge.l3_interface_adapters.gateways.yaml_config_loader import YamlConfigLoader


class TestYamlConfigLoader:
    def test_load_raw_from_path(self, tmp_path: Path):
        p = tmp_path / 'config.yaml'
        p.write_text('process_timeout: 30\npaths:\n  cache: /tmp/wb\n', encoding='utf-8')
        raw = YamlConfigLoader().load_raw(str(p))
        assert raw == {'process_timeout': 30, 'paths': {'cache': '/tmp/wb'}}

    def test_load_nonexistent_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            YamlConfigLoader().load_raw(str(tmp_path / 'nonexistent.yaml'))

    def test_empty_yaml_is_empty_dict(self, tmp_path: Path):
        p = tmp_path / 'empty.yaml'
        p.write_text('', encoding='utf-8')
        assert YamlConfigLoader().load_raw(str(p)) == {}

    def test_non_mapping_rejected(self, tmp_path: Path):
        p = tmp_path / 'config.yaml'
        p.write_text('- just\n- a list\n', encoding='utf-8')
        with pytest.raises(SettingsError, match='must contain a mapping'):
            YamlConfigLoader().load_raw(str(p))

    def test_unparsable_yaml_raises_yaml_error(self, tmp_path: Path):
        p = tmp_path / 'config.yaml'
        p.write_text('paths: [unclosed\n', encoding='utf-8')
        with pytest.raises(yaml.YAMLError):
            YamlConfigLoader().load_raw(str(p))


class TestDefaultConfigResolution:
    def test_loads_from_default_config_dir(self, tmp_path: Path, monkeypatch):
        (tmp_path / 'config.yml').write_text('process_timeout: 5\n', encoding='utf-8')
        monkeypatch.setattr(mod, 'DEFAULT_CONFIG_PATHS', [tmp_path / 'config.yaml', tmp_path / 'config.yml'])
        assert YamlConfigLoader().find_config() == tmp_path / 'config.yml'
        assert YamlConfigLoader().load_raw() == {'process_timeout': 5}

    def test_no_default_config_returns_empty(self, tmp_path: Path, monkeypatch):
        monkeypatch.setattr(mod, 'DEFAULT_CONFIG_PATHS', [tmp_path / 'nope' / 'config.yaml'])
        assert YamlConfigLoader().find_config() is None
        assert YamlConfigLoader().load_raw() == {}
