"""Tests for the YAML settings store gateway."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from whisper_bridge.l1_entities.errors import SettingsError
from whisper_bridge.l3_interface_adapters.gateways.yaml_settings_store import YamlSettingsStore


@pytest.fixture
def store(tmp_path: Path) -> YamlSettingsStore:
    return YamlSettingsStore(tmp_path / 'lib' / 'settings.yaml', tmp_path / 'lib', tmp_path / 'cache')


class TestYamlSettingsStore:
    def test_missing_file_reads_defaults(self, store):
        assert store.get('whisper.model') is None
        assert store.get('whisper.model', 'x') == 'x'
        cfg = store.whisper_config()
        assert cfg.service == 'local'
        assert cfg.available_models == []

    def test_set_creates_nested_yaml(self, store):
        store.set('whisper.model', 'ggml-tiny.en.bin')
        store.set('whisper.service', 'openai')

        data = yaml.safe_load(store.settings_file.read_text(encoding='utf-8'))
        assert data == {'whisper': {'model': 'ggml-tiny.en.bin', 'service': 'openai'}}

    def test_round_trip_through_new_instance(self, store, tmp_path: Path):
        store.set('whisper.model', 'ggml-base.en.bin')
        again = YamlSettingsStore(store.settings_file, tmp_path / 'lib', tmp_path / 'cache')
        assert again.whisper_config().model == 'ggml-base.en.bin'

    def test_set_none_clears_selection(self, store):
        store.set('whisper.model', 'ggml-base.en.bin')
        store.set('whisper.model', None)
        assert store.whisper_config().model is None

    def test_set_replaces_scalar_parent(self, store):
        store.set('whisper', 'oops')
        store.set('whisper.model', 'a.bin')
        assert store.get('whisper') == {'model': 'a.bin'}

    def test_no_temp_files_left(self, store):
        store.set('whisper.model', 'a.bin')
        leftovers = [p.name for p in store.settings_file.parent.iterdir() if p.name.startswith('.settings-')]
        assert leftovers == []

    def test_corrupt_yaml_raises(self, store):
        store.settings_file.parent.mkdir(parents=True)
        store.settings_file.write_text('whisper: [unclosed', encoding='utf-8')
        with pytest.raises(SettingsError, match='parse'):
            store.get('whisper.model')

    def test_invalid_whisper_values_raise(self, store):
        store.set('whisper.service', 'google')
        with pytest.raises(SettingsError, match='Invalid whisper settings'):
            store.whisper_config()

    def test_cache_path_created(self, store, tmp_path: Path):
        assert store.cache_path() == tmp_path / 'cache'
        assert (tmp_path / 'cache').is_dir()

    def test_library_path(self, store, tmp_path: Path):
        assert store.library_path() == tmp_path / 'lib'
