"""Shared path constants for configuration, user data, and bundled assets."""

from __future__ import annotations

from pathlib import Path

from platformdirs import user_cache_path, user_config_path, user_data_path

APP_NAME = 'whisper-bridge'

CONFIG_DIR = user_config_path(APP_NAME)
LIBRARY_DIR = user_data_path(APP_NAME)
CACHE_DIR = user_cache_path(APP_NAME)

# Ships alongside the package: lib/whisper/{main,models/,samples/}
BUNDLED_DIR = Path(__file__).resolve().parents[2] / 'lib' / 'whisper'

DEFAULT_CONFIG_PATHS = [
    CONFIG_DIR / 'config.yaml',
    CONFIG_DIR / 'config.yml',
]

SETTINGS_FILENAME = 'settings.yaml'
