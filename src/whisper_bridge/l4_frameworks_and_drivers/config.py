"""Infrastructure defaults — lives in L4, not domain."""

from __future__ import annotations

from whisper_bridge.l1_entities.config import AppConfig
from whisper_bridge.l3_interface_adapters.gateways.paths import BUNDLED_DIR, CACHE_DIR, LIBRARY_DIR

PROCESS_TIMEOUT = 15 * 60.0  # seconds

APP_CONFIG_DEFAULTS: dict = {
    'paths': {
        'library': str(LIBRARY_DIR),
        'cache': str(CACHE_DIR),
        'bundled': str(BUNDLED_DIR),
    },
    'process_timeout': PROCESS_TIMEOUT,
}


def _layer(defaults: dict, overrides: dict) -> dict:
    """New dict with *overrides* laid over *defaults*; nested sections merge key by key."""
    merged = dict(defaults)
    for key, value in overrides.items():
        section = merged.get(key)
        merged[key] = _layer(section, value) if isinstance(section, dict) and isinstance(value, dict) else value
    return merged


def build_app_config(raw: dict) -> AppConfig:
    """Lay *raw* user overrides over the defaults, then validate."""
    return AppConfig.model_validate(_layer(APP_CONFIG_DEFAULTS, raw))
