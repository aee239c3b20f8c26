"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from pathlib import Path

from whisper_bridge.l1_entities.config import AppConfig
from whisper_bridge.l1_entities.whisper_models import DEFAULT_MODEL_FILENAME
from whisper_bridge.l2_use_cases.health_check_use_case import HealthCheckUseCase
from whisper_bridge.l2_use_cases.ports.model_catalog import ModelCatalog
from whisper_bridge.l2_use_cases.ports.model_downloader import ModelDownloader
from whisper_bridge.l2_use_cases.ports.notifier import Notifier
from whisper_bridge.l2_use_cases.ports.settings_store import SettingsStore
from whisper_bridge.l2_use_cases.ports.whisper_executable import WhisperExecutable
from whisper_bridge.l2_use_cases.transcribe_use_case import TranscribeUseCase
from whisper_bridge.l3_interface_adapters.controllers.whisper_bridge import (
    DOWNLOAD_PROGRESS_CHANNEL,
    WhisperBridge,
)
from whisper_bridge.l3_interface_adapters.gateways.executable_locator import locate_executable
from whisper_bridge.l3_interface_adapters.gateways.fs_model_catalog import FsModelCatalog
from whisper_bridge.l3_interface_adapters.gateways.hf_model_downloader import HfModelDownloader
from whisper_bridge.l3_interface_adapters.gateways.paths import SETTINGS_FILENAME
from whisper_bridge.l3_interface_adapters.gateways.subprocess_whisper_cli import SubprocessWhisperCli
from whisper_bridge.l3_interface_adapters.gateways.yaml_settings_store import YamlSettingsStore


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(self, config: AppConfig, notifier: Notifier) -> None:
        self.config = config
        self.notifier = notifier

        library = Path(config.paths.library)
        bundled = Path(config.paths.bundled)
        timeout = config.process_timeout

        self.default_model = bundled / 'models' / DEFAULT_MODEL_FILENAME
        self.sample_file = bundled / 'samples' / 'jfk.wav'

        self.settings: SettingsStore = YamlSettingsStore(
            library / SETTINGS_FILENAME,
            library_path=library,
            cache_path=Path(config.paths.cache),
        )
        self.executable: WhisperExecutable = SubprocessWhisperCli(locate_executable(library, bundled))
        self.catalog: ModelCatalog = FsModelCatalog(self.settings)
        self.downloader: ModelDownloader = HfModelDownloader(
            on_progress=lambda percent: notifier.send(DOWNLOAD_PROGRESS_CHANNEL, percent),
        )

        self.transcribe_uc = TranscribeUseCase(
            executable=self.executable,
            catalog=self.catalog,
            settings=self.settings,
            default_model=self.default_model,
            timeout=timeout,
        )
        self.health_uc = HealthCheckUseCase(
            executable=self.executable,
            catalog=self.catalog,
            settings=self.settings,
            sample_file=self.sample_file,
            default_model=self.default_model,
            timeout=timeout,
        )
        self.bridge = WhisperBridge(
            settings=self.settings,
            health=self.health_uc,
            transcriber=self.transcribe_uc,
            notifier=notifier,
            downloader=self.downloader,
        )
