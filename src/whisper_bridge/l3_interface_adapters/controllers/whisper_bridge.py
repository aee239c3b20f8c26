"""WhisperBridge — exposes the use cases as named request channels for a host app."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from whisper_bridge.l1_entities.config import WHISPER_SERVICES, WhisperConfig
from whisper_bridge.l1_entities.errors import WhisperBridgeError
from whisper_bridge.l1_entities.transcription import TranscribeOptions, TranscriptionRequest, WhisperOutput
from whisper_bridge.l2_use_cases.health_check_use_case import HealthCheckUseCase, models_dir_for
from whisper_bridge.l2_use_cases.ports.model_downloader import ModelDownloader
from whisper_bridge.l2_use_cases.ports.notifier import Notifier
from whisper_bridge.l2_use_cases.ports.settings_store import SettingsStore
from whisper_bridge.l2_use_cases.transcribe_use_case import TranscribeUseCase

log = logging.getLogger('wb.bridge')

NOTIFICATION_CHANNEL = 'on-notification'
PROGRESS_CHANNEL = 'whisper-on-progress'
DOWNLOAD_PROGRESS_CHANNEL = 'whisper-on-download-progress'


class WhisperBridge:
    """Translates host requests into use-case calls and failures into notifications.

    Handlers that change settings revert them when validation fails. Apart from
    ``dispatch`` on an unknown channel, no handler raises: errors are reported
    on ``on-notification`` and the handler returns None.
    """

    def __init__(
        self,
        settings: SettingsStore,
        health: HealthCheckUseCase,
        transcriber: TranscribeUseCase,
        notifier: Notifier,
        downloader: ModelDownloader | None = None,
    ) -> None:
        self._settings = settings
        self._health = health
        self._transcriber = transcriber
        self._notifier = notifier
        self._downloader = downloader

        self._handlers: dict[str, Callable[..., Any]] = {
            'whisper-config': self.get_config,
            'whisper-set-model': self.set_model,
            'whisper-set-service': self.set_service,
            'whisper-check': self.check,
            'whisper-transcribe': self.transcribe,
            'whisper-download-model': self.download_model,
        }

    @property
    def channels(self) -> list[str]:
        return list(self._handlers)

    def dispatch(self, channel: str, *args: Any) -> Any:
        """Route *channel* to its handler. Raises KeyError for unknown channels."""
        try:
            handler = self._handlers[channel]
        except KeyError:
            raise KeyError(f'Unknown channel: {channel}') from None
        log.debug('Dispatch %s (%d args)', channel, len(args))
        return handler(*args)

    def _config_payload(self, **extra: Any) -> dict:
        return {**self._settings.whisper_config().model_dump(mode='json'), **extra}

    def _notify_error(self, message: str) -> None:
        self._notifier.send(NOTIFICATION_CHANNEL, {'type': 'error', 'message': message})

    def get_config(self) -> dict:
        try:
            self._health.initialize()
            ready = True
        except Exception as e:
            log.warning('Whisper not ready: %s', e)
            ready = False
        try:
            config = self._settings.whisper_config()
        except WhisperBridgeError as e:
            log.error('Unreadable whisper settings, reporting defaults: %s', e)
            config, ready = WhisperConfig(), False
        return {**config.model_dump(mode='json'), 'ready': ready}

    def set_model(self, model: str) -> dict | None:
        try:
            original = self._settings.get('whisper.model')
            self._settings.set('whisper.model', model)
        except WhisperBridgeError as e:
            log.error('Selecting model %s failed: %s', model, e)
            self._notify_error(str(e))
            return None
        try:
            result = self._health.check()
            if not result.success:
                raise RuntimeError(result.log.strip() or 'Whisper check failed')
            return self._config_payload(ready=True)
        except Exception as e:
            log.error('Switching to model %s failed, reverting to %s', model, original, exc_info=True)
            self._settings.set('whisper.model', original)
            self._notify_error(str(e))
            return None

    def set_service(self, service: str) -> dict | None:
        if service not in WHISPER_SERVICES:
            self._notify_error('Unknown service')
            return None
        try:
            if service == 'local':
                self._health.initialize()
            self._settings.set('whisper.service', service)
            return self._config_payload()
        except Exception as e:
            log.error('Switching to service %s failed', service, exc_info=True)
            self._notify_error(str(e))
            return None

    def check(self) -> dict:
        return self._health.check().model_dump()

    def transcribe(self, params: dict, options: dict | None = None) -> WhisperOutput | None:
        def _on_progress(progress: int) -> None:
            self._notifier.send(PROGRESS_CHANNEL, progress)

        try:
            request = TranscriptionRequest.model_validate(params)
            opts = TranscribeOptions.model_validate(options or {})
            return self._transcriber.execute(request, opts, on_progress=_on_progress)
        except Exception as e:
            log.error('Transcription failed: %s', e, exc_info=True)
            self._notify_error(str(e))
            return None

    def download_model(self, model_name: str) -> dict | None:
        if self._downloader is None:
            self._notify_error('Model download is not available')
            return None
        try:
            self._downloader.download(model_name, models_dir_for(self._settings))
            self._health.initialize()
            return self._config_payload(ready=True)
        except Exception as e:
            log.error('Downloading %s failed', model_name, exc_info=True)
            self._notify_error(str(e))
            return None
