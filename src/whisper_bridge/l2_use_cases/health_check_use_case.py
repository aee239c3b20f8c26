"""Use case: verify the whisper executable is runnable and produces output."""

from __future__ import annotations

import logging
from pathlib import Path

from whisper_bridge.l1_entities.errors import ExecutableUnavailableError, WhisperBridgeError
from whisper_bridge.l1_entities.transcription import CheckResult
from whisper_bridge.l2_use_cases.ports.model_catalog import ModelCatalog
from whisper_bridge.l2_use_cases.ports.settings_store import SettingsStore
from whisper_bridge.l2_use_cases.ports.whisper_executable import WhisperExecutable
from whisper_bridge.l2_use_cases.transcribe_use_case import build_arguments

log = logging.getLogger('wb.whisper')

SAMPLE_STEM = 'jfk'


def models_dir_for(settings: SettingsStore) -> Path:
    return settings.library_path() / 'whisper' / 'models'


class HealthCheckUseCase:
    """Cheap ``--help`` smoke test plus an end-to-end run of the bundled sample.

    ``initialize()`` also rescans the model catalog, so callers re-run it before
    most operations to keep the persisted configuration fresh.
    """

    def __init__(
        self,
        executable: WhisperExecutable,
        catalog: ModelCatalog,
        settings: SettingsStore,
        sample_file: Path,
        default_model: Path,
        timeout: float,
    ) -> None:
        self._executable = executable
        self._catalog = catalog
        self._settings = settings
        self._sample_file = sample_file
        self._default_model = default_model
        self._timeout = timeout

    def initialize(self) -> bool:
        """Rescan models, then require ``--help`` output starting with ``usage:``.

        Raises:
            ExecutableUnavailableError: spawn failure, timeout, or unexpected output.
        """
        self._catalog.resolve_models(models_dir_for(self._settings))

        log.debug('Checking whisper command: %s --help', self._executable.path)
        try:
            result = self._executable.run(['--help'], timeout=self._timeout)
        except WhisperBridgeError as exc:
            log.error('whisper --help failed: %s', exc)
            raise ExecutableUnavailableError(f'Whisper check failed: {exc}') from exc

        if result.stderr:
            log.debug('stderr: %s', result.stderr)
        if result.stdout:
            log.debug('stdout: %s', result.stdout)

        output = (result.stdout or result.stderr).strip()
        if output.startswith('usage:'):
            return True
        if result.timed_out:
            raise ExecutableUnavailableError(f'Whisper check failed: timed out after {self._timeout:.0f}s')
        raise ExecutableUnavailableError(
            f'Whisper check failed: unknown error (exit code {result.returncode})',
        )

    def check(self) -> CheckResult:
        """Transcribe the bundled sample into the cache dir. Never raises."""
        error = ''
        stdout = stderr = ''
        ran = False
        try:
            output_file = self._settings.cache_path() / f'{SAMPLE_STEM}.json'
            output_file.unlink(missing_ok=True)
            self.initialize()
            model = self._catalog.current_model() or str(self._default_model)
            output_file.parent.mkdir(parents=True, exist_ok=True)
            args = build_arguments(
                str(self._sample_file),
                model,
                str(output_file.with_suffix('')),
            )
            log.debug('Checking whisper command: %s %s', self._executable.path, ' '.join(args))
            result = self._executable.run(args, timeout=self._timeout)
            ran = True
            stdout, stderr = result.stdout, result.stderr
            if result.timed_out:
                error = f'Process timed out after {self._timeout:.0f}s'
        except (WhisperBridgeError, OSError) as exc:
            log.error('Whisper check failed: %s', exc)
            error = str(exc)

        if stderr:
            log.debug('stderr: %s', stderr)
        success = ran and output_file.exists()
        return CheckResult(success=success, log=f'{error}\n{stderr}\n{stdout}')
