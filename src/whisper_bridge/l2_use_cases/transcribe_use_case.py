"""Use case: run one transcription job through the whisper executable."""

from __future__ import annotations

import json
import logging
import re
import time
from collections import deque
from collections.abc import Callable
from pathlib import Path

from whisper_bridge.l1_entities.errors import InvalidRequestError, TranscriptionFailedError
from whisper_bridge.l1_entities.transcription import (
    TranscribeOptions,
    TranscriptionRequest,
    WhisperOutput,
)
from whisper_bridge.l2_use_cases.ports.model_catalog import ModelCatalog
from whisper_bridge.l2_use_cases.ports.settings_store import SettingsStore
from whisper_bridge.l2_use_cases.ports.whisper_executable import WhisperExecutable

log = logging.getLogger('wb.whisper')

PROGRESS_MARKER = 'whisper_print_progress_callback'
_PERCENT_RE = re.compile(r'(\d+)%')


def parse_progress(line: str) -> int | None:
    """Extract the percentage from a progress line; None if *line* is not one.

    Lines carrying the marker but no ``NN%`` report 0.
    """
    if not line.startswith(PROGRESS_MARKER):
        return None
    match = _PERCENT_RE.search(line)
    if match is None:
        return 0
    return min(int(match.group(1)), 100)


def build_arguments(input_file: str, model: str, output_base: str, extra: list[str] | None = None) -> list[str]:
    """Argument vector for one job. *output_base* has no extension — whisper appends ``.json``."""
    return [
        '--file',
        input_file,
        '--model',
        model,
        '--output-json',
        '--output-file',
        output_base,
        '-pp',
        '--split-on-word',
        '--max-len',
        '1',
        *(extra or []),
    ]


def read_artifact(path: Path) -> WhisperOutput:
    try:
        return json.loads(path.read_text(encoding='utf-8'))
    except (OSError, ValueError) as exc:
        raise TranscriptionFailedError(f'Unreadable transcription output {path}: {exc}') from exc


class TranscribeUseCase:
    """Validates a request, consults the artifact cache, and runs the executable.

    Each call is one linear job; concurrent calls share nothing but the cache
    directory. A cached artifact is keyed by the input's basename only, so two
    different inputs with the same name will return each other's results unless
    ``force`` is set.
    """

    def __init__(
        self,
        executable: WhisperExecutable,
        catalog: ModelCatalog,
        settings: SettingsStore,
        default_model: Path,
        timeout: float,
    ) -> None:
        self._executable = executable
        self._catalog = catalog
        self._settings = settings
        self._default_model = default_model
        self._timeout = timeout

    def active_model(self) -> str:
        return self._catalog.current_model() or str(self._default_model)

    def execute(
        self,
        request: TranscriptionRequest,
        options: TranscribeOptions | None = None,
        on_progress: Callable[[int], None] | None = None,
    ) -> WhisperOutput:
        log.debug('transcribing from local')
        options = options or TranscribeOptions()

        if request.file is None and request.blob is None:
            raise InvalidRequestError('No file or blob provided')
        if request.file is not None and request.blob is not None:
            raise InvalidRequestError('Provide either a file or a blob, not both')

        model = self.active_model()
        cache_dir = self._settings.cache_path()

        if request.blob is not None:
            fmt = request.blob.format
            if fmt != 'wav':
                raise InvalidRequestError('Only wav format is supported')
            input_path = cache_dir / f'{time.time_ns() // 1_000_000}.{fmt}'
            cache_dir.mkdir(parents=True, exist_ok=True)
            input_path.write_bytes(request.blob.data)
        else:
            input_path = Path(request.file)

        output_base = cache_dir / input_path.stem
        output_file = cache_dir / f'{input_path.stem}.json'

        log.info('Trying to transcribe %s to %s', input_path, output_file)
        if output_file.exists() and not options.force:
            log.info('File %s already exists', output_file)
            return read_artifact(output_file)

        args = build_arguments(str(input_path), model, str(output_base), options.extra)
        stderr_tail: deque[str] = deque(maxlen=5)

        def _on_stderr(line: str) -> None:
            log.debug('stderr: %s', line)
            stderr_tail.append(line)
            progress = parse_progress(line)
            if progress is None or on_progress is None:
                return
            try:
                on_progress(progress)
            except Exception:
                log.warning('Progress callback failed', exc_info=True)

        result = self._executable.run(args, timeout=self._timeout, on_stderr_line=_on_stderr)
        if result.timed_out:
            log.warning('transcribe process killed after %.0fs', self._timeout)
        log.info('transcribe process exited with code %s', result.returncode)
        if result.stdout:
            log.debug('stdout: %s', result.stdout)

        if output_file.exists():
            return read_artifact(output_file)
        log.error('Transcription failed, no artifact at %s; stderr tail: %s', output_file, list(stderr_tail))
        raise TranscriptionFailedError('Transcription failed')
