"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import json
import stat
import sys
import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from whisper_bridge.l1_entities.config import WhisperConfig
from whisper_bridge.l1_entities.errors import ProcessSpawnError
from whisper_bridge.l2_use_cases.ports.whisper_executable import ProcessResult

SAMPLE_OUTPUT = {
    'systeminfo': 'AVX = 1',
    'model': {'type': 'base'},
    'result': {'language': 'en'},
    'transcription': [
        {'timestamps': {'from': '00:00:00,000', 'to': '00:00:00,320'}, 'text': ' And'},
        {'timestamps': {'from': '00:00:00,320', 'to': '00:00:00,370'}, 'text': ' so'},
    ],
}

# --- Protocol-conforming Fakes ---


class FakeSettingsStore:
    """In-memory settings store rooted in a temp directory."""

    def __init__(self, root: Path, data: dict | None = None) -> None:
        self._root = root
        self.data: dict[str, Any] = dict(data or {})
        self.set_calls: list[tuple[str, Any]] = []

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.set_calls.append((key, value))
        self.data[key] = value

    def whisper_config(self) -> WhisperConfig:
        return WhisperConfig.model_validate(
            {k.removeprefix('whisper.'): v for k, v in self.data.items() if k.startswith('whisper.')}
        )

    def library_path(self) -> Path:
        return self._root / 'library'

    def cache_path(self) -> Path:
        path = self._root / 'cache'
        path.mkdir(parents=True, exist_ok=True)
        return path


class FakeExecutable:
    """Fake whisper executable. Writes the JSON artifact the real binary would."""

    def __init__(
        self,
        path: Path = Path('/fake/whisper/main'),
        help_text: str = 'usage: main [options] file0.wav file1.wav ...',
        output: dict | None = None,
        stderr_lines: list[str] | None = None,
        write_artifact: bool = True,
    ) -> None:
        self._path = path
        self.help_text = help_text
        self.output = SAMPLE_OUTPUT if output is None else output
        self.stderr_lines = list(stderr_lines or [])
        self.write_artifact = write_artifact
        self.spawn_error: str | None = None
        self.timed_out = False
        self.returncode = 0
        self.calls: list[list[str]] = []
        self.timeouts: list[float] = []

    @property
    def path(self) -> Path:
        return self._path

    @property
    def transcribe_calls(self) -> list[list[str]]:
        return [c for c in self.calls if c != ['--help']]

    def run(
        self,
        args: list[str],
        *,
        timeout: float,
        on_stderr_line: Callable[[str], None] | None = None,
    ) -> ProcessResult:
        self.calls.append(list(args))
        self.timeouts.append(timeout)
        if self.spawn_error is not None:
            raise ProcessSpawnError(self.spawn_error)
        if args == ['--help']:
            return ProcessResult(returncode=0, stdout=self.help_text, timed_out=self.timed_out)

        for line in self.stderr_lines:
            if on_stderr_line is not None:
                on_stderr_line(line)
        if self.write_artifact:
            output_base = args[args.index('--output-file') + 1]
            Path(f'{output_base}.json').write_text(json.dumps(self.output), encoding='utf-8')
        return ProcessResult(
            returncode=self.returncode,
            stdout='whisper_full_with_state: done',
            stderr='\n'.join(self.stderr_lines),
            timed_out=self.timed_out,
        )


class FakeNotifier:
    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    def send(self, channel: str, payload: Any) -> None:
        self.events.append((channel, payload))

    def on(self, channel: str) -> list[Any]:
        return [p for c, p in self.events if c == channel]


class FakeDownloader:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Path]] = []
        self.error: Exception | None = None

    def download(self, model_name: str, models_dir: Path) -> str:
        self.calls.append((model_name, models_dir))
        if self.error is not None:
            raise self.error
        models_dir.mkdir(parents=True, exist_ok=True)
        path = models_dir / model_name
        path.write_bytes(b'ggml')
        return str(path)


# --- Standard Fixtures ---


@pytest.fixture
def fake_settings(tmp_path: Path) -> FakeSettingsStore:
    return FakeSettingsStore(tmp_path)


@pytest.fixture
def fake_executable() -> FakeExecutable:
    return FakeExecutable()


@pytest.fixture
def fake_notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def models_dir(fake_settings: FakeSettingsStore) -> Path:
    d = fake_settings.library_path() / 'whisper' / 'models'
    d.mkdir(parents=True)
    return d


@pytest.fixture
def make_stub(tmp_path: Path) -> Callable[[str], Path]:
    """Write an executable Python script standing in for the whisper binary."""

    def _make(body: str, name: str = 'main') -> Path:
        path = tmp_path / 'bin' / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f'#!{sys.executable}\n' + textwrap.dedent(body), encoding='utf-8')
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make
