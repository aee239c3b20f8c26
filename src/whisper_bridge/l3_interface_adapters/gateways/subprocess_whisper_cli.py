"""Gateway: whisper.cpp command-line executable — implements WhisperExecutable port."""

from __future__ import annotations

import logging
import shlex
import subprocess  # noqa: S404 -- intentional: runs the whisper binary with a fixed arg list, not shell=True
import threading
from collections.abc import Callable
from pathlib import Path
from typing import IO

from whisper_bridge.l1_entities.errors import ProcessSpawnError
from whisper_bridge.l2_use_cases.ports.whisper_executable import ProcessResult

log = logging.getLogger('wb.whisper')


def _pump(stream: IO[str], sink: list[str], on_line: Callable[[str], None] | None) -> None:
    """Drain *stream* line by line into *sink*, forwarding each line to *on_line*."""
    for raw in stream:
        line = raw.rstrip('\r\n')
        sink.append(line)
        if on_line is not None:
            try:
                on_line(line)
            except Exception:
                log.warning('stderr line handler failed', exc_info=True)
    stream.close()


class SubprocessWhisperCli:
    """Runs the executable as a child process with an argument vector.

    stdout and stderr are drained on daemon threads so a chatty process can
    never block on a full pipe. A process still alive at the deadline is
    killed and reported with ``timed_out=True``.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def run(
        self,
        args: list[str],
        *,
        timeout: float,
        on_stderr_line: Callable[[str], None] | None = None,
    ) -> ProcessResult:
        cmd = [str(self._path), *args]
        log.info('Running command: %s', shlex.join(cmd))
        try:
            proc = subprocess.Popen(  # noqa: S603
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding='utf-8',
                errors='replace',
            )
        except OSError as exc:
            raise ProcessSpawnError(f'Failed to launch {self._path}: {exc}') from exc

        stdout_lines: list[str] = []
        stderr_lines: list[str] = []
        readers = [
            threading.Thread(target=_pump, args=(proc.stdout, stdout_lines, None), daemon=True),
            threading.Thread(target=_pump, args=(proc.stderr, stderr_lines, on_stderr_line), daemon=True),
        ]
        for reader in readers:
            reader.start()

        timed_out = False
        try:
            returncode = proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            timed_out = True
            log.warning('Killing %s after %.0fs timeout', self._path.name, timeout)
            proc.kill()
            returncode = proc.wait()

        for reader in readers:
            reader.join()

        log.debug('%s exited with code %s', self._path.name, returncode)
        return ProcessResult(
            returncode=returncode,
            stdout='\n'.join(stdout_lines),
            stderr='\n'.join(stderr_lines),
            timed_out=timed_out,
        )
