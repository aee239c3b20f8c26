"""Port: the external whisper.cpp executable."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class ProcessResult:
    """What a finished (or killed) whisper process left behind."""

    returncode: int | None
    stdout: str = ''
    stderr: str = ''
    timed_out: bool = False


class WhisperExecutable(Protocol):
    """Abstract handle on the executable. Zero subprocess types leak through."""

    @property
    def path(self) -> Path:
        """Location chosen for all invocations."""
        ...

    def run(
        self,
        args: list[str],
        *,
        timeout: float,
        on_stderr_line: Callable[[str], None] | None = None,
    ) -> ProcessResult:
        """Run to completion. Raises ProcessSpawnError if the OS cannot launch it."""
        ...
