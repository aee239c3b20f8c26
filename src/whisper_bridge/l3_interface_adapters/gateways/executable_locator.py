"""Gateway: pick the whisper executable once, at construction time."""

from __future__ import annotations

import logging
from pathlib import Path

log = logging.getLogger('wb.whisper')

EXECUTABLE_NAME = 'main'


def locate_executable(library_path: Path, bundled_dir: Path) -> Path:
    """Prefer ``<library>/whisper/main`` when present, else the bundled binary.

    Neither path is required to exist; a missing binary surfaces as a spawn error.
    """
    custom = library_path / 'whisper' / EXECUTABLE_NAME
    if custom.exists():
        log.info('Using custom whisper executable %s', custom)
        return custom
    return bundled_dir / EXECUTABLE_NAME
