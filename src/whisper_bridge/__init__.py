"""whisper-bridge: host-facing wrapper around a local whisper.cpp executable."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version('whisper-bridge')
except PackageNotFoundError:  # pragma: no cover -- running from a source checkout
    __version__ = '0.0.0'
