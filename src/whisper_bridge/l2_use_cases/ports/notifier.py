"""Port: out-of-band notifications to the host application."""

from __future__ import annotations

from typing import Any, Protocol


class Notifier(Protocol):
    """Fire-and-forget event sink. Implementations must not raise."""

    def send(self, channel: str, payload: Any) -> None:
        ...
