"""JSON-lines wire messages — contracts between the host application and the server."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class BridgeRequest(BaseModel):
    """One line from the host: invoke *channel* with positional *args*."""

    id: int | str
    channel: str
    args: list[Any] = Field(default_factory=list)


class BridgeResponse(BaseModel):
    """Reply to a request with the same id. ``error`` is set only for transport-level failures."""

    id: int | str | None
    result: Any = None
    error: str | None = None


class BridgeEvent(BaseModel):
    """Out-of-band notification (progress, errors) not tied to a request id."""

    event: str
    payload: Any = None
