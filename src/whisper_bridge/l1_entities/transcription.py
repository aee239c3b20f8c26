"""Transcription request/result entities."""

from __future__ import annotations

import base64
import binascii
from typing import Any

from pydantic import BaseModel, Field, field_validator

WhisperOutput = dict[str, Any]


class AudioBlob(BaseModel):
    """In-memory audio with a declared MIME type, e.g. ``audio/wav``."""

    type: str
    data: bytes

    @field_validator('data', mode='before')
    @classmethod
    def _decode_base64(cls, value: Any) -> Any:
        """JSON transports carry the payload as base64 text."""
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except binascii.Error as exc:
                raise ValueError(f'blob data is not valid base64: {exc}') from exc
        return value

    @property
    def format(self) -> str:
        """MIME subtype — empty when the type has no ``/``."""
        _, _, subtype = self.type.partition('/')
        return subtype


class TranscriptionRequest(BaseModel):
    file: str | None = None
    blob: AudioBlob | None = None


class TranscribeOptions(BaseModel):
    force: bool = False
    extra: list[str] = Field(default_factory=list)


class CheckResult(BaseModel):
    """Outcome of running the bundled sample through the executable."""

    success: bool
    log: str = ''
