"""JSON-lines server — exposes WhisperBridge channels over a pair of text streams."""

from __future__ import annotations

import logging
import threading
from typing import Any, TextIO

from pydantic import BaseModel, ValidationError

from whisper_bridge.l1_entities.errors import WhisperBridgeError
from whisper_bridge.l3_interface_adapters.controllers.whisper_bridge import WhisperBridge
from whisper_bridge.l4_frameworks_and_drivers.messages import BridgeEvent, BridgeRequest, BridgeResponse

log = logging.getLogger('wb.server')


class JsonLinesWriter:
    """Serializes messages onto *stream*, one JSON object per line.

    Progress events arrive from the process reader thread while the main thread
    may be writing a response, so writes are guarded by a lock.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def write(self, message: BaseModel) -> None:
        line = message.model_dump_json()
        with self._lock:
            self._stream.write(line + '\n')
            self._stream.flush()

    def send(self, channel: str, payload: Any) -> None:
        """Notifier port: emit an out-of-band event."""
        try:
            self.write(BridgeEvent(event=channel, payload=payload))
        except (OSError, ValueError):
            log.warning('Dropped %s event', channel, exc_info=True)


def serve(bridge: WhisperBridge, stdin: TextIO, writer: JsonLinesWriter) -> int:
    """Handle requests from *stdin* one at a time until EOF. Returns the number handled."""
    log.info('Serving channels: %s', ', '.join(bridge.channels))
    handled = 0
    for raw in stdin:
        line = raw.strip()
        if not line:
            continue
        try:
            request = BridgeRequest.model_validate_json(line)
        except ValidationError as e:
            log.warning('Malformed request: %s', line[:200])
            writer.write(BridgeResponse(id=None, error=f'Malformed request: {e.error_count()} validation error(s)'))
            continue

        try:
            result = bridge.dispatch(request.channel, *request.args)
        except KeyError as e:
            writer.write(BridgeResponse(id=request.id, error=str(e.args[0])))
        except TypeError as e:
            writer.write(BridgeResponse(id=request.id, error=f'Bad arguments for {request.channel}: {e}'))
        except (WhisperBridgeError, OSError) as e:
            log.error('Request %s on %s failed: %s', request.id, request.channel, e, exc_info=True)
            writer.write(BridgeResponse(id=request.id, error=str(e)))
        else:
            writer.write(BridgeResponse(id=request.id, result=result))
        handled += 1
    log.info('Input closed after %d requests', handled)
    return handled
