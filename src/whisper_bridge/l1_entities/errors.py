"""Domain error types."""


class WhisperBridgeError(Exception):
    """Base class for every error surfaced to callers."""


class InvalidRequestError(WhisperBridgeError):
    """Raised when a transcription request is rejected before any process is spawned."""


class ExecutableUnavailableError(WhisperBridgeError):
    """Raised when the whisper executable fails its ``--help`` smoke test."""


class ProcessSpawnError(WhisperBridgeError):
    """Raised when the OS refuses to launch the whisper executable."""


class TranscriptionFailedError(WhisperBridgeError):
    """Raised when the process ended without writing its JSON artifact."""


class ModelResolutionError(WhisperBridgeError):
    """Raised when a whisper model cannot be resolved to a local path."""


class SettingsError(WhisperBridgeError):
    """Raised when persisted settings cannot be read or written."""
