"""Static catalog of whisper.cpp models the bridge knows how to use."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

WHISPER_CPP_REPO = 'ggerganov/whisper.cpp'
_RESOLVE_URL = f'https://huggingface.co/{WHISPER_CPP_REPO}/resolve/main'

DEFAULT_MODEL_FILENAME = 'ggml-base.en-q5_1.bin'


class WhisperModelOption(BaseModel):
    """One downloadable model — ``name`` is also the on-disk filename."""

    model_config = ConfigDict(frozen=True)

    type: str
    name: str
    size: str
    url: str


WHISPER_MODELS_OPTIONS: tuple[WhisperModelOption, ...] = tuple(
    WhisperModelOption(type=type_, name=name, size=size, url=f'{_RESOLVE_URL}/{name}')
    for type_, name, size in (
        ('tiny', 'ggml-tiny.en.bin', '75 MB'),
        ('base', 'ggml-base.en.bin', '142 MB'),
        ('small', 'ggml-small.en.bin', '466 MB'),
        ('medium', 'ggml-medium.en.bin', '1.5 GB'),
        ('large', 'ggml-large-v3.bin', '3.1 GB'),
    )
)


def find_model_option(name: str) -> WhisperModelOption | None:
    """Return the catalog entry whose filename is *name*, if any."""
    for option in WHISPER_MODELS_OPTIONS:
        if option.name == name:
            return option
    return None
