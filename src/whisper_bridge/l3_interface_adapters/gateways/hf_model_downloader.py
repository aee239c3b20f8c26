"""Gateway: HuggingFace model downloader — implements ModelDownloader port."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from huggingface_hub import hf_hub_download

from whisper_bridge.l1_entities.errors import ModelResolutionError
from whisper_bridge.l1_entities.whisper_models import WHISPER_CPP_REPO, find_model_option

log = logging.getLogger('wb.whisper')


class _DownloadProgress:
    """tqdm stand-in handed to ``hf_hub_download``: turns byte counts into whole percentages.

    Subclasses bind ``report``; a percentage is reported once, however many
    chunks land inside it. Display-only tqdm calls are accepted and ignored.
    """

    report: Callable[[int], None]

    def __init__(self, *args, total: int | None = None, initial: int = 0, **kwargs) -> None:
        self.total = total or 0
        self.n = initial
        self._percent: int | None = None
        self._publish()

    def _publish(self) -> None:
        if self.total <= 0:
            return
        percent = min(self.n * 100 // self.total, 100)
        if percent != self._percent:
            self._percent = percent
            type(self).report(percent)

    def update(self, n: int = 1) -> None:
        self.n += n
        self._publish()

    def __getattr__(self, name: str) -> Callable[..., None]:
        # close, refresh, set_description and friends
        return lambda *a, **kw: None

    def __enter__(self) -> _DownloadProgress:
        return self

    def __exit__(self, *exc) -> None:
        return None


def progress_class(callback: Callable[[int], None]) -> type[_DownloadProgress]:
    """A ``tqdm_class`` for ``hf_hub_download`` that reports percentages to *callback*."""
    return type('DownloadProgress', (_DownloadProgress,), {'report': staticmethod(callback)})


class HfModelDownloader:
    """Fetches catalog models from the whisper.cpp HF repo into the models directory."""

    def __init__(self, on_progress: Callable[[int], None] | None = None) -> None:
        self._on_progress = on_progress

    def download(self, model_name: str, models_dir: Path) -> str:
        option = find_model_option(model_name)
        if option is None:
            raise ModelResolutionError(f'Unknown whisper model: {model_name}')

        models_dir.mkdir(parents=True, exist_ok=True)
        local_path = models_dir / option.name
        if local_path.exists():
            log.info('Model %s already present at %s', option.name, local_path)
            return str(local_path)

        kwargs: dict = dict(repo_id=WHISPER_CPP_REPO, filename=option.name, local_dir=models_dir)
        if self._on_progress is not None:
            kwargs['tqdm_class'] = progress_class(self._on_progress)
        log.info('Downloading %s (%s) into %s', option.name, option.size, models_dir)
        try:
            return hf_hub_download(**kwargs)
        except Exception as exc:
            raise ModelResolutionError(f'Failed to download {option.name}: {exc}') from exc
