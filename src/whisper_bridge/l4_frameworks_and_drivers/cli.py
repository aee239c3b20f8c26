"""CLI entry point for whisper-bridge."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click

from whisper_bridge import __version__


class EchoNotifier:
    """Notifier port for one-shot commands: events go to stderr as text."""

    def send(self, channel: str, payload: Any) -> None:
        if channel.endswith('progress'):
            click.echo(f'\r{channel}: {payload}%', nl=False, err=True)
            if payload == 100:
                click.echo('', err=True)
        elif isinstance(payload, dict) and payload.get('type') == 'error':
            click.echo(f'Error: {payload.get("message", "")}', err=True)
        else:
            click.echo(f'{channel}: {payload}', err=True)


def _emit(result: Any) -> None:
    if result is None:
        sys.exit(1)
    click.echo(json.dumps(result, indent=2, ensure_ascii=False))


def _build_container(ctx: click.Context, notifier: Any):
    from whisper_bridge.l4_frameworks_and_drivers.container import (  # noqa: PLC0415
        DependencyContainer,
    )

    return DependencyContainer(ctx.obj['config'], notifier)


@click.group()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True),
    help='Path to YAML config file.',
)
@click.option(
    '--log-dir',
    default=None,
    type=click.Path(file_okay=False),
    help='Write a debug log into this directory.',
)
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config_path, log_dir):
    """whisper-bridge -- drive a local whisper.cpp executable for a host application."""
    import yaml  # noqa: PLC0415
    from pydantic import ValidationError  # noqa: PLC0415

    from whisper_bridge.l1_entities.errors import WhisperBridgeError  # noqa: PLC0415
    from whisper_bridge.l3_interface_adapters.gateways.yaml_config_loader import (  # noqa: PLC0415
        YamlConfigLoader,
    )
    from whisper_bridge.l4_frameworks_and_drivers.config import (  # noqa: PLC0415
        build_app_config,
    )

    try:
        raw = YamlConfigLoader().load_raw(config_path)
        config = build_app_config(raw)
    except (FileNotFoundError, yaml.YAMLError, ValidationError, WhisperBridgeError) as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)

    if log_dir:
        from whisper_bridge.l4_frameworks_and_drivers.logging_setup import (  # noqa: PLC0415 -- deferred: logging only
            setup_file_logging,
        )

        setup_file_logging(Path(log_dir))

    ctx.ensure_object(dict)
    ctx.obj['config'] = config


@cli.command()
@click.pass_context
def serve(ctx):
    """Serve bridge channels as JSON lines on stdin/stdout."""
    from whisper_bridge.l4_frameworks_and_drivers.server import (  # noqa: PLC0415 -- deferred: server only
        JsonLinesWriter,
        serve as serve_lines,
    )

    writer = JsonLinesWriter(sys.stdout)
    container = _build_container(ctx, writer)
    serve_lines(container.bridge, sys.stdin, writer)


@cli.command('config')
@click.pass_context
def show_config(ctx):
    """Rescan models, check the executable, and print the configuration."""
    _emit(_build_container(ctx, EchoNotifier()).bridge.get_config())


@cli.command()
@click.pass_context
def check(ctx):
    """Transcribe the bundled sample to verify the installation."""
    result = _build_container(ctx, EchoNotifier()).bridge.check()
    click.echo(result['log'].strip(), err=True)
    _emit(result)
    if not result['success']:
        sys.exit(1)


@cli.command()
@click.pass_context
def models(ctx):
    """List models the bridge can download."""
    from whisper_bridge.l1_entities.whisper_models import WHISPER_MODELS_OPTIONS  # noqa: PLC0415
    from whisper_bridge.l2_use_cases.health_check_use_case import models_dir_for  # noqa: PLC0415

    container = _build_container(ctx, EchoNotifier())
    installed = {m.name for m in container.catalog.resolve_models(models_dir_for(container.settings))}
    for option in WHISPER_MODELS_OPTIONS:
        mark = '*' if option.name in installed else ' '
        click.echo(f'{mark} {option.name:<22} {option.type:<8} {option.size}')


@cli.command('set-model')
@click.argument('name')
@click.pass_context
def set_model(ctx, name):
    """Select a downloaded model, reverting if it fails the sample check."""
    _emit(_build_container(ctx, EchoNotifier()).bridge.set_model(name))


@cli.command('set-service')
@click.argument('name')
@click.pass_context
def set_service(ctx, name):
    """Select the transcription service (local, cloudflare, azure, openai)."""
    _emit(_build_container(ctx, EchoNotifier()).bridge.set_service(name))


@cli.command('download-model')
@click.argument('name')
@click.pass_context
def download_model(ctx, name):
    """Download a catalog model into the library."""
    _emit(_build_container(ctx, EchoNotifier()).bridge.download_model(name))


@cli.command()
@click.argument('audio_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--force', is_flag=True, help='Ignore a cached result for this file name.')
@click.option('--extra', multiple=True, help='Extra argument passed to the executable (repeatable).')
@click.pass_context
def transcribe(ctx, audio_file, force, extra):
    """Transcribe a 16 kHz WAV file and print the whisper JSON output."""
    bridge = _build_container(ctx, EchoNotifier()).bridge
    _emit(bridge.transcribe({'file': str(Path(audio_file).resolve())}, {'force': force, 'extra': list(extra)}))
