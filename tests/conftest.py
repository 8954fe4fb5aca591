"""Shared pytest fixtures and configuration."""

from pathlib import Path

from pytest import fixture

from devinit_client.config import ConfigState

from .fixtures.fakes import RecordingInvoker, ScriptedPrompter, StaticProvider


@fixture
def provider():
    """Provide a configuration provider with an explicit executable path."""
    return StaticProvider()


@fixture
def config_state(provider):
    """Provide a ConfigState seeded from the static provider."""
    return ConfigState(provider)


@fixture
def recording_invoker():
    """Provide the RecordingInvoker class for canned subprocess outcomes."""
    return RecordingInvoker


@fixture
def scripted_prompter():
    """Provide the ScriptedPrompter class for simulated user input."""
    return ScriptedPrompter


@fixture
def settings_file(tmp_path):
    """Write a settings.yml and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "settings.yml"
        path.write_text(content)
        return path

    return _write
