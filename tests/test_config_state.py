"""Tests for ConfigState."""

from devinit_client.config import ConfigState, RunnerSettings
from devinit_client.runner import OutputMode, Subcommand

from .fixtures.fakes import StaticProvider


class TestConfigState:
    """Test ConfigState refresh and spec seeding."""

    def test_reads_provider_on_creation(self):
        """Paths are read from the provider when the state is created."""
        state = ConfigState(
            StaticProvider(executable_path="/opt/devinit", config_path="rc.yml")
        )

        assert state.settings == RunnerSettings(
            executable_path="/opt/devinit", config_file_path="rc.yml"
        )

    def test_empty_config_path_is_unset(self):
        """An empty configuration file setting means no --config argument."""
        state = ConfigState(StaticProvider(config_path=""))
        assert state.settings.config_file_path is None

    def test_refresh_picks_up_changes(self):
        """refresh() replaces both values."""
        provider = StaticProvider(executable_path="/old/devinit", config_path="old.yml")
        state = ConfigState(provider)

        provider.executable_path = "/new/devinit"
        provider.config_path = "new.yml"
        state.refresh()

        assert state.settings.executable_path == "/new/devinit"
        assert state.settings.config_file_path == "new.yml"

    def test_values_unchanged_until_refresh(self):
        """Provider changes are not visible before refresh()."""
        provider = StaticProvider(executable_path="/old/devinit")
        state = ConfigState(provider)

        provider.executable_path = "/new/devinit"

        assert state.settings.executable_path == "/old/devinit"

    def test_refresh_swaps_snapshot(self):
        """A snapshot taken before refresh keeps the old pair intact."""
        provider = StaticProvider(executable_path="/old/devinit", config_path="old.yml")
        state = ConfigState(provider)
        before = state.settings

        provider.executable_path = "/new/devinit"
        provider.config_path = ""
        state.refresh()

        assert before == RunnerSettings("/old/devinit", "old.yml")
        assert state.settings == RunnerSettings("/new/devinit", None)

    def test_refresh_reloads_provider(self):
        """The provider is reloaded on creation and on every refresh."""
        provider = StaticProvider()
        state = ConfigState(provider)
        state.refresh()

        assert provider.reloads == 2

    def test_new_invocation_spec_defaults(self):
        """New specs carry the current paths and default field values."""
        state = ConfigState(
            StaticProvider(executable_path="/opt/devinit", config_path="rc.yml")
        )
        spec = state.new_invocation_spec()

        assert spec.executable_path == "/opt/devinit"
        assert spec.config_file_path == "rc.yml"
        assert spec.subcommand is Subcommand.FILE
        assert spec.output_mode is OutputMode.WRITE_TO_PATH
        assert spec.variables == {}
        assert spec.assert_empty_target is False
        assert spec.template_name is None
        assert spec.output_path is None

    def test_spec_is_a_snapshot(self):
        """A spec built before a refresh keeps the values it was built with."""
        provider = StaticProvider(executable_path="/old/devinit")
        state = ConfigState(provider)
        spec = state.new_invocation_spec()

        provider.executable_path = "/new/devinit"
        state.refresh()

        assert spec.executable_path == "/old/devinit"
        assert state.new_invocation_spec().executable_path == "/new/devinit"
