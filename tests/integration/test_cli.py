"""Integration tests for the bridgeconf CLI."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from bridgeconf import __version__
from bridgeconf.cli import app
from tests.fixtures import GATEWAY_CONFIG_PATH, GOLDEN_DIR

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every command from an empty directory so no config is discovered."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestConfigfile:
    """Integration tests for `bridgeconf configfile`."""

    def test_prints_default_document(self) -> None:
        """Test that the default document is printed to stdout."""
        result = runner.invoke(app, ["--quiet", "configfile"])

        assert result.exit_code == 0, f"Command failed: {result.output}"
        expected = (GOLDEN_DIR / "default_configfile.toml").read_text(encoding="utf-8")
        assert result.stdout == expected

    def test_writes_output_file(self, tmp_path: Path) -> None:
        output_path = tmp_path / "out" / "lora-gateway-bridge.toml"

        result = runner.invoke(app, ["--quiet", "configfile", "--output", str(output_path)])

        assert result.exit_code == 0, f"Command failed: {result.output}"
        assert output_path.exists(), "Configuration file was not created"
        assert output_path.read_text(encoding="utf-8").startswith("[general]\n")

    def test_uses_config_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BRIDGE_MQTT_PASSWORD", "hunter2")

        result = runner.invoke(
            app,
            ["--quiet", "--config", str(GATEWAY_CONFIG_PATH), "configfile"],
        )

        assert result.exit_code == 0, f"Command failed: {result.output}"
        assert 'marshaler="json"' in result.stdout
        assert 'password="hunter2"' in result.stdout
        assert '    gateway_id="0102030405060708"\n' in result.stdout
        assert '\n  serial_number="A1B21234"\n' in result.stdout
        assert "\n  [commands.commands.reboot]\n" in result.stdout

    def test_discovers_config_in_cwd(self, isolated_cwd: Path) -> None:
        (isolated_cwd / "bridgeconf.yaml").write_text("general:\n  log_level: 1\n")

        result = runner.invoke(app, ["--quiet", "configfile"])

        assert result.exit_code == 0, f"Command failed: {result.output}"
        assert "log_level = 1\n" in result.stdout

    def test_missing_env_var_fails(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("BRIDGE_MQTT_PASSWORD", raising=False)

        result = runner.invoke(
            app,
            ["--config", str(GATEWAY_CONFIG_PATH), "configfile"],
        )

        assert result.exit_code == 1

    def test_malformed_entry_fails(self, isolated_cwd: Path) -> None:
        """Test that a scalar where a mapping belongs is reported, not raised."""
        (isolated_cwd / "bridgeconf.yaml").write_text(
            "commands:\n  commands:\n    reboot: /usr/bin/reboot\n"
        )

        result = runner.invoke(app, ["configfile"])

        assert result.exit_code == 1
        assert not isinstance(result.exception, AttributeError)
        assert "Failed to load config: Command 'reboot' must be a mapping" in result.output

    def test_unwritable_output_fails(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        result = runner.invoke(
            app,
            ["configfile", "--output", str(blocker / "config.toml")],
        )

        assert result.exit_code == 1


class TestGlobalOptions:
    """Tests for global CLI options."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"bridgeconf {__version__}" in result.output

    def test_no_args_shows_help(self) -> None:
        result = runner.invoke(app, [])

        assert "configfile" in result.output
