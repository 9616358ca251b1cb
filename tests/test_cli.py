"""Tests for cli.py module."""

from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from ovn_daemonset import __version__
from ovn_daemonset.cli import cli, resolve_config_hash
from ovn_daemonset.common.hashing import file_hashes, hash_of_input_hashes


@pytest.fixture
def quiet_console():
    """Silence console output so stdout holds only the manifest."""
    with patch("ovn_daemonset.cli.console") as mock:
        yield mock


def _env_values(document):
    return [env["value"] for container in document["spec"]["template"]["spec"]["containers"] for env in container["env"]]


class TestCliVersion:
    """Tests for version command."""

    def test_version_flag(self):
        """Test --version flag prints version."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_version_short_flag(self):
        """Test -v flag prints version."""
        runner = CliRunner()
        result = runner.invoke(cli, ["-v"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestCliHelp:
    """Tests for help output."""

    def test_help_flag(self):
        """Test --help flag shows help text."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "Render the OVN controller DaemonSet" in result.output
        assert "--config" in result.output
        assert "--config-hash" in result.output
        assert "--hash-input" in result.output
        assert "--label" in result.output
        assert "--annotation" in result.output
        assert "--output" in result.output


class TestCliRender:
    """Tests for rendering the manifest."""

    def test_render_to_stdout(self, sample_config_file, quiet_console):
        """Test the manifest is printed with the given hash."""
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(sample_config_file), "--config-hash", "abc123"])

        assert result.exit_code == 0, result.output
        document = yaml.safe_load(result.output)
        assert document["kind"] == "DaemonSet"
        assert document["metadata"]["namespace"] == "openstack"
        assert _env_values(document) == ["abc123", "abc123", "abc123"]

    def test_default_labels(self, sample_config_file, quiet_console):
        """Test the service label is used when no label is given."""
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(sample_config_file), "--config-hash", "abc123"])

        document = yaml.safe_load(result.output)
        assert document["spec"]["selector"]["matchLabels"] == {"service": "ovn-controller"}

    def test_labels_and_annotations(self, sample_config_file, quiet_console):
        """Test labels and annotations from the command line."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["-c", str(sample_config_file), "-l", "app=ovn", "-a", "note=yes", "--config-hash", "abc123"],
        )

        document = yaml.safe_load(result.output)
        assert document["spec"]["selector"]["matchLabels"] == {"app": "ovn"}
        assert document["spec"]["template"]["metadata"]["annotations"] == {"note": "yes"}

    def test_hash_defaults_to_config_file(self, sample_config_file, quiet_console):
        """Test the config file content drives the hash by default."""
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(sample_config_file)])

        expected = hash_of_input_hashes(file_hashes([sample_config_file]))
        assert _env_values(yaml.safe_load(result.output)) == [expected] * 3

    def test_render_to_file(self, tmp_path, sample_config_file, quiet_console):
        """Test writing the manifest to a file prints a summary."""
        output = tmp_path / "daemonset.yaml"
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(sample_config_file), "-o", str(output), "--config-hash", "abc123"])

        assert result.exit_code == 0, result.output
        assert yaml.safe_load(output.read_text())["metadata"]["name"] == "ovn-controller"
        quiet_console.success.assert_called_once()
        quiet_console.daemonset_summary.assert_called_once()


class TestCliErrors:
    """Tests for error reporting."""

    def test_missing_config_option(self):
        """Test a usage error without --config."""
        runner = CliRunner()
        result = runner.invoke(cli, [])

        assert result.exit_code == 2
        assert "--config" in result.output

    def test_missing_config_file(self, tmp_path, quiet_console):
        """Test a missing config file is reported once and exits with an error."""
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1
        quiet_console.error.assert_called_once()
        assert "does not exist" in quiet_console.error.call_args[0][0]
        assert "Error:" not in result.output

    def test_invalid_label(self, sample_config_file, quiet_console):
        """Test a malformed label is reported and exits with an error."""
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(sample_config_file), "-l", "novalue"])

        assert result.exit_code == 1
        assert "KEY=VALUE" in quiet_console.error.call_args[0][0]

    def test_unwritable_output(self, tmp_path, sample_config_file, quiet_console):
        """Test an output path in a missing directory exits with an error."""
        output = tmp_path / "missing" / "daemonset.yaml"
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(sample_config_file), "-o", str(output), "--config-hash", "abc"])

        assert result.exit_code == 1
        assert "Cannot write to output path" in result.output


class TestResolveConfigHash:
    """Tests for content hash selection."""

    def test_explicit_hash_wins(self, sample_config_file):
        """Test an explicit hash is returned unchanged."""
        assert resolve_config_hash(sample_config_file, "", ()) == ""
        assert resolve_config_hash(sample_config_file, "abc123", ()) == "abc123"

    def test_hash_inputs(self, tmp_path, sample_config_file):
        """Test hash inputs replace the config file as hash source."""
        extra = tmp_path / "ovn.conf"
        extra.write_text("remote=tcp:10.0.0.1:6642")

        result = resolve_config_hash(sample_config_file, None, (extra,))

        assert result == hash_of_input_hashes(file_hashes([extra]))
        assert result != hash_of_input_hashes(file_hashes([sample_config_file]))


class TestCliMarkupSafety:
    """Tests for user values containing Rich markup characters."""

    def test_bracketed_config_hash(self, sample_config_file):
        """Test a hash that looks like a closing tag is printed literally."""
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(sample_config_file), "--config-hash", "[/x]"])

        assert result.exit_code == 0, result.output
        assert result.exception is None

    def test_bracketed_config_hash_to_file(self, tmp_path, sample_config_file):
        """Test the summary renders a bracketed hash."""
        output = tmp_path / "daemonset.yaml"
        runner = CliRunner()
        result = runner.invoke(
            cli, ["-c", str(sample_config_file), "-o", str(output), "--config-hash", "[/x][bold]"]
        )

        assert result.exit_code == 0, result.output
        assert _env_values(yaml.safe_load(output.read_text())) == ["[/x][bold]"] * 3

    def test_bracketed_invalid_label(self, sample_config_file):
        """Test a malformed label with brackets still reports the label error."""
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(sample_config_file), "-l", "a[/b]"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
