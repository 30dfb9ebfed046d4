"""
Tests for the command-line interface.
"""

import pytest
from typer.testing import CliRunner

from ffmpeg_supervisor import __version__
from ffmpeg_supervisor.cli import main as cli
from ffmpeg_supervisor.config import ConfigManager
from ffmpeg_supervisor.utils import ConfigurationError

from conftest import FakeMetadataService, requires_posix_shell

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch):
    """Ignore configuration files on the machine running the tests."""
    monkeypatch.setattr(ConfigManager, "DEFAULT_CONFIG_LOCATIONS", [])


@pytest.fixture
def fake_service(monkeypatch):
    service = FakeMetadataService()
    monkeypatch.setattr(cli, "FFprobeMetadataService", lambda ffprobe_path="ffprobe": service)
    return service


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00")
    return path


class TestParseOptionPairs:
    """Test parse_option_pairs function."""

    def test_pairs(self):
        options = cli.parse_option_pairs(["vcodec=libx264", "-crf=23", "an"])

        assert options == {"vcodec": "libx264", "crf": "23", "an": True}

    def test_value_with_equals(self):
        assert cli.parse_option_pairs(["metadata=title=x"]) == {"metadata": "title=x"}

    def test_none(self):
        assert cli.parse_option_pairs(None) == {}

    def test_empty_key(self):
        with pytest.raises(ConfigurationError):
            cli.parse_option_pairs(["=value"])


class TestCommands:
    """Test CLI commands."""

    def test_version(self):
        result = runner.invoke(cli.app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_init_config(self, tmp_path):
        path = tmp_path / "config.yaml"

        result = runner.invoke(cli.app, ["init-config", str(path)])

        assert result.exit_code == 0
        assert path.exists()

    def test_init_config_existing(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("ffmpeg:\n  timeout: 1\n")

        result = runner.invoke(cli.app, ["init-config", str(path)])
        assert result.exit_code == 1
        assert "already exists" in result.output

        result = runner.invoke(cli.app, ["init-config", str(path), "--force"])
        assert result.exit_code == 0

    def test_probe(self, input_file, fake_service):
        result = runner.invoke(cli.app, ["probe", str(input_file)])

        assert result.exit_code == 0
        assert "640x360" in result.output
        assert fake_service.probe_calls == [input_file]

    def test_probe_invalid(self, input_file, fake_service):
        fake_service.valid = False

        result = runner.invoke(cli.app, ["probe", str(input_file)])

        assert result.exit_code == 1

    @requires_posix_shell
    def test_transcode_with_command(self, input_file, fake_service):
        result = runner.invoke(
            cli.app,
            ["transcode", str(input_file), "--command", "true", "--no-validate"],
        )

        assert result.exit_code == 0
        assert "Transcoded clip.mp4" in result.output

    @requires_posix_shell
    def test_transcode_failure(self, input_file, fake_service):
        result = runner.invoke(
            cli.app,
            ["transcode", str(input_file), "--command", "exit 3", "--no-validate"],
        )

        assert result.exit_code == 1
        assert "Transcoding failed" in result.output

    def test_transcode_invalid_preserve_mode(self, input_file, fake_service, tmp_path):
        result = runner.invoke(
            cli.app,
            ["transcode", str(input_file), str(tmp_path / "out.mp4"), "-p", "diagonal"],
        )

        assert result.exit_code == 1
        assert "Error" in result.output
