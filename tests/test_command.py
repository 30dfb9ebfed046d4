"""
Tests for command building and invocation models.
"""

from pathlib import Path

import pytest

from ffmpeg_supervisor.executor import build_command
from ffmpeg_supervisor.models import EncodingOptions, Invocation, coerce_options


@pytest.fixture
def invocation():
    return Invocation.create(
        source_path=Path("/media/my movie.mp4"),
        output_path=Path("/out/result (1).mp4"),
        output_options=EncodingOptions({"vcodec": "libx264", "resolution": "320x240"}),
        input_options=EncodingOptions({"ss": "10"}),
    )


class TestBuildCommand:
    """Test build_command function."""

    def test_fixed_order(self, invocation):
        command = build_command(invocation, "ffmpeg")

        assert command == (
            "ffmpeg -y -ss 10 -err_detect explode -xerror "
            "-i '/media/my movie.mp4' -vcodec libx264 -s 320x240 '/out/result (1).mp4'"
        )

    def test_ignore_errors_drops_detection_flags(self, invocation):
        relaxed = Invocation.create(
            source_path=invocation.source_path,
            output_path=invocation.output_path,
            output_options=invocation.output_options,
            input_options=invocation.input_options,
            ignore_errors=True,
        )
        command = build_command(relaxed)

        assert "-err_detect" not in command
        assert "-xerror" not in command
        assert command.startswith("ffmpeg -y -ss 10 -i ")

    def test_without_destination(self):
        """The destination is only appended when given."""
        invocation = Invocation.create(
            source_path=Path("in.mp4"),
            output_path=None,
            output_options="-f null -",
            input_options="",
        )

        assert build_command(invocation) == (
            "ffmpeg -y -err_detect explode -xerror -i in.mp4 -f null -"
        )

    def test_custom_binary(self, invocation):
        assert build_command(invocation, "/opt/ffmpeg/bin/ffmpeg").startswith(
            "/opt/ffmpeg/bin/ffmpeg -y "
        )

    def test_literal_override_returned_verbatim(self, invocation):
        literal = "ffmpeg -i 'unescaped input' out.mkv   "
        override = Invocation(
            source_path=invocation.source_path,
            output_path=invocation.output_path,
            command=literal,
        )

        assert build_command(override, "other-binary") == literal

    def test_idempotent(self, invocation):
        """Same invocation, byte-identical command."""
        assert build_command(invocation) == build_command(invocation)

    def test_shell_metacharacters_escaped(self):
        invocation = Invocation.create(
            source_path=Path("a;rm -rf $HOME.mp4"),
            output_path=Path("out`x`.mp4"),
            output_options="",
            input_options="",
        )
        command = build_command(invocation)

        assert "'a;rm -rf $HOME.mp4'" in command
        assert command.endswith("'out`x`.mp4'")


class TestEncodingOptions:
    """Test EncodingOptions serialisation."""

    def test_to_args(self):
        options = EncodingOptions(
            {"vcodec": "libx264", "resolution": "640x480", "an": True, "sn": False}
        )

        assert options.to_args() == ["-vcodec", "libx264", "-s", "640x480", "-an"]

    def test_str_quotes_values(self):
        options = EncodingOptions({"metadata": "title=My Film"})

        assert str(options) == "-metadata 'title=My Film'"

    def test_dimensions(self):
        options = EncodingOptions({"resolution": "1280x720"})

        assert options.width == 1280
        assert options.height == 720

    def test_dimensions_missing(self):
        options = EncodingOptions({"vcodec": "copy"})

        assert options.width is None
        assert options.height is None

    def test_empty(self):
        assert str(EncodingOptions()) == ""


class TestCoerceOptions:
    """Test coerce_options function."""

    def test_dict_becomes_encoding_options(self):
        options = coerce_options({"vcodec": "copy"})

        assert isinstance(options, EncodingOptions)

    def test_string_passes_through(self):
        assert coerce_options("-c copy") == "-c copy"

    def test_none_is_empty(self):
        assert coerce_options(None) == EncodingOptions()

    def test_unknown_type_rejected(self):
        with pytest.raises(TypeError, match="Unknown options format"):
            coerce_options(42)  # type: ignore[arg-type]


class TestInvocation:
    """Test Invocation model."""

    def test_frozen(self, invocation):
        with pytest.raises(AttributeError):
            invocation.ignore_errors = True  # type: ignore[misc]

    def test_fragments_serialised(self, invocation):
        assert invocation.input_options == "-ss 10"
        assert invocation.output_options == "-vcodec libx264 -s 320x240"
