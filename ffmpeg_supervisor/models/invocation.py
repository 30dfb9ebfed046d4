"""
Data models describing one transcode invocation.

EncodingOptions serialises an ordered set of FFmpeg options into a command
line fragment. Invocation bundles the fragments, paths and flags of a run.
"""

import re
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

RESOLUTION_PATTERN = re.compile(r"^\s*(\d+)\s*x\s*(\d+)\s*$")


class EncodingOptions(dict):
    """
    Ordered FFmpeg options rendered as "-key value" flags.

    The "resolution" key is rendered as "-s WxH". A value of True or None
    renders a bare flag, a value of False drops the option.
    """

    def to_args(self) -> list[str]:
        """
        Render options as an argument list.

        Returns:
            FFmpeg arguments in insertion order
        """
        args: list[str] = []
        for key, value in self.items():
            if value is False:
                continue
            flag = "-s" if key == "resolution" else f"-{key}"
            args.append(flag)
            if value is not True and value is not None:
                args.append(str(value))
        return args

    def __str__(self) -> str:
        return " ".join(shlex.quote(arg) for arg in self.to_args())

    def _dimensions(self) -> Optional[tuple[int, int]]:
        resolution = self.get("resolution")
        if resolution is None:
            return None
        match = RESOLUTION_PATTERN.match(str(resolution))
        if not match:
            return None
        return int(match.group(1)), int(match.group(2))

    @property
    def width(self) -> Optional[int]:
        """Width from the resolution option."""
        dimensions = self._dimensions()
        return dimensions[0] if dimensions else None

    @property
    def height(self) -> Optional[int]:
        """Height from the resolution option."""
        dimensions = self._dimensions()
        return dimensions[1] if dimensions else None


OptionsFragment = Union[EncodingOptions, str]


def coerce_options(options: Union[OptionsFragment, dict[str, Any], None]) -> OptionsFragment:
    """
    Normalise caller-supplied options to a fragment.

    Args:
        options: EncodingOptions, mapping, raw string or None

    Returns:
        EncodingOptions or raw string

    Raises:
        TypeError: If options has an unsupported type
    """
    if options is None:
        return EncodingOptions()
    if isinstance(options, (EncodingOptions, str)):
        return options
    if isinstance(options, dict):
        return EncodingOptions(options)
    raise TypeError(
        f"Unknown options format '{type(options).__name__}', "
        "should be either EncodingOptions, dict or str."
    )


@dataclass(frozen=True)
class Invocation:
    """Immutable description of one transcode attempt."""

    source_path: Path
    output_path: Optional[Path]
    input_options: str = ""
    output_options: str = ""
    ignore_errors: bool = False
    command: Optional[str] = None

    @classmethod
    def create(
        cls,
        source_path: Path,
        output_path: Optional[Path],
        output_options: OptionsFragment,
        input_options: OptionsFragment,
        ignore_errors: bool = False,
        command: Optional[str] = None,
    ) -> "Invocation":
        """
        Build an invocation, serialising both option fragments.

        Args:
            source_path: Source media file
            output_path: Destination file (None if the options carry it)
            output_options: Output options fragment
            input_options: Input options fragment
            ignore_errors: Drop FFmpeg error-detection flags
            command: Literal command override

        Returns:
            Frozen Invocation
        """
        return cls(
            source_path=Path(source_path),
            output_path=Path(output_path) if output_path is not None else None,
            input_options=str(input_options).strip(),
            output_options=str(output_options).strip(),
            ignore_errors=ignore_errors,
            command=command,
        )
