"""
Aspect-ratio preserving resolution planning.

Most video encoders require even frame dimensions, so the derived dimension
is rounded to an even integer before it is written back as the resolution.
"""

import math
from typing import Literal, Optional

from ..models import EncodingOptions
from ..utils import get_logger

logger = get_logger(__name__)

PreserveMode = Literal["width", "height"]


def round_to_even(value: float) -> int:
    """
    Round a dimension to an even integer.

    Takes the ceiling if it is even, otherwise the floor. If the result is
    still odd (the value was already an odd integer) one is added.

    Args:
        value: Raw dimension

    Returns:
        Even integer dimension

    Examples:
        >>> round_to_even(50.5)
        50
        >>> round_to_even(33.33)
        34
        >>> round_to_even(51.0)
        52
    """
    ceiling = math.ceil(value)
    rounded = ceiling if ceiling % 2 == 0 else math.floor(value)
    if rounded % 2 != 0:
        rounded += 1
    return rounded


def calculate_resolution(
    width: Optional[int],
    height: Optional[int],
    aspect_ratio: float,
    mode: PreserveMode,
) -> tuple[int, int]:
    """
    Derive the missing dimension from the aspect ratio.

    Args:
        width: Target width (required for mode "width")
        height: Target height (required for mode "height")
        aspect_ratio: Source display aspect ratio (width / height)
        mode: Which dimension to preserve

    Returns:
        Tuple of (width, height)

    Raises:
        ValueError: If the preserved dimension is missing or the mode is unknown
    """
    if aspect_ratio <= 0:
        raise ValueError(f"aspect ratio must be positive, got {aspect_ratio}")

    if mode == "width":
        if width is None:
            raise ValueError("width is required to preserve width")
        return width, round_to_even(width / aspect_ratio)

    if mode == "height":
        if height is None:
            raise ValueError("height is required to preserve height")
        return round_to_even(height * aspect_ratio), height

    raise ValueError(f"unknown aspect ratio mode: {mode}")


def adjust_resolution(
    options: EncodingOptions,
    aspect_ratio: Optional[float],
    mode: Optional[PreserveMode],
) -> EncodingOptions:
    """
    Rewrite the resolution option so the output keeps the source aspect ratio.

    Nothing changes when the mode or aspect ratio is missing.

    Args:
        options: Output options, updated in place
        aspect_ratio: Source display aspect ratio
        mode: "width", "height" or None

    Returns:
        The same options instance
    """
    if mode is None or not aspect_ratio:
        return options

    width, height = calculate_resolution(options.width, options.height, aspect_ratio, mode)
    options["resolution"] = f"{width}x{height}"
    logger.debug(f"Preserving {mode}: resolution set to {width}x{height}")
    return options
