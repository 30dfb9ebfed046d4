"""
Helper functions for the FFmpeg supervisor.

This module contains utility functions used throughout the application.
"""

import re
from typing import Optional


def format_size(bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 GB")
    """
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if bytes < 1024.0:
            return f"{bytes:.1f} {unit}"
        bytes /= 1024.0  # type: ignore
    return f"{bytes:.1f} PB"


def format_duration(seconds: float) -> str:
    """
    Format duration as HH:MM:SS.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string (e.g., "01:30:45")
    """
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def parse_time_to_seconds(time_str: str) -> float:
    """
    Parse time string to seconds.

    Supports formats:
    - HH:MM:SS.mmm
    - MM:SS.mmm
    - SS.mmm

    Args:
        time_str: Time string to parse

    Returns:
        Time in seconds

    Raises:
        ValueError: If a component is not numeric
    """
    parts = time_str.split(":")
    if len(parts) == 3:
        hours, minutes, seconds = parts
        return int(hours) * 3600 + int(minutes) * 60 + float(seconds)
    elif len(parts) == 2:
        minutes, seconds = parts
        return int(minutes) * 60 + float(seconds)
    else:
        return float(parts[0])


def parse_ratio(ratio_str: Optional[str]) -> Optional[float]:
    """
    Parse a ratio such as "16:9" or "1.777" into a float.

    Args:
        ratio_str: Ratio string as reported by ffprobe

    Returns:
        Ratio as float, or None if missing, zero or unparseable
    """
    if not ratio_str:
        return None

    match = re.fullmatch(r"\s*(\d+(?:\.\d+)?)\s*[:/]\s*(\d+(?:\.\d+)?)\s*", ratio_str)
    if match:
        numerator, denominator = float(match.group(1)), float(match.group(2))
        if numerator <= 0 or denominator <= 0:
            return None
        return numerator / denominator

    try:
        value = float(ratio_str)
    except ValueError:
        return None
    return value if value > 0 else None

