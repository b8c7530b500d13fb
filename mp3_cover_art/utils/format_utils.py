"""
This module contains helper functions for formatting data into human-readable strings.
They are used in log messages, for example to show how long a conversion took and
how large the written file is.
"""

from datetime import timedelta
from pathlib import Path
from typing import Iterable


def format_timedelta(td_object: timedelta) -> str:
    """
    Formats a timedelta object into a "HH:MM:SS" string.

    Args:
        td_object: The timedelta object to format.

    Returns:
        A string such as "02:01:01" for 7261 seconds.
        Returns "00:00:00" if the input is not a timedelta.
    """
    if not isinstance(td_object, timedelta):
        return "00:00:00"

    total_seconds = int(td_object.total_seconds())
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02}:{minutes:02}:{seconds:02}"


def formatted_size(size_bytes: float) -> str:
    """
    Converts a size in bytes to a human-readable string (B, KB, MB, GB, TB, PB).

    Args:
        size_bytes: The size in bytes.

    Returns:
        For example, 1536 becomes "1.50 KB" and 2097152 becomes "2 MB".
    """
    if size_bytes <= 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB", "TB", "PB"]
    factor = 1024.0

    for unit in units:
        if size_bytes < factor:
            if unit == "B":
                return f"{int(size_bytes)} {unit}"
            # Clean up ".00" for whole numbers (e.g., "2.00 MB" -> "2 MB").
            return f"{size_bytes:.2f} {unit}".replace(".00", "")
        size_bytes /= factor

    return f"{size_bytes:.2f} {units[-1]}".replace(".00", "")


def has_extension(file_path_obj: Path, extensions_to_check: Iterable[str]) -> bool:
    """
    Checks if a file's extension is one of `extensions_to_check` (case-insensitive).

    Args:
        file_path_obj: The file to check.
        extensions_to_check: Extensions with or without the leading dot.

    Returns:
        True if the file's suffix matches one of the extensions.
    """
    normalized_extensions = {
        ext.lower() if ext.startswith(".") else f".{ext.lower()}"
        for ext in extensions_to_check
    }
    if not normalized_extensions:
        return False
    return file_path_obj.suffix.lower() in normalized_extensions
