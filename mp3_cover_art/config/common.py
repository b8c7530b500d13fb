"""
Common configuration settings used throughout the application.

This module contains the shared constants for logging, output layout and job
status tracking. It also handles the loading of user-specific configuration
from an optional `config.user.yaml` file, so that users can point the tool at a
specific FFmpeg build or set a time limit without modifying the source code.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

# --- Application Identity ---

# Used as the prefix of the daily log file name.
TOOL_NAME = "mp3-cover-art"


# --- User-Defined Configuration ---
# The user file is looked up in the current working directory unless a path is
# given on the command line.

USER_CONFIG_FILENAME = "config.user.yaml"


@dataclass
class UserConfig:
    """
    Settings read from `config.user.yaml`.

    Attributes:
        ffmpeg_dir: Directory containing the FFmpeg executable. None means the
                    executable is looked up on the system PATH.
        timeout_seconds: Per-file time limit for FFmpeg. None disables it.
    """

    ffmpeg_dir: Optional[Path] = None
    timeout_seconds: Optional[float] = None


def load_user_config(config_path: Optional[Path] = None, log: Any = None) -> UserConfig:
    """
    Loads the user configuration file, falling back to defaults.

    A missing file is not an error. A file that cannot be read or parsed is
    reported as a warning (when a logger is given) and the defaults are used.

    Args:
        config_path: Path of the YAML file. Defaults to `./config.user.yaml`.
        log: Optional `AppLogger` used to report problems.

    Returns:
        A populated `UserConfig`.
    """
    config_path = config_path or Path.cwd() / USER_CONFIG_FILENAME
    config = UserConfig()

    if not config_path.is_file():
        if log:
            log.debug(f"User config '{config_path}' not found. Using defaults.")
        return config

    try:
        with config_path.open("r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
        if not isinstance(user_config, dict):
            raise ValueError("top-level YAML value must be a mapping")

        paths_config = user_config.get("paths") or {}
        ffmpeg_dir_str = paths_config.get("ffmpeg_dir")
        if ffmpeg_dir_str:
            config.ffmpeg_dir = Path(ffmpeg_dir_str)

        conversion_config = user_config.get("conversion") or {}
        timeout = conversion_config.get("timeout_seconds")
        if timeout is not None:
            config.timeout_seconds = float(timeout)
            if config.timeout_seconds <= 0:
                config.timeout_seconds = None
    except (OSError, yaml.YAMLError, ValueError, TypeError, AttributeError) as e:
        if log:
            log.warn(f"Could not load or parse '{config_path}': {e}")
        return UserConfig()

    if log:
        log.debug(f"Loaded user config from '{config_path}': {config}")
    return config


# --- Logging Configuration ---

# Daily log files go to `<cwd>/logs` by default.
DEFAULT_LOG_DIR_NAME = "logs"

# Daily log file name. `{date}` is the calendar date at logger construction.
LOG_FILE_TEMPLATE = TOOL_NAME + "-{date}.log"

# Shared line layout of both sinks. The timestamp is ISO-8601 in UTC, and the level
# label is the short uppercase name bound by the logger (DEBUG, INFO, WARN, ERROR).
LOGGER_FORMAT = "[{time:YYYY-MM-DDTHH:mm:ss.SSS!UTC}Z] [{extra[level_label]}] {message}"

# Console colour per level label (loguru markup tags).
LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARN": "yellow",
    "ERROR": "red",
}


# --- Output Layout ---

# Name of the folder created next to the input folder when no output folder is given.
DEFAULT_OUTPUT_DIR_NAME = "output"

# Separator printed around the final summary block.
SUMMARY_HEADER = "=== Processing Summary ==="


# --- Job Status Constants ---
# Outcome of a single conversion attempt. Only "completed" counts as success.

JOB_STATUS_COMPLETED = "completed"  # FFmpeg exited with status 0.
JOB_STATUS_FAILED = "failed"  # FFmpeg ran but exited non-zero.
JOB_STATUS_SPAWN_FAILED = "spawn_failed"  # FFmpeg could not be started at all.
JOB_STATUS_TIMED_OUT = "timed_out"  # FFmpeg was killed after exceeding the time limit.
