"""
This module provides the Modules class to locate and verify the external FFmpeg
executable the application depends on.
"""
import subprocess
import sys
from pathlib import Path
from typing import Any, Optional


class Modules:
    """
    A utility class for operations related to the FFmpeg executable.

    The executable is taken from the `ffmpeg_dir` configured in the user's
    `config.user.yaml` when present, otherwise it is looked up on the system PATH.
    """

    @staticmethod
    def get_ffmpeg_path(ffmpeg_dir: Optional[Path] = None, log: Any = None) -> str:
        """
        Determines the FFmpeg executable to use.

        Args:
            ffmpeg_dir: Directory configured by the user, if any.
            log: Optional `AppLogger` for diagnostics.

        Returns:
            The absolute path of the configured executable, or "ffmpeg" to rely on PATH.
        """
        ffmpeg_exe_name = "ffmpeg.exe" if sys.platform == "win32" else "ffmpeg"

        if ffmpeg_dir:
            configured_ffmpeg_path = Path(ffmpeg_dir) / ffmpeg_exe_name
            if configured_ffmpeg_path.is_file():
                if log:
                    log.debug(f"Using FFmpeg from configured path: '{configured_ffmpeg_path}'")
                return str(configured_ffmpeg_path)
            if log:
                log.warn(
                    f"`ffmpeg_dir` is configured, but '{ffmpeg_exe_name}' was not found in "
                    f"'{ffmpeg_dir}'. Falling back to system PATH."
                )

        return "ffmpeg"

    @staticmethod
    def check_available(ffmpeg_cmd: str = "ffmpeg") -> bool:
        """
        Probes whether FFmpeg can be started and reports a healthy version.

        Runs `<ffmpeg_cmd> -version` with no standard input. Never raises.

        Returns:
            True if the process started and exited with status 0, False otherwise.
        """
        try:
            result = subprocess.run(
                [ffmpeg_cmd, "-version"],
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except (OSError, ValueError, subprocess.SubprocessError):
            return False
        return result.returncode == 0

