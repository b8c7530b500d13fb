"""
Application shell for MP3 Cover Art.

Parses the command line, sets up logging, validates the inputs, checks that
FFmpeg can be run and then launches the batch pipeline. Any setup failure is
logged and turned into exit status 1. Files that fail inside the batch are
reported in the summary but do not change the exit status.
"""

import sys
from pathlib import Path
from typing import List, Optional, TextIO

from loguru import logger

from .cli import get_args
from .config.audio import COVER_ART_EXTENSIONS
from .config.common import load_user_config
from .domain.exceptions import (
    CoverArtNotFoundError,
    FatalSetupError,
    FFmpegNotAvailableError,
    InputFolderNotFoundError,
    InvalidCoverArtError,
    OutputFolderError,
)
from .domain.models import BatchResult
from .pipeline.cover_art_pipeline import CoverArtPipeline
from .services.cover_art_service import CoverArtEmbedder
from .services.logging_service import AppLogger
from .utils.external_modules import Modules
from .utils.format_utils import has_extension


class CoverArtApplication:
    """
    Runs one invocation of the tool.

    Attributes:
        log_dir (Optional[Path]): Directory for the daily log file (default `./logs`).
        console (Optional[TextIO]): Console stream for the logger (default stdout).
        ffmpeg_cmd (Optional[str]): FFmpeg executable to use instead of the one
                                    resolved from the user config / PATH.
        result (Optional[BatchResult]): Tally of the last completed batch.
    """

    def __init__(
        self,
        log_dir: Optional[Path] = None,
        console: Optional[TextIO] = None,
        ffmpeg_cmd: Optional[str] = None,
    ):
        self.log_dir = log_dir
        self.console = console
        self.ffmpeg_cmd = ffmpeg_cmd
        self.result: Optional[BatchResult] = None

    @staticmethod
    def validate_arguments(args, log: AppLogger):
        """
        Checks the input paths and creates the output folder.

        Raises:
            InputFolderNotFoundError: The input folder is missing or not a directory.
            CoverArtNotFoundError: The cover art file is missing.
            InvalidCoverArtError: The cover art does not have an image extension.
            OutputFolderError: The output folder cannot be created.
        """
        input_folder: Path = args.input_folder
        cover_art: Path = args.cover_art
        output_folder: Path = args.output_folder

        if not input_folder.is_dir():
            raise InputFolderNotFoundError(f"Input folder does not exist: {input_folder}")

        if not cover_art.is_file():
            raise CoverArtNotFoundError(f"Cover art file does not exist: {cover_art}")

        if not has_extension(cover_art, COVER_ART_EXTENSIONS):
            raise InvalidCoverArtError(
                f"Cover art must be an image file. Supported formats: {', '.join(COVER_ART_EXTENSIONS)}"
            )

        try:
            output_folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputFolderError(f"Failed to create output folder {output_folder}: {e}") from e

        log.info(f"Input folder: {input_folder}")
        log.info(f"Cover art: {cover_art}")
        log.info(f"Output folder: {output_folder}")

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Executes the whole run.

        Args:
            argv: Command-line arguments. Defaults to `sys.argv[1:]`.

        Returns:
            0 when the batch ran to completion (even if some files failed),
            1 on any setup failure or unexpected error.

        Raises:
            SystemExit: On command-line usage errors (status 1) or `--help` (status 0).
        """
        args = get_args(argv)

        log = AppLogger(args.log_level, log_dir=self.log_dir, console=self.console)
        try:
            log.info("MP3 Cover Art Application Started")
            log.debug(f"Log level set to: {args.log_level}")
            if log.log_file_path:
                log.debug(f"Log file: {log.log_file_path}")

            user_config = load_user_config(args.config, log=log)

            self.validate_arguments(args, log)

            log.info("Checking FFmpeg installation...")
            ffmpeg_cmd = self.ffmpeg_cmd or Modules.get_ffmpeg_path(user_config.ffmpeg_dir, log)
            if not Modules.check_available(ffmpeg_cmd):
                raise FFmpegNotAvailableError(
                    "FFmpeg is not installed or not accessible. "
                    "Please install FFmpeg and ensure it is in your system PATH."
                )
            log.info("✓ FFmpeg is available")

            timeout = args.timeout if args.timeout is not None else user_config.timeout_seconds
            converter = CoverArtEmbedder(log, ffmpeg_cmd=ffmpeg_cmd, timeout=timeout)
            pipeline = CoverArtPipeline(log, converter=converter)
            self.result = pipeline.process_folder(args.input_folder, args.cover_art, args.output_folder)

            log.info("MP3 Cover Art Application Completed Successfully")
            return 0
        except FatalSetupError as e:
            log.error(f"Application failed: {e}")
            return 1
        except Exception as e:
            log.error(f"Application failed: {type(e).__name__}: {e}")
            return 1
        finally:
            log.close()


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point. Returns the process exit status."""
    # AppLogger adds its own sinks; drop loguru's default stderr handler.
    logger.remove()
    return CoverArtApplication().run(argv)


if __name__ == "__main__":
    sys.exit(main())
