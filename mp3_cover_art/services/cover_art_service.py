"""
This module defines the CoverArtEmbedder service.

It converts a single MP3 file: FFmpeg is run once with the audio and the cover
image as inputs, both streams are copied without re-encoding, and the image is
marked as the attached picture of the output's ID3v2.3 tag.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from ..config.audio import PROGRESS_MARKER
from ..domain.models import ConversionJob, ConversionOutcome
from ..utils.ffmpeg_utils import build_cover_art_cmd, format_cmd_for_display, run_cmd_streaming
from ..utils.format_utils import format_timedelta, formatted_size
from .logging_service import AppLogger, LogLevel


class CoverArtEmbedder:
    """
    Runs FFmpeg for one (input, cover art, output) triple and reports the outcome.

    Failures are never raised. A non-zero exit status, a process that could not
    be started and a timeout all come back as a failed `ConversionOutcome`, and
    all of them are logged here with their diagnostics.

    Attributes:
        log (AppLogger): Receives progress, completion and error messages.
        ffmpeg_cmd (str): The FFmpeg executable (name on PATH or absolute path).
        timeout (Optional[float]): Seconds before a conversion is killed. None waits forever.
    """

    def __init__(self, log: AppLogger, ffmpeg_cmd: str = "ffmpeg", timeout: Optional[float] = None):
        self.log = log
        self.ffmpeg_cmd = ffmpeg_cmd
        self.timeout = timeout

    def apply(self, input_file: Path, cover_art_path: Path, output_file: Path) -> ConversionOutcome:
        """Convenience wrapper around `run` taking the three paths directly."""
        return self.run(ConversionJob(Path(input_file), Path(cover_art_path), Path(output_file)))

    def run(self, job: ConversionJob) -> ConversionOutcome:
        """
        Attaches the cover art of `job` to its input file.

        Args:
            job: The paths to use.

        Returns:
            A completed outcome when FFmpeg exits with status 0, otherwise a failed,
            spawn-failed or timed-out outcome.
        """
        self.log.info(f"Processing: {job.input_file.name}")

        cmd_list = build_cover_art_cmd(self.ffmpeg_cmd, job.input_file, job.cover_art_path, job.output_file)
        if self.log.is_enabled_for(LogLevel.DEBUG):
            self.log.debug(f"FFmpeg command: {format_cmd_for_display(cmd_list)}")

        start_time = datetime.now()
        try:
            result = run_cmd_streaming(
                cmd_list,
                on_stderr_line=self._log_progress_line,
                timeout=self.timeout,
            )
        except OSError as e:
            outcome = ConversionOutcome.spawn_failed(e)
            self.log.error(f"✗ {outcome.reason} ({job.input_file.name})")
            return outcome

        if result.timed_out:
            outcome = ConversionOutcome.timed_out(self.timeout, stderr=result.stderr)
            self.log.error(f"✗ Failed to process {job.input_file.name}: {outcome.reason}")
            self._remove_partial_output(job.output_file)
            return outcome

        if result.returncode != 0:
            outcome = ConversionOutcome.failed(result.returncode, stderr=result.stderr)
            self.log.error(f"✗ Failed to process {job.input_file.name}: {outcome.reason}")
            if result.stderr.strip():
                self.log.error(f"FFmpeg stderr: {result.stderr.strip()}")
            self._remove_partial_output(job.output_file)
            return outcome

        elapsed = format_timedelta(datetime.now() - start_time)
        try:
            size_text = formatted_size(job.output_file.stat().st_size)
        except OSError:
            size_text = "unknown size"
        self.log.info(f"✓ Completed: {job.output_file.name} ({size_text}, {elapsed})")
        return ConversionOutcome.completed(stderr=result.stderr)

    def _log_progress_line(self, line: str):
        if PROGRESS_MARKER in line:
            self.log.debug(f"FFmpeg: {line.strip()}")

    def _remove_partial_output(self, output_file: Path):
        """Deletes whatever FFmpeg left at `output_file` so it is not mistaken for a finished file."""
        if not output_file.exists():
            return
        try:
            output_file.unlink()
            self.log.debug(f"Removed partial output: {output_file}")
        except OSError as e:
            self.log.warn(f"Could not remove partial output {output_file}: {e}")
