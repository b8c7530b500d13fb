"""
Defines the data models passed between the pipeline stages.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..config.common import (
    JOB_STATUS_COMPLETED,
    JOB_STATUS_FAILED,
    JOB_STATUS_SPAWN_FAILED,
    JOB_STATUS_TIMED_OUT,
)


@dataclass(frozen=True)
class ConversionJob:
    """
    A single unit of work: attach `cover_art_path` to `input_file` and write `output_file`.

    Jobs are built inside the batch loop, one per discovered file, and discarded
    once the file has been handled.
    """

    input_file: Path
    cover_art_path: Path
    output_file: Path


@dataclass(frozen=True)
class ConversionOutcome:
    """
    The result of one FFmpeg invocation.

    Attributes:
        status: One of the `JOB_STATUS_*` constants from `config.common`.
        exit_code: FFmpeg's exit status, or None when it never ran to completion.
        reason: Human-readable failure description. None on success.
        stderr: Everything FFmpeg wrote to its error stream.
    """

    status: str
    exit_code: Optional[int] = None
    reason: Optional[str] = None
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.status == JOB_STATUS_COMPLETED

    @classmethod
    def completed(cls, stderr: str = "") -> "ConversionOutcome":
        return cls(status=JOB_STATUS_COMPLETED, exit_code=0, stderr=stderr)

    @classmethod
    def failed(cls, exit_code: int, stderr: str = "") -> "ConversionOutcome":
        return cls(
            status=JOB_STATUS_FAILED,
            exit_code=exit_code,
            reason=f"FFmpeg exited with code {exit_code}",
            stderr=stderr,
        )

    @classmethod
    def spawn_failed(cls, error: BaseException) -> "ConversionOutcome":
        return cls(status=JOB_STATUS_SPAWN_FAILED, reason=f"Failed to start FFmpeg: {error}")

    @classmethod
    def timed_out(cls, timeout: float, stderr: str = "") -> "ConversionOutcome":
        return cls(
            status=JOB_STATUS_TIMED_OUT,
            reason=f"FFmpeg timed out after {timeout:g} s",
            stderr=stderr,
        )


@dataclass
class BatchResult:
    """
    The tally of one `process_folder` call.

    After the batch completes, `total == succeeded + failed + skipped`.

    Attributes:
        total: Number of MP3 files discovered in the input folder.
        succeeded: Files for which FFmpeg finished successfully.
        failed: Files whose conversion failed for any reason.
        skipped: Files whose destination already existed.
        failed_files: Names of the files counted in `failed`, in processing order.
    """

    total: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    failed_files: List[str] = field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        return self.total == self.succeeded + self.failed + self.skipped
