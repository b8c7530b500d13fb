"""
Batch pipeline that attaches one cover image to every MP3 file of a folder.

Files are processed strictly one after another. Each conversion is a full
FFmpeg process, and running several of them at once only competes for the same
disk. A file whose destination already exists is skipped, so re-running the
pipeline over a partly filled output folder only fills the gaps.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from ..config.common import SUMMARY_HEADER
from ..domain.exceptions import OutputFolderError
from ..domain.models import BatchResult, ConversionJob
from ..services.cover_art_service import CoverArtEmbedder
from ..services.file_processing_service import ProcessMp3Files
from ..services.logging_service import AppLogger
from ..utils.format_utils import format_timedelta


class CoverArtPipeline:
    """
    Runs the cover art conversion over a whole folder and keeps the tally.

    Only two problems abort `process_folder`: the input folder cannot be listed
    (`FolderListingError`) or the output folder cannot be created
    (`OutputFolderError`). Everything that goes wrong with an individual file is
    logged, counted as failed, and the batch moves on to the next file.

    Attributes:
        log (AppLogger): Shared application logger.
        converter (CoverArtEmbedder): Converts a single file.
        file_finder (ProcessMp3Files): Discovers the files to convert.
    """

    def __init__(
        self,
        log: AppLogger,
        converter: Optional[CoverArtEmbedder] = None,
        file_finder: Optional[ProcessMp3Files] = None,
    ):
        self.log = log
        self.converter = converter or CoverArtEmbedder(log)
        self.file_finder = file_finder or ProcessMp3Files(log)

    def process_folder(self, input_folder: Path, cover_art_path: Path, output_folder: Path) -> BatchResult:
        """
        Converts every MP3 file in `input_folder` into `output_folder`.

        Args:
            input_folder: Folder scanned (non-recursively) for MP3 files.
            cover_art_path: Image attached to every file.
            output_folder: Destination folder. Created if missing. Output files
                           keep the name of their input file.

        Returns:
            The tally of the batch. `total == succeeded + failed + skipped`.

        Raises:
            FolderListingError: If `input_folder` cannot be listed.
            OutputFolderError: If `output_folder` cannot be created.
        """
        input_folder = Path(input_folder)
        cover_art_path = Path(cover_art_path)
        output_folder = Path(output_folder)
        start_time = datetime.now()

        mp3_files = self.file_finder.find_files(input_folder)
        result = BatchResult(total=len(mp3_files))

        self._ensure_output_folder(output_folder)

        if not mp3_files:
            self.log.warn("No MP3 files found in the input folder")
            self._log_summary(result, output_folder, start_time)
            return result

        self.log.info(f"Starting to process {len(mp3_files)} MP3 files...")

        for index, input_file in enumerate(mp3_files, start=1):
            output_file = output_folder / input_file.name
            self.log.debug(f"[{index}/{len(mp3_files)}] {input_file.name}")

            if output_file.exists():
                self.log.warn(f"Output file already exists, skipping: {input_file.name}")
                result.skipped += 1
                continue

            job = ConversionJob(input_file, cover_art_path, output_file)
            try:
                outcome = self.converter.run(job)
            except Exception as e:
                # The converter reports its own failures; this only guards against the unexpected.
                self.log.error(f"Failed to process {input_file.name}: {type(e).__name__}: {e}")
                result.failed += 1
                result.failed_files.append(input_file.name)
                continue

            if outcome.ok:
                result.succeeded += 1
            else:
                self.log.debug(f"Counting {input_file.name} as failed ({outcome.status})")
                result.failed += 1
                result.failed_files.append(input_file.name)

        self._log_summary(result, output_folder, start_time)
        return result

    def _ensure_output_folder(self, output_folder: Path):
        try:
            output_folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputFolderError(f"Failed to create output folder {output_folder}: {e}") from e

    def _log_summary(self, result: BatchResult, output_folder: Path, start_time: datetime):
        self.log.info(SUMMARY_HEADER)
        self.log.info(f"Total files: {result.total}")
        self.log.info(f"Successful: {result.succeeded}")
        self.log.info(f"Failed: {result.failed}")
        self.log.info(f"Skipped: {result.skipped}")
        if result.failed_files:
            self.log.info(f"Failed files: {', '.join(result.failed_files)}")
        self.log.info(f"Elapsed: {format_timedelta(datetime.now() - start_time)}")

        if result.succeeded > 0:
            self.log.info(f"✓ All processed files saved to: {output_folder}")
