"""
Provides the service that discovers the MP3 files to process.

Only the immediate entries of the input folder are considered (no recursion),
and only regular files whose extension is `.mp3` in any letter case. Files are
returned in directory-listing order, which is not the same on every platform.
"""

from pathlib import Path
from typing import Tuple

from ..config.audio import AUDIO_EXTENSION
from ..domain.exceptions import FolderListingError
from ..utils.format_utils import has_extension
from .logging_service import AppLogger


class ProcessMp3Files:
    """
    Finds the MP3 files directly inside a folder.

    Attributes:
        files (Tuple[Path, ...]): Files found by the last call to `find_files`.
    """

    def __init__(self, log: AppLogger):
        self.log = log
        self.files: Tuple[Path, ...] = tuple()

    def find_files(self, folder: Path) -> Tuple[Path, ...]:
        """
        Lists `folder` and keeps the MP3 files.

        Args:
            folder: The folder to scan.

        Returns:
            The matching paths, in directory-listing order.

        Raises:
            FolderListingError: If the folder cannot be listed.
        """
        try:
            entries = list(folder.iterdir())
        except OSError as e:
            raise FolderListingError(f"Failed to read directory {folder}: {e}") from e

        mp3_files = []
        for entry in entries:
            if has_extension(entry, (AUDIO_EXTENSION,)) and entry.is_file():
                mp3_files.append(entry)
            else:
                self.log.debug(f"Ignoring non-MP3 entry: {entry.name}")
        self.files = tuple(mp3_files)

        self.log.info(f"Found {len(self.files)} MP3 files in {folder}")
        return self.files
