"""Tests for MP3 discovery."""

from pathlib import Path

import pytest

from mp3_cover_art.domain.exceptions import FolderListingError
from mp3_cover_art.services.file_processing_service import ProcessMp3Files


def test_filters_by_extension_case_insensitively(make_mp3_folder, app_logger):
    folder = make_mp3_folder("a.mp3", "b.MP3", "c.wav", "d.txt")

    files = ProcessMp3Files(app_logger).find_files(folder)

    assert sorted(f.name for f in files) == ["a.mp3", "b.MP3"]
    assert len(files) == 2


def test_is_not_recursive_and_ignores_directories(make_mp3_folder, app_logger):
    folder = make_mp3_folder("top.mp3")
    (folder / "sub").mkdir()
    (folder / "sub" / "nested.mp3").write_bytes(b"ID3")
    (folder / "album.mp3").mkdir()

    files = ProcessMp3Files(app_logger).find_files(folder)

    assert [f.name for f in files] == ["top.mp3"]


def test_empty_folder(make_mp3_folder, app_logger, console):
    folder = make_mp3_folder()

    finder = ProcessMp3Files(app_logger)
    assert finder.find_files(folder) == ()
    assert finder.files == ()
    assert f"Found 0 MP3 files in {folder}" in console.getvalue()


def test_unlistable_folder_raises(tmp_path: Path, app_logger):
    with pytest.raises(FolderListingError, match="Failed to read directory"):
        ProcessMp3Files(app_logger).find_files(tmp_path / "missing")
