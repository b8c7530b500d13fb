"""Shared pytest fixtures: a fake FFmpeg executable, loggers and sample folders."""

import io
import stat
import sys
from pathlib import Path

import pytest
from loguru import logger

from mp3_cover_art.services.logging_service import AppLogger

# Mimics the parts of FFmpeg the tool relies on:
# - `-version` succeeds
# - the second argument is the audio input, the last argument the output
# - inputs named *partial* leave an output behind and fail
# - inputs named *fail* fail without output
# - inputs named *slow* hang for a while
# - inputs named *wrapped* hang in a child process, like a wrapper script would
# - anything else is copied to the output with a progress line on stderr
FAKE_FFMPEG_SCRIPT = """#!/bin/sh
if [ "$1" = "-version" ]; then
  echo "ffmpeg version 6.0-fake Copyright (c) the FFmpeg developers"
  exit 0
fi
in="$2"
for last in "$@"; do :; done
case "$(basename "$in")" in
  *partial*)
    cp "$in" "$last"
    echo "$in: Error while writing trailer" >&2
    exit 1
    ;;
  *fail*)
    echo "$in: Invalid data found when processing input" >&2
    exit 1
    ;;
  *slow*)
    exec sleep 5
    ;;
  *wrapped*)
    sleep 30
    exit 0
    ;;
esac
printf 'size=       1kB time=00:00:01.00 bitrate=   8.0kbits/s speed= 100x\\r' >&2
cp "$in" "$last"
echo "video:1kB audio:1kB subtitle:0kB other streams:0kB" >&2
"""


@pytest.fixture(autouse=True, scope="session")
def _remove_default_loguru_handler():
    logger.remove()


def _write_executable(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_ffmpeg(tmp_path: Path) -> str:
    if sys.platform == "win32":
        pytest.skip("fake FFmpeg is a POSIX shell script")
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    return str(_write_executable(bin_dir / "ffmpeg", FAKE_FFMPEG_SCRIPT))


@pytest.fixture
def broken_ffmpeg(tmp_path: Path) -> str:
    """An executable that exits with status 1 for everything, including `-version`."""
    if sys.platform == "win32":
        pytest.skip("fake FFmpeg is a POSIX shell script")
    bin_dir = tmp_path / "broken_bin"
    bin_dir.mkdir()
    return str(_write_executable(bin_dir / "ffmpeg", "#!/bin/sh\necho broken >&2\nexit 1\n"))


@pytest.fixture
def console() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def app_logger(tmp_path: Path, console: io.StringIO):
    log = AppLogger("debug", log_dir=tmp_path / "logs", console=console)
    yield log
    log.close()


@pytest.fixture
def cover_art(tmp_path: Path) -> Path:
    path = tmp_path / "cover.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0fake-jpeg")
    return path


@pytest.fixture
def make_mp3_folder(tmp_path: Path):
    """Creates `tmp_path/<name>` holding the given files with dummy content."""

    def _make(*file_names: str, name: str = "input") -> Path:
        folder = tmp_path / name
        folder.mkdir(parents=True, exist_ok=True)
        for file_name in file_names:
            (folder / file_name).write_bytes(f"ID3 {file_name}".encode())
        return folder

    return _make
