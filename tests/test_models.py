"""Tests for the outcome and tally models."""

from datetime import timedelta
from pathlib import Path

from mp3_cover_art.domain.models import BatchResult, ConversionOutcome
from mp3_cover_art.utils.format_utils import format_timedelta, formatted_size, has_extension


def test_only_completed_outcome_is_ok():
    assert ConversionOutcome.completed().ok
    assert not ConversionOutcome.failed(1).ok
    assert not ConversionOutcome.spawn_failed(FileNotFoundError("ffmpeg")).ok
    assert not ConversionOutcome.timed_out(10).ok


def test_failed_outcome_reason_names_exit_code():
    outcome = ConversionOutcome.failed(183, stderr="oops")
    assert outcome.reason == "FFmpeg exited with code 183"
    assert outcome.stderr == "oops"


def test_batch_result_consistency():
    assert BatchResult().is_consistent
    assert BatchResult(total=3, succeeded=1, failed=1, skipped=1).is_consistent
    assert not BatchResult(total=3, succeeded=1).is_consistent


def test_format_helpers():
    assert format_timedelta(timedelta(seconds=7261)) == "02:01:01"
    assert format_timedelta(None) == "00:00:00"
    assert formatted_size(0) == "0 B"
    assert formatted_size(512) == "512 B"
    assert formatted_size(1536) == "1.50 KB"
    assert formatted_size(2 * 1024 * 1024) == "2 MB"


def test_has_extension():
    assert has_extension(Path("Cover.JPEG"), (".jpg", ".jpeg"))
    assert has_extension(Path("song.mp3"), ("MP3",))
    assert not has_extension(Path("notes.txt"), (".jpg",))
    assert not has_extension(Path("song.mp3"), ())
