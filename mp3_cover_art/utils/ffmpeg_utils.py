"""
This module provides utility functions for running FFmpeg.

It builds the fixed cover-art command line and runs external commands while
continuously draining both output streams, so a chatty child process can never
block on a full pipe while the parent waits for it to exit.
"""

import os
import shlex
import signal
import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, IO, List, Optional

from ..config.audio import COVER_ART_STREAM_ARGS

# Seconds to wait for the output readers once the process has been killed.
READER_JOIN_TIMEOUT_AFTER_KILL = 5.0


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of an external command run by `run_cmd_streaming`.

    Attributes:
        returncode: Exit status of the process. When it was killed after a
                    timeout, this is whatever the OS reported for the kill.
        stdout: Everything the process wrote to standard output.
        stderr: Everything the process wrote to standard error.
        timed_out: True if the process was killed for exceeding the time limit.
    """

    returncode: Optional[int]
    stdout: str
    stderr: str
    timed_out: bool = False


def build_cover_art_cmd(
    ffmpeg_cmd: str, input_file: Path, cover_art_path: Path, output_file: Path
) -> List[str]:
    """
    Builds the FFmpeg argument list that attaches `cover_art_path` to `input_file`.

    The result is:
    `<ffmpeg> -i <input> -i <cover> -map 0:a -map 1:0 -c:a copy -c:v copy
    -id3v2_version 3 -disposition:v:0 attached_pic -y <output>`
    """
    return [
        ffmpeg_cmd,
        "-i", str(input_file),
        "-i", str(cover_art_path),
        *COVER_ART_STREAM_ARGS,
        str(output_file),
    ]


def format_cmd_for_display(cmd_list: List[str]) -> str:
    """Quotes and joins a command list the way the current platform's shell expects."""
    if os.name == "nt":
        return subprocess.list2cmdline(cmd_list)
    return shlex.join(cmd_list)


def _drain_stream(
    stream: IO[str], chunks: List[str], on_line: Optional[Callable[[str], None]]
):
    try:
        for line in stream:
            chunks.append(line)
            if on_line:
                on_line(line.rstrip("\n"))
    finally:
        stream.close()


def _kill_process_tree(process: subprocess.Popen):
    """
    Kills `process` together with every process it started, then reaps it.

    The child runs in its own process group (POSIX session or Windows process
    group), so wrapper scripts and shims do not leave a grandchild behind that
    keeps the output pipes open.
    """
    if os.name == "nt":
        try:
            subprocess.run(
                ["taskkill", "/F", "/T", "/PID", str(process.pid)],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError:
            pass
        process.kill()
    else:
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except (ProcessLookupError, PermissionError):
            process.kill()
    process.wait()


def run_cmd_streaming(
    cmd_list: List[str],
    on_stderr_line: Optional[Callable[[str], None]] = None,
    on_stdout_line: Optional[Callable[[str], None]] = None,
    timeout: Optional[float] = None,
) -> CommandResult:
    """
    Executes an external command and captures its output while it runs.

    Standard input is closed. Standard output and standard error are each read by
    their own thread for as long as the process runs. Output is decoded as UTF-8
    (undecodable bytes are replaced) with universal newlines, so carriage-return
    progress updates arrive as separate lines. Callbacks are invoked from the
    reader threads, one line at a time, as the output arrives.

    Args:
        cmd_list: The command and its arguments. Never run through a shell.
        on_stderr_line: Called with each standard error line (without newline).
        on_stdout_line: Called with each standard output line (without newline).
        timeout: Seconds to wait before killing the process and everything it
                 started. None waits forever.

    Returns:
        A `CommandResult` with the exit status and the full captured output.

    Raises:
        OSError: If the process cannot be started (e.g., executable not found,
                 permission denied).
    """
    if os.name == "nt":
        group_kwargs = {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}
    else:
        group_kwargs = {"start_new_session": True}

    process = subprocess.Popen(
        cmd_list,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
        shell=False,
        **group_kwargs,
    )

    stdout_chunks: List[str] = []
    stderr_chunks: List[str] = []
    readers = [
        threading.Thread(
            target=_drain_stream,
            args=(process.stdout, stdout_chunks, on_stdout_line),
            daemon=True,
        ),
        threading.Thread(
            target=_drain_stream,
            args=(process.stderr, stderr_chunks, on_stderr_line),
            daemon=True,
        ),
    ]
    for reader in readers:
        reader.start()

    timed_out = False
    killed = False
    try:
        process.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        timed_out = killed = True
        _kill_process_tree(process)
    except BaseException:
        # Interrupted (e.g., Ctrl+C): do not leave the child running.
        killed = True
        _kill_process_tree(process)
        raise
    finally:
        # After a kill, an escaped descendant may still hold the pipes open.
        join_timeout = READER_JOIN_TIMEOUT_AFTER_KILL if killed else None
        for reader in readers:
            reader.join(timeout=join_timeout)

    return CommandResult(
        returncode=process.returncode,
        stdout="".join(stdout_chunks),
        stderr="".join(stderr_chunks),
        timed_out=timed_out,
    )
