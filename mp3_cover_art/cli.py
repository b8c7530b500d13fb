"""
Command-Line Interface (CLI) setup for MP3 Cover Art.

This module uses Python's `argparse` to define and parse the command-line
arguments. Usage errors exit with status 1, like every other setup failure.
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config.common import DEFAULT_OUTPUT_DIR_NAME

LOG_LEVEL_CHOICES = ["debug", "info", "warn", "error"]

EPILOG = """\
Examples:
  mp3-cover-art ./input ./cover.jpg
  mp3-cover-art ./music ./artwork.png ./processed
  mp3-cover-art ./input ./cover.jpg --log-level debug
  mp3-cover-art ./input ./cover.jpg ./output --log-level warn
"""


class _ArgumentParser(argparse.ArgumentParser):
    """An ArgumentParser that prints the full help and exits with status 1 on usage errors."""

    def error(self, message):
        self.print_help(sys.stdout)
        self.exit(1, f"\n{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="mp3-cover-art",
        description="Apply one cover art image to every MP3 file in a folder using FFmpeg.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input_folder", help="Path to folder containing MP3 files.")
    parser.add_argument("cover_art", help="Path to image file to use as cover art.")
    parser.add_argument(
        "output_folder",
        nargs="?",
        default=None,
        help=f"Path to output folder (optional, defaults to ../{DEFAULT_OUTPUT_DIR_NAME} next to the input folder).",
    )
    parser.add_argument(
        "--log-level",
        type=str.lower,
        default="info",
        choices=LOG_LEVEL_CHOICES,
        help="Log level: debug, info, warn, error (default: info).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Kill FFmpeg and count the file as failed after this many seconds (default: no limit).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a user configuration YAML file (default: ./config.user.yaml).",
    )
    return parser


def get_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parses command-line arguments.

    Paths are resolved to absolute paths. When no output folder is given, the
    `output` folder next to the input folder is used.

    Args:
        argv: Arguments to parse. Defaults to `sys.argv[1:]`.

    Returns:
        argparse.Namespace: The parsed arguments, with `input_folder`, `cover_art`
                            and `output_folder` as `Path` objects.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be a positive number of seconds")

    args.input_folder = Path(args.input_folder).resolve()
    args.cover_art = Path(args.cover_art).resolve()
    if args.output_folder:
        args.output_folder = Path(args.output_folder).resolve()
    else:
        args.output_folder = args.input_folder.parent / DEFAULT_OUTPUT_DIR_NAME
    args.config = Path(args.config).resolve() if args.config else None

    return args
