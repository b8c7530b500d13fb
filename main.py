"""
Main entry point for the MP3 Cover Art application.

Applies one cover image to every MP3 file in a folder:

    python main.py <input-folder> <cover-art-image> [output-folder] [--log-level <level>]

The same program is installed as the `mp3-cover-art` console script.
"""

import sys

from mp3_cover_art.application import main


if __name__ == "__main__":
    sys.exit(main())
