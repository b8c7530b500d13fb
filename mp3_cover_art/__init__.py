"""
MP3 Cover Art: embeds one cover image into every MP3 file of a folder.

The heavy lifting is delegated to FFmpeg (stream copy, no re-encoding). This
package provides the batch pipeline around it: discovering files, invoking
FFmpeg per file, isolating failures, skipping already-written outputs, and
logging everything to the console and to a daily log file.
"""

__version__ = "1.0.0"
