"""
Configuration settings related to the audio files and cover images handled.

This module defines which files are picked up from the input folder, which
image types are accepted as cover art, and the fixed pieces of the FFmpeg
command used to attach the picture.
"""

# ======================================================================================
# File Identification
# ======================================================================================

# The only audio format this tool processes. Matching is case-insensitive.
AUDIO_EXTENSION = ".mp3"

# Image formats accepted as cover art (lowercase, compared case-insensitively).
COVER_ART_EXTENSIONS = (".jpg", ".jpeg", ".png", ".bmp", ".gif")


# ======================================================================================
# FFmpeg Invocation
# ======================================================================================

# ID3 tag version written into the output. v2.3 is the most widely supported by players.
ID3V2_VERSION = "3"

# Arguments placed between the two inputs and the output path. Order matters.
# - audio from the first input, picture from the second
# - both streams are copied verbatim (no re-encode)
# - the picture stream is flagged as the attached cover
# - the destination is overwritten unconditionally; the pipeline checks existence first
COVER_ART_STREAM_ARGS = (
    "-map", "0:a",
    "-map", "1:0",
    "-c:a", "copy",
    "-c:v", "copy",
    "-id3v2_version", ID3V2_VERSION,
    "-disposition:v:0", "attached_pic",
    "-y",
)

# Substring FFmpeg writes on stderr in its periodic progress line (elapsed encode time).
PROGRESS_MARKER = "time="
