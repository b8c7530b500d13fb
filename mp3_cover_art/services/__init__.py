"""
Services Package for MP3 Cover Art.

This package contains the service layer used by the batch pipeline:

- **Logging Service (`AppLogger`):** level-filtered logging to the console and a
  daily append-only log file.

- **File Processing Service (`ProcessMp3Files`):** discovers the MP3 files in the
  input folder.

- **Cover Art Service (`CoverArtEmbedder`):** runs FFmpeg for a single file and
  turns its exit status into a `ConversionOutcome`.
"""
