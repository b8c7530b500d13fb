"""
Configuration Package for MP3 Cover Art.

Static settings (file extensions, the FFmpeg argument template, logging layout)
live in the modules of this package, separate from the processing logic. The
optional user file `config.user.yaml` is read by `common.load_user_config`.
"""
