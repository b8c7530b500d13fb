"""
Utility Package for MP3 Cover Art.

Small helpers used by the services: running FFmpeg with live output draining,
locating and probing the FFmpeg executable, and formatting values for logs.
"""
