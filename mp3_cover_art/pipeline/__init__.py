"""
Pipeline Package for MP3 Cover Art.

The pipeline drives a whole batch: it discovers files, prepares the output
folder and hands each file to the cover art service, one at a time.
"""
