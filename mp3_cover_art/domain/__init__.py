"""
Domain Package for MP3 Cover Art.

Holds the plain data types passed between the pipeline stages (jobs, per-file
outcomes, the batch tally) and the exceptions that abort a run.
"""
