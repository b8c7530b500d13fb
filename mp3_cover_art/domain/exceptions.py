"""
Defines custom exception types for the MP3 Cover Art application.

Only setup problems are exceptions. Anything that goes wrong with a single file
is recorded in a `ConversionOutcome` and counted in the batch tally instead, so
that one bad file never stops the rest of the batch.

All custom exceptions inherit from the base `CoverArtException`.
"""


class CoverArtException(Exception):
    """Base class for all custom exceptions in the MP3 Cover Art application."""

    pass


class FatalSetupError(CoverArtException):
    """
    Base class for precondition failures that abort the whole run.

    These are detected before any file is converted (or, for the output folder and
    folder listing, before the first conversion starts). The application shell
    reports them and exits with a non-zero status.
    """

    pass


class InputFolderNotFoundError(FatalSetupError):
    """Raised when the input folder does not exist or is not a directory."""

    pass


class CoverArtNotFoundError(FatalSetupError):
    """Raised when the cover art file does not exist."""

    pass


class InvalidCoverArtError(FatalSetupError):
    """Raised when the cover art file does not have a supported image extension."""

    pass


class OutputFolderError(FatalSetupError):
    """Raised when the output folder cannot be created."""

    pass


class FolderListingError(FatalSetupError):
    """Raised when the entries of the input folder cannot be listed."""

    pass


class FFmpegNotAvailableError(FatalSetupError):
    """
    Raised when the FFmpeg availability probe fails.

    Every conversion would fail the same way, so the run stops before the first one.
    """

    pass
