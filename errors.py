"""errors.py — Exceptions raised by the extractor and the player."""


class SpeedReadError(Exception):
    """Base class for all speedread errors."""


class UnsupportedFormat(SpeedReadError, ValueError):
    """The document is neither PDF nor EPUB."""


class ExtractionError(SpeedReadError):
    """A PDF/EPUB could not be opened or parsed."""


class InvalidRate(SpeedReadError, ValueError):
    """Words-per-minute is not a positive number."""
