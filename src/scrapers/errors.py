# src/scrapers/errors.py

"""Fatal error taxonomy for a tracker run.

Any of these aborts the run before the snapshot is written; the CLI
catches them once, logs them, and exits non-zero.
"""


class TrackerError(Exception):
    """Base class for errors that abort a tracker run."""


class TransportError(TrackerError):
    """Network failure, timeout, or non-2xx response on any HTTP step."""


class SessionError(TrackerError):
    """Session token or store selection missing or malformed."""


class ResponseFormatError(TrackerError):
    """Catalog response does not carry the expected product list."""
