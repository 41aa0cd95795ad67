"""Recoverable failures raised by content store boundary calls."""

from __future__ import annotations


class FindReplaceError(Exception):
    """Base class for user-visible, recoverable boundary failures."""


class LoadFailure(FindReplaceError):
    """Listing categories or entries failed."""


class ScanFailure(FindReplaceError):
    """The scan call failed or returned a malformed payload."""


class PreviewFailure(FindReplaceError):
    """The preview call failed or returned a malformed payload."""


class ApplyFailure(FindReplaceError):
    """The apply request failed as a whole; no summary was produced."""


__all__ = [
    "ApplyFailure",
    "FindReplaceError",
    "LoadFailure",
    "PreviewFailure",
    "ScanFailure",
]
