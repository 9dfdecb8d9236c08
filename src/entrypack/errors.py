"""
Exception types raised while converting a dictionary dump.

Every error is fatal for the run. The CLI reports the message and exits
with a non-zero status; nothing is skipped or retried.
"""

from typing import Optional


class EntrypackError(Exception):
    """Base class for all conversion errors."""


class ConfigError(EntrypackError):
    """Raised when a configuration file cannot be read or is invalid."""


class InputError(EntrypackError):
    """Raised when the input ends early or contains undecodable bytes."""


class FormatError(EntrypackError):
    """Raised when a line does not have the shape the document format requires."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class DecodeError(EntrypackError):
    """Raised when an entry fragment cannot be decoded."""

    EXCERPT_LENGTH = 120

    def __init__(self, message: str, fragment: str = ""):
        self.fragment = fragment
        if fragment:
            excerpt = fragment[:self.EXCERPT_LENGTH]
            if len(fragment) > self.EXCERPT_LENGTH:
                excerpt += "..."
            message = f"{message} in fragment: {excerpt}"
        super().__init__(message)
