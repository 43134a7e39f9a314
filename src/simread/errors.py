"""
simread Error Hierarchy
=======================

This module defines the exception hierarchy for simread. All exceptions
inherit from SimReadError, allowing callers to catch every decoding or
loading failure with a single except clause if desired.

Exception Hierarchy
-------------------
SimReadError (base)
├── FileOpenError - file missing, a directory, or unreadable
├── OversizeFileError - file larger than the configured limit
├── ShortReadError - fewer bytes available than requested
└── SimFormatError (malformed .sim content)
    ├── IncompleteHeaderError - fewer than 14 header bytes
    ├── TruncatedRecordError - record extends past the end of the file
    └── UnrecognizedTagError - record tag is not data, entry or end

Each exception keeps the values that caused it as attributes (offsets,
sizes, tag byte) so callers can report them without parsing messages.
"""

from pathlib import Path
from typing import Optional, Union


# =============================================================================
# Base Exception Class
# =============================================================================

class SimReadError(Exception):
    """
    Base exception for all simread errors.

        try:
            parser = SimParser.from_file("firmware.sim")
        except SimReadError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# File Loading Exceptions
# =============================================================================

class FileOpenError(SimReadError):
    """The input file does not exist or cannot be read."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None):
        self.path = Path(path)
        self.reason = reason
        message = f"could not open file '{self.path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class OversizeFileError(SimReadError):
    """
    File exceeds the configured maximum size.

    Raised before any parsing takes place. A file whose size equals the
    limit is accepted.
    """

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"file size too large ({size} > {limit})")


class ShortReadError(SimReadError):
    """Fewer bytes were available than a read requested."""

    def __init__(self, offset: int, requested: int, available: int):
        self.offset = offset
        self.requested = requested
        self.available = available
        super().__init__(
            f"short read at offset {offset}: requested {requested} bytes, "
            f"{available} available"
        )


# =============================================================================
# Format Exceptions
# =============================================================================

class SimFormatError(SimReadError):
    """
    Malformed Simple Code content.

    Raised while decoding the header or the record stream. The record
    walker stops at the first SimFormatError; nothing is retried.
    """
    pass


class IncompleteHeaderError(SimFormatError):
    """Fewer than 14 bytes are available for the file header."""

    def __init__(self, available: int, required: int = 14):
        self.available = available
        self.required = required
        super().__init__(
            f"could not read header: need {required} bytes, got {available}"
        )


class TruncatedRecordError(SimFormatError):
    """
    A record claims a span that runs past the end of the buffer.

    Attributes:
        offset: File offset of the record's tag byte
        needed: Total bytes the record requires from its offset
        available: Bytes actually remaining from its offset
    """

    def __init__(self, offset: int, needed: int, available: int):
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(
            f"truncated record at offset {offset}: needs {needed} bytes, "
            f"{available} remaining"
        )


class UnrecognizedTagError(SimFormatError):
    """A record's leading byte is not a known record tag."""

    def __init__(self, offset: int, tag: int):
        self.offset = offset
        self.tag = tag
        super().__init__(f"unrecognized record tag 0x{tag:02X} at offset {offset}")
