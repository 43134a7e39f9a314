"""
Byte Source
===========

A finite, in-memory view of a Simple Code file. The whole file is loaded
with one bulk read; every decoder then works on the immutable bytes.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union
import logging

from simread.config import DEFAULT_MAX_FILE_SIZE
from simread.errors import FileOpenError, OversizeFileError, ShortReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ByteSource:
    """
    Raw bytes of a Simple Code file.

    Attributes:
        data: The file contents
        name: Where the bytes came from (file path or "<bytes>")

    Example:
        >>> source = ByteSource.from_file("firmware.sim")
        >>> print(f"File size = {source.size}")
    """
    data: bytes = field(repr=False)
    name: str = "<bytes>"

    @classmethod
    def from_file(
        cls,
        filepath: Union[str, Path],
        max_size: int = DEFAULT_MAX_FILE_SIZE,
    ) -> "ByteSource":
        """
        Load a file, rejecting it if it is too large.

        The size reported by the filesystem is checked first. Pipes and
        character devices report a size of 0, so at most max_size + 1
        bytes are ever read and anything beyond max_size is rejected.

        Args:
            filepath: Path to the .sim file
            max_size: Largest accepted size in bytes (inclusive)

        Returns:
            A ByteSource holding the file contents

        Raises:
            FileOpenError: If the file is missing, a directory, or unreadable
            OversizeFileError: If the file is larger than max_size
        """
        filepath = Path(filepath)

        try:
            size = filepath.stat().st_size
        except OSError as e:
            raise FileOpenError(filepath, e.strerror) from e

        if filepath.is_dir():
            raise FileOpenError(filepath, "is a directory")

        if size > max_size:
            raise OversizeFileError(size, max_size)

        try:
            with filepath.open("rb") as f:
                data = f.read(max_size + 1)
        except OSError as e:
            raise FileOpenError(filepath, e.strerror) from e

        if len(data) > max_size:
            raise OversizeFileError(len(data), max_size)

        logger.debug(f"Loaded {len(data)} bytes from {filepath}")
        return cls(data=data, name=str(filepath))

    @classmethod
    def from_bytes(cls, data: bytes) -> "ByteSource":
        """Wrap an in-memory blob."""
        return cls(data=bytes(data))

    @property
    def size(self) -> int:
        """Total size in bytes."""
        return len(self.data)

    def read_at(self, offset: int, length: int) -> bytes:
        """
        Read exactly `length` bytes starting at `offset`.

        Raises:
            ShortReadError: If fewer than `length` bytes are available
        """
        available = max(0, self.size - offset)
        if offset < 0 or length > available:
            raise ShortReadError(offset, length, available)
        return self.data[offset:offset + length]
