"""
Simple Code File Parser
=======================

This module decodes .sim firmware images: the header, the record stream
and the trailing checksum.

Decoding Functions
------------------
- decode_header(): the 14-byte header at offset 0
- decode_record(): exactly one record at a given offset
- iter_records(): lazily walks the record stream after the header

SimParser
---------
The SimParser class runs all three stages over a whole file and keeps
whatever was decoded. A header failure is raised; a failure in the
record stream stops the walk but the checksum is still computed.

Usage Examples
--------------
Reading a file:
    >>> from simread import SimParser
    >>> parser = SimParser.from_file("firmware.sim")
    >>> print(f"Magic: 0x{parser.header.magic_number:08x}")
    >>> for record in parser.records:
    ...     print(record.get_type_name())

Walking records by hand:
    >>> from simread.parser import iter_records
    >>> for record in iter_records(data):
    ...     print(record.offset, record.get_size())
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Union
import logging

from simread.checksum import ChecksumResult, verify_checksum
from simread.config import DEFAULT_MAX_FILE_SIZE
from simread.errors import SimFormatError, TruncatedRecordError, UnrecognizedTagError
from simread.records import (
    HEADER_SIZE,
    DataRecord,
    EndRecord,
    EntryRecord,
    RecordTag,
    SimHeader,
    SimRecord,
)
from simread.source import ByteSource

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Decoding Functions
# =============================================================================

def decode_header(data: bytes) -> SimHeader:
    """
    Decode the file header.

    Args:
        data: The file contents (at least the first 14 bytes)

    Returns:
        The decoded SimHeader

    Raises:
        IncompleteHeaderError: If fewer than 14 bytes are available
    """
    header = SimHeader.from_bytes(data)
    logger.debug(
        f"Header: magic 0x{header.magic_number:08x}, "
        f"{header.program_byte_count} program bytes"
    )
    return header


def decode_record(data: bytes, offset: int) -> tuple[SimRecord, Optional[int]]:
    """
    Decode the record starting at `offset`.

    Dispatches on the tag byte to the record class's from_bytes().

    Args:
        data: The file contents
        offset: Offset of the record's tag byte

    Returns:
        Tuple of (record, offset of the next record). The next offset is
        None after an end record.

    Raises:
        TruncatedRecordError: If the record runs past the end of the data
        UnrecognizedTagError: If the tag byte is not a known record tag
    """
    if offset >= len(data):
        raise TruncatedRecordError(offset, 1, 0)

    tag = data[offset]

    if tag == RecordTag.DATA:
        record, next_offset = DataRecord.from_bytes(data, offset)
        logger.debug(
            f"Data record at {offset}: {record.byte_count} bytes "
            f"@ 0x{record.start_address:08x}"
        )
    elif tag == RecordTag.ENTRY:
        record, next_offset = EntryRecord.from_bytes(data, offset)
        logger.debug(f"Entry record at {offset}: 0x{record.entry_address:08x}")
    elif tag == RecordTag.END:
        record, next_offset = EndRecord.from_bytes(data, offset)
        logger.debug(f"End record at {offset}: checksum 0x{record.checksum:08x}")
    else:
        raise UnrecognizedTagError(offset, tag)

    return record, next_offset


def iter_records(data: bytes, start_offset: int = HEADER_SIZE) -> Iterator[SimRecord]:
    """
    Walk the record stream.

    Each call starts a fresh pass from `start_offset`. The walk ends after
    an end record or when the cursor reaches the end of the data. Decode
    errors propagate to the caller and end the sequence.

    Args:
        data: The file contents
        start_offset: Offset of the first record (default: after the header)

    Yields:
        Decoded records in file order
    """
    cursor: Optional[int] = start_offset
    while cursor is not None and cursor < len(data):
        record, cursor = decode_record(data, cursor)
        yield record


# =============================================================================
# Simple Code Parser
# =============================================================================

@dataclass
class SimParser:
    """
    Parser for complete .sim files.

    Attributes:
        source: The loaded file
        header: The decoded header
        records: Records decoded before the end of the stream or a failure
        checksum: Calculated and stored checksum, if the file was long enough
        record_error: The error that stopped the record walk, if any

    Example:
        >>> parser = SimParser.from_file("firmware.sim")
        >>> if parser.record_error:
        ...     print(f"Stream stopped: {parser.record_error}")
    """
    source: ByteSource = field(repr=False)
    header: Optional[SimHeader] = None
    records: list[SimRecord] = field(default_factory=list)
    checksum: Optional[ChecksumResult] = None
    record_error: Optional[SimFormatError] = None

    def __post_init__(self) -> None:
        """Parse the file after initialization."""
        self._parse()

    @classmethod
    def from_file(
        cls,
        filepath: Union[str, Path],
        max_size: int = DEFAULT_MAX_FILE_SIZE,
    ) -> "SimParser":
        """
        Create a SimParser from a file path.

        Raises:
            FileOpenError: If the file cannot be opened
            OversizeFileError: If the file is larger than max_size
            IncompleteHeaderError: If the header cannot be read
        """
        return cls(source=ByteSource.from_file(filepath, max_size))

    @classmethod
    def from_bytes(cls, data: bytes) -> "SimParser":
        """Create a SimParser from raw bytes."""
        return cls(source=ByteSource.from_bytes(data))

    @property
    def data(self) -> bytes:
        return self.source.data

    @property
    def is_complete(self) -> bool:
        """True if the stream ended with an end record and no error."""
        return self.record_error is None and self.get_end_record() is not None

    def _parse(self) -> None:
        self.header = decode_header(self.data)

        self.records.clear()
        try:
            for record in iter_records(self.data):
                self.records.append(record)
        except SimFormatError as e:
            self.record_error = e
            logger.debug(f"Record stream stopped: {e}")

        self.checksum = verify_checksum(self.source)

    # =========================================================================
    # Public Query Methods
    # =========================================================================

    def iter_data_records(self) -> Iterator[DataRecord]:
        """Iterate over all data records."""
        for record in self.records:
            if isinstance(record, DataRecord):
                yield record

    def get_entry_record(self) -> Optional[EntryRecord]:
        """Get the first entry record, if any."""
        for record in self.records:
            if isinstance(record, EntryRecord):
                return record
        return None

    def get_end_record(self) -> Optional[EndRecord]:
        """Get the end record, if the stream reached one."""
        if self.records and isinstance(self.records[-1], EndRecord):
            return self.records[-1]
        return None

    def get_program_size(self) -> int:
        """Total number of program bytes across all data records."""
        return sum(record.byte_count for record in self.iter_data_records())

    def get_info(self) -> dict:
        """
        Get summary information about the file.

        Returns:
            Dictionary with file information
        """
        info = {
            "file_size": self.source.size,
            "magic_number": f"0x{self.header.magic_number:08x}",
            "program_flags": f"0x{self.header.program_flags:08x}",
            "declared_program_bytes": self.header.program_byte_count,
            "version": f"0x{self.header.version_info:04x}",
            "data_records": sum(1 for _ in self.iter_data_records()),
            "program_bytes": self.get_program_size(),
            "total_records": len(self.records),
            "complete": self.is_complete,
        }
        if self.checksum is not None:
            info["checksum"] = f"0x{self.checksum.calculated:08x}"
            info["checksum_valid"] = self.checksum.is_valid
        if self.record_error is not None:
            info["error"] = str(self.record_error)
        return info


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_sim(data: bytes) -> SimParser:
    """
    Parse a .sim file from bytes.

    Raises:
        IncompleteHeaderError: If the header cannot be read
    """
    return SimParser.from_bytes(data)


def parse_sim_file(
    filepath: Union[str, Path],
    max_size: int = DEFAULT_MAX_FILE_SIZE,
) -> SimParser:
    """
    Parse a .sim file from disk.

    Raises:
        FileOpenError: If the file cannot be opened
        OversizeFileError: If the file is larger than max_size
        IncompleteHeaderError: If the header cannot be read
    """
    return SimParser.from_file(filepath, max_size)
