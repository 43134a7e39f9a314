"""
Simple Code Record Definitions
==============================

This module defines the data structures for IAR Simple Code (.sim)
firmware images.

File Structure Overview
-----------------------
A .sim file contains:
1. Header (14 bytes): magic number, program flags, program byte count,
   version information
2. Records (variable): data, entry and end records, back to back
3. Trailing checksum (4 bytes): the last field of the end record

All multi-byte integers are big-endian.

Record Format
-------------
Every record starts with a one-byte tag and its length follows from its
own fields:

**Data record** (tag $01, 12 + n bytes):
    Byte 0:     Tag ($01)
    Byte 1:     Segment type
    Byte 2-3:   Record flags
    Byte 4-7:   Start address
    Byte 8-11:  Number of program bytes (n)
    Byte 12+:   Program bytes

**Entry record** (tag $02, 6 bytes):
    Byte 0:     Tag ($02)
    Byte 1-4:   Entry address
    Byte 5:     Segment type

**End record** (tag $03, 5 bytes):
    Byte 0:     Tag ($03)
    Byte 1-4:   Checksum

Note: the entry record layout has not been checked against a captured
file yet and should be treated as provisional.

Reference
---------
- IAR Simple Code format: http://netstorage.iar.com/SuppDB/Public/UPDINFO/006220/simple_code.htm
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Optional
import struct

from simread.errors import IncompleteHeaderError, TruncatedRecordError


HEADER_SIZE = 14


# =============================================================================
# Enumeration Types
# =============================================================================

class RecordTag(IntEnum):
    """Tag byte identifying the kind of each record."""
    DATA = 0x01
    ENTRY = 0x02
    END = 0x03

    @classmethod
    def get_name(cls, tag: int) -> str:
        """Get a human-readable name for a tag byte."""
        names = {
            0x01: "Data record",
            0x02: "Entry record",
            0x03: "End record",
        }
        return names.get(tag, f"Unknown (0x{tag:02X})")


def _require(data: bytes, offset: int, needed: int) -> None:
    """Raise TruncatedRecordError unless `needed` bytes remain at `offset`."""
    available = max(0, len(data) - offset)
    if needed > available:
        raise TruncatedRecordError(offset, needed, available)


# =============================================================================
# Header
# =============================================================================

@dataclass(frozen=True)
class SimHeader:
    """
    File header (14 bytes at offset 0).

    Structure:
        Offset  Size    Description
        ------  ----    -----------
        0       4       Magic number
        4       4       Program flags
        8       4       Number of program bytes
        12      2       Version information

    Values are surfaced verbatim; neither the magic number nor the
    version is checked against known values.
    """
    magic_number: int
    program_flags: int
    program_byte_count: int
    version_info: int
    SIZE: ClassVar[int] = HEADER_SIZE

    @classmethod
    def from_bytes(cls, data: bytes) -> "SimHeader":
        """
        Decode the header from the start of a file.

        Raises:
            IncompleteHeaderError: If fewer than 14 bytes are available
        """
        if len(data) < HEADER_SIZE:
            raise IncompleteHeaderError(len(data), HEADER_SIZE)

        magic_number, program_flags, program_byte_count, version_info = (
            struct.unpack_from(">IIIH", data, 0)
        )
        return cls(
            magic_number=magic_number,
            program_flags=program_flags,
            program_byte_count=program_byte_count,
            version_info=version_info,
        )


# =============================================================================
# Record Base Class
# =============================================================================

@dataclass(frozen=True)
class SimRecord:
    """
    Base class for records in the record stream.

    Attributes:
        offset: File offset of the record's tag byte
    """
    offset: int
    tag: ClassVar[RecordTag]

    def get_size(self) -> int:
        """Get the total span of this record in bytes."""
        raise NotImplementedError("Subclasses must implement get_size()")

    def get_type_name(self) -> str:
        """Get a human-readable name for this record type."""
        return RecordTag.get_name(self.tag)

    def get_next_offset(self) -> Optional[int]:
        """Offset of the following record, or None if this one is terminal."""
        return self.offset + self.get_size()


# =============================================================================
# Data Record
# =============================================================================

@dataclass(frozen=True)
class DataRecord(SimRecord):
    """
    Data record (tag $01): a block of program bytes at a start address.
    """
    tag: ClassVar[RecordTag] = RecordTag.DATA
    FIXED_SIZE: ClassVar[int] = 12

    segment_type: int = 0
    record_flags: int = 0
    start_address: int = 0
    byte_count: int = 0
    program_bytes: bytes = field(default=b"", repr=False)

    def get_size(self) -> int:
        return self.FIXED_SIZE + self.byte_count

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = 0) -> tuple["DataRecord", int]:
        """
        Parse a data record.

        The declared byte count is checked against the remaining buffer
        before the payload is sliced.

        Args:
            data: The raw file data
            offset: Offset of the tag byte

        Returns:
            Tuple of (DataRecord, offset of the next record)

        Raises:
            TruncatedRecordError: If the fields or payload run past the buffer
        """
        _require(data, offset, cls.FIXED_SIZE)

        segment_type, record_flags, start_address, byte_count = (
            struct.unpack_from(">BHII", data, offset + 1)
        )

        total = cls.FIXED_SIZE + byte_count
        _require(data, offset, total)

        payload_start = offset + cls.FIXED_SIZE
        record = cls(
            offset=offset,
            segment_type=segment_type,
            record_flags=record_flags,
            start_address=start_address,
            byte_count=byte_count,
            program_bytes=bytes(data[payload_start:payload_start + byte_count]),
        )
        return record, offset + total


# =============================================================================
# Entry Record
# =============================================================================

@dataclass(frozen=True)
class EntryRecord(SimRecord):
    """
    Entry record (tag $02): the program entry point.

    Provisional layout: not yet confirmed against a real file.
    """
    tag: ClassVar[RecordTag] = RecordTag.ENTRY
    SIZE: ClassVar[int] = 6

    entry_address: int = 0
    segment_type: int = 0

    def get_size(self) -> int:
        return self.SIZE

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = 0) -> tuple["EntryRecord", int]:
        """Parse an entry record, returning it and the next record's offset."""
        _require(data, offset, cls.SIZE)
        entry_address, segment_type = struct.unpack_from(">IB", data, offset + 1)
        record = cls(offset=offset, entry_address=entry_address, segment_type=segment_type)
        return record, offset + cls.SIZE


# =============================================================================
# End Record
# =============================================================================

@dataclass(frozen=True)
class EndRecord(SimRecord):
    """
    End record (tag $03): carries the file checksum and ends the stream.
    """
    tag: ClassVar[RecordTag] = RecordTag.END
    SIZE: ClassVar[int] = 5

    checksum: int = 0

    def get_size(self) -> int:
        return self.SIZE

    def get_next_offset(self) -> Optional[int]:
        return None

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = 0) -> tuple["EndRecord", None]:
        """Parse an end record. There is never a next offset."""
        _require(data, offset, cls.SIZE)
        (checksum,) = struct.unpack_from(">I", data, offset + 1)
        return cls(offset=offset, checksum=checksum), None
