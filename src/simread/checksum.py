"""
Simple Code Checksum Calculations
=================================

The last four bytes of a .sim file hold a 32-bit checksum (the payload
of the end record). It is calculated as:
- Algorithm: sum of every byte in the file except the last four,
  including the header, in a 32-bit accumulator that wraps around
- Result: two's-complement negation of that sum (~sum + 1, mod 2^32)

So adding the checksum to the byte sum gives zero modulo 2^32.

The comparison with the stored value is informational; a mismatch is
reported, never treated as a decoding failure.
"""

from dataclasses import dataclass
from typing import Union
import logging

from simread.errors import ShortReadError
from simread.source import ByteSource

logger = logging.getLogger(__name__)

CHECKSUM_SIZE = 4
CHECKSUM_MASK = 0xFFFFFFFF


@dataclass(frozen=True)
class ChecksumResult:
    """
    Result of checking a file's trailing checksum.

    Attributes:
        calculated: Checksum computed over all bytes but the last four
        stored: Big-endian value of the last four bytes
    """
    calculated: int
    stored: int

    @property
    def is_valid(self) -> bool:
        """True if the stored checksum matches the calculated one."""
        return self.calculated == self.stored


def _as_source(data: Union[bytes, ByteSource]) -> ByteSource:
    return data if isinstance(data, ByteSource) else ByteSource.from_bytes(data)


def calculate_checksum(data: Union[bytes, ByteSource]) -> int:
    """
    Calculate the checksum of a complete .sim file.

    Args:
        data: The whole file, header included

    Returns:
        32-bit checksum value (0x00000000 - 0xFFFFFFFF)

    Raises:
        ShortReadError: If the file is shorter than the checksum field

    Example:
        >>> calculate_checksum(bytes([0x01, 0x02, 0, 0, 0, 0]))
        4294967293
    """
    source = _as_source(data)
    if source.size < CHECKSUM_SIZE:
        raise ShortReadError(0, CHECKSUM_SIZE, source.size)

    body = source.read_at(0, source.size - CHECKSUM_SIZE)
    total = sum(body) & CHECKSUM_MASK
    return (~total + 1) & CHECKSUM_MASK


def read_stored_checksum(data: Union[bytes, ByteSource]) -> int:
    """
    Read the checksum stored in the last four bytes of the file.

    Raises:
        ShortReadError: If the file is shorter than the checksum field
    """
    source = _as_source(data)
    if source.size < CHECKSUM_SIZE:
        raise ShortReadError(0, CHECKSUM_SIZE, source.size)
    return int.from_bytes(source.read_at(source.size - CHECKSUM_SIZE, CHECKSUM_SIZE), "big")


def verify_checksum(data: Union[bytes, ByteSource]) -> ChecksumResult:
    """
    Calculate the checksum and compare it with the stored one.

    Returns:
        ChecksumResult holding both values

    Example:
        >>> result = verify_checksum(sim_data)
        >>> if not result.is_valid:
        ...     print(f"Mismatch: 0x{result.calculated:08x}")
    """
    result = ChecksumResult(
        calculated=calculate_checksum(data),
        stored=read_stored_checksum(data),
    )
    if result.is_valid:
        logger.debug(f"Checksum valid (0x{result.calculated:08x})")
    else:
        logger.debug(
            f"Checksum mismatch: stored 0x{result.stored:08x}, "
            f"calculated 0x{result.calculated:08x}"
        )
    return result
