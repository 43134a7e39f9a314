"""
simread - IAR Simple Code Firmware Image Reader
===============================================

This package decodes IAR Simple Code (.sim) firmware images and renders
them as human-readable text.

A .sim file is a 14-byte header followed by a stream of tagged records
(program data, entry point, end of file) and a trailing 32-bit checksum.

Main Components
---------------
- **records**: Header and record data structures
- **parser**: Header/record decoding, record stream walker, SimParser
- **checksum**: Checksum calculation and verification
- **presenter**: Text rendering of decoded values
- **cli**: The `simread` command-line tool

Quick Start
-----------
Read a file:
    >>> from simread import SimParser
    >>> parser = SimParser.from_file("firmware.sim")
    >>> for record in parser.records:
    ...     print(record.get_type_name())

Or use the command-line tool:
    $ simread firmware.sim
    $ simread firmware.sim -h

Reference Documentation
-----------------------
- IAR Simple Code format: http://netstorage.iar.com/SuppDB/Public/UPDINFO/006220/simple_code.htm
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from simread.errors import (
    SimReadError,
    FileOpenError,
    OversizeFileError,
    ShortReadError,
    SimFormatError,
    IncompleteHeaderError,
    TruncatedRecordError,
    UnrecognizedTagError,
)

from simread.config import SimReadConfig, DEFAULT_MAX_FILE_SIZE
from simread.source import ByteSource

from simread.records import (
    HEADER_SIZE,
    RecordTag,
    SimHeader,
    SimRecord,
    DataRecord,
    EntryRecord,
    EndRecord,
)

from simread.checksum import (
    ChecksumResult,
    calculate_checksum,
    read_stored_checksum,
    verify_checksum,
)

from simread.parser import (
    SimParser,
    decode_header,
    decode_record,
    iter_records,
    parse_sim,
    parse_sim_file,
)

__all__ = [
    "__version__",
    # Errors
    "SimReadError",
    "FileOpenError",
    "OversizeFileError",
    "ShortReadError",
    "SimFormatError",
    "IncompleteHeaderError",
    "TruncatedRecordError",
    "UnrecognizedTagError",
    # Configuration and input
    "SimReadConfig",
    "DEFAULT_MAX_FILE_SIZE",
    "ByteSource",
    # Records
    "HEADER_SIZE",
    "RecordTag",
    "SimHeader",
    "SimRecord",
    "DataRecord",
    "EntryRecord",
    "EndRecord",
    # Checksum
    "ChecksumResult",
    "calculate_checksum",
    "read_stored_checksum",
    "verify_checksum",
    # Parser
    "SimParser",
    "decode_header",
    "decode_record",
    "iter_records",
    "parse_sim",
    "parse_sim_file",
]
