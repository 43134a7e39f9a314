"""
Text rendering for decoded .sim files.

Every function returns a list of lines; printing is left to the caller.
"""

from simread.checksum import ChecksumResult
from simread.records import DataRecord, EndRecord, EntryRecord, SimHeader, SimRecord


def format_file_size(size: int) -> list[str]:
    return [f"File size = {size}"]


def format_header(header: SimHeader) -> list[str]:
    return [
        "Header",
        f"Magic number = 0x{header.magic_number:08x}",
        f"Program flags = 0x{header.program_flags:08x}",
        f"Number of Program Bytes = {header.program_byte_count}",
        f"Version Information = 0x{header.version_info:04x}",
    ]


def format_program_bytes(program_bytes: bytes) -> str:
    """Render a payload as space-separated hex, e.g. '0xaa 0xbb'."""
    return " ".join(f"0x{byte:02x}" for byte in program_bytes)


def format_record(record: SimRecord, hide_program_bytes: bool = False) -> list[str]:
    """
    Render one record as a block of lines.

    Args:
        record: A decoded record
        hide_program_bytes: Replace data record payloads with a placeholder

    Returns:
        Lines describing the record
    """
    lines = [record.get_type_name()]

    if isinstance(record, DataRecord):
        lines.append(f"Segment type = 0x{record.segment_type:02x}")
        lines.append(f"Record flags = 0x{record.record_flags:04x}")
        lines.append(f"Record start address = 0x{record.start_address:08x}")
        lines.append(f"Number of program bytes = {record.byte_count}")
        if hide_program_bytes:
            lines.append("[Program bytes hidden]")
        else:
            lines.append(f"Program bytes = {format_program_bytes(record.program_bytes)}")

    elif isinstance(record, EntryRecord):
        lines.append(f"Entry address = 0x{record.entry_address:08x}")
        lines.append(f"Segment type = 0x{record.segment_type:02x}")

    elif isinstance(record, EndRecord):
        lines.append(f"Checksum = 0x{record.checksum:08x}")

    return lines


def format_checksum(result: ChecksumResult) -> list[str]:
    lines = [
        f"Calculated checksum = 0x{result.calculated:08x}",
        f"Stored checksum = 0x{result.stored:08x}",
    ]
    if result.is_valid:
        lines.append("Checksum match")
    else:
        lines.append("Checksum MISMATCH")
    return lines
