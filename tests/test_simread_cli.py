"""
Tests for simread - Command-Line Tool
=====================================

These tests verify the text rendering of decoded values and the
behaviour of the `simread` command, including exit codes.
"""

import struct
from pathlib import Path

import pytest
from click.testing import CliRunner

from simread import ChecksumResult, DataRecord, EndRecord, EntryRecord, decode_header
from simread.cli.errors import ExitCode, handle_cli_exception
from simread.errors import UnrecognizedTagError
from simread.cli.simread import main
from simread.presenter import (
    format_checksum,
    format_file_size,
    format_header,
    format_program_bytes,
    format_record,
)


SCENARIO = bytes.fromhex(
    "00000001" "00000000" "00000003" "0100"
    "01" "00" "0000" "00000000" "00000003" "AABBCC"
    "03" "00000000"
)


@pytest.fixture
def run_simread(tmp_path: Path):
    """Return a helper that writes `data` to a .sim file and runs simread on it."""
    def run(data: bytes, *args: str, env: dict = None):
        sim_file = tmp_path / "test.sim"
        sim_file.write_bytes(data)
        return CliRunner().invoke(main, [str(sim_file), *args], env=env)
    return run


# =============================================================================
# Presenter Tests
# =============================================================================

class TestPresenter:
    """Tests for formatting decoded values."""

    def test_file_size(self):
        assert format_file_size(34) == ["File size = 34"]

    def test_header(self):
        lines = format_header(decode_header(SCENARIO))
        assert lines == [
            "Header",
            "Magic number = 0x00000001",
            "Program flags = 0x00000000",
            "Number of Program Bytes = 3",
            "Version Information = 0x0100",
        ]

    def test_data_record(self):
        record = DataRecord(
            offset=14,
            segment_type=0x01,
            record_flags=0x0002,
            start_address=0x8000,
            byte_count=2,
            program_bytes=b"\x0f\xa0",
        )
        assert format_record(record) == [
            "Data record",
            "Segment type = 0x01",
            "Record flags = 0x0002",
            "Record start address = 0x00008000",
            "Number of program bytes = 2",
            "Program bytes = 0x0f 0xa0",
        ]

    def test_data_record_hidden(self):
        record = DataRecord(offset=14, byte_count=1, program_bytes=b"\x55")
        lines = format_record(record, hide_program_bytes=True)
        assert lines[-1] == "[Program bytes hidden]"
        assert not any("0x55" in line for line in lines)

    def test_entry_record(self):
        lines = format_record(EntryRecord(offset=14, entry_address=0x1234, segment_type=2))
        assert lines == ["Entry record", "Entry address = 0x00001234", "Segment type = 0x02"]

    def test_end_record(self):
        assert format_record(EndRecord(offset=14, checksum=0xABCD)) == [
            "End record",
            "Checksum = 0x0000abcd",
        ]

    def test_empty_payload(self):
        assert format_program_bytes(b"") == ""

    def test_checksum_match(self):
        lines = format_checksum(ChecksumResult(calculated=5, stored=5))
        assert lines[0] == "Calculated checksum = 0x00000005"
        assert lines[-1] == "Checksum match"

    def test_checksum_mismatch(self):
        lines = format_checksum(ChecksumResult(calculated=5, stored=6))
        assert "Stored checksum = 0x00000006" in lines
        assert lines[-1] == "Checksum MISMATCH"


# =============================================================================
# Command Tests
# =============================================================================

class TestSimreadCommand:
    """Tests for the simread command."""

    def test_scenario_output(self, run_simread):
        result = run_simread(SCENARIO)

        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert "File size = 34" in result.output
        assert "Magic number = 0x00000001" in result.output
        assert "Number of Program Bytes = 3" in result.output
        assert "Version Information = 0x0100" in result.output
        assert "Data record" in result.output
        assert "Program bytes = 0xaa 0xbb 0xcc" in result.output
        assert "End record" in result.output
        assert "Calculated checksum = 0xfffffdc3" in result.output
        assert "Checksum MISMATCH" in result.output

    def test_output_order(self, run_simread):
        output = run_simread(SCENARIO).output
        positions = [
            output.index("File size"),
            output.index("Header"),
            output.index("Data record"),
            output.index("End record"),
            output.index("----"),
            output.index("Calculated checksum"),
        ]
        assert positions == sorted(positions)

    def test_hide_bytes(self, run_simread):
        result = run_simread(SCENARIO, "-h")

        assert result.exit_code == 0
        assert "[Program bytes hidden]" in result.output
        assert "0xaa" not in result.output
        # Decoding and checksum are unaffected
        assert "Number of program bytes = 3" in result.output
        assert "Calculated checksum = 0xfffffdc3" in result.output

    def test_hide_bytes_from_env(self, run_simread):
        result = run_simread(SCENARIO, env={"SIMREAD_HIDE_BYTES": "1"})
        assert result.exit_code == 0
        assert "[Program bytes hidden]" in result.output

    def test_valid_checksum(self, run_simread):
        body = SCENARIO[:-4]
        data = body + struct.pack(">I", (-sum(body)) & 0xFFFFFFFF)
        result = run_simread(data)
        assert result.exit_code == 0
        assert "Checksum match" in result.output

    def test_size_equal_to_limit(self, run_simread):
        result = run_simread(SCENARIO, "-m", "34")
        assert result.exit_code == 0
        assert "File size = 34" in result.output

    def test_size_over_limit(self, run_simread):
        result = run_simread(SCENARIO, "-m", "33")
        assert result.exit_code == ExitCode.DECODE_ERROR
        assert "file size too large (34 > 33)" in result.output
        assert "Magic number" not in result.output

    def test_missing_file(self, tmp_path: Path):
        result = CliRunner().invoke(main, [str(tmp_path / "missing.sim")])
        assert result.exit_code == ExitCode.DECODE_ERROR
        assert "could not open file" in result.output

    def test_incomplete_header(self, run_simread):
        result = run_simread(bytes(10))
        assert result.exit_code == ExitCode.DECODE_ERROR
        assert "File size = 10" in result.output
        assert "could not read header" in result.output
        assert "Magic number" not in result.output
        assert "Calculated checksum" not in result.output

    def test_unrecognized_tag(self, run_simread):
        data = SCENARIO[:29] + b"\x07" + bytes(4)
        result = run_simread(data)

        assert result.exit_code == ExitCode.DECODE_ERROR
        # The data record decoded before the failure is still shown
        assert "Program bytes = 0xaa 0xbb 0xcc" in result.output
        assert "unrecognized record tag 0x07 at offset 29" in result.output
        assert result.output.count("unrecognized record tag 0x07") == 1
        # The checksum is computed regardless
        assert "Calculated checksum" in result.output

    def test_truncated_record(self, run_simread):
        data = SCENARIO[:14] + struct.pack(">BBHII", 1, 0, 0, 0, 100) + bytes(8)
        result = run_simread(data)
        assert result.exit_code == ExitCode.DECODE_ERROR
        assert "truncated record at offset 14" in result.output

    @pytest.mark.parametrize("args", [[], ["a.sim", "b.sim"], ["-x", "a.sim"]])
    def test_usage_errors(self, args):
        result = CliRunner().invoke(main, args)
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "Usage" in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


# =============================================================================
# Error Handler Tests
# =============================================================================

class TestHandleCliException:
    """Tests for mapping exceptions to exit codes."""

    def test_decode_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(UnrecognizedTagError(20, 0x09))
        assert exc_info.value.code == ExitCode.DECODE_ERROR
        assert "Error: unrecognized record tag 0x09" in capsys.readouterr().err

    def test_internal_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(RuntimeError("boom"))
        assert exc_info.value.code == ExitCode.INTERNAL_ERROR
        assert "Internal error: boom" in capsys.readouterr().err
