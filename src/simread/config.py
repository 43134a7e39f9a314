"""
simread - Configuration
=======================

Runtime settings for decoding and display. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of the above)
"""

from dataclasses import dataclass
import logging
import os

logger = logging.getLogger(__name__)

# Largest file accepted by default (1MB)
DEFAULT_MAX_FILE_SIZE = 1_000_000

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class SimReadConfig:
    """
    Settings for one simread invocation.

    Attributes:
        max_file_size: Largest accepted input in bytes; a file of exactly
            this size is accepted (default: 1,000,000)
        hide_program_bytes: Suppress data record payloads in the output.
            Decoding and checksum computation are unaffected.
    """
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    hide_program_bytes: bool = False

    @classmethod
    def from_env(cls) -> "SimReadConfig":
        """
        Create a SimReadConfig from environment variables.

        Environment variables (all optional):
            SIMREAD_MAX_FILE_SIZE: Maximum file size in bytes (integer)
            SIMREAD_HIDE_BYTES: Hide program bytes (1, true, yes, on)

        Returns:
            SimReadConfig with values from environment variables
        """
        config = cls()

        if max_size := os.environ.get("SIMREAD_MAX_FILE_SIZE"):
            try:
                value = int(max_size)
            except ValueError:
                value = -1
            if value >= 0:
                config.max_file_size = value
            else:
                logger.warning(f"Ignoring invalid SIMREAD_MAX_FILE_SIZE={max_size!r}")

        if hide := os.environ.get("SIMREAD_HIDE_BYTES"):
            config.hide_program_bytes = hide.strip().lower() in _TRUE_VALUES

        return config
