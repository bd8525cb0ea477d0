"""SMBIOS table acquisition from the host platform."""

import logging
import plistlib
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from smbios_tables.discovery.entry_decoder import DecodedEntry, decode_table

logger = logging.getLogger(__name__)

# Linux exports the raw structure table through sysfs
SYSFS_DMI_TABLE = "/sys/firmware/dmi/tables/DMI"

# macOS publishes it as a property of the AppleSMBIOS registry entry
IOREG_SMBIOS_CLASS = "AppleSMBIOS"
IOREG_SMBIOS_PROPERTY = "SMBIOS"


class TableSource:
    """Locate and read the raw SMBIOS structure table."""

    def __init__(self, path: Optional[str] = None, platform: Optional[str] = None):
        """
        Initialize table source.

        Args:
            path: Raw table dump to read instead of the live platform table.
            platform: Override for sys.platform (e.g., "linux", "darwin").
        """
        self.path = path
        self.platform = platform or sys.platform

    def read(self) -> Optional[bytes]:
        """
        Read the structure table.

        Returns:
            Table bytes, or None if no usable table is available.
        """
        if self.path:
            data = self._read_file(Path(self.path))
        elif self.platform.startswith("linux"):
            data = self._read_file(Path(SYSFS_DMI_TABLE))
        elif self.platform == "darwin":
            data = self._read_ioreg()
        else:
            logger.warning(f"No SMBIOS table source for platform {self.platform}")
            return None

        if not data:
            if data is not None:
                logger.warning("SMBIOS table is empty")
            return None
        return data

    def _read_file(self, path: Path) -> Optional[bytes]:
        """Read a raw table file, returning None on failure."""
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.warning(f"Could not read SMBIOS table from {path}: {e}")
            return None

        logger.debug(f"Read {len(data)} bytes from {path}")
        return data

    def _read_ioreg(self) -> Optional[bytes]:
        """Read the SMBIOS property of the AppleSMBIOS service via ioreg."""
        try:
            result = subprocess.run(
                ["ioreg", "-a", "-r", "-c", IOREG_SMBIOS_CLASS],
                capture_output=True,
                timeout=10,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning(f"Could not query I/O registry: {e}")
            return None

        if result.returncode != 0 or not result.stdout.strip():
            # No AppleSMBIOS service found.
            logger.warning(f"No {IOREG_SMBIOS_CLASS} service found")
            return None

        try:
            entries = plistlib.loads(result.stdout)
        except (plistlib.InvalidFileException, ValueError) as e:
            logger.warning(f"Could not parse I/O registry output: {e}")
            return None

        if isinstance(entries, dict):
            entries = [entries]

        for entry in entries:
            if not isinstance(entry, dict):
                continue
            data = entry.get(IOREG_SMBIOS_PROPERTY)
            if isinstance(data, bytes):
                return data

        logger.warning(f"{IOREG_SMBIOS_CLASS} has no {IOREG_SMBIOS_PROPERTY} property")
        return None


def load_table(source: TableSource) -> List[DecodedEntry]:
    """Read and decode the table; an unavailable table gives no entries."""
    data = source.read()
    if data is None:
        return []
    return decode_table(data)
