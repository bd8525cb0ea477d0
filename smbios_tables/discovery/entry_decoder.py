"""Decode raw SMBIOS structures into table entries."""

import hashlib
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from smbios_tables.discovery.structure_parser import RawStructure, iter_structures
from smbios_tables.discovery.type_descriptions import describe_type

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


def md5_digest(data: BytesLike) -> str:
    """Hex MD5 of `data`, used as a change-detection fingerprint."""
    return hashlib.md5(data, usedforsecurity=False).hexdigest()


@dataclass(frozen=True)
class DecodedEntry:
    """One row of the SMBIOS structure table."""
    number: int
    type: int
    description: Optional[str]
    handle: int
    header_size: int
    size: int
    md5: str
    offset: int

    def to_row(self) -> Dict[str, Any]:
        """Return the entry keyed by output column name.

        `description` is only present for known structure types.
        """
        row: Dict[str, Any] = {
            "number": self.number,
            "type": self.type,
        }
        if self.description is not None:
            row["description"] = self.description
        row["handle"] = self.handle
        row["header_size"] = self.header_size
        row["size"] = self.size
        row["md5"] = self.md5
        return row


def decode_entry(data: BytesLike, raw: RawStructure, number: int) -> DecodedEntry:
    """Build the entry for one structure located by the iterator."""
    header = raw.header
    view = memoryview(data)[raw.offset:raw.end]

    return DecodedEntry(
        number=number,
        type=header.type,
        description=describe_type(header.type),
        handle=header.handle,
        header_size=header.length,
        size=raw.total_size,
        md5=md5_digest(view),
        offset=raw.offset,
    )


def decode_table(data: Optional[BytesLike]) -> List[DecodedEntry]:
    """Decode every structure in a raw SMBIOS table.

    Malformed or truncated input yields fewer entries, never an exception.

    Args:
        data: Raw structure table bytes

    Returns:
        Entries in table order, numbered from 0
    """
    if not data:
        return []

    view = memoryview(data).cast("B")
    entries = [
        decode_entry(view, raw, number)
        for number, raw in enumerate(iter_structures(view))
    ]

    logger.debug(f"Decoded {len(entries)} structure(s) from {len(view)} byte table")
    return entries
