"""SMBIOS structure table walker.

Splits a raw structure table (as exported by the firmware) into the
individual structures it contains. Each structure is a 4-byte header, the
rest of the formatted area declared by the header, and a trailing string
set terminated by two NUL bytes. See DSP0134 section 6.1.
"""

import logging
import struct
from dataclasses import dataclass
from typing import Iterator

logger = logging.getLogger(__name__)

# type (1) + length (1) + handle (2)
HEADER_SIZE = 4


@dataclass(frozen=True)
class StructureHeader:
    """Common 4-byte structure header."""
    type: int
    length: int
    handle: int

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = 0) -> "StructureHeader":
        """Parse the header at `offset`.

        Raises:
            ValueError: fewer than 4 bytes are available at `offset`.
        """
        if offset < 0 or offset + HEADER_SIZE > len(data):
            raise ValueError(
                f"Structure data too short for header at offset {offset}: {len(data)} bytes"
            )

        struct_type = data[offset]
        length = data[offset + 1]
        handle = struct.unpack_from('<H', data, offset + 2)[0]

        return cls(type=struct_type, length=length, handle=handle)


@dataclass(frozen=True)
class RawStructure:
    """Location of one structure inside the table."""
    offset: int
    header: StructureHeader
    total_size: int

    @property
    def end(self) -> int:
        return self.offset + self.total_size


def _find_structure_end(data: bytes, start: int) -> int:
    """Return the offset just past the string set that begins at `start`.

    The string set ends after the first pair of NUL bytes. When no terminator
    is found the scan stops short of the last HEADER_SIZE - 1 bytes of the
    table; those bytes are never attributed to a structure.
    """
    end_of_data = len(data)
    position = start
    while position + 2 <= end_of_data:
        if data[position] == 0 and data[position + 1] == 0:
            return position + 2
        position += 1

    # Unterminated: leave the short tail behind
    boundary = max(start, end_of_data - (HEADER_SIZE - 1))
    if boundary < end_of_data:
        logger.debug(
            f"Unterminated string set at offset {start}; "
            f"dropping {end_of_data - boundary} tail byte(s)"
        )
    return boundary


def iter_structures(data: bytes) -> Iterator[RawStructure]:
    """Walk the structure table and yield each structure in order.

    Iteration ends cleanly when fewer than 4 bytes remain, and ends early
    (keeping everything yielded so far) at the first header whose declared
    length is shorter than a header or runs past the end of the table.
    Never raises for any input.
    """
    if not data:
        return

    end_of_data = len(data)
    offset = 0

    while offset + HEADER_SIZE <= end_of_data:
        header = StructureHeader.from_bytes(data, offset)

        if header.length < HEADER_SIZE or offset + header.length > end_of_data:
            # Invalid header, length must cover the header and stay in range.
            logger.debug(
                f"Malformed structure header at offset {offset} "
                f"(type={header.type}, length={header.length}, table={end_of_data} bytes); "
                f"stopping"
            )
            return

        next_offset = _find_structure_end(data, offset + header.length)

        yield RawStructure(
            offset=offset,
            header=header,
            total_size=next_offset - offset,
        )
        offset = next_offset

    if offset < end_of_data:
        logger.debug(f"Ignoring {end_of_data - offset} trailing byte(s) at offset {offset}")
