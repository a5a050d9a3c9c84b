from __future__ import annotations

from datetime import timedelta


U16_WIDTH = 2

# Validity field units, selected by bit 0 of the raw value.
VALIDITY_COARSE_SECONDS = 4
VALIDITY_FINE_MILLIS = 100


def u16_le(data: bytes) -> int:
    """Read an unsigned 16-bit little-endian value from the first two bytes."""
    if len(data) < U16_WIDTH:
        raise ValueError(f"need {U16_WIDTH} bytes, got {len(data)}")
    return int.from_bytes(data[:U16_WIDTH], byteorder="little", signed=False)


def get_bit(value: int, bit_index: int) -> bool:
    if bit_index < 0 or bit_index > 15:
        raise ValueError("bit_index must be between 0 and 15")
    return bool(value & (1 << bit_index))


def validity_from_raw(raw: int) -> timedelta:
    # bit 0 set: 4 s units, otherwise 1/10 s units; the flag bit stays in the count
    if get_bit(raw, 0):
        return timedelta(seconds=raw * VALIDITY_COARSE_SECONDS)
    return timedelta(milliseconds=raw * VALIDITY_FINE_MILLIS)
