"""CRC-16/CCITT checksum as specified for ECSS packets."""

from __future__ import annotations

_INITIAL_SHIFT_REGISTER_VALUE = 0xFFFF
_POLYNOMIAL = 0x1021
_MSB_MASK = 0x8000


def calculate_crc(data: bytes | bytearray | memoryview) -> int:
    """Return the 16-bit CRC of ``data`` (polynomial 0x1021, initial value 0xFFFF)."""
    crc = _INITIAL_SHIFT_REGISTER_VALUE
    for byte in bytes(data):
        crc ^= byte << 8
        for _ in range(8):
            if crc & _MSB_MASK:
                crc = ((crc << 1) ^ _POLYNOMIAL) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
    return crc


def validate_crc(data: bytes | bytearray | memoryview) -> int:
    """Check data that ends with its big-endian CRC.

    Returns 0 when the data is intact and a nonzero value when it is corrupted.
    """
    return calculate_crc(data)