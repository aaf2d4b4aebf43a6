"""Formatting of MAC addresses as colon separated hexadecimal text."""

from __future__ import annotations

__all__ = ["MAC_SIZE", "u8_to_hex_char", "mac_to_string"]

MAC_SIZE = 6

_HEX_DIGITS = "0123456789ABCDEF"
_U64_LIMIT = 1 << 64


def u8_to_hex_char(value: int, lsb: bool = True) -> str:
    """Return the hex digit of the low (``lsb``) or high nibble of a byte."""
    if not 0 <= value <= 0xFF:
        raise ValueError(f"value is not a byte: {value}")
    nibble = value & 0x0F if lsb else value >> 4
    return _HEX_DIGITS[nibble]


def mac_to_string(mac: bytes | bytearray | int) -> str:
    """Format a MAC address as ``XX:XX:XX:XX:XX:XX``.

    ``mac`` is either six bytes, or an unsigned 64-bit integer whose six
    lowest-order bytes, least significant first, form the address.
    """
    if isinstance(mac, int):
        if not 0 <= mac < _U64_LIMIT:
            raise ValueError(f"MAC integer is not an unsigned 64-bit value: {mac}")
        octets = mac.to_bytes(8, "little")[:MAC_SIZE]
    else:
        octets = bytes(mac)
        if len(octets) != MAC_SIZE:
            raise ValueError(f"MAC must be {MAC_SIZE} bytes, got {len(octets)}")
    return ":".join(
        u8_to_hex_char(octet, lsb=False) + u8_to_hex_char(octet, lsb=True)
        for octet in octets
    )