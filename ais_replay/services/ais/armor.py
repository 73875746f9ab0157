"""AIS 6-bit ASCII payload armoring."""

from typing import Tuple

import bitstring


def sixbit_to_char(value: int) -> str:
    """Map a 6-bit value to its payload character."""
    if value < 40:
        return chr(value + 48)
    return chr(value + 56)


def encode_payload(bits: bitstring.Bits) -> Tuple[str, int]:
    """
    Convert binary message to 6-bit ASCII payload.

    Returns:
        Tuple of (payload, fill_bits), where fill_bits is the number of
        zero bits appended to reach a multiple of six.
    """
    fill_bits = -len(bits) % 6
    if fill_bits:
        bits = bits + bitstring.Bits(uint=0, length=fill_bits)

    payload = "".join(
        sixbit_to_char(bits[i : i + 6].uint) for i in range(0, len(bits), 6)
    )
    return payload, fill_bits
