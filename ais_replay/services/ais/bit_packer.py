"""Fixed-width bit field writer for AIS binary messages."""

import bitstring


class BitFieldPacker:
    """
    Writes integer fields at explicit offsets into a fixed-size bit buffer.

    Values wider than their field are truncated to the low `length` bits.
    Fields are written MSB first, as ITU-R M.1371 lays them out.
    """

    def __init__(self, size: int):
        self.bits = bitstring.BitArray(uint=0, length=size)

    def __len__(self) -> int:
        return len(self.bits)

    def set_uint(self, offset: int, length: int, value: int):
        """Set `length` bits at `offset` to the low bits of value."""
        mask = (1 << length) - 1
        self.bits.overwrite(bitstring.Bits(uint=value & mask, length=length), offset)

    def set_int(self, offset: int, length: int, value: int):
        """Set a signed field using its two's complement representation."""
        # masking a negative int yields the two's complement pattern
        self.set_uint(offset, length, value)

    def to_bits(self) -> bitstring.Bits:
        return bitstring.Bits(self.bits)
