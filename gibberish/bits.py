"""Reading and writing unsigned integers at arbitrary bit offsets of a buffer.

Bit ``i`` of a buffer is bit ``i % 8`` of byte ``i // 8``, so the first bit of
a range is the least significant bit of the integer read from it. This is the
same layout as ``int.from_bytes(buffer, "little")``, which the codec leans on
to move whole byte spans at once instead of single bits.
"""

from __future__ import annotations

from .errors import InvalidArgumentError, OutOfBoundsError

BYTE_SIZE = 8
MAX_CHUNK_BITS = 64


def _check_range(buffer_len: int, from_bit: int, to_bit: int) -> None:
    if not 0 <= from_bit <= to_bit <= buffer_len * BYTE_SIZE:
        raise OutOfBoundsError(
            f"Bit range [{from_bit}, {to_bit}) is outside of a "
            f"{buffer_len}-byte buffer."
        )
    if to_bit - from_bit > MAX_CHUNK_BITS:
        raise OutOfBoundsError(
            f"Can not move more than {MAX_CHUNK_BITS} bits at once, "
            f"got {to_bit - from_bit}."
        )


def _byte_span(from_bit: int, to_bit: int) -> tuple[int, int]:
    return from_bit // BYTE_SIZE, -(-to_bit // BYTE_SIZE)


def read_bits(buffer: bytes | bytearray | memoryview, from_bit: int, to_bit: int) -> int:
    """Read bits ``[from_bit, to_bit)`` of ``buffer`` as an unsigned integer."""

    _check_range(len(buffer), from_bit, to_bit)
    width = to_bit - from_bit
    if width == 0:
        return 0
    first, last = _byte_span(from_bit, to_bit)
    chunk = int.from_bytes(buffer[first:last], "little")
    return (chunk >> (from_bit % BYTE_SIZE)) & ((1 << width) - 1)


def write_bits(buffer: bytearray | memoryview, from_bit: int, to_bit: int, value: int) -> None:
    """Write the low ``to_bit - from_bit`` bits of ``value`` into ``buffer``.

    Bits of ``value`` above the range width are ignored and bits of ``buffer``
    outside ``[from_bit, to_bit)`` are left untouched.
    """

    if value < 0:
        raise OutOfBoundsError(f"Only non-negative values can be written, got {value}.")
    _check_range(len(buffer), from_bit, to_bit)
    width = to_bit - from_bit
    if width == 0:
        return
    first, last = _byte_span(from_bit, to_bit)
    offset = from_bit % BYTE_SIZE
    mask = ((1 << width) - 1) << offset
    chunk = int.from_bytes(buffer[first:last], "little")
    chunk = (chunk & ~mask) | ((value << offset) & mask)
    buffer[first:last] = chunk.to_bytes(last - first, "little")


def num_bits_to_num_bytes(num_bits: int) -> int:
    """Return the number of bytes needed to hold ``num_bits`` bits."""

    if num_bits < 0:
        raise InvalidArgumentError("Number of bits less than zero.")
    return -(-num_bits // BYTE_SIZE)


def int_to_bytes(value: int, num_bits: int) -> bytearray:
    """Pack the low ``num_bits`` bits of ``value`` into a fresh buffer."""

    if num_bits > MAX_CHUNK_BITS:
        raise InvalidArgumentError(
            f"Integers can not provide the {num_bits} bits required."
        )
    if value < 0:
        raise InvalidArgumentError("Only non-negative values are allowed.")
    buffer = bytearray(num_bits_to_num_bytes(num_bits))
    write_bits(buffer, 0, num_bits, value)
    return buffer


def bytes_to_int(buffer: bytes | bytearray | memoryview, num_bits: int) -> int:
    """Unpack the first ``num_bits`` bits of ``buffer`` into an integer."""

    if num_bits > MAX_CHUNK_BITS:
        raise InvalidArgumentError(
            f"Integers can not provide the {num_bits} bits required."
        )
    return read_bits(buffer, 0, num_bits)
