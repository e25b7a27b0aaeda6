"""Splitting bit ranges into per-slot indices according to a bit distribution."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .bits import BYTE_SIZE, read_bits, write_bits
from .errors import BitRangeMismatchError, InvalidArgumentError, OutOfBoundsError


class IndexTranslator:
    """Translates between bit ranges and lists of indices.

    A distribution ``[2, 1, 3]`` reads the bits ``0b011011`` (first bit on the
    right) as the chunks ``[0b11, 0b0, 0b011]``, i.e. the indices ``[3, 0, 3]``.
    Chunks are consumed left to right in distribution order.
    """

    def __init__(self, bit_distribution: Iterable[int]) -> None:
        distribution = tuple(int(bits) for bits in bit_distribution)
        if any(bits < 0 for bits in distribution):
            raise InvalidArgumentError(
                f"Bit distribution must not contain negative widths: {list(distribution)}."
            )
        self._bit_distribution: Tuple[int, ...] = distribution
        self._bit_coverage = sum(distribution)

    def __repr__(self) -> str:
        return f"IndexTranslator(bit_distribution={list(self._bit_distribution)})"

    def bit_distribution(self) -> Tuple[int, ...]:
        return self._bit_distribution

    def bit_coverage(self) -> int:
        """Return the sum of all widths in the bit distribution."""

        return self._bit_coverage

    def from_bytes(
        self,
        buffer: bytes | bytearray | memoryview,
        from_bit: int,
        to_bit: int,
    ) -> List[int]:
        """Read one index per slot from bits ``[from_bit, to_bit)`` of ``buffer``."""

        self._verify_bit_range(buffer, from_bit, to_bit)
        indices: List[int] = []
        position = from_bit
        for bits in self._bit_distribution:
            indices.append(read_bits(buffer, position, position + bits))
            position += bits
        return indices

    def to_bytes(
        self,
        buffer: bytearray | memoryview,
        indices: Sequence[int],
        from_bit: int,
        to_bit: int,
    ) -> None:
        """Write one index per slot into bits ``[from_bit, to_bit)`` of ``buffer``."""

        if len(indices) != len(self._bit_distribution):
            raise InvalidArgumentError(
                f"Expected {len(self._bit_distribution)} indices, got {len(indices)}."
            )
        self._verify_bit_range(buffer, from_bit, to_bit)
        position = from_bit
        for bits, index in zip(self._bit_distribution, indices):
            write_bits(buffer, position, position + bits, index)
            position += bits

    def _verify_bit_range(self, buffer, from_bit: int, to_bit: int) -> None:
        if not (0 <= from_bit and to_bit <= len(buffer) * BYTE_SIZE):
            raise OutOfBoundsError(
                "Bit indices must be in the range of the specified buffer."
            )
        if to_bit - from_bit != self._bit_coverage:
            raise BitRangeMismatchError(self._bit_coverage, to_bit - from_bit)
