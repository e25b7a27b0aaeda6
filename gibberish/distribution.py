"""Choosing how many bits each word provider gets.

Each provider is one dimension. A legal input assigns every provider between
one bit and its bit coverage, with all assignments summing to the requested
total. One step moves a single bit from one provider to another. The output
is the total mean phrase length: for every provider, the mean length of the
``2**bits`` shortest words it would use.

Because words are sorted shortest first, each provider's mean word length
never decreases as it gets more bits.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, NamedTuple, Tuple

from .errors import (
    InsufficientBitCoverageError,
    InsufficientTotalCoverageError,
    InvalidArgumentError,
)
from .optimizer import ConstrainedIntegerOptimizer, fuzzy_compare, natural_compare
from .words import WordProvider

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 1000
DEFAULT_TOLERANCE = 0.00001

BitDistribution = Tuple[int, ...]


class Direction(NamedTuple):
    """Move one bit from provider ``source`` to provider ``target``."""

    source: int
    target: int


class TotalMeanWordLengthProblem:
    """Minimise total mean phrase length over legal bit distributions."""

    def __init__(
        self,
        providers: Iterable[WordProvider],
        total_bits: int,
        *,
        max_passes: int = DEFAULT_MAX_PASSES,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> None:
        self.providers: Tuple[WordProvider, ...] = tuple(providers)
        if not self.providers:
            raise InvalidArgumentError("Must provide at least one word provider.")
        if len(self.providers) > total_bits:
            raise InvalidArgumentError(
                "The number of total bits must be at least equal to the number "
                "of word providers."
            )
        self.total_bits = total_bits
        self.max_passes = max_passes
        self.tolerance = tolerance

    def function(self, value: BitDistribution) -> float:
        return sum(
            provider.mean_word_length(2 ** bits)
            for provider, bits in zip(self.providers, value)
        )

    def legal_starting_input(self) -> BitDistribution:
        """Give every provider one bit, then fill providers in order up to coverage."""

        for provider in self.providers:
            if provider.bit_coverage() < 1:
                raise InsufficientBitCoverageError(provider.name, 1)
        distribution = [1] * len(self.providers)
        remaining = self.total_bits - len(self.providers)
        for idx, provider in enumerate(self.providers):
            if remaining <= 0:
                break
            assigned = min(remaining + 1, provider.bit_coverage())
            distribution[idx] = assigned
            remaining -= assigned - 1
        if remaining > 0:
            raise InsufficientTotalCoverageError(remaining)
        return tuple(distribution)

    def move_one_step(self, value: BitDistribution, direction: Direction) -> BitDistribution:
        moved = list(value)
        moved[direction.source] -= 1
        moved[direction.target] += 1
        return tuple(moved)

    def is_illegal_input(self, value: BitDistribution) -> bool:
        if len(value) != len(self.providers) or sum(value) != self.total_bits:
            return True
        return any(
            not 1 <= bits <= provider.bit_coverage()
            for provider, bits in zip(self.providers, value)
        )

    def directions(self) -> Iterator[Direction]:
        # Targets run 1, 2, ..., N-1, 0 so the first direction is always (0, 1).
        count = len(self.providers)
        for offset in range(1, count + 1):
            target = offset % count
            for source in range(count):
                if source != target:
                    yield Direction(source, target)

    def compare_outputs(self, first: float, second: float) -> int:
        return fuzzy_compare(first, second, self.tolerance)

    def compare_inputs(self, first: BitDistribution, second: BitDistribution) -> int:
        return natural_compare(first, second)


def optimize_bit_distribution(
    providers: Iterable[WordProvider],
    total_bits: int,
    *,
    max_passes: int = DEFAULT_MAX_PASSES,
    tolerance: float = DEFAULT_TOLERANCE,
) -> List[int]:
    """Return the bit distribution giving the shortest phrases on average."""

    problem = TotalMeanWordLengthProblem(
        providers, total_bits, max_passes=max_passes, tolerance=tolerance
    )
    distribution = ConstrainedIntegerOptimizer(problem).find_min()
    logger.debug(
        "Optimized %d bits over %d providers to %s.",
        total_bits,
        len(problem.providers),
        list(distribution),
    )
    return list(distribution)
