"""Local search for constrained integer problems.

The optimizer starts from a legal input and tries every direction in the
order the problem yields them. The first direction that lowers the output is
followed step by step until it stops being legal or stops descending, then
the search starts over from the first direction. When no direction descends,
a local minimum has been found.

Outputs that compare equal are broken by comparing the inputs, and a move is
only taken towards the smaller input. Together with a fixed starting input
and a fixed direction order this keeps the search deterministic and stops it
from cycling between inputs with equal outputs.
"""

from __future__ import annotations

import logging
import math
from typing import Generic, Iterator, Optional, Protocol, Tuple, TypeVar

from .errors import InvalidArgumentError, OptimizerNonConvergenceError

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")
DirectionT = TypeVar("DirectionT")


class Problem(Protocol[InputT, OutputT, DirectionT]):
    """What the optimizer needs to know about a problem.

    ``compare_inputs`` must never return 0 for two inputs reached from one
    another by a single step.
    """

    max_passes: int

    def function(self, value: InputT) -> OutputT:
        """The function to minimise."""

    def legal_starting_input(self) -> InputT:
        """Return the same legal input on every call."""

    def move_one_step(self, value: InputT, direction: DirectionT) -> InputT:
        """Return the input one step away from ``value`` in ``direction``."""

    def is_illegal_input(self, value: InputT) -> bool:
        """Return True when ``value`` violates a constraint."""

    def directions(self) -> Iterator[DirectionT]:
        """Yield every direction, always in the same order."""

    def compare_outputs(self, first: OutputT, second: OutputT) -> int:
        """Return a negative, zero or positive number like a classic ``cmp``."""

    def compare_inputs(self, first: InputT, second: InputT) -> int:
        """Return a negative, zero or positive number like a classic ``cmp``."""


def fuzzy_compare(first: float, second: float, tolerance: float) -> int:
    """Compare two floats, treating values within ``tolerance`` as equal."""

    if math.isclose(first, second, rel_tol=0.0, abs_tol=tolerance):
        return 0
    return -1 if first < second else 1


def natural_compare(first, second) -> int:
    return (first > second) - (first < second)


class ConstrainedIntegerOptimizer(Generic[InputT, OutputT, DirectionT]):
    """Finds a local minimum of a :class:`Problem`."""

    def __init__(self, problem: Problem[InputT, OutputT, DirectionT]) -> None:
        self.problem = problem

    def find_min(self) -> InputT:
        """Run the search and return the input at the minimum found."""

        problem = self.problem
        current = problem.legal_starting_input()
        if problem.is_illegal_input(current):
            raise InvalidArgumentError(f"Provided starting input {current} is not legal.")
        output = problem.function(current)
        logger.debug("Starting optimization from input %s with output %s.", current, output)

        passes = 0
        while True:
            current, output, descended = self._try_all_directions(current, output)
            if not descended:
                break
            passes += 1
            logger.debug("Has followed descent directions %d time(s).", passes)
            if passes > problem.max_passes:
                raise OptimizerNonConvergenceError(problem.max_passes)

        logger.debug("Finished optimization at input %s with output %s.", current, output)
        return current

    def _try_all_directions(
        self,
        current: InputT,
        output: OutputT,
    ) -> Tuple[InputT, OutputT, bool]:
        """Follow the first descent direction found, as far as it descends."""

        for direction in self.problem.directions():
            logger.debug("Trying direction %s.", direction)
            descended = False
            while True:
                step = self._try_direction(current, output, direction)
                if step is None:
                    break
                current, output = step
                descended = True
            if descended:
                return current, output, True
        return current, output, False

    def _try_direction(
        self,
        current: InputT,
        output: OutputT,
        direction: DirectionT,
    ) -> Optional[Tuple[InputT, OutputT]]:
        problem = self.problem
        candidate = problem.move_one_step(current, direction)
        if problem.is_illegal_input(candidate):
            logger.debug("Direction %s leads beyond constraints to %s.", direction, candidate)
            return None

        input_diff = problem.compare_inputs(candidate, current)
        if input_diff == 0:
            raise InvalidArgumentError("Two different inputs must never compare equal.")

        candidate_output = problem.function(candidate)
        output_diff = problem.compare_outputs(candidate_output, output)
        if output_diff < 0 or (output_diff == 0 and input_diff < 0):
            logger.debug(
                "Followed direction %s to input %s with output %s.",
                direction,
                candidate,
                candidate_output,
            )
            return candidate, candidate_output
        logger.debug(
            "Rejected direction %s leading to input %s with output %s.",
            direction,
            candidate,
            candidate_output,
        )
        return None
