import unittest

from gibberish.distribution import (
    Direction,
    TotalMeanWordLengthProblem,
    optimize_bit_distribution,
)
from gibberish.errors import (
    InsufficientBitCoverageError,
    InsufficientTotalCoverageError,
    InvalidArgumentError,
    OptimizerNonConvergenceError,
)
from gibberish.optimizer import ConstrainedIntegerOptimizer
from gibberish.words import WordProvider

SINGLE_LETTERS = WordProvider(["a", "b", "c", "d", "e", "f", "g", "h"], "single")
MIXED_LENGTHS = WordProvider(
    ["a", "b", "cde", "fgh", "ijklmn", "opqrst", "abcdef", "ghijkl"], "mixed"
)
PAIR = WordProvider(["a", "b"], "pair")


def find_min(providers, total_bits):
    problem = TotalMeanWordLengthProblem(providers, total_bits)
    return list(ConstrainedIntegerOptimizer(problem).find_min())


class TotalMeanWordLengthProblemTests(unittest.TestCase):
    def test_constant_output(self) -> None:
        providers = [SINGLE_LETTERS] * 3
        self.assertEqual(find_min(providers, 9), [3, 3, 3])
        self.assertEqual(find_min(providers, 7), [1, 3, 3])
        self.assertEqual(find_min(providers, 5), [1, 1, 3])

    def test_increasing_output(self) -> None:
        providers = [MIXED_LENGTHS] * 3
        self.assertEqual(find_min(providers, 9), [3, 3, 3])
        self.assertEqual(find_min(providers, 7), [2, 2, 3])
        self.assertEqual(find_min(providers, 5), [1, 2, 2])

    def test_mixed_output(self) -> None:
        providers = [SINGLE_LETTERS, MIXED_LENGTHS]
        self.assertEqual(find_min(providers, 6), [3, 3])
        self.assertEqual(find_min(providers, 4), [3, 1])

    def test_results_are_deterministic(self) -> None:
        first = find_min([MIXED_LENGTHS, SINGLE_LETTERS, MIXED_LENGTHS], 6)
        rebuilt = [
            WordProvider(reversed(list(MIXED_LENGTHS)), "mixed"),
            WordProvider(reversed(list(SINGLE_LETTERS)), "single"),
            WordProvider(reversed(list(MIXED_LENGTHS)), "mixed"),
        ]
        self.assertEqual(find_min(rebuilt, 6), first)

    def test_function(self) -> None:
        problem = TotalMeanWordLengthProblem([SINGLE_LETTERS, MIXED_LENGTHS], 6)
        self.assertEqual(problem.function((0, 0)), 2.0)
        self.assertEqual(problem.function((3, 1)), 2.0)
        self.assertEqual(problem.function((1, 2)), 3.0)
        self.assertEqual(problem.function((3, 3)), 5.0)

    def test_legal_starting_input(self) -> None:
        providers = [SINGLE_LETTERS, MIXED_LENGTHS]
        expected = {2: (1, 1), 3: (2, 1), 4: (3, 1), 5: (3, 2), 6: (3, 3)}
        for total_bits, distribution in expected.items():
            problem = TotalMeanWordLengthProblem(providers, total_bits)
            self.assertEqual(problem.legal_starting_input(), distribution)
        problem = TotalMeanWordLengthProblem([PAIR, SINGLE_LETTERS], 4)
        self.assertEqual(problem.legal_starting_input(), (1, 3))

    def test_insufficient_total_coverage(self) -> None:
        problem = TotalMeanWordLengthProblem([PAIR, PAIR], 3)
        with self.assertRaises(InsufficientTotalCoverageError) as ctx:
            problem.legal_starting_input()
        self.assertEqual(ctx.exception.missing_bits, 1)

    def test_move_one_step(self) -> None:
        problem = TotalMeanWordLengthProblem([SINGLE_LETTERS, MIXED_LENGTHS], 2)
        self.assertEqual(problem.move_one_step((1, 3), Direction(1, 0)), (2, 2))
        self.assertEqual(problem.move_one_step((2, 2), Direction(1, 0)), (3, 1))
        self.assertEqual(problem.move_one_step((2, 2), Direction(0, 1)), (1, 3))

    def test_is_illegal_input(self) -> None:
        providers = [SINGLE_LETTERS, MIXED_LENGTHS]
        problem = TotalMeanWordLengthProblem(providers, 6)
        self.assertFalse(problem.is_illegal_input((3, 3)))
        self.assertTrue(problem.is_illegal_input((2, 4)))
        self.assertTrue(problem.is_illegal_input((4, 2)))
        self.assertTrue(problem.is_illegal_input((4, 3)))

        problem = TotalMeanWordLengthProblem(providers, 4)
        self.assertFalse(problem.is_illegal_input((1, 3)))
        self.assertFalse(problem.is_illegal_input((2, 2)))
        self.assertFalse(problem.is_illegal_input((3, 1)))
        self.assertTrue(problem.is_illegal_input((4, 0)))
        self.assertTrue(problem.is_illegal_input((0, 4)))
        self.assertTrue(problem.is_illegal_input((2, 3)))

    def test_directions(self) -> None:
        problem = TotalMeanWordLengthProblem([SINGLE_LETTERS, MIXED_LENGTHS], 6)
        self.assertEqual(list(problem.directions()), [(0, 1), (1, 0)])

        problem = TotalMeanWordLengthProblem([SINGLE_LETTERS, MIXED_LENGTHS, PAIR], 6)
        self.assertEqual(
            list(problem.directions()),
            [(0, 1), (2, 1), (0, 2), (1, 2), (1, 0), (2, 0)],
        )

    def test_single_provider(self) -> None:
        self.assertEqual(find_min([MIXED_LENGTHS], 2), [2])
        self.assertEqual(list(TotalMeanWordLengthProblem([PAIR], 1).directions()), [])

    def test_provider_without_bit_coverage(self) -> None:
        only = WordProvider(["only"], "one")
        for total_bits in (2, 4):
            problem = TotalMeanWordLengthProblem([only, SINGLE_LETTERS], total_bits)
            with self.assertRaises(InsufficientBitCoverageError) as ctx:
                problem.legal_starting_input()
            self.assertEqual(ctx.exception.provider_name, "one")
            self.assertEqual(ctx.exception.required_bits, 1)

    def test_constructor_preconditions(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            TotalMeanWordLengthProblem([], 3)
        with self.assertRaises(InvalidArgumentError):
            TotalMeanWordLengthProblem([SINGLE_LETTERS, MIXED_LENGTHS], 1)


class OptimizeBitDistributionTests(unittest.TestCase):
    def test_returns_list(self) -> None:
        self.assertEqual(
            optimize_bit_distribution([MIXED_LENGTHS] * 3, 7), [2, 2, 3]
        )

    def test_move_budget(self) -> None:
        with self.assertRaises(OptimizerNonConvergenceError):
            optimize_bit_distribution([MIXED_LENGTHS] * 3, 7, max_passes=1)


if __name__ == "__main__":
    unittest.main()
