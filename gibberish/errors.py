"""Error definitions for the Gibberish phrase translator."""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional


class ErrorCategory(Enum):
    """Categorises errors by the stage that raised them.

    The package itself never branches on it. Callers read ``category`` to
    tell bad input or configuration apart from phrases that fail to translate.
    """

    ARGUMENT = auto()
    CONFIGURATION = auto()
    TRANSLATION = auto()
    OPTIMIZATION = auto()


class GibberishError(Exception):
    """Base exception for all custom errors."""

    category = ErrorCategory.ARGUMENT


class OutOfBoundsError(GibberishError, IndexError):
    """Raised when a bit range falls outside of a buffer or exceeds 64 bits."""


class IndexOutOfRangeError(GibberishError, IndexError):
    """Raised when a word index is beyond the end of a word provider."""

    def __init__(self, index: int, size: int, provider_name: str = "") -> None:
        super().__init__(
            f"Index {index} is out of range for word provider '{provider_name}' "
            f"holding {size} word(s)."
        )
        self.index = index
        self.size = size
        self.provider_name = provider_name


class BitRangeMismatchError(GibberishError, ValueError):
    """Raised when a bit range does not cover exactly the expected bits."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"The number of bits covered by the specified bit range must equal "
            f"{expected}, got {actual}."
        )
        self.expected = expected
        self.actual = actual


class InvalidArgumentError(GibberishError, ValueError):
    """Raised when an argument violates an operation's preconditions."""


class ConfigurationError(GibberishError):
    """Raised when a translator cannot be assembled from its inputs."""

    category = ErrorCategory.CONFIGURATION


class BitDistributionError(ConfigurationError):
    """Raised when a bit distribution has the wrong length or sum."""


class InsufficientBitCoverageError(ConfigurationError):
    """Raised when a word provider holds too few words for its assigned bits.

    A provider assigned ``n`` bits needs at least ``2**n`` words.
    """

    MESSAGE_FORMAT = (
        "Word provider '{name}' does not provide the required bit coverage '{bits}'."
    )

    def __init__(self, provider_name: str, required_bits: int) -> None:
        super().__init__(
            self.MESSAGE_FORMAT.format(name=provider_name, bits=required_bits)
        )
        self.provider_name = provider_name
        self.required_bits = required_bits


class InsufficientTotalCoverageError(ConfigurationError):
    """Raised when the providers together cannot cover the requested bits."""

    def __init__(self, missing_bits: int) -> None:
        super().__init__(
            "Incomplete bit coverage. "
            f"Missing coverage for last {missing_bits} bit(s)."
        )
        self.missing_bits = missing_bits


class FingerprintMismatchError(ConfigurationError):
    """Raised when the word corpus no longer matches an expected fingerprint."""

    def __init__(self, expected: str, computed: str, translator_name: str = "") -> None:
        super().__init__(
            f"Expected fingerprint {expected} does not match computed fingerprint "
            f"{computed} for translator '{translator_name}'."
        )
        self.expected = expected
        self.computed = computed
        self.translator_name = translator_name


class SettingsError(ConfigurationError):
    """Raised when environment settings fail validation."""


class TranslationError(GibberishError):
    """Base for recoverable, per-call translation failures."""

    category = ErrorCategory.TRANSLATION


class IllegalPhraseError(TranslationError):
    """Raised when a phrase does not have the expected format."""

    EXPECTED_LEADING_FORMAT = (
        "Could not find expected leading substring '{part}' in phrase '{phrase}'."
    )
    EXPECTED_TRAILING_FORMAT = (
        "Could not find expected trailing substring '{part}' in phrase '{phrase}'."
    )
    EXPECTED_SEPARATOR_FORMAT = (
        "Could not find expected separator '{part}' in phrase '{phrase}'."
    )

    def __init__(self, phrase: str, message: str, part: Optional[str] = None) -> None:
        super().__init__(message)
        self.phrase = phrase
        self.part = part

    @classmethod
    def expected_leading(cls, phrase: str, leading: str) -> "IllegalPhraseError":
        return cls(
            phrase, cls.EXPECTED_LEADING_FORMAT.format(part=leading, phrase=phrase), leading
        )

    @classmethod
    def expected_trailing(cls, phrase: str, trailing: str) -> "IllegalPhraseError":
        return cls(
            phrase,
            cls.EXPECTED_TRAILING_FORMAT.format(part=trailing, phrase=phrase),
            trailing,
        )

    @classmethod
    def expected_separator(cls, phrase: str, separator: str) -> "IllegalPhraseError":
        return cls(
            phrase,
            cls.EXPECTED_SEPARATOR_FORMAT.format(part=separator, phrase=phrase),
            separator,
        )


class UnknownWordError(TranslationError):
    """Raised when a phrase word is missing from its slot's word provider."""

    def __init__(self, word: str, provider_name: str) -> None:
        super().__init__(
            f"Could not find word '{word}' in word provider '{provider_name}'."
        )
        self.word = word
        self.provider_name = provider_name


class WordIndexOutOfBoundsError(TranslationError):
    """Raised when a word's index needs more bits than its slot is assigned.

    A slot assigned 4 bits may only use words at index 0 to 15, even when its
    provider holds more words.
    """

    def __init__(self, index: int, word: str, num_bits: int) -> None:
        super().__init__(
            f"Word '{word}' at index '{index}' is greater than what the number "
            f"of bits ({num_bits}) allows for."
        )
        self.index = index
        self.word = word
        self.num_bits = num_bits


class OptimizerNonConvergenceError(GibberishError):
    """Raised when the optimizer keeps descending past its move budget."""

    category = ErrorCategory.OPTIMIZATION

    def __init__(self, max_passes: int) -> None:
        super().__init__(
            "Still finding descent directions after max number of descent "
            f"directions ({max_passes}) followed."
        )
        self.max_passes = max_passes
