"""Ordered word lists and the per-slot sequence of them used by a translator."""

from __future__ import annotations

import hashlib
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import (
    BitDistributionError,
    IndexOutOfRangeError,
    InsufficientBitCoverageError,
    InvalidArgumentError,
    UnknownWordError,
)

DEFAULT_FINGERPRINT_ALGORITHM = "sha1"


def sort_words(words: Iterable[str]) -> List[str]:
    """Sort words by length, then lexicographically within equal length."""

    ordered = sorted(words)
    ordered.sort(key=len)
    return ordered


def is_power_of_two(number: int) -> bool:
    return number > 0 and number & (number - 1) == 0


class WordProvider:
    """An immutable, duplicate-free word list in canonical order.

    The shortest words come first, so the first ``2**n`` words are always the
    shortest choice for a slot assigned ``n`` bits.
    """

    def __init__(self, words: Iterable[str], name: str = "") -> None:
        ordered = sort_words(set(words))
        if not ordered:
            raise InvalidArgumentError(f"Word provider '{name}' must hold at least one word.")
        self._words: Tuple[str, ...] = tuple(ordered)
        self._positions: Dict[str, int] = {word: idx for idx, word in enumerate(ordered)}
        self.name = name

    def __repr__(self) -> str:
        return f"WordProvider(name={self.name!r}, size={len(self._words)})"

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __getitem__(self, index: int) -> str:
        return self.get(index)

    def size(self) -> int:
        return len(self._words)

    def get(self, index: int) -> str:
        """Return the word at ``index`` in canonical order."""

        if not 0 <= index < len(self._words):
            raise IndexOutOfRangeError(index, len(self._words), self.name)
        return self._words[index]

    def index_of(self, word: str) -> Optional[int]:
        """Return the position of ``word``, or ``None`` when it is not present."""

        return self._positions.get(word)

    def bit_coverage(self) -> int:
        """Return ``floor(log2(size))``, the bits this provider can fully index."""

        return len(self._words).bit_length() - 1

    def mean_word_length(self, num_words: int) -> float:
        """Return the mean length of the ``num_words`` shortest words."""

        if num_words < 1:
            raise InvalidArgumentError("Must query mean word length for at least one word.")
        if num_words > len(self._words):
            raise InvalidArgumentError("Must query mean word length for at most all words.")
        if not is_power_of_two(num_words):
            raise InvalidArgumentError(
                "Can only query for a number of words that is a power of two."
            )
        return sum(len(word) for word in self._words[:num_words]) / num_words


class WordProviderSequence:
    """A fixed sequence of word providers, one per phrase slot."""

    def __init__(self, providers: Iterable[WordProvider]) -> None:
        self._providers: Tuple[WordProvider, ...] = tuple(providers)

    def __repr__(self) -> str:
        names = ", ".join(repr(provider.name) for provider in self._providers)
        return f"WordProviderSequence([{names}])"

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self) -> Iterator[WordProvider]:
        return iter(self._providers)

    @property
    def providers(self) -> Tuple[WordProvider, ...]:
        return self._providers

    def get_words(self, indices: Sequence[int]) -> List[str]:
        """Look up one word per slot."""

        if len(indices) != len(self._providers):
            raise InvalidArgumentError(
                "Number of words requested does not match the number of word providers."
            )
        return [
            provider.get(index) for provider, index in zip(self._providers, indices)
        ]

    def get_indices(self, words: Sequence[str]) -> List[int]:
        """Look up one index per slot, failing on the leftmost unknown word."""

        if len(words) != len(self._providers):
            raise InvalidArgumentError(
                "Number of indices requested does not match the number of word providers."
            )
        indices: List[int] = []
        for provider, word in zip(self._providers, words):
            index = provider.index_of(word)
            if index is None:
                raise UnknownWordError(word, provider.name)
            indices.append(index)
        return indices

    def bit_coverage(self) -> int:
        return sum(provider.bit_coverage() for provider in self._providers)

    def verify_bit_distribution(self, bit_distribution: Sequence[int]) -> None:
        """Check that every provider has enough words for its assigned bits."""

        if len(bit_distribution) != len(self._providers):
            raise BitDistributionError(
                "Number of bit distributions does not match the number of word providers."
            )
        for provider, num_bits in zip(self._providers, bit_distribution):
            if num_bits > provider.bit_coverage():
                raise InsufficientBitCoverageError(provider.name, num_bits)

    def compute_fingerprint(self, algorithm: str = DEFAULT_FINGERPRINT_ALGORITHM) -> str:
        """Hash all words of all providers, in canonical and sequence order.

        The digest depends only on each provider's word set and on the order
        of the providers, never on the order words were originally supplied in.
        Words are fed without delimiters, so lists that only move a boundary
        between words, such as ``["ab"], ["c"]`` and ``["a"], ["bc"]``, share
        a digest.
        """

        digest = hashlib.new(algorithm)
        for provider in self._providers:
            for word in provider:
                digest.update(word.encode("utf-8"))
        return digest.hexdigest()
