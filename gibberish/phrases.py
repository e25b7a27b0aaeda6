"""Phrase construction and deconstruction abstractions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .errors import IllegalPhraseError, InvalidArgumentError


class PhraseConstructor(ABC):
    """Turns an ordered list of words into a phrase."""

    @abstractmethod
    def construct(self, words: Sequence[str]) -> str:
        """Build a phrase from one word per slot."""


class PhraseDeconstructor(ABC):
    """Turns a phrase back into its ordered list of words."""

    @abstractmethod
    def deconstruct(self, phrase: str) -> List[str]:
        """Split a phrase into one word per slot."""


class SeparatorsPhraseConstructor(PhraseConstructor, PhraseDeconstructor):
    """Joins words with separators, with an optional prefix and suffix.

    Separators ``["", " like to eat ", "."]`` applied to ``["Dingos",
    "moussaka"]`` give ``"Dingos like to eat moussaka."``. The first and last
    entries are the phrase prefix and suffix and may be empty; the ones in
    between separate words and must not be.

    Parsing uses plain substring search, so words and separators may hold
    regex or format characters. The scan is greedy from the left: a word that
    contains the following separator will not survive a round trip.
    """

    def __init__(self, separators: Sequence[Optional[str]]) -> None:
        if len(separators) < 2:
            raise InvalidArgumentError("Must provide at least two separators.")
        self.leading = separators[0] or ""
        self.trailing = separators[-1] or ""
        self.separators: tuple[str, ...] = tuple(separators[1:-1])  # type: ignore[arg-type]
        for separator in self.separators:
            if not separator:
                raise InvalidArgumentError("Separators must not be empty.")

    @property
    def num_words(self) -> int:
        return len(self.separators) + 1

    def construct(self, words: Sequence[str]) -> str:
        if len(words) != self.num_words:
            raise InvalidArgumentError(
                "Number of words must be one less than the number of separators."
            )
        parts = [self.leading, words[0]]
        for separator, word in zip(self.separators, words[1:]):
            parts.append(separator)
            parts.append(word)
        parts.append(self.trailing)
        return "".join(parts)

    def deconstruct(self, phrase: str) -> List[str]:
        body = self._strip_trailing(self._strip_leading(phrase))

        words: List[str] = []
        cursor = 0
        for separator in self.separators:
            found = body.find(separator, cursor)
            if found == -1:
                raise IllegalPhraseError.expected_separator(phrase, separator)
            words.append(body[cursor:found])
            cursor = found + len(separator)
        words.append(body[cursor:])
        return words

    def _strip_leading(self, phrase: str) -> str:
        if not phrase.startswith(self.leading):
            raise IllegalPhraseError.expected_leading(phrase, self.leading)
        return phrase[len(self.leading):]

    def _strip_trailing(self, phrase: str) -> str:
        if not phrase.endswith(self.trailing):
            raise IllegalPhraseError.expected_trailing(phrase, self.trailing)
        return phrase[: len(phrase) - len(self.trailing)]
