"""High-level orchestration between bits and phrases."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .bits import MAX_CHUNK_BITS, bytes_to_int, int_to_bytes, num_bits_to_num_bytes
from .configuration import get_settings
from .distribution import optimize_bit_distribution
from .errors import (
    BitDistributionError,
    FingerprintMismatchError,
    InvalidArgumentError,
    WordIndexOutOfBoundsError,
)
from .indices import IndexTranslator
from .phrases import PhraseConstructor, PhraseDeconstructor, SeparatorsPhraseConstructor
from .structures import TranslatorDefinition
from .words import WordProviderSequence

logger = logging.getLogger(__name__)


def verify_index_legality(
    indices: Sequence[int],
    words: Sequence[str],
    bit_distribution: Sequence[int],
) -> None:
    """Fail on the first index that its slot's bit width can not express."""

    if not len(indices) == len(words) == len(bit_distribution):
        raise InvalidArgumentError(
            "Number of indices must match the number of words and the bit distribution."
        )
    for index, word, num_bits in zip(indices, words, bit_distribution):
        if index < 0:
            raise InvalidArgumentError("Must provide non-negative index.")
        if index >= 1 << num_bits:
            raise WordIndexOutOfBoundsError(index, word, num_bits)


class PhraseTranslator:
    """Translates between bit sequences and phrases.

    Bits are split into one index per slot by the index translator, indices
    are looked up as words in the word provider sequence, and the words are
    joined into a phrase by the phrase constructor. Translating a phrase back
    to bits runs the same steps in reverse.
    """

    def __init__(
        self,
        word_provider_sequence: WordProviderSequence,
        index_translator: IndexTranslator,
        phrase_constructor: PhraseConstructor,
        phrase_deconstructor: Optional[PhraseDeconstructor] = None,
    ) -> None:
        if phrase_deconstructor is None:
            if not isinstance(phrase_constructor, PhraseDeconstructor):
                raise InvalidArgumentError(
                    "A phrase deconstructor is required when the constructor can not "
                    "deconstruct phrases."
                )
            phrase_deconstructor = phrase_constructor

        word_provider_sequence.verify_bit_distribution(index_translator.bit_distribution())

        self.word_provider_sequence = word_provider_sequence
        self.index_translator = index_translator
        self.phrase_constructor = phrase_constructor
        self.phrase_deconstructor = phrase_deconstructor
        self._num_bits = index_translator.bit_coverage()

    def bit_coverage(self) -> int:
        return self._num_bits

    def from_bytes(
        self,
        buffer: bytes | bytearray | memoryview,
        from_bit: int,
        to_bit: int,
    ) -> str:
        """Translate bits ``[from_bit, to_bit)`` of ``buffer`` into a phrase."""

        indices = self.index_translator.from_bytes(buffer, from_bit, to_bit)
        words = self.word_provider_sequence.get_words(indices)
        return self.phrase_constructor.construct(words)

    def to_bytes(
        self,
        buffer: bytearray | memoryview,
        phrase: str,
        from_bit: int,
        to_bit: int,
    ) -> None:
        """Translate ``phrase`` into bits ``[from_bit, to_bit)`` of ``buffer``."""

        words = self.phrase_deconstructor.deconstruct(phrase)
        indices = self.word_provider_sequence.get_indices(words)
        verify_index_legality(indices, words, self.index_translator.bit_distribution())
        self.index_translator.to_bytes(buffer, indices, from_bit, to_bit)

    def from_long(self, value: int) -> str:
        """Translate the low ``bit_coverage()`` bits of ``value`` into a phrase."""

        buffer = int_to_bytes(value, self._num_bits)
        return self.from_bytes(buffer, 0, self._num_bits)

    def to_long(self, phrase: str) -> int:
        """Translate ``phrase`` into the integer its bits spell out."""

        if self._num_bits > MAX_CHUNK_BITS:
            raise InvalidArgumentError(
                f"Integers can not provide the {self._num_bits} bits required."
            )
        buffer = bytearray(num_bits_to_num_bytes(self._num_bits))
        self.to_bytes(buffer, phrase, 0, self._num_bits)
        return bytes_to_int(buffer, self._num_bits)


def _resolve_bit_distribution(
    definition: TranslatorDefinition,
    *,
    max_passes: int,
    tolerance: float,
) -> List[int]:
    num_providers = len(definition.providers)
    if definition.bit_distribution is None:
        if definition.number_of_bits <= 0:
            raise BitDistributionError(
                f"Translator '{definition.name}' needs either a bit distribution "
                "or a positive number of bits."
            )
        return optimize_bit_distribution(
            definition.providers,
            definition.number_of_bits,
            max_passes=max_passes,
            tolerance=tolerance,
        )

    distribution = list(definition.bit_distribution)
    if len(distribution) != num_providers:
        raise BitDistributionError(
            f"Translator '{definition.name}' has {num_providers} providers but a "
            f"bit distribution of length {len(distribution)}."
        )
    if definition.number_of_bits > 0 and sum(distribution) != definition.number_of_bits:
        raise BitDistributionError(
            f"Bit distribution {distribution} of translator '{definition.name}' does "
            f"not sum to {definition.number_of_bits}."
        )
    return distribution


def build_translator(
    definition: TranslatorDefinition,
    *,
    max_passes: Optional[int] = None,
    tolerance: Optional[float] = None,
    algorithm: Optional[str] = None,
) -> PhraseTranslator:
    """Factory to create a phrase translator from a definition."""

    if None in (max_passes, tolerance, algorithm):
        settings = get_settings()
        max_passes = settings.GIBBERISH_MAX_PASSES if max_passes is None else max_passes
        tolerance = settings.GIBBERISH_FUZZY_TOLERANCE if tolerance is None else tolerance
        algorithm = settings.GIBBERISH_FINGERPRINT_ALGORITHM if algorithm is None else algorithm

    if len(definition.separators) != len(definition.providers) + 1:
        raise InvalidArgumentError(
            f"Translator '{definition.name}' needs exactly one more separator than "
            "word providers."
        )

    sequence = WordProviderSequence(definition.providers)
    if definition.fingerprint is not None:
        computed = sequence.compute_fingerprint(algorithm)
        if computed != definition.fingerprint:
            raise FingerprintMismatchError(definition.fingerprint, computed, definition.name)
        logger.info(
            "Verified %s fingerprint %s of translator '%s'.", algorithm, computed, definition.name
        )

    distribution = _resolve_bit_distribution(
        definition, max_passes=max_passes, tolerance=tolerance
    )
    logger.info(
        "Building translator '%s' with bit distribution %s.", definition.name, distribution
    )
    constructor = SeparatorsPhraseConstructor(definition.separators)
    return PhraseTranslator(sequence, IndexTranslator(distribution), constructor, constructor)
