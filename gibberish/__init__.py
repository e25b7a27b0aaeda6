"""Deterministic, reversible translation between bit sequences and phrases."""

from .distribution import TotalMeanWordLengthProblem, optimize_bit_distribution
from .indices import IndexTranslator
from .optimizer import ConstrainedIntegerOptimizer
from .phrases import PhraseConstructor, PhraseDeconstructor, SeparatorsPhraseConstructor
from .structures import TranslatorDefinition
from .translator import PhraseTranslator, build_translator
from .utils import setup_logger
from .words import WordProvider, WordProviderSequence

__all__ = [
    "ConstrainedIntegerOptimizer",
    "IndexTranslator",
    "PhraseConstructor",
    "PhraseDeconstructor",
    "PhraseTranslator",
    "SeparatorsPhraseConstructor",
    "TotalMeanWordLengthProblem",
    "TranslatorDefinition",
    "WordProvider",
    "WordProviderSequence",
    "build_translator",
    "optimize_bit_distribution",
    "setup_logger",
]
