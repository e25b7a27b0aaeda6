"""Core data structures for the Gibberish phrase translator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .words import WordProvider


@dataclass
class TranslatorDefinition:
    """Everything needed to assemble one phrase translator.

    Either ``number_of_bits`` or ``bit_distribution`` must be given. When no
    distribution is given, one is derived for ``number_of_bits`` bits.
    """

    name: str
    providers: Sequence[WordProvider]
    separators: Sequence[str]
    number_of_bits: int = 0
    bit_distribution: Optional[List[int]] = None
    fingerprint: Optional[str] = None
