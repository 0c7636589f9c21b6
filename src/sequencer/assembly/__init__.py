"""Greedy overlap assembly exposed for external callers."""

from .assembler import Assembler, MergeCandidate, MergeEvent, TieBreak
from .fragment import ALPHABET, Fragment, InvalidSequence, ensure_fragments

__all__ = [
    "ALPHABET",
    "Assembler",
    "Fragment",
    "InvalidSequence",
    "MergeCandidate",
    "MergeEvent",
    "TieBreak",
    "ensure_fragments",
]
