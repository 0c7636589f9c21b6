# src/sequencer/assembly/fragment.py

"""
Immutable DNA fragments and the suffix/prefix overlap arithmetic the greedy
assembler is built on.

A fragment is just a validated run of G, A, C and T. Two fragments compare
equal when their symbols match, regardless of where they came from, so they
can be hashed, stored in sets and handed around freely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

__all__ = ["ALPHABET", "Fragment", "InvalidSequence", "ensure_fragments"]

ALPHABET = frozenset("GACT")


class InvalidSequence(ValueError):
    """Raised when a fragment is built from symbols outside G/A/C/T."""

    def __init__(self, sequence: str, invalid: Iterable[str], *, context: str | None = None):
        self.sequence = sequence
        self.invalid = sorted(set(invalid))
        self.context = context
        msg = f"Invalid nucleotide sequence: {sequence!r} (bad symbols: {', '.join(self.invalid)})"
        if context:
            msg = f"{context}: {msg}"
        super().__init__(msg)

    def with_context(self, context: str) -> "InvalidSequence":
        """Return a copy of this error that names where the sequence came from."""
        return InvalidSequence(self.sequence, self.invalid, context=context)


@dataclass(frozen=True)
class Fragment:
    """One read over the G/A/C/T alphabet. Never mutated after construction."""

    sequence: str

    def __post_init__(self) -> None:
        seq = self.sequence if isinstance(self.sequence, str) else "".join(str(s) for s in self.sequence)
        bad = set(seq) - ALPHABET
        if bad:
            raise InvalidSequence(seq, bad)
        # frozen dataclass, so normalising Seq/list input needs the object setter
        object.__setattr__(self, "sequence", seq)

    def __len__(self) -> int:
        return len(self.sequence)

    def __str__(self) -> str:
        return self.sequence

    def calculate_overlap(self, other: Fragment) -> int:
        """
        Length of the longest suffix of ``self`` that is also a prefix of ``other``.

        Every candidate length from 1 up to the shorter fragment is checked and
        the largest match is kept, so ``CAA`` / ``AAG`` gives 2 rather than 1.
        Returns 0 when nothing overlaps. Direction matters:
        ``a.calculate_overlap(b)`` is generally not ``b.calculate_overlap(a)``.
        """
        left, right = self.sequence, other.sequence
        overlap = 0
        for i in range(1, min(len(left), len(right)) + 1):
            if left[-i:] == right[:i]:
                overlap = i
        return overlap

    def merged_with(self, other: Fragment) -> Fragment:
        """
        New fragment with ``self`` on the left and ``other`` on the right,
        overlapped as much as possible. Zero overlap means plain concatenation.
        """
        overlap = self.calculate_overlap(other)
        return Fragment(self.sequence + other.sequence[overlap:])


def ensure_fragments(items: Iterable[Fragment | str]) -> list[Fragment]:
    """Normalise raw strings into `Fragment` objects, keeping order."""
    result: list[Fragment] = []
    for item in items:
        result.append(item if isinstance(item, Fragment) else Fragment(item))
    return result
