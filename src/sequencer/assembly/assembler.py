# src/sequencer/assembly/assembler.py

"""
Greedy overlap assembler.

Holds a private working list of fragments and repeatedly merges the ordered
pair with the longest suffix/prefix overlap until no pair overlaps by at least
``min_overlap`` symbols. The caller's list is copied on the way in and every
accessor hands back a copy, so nothing outside can alias the working list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, NamedTuple

from .fragment import Fragment, ensure_fragments

__all__ = ["Assembler", "MergeCandidate", "MergeEvent", "TieBreak"]

L = logging.getLogger(__name__)


# Inheriting from str lets the CLI and YAML config pass plain strings around,
# e.g. TieBreak("shortest-merge") or TieBreak.FIRST_FOUND == "first-found".
class TieBreak(str, Enum):
    """How to choose between pairs that share the best overlap."""

    FIRST_FOUND = "first-found"  # row-major (i, j) scan order, earliest wins
    SHORTEST_MERGE = "shortest-merge"  # shortest merge, then lexically smallest, then earliest


class MergeCandidate(NamedTuple):
    """A scored ordered pair; ``i`` and ``j`` index the working list."""

    i: int
    j: int
    overlap: int
    merged: Fragment


@dataclass(frozen=True)
class MergeEvent:
    """Record of one performed merge."""

    step: int
    left: Fragment
    right: Fragment
    overlap: int
    merged: Fragment
    remaining: int


def _merge_key(candidate: MergeCandidate) -> tuple[int, str]:
    return len(candidate.merged), candidate.merged.sequence


class Assembler:
    """
    Greedy assembler over a private working list of fragments.

    Parameters
    ----------
    fragments:
        Initial reads. ``Fragment`` objects are used as-is (they are immutable);
        plain strings are validated into fragments.
    tie_break:
        Policy for pairs with equal overlap, see :class:`TieBreak`.
    min_overlap:
        Smallest overlap worth merging on. The default of 1 merges on any
        positive overlap.
    """

    def __init__(
        self,
        fragments: Iterable[Fragment | str],
        *,
        tie_break: TieBreak | str = TieBreak.SHORTEST_MERGE,
        min_overlap: int = 1,
    ) -> None:
        if min_overlap < 1:
            raise ValueError(f"min_overlap must be at least 1, got {min_overlap}")
        self._fragments: list[Fragment] = ensure_fragments(fragments)
        self._history: list[MergeEvent] = []
        self.tie_break = TieBreak(tie_break)
        self.min_overlap = min_overlap
        L.debug(
            "Assembler ready: %d fragments, tie_break=%s, min_overlap=%d",
            len(self._fragments), self.tie_break.value, self.min_overlap,
        )

    def __len__(self) -> int:
        return len(self._fragments)

    def get_fragments(self) -> list[Fragment]:
        """Return a copy of the current working list."""
        return list(self._fragments)

    @property
    def history(self) -> list[MergeEvent]:
        """Merges performed so far, oldest first (a copy)."""
        return list(self._history)

    def best_merge(self) -> MergeCandidate | None:
        """
        Score every ordered pair of distinct positions and return the winner.

        Both ``(a, b)`` and ``(b, a)`` are scored since overlap is directional.
        Returns ``None`` when fewer than two fragments are held or when no pair
        overlaps by at least ``min_overlap``. Does not modify the working list.
        """
        frags = self._fragments
        best: MergeCandidate | None = None
        for i, left in enumerate(frags):
            for j, right in enumerate(frags):
                if i == j:
                    continue
                overlap = left.calculate_overlap(right)
                if overlap < self.min_overlap:
                    continue
                if best is not None:
                    if overlap < best.overlap:
                        continue
                    if overlap == best.overlap and self.tie_break is TieBreak.FIRST_FOUND:
                        continue
                candidate = MergeCandidate(i, j, overlap, left.merged_with(right))
                # equal overlap under SHORTEST_MERGE; an exact tie keeps the earlier pair
                if best is None or overlap > best.overlap or _merge_key(candidate) < _merge_key(best):
                    best = candidate
        return best

    def assemble_once(self) -> bool:
        """
        Merge the best pair, if any. Returns True iff a merge happened.

        The two source fragments are removed by position, so duplicate values
        elsewhere in the list are left alone, and the merge is appended.
        """
        best = self.best_merge()
        if best is None:
            return False

        left, right = self._fragments[best.i], self._fragments[best.j]
        # pop the higher index first so the lower one stays valid
        for idx in sorted((best.i, best.j), reverse=True):
            del self._fragments[idx]
        self._fragments.append(best.merged)

        event = MergeEvent(
            step=len(self._history) + 1,
            left=left,
            right=right,
            overlap=best.overlap,
            merged=best.merged,
            remaining=len(self._fragments),
        )
        self._history.append(event)
        L.debug(
            "merge %d: %s + %s (overlap %d) -> %d bp, %d fragments left",
            event.step, left, right, best.overlap, len(best.merged), event.remaining,
        )
        return True

    def assemble_all(self, on_merge: Callable[[MergeEvent], None] | None = None) -> int:
        """
        Merge until no pair qualifies. Returns the number of merges performed.

        ``on_merge`` is called with each :class:`MergeEvent` as it happens.
        Each merge shrinks the list by one, so this stops after at most
        ``len(self) - 1`` merges.
        """
        merges = 0
        while self.assemble_once():
            merges += 1
            if on_merge is not None:
                on_merge(self._history[-1])
        L.info("Assembly finished after %d merges; %d fragments remain", merges, len(self._fragments))
        return merges
