# src/sequencer/utility/merge_report.py

"""Tabular views of an assembly run: the merge history and contig stats."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from sequencer.assembly.assembler import MergeEvent
from sequencer.assembly.fragment import Fragment

L = logging.getLogger(__name__)
__all__ = ["history_frame", "write_merge_report", "summarise"]

COLUMNS = ["step", "left", "right", "overlap", "merged", "merged_length", "remaining"]


def history_frame(events: Iterable[MergeEvent]) -> pd.DataFrame:
    """One row per merge, in the order the merges happened."""
    rows = [
        {
            "step": ev.step,
            "left": ev.left.sequence,
            "right": ev.right.sequence,
            "overlap": ev.overlap,
            "merged": ev.merged.sequence,
            "merged_length": len(ev.merged),
            "remaining": ev.remaining,
        }
        for ev in events
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def write_merge_report(events: Iterable[MergeEvent], path: str | Path) -> Path:
    out = Path(path).expanduser().resolve()
    out.parent.mkdir(parents=True, exist_ok=True)
    df = history_frame(events)
    df.to_csv(out, sep="\t", index=False)
    L.info("Merge report (%d rows) -> %s", len(df), out)
    return out


def summarise(fragments: Iterable[Fragment]) -> dict[str, int]:
    """
    Count, total length, longest and N50 of a fragment collection.
    N50 is the length L such that fragments of length >= L cover at least
    half the total; 0 for an empty collection.
    """
    lengths = sorted((len(f) for f in fragments), reverse=True)
    total = sum(lengths)
    n50 = 0
    running = 0
    for length in lengths:
        running += length
        if running * 2 >= total:
            n50 = length
            break
    return {
        "n_fragments": len(lengths),
        "total_length": total,
        "longest": lengths[0] if lengths else 0,
        "n50": n50,
    }
