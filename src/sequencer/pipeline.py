"""
sequencer.pipeline
Thin wrapper that wires the loader, the assembler and the writers together.
Returns an int exit-code (0 = success) & raises on fatal errors.
"""

from __future__ import annotations
from pathlib import Path
from typing import Union
from importlib import import_module
import logging

from sequencer.assembly.assembler import Assembler, MergeEvent, TieBreak
from sequencer.utility.io_utils import read_fragments, write_fragments
from sequencer.utility.merge_report import summarise, write_merge_report
from sequencer.utility.utils import load_config

__all__ = ["run_assembly"]

PathLike = Union[str, Path]
L = logging.getLogger(__name__)


def _tick_safe(bar, inc: int = 1) -> None:
    """Call bar.update(inc) only if there is a bar that supports it."""
    if hasattr(bar, "update"):
        bar.update(inc)


def run_assembly(
    input_path: PathLike,
    output_path: PathLike,
    *,
    tie_break: TieBreak | str | None = None,
    min_overlap: int | None = None,
    report_tsv: PathLike | None = None,
    max_steps: int | None = None,
    input_format: str | None = None,
    output_format: str | None = None,
) -> int:
    """Assemble the reads in *input_path* and write the contigs to *output_path*.

    tie_break and min_overlap fall back to the ``assembly`` section of
    config.yaml when left as None. With *max_steps* set, at most that many
    single merges are made instead of running to completion. When
    *report_tsv* is given, the merge history is written there as TSV.

    Returns 0 on success.
    """
    cfg = load_config()["assembly"]
    tie_break = tie_break if tie_break is not None else cfg["tie_break"]
    min_overlap = min_overlap if min_overlap is not None else int(cfg["min_overlap"])

    frags = read_fragments(input_path, input_format)
    asm = Assembler(frags, tie_break=tie_break, min_overlap=min_overlap)
    L.info("Assembling %d fragments (tie_break=%s, min_overlap=%d)",
           len(asm), asm.tie_break.value, asm.min_overlap)

    # stage_bar looked up late so tests can monkeypatch it
    prog = import_module("sequencer.utility.progress")
    with prog.stage_bar(max(len(asm) - 1, 0), desc="assemble", unit="merge") as bar:
        def on_merge(_event: MergeEvent) -> None:
            _tick_safe(bar)

        if max_steps is None:
            asm.assemble_all(on_merge=on_merge)
        else:
            for _ in range(max_steps):
                if not asm.assemble_once():
                    break
                on_merge(asm.history[-1])

    contigs = asm.get_fragments()
    out = write_fragments(contigs, output_path, output_format)
    if report_tsv is not None:
        write_merge_report(asm.history, report_tsv)

    stats = summarise(contigs)
    L.info("%d merges -> %d contigs, longest %d bp, N50 %d bp, written to %s",
           len(asm.history), stats["n_fragments"], stats["longest"], stats["n50"], out)
    return 0
