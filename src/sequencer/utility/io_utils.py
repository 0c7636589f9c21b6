# src/sequencer/utility/io_utils.py

"""
Loader and writer that sit outside the assembly core.

Reads raw reads from FASTA, FASTQ or a plain one-sequence-per-line text file
into `Fragment` objects, and writes assembled contigs back out.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from sequencer.assembly.fragment import Fragment, InvalidSequence

L = logging.getLogger(__name__)

__all__ = ["detect_format", "read_fragments", "write_fragments"]

PathLike = str | Path

_SUFFIX_FORMATS = {
    ".fa": "fasta",
    ".fasta": "fasta",
    ".fna": "fasta",
    ".fas": "fasta",
    ".fq": "fastq",
    ".fastq": "fastq",
}
FORMATS = ("fasta", "fastq", "lines")


def detect_format(path: PathLike, fmt: str | None = None) -> str:
    """Return ``fmt`` if given, otherwise guess it from the file suffix."""
    if fmt is None:
        return _SUFFIX_FORMATS.get(Path(path).suffix.lower(), "lines")
    if fmt not in FORMATS:
        raise ValueError(f"Unknown fragment format {fmt!r}; expected one of {', '.join(FORMATS)}")
    return fmt


def _read_lines(path: Path) -> list[Fragment]:
    frags: list[Fragment] = []
    with path.open(encoding="utf-8") as fh:
        for lineno, line in enumerate(fh, start=1):
            seq = line.strip()
            if not seq:
                continue
            try:
                frags.append(Fragment(seq))
            except InvalidSequence as exc:
                raise exc.with_context(f"{path.name} line {lineno}") from exc
    return frags


def read_fragments(path: PathLike, fmt: str | None = None) -> list[Fragment]:
    """
    Load every read in ``path`` as a `Fragment`, preserving file order.

    Symbols are not case-folded, so anything outside G/A/C/T raises
    `InvalidSequence` naming the record (or line) it came from.
    """
    p = Path(path)
    kind = detect_format(p, fmt)
    if kind == "lines":
        frags = _read_lines(p)
    else:
        frags = []
        for rec in SeqIO.parse(p, kind):
            try:
                frags.append(Fragment(str(rec.seq)))
            except InvalidSequence as exc:
                raise exc.with_context(f"{p.name} record {rec.id}") from exc
    L.info("Loaded %d fragments from %s (%s)", len(frags), p, kind)
    return frags


def write_fragments(fragments: Iterable[Fragment], path: PathLike, fmt: str | None = None) -> Path:
    """Write fragments as FASTA contigs (``contig_1`` ...) or one per line."""
    p = Path(path)
    kind = detect_format(p, fmt)
    if kind == "fastq":
        raise ValueError("Assembled contigs carry no qualities; write FASTA or lines instead")
    p.parent.mkdir(parents=True, exist_ok=True)
    frags = list(fragments)
    if kind == "fasta":
        records = [
            SeqRecord(Seq(f.sequence), id=f"contig_{n}", description=f"length={len(f)}")
            for n, f in enumerate(frags, start=1)
        ]
        SeqIO.write(records, p, "fasta")
    else:
        p.write_text("".join(f"{f.sequence}\n" for f in frags), encoding="utf-8")
    L.info("Wrote %d fragments to %s", len(frags), p)
    return p
