# tests/test_merge_report.py

from __future__ import annotations

from pathlib import Path

import pytest

pd = pytest.importorskip("pandas")

from sequencer.assembly.assembler import Assembler
from sequencer.assembly.fragment import Fragment
from sequencer.utility.merge_report import COLUMNS, history_frame, summarise, write_merge_report


@pytest.fixture
def chain_history():
    asm = Assembler(["AAGCT", "CTTAG", "TAGCC"])
    asm.assemble_all()
    return asm.history


def test_history_frame_rows(chain_history):
    df = history_frame(chain_history)
    assert list(df.columns) == COLUMNS
    assert df["step"].tolist() == [1, 2]
    assert df["overlap"].tolist() == [3, 2]
    assert df["merged"].tolist() == ["CTTAGCC", "AAGCTTAGCC"]
    assert df["merged_length"].tolist() == [7, 10]
    assert df["remaining"].tolist() == [2, 1]


def test_history_frame_empty_keeps_columns():
    df = history_frame([])
    assert df.empty
    assert list(df.columns) == COLUMNS


def test_write_merge_report(tmp_path: Path, chain_history):
    out = write_merge_report(chain_history, tmp_path / "reports" / "merges.tsv")
    back = pd.read_csv(out, sep="\t")
    assert len(back) == 2
    assert back.loc[0, "left"] == "CTTAG"
    assert back.loc[1, "right"] == "CTTAGCC"


def test_summarise():
    stats = summarise([Fragment("A" * 10), Fragment("C" * 5), Fragment("G" * 3), Fragment("T" * 2)])
    # total 20; 10 alone covers half
    assert stats == {"n_fragments": 4, "total_length": 20, "longest": 10, "n50": 10}


def test_summarise_n50_needs_two():
    stats = summarise([Fragment("A" * 6), Fragment("C" * 5), Fragment("G" * 4)])
    # total 15; 6 < 7.5, 6 + 5 >= 7.5
    assert stats["n50"] == 5


def test_summarise_empty():
    assert summarise([]) == {"n_fragments": 0, "total_length": 0, "longest": 0, "n50": 0}
