# tests/test_fragment.py

"""
Fragment behaviour: validation, value semantics, directional overlap and
overlap-aware merging.
"""

from __future__ import annotations

import pytest

from sequencer.assembly.fragment import Fragment, InvalidSequence, ensure_fragments


@pytest.mark.parametrize("seq", ["G", "GATTACA", "AAGCTTAGCC", ""])
def test_round_trip_and_length(seq):
    frag = Fragment(seq)
    assert frag.sequence == seq
    assert str(frag) == seq
    assert len(frag) == len(seq)


@pytest.mark.parametrize("seq", ["GAXT", "gact", "ACGU", "AC GT", "N"])
def test_invalid_symbols_rejected(seq):
    with pytest.raises(InvalidSequence) as excinfo:
        Fragment(seq)
    assert excinfo.value.sequence == seq
    assert seq in str(excinfo.value)


def test_invalid_sequence_is_a_value_error():
    with pytest.raises(ValueError):
        Fragment("GAXT")


def test_invalid_sequence_reports_bad_symbols_sorted():
    with pytest.raises(InvalidSequence) as excinfo:
        Fragment("AXZXA")
    assert excinfo.value.invalid == ["X", "Z"]


def test_with_context_prefixes_message():
    err = InvalidSequence("GAXT", "X").with_context("reads.txt line 3")
    assert str(err).startswith("reads.txt line 3: ")
    assert err.invalid == ["X"]


def test_value_equality_and_hash():
    a, b = Fragment("ACGT"), Fragment("ACGT")
    assert a == b and a is not b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert a != Fragment("ACGA")
    assert a != "ACGT"


def test_symbol_iterables_are_normalised():
    frag = Fragment(["A", "C", "G"])
    assert frag.sequence == "ACG"
    assert frag == Fragment("ACG")


def test_fragment_is_immutable():
    frag = Fragment("ACGT")
    with pytest.raises(AttributeError):
        frag.sequence = "TTTT"


# ── overlap ──────────────────────────────────────────────────────────
def test_longest_overlap_wins():
    assert Fragment("CAA").calculate_overlap(Fragment("AAG")) == 2


def test_overlap_is_directional():
    assert Fragment("AAG").calculate_overlap(Fragment("CAA")) == 0


@pytest.mark.parametrize("seq", ["A", "ATAT", "GATTACA"])
def test_self_overlap_is_full_length(seq):
    frag = Fragment(seq)
    assert frag.calculate_overlap(frag) == len(frag)


def test_overlap_bounded_by_shorter_fragment():
    assert Fragment("GGGACT").calculate_overlap(Fragment("CT")) == 2
    assert Fragment("CT").calculate_overlap(Fragment("CTGGG")) == 2


def test_empty_fragment_never_overlaps():
    empty = Fragment("")
    assert empty.calculate_overlap(Fragment("ACG")) == 0
    assert Fragment("ACG").calculate_overlap(empty) == 0


# ── merge ────────────────────────────────────────────────────────────
def test_merge_example():
    assert Fragment("AAGCT").merged_with(Fragment("CTTAG")) == Fragment("AAGCTTAG")


def test_merge_without_overlap_concatenates():
    assert Fragment("AAA").merged_with(Fragment("CCC")) == Fragment("AAACCC")


@pytest.mark.parametrize(
    "left, right",
    [("AAGCT", "CTTAG"), ("CAA", "AAG"), ("AAG", "CAA"), ("ATAT", "ATAT"), ("", "ACG")],
)
def test_merge_length_consistent(left, right):
    f1, f2 = Fragment(left), Fragment(right)
    assert len(f1.merged_with(f2)) == len(f1) + len(f2) - f1.calculate_overlap(f2)


def test_merge_leaves_inputs_untouched():
    f1, f2 = Fragment("AAGCT"), Fragment("CTTAG")
    merged = f1.merged_with(f2)
    assert f1 == Fragment("AAGCT") and f2 == Fragment("CTTAG")
    assert merged is not f1 and merged is not f2


def test_ensure_fragments_mixes_strings_and_fragments():
    existing = Fragment("ACG")
    out = ensure_fragments(["TTA", existing])
    assert out == [Fragment("TTA"), existing]
    assert out[1] is existing
    with pytest.raises(InvalidSequence):
        ensure_fragments(["ACG", "AXG"])
