import pytest

from protalign.engine.analysis.local import Provenance, alignment_stats, choose_provenance, local_alignment
from protalign.engine.exceptions.alignment import UnknownSymbolException
from protalign.engine.structures.penalty import GAP_SYMBOL, PenaltyTable


def build_table(alphabet: str, match: int, mismatch: int, gap: int) -> PenaltyTable:
    table = PenaltyTable()
    for first in alphabet:
        for second in alphabet:
            table.set(first, second, match if first == second else mismatch)
        table.set(first, GAP_SYMBOL, gap)
        table.set(GAP_SYMBOL, first, gap)
    return table

def path_score(first: str, second: str, table: PenaltyTable) -> int:
    return sum(table.get(first_residue, second_residue) for first_residue, second_residue in zip(first, second))

@pytest.fixture
def dna_table():
    return build_table("ACGT", match=2, mismatch=-1, gap=-1)

@pytest.fixture
def blosum_like_table():
    return build_table("ACDEFGHIKLMNPQRSTVWY", match=5, mismatch=-1, gap=-1)

def test_end_to_end_regression_fixture(dna_table: PenaltyTable):
    alignment = local_alignment("ACACACTA", "AGCACACA", dna_table)
    assert alignment.score == 12
    assert alignment.first == "A*CACACTA"
    assert alignment.second == "AGCACAC*A"
    assert alignment.first_span == (0, 8)
    assert alignment.second_span == (0, 8)

@pytest.mark.parametrize("first,second", [
    ("ACACACTA", "AGCACACA"),
    ("GATTACA", "TACA"),
    ("TTTT", "ACGTACGT"),
    ("ACGTTGCA", "CGTTG"),
    ("A", "A"),
])
def test_alignment_invariants_hold(dna_table: PenaltyTable, first: str, second: str):
    alignment = local_alignment(first, second, dna_table)
    assert len(alignment.first) == len(alignment.second)
    assert alignment.first.replace(GAP_SYMBOL, "") == first[alignment.first_span[0]:alignment.first_span[1]]
    assert alignment.second.replace(GAP_SYMBOL, "") == second[alignment.second_span[0]:alignment.second_span[1]]
    assert alignment.score == path_score(alignment.first, alignment.second, dna_table)

def test_self_alignment_is_identity(blosum_like_table: PenaltyTable):
    sequence = "MKTAYIAKQR"
    alignment = local_alignment(sequence, sequence, blosum_like_table)
    assert alignment.first == sequence
    assert alignment.second == sequence
    assert alignment.score == len(sequence) * 5

@pytest.mark.parametrize("first,second", [
    ("", ""),
    ("", "ACGT"),
    ("ACGT", ""),
])
def test_empty_sequence_gives_empty_alignment(dna_table: PenaltyTable, first: str, second: str):
    alignment = local_alignment(first, second, dna_table)
    assert alignment.score == 0
    assert alignment.first == ""
    assert alignment.second == ""

def test_empty_sequence_does_not_look_up_symbols():
    alignment = local_alignment("XYZ", "", PenaltyTable())
    assert alignment.score == 0

def test_unknown_symbol_raises(dna_table: PenaltyTable):
    with pytest.raises(UnknownSymbolException) as exception_info:
        local_alignment("ACGN", "ACGT", dna_table)
    assert "N" in (exception_info.value.first, exception_info.value.second)

def test_unknown_symbol_is_lookup_error(dna_table: PenaltyTable):
    with pytest.raises(LookupError):
        local_alignment("ACGT", "ACGU", dna_table)

def test_tied_up_and_left_prefers_up():
    table = build_table("ABC", match=3, mismatch=-5, gap=-1)
    alignment = local_alignment("ABA", "ACA", table)
    assert alignment.score == 4
    assert alignment.first == "A*BA"
    assert alignment.second == "AC*A"

def test_tie_break_is_deterministic():
    table = build_table("ABC", match=3, mismatch=-5, gap=-1)
    alignments = {local_alignment("ABA", "ACA", table) for _ in range(5)}
    assert len(alignments) == 1

@pytest.mark.parametrize("up,left,diagonal,expected", [
    (1, 2, 0, Provenance.LEFT),
    (1, 2, 2, Provenance.DIAGONAL),
    (1, 2, 3, Provenance.DIAGONAL),
    (2, 1, 0, Provenance.UP),
    (2, 1, 2, Provenance.DIAGONAL),
    (2, 2, 1, Provenance.UP),
    (2, 2, 2, Provenance.DIAGONAL),
    (-1, -1, -5, Provenance.UP),
])
def test_choose_provenance_precedence(up: int, left: int, diagonal: int, expected: Provenance):
    assert choose_provenance(up, left, diagonal) == expected

def test_cells_are_not_floored_at_zero():
    # A floored recurrence would give "A"/"A" scoring 2.
    table = build_table("ABC", match=2, mismatch=-1, gap=-4)
    alignment = local_alignment("BA", "CA", table)
    assert alignment.score == 1
    assert alignment.first == "BA"
    assert alignment.second == "CA"

def test_best_cell_is_taken_from_last_row_only():
    # "AA" against "AA" scores 4 inside the matrix, but the bottom row
    # holding the trailing "B" is never positive.
    table = build_table("AB", match=2, mismatch=-5, gap=-5)
    alignment = local_alignment("AAB", "AA", table)
    assert alignment.score == 0
    assert alignment.first == ""
    assert alignment.second == ""

def test_best_column_tie_keeps_lowest_column():
    table = PenaltyTable()
    for first in "AB":
        for second in "AB":
            table.set(first, second, 3 if first == second else -5)
    table.set("A", GAP_SYMBOL, 0)
    table.set("B", GAP_SYMBOL, 0)
    table.set(GAP_SYMBOL, "A", -1)
    table.set(GAP_SYMBOL, "B", -1)
    alignment = local_alignment("AB", "BA", table)
    assert alignment.score == 3
    assert alignment.first_span == (1, 2)
    assert alignment.second_span == (0, 1)
    assert alignment.first == "B"
    assert alignment.second == "B"

def test_asymmetric_gap_penalties_are_honoured():
    table = build_table("AC", match=2, mismatch=-3, gap=-3)
    table.set(GAP_SYMBOL, "C", 1)
    alignment = local_alignment("A", "AC", table)
    assert alignment.score == 3
    assert alignment.first == "A*"
    assert alignment.second == "AC"

def test_alignment_stats_counts(dna_table: PenaltyTable):
    alignment = local_alignment("ACACACTA", "AGCACACA", dna_table)
    stats = alignment_stats(alignment)
    assert stats.gaps == 2
    assert stats.mismatches == 0
    assert stats.score == 12
    assert stats.percent_identity == pytest.approx(7 / 9)

def test_alignment_stats_empty_alignment(dna_table: PenaltyTable):
    stats = alignment_stats(local_alignment("", "A", dna_table))
    assert stats.percent_identity == 0.0
    assert stats.gaps == 0
