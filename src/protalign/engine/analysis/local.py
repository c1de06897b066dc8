from enum import IntEnum

import numpy as np

from protalign.engine.structures.alignment import AlignmentStats, PairwiseAlignment
from protalign.engine.structures.penalty import GAP_SYMBOL, PenaltyTable


class Provenance(IntEnum):
    NONE = 0
    UP = 1
    LEFT = 2
    DIAGONAL = 3


def choose_provenance(up: int, left: int, diagonal: int) -> Provenance:
    # Ties between up and left fall through to the up/diagonal comparison.
    if left > up:
        return Provenance.LEFT if left > diagonal else Provenance.DIAGONAL
    return Provenance.UP if up > diagonal else Provenance.DIAGONAL


def local_alignment(first: str, second: str, table: PenaltyTable) -> PairwiseAlignment:
    """
    Locally aligns ``first`` against ``second`` with per-residue gap costs.

    Cells are not floored at zero; only row 0 and column 0 are. The
    alignment always ends on the last residue of ``first``: the best cell
    is the first strictly positive maximum of the bottom row. Raises
    UnknownSymbolException when a queried pair is missing from ``table``.
    """
    n = len(first)
    m = len(second)
    if n == 0 or m == 0:
        return PairwiseAlignment(0, "", "")

    gap = table.gap_symbol
    insertion_penalties = [table.get(residue, gap) for residue in first]
    deletion_penalties = [table.get(gap, residue) for residue in second]

    scores = np.zeros((n + 1, m + 1), dtype=np.int64)
    provenance = np.full((n + 1, m + 1), Provenance.NONE, dtype=np.uint8)

    for i in range(1, n + 1):
        residue = first[i - 1]
        substitution_penalties = np.fromiter(
            (table.get(residue, other) for other in second), dtype=np.int64, count=m)
        up_scores = (scores[i - 1, 1:] + insertion_penalties[i - 1]).tolist()
        diagonal_scores = (scores[i - 1, :-1] + substitution_penalties).tolist()
        row_scores = [0] * m
        row_provenance = [Provenance.NONE] * m
        previous = 0 # scores[i, 0]
        for j in range(m):
            up = up_scores[j]
            left = previous + deletion_penalties[j]
            diagonal = diagonal_scores[j]
            row_provenance[j] = choose_provenance(up, left, diagonal)
            previous = max(up, left, diagonal)
            row_scores[j] = previous
        scores[i, 1:] = row_scores
        provenance[i, 1:] = row_provenance

    best_column = int(np.argmax(scores[n, 1:])) + 1
    best_score = int(scores[n, best_column])
    if best_score <= 0:
        return PairwiseAlignment(0, "", "")

    i = n
    j = best_column
    first_aligned = []
    second_aligned = []
    while provenance[i, j] != Provenance.NONE:
        move = provenance[i, j]
        if move == Provenance.UP:
            first_aligned.append(first[i - 1])
            second_aligned.append(gap)
            i -= 1
        elif move == Provenance.LEFT:
            first_aligned.append(gap)
            second_aligned.append(second[j - 1])
            j -= 1
        else:
            first_aligned.append(first[i - 1])
            second_aligned.append(second[j - 1])
            i -= 1
            j -= 1
    first_aligned.reverse()
    second_aligned.reverse()
    return PairwiseAlignment(
        best_score,
        "".join(first_aligned),
        "".join(second_aligned),
        first_span=(i, n),
        second_span=(j, best_column)
    )


def alignment_stats(alignment: PairwiseAlignment, gap_symbol: str = GAP_SYMBOL) -> AlignmentStats:
    identities = 0
    mismatches = 0
    gaps = 0
    for first_residue, second_residue in zip(alignment.first, alignment.second):
        if first_residue == gap_symbol or second_residue == gap_symbol:
            gaps += 1
        elif first_residue == second_residue:
            identities += 1
        else:
            mismatches += 1
    length = len(alignment.first)
    return AlignmentStats(
        percent_identity=identities/length if length else 0.0,
        mismatches=mismatches,
        gaps=gaps,
        score=alignment.score
    )
