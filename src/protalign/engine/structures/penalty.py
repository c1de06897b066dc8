from typing import Union

from Bio.Align.substitution_matrices import Array

from protalign.engine.exceptions.alignment import UnknownSymbolException
from protalign.engine.exceptions.reading import NonIntegerScoreException

GAP_SYMBOL = "*"

class PenaltyTable:
    """
    Directed lookup from a pair of symbols to an integer score.

    Pairs are never mirrored: ``get(a, b)``, ``get(a, gap)`` and
    ``get(gap, a)`` are separate entries and each one must be registered
    before it is queried.
    """

    def __init__(self, gap_symbol: str = GAP_SYMBOL):
        self.gap_symbol = gap_symbol
        self._penalties: dict[tuple[str, str], int] = dict()

    @classmethod
    def from_substitution_matrix(cls, matrix: Array, gap_score: Union[int, None] = None, gap_symbol: str = GAP_SYMBOL, matrix_name: str = "substitution matrix") -> "PenaltyTable":
        """
        Raises NonIntegerScoreException for matrices with fractional scores
        rather than rounding them.
        """
        table = cls(gap_symbol=gap_symbol)
        for first in matrix.alphabet:
            for second in matrix.alphabet:
                score = float(matrix[first, second])
                if score != int(score):
                    raise NonIntegerScoreException(first, second, score, matrix_name)
                table.set(first, second, int(score))
        if gap_score is not None:
            table.set_gap_score(gap_score)
        return table

    def set_gap_score(self, score: int):
        """Registers ``score`` for every residue against the gap, in both directions."""
        for residue in self.alphabet:
            if residue == self.gap_symbol:
                continue
            self.set(residue, self.gap_symbol, score)
            self.set(self.gap_symbol, residue, score)

    def get(self, first: str, second: str) -> int:
        try:
            return self._penalties[(first, second)]
        except KeyError:
            raise UnknownSymbolException(first, second) from None

    def set(self, first: str, second: str, score: int):
        self._penalties[(first, second)] = score

    @property
    def alphabet(self) -> list[str]:
        symbols = set()
        for first, second in self._penalties:
            symbols.add(first)
            symbols.add(second)
        return sorted(symbols)

    def __contains__(self, pair: tuple[str, str]) -> bool:
        return pair in self._penalties

    def __len__(self) -> int:
        return len(self._penalties)
