from dataclasses import dataclass

from protalign.engine.structures.genomics import SequenceRecord

@dataclass(frozen=True)
class AlignmentStats:
    percent_identity: float
    mismatches: int
    gaps: int
    score: int

@dataclass(frozen=True)
class PairwiseAlignment:
    score: int
    first: str
    second: str
    first_span: tuple[int, int] = (0, 0)
    second_span: tuple[int, int] = (0, 0)

@dataclass(frozen=True)
class BestMatch:
    record: SequenceRecord
    index: int
    alignment: PairwiseAlignment

    @property
    def score(self) -> int:
        return self.alignment.score
