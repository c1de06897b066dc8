import logging
from typing import Iterable, Sequence

from protalign.engine.analysis.aligners import AsyncLocalAlignmentEngine
from protalign.engine.analysis.local import local_alignment
from protalign.engine.exceptions.alignment import EmptyCandidateSetException
from protalign.engine.structures.alignment import BestMatch, PairwiseAlignment
from protalign.engine.structures.genomics import SequenceRecord
from protalign.engine.structures.penalty import PenaltyTable

logger = logging.getLogger(__name__)


def _select_from_alignments(candidates: Sequence[SequenceRecord], alignments: Iterable[PairwiseAlignment]) -> BestMatch:
    # Candidate 0 is the baseline at score 0 without being aligned; only a
    # strictly greater score displaces the current best.
    best_match = BestMatch(candidates[0], 0, PairwiseAlignment(0, "", ""))
    for index, alignment in enumerate(alignments):
        logger.debug("Candidate %d (%s) scored %d.", index, candidates[index].description, alignment.score)
        if alignment.score > best_match.score:
            best_match = BestMatch(candidates[index], index, alignment)
    logger.info("Score: %d", best_match.score)
    return best_match


def select_best_match(query: str, candidates: Sequence[SequenceRecord], table: PenaltyTable) -> BestMatch:
    if len(candidates) == 0:
        raise EmptyCandidateSetException()
    alignments = (local_alignment(query, candidate.sequence, table) for candidate in candidates)
    return _select_from_alignments(candidates, alignments)


async def select_best_match_concurrently(query: str, candidates: Sequence[SequenceRecord], table: PenaltyTable, max_threads: int = 4) -> BestMatch:
    """
    Same selection as ``select_best_match`` with the pairwise alignments run
    on a thread pool. Results are put back in candidate order before
    selecting, so ties still go to the earliest candidate.
    """
    if len(candidates) == 0:
        raise EmptyCandidateSetException()
    alignments: dict[int, PairwiseAlignment] = dict()
    with AsyncLocalAlignmentEngine(table, max_threads) as aligner_engine:
        for index, candidate in enumerate(candidates):
            aligner_engine.align(query, candidate.sequence, index=index)
        async for alignment, additional_information in aligner_engine:
            alignments[additional_information["index"]] = alignment
    return _select_from_alignments(candidates, (alignments[index] for index in range(len(candidates))))
