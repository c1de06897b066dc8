import csv
from os import PathLike
from typing import AsyncIterable, Iterable, Union

from protalign.engine.analysis.local import alignment_stats
from protalign.engine.structures.alignment import BestMatch
from protalign.engine.structures.penalty import GAP_SYMBOL

HEADER = [
    "query",
    "description",
    "index",
    "score",
    "percent_identity",
    "mismatches",
    "gaps",
    "aligned_query",
    "aligned_subject"
]


def best_match_to_row(query_name: str, best_match: BestMatch, gap_symbol: str = GAP_SYMBOL) -> dict[str, Union[str, int, float]]:
    stats = alignment_stats(best_match.alignment, gap_symbol=gap_symbol)
    return {
        "query": query_name,
        "description": best_match.record.description,
        "index": best_match.index,
        "score": best_match.score,
        "percent_identity": stats.percent_identity,
        "mismatches": stats.mismatches,
        "gaps": stats.gaps,
        "aligned_query": best_match.alignment.first,
        "aligned_subject": best_match.alignment.second
    }


async def write_best_matches_as_csv(matches: Union[AsyncIterable[tuple[str, BestMatch]], Iterable[tuple[str, BestMatch]]], handle: Union[str, bytes, PathLike[str], PathLike[bytes]], gap_symbol: str = GAP_SYMBOL):
    with open(handle, "w", newline='') as filehandle:
        writer = csv.DictWriter(filehandle, fieldnames=HEADER)
        writer.writeheader()
        if isinstance(matches, AsyncIterable):
            async for query_name, best_match in matches:
                writer.writerow(best_match_to_row(query_name, best_match, gap_symbol))
        else:
            for query_name, best_match in matches:
                writer.writerow(best_match_to_row(query_name, best_match, gap_symbol))
