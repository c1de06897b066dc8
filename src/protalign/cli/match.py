import asyncio
from typing import Sequence

from protalign.cli import program
from protalign.engine.analysis.matching import select_best_match, select_best_match_concurrently
from protalign.engine.reading import read_fasta, read_sequence_records
from protalign.engine.structures.alignment import BestMatch
from protalign.engine.structures.genomics import SequenceRecord
from protalign.engine.writing import write_best_matches_as_csv


parser = program.subparsers.add_parser("match", help="Finds the best matching record for each query sequence.")

program.add_penalty_table_arguments(parser)

parser.add_argument(
    "--format", "-f",
    dest="records_format",
    required=False,
    default="lines",
    choices=["lines", "fasta"],
    help="\"lines\" expects one header line and one sequence line per record; \"fasta\" accepts standard multi-line FASTA."
)

parser.add_argument(
    "--threads", "-t",
    dest="threads",
    required=False,
    default=0,
    type=int,
    help="Number of threads to align candidates with. Candidates are aligned one after another when 0 (the default)."
)

parser.add_argument(
    "--out", "-o",
    dest="out",
    required=False,
    default=None,
    type=str,
    help="Path of a CSV file to write the best matches to."
)

parser.add_argument(
    "records",
    type=str,
    help="The file holding the candidate records."
)

parser.add_argument(
    "queries",
    nargs="+",
    type=str,
    help="The query sequences. Multiple can be listed."
)


async def load_candidates(args) -> Sequence[SequenceRecord]:
    reader = read_fasta if args.records_format == "fasta" else read_sequence_records
    return [record async for record in reader(args.records)]

async def run(args):
    table = await program.load_penalty_table(args)
    candidates = await load_candidates(args)
    best_matches: list[tuple[str, BestMatch]] = list()
    for query in args.queries:
        if args.threads > 0:
            best_match = await select_best_match_concurrently(query, candidates, table, args.threads)
        else:
            best_match = select_best_match(query, candidates, table)
        best_matches.append((query, best_match))
        print(f"Query: {query}")
        print(f"Best match: {best_match.record.description}")
        print(f"Score: {best_match.score}")
        print(best_match.alignment.first)
        print(best_match.alignment.second)
    if args.out is not None:
        await write_best_matches_as_csv(best_matches, args.out, gap_symbol=table.gap_symbol)

def run_asynchronously(args):
    asyncio.run(run(args))

parser.set_defaults(func=run_asynchronously)
