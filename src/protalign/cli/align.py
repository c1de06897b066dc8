import asyncio

from protalign.cli import program
from protalign.engine.analysis.local import alignment_stats, local_alignment


parser = program.subparsers.add_parser("align", help="Locally align two sequences.")

program.add_penalty_table_arguments(parser)

parser.add_argument(
    "first",
    type=str,
    help="The first sequence. Alignments always end on its last residue."
)

parser.add_argument(
    "second",
    type=str,
    help="The second sequence."
)


async def run(args):
    table = await program.load_penalty_table(args)
    alignment = local_alignment(args.first, args.second, table)
    stats = alignment_stats(alignment, gap_symbol=table.gap_symbol)
    print(f"Score: {alignment.score}")
    print(f"Identity: {stats.percent_identity:.2%}")
    print(alignment.first)
    print(alignment.second)

def run_asynchronously(args):
    asyncio.run(run(args))

parser.set_defaults(func=run_asynchronously)
