import argparse
import logging
import sys

from protalign.engine.exceptions.alignment import EmptyCandidateSetException, UnknownSymbolException
from protalign.engine.exceptions.reading import NonIntegerScoreException, PenaltyTableFormatException
from protalign.engine.reading import load_substitution_matrix, read_penalty_table
from protalign.engine.structures.penalty import PenaltyTable

logger = logging.getLogger(__name__)

root_parser = argparse.ArgumentParser(prog="protalign")
root_parser.add_argument(
    "--verbose", "-v",
    action="count",
    dest="verbosity",
    default=0,
    help="Increase logging output. Use twice for debugging output."
)
subparsers = root_parser.add_subparsers(required=True)


def add_penalty_table_arguments(parser: argparse.ArgumentParser):
    matrix_group = parser.add_mutually_exclusive_group()
    matrix_group.add_argument(
        "--matrix", "-m",
        dest="matrix_path",
        required=False,
        default=None,
        type=str,
        help="Path to a penalty table whose \"$\" line lists the columns and whose other lines each start with a row symbol."
    )
    matrix_group.add_argument(
        "--builtin-matrix", "-bm",
        dest="builtin_matrix",
        required=False,
        default="BLOSUM62",
        type=str,
        help="Name of a substitution matrix bundled with Biopython. Used when no --matrix is given. Defaults to BLOSUM62."
    )
    parser.add_argument(
        "--gap-score", "-g",
        dest="gap_score",
        required=False,
        default=None,
        type=int,
        help="Overrides the score of every residue paired with the gap symbol, in both directions."
    )


async def load_penalty_table(args) -> PenaltyTable:
    if args.matrix_path is not None:
        table = await read_penalty_table(args.matrix_path)
        if args.gap_score is not None:
            table.set_gap_score(args.gap_score)
        return table
    return load_substitution_matrix(args.builtin_matrix, gap_score=args.gap_score)


def configure_logging(verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s:%(message)s")


def run(argv=None):
    args = root_parser.parse_args(argv)
    configure_logging(args.verbosity)
    try:
        args.func(args)
    except OSError as e:
        logger.error("Failed to open [%s]", e.filename)
        sys.exit(1)
    except (UnknownSymbolException, EmptyCandidateSetException, PenaltyTableFormatException, NonIntegerScoreException) as e:
        logger.error(str(e))
        sys.exit(1)
