from protalign.cli import program
from protalign.engine.reading import known_substitution_matrices


parser = program.subparsers.add_parser("info", help="Lists available resources.")

parser.add_argument(
    "--list-matrices", "-l",
    action="store_true",
    dest="list_matrices",
    required=False,
    default=False,
    help="Lists the substitution matrices bundled with Biopython. Those with integer scores can be passed to --builtin-matrix."
)

def run(args):
    if args.list_matrices:
        print(", ".join(known_substitution_matrices()))

parser.set_defaults(func=run)
