from protalign.cli import program
from protalign.cli import align, info, match  # registers the subcommands


def run():
    program.run()


if __name__ == "__main__":
    run()
