"""Generate command for the blockplay CLI."""

import sys

import click

from blockplay.cli.common import build_playground
from blockplay.errors import GenerationError


@click.command()
@click.option('--graph', '-g', type=click.Path(exists=True, dir_okay=False),
              help='Graph document (JSON); defaults to the example program')
def generate_command(graph):
    """Print the program generated from the blocks without running it."""
    playground = build_playground(graph)
    try:
        source = playground.generate()
    except GenerationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)

    if not source.strip():
        print("# empty program", file=sys.stderr)
        return
    sys.stdout.write(source)
