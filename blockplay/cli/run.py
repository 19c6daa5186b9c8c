"""Run command for the blockplay CLI."""

import json
import sys

import click

from blockplay.cli.common import build_playground


@click.command()
@click.option('--graph', '-g', type=click.Path(exists=True, dir_okay=False),
              help='Graph document (JSON); defaults to the example program')
@click.option('--json', 'json_output', is_flag=True, help='Output the run report as JSON')
@click.option('--delay/--no-delay', default=False,
              help='Use the interactive start, settle and idle delays')
def run_command(graph, json_output, delay):
    """Run the block program and print its output log."""
    playground = build_playground(graph, no_delay=not delay)
    report = playground.run()

    if json_output:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        for event in report.events:
            print(f"[{event.display_time}] {event.text}")

    if report.status.failed:
        sys.exit(1)
