"""Blockplay CLI - run block programs from the command line."""

import logging

import click

from blockplay.logging_config import configure_logging
from blockplay.cli.run import run_command
from blockplay.cli.generate import generate_command
from blockplay.cli.blocks import blocks_command


@click.group()
@click.option('--verbose', '-v', count=True, help='Increase log output (-v info, -vv debug)')
@click.option('--log-file', type=click.Path(dir_okay=False), help='Also write logs to this file')
def main(verbose, log_file):
    """Blockplay - turn block programs into output."""
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    configure_logging(level=level, log_file=log_file)


main.add_command(run_command, "run")
main.add_command(generate_command, "generate")
main.add_command(blocks_command, "blocks")

__all__ = [
    "main",
    "run_command",
    "generate_command",
    "blocks_command",
]
