"""Blocks command for the blockplay CLI - list known block types."""

import json

import click

from blockplay.cli.common import build_playground


@click.command()
@click.option('--json', 'json_output', is_flag=True, help='Output as JSON')
def blocks_command(json_output):
    """List the block types the playground knows."""
    playground = build_playground(None)
    definitions = sorted(playground.workspace.graph.definitions.values(), key=lambda d: d.type)
    registry = playground.generator.registry

    if json_output:
        output = []
        for definition in definitions:
            entry = definition.to_dict()
            entry["has_generator"] = definition.type in registry
            output.append(entry)
        print(json.dumps(output, indent=2))
        return

    for definition in definitions:
        inputs = ", ".join(definition.inputs) or "-"
        print(f"{definition.type:<16} {definition.kind.value:<10} inputs: {inputs}")
