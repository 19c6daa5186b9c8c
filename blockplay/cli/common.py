"""Helpers shared by the CLI commands."""

import sys
from typing import Optional

from blockplay.config import RunConfig
from blockplay.playground import Playground
from blockplay.schema import load_graph_document


def build_playground(graph_path: Optional[str], no_delay: bool = True) -> Playground:
    """
    Playground holding either the example program or a graph document.

    Exits with status 1 if the document cannot be read or applied.
    """
    config = RunConfig()
    if no_delay:
        config = config.immediate()

    playground = Playground(config=config, seed_example=graph_path is None)
    if graph_path:
        try:
            playground.load(load_graph_document(graph_path))
        except (OSError, ValueError) as e:
            print(f"Error: invalid graph document {graph_path}: {e}", file=sys.stderr)
            sys.exit(1)
    return playground
