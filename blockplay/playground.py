"""
Blockplay Playground

Wires the pieces together once at startup and maps the two UI commands:

- Run   -> RunController.start()
- Reset -> OutputChannel.reset()
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from blockplay.config import RunConfig
from blockplay.generator import (
    CodeGenerator,
    OUTPUT_BLOCK,
    generate_text_print,
    install_value_blocks,
)
from blockplay.graph import Workspace
from blockplay.runtime import Executor, OutputChannel, RunController, RunReport
from blockplay.schema import GraphDocument

logger = logging.getLogger(__name__)


class Playground:
    """One workspace, one output log, one run controller."""

    def __init__(self, config: Optional[RunConfig] = None, seed_example: bool = True):
        self.config = config or RunConfig()
        self.channel = OutputChannel()
        self.generator = CodeGenerator(config=self.config)
        definitions = install_value_blocks(self.generator)
        self.workspace = Workspace(definitions, register_generator=self.generator.register_definition)
        self.workspace.register_block(OUTPUT_BLOCK, generate_text_print)
        self.executor = Executor(self.config)
        self.controller = RunController(
            self.generator,
            self.executor,
            self.channel,
            graph_source=lambda: self.workspace.graph,
            config=self.config,
        )
        if seed_example:
            self.workspace.seed_example()

    def run(self) -> Optional[RunReport]:
        """Run the current graph from synchronous code."""
        return asyncio.run(self.controller.start())

    async def run_async(self) -> Optional[RunReport]:
        return await self.controller.start()

    def reset(self) -> None:
        self.channel.reset()

    def generate(self) -> str:
        """Program text for the current graph; raises GenerationError."""
        return self.generator.generate(self.workspace.graph)

    def load(self, document: GraphDocument) -> None:
        """Replace the workspace contents with a graph document."""
        document.apply(self.workspace)
        logger.debug("Loaded graph document with %d blocks", len(document.blocks))
