"""
Blockplay - run pipeline for an educational block-programming playground.

Turns a block graph into program text, runs it with a single output
capability, and keeps an ordered log of everything the program printed.

Exports:
- Playground: wires workspace, generator, executor, output log and controller
- Workspace / BlockGraph: the editor-side block graph
- CodeGenerator: block graph -> program text
- Executor: program text -> output events
- OutputChannel: ordered output log
- RunController: one run at a time, always back to idle
"""

from blockplay.config import RunConfig
from blockplay.errors import BlockplayError, ExecutionError, GenerationError, GraphError
from blockplay.graph import BlockDefinition, BlockGraph, BlockInstance, BlockKind, Workspace
from blockplay.generator import CodeGenerator, GeneratorRegistry, Order
from blockplay.runtime import (
    Executor,
    ExecutionResult,
    OutputChannel,
    OutputEvent,
    RunController,
    RunReport,
    RunState,
    RunStatus,
)
from blockplay.playground import Playground

__version__ = "0.1.0"

__all__ = [
    "RunConfig",
    "BlockplayError",
    "ExecutionError",
    "GenerationError",
    "GraphError",
    "BlockDefinition",
    "BlockGraph",
    "BlockInstance",
    "BlockKind",
    "Workspace",
    "CodeGenerator",
    "GeneratorRegistry",
    "Order",
    "Executor",
    "ExecutionResult",
    "OutputChannel",
    "OutputEvent",
    "RunController",
    "RunReport",
    "RunState",
    "RunStatus",
    "Playground",
]
