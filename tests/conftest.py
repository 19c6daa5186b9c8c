"""Test fixtures for the blockplay test suite."""
import pytest
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from blockplay.config import RunConfig
from blockplay.generator import CodeGenerator, OUTPUT_BLOCK, generate_text_print, install_value_blocks
from blockplay.graph import BlockDefinition, BlockKind, Workspace
from blockplay.playground import Playground
from blockplay.runtime import Executor, OutputChannel, RunController


@pytest.fixture
def config() -> RunConfig:
    """Run configuration without any delays."""
    return RunConfig().immediate()


@pytest.fixture
def generator(config: RunConfig) -> CodeGenerator:
    """Code generator with the value palette installed."""
    gen = CodeGenerator(config=config)
    install_value_blocks(gen)
    return gen


@pytest.fixture
def workspace(generator: CodeGenerator) -> Workspace:
    """Empty workspace that knows the built-in blocks, print block included."""
    definitions = {d.type: d for d in _value_definitions()}
    ws = Workspace(definitions, register_generator=generator.register_definition)
    ws.register_block(OUTPUT_BLOCK, generate_text_print)
    return ws


@pytest.fixture
def channel() -> OutputChannel:
    """Output channel with a fixed, ticking clock."""
    start = datetime(2024, 1, 1, 9, 0, 0)
    ticks = iter(range(10_000))
    return OutputChannel(clock=lambda: start + timedelta(seconds=next(ticks)))


@pytest.fixture
def executor(config: RunConfig) -> Executor:
    return Executor(config)


@pytest.fixture
def controller(generator, executor, channel, workspace, config) -> RunController:
    """Run controller over the workspace fixture."""
    return RunController(generator, executor, channel,
                         graph_source=lambda: workspace.graph, config=config)


@pytest.fixture
def playground(config: RunConfig) -> Playground:
    """Playground with an empty workspace and no delays."""
    return Playground(config=config, seed_example=False)


@pytest.fixture
def add_print(workspace: Workspace) -> Callable:
    """Factory placing a print block, optionally wired to a text literal."""
    def _add(text=None, position=(0, 0)):
        block = workspace.new_block("text_print", position=position)
        if text is not None:
            literal = workspace.new_block("text", fields={"TEXT": text})
            workspace.connect_input(block, "TEXT", literal)
        return block
    return _add


@pytest.fixture
def silent_block(workspace: Workspace) -> BlockDefinition:
    """Statement block that assigns a variable and prints nothing."""
    definition = BlockDefinition("set_counter", BlockKind.STATEMENT)
    workspace.register_block(definition, lambda block, gen: "counter = 1\n")
    return definition


def _value_definitions():
    from blockplay.generator import VALUE_BLOCKS
    return [definition for definition, _ in VALUE_BLOCKS]
