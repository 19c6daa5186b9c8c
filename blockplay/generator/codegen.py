"""
Code Generator

Turns a block graph into one Python program text.

Walk order: each top-level statement chain in render order, each block of
the chain in chain order, value sockets resolved recursively. Generation is
all-or-nothing: the first unregistered block type aborts the call with
GenerationError and no text is returned.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from blockplay.config import RunConfig
from blockplay.errors import GenerationError
from blockplay.generator.registry import Generator, GeneratorRegistry, Order
from blockplay.graph import BlockDefinition, BlockGraph, BlockInstance

logger = logging.getLogger(__name__)


class CodeGenerator:
    """Owns the generator registry and produces program text from a graph."""

    def __init__(self, registry: Optional[GeneratorRegistry] = None,
                 config: Optional[RunConfig] = None):
        self.registry = registry or GeneratorRegistry()
        self.config = config or RunConfig()

    @property
    def sink_name(self) -> str:
        return self.config.sink_name

    def register(self, block_type: str, generator: Generator) -> bool:
        return self.registry.register(block_type, generator)

    def register_definition(self, definition: BlockDefinition,
                            generator: Callable[..., Any]) -> bool:
        """Hook handed to the Workspace for custom block registration."""
        return self.registry.register(definition.type, generator)

    def generate(self, graph: BlockGraph) -> str:
        """
        Generate the program for a graph snapshot.

        Returns:
            Program text, empty when there is no top-level statement chain

        Raises:
            GenerationError: A block on the walked path has no usable generator
        """
        chunks: List[str] = []
        for head in graph.top_statements():
            chunks.append(self.statement_to_code(head))
        code = "".join(chunks)
        logger.debug("Generated %d characters from %d blocks", len(code), len(graph))
        return code

    def statement_to_code(self, block: Optional[BlockInstance]) -> str:
        """Generate a statement block and everything chained after it."""
        parts: List[str] = []
        current = block
        while current is not None:
            result = self.registry.require(current.type)(current, self)
            if not isinstance(result, str):
                raise GenerationError(
                    current.type,
                    f"Block type '{current.type}' produces a value and cannot be used as a statement"
                )
            if result and not result.endswith("\n"):
                result += "\n"
            parts.append(result)
            current = current.next
        return "".join(parts)

    def value_to_code(self, block: BlockInstance, name: str,
                      outer_order: Order, default: str = "") -> str:
        """
        Generate the expression plugged into a value socket.

        Args:
            block: Block owning the socket
            name: Socket name
            outer_order: Precedence of the operator the expression is embedded in
            default: Expression used when the socket is empty

        Returns:
            Expression text, parenthesised if its own order binds looser
        """
        child = block.get_input(name)
        if child is None:
            return default

        result = self.registry.require(child.type)(child, self)
        if not (isinstance(result, tuple) and len(result) == 2):
            raise GenerationError(
                child.type,
                f"Block type '{child.type}' does not produce a value"
            )
        code, inner_order = result
        try:
            inner_order = Order(inner_order)
        except ValueError:
            raise GenerationError(child.type, f"Block type '{child.type}' returned unknown order {inner_order!r}")
        if not code:
            return default
        if needs_parentheses(outer_order, inner_order):
            code = f"({code})"
        return code


def needs_parentheses(outer_order: Order, inner_order: Order) -> bool:
    """Parenthesise unless the inner expression binds tighter than its context."""
    if outer_order > inner_order:
        return False
    if outer_order == inner_order and outer_order in (Order.ATOMIC, Order.NONE):
        return False
    return True


def quote(text: Any) -> str:
    """Python string literal for a field value."""
    return repr("" if text is None else str(text))
