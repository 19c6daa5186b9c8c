"""
Generator Registry

Maps block type names to generator functions.

A value generator returns ``(expression, Order)``; the order tells the
embedding block whether the expression needs parentheses. A statement
generator returns a code fragment; the chain that follows it is appended by
the CodeGenerator.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Callable, Dict, List, Tuple, Union, TYPE_CHECKING

from blockplay.errors import GenerationError

if TYPE_CHECKING:
    from blockplay.generator.codegen import CodeGenerator
    from blockplay.graph import BlockInstance

logger = logging.getLogger(__name__)


class Order(IntEnum):
    """Python operator precedence, tightest binding first."""
    ATOMIC = 0
    COLLECTION = 1
    FUNCTION_CALL = 2
    EXPONENTIATION = 3
    UNARY_SIGN = 4
    MULTIPLICATIVE = 5
    ADDITIVE = 6
    RELATIONAL = 11
    LOGICAL_NOT = 12
    LOGICAL_AND = 13
    LOGICAL_OR = 14
    CONDITIONAL = 15
    NONE = 99


GeneratorResult = Union[str, Tuple[str, Order]]
Generator = Callable[["BlockInstance", "CodeGenerator"], GeneratorResult]


class GeneratorRegistry:
    """Registry of block generators. Registration is one-time per type."""

    def __init__(self):
        self._generators: Dict[str, Generator] = {}

    def register(self, block_type: str, generator: Generator) -> bool:
        """
        Register a generator for a block type.

        Returns:
            True if added, False if the type already had a generator
        """
        if block_type in self._generators:
            logger.debug("Generator for %s already registered", block_type)
            return False
        self._generators[block_type] = generator
        logger.debug("Registered generator for %s", block_type)
        return True

    def require(self, block_type: str) -> Generator:
        if block_type not in self._generators:
            raise GenerationError(block_type)
        return self._generators[block_type]

    def registered_types(self) -> List[str]:
        return sorted(self._generators)

    def __contains__(self, block_type: str) -> bool:
        return block_type in self._generators

    def __len__(self) -> int:
        return len(self._generators)
