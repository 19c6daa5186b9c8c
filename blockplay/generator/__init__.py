"""
Blockplay Code Generator

Turns the block graph into program text:
- GeneratorRegistry: block type -> generator function
- Order: precedence tags returned by value generators
- CodeGenerator: walks the graph and assembles the program
- blocks: the output block and the built-in value palette
"""

from blockplay.generator.registry import GeneratorRegistry, Order
from blockplay.generator.codegen import CodeGenerator, needs_parentheses, quote
from blockplay.generator.blocks import (
    OUTPUT_BLOCK,
    OUTPUT_BLOCK_TYPE,
    VALUE_BLOCKS,
    generate_text_print,
    install_value_blocks,
)

__all__ = [
    "GeneratorRegistry",
    "Order",
    "CodeGenerator",
    "needs_parentheses",
    "quote",
    "OUTPUT_BLOCK",
    "OUTPUT_BLOCK_TYPE",
    "VALUE_BLOCKS",
    "generate_text_print",
    "install_value_blocks",
]
