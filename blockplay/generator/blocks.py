"""
Built-in blocks.

The output block (``text_print``) and the small value palette used to feed
it: text and number literals, arithmetic, text join/length and booleans.
Each entry pairs a BlockDefinition with its generator.
"""

from __future__ import annotations

import math
from typing import Dict, List, Tuple, TYPE_CHECKING

from blockplay.errors import GenerationError
from blockplay.generator.registry import Generator, Order
from blockplay.generator.codegen import quote
from blockplay.graph import BlockDefinition, BlockInstance, BlockKind

if TYPE_CHECKING:
    from blockplay.generator.codegen import CodeGenerator

OUTPUT_BLOCK_TYPE = "text_print"

OUTPUT_BLOCK = BlockDefinition(
    type=OUTPUT_BLOCK_TYPE,
    kind=BlockKind.STATEMENT,
    inputs=("TEXT",),
    description="Print text to the preview panel",
)


def generate_text_print(block: BlockInstance, gen: "CodeGenerator") -> str:
    value = gen.value_to_code(block, "TEXT", Order.NONE, default="''")
    return f"{gen.sink_name}({value})\n"


def generate_text(block: BlockInstance, gen: "CodeGenerator") -> Tuple[str, Order]:
    return quote(block.get_field("TEXT", "")), Order.ATOMIC


def generate_math_number(block: BlockInstance, gen: "CodeGenerator") -> Tuple[str, Order]:
    raw = block.get_field("NUM", 0)
    if isinstance(raw, int) and not isinstance(raw, bool):
        return _integer_code(raw)
    if isinstance(raw, str):
        try:
            return _integer_code(int(raw))
        except ValueError:
            pass

    try:
        number = float(raw)
    except (TypeError, ValueError):
        raise GenerationError(block.type, f"Invalid number {raw!r} in block {block.id}")

    if math.isinf(number):
        return ("float('inf')" if number > 0 else "float('-inf')"), Order.FUNCTION_CALL
    if math.isnan(number):
        return "float('nan')", Order.FUNCTION_CALL

    if number.is_integer():
        return _integer_code(int(number))
    return repr(number), (Order.UNARY_SIGN if number < 0 else Order.ATOMIC)


def _integer_code(number: int) -> Tuple[str, Order]:
    # Integer text is parsed exactly, so large values keep every digit
    return str(number), (Order.UNARY_SIGN if number < 0 else Order.ATOMIC)


ARITHMETIC_OPERATORS: Dict[str, Tuple[str, Order]] = {
    "ADD": (" + ", Order.ADDITIVE),
    "MINUS": (" - ", Order.ADDITIVE),
    "MULTIPLY": (" * ", Order.MULTIPLICATIVE),
    "DIVIDE": (" / ", Order.MULTIPLICATIVE),
    "POWER": (" ** ", Order.EXPONENTIATION),
}


def generate_math_arithmetic(block: BlockInstance, gen: "CodeGenerator") -> Tuple[str, Order]:
    op = block.get_field("OP", "ADD")
    if op not in ARITHMETIC_OPERATORS:
        raise GenerationError(block.type, f"Unknown arithmetic operator {op!r} in block {block.id}")
    operator, order = ARITHMETIC_OPERATORS[op]
    left = gen.value_to_code(block, "A", order, default="0")
    right = gen.value_to_code(block, "B", order, default="0")
    return f"{left}{operator}{right}", order


def generate_text_join(block: BlockInstance, gen: "CodeGenerator") -> Tuple[str, Order]:
    first = gen.value_to_code(block, "ADD0", Order.NONE, default="''")
    second = gen.value_to_code(block, "ADD1", Order.NONE, default="''")
    return f"str({first}) + str({second})", Order.ADDITIVE


def generate_text_length(block: BlockInstance, gen: "CodeGenerator") -> Tuple[str, Order]:
    value = gen.value_to_code(block, "VALUE", Order.NONE, default="''")
    return f"len({value})", Order.FUNCTION_CALL


def generate_logic_boolean(block: BlockInstance, gen: "CodeGenerator") -> Tuple[str, Order]:
    value = str(block.get_field("BOOL", "TRUE")).upper()
    return ("True" if value == "TRUE" else "False"), Order.ATOMIC


VALUE_BLOCKS: List[Tuple[BlockDefinition, Generator]] = [
    (BlockDefinition("text", BlockKind.VALUE, fields=("TEXT",),
                     description="Text literal"), generate_text),
    (BlockDefinition("math_number", BlockKind.VALUE, fields=("NUM",),
                     description="Number literal"), generate_math_number),
    (BlockDefinition("math_arithmetic", BlockKind.VALUE, inputs=("A", "B"), fields=("OP",),
                     description="Arithmetic on two numbers"), generate_math_arithmetic),
    (BlockDefinition("text_join", BlockKind.VALUE, inputs=("ADD0", "ADD1"),
                     description="Join two values as text"), generate_text_join),
    (BlockDefinition("text_length", BlockKind.VALUE, inputs=("VALUE",),
                     description="Length of a text"), generate_text_length),
    (BlockDefinition("logic_boolean", BlockKind.VALUE, fields=("BOOL",),
                     description="True or false"), generate_logic_boolean),
]


def install_value_blocks(gen: "CodeGenerator") -> Dict[str, BlockDefinition]:
    """
    Register the value palette on a generator.

    Returns:
        The palette's definitions keyed by type, for the workspace
    """
    definitions = {}
    for definition, generator in VALUE_BLOCKS:
        gen.register(definition.type, generator)
        definitions[definition.type] = definition
    return definitions
