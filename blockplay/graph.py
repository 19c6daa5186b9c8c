"""
Blockplay Block Graph

The block graph is the user's program as assembled in the editor. The run
pipeline only reads it; editing goes through Workspace, which plays the
role of the editor-side provider.

Key classes:
- BlockKind: STATEMENT or VALUE
- BlockDefinition: Shape of a block type (sockets, next link, fields)
- BlockInstance: One placed block with its literal fields and connections
- BlockGraph: Definitions plus the ordered set of placed blocks
- Workspace: Editing operations, block registration and example seeding
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from blockplay.errors import GraphError

logger = logging.getLogger(__name__)


class BlockKind(Enum):
    STATEMENT = "statement"
    VALUE = "value"


@dataclass(frozen=True)
class BlockDefinition:
    """
    Shape of a block type.

    A statement block chains to a next statement and has no output value.
    A value block plugs into a socket of another block and produces a value.
    """
    type: str
    kind: BlockKind
    inputs: Tuple[str, ...] = ()
    fields: Tuple[str, ...] = ()
    has_next: bool = True
    description: str = ""

    def __post_init__(self):
        if self.kind is BlockKind.VALUE and self.has_next:
            # Value blocks never chain
            object.__setattr__(self, "has_next", False)

    @property
    def is_statement(self) -> bool:
        return self.kind is BlockKind.STATEMENT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "kind": self.kind.value,
            "inputs": list(self.inputs),
            "fields": list(self.fields),
            "has_next": self.has_next,
            "description": self.description,
        }


@dataclass(eq=False)
class BlockInstance:
    """One placed block. Identity is the block id."""
    id: str
    type: str
    fields: Dict[str, Any] = field(default_factory=dict)
    inputs: Dict[str, Optional["BlockInstance"]] = field(default_factory=dict)
    next: Optional["BlockInstance"] = None
    position: Tuple[float, float] = (0.0, 0.0)

    def get_field(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    def get_input(self, name: str) -> Optional["BlockInstance"]:
        return self.inputs.get(name)

    def children(self) -> Iterator["BlockInstance"]:
        """Connected value blocks followed by the next statement."""
        for child in self.inputs.values():
            if child is not None:
                yield child
        if self.next is not None:
            yield self.next

    def __repr__(self) -> str:
        return f"<BlockInstance {self.id} type={self.type}>"


@dataclass
class BlockGraph:
    """
    Definitions plus placed blocks.

    Blocks keep insertion order; top-level chains are the blocks nothing
    connects to, in render order (y, then x, then insertion order).
    Acyclicity is guaranteed by whoever builds the graph.
    """
    definitions: Dict[str, BlockDefinition] = field(default_factory=dict)
    blocks: Dict[str, BlockInstance] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self) -> Iterator[BlockInstance]:
        return iter(self.blocks.values())

    def get(self, block_id: str) -> Optional[BlockInstance]:
        return self.blocks.get(block_id)

    def definition_for(self, block: BlockInstance) -> Optional[BlockDefinition]:
        return self.definitions.get(block.type)

    def is_statement(self, block: BlockInstance) -> bool:
        """Unknown types count as statements so they are still visited."""
        definition = self.definition_for(block)
        return definition is None or definition.is_statement

    def top_blocks(self, ordered: bool = True) -> List[BlockInstance]:
        """Blocks that are neither plugged into a socket nor chained after another block."""
        attached = set()
        for block in self.blocks.values():
            for child in block.children():
                attached.add(child.id)

        tops = [b for b in self.blocks.values() if b.id not in attached]
        if ordered:
            index = {block_id: i for i, block_id in enumerate(self.blocks)}
            tops.sort(key=lambda b: (b.position[1], b.position[0], index[b.id]))
        return tops

    def top_statements(self) -> List[BlockInstance]:
        """Heads of the top-level statement chains in render order."""
        return [b for b in self.top_blocks(ordered=True) if self.is_statement(b)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "blocks": [
                {
                    "id": b.id,
                    "type": b.type,
                    "fields": dict(b.fields),
                    "inputs": {k: (v.id if v else None) for k, v in b.inputs.items()},
                    "next": b.next.id if b.next else None,
                    "position": list(b.position),
                }
                for b in self.blocks.values()
            ]
        }


GeneratorHook = Callable[[BlockDefinition, Callable[..., Any]], bool]


class Workspace:
    """
    Editor-side provider of the block graph.

    Enforces the graph invariants (known types, existing sockets, one parent
    per block, no cycles) so the run pipeline can assume them.
    """

    def __init__(self, definitions: Optional[Dict[str, BlockDefinition]] = None,
                 register_generator: Optional[GeneratorHook] = None):
        self.graph = BlockGraph(definitions=dict(definitions or {}))
        self._register_generator = register_generator
        self._ids = itertools.count(1)

    def register_block(self, definition: BlockDefinition,
                       generator: Optional[Callable[..., Any]] = None) -> bool:
        """
        Register a custom block type and, optionally, its generator.

        Registration is one-time: a type that is already known is left as is.

        Returns:
            True if the definition was added
        """
        added = definition.type not in self.graph.definitions
        if added:
            self.graph.definitions[definition.type] = definition
            logger.debug("Registered block definition %s", definition.type)
        if generator is not None and self._register_generator is not None:
            self._register_generator(definition, generator)
        return added

    def new_block(self, block_type: str, block_id: Optional[str] = None,
                  fields: Optional[Dict[str, Any]] = None,
                  position: Tuple[float, float] = (0.0, 0.0)) -> BlockInstance:
        """Place a new block of a registered type."""
        definition = self.graph.definitions.get(block_type)
        if definition is None:
            raise GraphError(f"Unknown block type: {block_type}")

        block_id = block_id or self._next_id()
        if block_id in self.graph.blocks:
            raise GraphError(f"Duplicate block id: {block_id}")

        unknown = set(fields or {}) - set(definition.fields)
        if unknown:
            raise GraphError(f"Block type {block_type} has no fields {sorted(unknown)}")

        block = BlockInstance(
            id=block_id,
            type=block_type,
            fields=dict(fields or {}),
            inputs={name: None for name in definition.inputs},
            position=(float(position[0]), float(position[1])),
        )
        self.graph.blocks[block_id] = block
        return block

    def set_field(self, block: BlockInstance, name: str, value: Any) -> None:
        definition = self._definition(block)
        if name not in definition.fields:
            raise GraphError(f"Block type {block.type} has no field {name}")
        block.fields[name] = value

    def connect_input(self, parent: BlockInstance, socket: str, child: BlockInstance) -> None:
        """Plug a value block into a value socket of another block."""
        definition = self._definition(parent)
        if socket not in definition.inputs:
            raise GraphError(f"Block type {parent.type} has no input {socket}")
        if self._definition(child).kind is not BlockKind.VALUE:
            raise GraphError(f"Block {child.id} is not a value block")
        if parent.inputs.get(socket) is not None:
            raise GraphError(f"Input {socket} of block {parent.id} is already connected")
        self._check_attachable(parent, child)
        parent.inputs[socket] = child

    def connect_next(self, previous: BlockInstance, following: BlockInstance) -> None:
        """Chain a statement block after another statement block."""
        definition = self._definition(previous)
        if not definition.has_next:
            raise GraphError(f"Block type {previous.type} has no next connection")
        if not self._definition(following).is_statement:
            raise GraphError(f"Block {following.id} is not a statement block")
        if previous.next is not None:
            raise GraphError(f"Block {previous.id} already has a next block")
        self._check_attachable(previous, following)
        previous.next = following

    def disconnect(self, block: BlockInstance) -> None:
        """Detach a block from whatever it is plugged into or chained after."""
        for parent in self.graph.blocks.values():
            if parent.next is block:
                parent.next = None
            for name, child in parent.inputs.items():
                if child is block:
                    parent.inputs[name] = None

    def delete_block(self, block: BlockInstance) -> None:
        """Remove a block; its own children become top-level blocks."""
        self.disconnect(block)
        self.graph.blocks.pop(block.id, None)

    def clear(self) -> None:
        self.graph.blocks.clear()

    def replace_blocks(self, blocks: Dict[str, BlockInstance]) -> None:
        """Swap in a fully built set of blocks, keeping the same graph object."""
        self.graph.blocks.clear()
        self.graph.blocks.update(blocks)

    def seed_example(self) -> BlockInstance:
        """
        Place the starter program: a print block showing "Halo Dunia".

        Returns:
            The print block
        """
        print_block = self.new_block("text_print", position=(50, 50))
        text_block = self.new_block("text", fields={"TEXT": "Halo Dunia"}, position=(50, 50))
        self.connect_input(print_block, "TEXT", text_block)
        return print_block

    def _definition(self, block: BlockInstance) -> BlockDefinition:
        if block.id not in self.graph.blocks:
            raise GraphError(f"Block {block.id} is not in this workspace")
        definition = self.graph.definitions.get(block.type)
        if definition is None:
            raise GraphError(f"Unknown block type: {block.type}")
        return definition

    def _check_attachable(self, parent: BlockInstance, child: BlockInstance) -> None:
        if child is parent or _reaches(child, parent):
            raise GraphError(f"Connecting {child.id} under {parent.id} would create a cycle")
        for other in self.graph.blocks.values():
            if other.next is child or any(c is child for c in other.inputs.values()):
                raise GraphError(f"Block {child.id} is already connected")

    def _next_id(self) -> str:
        while True:
            candidate = f"b{next(self._ids)}"
            if candidate not in self.graph.blocks:
                return candidate


def _reaches(start: BlockInstance, target: BlockInstance) -> bool:
    """True if target is reachable from start through inputs or next links."""
    stack = [start]
    seen = set()
    while stack:
        block = stack.pop()
        if block is target:
            return True
        if block.id in seen:
            continue
        seen.add(block.id)
        stack.extend(block.children())
    return False
