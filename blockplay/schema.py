"""
Graph documents.

A JSON description of a block graph, used to hand a graph to the CLI:

    {"blocks": [
        {"id": "p1", "type": "text_print", "inputs": {"TEXT": "t1"}, "next": null},
        {"id": "t1", "type": "text", "fields": {"TEXT": "Halo Dunia"}}
    ]}

Documents are input only; nothing writes them back.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator

from blockplay.errors import GraphError
from blockplay.graph import Workspace


class BlockDocument(BaseModel):
    """One block of a graph document."""
    id: str
    type: str
    fields: Dict[str, Any] = Field(default_factory=dict)
    inputs: Dict[str, Optional[str]] = Field(default_factory=dict)
    next: Optional[str] = None
    position: Tuple[float, float] = (0.0, 0.0)


class GraphDocument(BaseModel):
    """A whole graph document."""
    blocks: List[BlockDocument] = Field(default_factory=list)

    @field_validator("blocks")
    @classmethod
    def _unique_ids(cls, blocks: List[BlockDocument]) -> List[BlockDocument]:
        seen = set()
        for block in blocks:
            if block.id in seen:
                raise ValueError(f"Duplicate block id: {block.id}")
            seen.add(block.id)
        return blocks

    def apply(self, workspace: Workspace) -> None:
        """
        Replace the workspace contents with this document.

        The graph is assembled on a scratch workspace and swapped in only
        once every block and connection is in place; on failure the
        workspace keeps its previous contents.

        Raises:
            GraphError: Unknown types or sockets, dangling references, cycles
        """
        scratch = Workspace(workspace.graph.definitions)
        known = {b.id for b in self.blocks}
        for block in self.blocks:
            scratch.new_block(block.type, block_id=block.id,
                              fields=block.fields, position=block.position)

        for block in self.blocks:
            parent = scratch.graph.get(block.id)
            for socket, child_id in block.inputs.items():
                if child_id is None:
                    continue
                if child_id not in known:
                    raise GraphError(f"Block {block.id} input {socket} references unknown block {child_id}")
                scratch.connect_input(parent, socket, scratch.graph.get(child_id))
            if block.next is not None:
                if block.next not in known:
                    raise GraphError(f"Block {block.id} next references unknown block {block.next}")
                scratch.connect_next(parent, scratch.graph.get(block.next))

        workspace.replace_blocks(scratch.graph.blocks)


def load_graph_document(path: Union[str, Path]) -> GraphDocument:
    """Read and validate a graph document from disk."""
    with open(path, encoding="utf-8") as f:
        return GraphDocument.model_validate_json(f.read())
