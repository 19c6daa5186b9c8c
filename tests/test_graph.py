"""Test the block graph and the workspace provider."""
import pytest
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from blockplay.errors import GraphError
from blockplay.graph import BlockDefinition, BlockGraph, BlockInstance, BlockKind


class TestBlockDefinition:
    """Tests for BlockDefinition."""

    def test_value_block_never_chains(self):
        """Test value definitions drop the next link."""
        definition = BlockDefinition("v", BlockKind.VALUE)
        assert definition.has_next is False
        assert definition.is_statement is False

    def test_statement_block(self):
        """Test statement definitions keep the next link."""
        definition = BlockDefinition("s", BlockKind.STATEMENT, inputs=("X",))
        assert definition.has_next is True
        assert definition.to_dict()["kind"] == "statement"


class TestBlockGraph:
    """Tests for BlockGraph traversal helpers."""

    def test_empty_graph(self):
        """Test an empty graph has no top blocks."""
        graph = BlockGraph()
        assert len(graph) == 0
        assert graph.top_blocks() == []
        assert graph.top_statements() == []

    def test_top_blocks_render_order(self, workspace):
        """Test top blocks are sorted by y, then x, then insertion."""
        low = workspace.new_block("text_print", block_id="low", position=(0, 100))
        right = workspace.new_block("text_print", block_id="right", position=(40, 10))
        left = workspace.new_block("text_print", block_id="left", position=(0, 10))
        tie = workspace.new_block("text_print", block_id="tie", position=(0, 10))
        order = [b.id for b in workspace.graph.top_blocks()]
        assert order == ["left", "tie", "right", "low"]

    def test_connected_blocks_are_not_top(self, workspace, add_print):
        """Test plugged-in and chained blocks are not top-level."""
        first = add_print("a")
        second = add_print("b")
        workspace.connect_next(first, second)
        tops = workspace.graph.top_blocks()
        assert tops == [first]

    def test_unknown_type_counts_as_statement(self):
        """Test blocks without definitions are still visited as statements."""
        graph = BlockGraph()
        graph.blocks["x"] = BlockInstance(id="x", type="mystery")
        assert graph.top_statements()[0].id == "x"

    def test_orphan_value_block_is_not_a_statement(self, workspace):
        """Test a lone value block does not start a chain."""
        workspace.new_block("text", fields={"TEXT": "floating"})
        assert workspace.graph.top_statements() == []

    def test_to_dict(self, workspace, add_print):
        """Test graph serialisation uses block ids for connections."""
        block = add_print("hi")
        data = workspace.graph.to_dict()
        entry = next(b for b in data["blocks"] if b["id"] == block.id)
        assert entry["inputs"]["TEXT"] == block.get_input("TEXT").id
        assert entry["next"] is None


class TestWorkspace:
    """Tests for Workspace editing operations."""

    def test_new_block_unknown_type(self, workspace):
        """Test placing an unregistered type fails."""
        with pytest.raises(GraphError):
            workspace.new_block("nope")

    def test_new_block_duplicate_id(self, workspace):
        """Test duplicate ids are rejected."""
        workspace.new_block("text", block_id="t")
        with pytest.raises(GraphError):
            workspace.new_block("text", block_id="t")

    def test_new_block_unknown_field(self, workspace):
        """Test unknown field names are rejected."""
        with pytest.raises(GraphError):
            workspace.new_block("text", fields={"NUM": 1})

    def test_new_block_creates_empty_sockets(self, workspace):
        """Test every declared socket starts unconnected."""
        block = workspace.new_block("math_arithmetic")
        assert block.inputs == {"A": None, "B": None}

    def test_generated_ids_are_unique(self, workspace):
        """Test auto-generated ids do not collide."""
        ids = {workspace.new_block("text").id for _ in range(5)}
        assert len(ids) == 5

    def test_connect_input_unknown_socket(self, workspace):
        """Test connecting to a missing socket fails."""
        block = workspace.new_block("text_print")
        literal = workspace.new_block("text")
        with pytest.raises(GraphError):
            workspace.connect_input(block, "VALUE", literal)

    def test_connect_input_requires_value_block(self, workspace):
        """Test statements cannot be plugged into value sockets."""
        block = workspace.new_block("text_print")
        other = workspace.new_block("text_print")
        with pytest.raises(GraphError):
            workspace.connect_input(block, "TEXT", other)

    def test_connect_input_socket_taken(self, workspace, add_print):
        """Test a socket holds at most one block."""
        block = add_print("x")
        with pytest.raises(GraphError):
            workspace.connect_input(block, "TEXT", workspace.new_block("text"))

    def test_connect_input_block_already_connected(self, workspace):
        """Test a value block has at most one parent."""
        literal = workspace.new_block("text")
        workspace.connect_input(workspace.new_block("text_print"), "TEXT", literal)
        with pytest.raises(GraphError):
            workspace.connect_input(workspace.new_block("text_print"), "TEXT", literal)

    def test_connect_input_cycle(self, workspace):
        """Test value connections cannot form a cycle."""
        outer = workspace.new_block("math_arithmetic")
        inner = workspace.new_block("math_arithmetic")
        workspace.connect_input(outer, "A", inner)
        with pytest.raises(GraphError):
            workspace.connect_input(inner, "A", outer)

    def test_connect_next_requires_statement(self, workspace):
        """Test value blocks cannot be chained."""
        block = workspace.new_block("text_print")
        with pytest.raises(GraphError):
            workspace.connect_next(block, workspace.new_block("text"))

    def test_connect_next_cycle(self, workspace):
        """Test statement chains cannot loop."""
        a = workspace.new_block("text_print")
        b = workspace.new_block("text_print")
        workspace.connect_next(a, b)
        with pytest.raises(GraphError):
            workspace.connect_next(b, a)

    def test_connect_next_to_self(self, workspace):
        """Test a block cannot follow itself."""
        a = workspace.new_block("text_print")
        with pytest.raises(GraphError):
            workspace.connect_next(a, a)

    def test_disconnect_and_delete(self, workspace, add_print):
        """Test deleting a block detaches it and frees its children."""
        first = add_print("a")
        second = add_print("b")
        workspace.connect_next(first, second)
        literal = first.get_input("TEXT")

        workspace.delete_block(first)
        assert workspace.graph.get(first.id) is None
        tops = workspace.graph.top_blocks()
        assert second in tops
        assert literal in tops

    def test_set_field(self, workspace):
        """Test updating a declared field."""
        literal = workspace.new_block("text")
        workspace.set_field(literal, "TEXT", "new")
        assert literal.get_field("TEXT") == "new"
        with pytest.raises(GraphError):
            workspace.set_field(literal, "BOGUS", 1)

    def test_register_block_is_one_time(self, workspace):
        """Test re-registering a known type keeps the first definition."""
        first = BlockDefinition("custom", BlockKind.STATEMENT, description="first")
        second = BlockDefinition("custom", BlockKind.STATEMENT, description="second")
        assert workspace.register_block(first) is True
        assert workspace.register_block(second) is False
        assert workspace.graph.definitions["custom"].description == "first"

    def test_seed_example(self, workspace):
        """Test the starter program is a print block showing Halo Dunia."""
        block = workspace.seed_example()
        assert block.type == "text_print"
        assert block.position == (50.0, 50.0)
        literal = block.get_input("TEXT")
        assert literal.type == "text"
        assert literal.get_field("TEXT") == "Halo Dunia"
        assert workspace.graph.top_statements() == [block]
