"""CLI tests for the run, generate and blocks commands."""

import pytest
import json
from click.testing import CliRunner

from blockplay.cli import main as cli_main


def write_graph(tmp_path, blocks):
    path = tmp_path / "graph.json"
    path.write_text(json.dumps({"blocks": blocks}))
    return str(path)


class TestRunCommand:
    """Tests for the run CLI command."""

    @pytest.fixture
    def runner(self):
        """CLI runner."""
        return CliRunner()

    def test_run_example(self, runner):
        """Test running the example program prints Halo Dunia."""
        result = runner.invoke(cli_main, ["run"])
        assert result.exit_code == 0
        assert "Halo Dunia" in result.output

    def test_run_json(self, runner):
        """Test the JSON report of the example program."""
        result = runner.invoke(cli_main, ["run", "--json"])
        assert result.exit_code == 0
        output = json.loads(result.output)
        assert output["status"] == "completed"
        assert [e["text"] for e in output["events"]] == ["Halo Dunia"]
        assert output["source"] == "append_to_preview('Halo Dunia')\n"

    def test_run_graph_file(self, runner, tmp_path):
        """Test running a graph document."""
        path = write_graph(tmp_path, [
            {"id": "p1", "type": "text_print", "inputs": {"TEXT": "t1"}, "next": "p2"},
            {"id": "t1", "type": "text", "fields": {"TEXT": "first"}},
            {"id": "p2", "type": "text_print", "inputs": {"TEXT": "t2"}},
            {"id": "t2", "type": "text", "fields": {"TEXT": "second"}},
        ])
        result = runner.invoke(cli_main, ["run", "--graph", path, "--json"])
        assert result.exit_code == 0
        output = json.loads(result.output)
        assert [e["text"] for e in output["events"]] == ["first", "second"]

    def test_run_empty_graph(self, runner, tmp_path):
        """Test an empty document reports an empty program."""
        path = write_graph(tmp_path, [])
        result = runner.invoke(cli_main, ["run", "--graph", path, "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["status"] == "empty"

    def test_run_failure_exit_code(self, runner, tmp_path):
        """Test a failing program exits non-zero with the error shown."""
        path = write_graph(tmp_path, [
            {"id": "p", "type": "text_print", "inputs": {"TEXT": "d"}},
            {"id": "d", "type": "math_arithmetic", "fields": {"OP": "DIVIDE"}},
        ])
        result = runner.invoke(cli_main, ["run", "--graph", path])
        assert result.exit_code == 1
        assert "division by zero" in result.output

    def test_run_missing_file(self, runner):
        """Test a non-existent graph file is rejected."""
        result = runner.invoke(cli_main, ["run", "--graph", "/nonexistent/graph.json"])
        assert result.exit_code != 0

    def test_run_invalid_json(self, runner, tmp_path):
        """Test an unreadable graph document exits with status 1."""
        path = tmp_path / "invalid.json"
        path.write_text("not valid json")
        result = runner.invoke(cli_main, ["run", "--graph", str(path)])
        assert result.exit_code == 1

    def test_run_unknown_block_type(self, runner, tmp_path):
        """Test documents using unknown block types are rejected."""
        path = write_graph(tmp_path, [{"id": "x", "type": "controls_if"}])
        result = runner.invoke(cli_main, ["run", "--graph", path])
        assert result.exit_code == 1

    def test_log_file(self, runner, tmp_path):
        """Test --log-file writes run logs."""
        log_file = tmp_path / "logs" / "blockplay.log"
        result = runner.invoke(cli_main, ["-v", "--log-file", str(log_file), "run"])
        assert result.exit_code == 0
        assert "finished: completed" in log_file.read_text()


class TestGenerateCommand:
    """Tests for the generate CLI command."""

    @pytest.fixture
    def runner(self):
        """CLI runner."""
        return CliRunner()

    def test_generate_example(self, runner):
        """Test generating the example program."""
        result = runner.invoke(cli_main, ["generate"])
        assert result.exit_code == 0
        assert result.output == "append_to_preview('Halo Dunia')\n"

    def test_generate_failure(self, runner, tmp_path):
        """Test generation errors exit with status 1."""
        path = write_graph(tmp_path, [
            {"id": "n", "type": "math_number", "fields": {"NUM": "abc"}},
            {"id": "p", "type": "text_print", "inputs": {"TEXT": "n"}},
        ])
        result = runner.invoke(cli_main, ["generate", "--graph", path])
        assert result.exit_code == 1


class TestBlocksCommand:
    """Tests for the blocks CLI command."""

    @pytest.fixture
    def runner(self):
        """CLI runner."""
        return CliRunner()

    def test_blocks_json(self, runner):
        """Test the block list includes the print block with a generator."""
        result = runner.invoke(cli_main, ["blocks", "--json"])
        assert result.exit_code == 0
        blocks = {b["type"]: b for b in json.loads(result.output)}
        assert blocks["text_print"]["kind"] == "statement"
        assert blocks["text_print"]["has_generator"] is True
        assert blocks["text"]["kind"] == "value"

    def test_blocks_text(self, runner):
        """Test the plain block list."""
        result = runner.invoke(cli_main, ["blocks"])
        assert result.exit_code == 0
        assert "text_print" in result.output
