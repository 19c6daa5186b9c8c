"""
Blockplay Executor

Runs generated program text exactly once per call. The only effect a
program can have is calling the output capability (the sink); every
failure is caught here and returned as an ExecutionError.

Key classes:
- ExecutionResult: Result of one execute() call
- Executor: Parses and evaluates program text
"""

from __future__ import annotations

import ast
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from blockplay.config import RunConfig
from blockplay.errors import ExecutionError
from blockplay.runtime.environment import Environment
from blockplay.runtime.evaluator import NodeEvaluator

logger = logging.getLogger(__name__)

Sink = Callable[[str], Any]


@dataclass
class ExecutionResult:
    """
    Result of one execute() call.

    ``ran`` is False when the source was blank and nothing was executed,
    which callers must tell apart from a run that produced no output.
    """
    success: bool
    ran: bool
    error: Optional[ExecutionError] = None
    execution_time_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "ran": self.ran,
            "error": self.error.message if self.error else None,
            "execution_time_ms": self.execution_time_ms,
        }


class Executor:
    """Runs program text in an Environment exposing only the sink."""

    def __init__(self, config: Optional[RunConfig] = None):
        self.config = config or RunConfig()

    def execute(self, source: str, sink: Sink) -> ExecutionResult:
        """
        Execute program text.

        Args:
            source: Generated program text
            sink: Output capability, usually OutputChannel.append

        Returns:
            ExecutionResult; never raises for program failures
        """
        if not source or not source.strip():
            logger.debug("Nothing to run")
            return ExecutionResult(success=True, ran=False)

        start = time.perf_counter()
        try:
            module = ast.parse(source.strip(), filename="<blocks>", mode="exec")
            environment = Environment(capabilities={self.config.sink_name: _wrap_sink(sink)})
            NodeEvaluator(environment).run(module)
        except RecursionError:
            error = ExecutionError("program is nested too deeply")
        except SyntaxError as e:
            error = ExecutionError(f"invalid syntax (line {e.lineno})")
        except Exception as e:
            error = ExecutionError.from_exception(e)
        else:
            elapsed = (time.perf_counter() - start) * 1000
            return ExecutionResult(success=True, ran=True, execution_time_ms=elapsed)

        elapsed = (time.perf_counter() - start) * 1000
        logger.warning("Execution failed: %s", error.message)
        return ExecutionResult(success=False, ran=True, error=error, execution_time_ms=elapsed)


def _wrap_sink(sink: Sink) -> Callable[..., None]:
    def emit(value: Any = None) -> None:
        sink(to_text(value))
    return emit


def to_text(value: Any) -> str:
    """
    Text shown for an emitted value.

    Whole-number floats print without a trailing ``.0`` (``4 / 2`` shows
    ``2``) up to 1e21, where the preview switches to exponent notation.
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)
