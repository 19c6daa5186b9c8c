"""
Blockplay Runtime

Runs generated programs and tracks their output:
- Executor: Runs program text once, only the sink is reachable
- NodeEvaluator: Whitelisted AST walker used by the Executor
- Environment: Names visible to a running program
- OutputChannel: Ordered, resettable log of OutputEvents
- RunController: IDLE -> RUNNING -> SETTLING state machine
"""

from blockplay.runtime.channel import OutputChannel, OutputEvent
from blockplay.runtime.environment import Environment, SAFE_BUILTINS
from blockplay.runtime.evaluator import NodeEvaluator
from blockplay.runtime.executor import Executor, ExecutionResult
from blockplay.runtime.state import RunReport, RunSession, RunState, RunStatus
from blockplay.runtime.controller import RunController

__all__ = [
    "OutputChannel",
    "OutputEvent",
    "Environment",
    "SAFE_BUILTINS",
    "NodeEvaluator",
    "Executor",
    "ExecutionResult",
    "RunReport",
    "RunSession",
    "RunState",
    "RunStatus",
    "RunController",
]
