"""
Blockplay Run State

Key classes:
- RunState: Controller states (IDLE, RUNNING, SETTLING)
- RunStatus: How a finished run ended
- RunSession: Transient bookkeeping for the run in flight
- RunReport: What a finished run did
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from blockplay.runtime.channel import OutputEvent


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    SETTLING = "settling"


class RunStatus(Enum):
    EMPTY = "empty"
    COMPLETED = "completed"
    NO_OUTPUT = "no_output"
    GENERATION_FAILED = "generation_failed"
    EXECUTION_FAILED = "execution_failed"

    @property
    def failed(self) -> bool:
        return self in (RunStatus.GENERATION_FAILED, RunStatus.EXECUTION_FAILED)


@dataclass
class RunSession:
    """
    Exists only between start and the return to IDLE.

    ``events`` holds what was appended while the run was in flight; it
    survives a reset of the channel during the run.
    """
    run_number: int
    start_length: int
    started_at: datetime = field(default_factory=datetime.now)
    source: str = ""
    status: Optional[RunStatus] = None
    error: Optional[str] = None
    events: List[OutputEvent] = field(default_factory=list)


@dataclass
class RunReport:
    """Outcome of one completed run cycle."""
    run_number: int
    status: RunStatus
    source: str = ""
    events: List[OutputEvent] = field(default_factory=list)
    error: Optional[str] = None
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        return not self.status.failed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_number": self.run_number,
            "status": self.status.value,
            "success": self.success,
            "source": self.source,
            "events": [e.to_dict() for e in self.events],
            "error": self.error,
            "duration_ms": self.duration_ms,
        }
