"""
Blockplay Run Configuration

Timing and message settings for the run pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict


@dataclass(frozen=True)
class RunConfig:
    """Configuration for one playground process."""
    sink_name: str = "append_to_preview"
    start_delay: float = 0.3
    settle_delay: float = 0.05
    idle_delay: float = 1.0
    empty_program_message: str = "Program kosong - tidak ada blok untuk dijalankan"
    no_output_message: str = "Program selesai dijalankan (tidak ada output)"
    error_prefix: str = "Error: "

    def __post_init__(self):
        if not self.sink_name.isidentifier():
            raise ValueError(f"sink_name must be a valid identifier: {self.sink_name!r}")
        for name in ("start_delay", "settle_delay", "idle_delay"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")

    def immediate(self) -> "RunConfig":
        """Same settings with every delay set to zero."""
        return replace(self, start_delay=0.0, settle_delay=0.0, idle_delay=0.0)

    def error_message(self, message: str) -> str:
        return f"{self.error_prefix}{message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sink_name": self.sink_name,
            "start_delay": self.start_delay,
            "settle_delay": self.settle_delay,
            "idle_delay": self.idle_delay,
            "empty_program_message": self.empty_program_message,
            "no_output_message": self.no_output_message,
            "error_prefix": self.error_prefix,
        }
