"""
Blockplay Runtime Environment

The names a generated program can see. Nothing from the host interpreter
is reachable except what is put here: the output capability, program
variables and a fixed table of pure builtins.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from blockplay.errors import ExecutionError

SAFE_BUILTINS: Dict[str, Callable[..., Any]] = {
    "str": str,
    "len": len,
    "abs": abs,
    "int": int,
    "float": float,
    "round": round,
    "min": min,
    "max": max,
    "bool": bool,
    "range": range,
}


class Environment:
    """Name lookup for one execution."""

    def __init__(self, capabilities: Optional[Dict[str, Callable[..., Any]]] = None,
                 builtins: Optional[Dict[str, Callable[..., Any]]] = None):
        self.capabilities = dict(capabilities or {})
        self.builtins = dict(SAFE_BUILTINS if builtins is None else builtins)
        self.variables: Dict[str, Any] = {}

    def lookup(self, name: str) -> Any:
        if name in self.variables:
            return self.variables[name]
        if name in self.capabilities:
            return self.capabilities[name]
        if name in self.builtins:
            return self.builtins[name]
        raise ExecutionError(f"name '{name}' is not defined")

    def assign(self, name: str, value: Any) -> None:
        if name in self.capabilities or name in self.builtins:
            raise ExecutionError(f"cannot assign to '{name}'")
        self.variables[name] = value

    def is_function(self, value: Any) -> bool:
        """True for callables this environment handed out."""
        return any(value is f for f in self.capabilities.values()) or \
            any(value is f for f in self.builtins.values())
