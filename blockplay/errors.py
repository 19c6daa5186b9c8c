"""
Blockplay Errors

Exceptions raised by the run pipeline and the block graph provider.

- GenerationError: a block on the walked path cannot be turned into code
- ExecutionError: running the generated program failed
- GraphError: an editing operation would produce an invalid graph
"""

from typing import Optional


class BlockplayError(Exception):
    """Base class for all blockplay errors."""


class GenerationError(BlockplayError):
    """
    Raised when a block instance cannot be generated.

    Attributes:
        block_type: Type name of the offending block
    """

    def __init__(self, block_type: str, message: Optional[str] = None):
        self.block_type = block_type
        self.message = message or f"No generator registered for block type '{block_type}'"
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"GenerationError(block_type={self.block_type!r}, message={self.message!r})"


class ExecutionError(BlockplayError):
    """Raised when generated source fails while running."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExecutionError":
        """Wrap an arbitrary failure, keeping its type name when the message is empty."""
        if isinstance(exc, ExecutionError):
            return exc
        text = str(exc)
        return cls(text if text else type(exc).__name__)


class GraphError(BlockplayError, ValueError):
    """Raised by the graph provider for invalid edits or documents."""
