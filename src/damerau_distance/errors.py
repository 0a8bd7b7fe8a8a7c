from __future__ import annotations


class AllocationError(RuntimeError):
    """The work matrix for a pair could not be obtained."""

    def __init__(self, cells: int, reason: str) -> None:
        super().__init__(f"Failed to allocate work matrix of {cells} cells: {reason}")
        self.cells = cells


class InvalidInput(ValueError):
    """Rejected before reaching the engine: wrong argument count or type."""
