from __future__ import annotations

from typing import Optional

import numpy as np

from .errors import AllocationError
from .log import logger


class WorkMatrix:
    """
    Scratch table for the distance DP, kept as one flat int64 buffer.

    Cell (i, j) lives at `j * (n + 1) + i`, i.e. column-major by the second
    sequence. The buffer only grows, so one matrix can serve many pairs.
    """

    def __init__(self, max_cells: Optional[int] = None) -> None:
        self.max_cells = max_cells
        self._buf: Optional[np.ndarray] = None
        self._shape: tuple[int, int] = (0, 0)

    @property
    def allocated(self) -> bool:
        return self._buf is not None

    @property
    def capacity(self) -> int:
        return 0 if self._buf is None else int(self._buf.size)

    @property
    def shape(self) -> tuple[int, int]:
        """(n + 1, m + 1) of the last table written by `reset`."""
        return self._shape

    def reserve(self, n: int, m: int) -> np.ndarray:
        """Make room for an (n+1) x (m+1) table and return the whole buffer."""
        cells = (n + 1) * (m + 1)
        if self._buf is not None and cells <= self._buf.size:
            return self._buf
        if self.max_cells is not None and cells > self.max_cells:
            raise AllocationError(cells, f"exceeds max_cells={self.max_cells}")
        try:
            buf = np.empty(cells, dtype=np.int64)
        except (MemoryError, ValueError) as e:
            raise AllocationError(cells, str(e) or type(e).__name__) from e
        logger.debug("work matrix grown {} -> {} cells", self.capacity, cells)
        self._buf = buf
        return buf

    def reset(self, n: int, m: int) -> np.ndarray:
        """
        Reserve room for an (n+1) x (m+1) table, write the base cases and
        return the flat view the DP fills in.
        """
        buf = self.reserve(n, m)
        rows = n + 1
        view = buf[: rows * (m + 1)]
        view[:rows] = np.arange(rows)
        view[::rows] = np.arange(m + 1)
        self._shape = (rows, m + 1)
        return view

    def cell(self, i: int, j: int) -> int:
        rows, cols = self._shape
        if self._buf is None or not (0 <= i < rows and 0 <= j < cols):
            raise IndexError(f"cell ({i}, {j}) outside table of shape {self._shape}")
        return int(self._buf[j * rows + i])

    def table(self) -> list[list[int]]:
        """The last table as nested lists, indexed `[i][j]`."""
        rows, cols = self._shape
        if self._buf is None or rows == 0:
            return []
        return self._buf[: rows * cols].reshape(cols, rows).T.tolist()

    def release(self) -> None:
        if self._buf is not None:
            logger.debug("work matrix released ({} cells)", self._buf.size)
        self._buf = None
        self._shape = (0, 0)
