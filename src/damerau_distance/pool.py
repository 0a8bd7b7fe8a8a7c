from __future__ import annotations

import queue
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence

from .edit_distance import EditDistanceEngine
from .log import logger
from .matrix import WorkMatrix


class MatrixPool:
    """
    A fixed set of work matrices shared between threads.

    Each in-flight call checks out its own matrix; when all are out,
    `engine()` blocks until one comes back. Buffers are allocated lazily
    and kept at their high-water size until `release()`.
    """

    def __init__(self, size: int = 4, max_cells: Optional[int] = None) -> None:
        if size < 1:
            raise ValueError("pool size must be >= 1")
        self.size = size
        self._idle: queue.LifoQueue[WorkMatrix] = queue.LifoQueue(maxsize=size)
        for _ in range(size):
            self._idle.put_nowait(WorkMatrix(max_cells=max_cells))

    @contextmanager
    def engine(self, timeout: Optional[float] = None) -> Iterator[EditDistanceEngine]:
        matrix = self._idle.get(timeout=timeout)
        try:
            yield EditDistanceEngine(matrix)
        finally:
            self._idle.put_nowait(matrix)

    def distance(self, s: Sequence[Any], t: Sequence[Any]) -> int:
        with self.engine() as engine:
            return engine.distance(s, t)

    def _drain(self) -> list[WorkMatrix]:
        held: list[WorkMatrix] = []
        while True:
            try:
                held.append(self._idle.get_nowait())
            except queue.Empty:
                return held

    def reserve(self, n: int, m: int) -> None:
        """Size every idle matrix for an n x m pair up front."""
        held = self._drain()
        try:
            for matrix in held:
                matrix.reserve(n, m)
        finally:
            for matrix in held:
                self._idle.put_nowait(matrix)
        logger.debug("pool reserved {} matrices for {}x{}", len(held), n, m)

    def release(self) -> None:
        """Free the buffers of every matrix not currently checked out."""
        held = self._drain()
        for matrix in held:
            matrix.release()
            self._idle.put_nowait(matrix)
        logger.debug("pool released {} of {} matrices", len(held), self.size)
