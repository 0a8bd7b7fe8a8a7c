from __future__ import annotations

from collections import abc
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, Optional, Sequence

from .config import EngineOptions
from .edit_distance import EditDistanceEngine, damerau_levenshtein_ops, edit_counts
from .errors import InvalidInput
from .log import logger
from .pool import MatrixPool
from .schemas import BatchResult, EditOpModel, PairResult
from .sequences import Unit, render_element, to_sequence


def check_arguments(args: Sequence[Any]) -> None:
    """
    Gate for callers that hand over loosely typed arguments: exactly two,
    each a sequence (str, bytes, list, range, memoryview, ...) or `None`
    (treated as empty).
    """
    if len(args) != 2:
        raise InvalidInput(f"distance requires two arguments; got {len(args)}")
    for a in args:
        if a is not None and not isinstance(a, abc.Sequence):
            raise InvalidInput(f"distance requires two sequence arguments; got {type(a).__name__}")


class DistanceBatch:
    """
    Shared scratch for many `distance` calls: `open` allocates once for the
    largest expected pair, `distance` reuses that buffer, `close` frees it.
    """

    def __init__(self, max_left: int, max_right: int, options: Optional[EngineOptions] = None) -> None:
        self.options = options or EngineOptions()
        self.max_left = max_left
        self.max_right = max_right
        self._engine: Optional[EditDistanceEngine] = None

    @classmethod
    def for_pairs(
        cls, pairs: Sequence[tuple[Sequence[Any], Sequence[Any]]], options: Optional[EngineOptions] = None
    ) -> "DistanceBatch":
        max_left = max((len(s or ()) for s, _ in pairs), default=0)
        max_right = max((len(t or ()) for _, t in pairs), default=0)
        return cls(max_left, max_right, options)

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> "DistanceBatch":
        if self._engine is None:
            engine = EditDistanceEngine(max_cells=self.options.max_cells)
            engine.reserve(self.max_left, self.max_right)
            logger.debug("batch opened for pairs up to {}x{}", self.max_left, self.max_right)
            self._engine = engine
        return self

    def distance(self, s: Optional[Sequence[Any]], t: Optional[Sequence[Any]]) -> int:
        check_arguments((s, t))
        if self._engine is None:
            raise RuntimeError("batch is not open")
        s = s if s is not None else ()
        t = t if t is not None else ()
        if len(s) > self.max_left or len(t) > self.max_right:
            logger.warning(
                "pair {}x{} exceeds batch reservation {}x{}; growing",
                len(s),
                len(t),
                self.max_left,
                self.max_right,
            )
            self.max_left = max(self.max_left, len(s))
            self.max_right = max(self.max_right, len(t))
        return self._engine.distance(s, t)

    def close(self) -> None:
        if self._engine is not None:
            self._engine.release()
            self._engine = None
            logger.debug("batch closed")

    def __enter__(self) -> "DistanceBatch":
        return self.open()

    def __exit__(self, *exc: object) -> None:
        self.close()


def _pooled_distances(seqs: list[tuple[Sequence[Any], Sequence[Any]]], options: EngineOptions) -> list[int]:
    """Spread pairs over `options.pool_size` threads, one work matrix each."""
    for pair in seqs:
        check_arguments(pair)
    pool = MatrixPool(size=options.pool_size, max_cells=options.max_cells)
    pool.reserve(max((len(s) for s, _ in seqs), default=0), max((len(t) for _, t in seqs), default=0))
    try:
        with ThreadPoolExecutor(max_workers=options.pool_size) as ex:
            return list(ex.map(lambda pair: pool.distance(*pair), seqs))
    finally:
        pool.release()


def _pair_result(
    idx: int,
    left: Optional[str],
    right: Optional[str],
    s: Sequence[Any],
    t: Sequence[Any],
    dist: int,
    unit: Unit,
    with_ops: bool,
) -> PairResult:
    if not with_ops:
        return PairResult(index=idx, left=left or "", right=right or "", distance=dist)
    ops = damerau_levenshtein_ops(s, t)
    subs, ins, dels, swaps = edit_counts(ops)
    return PairResult(
        index=idx,
        left=left or "",
        right=right or "",
        distance=dist,
        substitutions=subs,
        insertions=ins,
        deletions=dels,
        transpositions=swaps,
        ops=[
            EditOpModel(
                op=o.op,
                expected=None if o.expected is None else render_element(o.expected, unit),
                predicted=None if o.predicted is None else render_element(o.predicted, unit),
            )
            for o in ops
        ],
    )


def compute_pairs(
    pairs: Iterable[tuple[Optional[str], Optional[str]]],
    options: Optional[EngineOptions] = None,
    with_ops: bool = False,
) -> BatchResult:
    """
    Distance for every (left, right) text pair, split by `options.unit`.

    With `pool_size` 1 the pairs run in order through one shared batch
    matrix; otherwise they run on a thread pool with one matrix per thread.
    """
    options = options or EngineOptions()
    raw = list(pairs)
    seqs = [
        (to_sequence(left, options.unit, options.encoding), to_sequence(right, options.unit, options.encoding))
        for left, right in raw
    ]

    if options.pool_size == 1:
        with DistanceBatch.for_pairs(seqs, options) as batch:
            distances = [batch.distance(s, t) for s, t in seqs]
    else:
        distances = _pooled_distances(seqs, options)

    results = [
        _pair_result(idx, left, right, s, t, dist, options.unit, with_ops)
        for idx, ((left, right), (s, t), dist) in enumerate(zip(raw, seqs, distances))
    ]
    logger.debug("computed {} pairs on {} worker(s)", len(results), options.pool_size)
    return BatchResult(unit=options.unit, pairs=results, total_distance=sum(p.distance for p in results))
