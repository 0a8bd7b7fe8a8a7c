from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional, Sequence

from .matrix import WorkMatrix


Op = Literal["match", "sub", "ins", "del", "swap"]


@dataclass(frozen=True)
class EditOp:
    op: Op
    expected: Optional[Any] = None
    predicted: Optional[Any] = None


class EditDistanceEngine:
    """
    Restricted Damerau-Levenshtein distance (insert, delete, substitute,
    swap of two adjacent elements) over any sequences with `==` elements.

    The engine owns one `WorkMatrix`; call `reserve` up front to size it for
    the largest pair of a batch and every later `distance` reuses it.
    """

    def __init__(self, matrix: Optional[WorkMatrix] = None, max_cells: Optional[int] = None) -> None:
        self.matrix = matrix if matrix is not None else WorkMatrix(max_cells=max_cells)

    def reserve(self, n: int, m: int) -> None:
        self.matrix.reserve(n, m)

    def release(self) -> None:
        self.matrix.release()

    def __enter__(self) -> "EditDistanceEngine":
        return self

    def __exit__(self, *exc: object) -> None:
        self.release()

    def distance(self, s: Sequence[Any], t: Sequence[Any]) -> int:
        n = len(s)
        m = len(t)
        if n == 0:
            return m
        if m == 0:
            return n

        view = self.matrix.reset(n, m)
        # Filled as a list, then written back so the table stays inspectable.
        d = view.tolist()
        rows = n + 1
        k = 0
        for i in range(1, n + 1):
            si = s[i - 1]
            k = i
            for j in range(1, m + 1):
                h = k  # (i, j-1)
                k += rows  # (i, j)
                cost = 0 if si == t[j - 1] else 1

                best = d[h] + 1  # insertion
                dele = d[k - 1] + 1
                sub = d[h - 1] + cost
                if dele < best:
                    best = dele
                if sub < best:
                    best = sub

                # Same `cost` as the diagonal step, not a flat +1.
                if i > 1 and j > 1 and si == t[j - 2] and s[i - 2] == t[j - 1]:
                    swap = d[k - 2 * rows - 2] + cost
                    if swap < best:
                        best = swap

                d[k] = best
        view[:] = d
        return d[k]


def damerau_levenshtein(s: Sequence[Any], t: Sequence[Any]) -> int:
    """One-shot distance with a throwaway engine."""
    with EditDistanceEngine() as engine:
        return engine.distance(s, t)


def damerau_levenshtein_ops(expected: Sequence[Any], predicted: Sequence[Any]) -> list[EditOp]:
    """
    Restricted Damerau-Levenshtein DP that returns a stable edit script
    (prefers match/sub, then swap, then deletion, then insertion on ties).

    The number of non-match ops equals `damerau_levenshtein(expected, predicted)`.
    """
    n = len(expected)
    m = len(predicted)

    dp = [[0] * (m + 1) for _ in range(n + 1)]
    back: list[list[Op]] = [["match"] * (m + 1) for _ in range(n + 1)]

    for i in range(1, n + 1):
        dp[i][0] = i
        back[i][0] = "del"
    for j in range(1, m + 1):
        dp[0][j] = j
        back[0][j] = "ins"

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            cost_sub = 0 if expected[i - 1] == predicted[j - 1] else 1
            sub = dp[i - 1][j - 1] + cost_sub
            dele = dp[i - 1][j] + 1
            ins = dp[i][j - 1] + 1
            best = min(sub, dele, ins)
            if best == sub:
                back[i][j] = "match" if cost_sub == 0 else "sub"
            elif best == dele:
                back[i][j] = "del"
            else:
                back[i][j] = "ins"
            if (
                i > 1
                and j > 1
                and expected[i - 1] == predicted[j - 2]
                and expected[i - 2] == predicted[j - 1]
            ):
                swap = dp[i - 2][j - 2] + cost_sub
                if swap < best or (swap == best and back[i][j] in {"del", "ins"}):
                    best = swap
                    back[i][j] = "swap"
            dp[i][j] = best

    ops: list[EditOp] = []
    i, j = n, m
    while i > 0 or j > 0:
        step = back[i][j]
        if step in {"match", "sub"}:
            ops.append(EditOp(step, expected=expected[i - 1], predicted=predicted[j - 1]))
            i -= 1
            j -= 1
        elif step == "swap":
            # Reported in source order: expected "ab" became predicted "ba".
            ops.append(
                EditOp(
                    "swap",
                    expected=(expected[i - 2], expected[i - 1]),
                    predicted=(predicted[j - 2], predicted[j - 1]),
                )
            )
            i -= 2
            j -= 2
        elif step == "del":
            ops.append(EditOp("del", expected=expected[i - 1], predicted=None))
            i -= 1
        else:
            ops.append(EditOp("ins", expected=None, predicted=predicted[j - 1]))
            j -= 1

    ops.reverse()
    return ops


def edit_counts(ops: list[EditOp]) -> tuple[int, int, int, int]:
    """(substitutions, insertions, deletions, swaps)."""
    subs = sum(1 for o in ops if o.op == "sub")
    ins = sum(1 for o in ops if o.op == "ins")
    dels = sum(1 for o in ops if o.op == "del")
    swaps = sum(1 for o in ops if o.op == "swap")
    return subs, ins, dels, swaps
