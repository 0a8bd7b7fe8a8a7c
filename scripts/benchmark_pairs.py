from __future__ import annotations

import argparse
import random
import string
from time import perf_counter

from damerau_distance.edit_distance import damerau_levenshtein
from damerau_distance.pool import MatrixPool


def _random_pair(rng: random.Random, length: int) -> tuple[str, str]:
    s = "".join(rng.choice(string.ascii_lowercase) for _ in range(length))
    t = list(s)
    for _ in range(max(1, length // 5)):
        k = rng.randrange(len(t))
        t[k] = rng.choice(string.ascii_lowercase)
    return s, "".join(t)


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--pairs", type=int, default=200)
    ap.add_argument("--length", type=int, default=64)
    ap.add_argument("--seed", type=int, default=0)
    args = ap.parse_args()

    rng = random.Random(args.seed)
    pairs = [_random_pair(rng, args.length) for _ in range(args.pairs)]

    t0 = perf_counter()
    one_shot = [damerau_levenshtein(s, t) for s, t in pairs]
    dt_one = perf_counter() - t0

    pool = MatrixPool(size=1)
    t0 = perf_counter()
    pooled = [pool.distance(s, t) for s, t in pairs]
    dt_pool = perf_counter() - t0
    pool.release()

    if one_shot != pooled:
        print("Mismatch between one-shot and pooled results.")
        return 1
    print(f"one-shot: {dt_one:.2f}s  pooled: {dt_pool:.2f}s  ({len(pairs)} pairs of {args.length})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
