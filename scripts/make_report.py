from __future__ import annotations

import argparse
from pathlib import Path

from damerau_distance.cli import batch


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("pairs_csv")
    ap.add_argument("--out-dir", default="outputs")
    ap.add_argument("--unit", default="char")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    stem = Path(args.pairs_csv).stem
    batch(
        pairs_csv=args.pairs_csv,
        out_json=str(out_dir / f"{stem}.json"),
        out_html=str(out_dir / f"{stem}.html"),
        unit=args.unit,
        config=None,
        with_ops=True,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
