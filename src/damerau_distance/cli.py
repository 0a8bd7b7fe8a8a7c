from __future__ import annotations

import csv
from pathlib import Path
from typing import Optional

import typer

from .batch import compute_pairs
from .config import EngineOptions, load_options
from .edit_distance import EditDistanceEngine, damerau_levenshtein_ops, edit_counts
from .errors import AllocationError, InvalidInput
from .log import configure_logging, logger
from .report import write_html, write_json
from .sequences import render_element, to_sequence


app = typer.Typer(
    add_completion=False,
    help="Restricted Damerau-Levenshtein edit distance.",
    pretty_exceptions_show_locals=False,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG|INFO|WARNING|ERROR (default: $DLDIST_LOG_LEVEL or WARNING)"),
) -> None:
    configure_logging(log_level)


def _options(config: Optional[str], unit: Optional[str]) -> EngineOptions:
    try:
        return load_options(config, unit=unit)
    except (ValueError, FileNotFoundError) as e:
        raise typer.BadParameter(str(e)) from e


def _fail(e: Exception) -> typer.Exit:
    logger.error("{}: {}", type(e).__name__, e)
    typer.echo(f"error: {e}", err=True)
    return typer.Exit(code=1)


def _ensure_parent(path: str | Path | None) -> None:
    if not path:
        return
    p = Path(path)
    if p.parent and not p.parent.exists():
        p.parent.mkdir(parents=True, exist_ok=True)


@app.command()
def doctor() -> None:
    """
    Print a quick environment diagnostic.
    """
    import platform
    import sys

    import numpy
    import pydantic

    typer.echo(f"python: {sys.version.split()[0]}")
    typer.echo(f"platform: {platform.platform()}")
    typer.echo(f"numpy: {numpy.__version__}")
    typer.echo(f"pydantic: {pydantic.VERSION}")
    opts = _options(None, None)
    typer.echo(f"unit: {opts.unit}")
    typer.echo(f"max_cells: {opts.max_cells if opts.max_cells is not None else 'unlimited'}")
    typer.echo(f"pool_size: {opts.pool_size}")


@app.command()
def distance(
    left: str = typer.Argument(..., help="First sequence."),
    right: str = typer.Argument(..., help="Second sequence."),
    unit: Optional[str] = typer.Option(None, "--unit", help="char|byte|word"),
    config: Optional[str] = typer.Option(None, "--config", help="YAML/JSON options file."),
) -> None:
    opts = _options(config, unit)
    s = to_sequence(left, opts.unit, opts.encoding)
    t = to_sequence(right, opts.unit, opts.encoding)
    try:
        with EditDistanceEngine(max_cells=opts.max_cells) as engine:
            typer.echo(engine.distance(s, t))
    except AllocationError as e:
        raise _fail(e) from e


@app.command()
def ops(
    left: str = typer.Argument(..., help="First sequence."),
    right: str = typer.Argument(..., help="Second sequence."),
    unit: Optional[str] = typer.Option(None, "--unit", help="char|byte|word"),
    config: Optional[str] = typer.Option(None, "--config", help="YAML/JSON options file."),
    show_matches: bool = typer.Option(False, "--show-matches", help="Also print matching elements."),
) -> None:
    """
    Print one minimal edit script turning LEFT into RIGHT.
    """
    opts = _options(config, unit)
    script = damerau_levenshtein_ops(
        to_sequence(left, opts.unit, opts.encoding), to_sequence(right, opts.unit, opts.encoding)
    )
    for o in script:
        if o.op == "match" and not show_matches:
            continue
        typer.echo(f"{o.op}\t{render_element(o.expected, opts.unit)}\t{render_element(o.predicted, opts.unit)}")
    subs, ins, dels, swaps = edit_counts(script)
    typer.echo(f"distance: {subs + ins + dels + swaps} (S:{subs} I:{ins} D:{dels} T:{swaps})")


@app.command()
def batch(
    pairs_csv: str = typer.Argument(..., help="CSV with columns: left,right"),
    out_json: str = typer.Option(..., "--out-json", help="Write JSON report."),
    out_html: Optional[str] = typer.Option(None, "--out-html", help="Write HTML report."),
    unit: Optional[str] = typer.Option(None, "--unit", help="char|byte|word"),
    config: Optional[str] = typer.Option(None, "--config", help="YAML/JSON options file."),
    with_ops: bool = typer.Option(False, "--ops", help="Include edit scripts and op counts."),
) -> None:
    opts = _options(config, unit)

    pairs: list[tuple[Optional[str], Optional[str]]] = []
    with open(pairs_csv, "r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None or not {"left", "right"} <= set(reader.fieldnames):
            raise typer.BadParameter("CSV must have 'left' and 'right' columns")
        for row in reader:
            pairs.append((row["left"], row["right"]))

    try:
        result = compute_pairs(pairs, opts, with_ops=with_ops)
    except (AllocationError, InvalidInput) as e:
        raise _fail(e) from e

    _ensure_parent(out_json)
    write_json(result, out_json)
    if out_html:
        _ensure_parent(out_html)
        write_html(result, out_html)

    typer.echo(f"Wrote {out_json}")
    if out_html:
        typer.echo(f"Wrote {out_html}")
