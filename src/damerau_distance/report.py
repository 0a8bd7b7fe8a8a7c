from __future__ import annotations

import html
from pathlib import Path

from .schemas import BatchResult


def write_json(result: BatchResult, path: str | Path) -> None:
    Path(path).write_text(result.model_dump_json(indent=2), encoding="utf-8")


def _fmt_count(n: int | None) -> str:
    return "" if n is None else str(n)


def write_html(result: BatchResult, path: str | Path) -> None:
    rows = []
    for p in result.pairs:
        ops = []
        for o in p.ops:
            if o.op == "sub":
                ops.append(f"<span class='sub'>{html.escape(o.expected or '')}→{html.escape(o.predicted or '')}</span>")
            elif o.op == "swap":
                ops.append(f"<span class='swap'>{html.escape(o.expected or '')}⇄{html.escape(o.predicted or '')}</span>")
            elif o.op == "ins":
                ops.append(f"<span class='ins'>+{html.escape(o.predicted or '')}</span>")
            elif o.op == "del":
                ops.append(f"<span class='del'>-{html.escape(o.expected or '')}</span>")
        rows.append(
            "<tr>"
            f"<td>{p.index}</td>"
            f"<td class='mono'>{html.escape(p.left)}</td>"
            f"<td class='mono'>{html.escape(p.right)}</td>"
            f"<td>{p.distance}</td>"
            f"<td>{_fmt_count(p.substitutions)}</td>"
            f"<td>{_fmt_count(p.insertions)}</td>"
            f"<td>{_fmt_count(p.deletions)}</td>"
            f"<td>{_fmt_count(p.transpositions)}</td>"
            f"<td class='mono'>{' '.join(ops)}</td>"
            "</tr>"
        )

    body = "".join(rows) or "<tr><td colspan='9'>(no pairs)</td></tr>"

    html_doc = f"""<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <title>Edit Distance Report</title>
  <style>
    body {{ font-family: -apple-system, BlinkMacSystemFont, Segoe UI, Roboto, Helvetica, Arial; margin: 24px; }}
    .mono {{ font-family: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, "Liberation Mono", "Courier New", monospace; }}
    table {{ border-collapse: collapse; width: 100%; }}
    th, td {{ border: 1px solid #ddd; padding: 8px; vertical-align: top; }}
    th {{ background: #f7f7f7; text-align: left; }}
    .sub {{ color: #b91c1c; font-weight: 600; }}
    .swap {{ color: #b45309; font-weight: 600; }}
    .ins {{ color: #0f766e; }}
    .del {{ color: #7c3aed; }}
  </style>
</head>
<body>
  <h1>Edit Distance Report</h1>
  <p><b>Unit:</b> {html.escape(result.unit)}</p>
  <p><b>Pairs:</b> {len(result.pairs)} <b>Total distance:</b> {result.total_distance}</p>

  <table>
    <thead>
      <tr>
        <th>#</th>
        <th>Left</th>
        <th>Right</th>
        <th>Distance</th>
        <th>S</th>
        <th>I</th>
        <th>D</th>
        <th>T</th>
        <th>Ops</th>
      </tr>
    </thead>
    <tbody>
      {body}
    </tbody>
  </table>
</body>
</html>
"""
    Path(path).write_text(html_doc, encoding="utf-8")
