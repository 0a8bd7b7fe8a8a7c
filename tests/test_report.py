from damerau_distance.batch import compute_pairs
from damerau_distance.report import write_html, write_json
from damerau_distance.schemas import BatchResult


def test_json_round_trip(tmp_path):
    result = compute_pairs([("ab", "ba"), ("flaw", "lawn")], with_ops=True)
    path = tmp_path / "r.json"
    write_json(result, path)
    assert BatchResult.model_validate_json(path.read_text(encoding="utf-8")) == result


def test_html_escapes_and_marks_ops(tmp_path):
    result = compute_pairs([("<a>", "<b>"), ("ab", "ba")], with_ops=True)
    path = tmp_path / "r.html"
    write_html(result, path)
    doc = path.read_text(encoding="utf-8")
    assert "&lt;a&gt;" in doc
    assert "<span class='sub'>a→b</span>" in doc
    assert "<span class='swap'>ab⇄ba</span>" in doc


def test_html_empty_batch(tmp_path):
    path = tmp_path / "r.html"
    write_html(BatchResult(unit="char"), path)
    assert "(no pairs)" in path.read_text(encoding="utf-8")
