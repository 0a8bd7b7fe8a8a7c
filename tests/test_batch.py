import pytest

from damerau_distance import batch as batch_mod
from damerau_distance.batch import DistanceBatch, check_arguments, compute_pairs
from damerau_distance.config import EngineOptions, load_options
from damerau_distance.errors import AllocationError, InvalidInput


def test_check_arguments_count():
    with pytest.raises(InvalidInput, match="two arguments"):
        check_arguments(("abc",))
    with pytest.raises(InvalidInput):
        check_arguments(("a", "b", "c"))


def test_check_arguments_type():
    with pytest.raises(InvalidInput, match="sequence"):
        check_arguments(("abc", 42))
    check_arguments(("abc", None))
    check_arguments((b"abc", ["a", "b"]))


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        check_arguments(())


def test_batch_reuses_one_matrix():
    pairs = [("kitten", "sitting"), ("ab", "ba"), ("flaw", "lawn")]
    with DistanceBatch.for_pairs(pairs) as batch:
        matrix = batch._engine.matrix
        capacity = matrix.capacity
        assert capacity == 7 * 8
        assert [batch.distance(s, t) for s, t in pairs] == [3, 1, 2]
        assert matrix.capacity == capacity
    assert not batch.is_open
    assert not matrix.allocated


def test_null_argument_is_empty():
    with DistanceBatch(4, 4) as batch:
        assert batch.distance(None, "abc") == 3
        assert batch.distance("abcd", None) == 4
        assert batch.distance(None, None) == 0


def test_distance_requires_open_batch():
    batch = DistanceBatch(2, 2)
    with pytest.raises(RuntimeError, match="not open"):
        batch.distance("a", "b")


def test_batch_grows_past_reservation():
    with DistanceBatch(2, 2) as batch:
        assert batch.distance("kitten", "sitting") == 3
        assert (batch.max_left, batch.max_right) == (6, 7)


def test_batch_rejects_non_sequences():
    with DistanceBatch(2, 2) as batch:
        with pytest.raises(InvalidInput):
            batch.distance(12, "ab")


def test_compute_pairs_char_unit():
    result = compute_pairs([("kitten", "sitting"), ("", "abc"), ("ab", "ba")])
    assert result.unit == "char"
    assert [p.distance for p in result.pairs] == [3, 3, 1]
    assert result.total_distance == 7
    assert result.pairs[0].ops == []
    assert result.pairs[0].substitutions is None


def test_compute_pairs_word_unit_with_ops():
    result = compute_pairs([("the cat sat", "the sat cat")], EngineOptions(unit="word"), with_ops=True)
    pair = result.pairs[0]
    assert pair.distance == 1
    assert pair.transpositions == 1
    swap = [o for o in pair.ops if o.op == "swap"][0]
    assert swap.expected == "cat sat"
    assert swap.predicted == "sat cat"


def test_compute_pairs_byte_unit():
    # "é" is two bytes in UTF-8.
    assert compute_pairs([("é", "e")], EngineOptions(unit="byte")).pairs[0].distance == 2
    assert compute_pairs([("é", "e")], EngineOptions(unit="char")).pairs[0].distance == 1
    ops = compute_pairs([("ab", "ba")], EngineOptions(unit="byte"), with_ops=True).pairs[0].ops
    assert ops[0].expected == "0x61 0x62"


def test_compute_pairs_allocation_ceiling():
    with pytest.raises(AllocationError):
        compute_pairs([("abcdef", "abcdef")], EngineOptions(max_cells=10))


def test_any_sequence_type_is_accepted():
    with DistanceBatch(4, 4) as batch:
        assert batch.distance(range(3), range(1, 4)) == 2
        assert batch.distance(memoryview(b"ab"), memoryview(b"ba")) == 1
    with pytest.raises(InvalidInput):
        check_arguments(({"a": 1}, "a"))


def test_compute_pairs_honors_pool_size(monkeypatch):
    sizes = []

    class RecordingPool(batch_mod.MatrixPool):
        def __init__(self, size=4, max_cells=None):
            sizes.append(size)
            super().__init__(size=size, max_cells=max_cells)

    monkeypatch.setattr(batch_mod, "MatrixPool", RecordingPool)
    pairs = [("kitten", "sitting"), ("ab", "ba"), ("flaw", "lawn")] * 5

    pooled = compute_pairs(pairs, EngineOptions(pool_size=3))
    assert sizes == [3]
    assert [p.distance for p in pooled.pairs] == [3, 1, 2] * 5

    sequential = compute_pairs(pairs, EngineOptions(pool_size=1))
    assert sizes == [3]
    assert sequential == pooled


def test_compute_pairs_pool_size_from_env(monkeypatch):
    monkeypatch.setenv("DLDIST_POOL_SIZE", "2")
    sizes = []

    class RecordingPool(batch_mod.MatrixPool):
        def __init__(self, size=4, max_cells=None):
            sizes.append(size)
            super().__init__(size=size, max_cells=max_cells)

    monkeypatch.setattr(batch_mod, "MatrixPool", RecordingPool)
    compute_pairs([("ab", "ba")], load_options())
    assert sizes == [2]
