import pytest

from raftkit.inflights import Inflights


def _buffer(indices, sizes):
    assert len(indices) == len(sizes)
    return list(zip(indices, sizes))


def _snapshot(inf):
    return (inf.start, inf.count(), inf.total_bytes, inf.size, inf.buffer)


def test_add_no_rotation():
    inf = Inflights(10, 0)
    for i in range(5):
        inf.add(i, 100 + i)

    assert inf.start == 0
    assert inf.count() == 5
    assert inf.total_bytes == 510
    assert inf.buffer[:5] == _buffer([0, 1, 2, 3, 4], [100, 101, 102, 103, 104])

    for i in range(5, 10):
        inf.add(i, 100 + i)

    assert _snapshot(inf) == (
        0,
        10,
        1045,
        10,
        _buffer(
            [0, 1, 2, 3, 4, 5, 6, 7, 8, 9],
            [100, 101, 102, 103, 104, 105, 106, 107, 108, 109],
        ),
    )


def test_add_rotation():
    inf = Inflights(10, 0)
    for i in range(10):
        inf.add(i, 100 + i)
    inf.free_le(4)
    assert inf.start == 5
    assert inf.count() == 5

    for i in range(10, 15):
        inf.add(i, 100 + i)

    assert _snapshot(inf) == (
        5,
        10,
        105 + 106 + 107 + 108 + 109 + 110 + 111 + 112 + 113 + 114,
        10,
        _buffer(
            [10, 11, 12, 13, 14, 5, 6, 7, 8, 9],
            [110, 111, 112, 113, 114, 105, 106, 107, 108, 109],
        ),
    )


def test_free_le():
    inf = Inflights(10, 0)
    for i in range(10):
        inf.add(i, 100 + i)

    base = _buffer(
        [0, 1, 2, 3, 4, 5, 6, 7, 8, 9],
        [100, 101, 102, 103, 104, 105, 106, 107, 108, 109],
    )

    inf.free_le(0)
    assert _snapshot(inf) == (1, 9, 945, 10, base)

    inf.free_le(4)
    assert _snapshot(inf) == (5, 5, 535, 10, base)

    inf.free_le(8)
    assert _snapshot(inf) == (9, 1, 109, 10, base)

    for i in range(10, 15):
        inf.add(i, 100 + i)

    inf.free_le(12)
    rotated = _buffer(
        [10, 11, 12, 13, 14, 5, 6, 7, 8, 9],
        [110, 111, 112, 113, 114, 105, 106, 107, 108, 109],
    )
    assert _snapshot(inf) == (3, 2, 227, 10, rotated)

    inf.free_le(14)
    assert _snapshot(inf) == (0, 0, 0, 10, rotated)


def test_free_le_below_window_is_noop():
    inf = Inflights(10, 0)
    for i in range(5, 8):
        inf.add(i, 1)
    inf.free_le(4)
    assert inf.count() == 3
    assert inf.total_bytes == 3


@pytest.mark.parametrize(
    "size, max_bytes, full_at, free_le, again_at",
    [
        pytest.param(0, 0, 0, 0, 0, id="always-full"),
        pytest.param(1, 0, 1, 1, 2, id="single-entry"),
        pytest.param(1, 10, 1, 1, 2, id="single-entry-overflow"),
        pytest.param(15, 0, 15, 6, 22, id="multi-entry"),
        pytest.param(8, 400, 4, 2, 7, id="slight-overflow"),
        pytest.param(8, 406, 4, 3, 8, id="exact-max-bytes"),
        pytest.param(15, 408, 5, 1, 6, id="larger-overflow"),
    ],
)
def test_full(size, max_bytes, full_at, free_le, again_at):
    inf = Inflights(size, max_bytes)

    def add_until_full(begin, end):
        for i in range(begin, end):
            assert not inf.full(), f"full at {i}, want {end}"
            inf.add(i, 100 + i)
        assert inf.full(), f"not full at {end}"

    add_until_full(0, full_at)
    inf.free_le(free_le)
    add_until_full(full_at, again_at)

    with pytest.raises(RuntimeError):
        inf.add(100, 1024)


def test_reset():
    inf = Inflights(10, 1000)
    index = 0
    for _ in range(100):
        inf.reset()
        for _ in range(5):
            assert not inf.full()
            index += 1
            inf.add(index, 16)
        inf.free_le(index - 2)
        assert not inf.full()
        assert inf.count() == 2
    inf.free_le(index)
    assert inf.count() == 0


def test_clone_is_independent():
    inf = Inflights(4, 0)
    inf.add(1, 10)
    inf.add(2, 20)
    copy = inf.clone()
    assert _snapshot(copy) == _snapshot(inf)

    copy.add(3, 30)
    copy.free_le(1)
    assert inf.count() == 2
    assert inf.total_bytes == 30
    assert copy.count() == 2
    assert copy.total_bytes == 50