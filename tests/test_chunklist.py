from fuzzfind.cache import ChunkCache
from fuzzfind.chunklist import Chunk, ChunkList, count_items
from fuzzfind.constants import CHUNK_SIZE


def make_list(cache=None):
    return ChunkList(cache or ChunkCache(), lambda data: data)


def test_chunk_list():
    cl = make_list()

    snapshot, count, _ = cl.snapshot(0)
    assert snapshot == [] and count == 0

    cl.push("hello")
    cl.push("world")
    assert snapshot == []

    snapshot, count, _ = cl.snapshot(0)
    assert len(snapshot) == 1 and count == 2

    chunk1 = snapshot[0]
    assert chunk1.count == 2
    assert chunk1.items == ["hello", "world"]
    assert not chunk1.is_full()

    for i in range(CHUNK_SIZE * 2):
        cl.push(f"item {i}")
    assert len(snapshot) == 1

    snapshot, count, _ = cl.snapshot(0)
    assert len(snapshot) == 3
    assert snapshot[0].is_full() and snapshot[1].is_full()
    assert not snapshot[2].is_full()
    assert count == CHUNK_SIZE * 2 + 2
    assert snapshot[2].count == 2

    cl.push("hello")
    cl.push("world")
    assert snapshot[-1].count == 2


def test_chunk_list_tail():
    cl = make_list()
    total = CHUNK_SIZE * 2 + CHUNK_SIZE // 2
    for i in range(total):
        cl.push(f"item {i}")

    def check(result, expected, should_change):
        snapshot, count, changed = result
        assert count == expected
        assert count_items(snapshot) == expected
        assert changed is should_change

    check(cl.snapshot(0), total, False)
    tail = CHUNK_SIZE + CHUNK_SIZE // 2
    check(cl.snapshot(tail), tail, True)
    check(cl.snapshot(tail), tail, False)
    check(cl.snapshot(0), tail, False)
    tail = CHUNK_SIZE // 2
    check(cl.snapshot(tail), tail, True)


def test_tail_keeps_last_items():
    cl = make_list()
    for i in range(CHUNK_SIZE + 10):
        cl.push(i)
    snapshot, count, _ = cl.snapshot(15)
    items = [item for chunk in snapshot for item in chunk.items]
    assert items == list(range(CHUNK_SIZE - 5, CHUNK_SIZE + 10))
    assert count == 15


def test_tail_retires_cached_chunks():
    cache = ChunkCache()
    cl = make_list(cache)
    for i in range(CHUNK_SIZE * 2 + CHUNK_SIZE // 2):
        cl.push(i)
    snapshot, _, _ = cl.snapshot(0)
    first = snapshot[0]
    cache.add(first, "q", [1])
    assert cache.lookup(first, "q") == [1]
    cl.snapshot(CHUNK_SIZE + CHUNK_SIZE // 2)
    assert cache.lookup(first, "q") is None


def test_rejected_items_are_not_added():
    cl = ChunkList(ChunkCache(), lambda data: None if data.startswith("#") else data)
    assert cl.push("# header") is False
    assert cl.push("line") is True
    snapshot, count, _ = cl.snapshot(0)
    assert count == 1
    assert snapshot[0].items == ["line"]


def test_clear():
    cl = make_list()
    cl.push("a")
    cl.clear()
    snapshot, count, _ = cl.snapshot(0)
    assert (snapshot, count) == ([], 0)


def test_count_items():
    assert count_items([]) == 0
    assert count_items([Chunk([1, 2]), Chunk(range(CHUNK_SIZE)), Chunk([3])]) == CHUNK_SIZE + 3