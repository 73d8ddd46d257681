import pytest

from cachemanager.cache import LRUCacheUnit


def _filled(limit, keys):
    unit = LRUCacheUnit(limit)
    for k in keys:
        unit[k] = k * 2
    return unit


def test_getitem_moves_to_end():
    unit = _filled(3, "abc")
    assert unit["a"] == "aa"
    assert list(unit.keys()) == ["b", "c", "a"]


def test_missing_key_raises():
    unit = LRUCacheUnit(2)
    with pytest.raises(KeyError):
        unit["missing"]


def test_put_reports_eviction():
    unit = _filled(2, "ab")
    assert unit.put("a", "A") is None
    assert unit.put("c", "cc") == ("b", "bb")
    assert list(unit.items()) == [("a", "A"), ("c", "cc")]


def test_peek_and_contains_keep_order():
    unit = _filled(3, "abc")
    assert unit.peek("a") == "aa"
    assert unit.peek("z", "default") == "default"
    assert "a" in unit
    assert list(unit) == ["a", "b", "c"]


def test_pop_from_middle():
    unit = _filled(4, "abcd")
    assert unit.pop("b") == "bb"
    assert list(unit.keys()) == ["a", "c", "d"]
    assert len(unit) == 3
    with pytest.raises(KeyError):
        unit.pop("b")


def test_popitem_both_ends():
    unit = _filled(3, "abc")
    assert unit.popitem(last=False) == ("a", "aa")
    assert unit.popitem() == ("c", "cc")
    assert list(unit.keys()) == ["b"]
    unit.popitem()
    with pytest.raises(KeyError):
        unit.popitem()


def test_set_limit_size_evicts_in_order():
    unit = _filled(5, "abcde")
    unit["a"]
    assert unit.set_limit_size(2) == [("b", "bb"), ("c", "cc"), ("d", "dd")]
    assert list(unit.keys()) == ["e", "a"]
    assert unit.set_limit_size(10) == []
    assert unit.size_limit == 10


def test_clear_then_reuse():
    unit = _filled(2, "ab")
    unit.clear()
    assert len(unit) == 0
    assert list(unit.items()) == []
    unit["x"] = 1
    assert list(unit.items()) == [("x", 1)]


def test_repr():
    unit = _filled(2, "a")
    assert repr(unit).startswith("LRUCacheUnit<size_limit:2 total_size:1>")
