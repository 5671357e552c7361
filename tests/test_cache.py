import random

import pytest

from core.cache import DEFAULT_CAPACITY, ImageCache


def test_default_capacity_is_five():
    assert ImageCache().capacity == DEFAULT_CAPACITY == 5


def test_get_missing_returns_none_without_side_effects():
    cache = ImageCache(2)
    cache.put(1, "a")
    assert cache.get(99) is None
    assert cache.keys() == [1]
    assert 99 not in cache


def test_put_beyond_capacity_evicts_least_recently_used():
    cache = ImageCache(3)
    for key in (1, 2, 3, 4):
        cache.put(key, f"img{key}")
    assert cache.keys() == [2, 3, 4]
    assert cache.get(1) is None


def test_get_promotes_entry():
    cache = ImageCache(3)
    for key in (1, 2, 3):
        cache.put(key, key)
    assert cache.get(1) == 1
    cache.put(4, 4)
    assert cache.keys() == [3, 1, 4]


def test_put_existing_key_replaces_and_promotes():
    cache = ImageCache(2)
    cache.put(1, "old")
    cache.put(2, "two")
    cache.put(1, "new")
    cache.put(3, "three")
    assert cache.get(1) == "new"
    assert 2 not in cache
    assert len(cache) == 2


def test_contains_and_keys_do_not_touch_recency():
    cache = ImageCache(2)
    cache.put(1, 1)
    cache.put(2, 2)
    assert 1 in cache
    cache.keys()
    cache.put(3, 3)
    assert cache.keys() == [2, 3]


@pytest.mark.parametrize("capacity", [0, -3])
def test_capacity_below_one_rejected(capacity):
    with pytest.raises(ValueError):
        ImageCache(capacity)


@pytest.mark.parametrize("seed", range(5))
def test_random_access_sequence_matches_reference_lru(seed):
    rng = random.Random(seed)
    capacity = 5
    cache = ImageCache(capacity)
    order: list[int] = []  # reference model, LRU first

    for _ in range(300):
        key = rng.randrange(12)
        if rng.random() < 0.5:
            hit = cache.get(key)
            if key in order:
                assert hit == key
                order.remove(key)
                order.append(key)
            else:
                assert hit is None
        else:
            cache.put(key, key)
            if key in order:
                order.remove(key)
            order.append(key)
            if len(order) > capacity:
                order.pop(0)
        assert len(cache) <= capacity
        assert cache.keys() == order
