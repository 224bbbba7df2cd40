import pytest

from netlat.algorithms.pq import IndexMinPQ


def test_pop_in_key_order():
    pq = IndexMinPQ(5)
    for index, key in [(3, 0.5), (0, 2.0), (4, 0.1), (1, 1.0)]:
        pq.insert(index, key)
    assert len(pq) == 4
    popped = [pq.pop_min() for _ in range(4)]
    assert popped == [(4, 0.1), (3, 0.5), (1, 1.0), (0, 2.0)]
    assert pq.is_empty()


def test_decrease_key_reorders():
    pq = IndexMinPQ(3)
    pq.insert(0, 5.0)
    pq.insert(1, 3.0)
    pq.decrease_key(0, 1.0)
    assert pq.key_of(0) == 1.0
    assert pq.pop_min() == (0, 1.0)
    assert pq.pop_min() == (1, 3.0)
    assert not pq


def test_equal_keys_pop_in_insertion_order():
    pq = IndexMinPQ(4)
    pq.insert(2, 1.0)
    pq.insert(0, 1.0)
    pq.insert(3, 1.0)
    assert [pq.pop_min()[0] for _ in range(3)] == [2, 0, 3]


def test_membership():
    pq = IndexMinPQ(3)
    pq.insert(1, 0.0)
    assert 1 in pq
    assert pq.contains(1)
    assert not pq.contains(2)
    pq.pop_min()
    assert 1 not in pq


def test_errors():
    pq = IndexMinPQ(2)
    with pytest.raises(IndexError):
        pq.insert(2, 0.0)
    with pytest.raises(IndexError):
        pq.pop_min()
    pq.insert(0, 1.0)
    with pytest.raises(ValueError, match="already"):
        pq.insert(0, 2.0)
    with pytest.raises(ValueError, match="larger"):
        pq.decrease_key(0, 3.0)
    with pytest.raises(KeyError):
        pq.decrease_key(1, 0.0)
    with pytest.raises(ValueError):
        IndexMinPQ(-1)
