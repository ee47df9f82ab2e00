"""Tests for rank-indexed storage and Hasse diagram nodes."""

import pytest

from polytope_core.elements import Element, ElementList
from polytope_core.ranked import RankedContainer, storage_index


def test_storage_index_offsets_by_one():
    assert storage_index(-1) == 0
    assert storage_index(3) == 4


def test_rank_is_length_minus_two():
    assert RankedContainer().rank == -2
    assert RankedContainer(['min']).rank == -1
    assert RankedContainer(['min', 'v', 'e']).rank == 1


def test_get_signals_absence_out_of_range():
    container = RankedContainer(['min', 'v', 'e'])

    assert container.get(-1) == 'min'
    assert container.get(1) == 'e'
    assert container.get(-2) is None
    assert container.get(2) is None


def test_setitem_and_swap():
    container = RankedContainer(['a', 'b', 'c'])
    container[0] = 'B'
    container.swap(-1, 1)

    assert container.to_list() == ['c', 'B', 'a']


def test_split_at_shares_items():
    container = RankedContainer([[1], [2], [3]])
    below, above = container.split_at(1)

    assert len(below) == 2 and len(above) == 1
    below[-1].append(20)
    above[0].append(30)
    assert container[0] == [2, 20]
    assert container[1] == [3, 30]


def test_insert_and_reverse():
    container = RankedContainer(['a', 'b'])
    container.insert(-1, 'z')
    assert container.to_list() == ['z', 'a', 'b']

    container.reverse()
    assert container[-1] == 'b'


def test_element_helpers():
    assert Element.min().subs == []
    assert Element.max(3).subs == [0, 1, 2]
    assert ElementList.min() == [Element([])]
    assert ElementList.max(2) == [Element([0, 1])]
    assert ElementList.vertices(3).subs_lists() == [[0], [0], [0]]


def test_element_list_copy_is_deep():
    layer = ElementList.from_subs([[0, 1], [1, 2]])
    clone = layer.copy()
    clone[0].subs.append(5)

    assert layer[0].subs == [0, 1]


def test_ranks_below_minus_one_are_rejected():
    container = RankedContainer(['min', 'v', 'e', 'max'])

    with pytest.raises(IndexError):
        container.swap(-2, 0)
    with pytest.raises(IndexError):
        container.swap(0, 3)
    with pytest.raises(IndexError):
        container.split_at(-2)
    with pytest.raises(IndexError):
        container.insert(-2, 'x')
    assert container.to_list() == ['min', 'v', 'e', 'max']


def test_split_and_insert_accept_one_past_the_top():
    container = RankedContainer(['min', 'v'])
    below, above = container.split_at(1)
    assert below == ['min', 'v'] and above == []

    container.insert(1, 'e')
    assert container.to_list() == ['min', 'v', 'e']
    with pytest.raises(IndexError):
        container.insert(3, 'x')
