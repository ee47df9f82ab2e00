"""Tests for the product kinds and the right fold."""

import pytest

from polytope_core.products import ProductKind, right_fold


@pytest.mark.parametrize("kind, flags", [
    (ProductKind.PYRAMID, (True, True)),
    (ProductKind.PRISM, (False, True)),
    (ProductKind.TEGUM, (True, False)),
    (ProductKind.COMB, (False, False)),
])
def test_flag_pairs(kind, flags):
    assert (kind.include_min, kind.include_max) == flags


def test_only_pyramid_identity_is_nullitope():
    assert ProductKind.PYRAMID.identity_is_nullitope
    assert not any(k.identity_is_nullitope for k in (ProductKind.PRISM, ProductKind.TEGUM, ProductKind.COMB))


def test_right_fold_associates_right():
    result = right_fold(['a', 'b', 'c'], lambda p, q: f"({p}*{q})", lambda: 'e', lambda p: p)
    assert result == "(a*(b*c))"


def test_right_fold_edge_cases():
    combine = lambda p, q: p + q
    assert right_fold([], combine, lambda: 'identity', lambda p: p) == 'identity'
    assert right_fold(['x'], combine, lambda: 'identity', lambda p: p.upper()) == 'X'
