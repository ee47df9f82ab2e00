"""Tests for hyperplane cross-sections."""

import math

import numpy as np
import pytest

from polytope_core.concrete import ConcretePolytope
from polytope_core.geometry import Hyperplane
from polytope_core.sections import cross_section


def counts(polytope):
    return list(polytope.element_counts())


def test_cube_cut_through_its_middle_is_a_square():
    section = cross_section(ConcretePolytope.hypercube(3), Hyperplane.new([0.0, 0.0, 1.0]))
    assert counts(section) == [1, 4, 4, 1]
    assert section.abstract.is_dyadic()
    assert section.is_equilateral_with_len(1.0)
    np.testing.assert_allclose(section.vertices[:, 2], np.zeros(4), atol=1e-12)


def test_diagonal_cut_of_cube_is_a_hexagon():
    section = ConcretePolytope.hypercube(3).cross_section(Hyperplane.new([1.0, 1.0, 1.0]))
    assert counts(section) == [1, 6, 6, 1]
    assert section.is_equilateral_with_len(math.sqrt(2.0) / 2.0)


def test_flattened_section_lives_in_the_hyperplane():
    section = cross_section(ConcretePolytope.hypercube(3), Hyperplane.new([0.0, 0.0, 1.0], 0.25), flatten=True)
    assert section.dim == 2
    assert section.is_equilateral_with_len(1.0)


def test_section_of_a_polygon_is_a_dyad():
    section = cross_section(ConcretePolytope.polygon(4), Hyperplane.new([1.0, 0.2]))
    assert counts(section) == [1, 2, 1]


def test_missing_plane_gives_nothing():
    assert cross_section(ConcretePolytope.hypercube(3), Hyperplane.new([0.0, 0.0, 1.0], 2.0)) is None


def test_plane_through_a_vertex_gives_nothing():
    assert cross_section(ConcretePolytope.hypercube(3), Hyperplane.new([0.0, 0.0, 1.0], 0.5)) is None


def test_low_ranks_have_no_section():
    assert cross_section(ConcretePolytope.point(), Hyperplane.new([1.0])) is None


def test_dimension_mismatch_raises():
    with pytest.raises(ValueError):
        cross_section(ConcretePolytope.hypercube(3), Hyperplane.new([1.0, 0.0]))
