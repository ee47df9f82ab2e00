"""Tests for pole reciprocation and circumsphere fitting."""

import math

import jax.numpy as jnp
import numpy as np
import pytest

from polytope_core.concrete import ConcretePolytope
from polytope_core.dual_operations import (
    facet_poles,
    fit_circumsphere,
    pole_reciprocation,
    squared_distances,
)
from polytope_core.geometry import Hypersphere


def test_pole_reciprocation_inverts_distances():
    points = jnp.array([[2.0, 0.0], [0.0, 0.5]])
    center = jnp.zeros(2)

    np.testing.assert_allclose(pole_reciprocation(points, center), [[0.5, 0.0], [0.0, 2.0]])
    np.testing.assert_allclose(pole_reciprocation(points, center, 2.0), [[2.0, 0.0], [0.0, 8.0]])


def test_pole_reciprocation_about_another_centre():
    result = pole_reciprocation(jnp.array([[3.0, 1.0]]), jnp.array([1.0, 1.0]))
    np.testing.assert_allclose(result, [[1.5, 1.0]])


def test_squared_distances():
    d = squared_distances(jnp.array([[3.0, 4.0], [0.0, 0.0]]), jnp.zeros(2))
    np.testing.assert_allclose(d, [25.0, 0.0])


def test_circumsphere_of_right_triangle():
    sphere = fit_circumsphere(jnp.array([[0.0, 0.0], [2.0, 0.0], [0.0, 2.0]]))
    np.testing.assert_allclose(sphere.center, [1.0, 1.0])
    assert sphere.radius == pytest.approx(math.sqrt(2.0))


def test_circumsphere_of_concyclic_rectangle():
    sphere = fit_circumsphere(jnp.array([[0.0, 0.0], [2.0, 0.0], [0.0, 2.0], [2.0, 2.0]]))
    assert sphere is not None
    assert sphere.radius == pytest.approx(math.sqrt(2.0))


def test_no_circumsphere_for_non_concyclic_points():
    assert fit_circumsphere(jnp.array([[0.0, 0.0], [2.0, 0.0], [0.0, 2.0], [3.0, 3.0]])) is None


def test_no_circumsphere_without_points():
    assert fit_circumsphere(jnp.zeros((0, 0))) is None


def test_circumsphere_of_a_point_has_zero_radius():
    sphere = fit_circumsphere(jnp.array([[1.0, 2.0]]))
    assert sphere.radius == 0.0


def test_facet_poles_of_a_cube():
    poles = facet_poles(ConcretePolytope.hypercube(3), Hypersphere.unit(3))
    assert poles.shape == (6, 3)
    np.testing.assert_allclose(jnp.linalg.norm(poles, axis=1), np.full(6, 2.0))


def test_facet_through_centre_has_no_pole():
    square = ConcretePolytope(
        [[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]],
        ConcretePolytope.polygon(4).abstract,
    )
    assert facet_poles(square, Hypersphere.unit(2)) is None
