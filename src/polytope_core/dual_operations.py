"""
Geometric duality: pole reciprocation and circumsphere fitting.

This module implements the coordinate half of polytope duality. The dual of a
concrete polytope has one vertex per facet of the original: the pole of that
facet's hyperplane with respect to a reciprocation sphere. Combined with the
abstract dual, which reverses the incidences, this gives the reciprocal dual.

Mathematical foundations:
- Pole of a hyperplane: project the sphere centre o onto the hyperplane to get
  v, then invert v in the sphere: v' = o + r² (v - o) / |v - o|²
- A facet through the centre has no pole, so the dual does not exist
- Circumcentre: grow the affine hull of the vertices one point at a time and
  move the running centre along each new basis direction b by
  k = (|o - v|² - |o - v0|²) / (2 (v - v0)·b)
"""

import logging

import jax
import jax.numpy as jnp
from typing import Optional

from .geometry import Hypersphere, Subspace, as_point, as_points, squared_norm
from . import config

logger = logging.getLogger(__name__)


@jax.jit
def pole_reciprocation(points: jnp.ndarray,
                       center: jnp.ndarray,
                       radius: float = 1.0) -> jnp.ndarray:
    """Perform pole reciprocation (spherical inversion) of points.

    Maps each point v to v' = o + r² (v - o) / |v - o|².
    Points must stay away from the centre; callers check this first.

    Args:
        points: (N, D) array of points
        center: (D,) centre of the inversion sphere
        radius: Radius of the inversion sphere

    Returns:
        (N, D) array of reciprocated points
    """
    centered = points - center[None, :]
    dist_squared = jnp.sum(centered**2, axis=1, keepdims=True)
    return radius**2 * centered / dist_squared + center[None, :]


@jax.jit
def squared_distances(points: jnp.ndarray, center: jnp.ndarray) -> jnp.ndarray:
    return jnp.sum((points - center[None, :])**2, axis=1)


def fit_circumsphere(vertices: jnp.ndarray, eps: Optional[float] = None) -> Optional[Hypersphere]:
    """Find the sphere through all of the given points.

    The centre returned lies in the affine hull of the points.

    Args:
        vertices: (N, D) array of points
        eps: Absolute tolerance for the distance consistency check

    Returns:
        The circumsphere, or None if the points are not concyclic or there
        are none
    """
    eps = config.EPSILON if eps is None else eps
    vertices = as_points(vertices)
    if vertices.shape[0] == 0:
        return None

    v0 = vertices[0]
    o = v0
    hull = Subspace(v0, eps)

    for v in vertices[1:]:
        b = hull.add(v)

        # The vertex leaves the hull of the previous ones: move the centre.
        if b is not None:
            k = (squared_norm(o - v) - squared_norm(o - v0)) \
                / (2.0 * float(jnp.dot(v - v0, b)))
            o = o + k * b

        # The vertex is in the hull but at the wrong distance.
        elif abs(float(jnp.linalg.norm(o - v0)) - float(jnp.linalg.norm(o - v))) > eps:
            return None

    return Hypersphere(center=o, radius=float(jnp.linalg.norm(o - v0)))


def facet_poles(polytope, sphere: Hypersphere, eps: Optional[float] = None) -> Optional[jnp.ndarray]:
    """Reciprocate every facet of a concrete polytope about a sphere.

    The sphere's centre is first projected onto the polytope's own affine
    hull, then onto each facet's hull. For a polytope of rank 1 the facets are
    its vertices.

    Args:
        polytope: ConcretePolytope of rank at least 1
        sphere: Reciprocation sphere
        eps: Tolerance for a facet passing through the centre

    Returns:
        (F, D) array with the dual vertices in facet order, or None if some
        facet passes through the reciprocation centre
    """
    eps = config.EPSILON if eps is None else eps
    rank = polytope.rank

    o = Subspace.from_points(polytope.vertices, eps).project(as_point(sphere.center))

    if rank >= 2:
        projections = jnp.stack([
            Subspace.from_points(polytope.get_element_vertices(rank - 1, idx), eps).project(o)
            for idx in range(polytope.abstract.facet_count())
        ])
    else:
        projections = polytope.vertices

    closest = float(jnp.min(squared_distances(projections, o)))
    if closest < eps:
        logger.warning(
            f"Facet passes within {closest ** 0.5:.3g} of the reciprocation centre, no dual exists"
        )
        return None

    return pole_reciprocation(projections, o, sphere.radius)
