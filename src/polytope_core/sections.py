"""
Cross-sections of concrete polytopes by hyperplanes.

A hyperplane in general position cuts every k-element it crosses in a
(k - 1)-element: edges give the new vertices, and each higher element gives the
element spanned by the cuts of its own crossing subelements.
"""

import logging

import jax.numpy as jnp
from typing import Dict, Optional

from .abstract import AbstractPolytope
from .concrete import ConcretePolytope
from .elements import Element, ElementList
from .geometry import Hyperplane
from . import config

logger = logging.getLogger(__name__)


def cross_section(polytope, hyperplane: Hyperplane, eps: Optional[float] = None,
                  flatten: bool = False):
    """Slice a concrete polytope by a hyperplane.

    Args:
        polytope: ConcretePolytope of rank at least 1
        hyperplane: The cutting hyperplane
        eps: Minimum distance from every vertex to the hyperplane
        flatten: Whether to express the section in coordinates of the
            hyperplane instead of the ambient space

    Returns:
        ConcretePolytope of rank one less, or None if the hyperplane misses the
        polytope or passes within `eps` of a vertex
    """
    eps = config.EPSILON if eps is None else eps
    rank = polytope.rank
    if rank < 1:
        return None
    if hyperplane.dim != polytope.dim:
        raise ValueError(f"Hyperplane of dimension {hyperplane.dim} cannot cut a polytope in {polytope.dim}")

    vertices = polytope.vertices
    distances = [float(d) for d in hyperplane.distance(vertices)]
    if min(abs(d) for d in distances) < eps:
        logger.debug("Hyperplane passes through a vertex, section is not generic")
        return None

    abstract = polytope.abstract
    section_points = []
    cut: Dict[int, int] = {}

    for idx, edge in enumerate(abstract[1]):
        a, b = edge.subs[:2]
        if (distances[a] > 0) == (distances[b] > 0):
            continue
        t = distances[a] / (distances[a] - distances[b])
        cut[idx] = len(section_points)
        section_points.append(vertices[a] + t * (vertices[b] - vertices[a]))

    if not section_points:
        return None

    section = AbstractPolytope()
    section.push_min()
    section.push_vertices(len(section_points))

    for r in range(2, rank + 1):
        layer = ElementList()
        next_cut: Dict[int, int] = {}
        for idx, el in enumerate(abstract[r]):
            subs = [cut[s] for s in el.subs if s in cut]
            if subs:
                next_cut[idx] = len(layer)
                layer.append(Element(subs))
        section.push(layer)
        cut = next_cut

    points = jnp.stack(section_points)
    if flatten:
        points = hyperplane.flatten(points)

    logger.debug(f"Cross-section has element counts {list(section.element_counts())}")
    return ConcretePolytope(points, section)
