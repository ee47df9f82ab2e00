"""
Operations on whole concrete polytopes: compounds and symmetry matrices.
"""

import logging
import math

import jax.numpy as jnp
from typing import List, Optional, Sequence

from .abstract import AbstractPolytope
from .concrete import ConcretePolytope
from .elements import Element, ElementList

logger = logging.getLogger(__name__)


def rotations(angle: float, num: int, dim: int) -> List[jnp.ndarray]:
    """Rotations by the first multiples of an angle through the xy plane.

    Args:
        angle: Rotation angle in radians
        num: Number of matrices to generate
        dim: Dimension of the space, at least 2

    Returns:
        [I, R, R², ..., R^(num-1)] as (dim, dim) arrays
    """
    if dim < 2:
        raise ValueError(f"Rotations through the xy plane need dimension at least 2, got {dim}")

    s, c = math.sin(angle), math.cos(angle)
    step = jnp.eye(dim, dtype=jnp.float64)
    step = step.at[0, 0].set(c).at[1, 0].set(s).at[0, 1].set(-s).at[1, 1].set(c)

    matrices = []
    matrix = jnp.eye(dim, dtype=jnp.float64)
    for _ in range(num):
        matrices.append(matrix)
        matrix = matrix @ step
    return matrices


def central_inversion(dim: int) -> List[jnp.ndarray]:
    """The identity matrix and its negative."""
    identity = jnp.eye(dim, dtype=jnp.float64)
    return [identity, -identity]


def compound(polytopes: Sequence[ConcretePolytope]) -> ConcretePolytope:
    """Merge polytopes of one rank and dimension into a compound.

    The components share a single minimal element and a single maximal
    element, which covers the facets of all of them.

    Args:
        polytopes: Non-empty list of polytopes of rank at least 1

    Returns:
        The compound polytope
    """
    if not polytopes:
        raise ValueError("A compound needs at least one component")

    rank, dim = polytopes[0].rank, polytopes[0].dim
    if rank < 1:
        raise ValueError(f"Compounds need rank at least 1, got {rank}")
    for p in polytopes:
        if p.rank != rank or p.dim != dim:
            raise ValueError(
                f"Components must share rank and dimension, got ({p.rank}, {p.dim}) and ({rank}, {dim})"
            )

    abstract = AbstractPolytope()
    abstract.push_min()
    for r in range(0, rank):
        layer = ElementList()
        offset = 0
        for p in polytopes:
            for el in p.abstract[r]:
                layer.append(Element([0] if r == 0 else [s + offset for s in el.subs]))
            offset += p.element_count(r - 1)
        abstract.push(layer)
    abstract.push_max()

    vertices = jnp.concatenate([p.vertices for p in polytopes], axis=0)
    logger.debug(f"Compound of {len(polytopes)} rank {rank} polytopes")
    return ConcretePolytope(vertices, abstract)


def compound_from_transforms(polytope: ConcretePolytope, matrices: Sequence[jnp.ndarray]) -> ConcretePolytope:
    """Compound of the images of a polytope under a list of linear maps."""
    return compound([polytope.apply(m) for m in matrices])


def dual_compound(polytope: ConcretePolytope) -> Optional[ConcretePolytope]:
    """Compound of a polytope and its dual, rescaled to the same midradius.

    Returns:
        The compound, or None if the polytope has no edges or no dual
    """
    midradius = polytope.midradius()
    if midradius is None:
        return None

    dual = polytope.dual()
    if dual is None:
        return None
    return compound([polytope, dual.scale(midradius * midradius)])
