"""
The regular polytopes that exist in every rank, as concrete polytopes.

This module provides named constructors for the three infinite families of
regular polytopes, the simplices, hypercubes and orthoplexes, and for their
three-dimensional members among the Platonic solids.

Mathematical significance:
- Every rank has a regular simplex, hypercube and orthoplex
- The hypercube and orthoplex are dual to each other; the simplex is self-dual
- In rank 3 they are the tetrahedron, the cube and the octahedron
"""

import logging
from typing import Dict, Optional

from .concrete import ConcretePolytope

logger = logging.getLogger(__name__)

FAMILIES = ("simplex", "hypercube", "orthoplex")


def normalize_to_unit_circumradius(polytope: ConcretePolytope) -> ConcretePolytope:
    """Rescale a polytope centred at the origin to unit circumradius.

    Args:
        polytope: Polytope with a circumsphere centred at the origin

    Returns:
        Rescaled polytope, or the polytope unchanged if it has no positive
        circumradius
    """
    sphere = polytope.circumsphere()
    if sphere is None or sphere.radius == 0.0:
        return polytope.copy()
    return polytope.scale(1.0 / sphere.radius)


def create_regular_polytope(family: str, rank: int, unit_circumradius: bool = False) -> ConcretePolytope:
    """Build a member of one of the regular families.

    Args:
        family: One of "simplex", "hypercube" or "orthoplex"
        rank: Rank of the polytope, at least -1
        unit_circumradius: Whether to rescale to unit circumradius instead of
            unit edge length

    Returns:
        The regular polytope, centred at the origin
    """
    if family not in FAMILIES:
        raise ValueError(f"Unknown regular family {family!r}, expected one of {FAMILIES}")
    if rank < -1:
        raise ValueError(f"Rank must be at least -1, got {rank}")

    polytope = getattr(ConcretePolytope, family)(rank)
    if unit_circumradius:
        polytope = normalize_to_unit_circumradius(polytope)
    return polytope


def create_tetrahedron() -> ConcretePolytope:
    """Create a regular tetrahedron with unit circumradius."""
    return create_regular_polytope("simplex", 3, unit_circumradius=True)


def create_cube() -> ConcretePolytope:
    """Create a cube with unit circumradius."""
    return create_regular_polytope("hypercube", 3, unit_circumradius=True)


def create_octahedron() -> ConcretePolytope:
    """Create a regular octahedron with unit circumradius."""
    return create_regular_polytope("orthoplex", 3, unit_circumradius=True)


def compute_dual(polytope: ConcretePolytope) -> Optional[ConcretePolytope]:
    """Reciprocal dual about the unit sphere, rescaled to unit circumradius.

    Returns:
        The dual, or None if some facet passes through the origin
    """
    dual = polytope.dual()
    if dual is None:
        return None
    return normalize_to_unit_circumradius(dual)


# Factory function to create every regular polytope of a rank
def create_all_regular_polytopes(rank: int, unit_circumradius: bool = False) -> Dict[str, ConcretePolytope]:
    """Create the simplex, hypercube and orthoplex of a given rank.

    Returns:
        Dictionary mapping family names to polytopes
    """
    return {
        family: create_regular_polytope(family, rank, unit_circumradius)
        for family in FAMILIES
    }
