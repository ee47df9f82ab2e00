"""Core polytope functionality: ranked posets and their geometric realizations."""

import logging

from . import config

from .ranked import (
    RankedContainer,
    storage_index
)

from .elements import (
    Element,
    ElementList
)

from .products import (
    ProductKind,
    right_fold
)

from .abstract import AbstractPolytope

from .geometry import (
    Hyperplane,
    Hypersphere,
    Subspace,
    as_point,
    as_points
)

from .dual_operations import (
    pole_reciprocation,
    fit_circumsphere,
    facet_poles
)

from .concrete import (
    ConcretePolytope,
    duopyramid_vertices,
    duoprism_vertices
)

from .sections import cross_section

from .operations import (
    rotations,
    central_inversion,
    compound,
    compound_from_transforms,
    dual_compound
)

from .regular_polytopes import (
    normalize_to_unit_circumradius,
    create_regular_polytope,
    create_tetrahedron,
    create_cube,
    create_octahedron,
    compute_dual,
    create_all_regular_polytopes
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'config',
    'RankedContainer',
    'storage_index',
    'Element',
    'ElementList',
    'ProductKind',
    'right_fold',
    'AbstractPolytope',
    'Hyperplane',
    'Hypersphere',
    'Subspace',
    'as_point',
    'as_points',
    'pole_reciprocation',
    'fit_circumsphere',
    'facet_poles',
    'ConcretePolytope',
    'duopyramid_vertices',
    'duoprism_vertices',
    'cross_section',
    'rotations',
    'central_inversion',
    'compound',
    'compound_from_transforms',
    'dual_compound',
    'normalize_to_unit_circumradius',
    'create_regular_polytope',
    'create_tetrahedron',
    'create_cube',
    'create_octahedron',
    'compute_dual',
    'create_all_regular_polytopes'
]
