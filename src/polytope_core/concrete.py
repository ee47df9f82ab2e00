"""
Concrete polytopes: an abstract polytope together with vertex coordinates.

The vertices are stored as one (N, D) array whose rows are in bijection with the
rank 0 elements of the abstract polytope. Every operation returns a new
instance; combinatorial work is delegated to `AbstractPolytope`, and the
coordinates are computed alongside in the same element order.

Mathematical foundations:
- Products: pyramid and tegum products place the factors in complementary
  coordinate subspaces (pyramids also offset them along a new axis), prism and
  comb products take the Cartesian product of the vertex sets
- Reciprocal dual: one vertex per facet, the pole of the facet's hyperplane
- Regular simplices are built as repeated pyramids with apex height
  sqrt(1 - R²) over a recentred base of circumradius R
"""

import logging
import math

import jax
import jax.numpy as jnp
import numpy as np
from typing import Optional, Sequence

from .abstract import AbstractPolytope
from .dual_operations import facet_poles, fit_circumsphere
from .geometry import Hyperplane, Hypersphere, as_point, as_points, pad_points
from .products import ProductKind, right_fold
from .ranked import RankedContainer
from . import config

logger = logging.getLogger(__name__)


@jax.jit
def edge_lengths_from_indices(vertices: jnp.ndarray, edges: jnp.ndarray) -> jnp.ndarray:
    """Lengths of edges given as (E, 2) vertex index pairs."""
    return jnp.linalg.norm(vertices[edges[:, 0]] - vertices[edges[:, 1]], axis=1)


def duopyramid_vertices(p: 'ConcretePolytope', q: 'ConcretePolytope',
                        height: float, tegum: bool) -> jnp.ndarray:
    """Vertices of a pyramid or tegum product, in the abstract product's order.

    The vertices paired with p's nullitope come first: q's vertices, padded on
    the left with zeros. Then p's vertices, padded on the right. A pyramid adds
    one more coordinate, +height/2 on q's side and -height/2 on p's.

    Args:
        p: First factor
        q: Second factor
        height: Distance between the two factors' subspaces (pyramid only)
        tegum: Whether to build tegum vertices instead of pyramid vertices

    Returns:
        (|q| + |p|, dim p + dim q [+ 1]) array
    """
    p_dim, q_dim = p.dim or 0, q.dim or 0
    q_tail = () if tegum else (height / 2.0,)
    p_tail = () if tegum else (-height / 2.0,)

    q_vertices = pad_points(q.vertices, p_dim, 0, q_tail)
    p_vertices = pad_points(p.vertices, 0, q_dim, p_tail)
    return jnp.concatenate([q_vertices, p_vertices], axis=0)


def duoprism_vertices(p: 'ConcretePolytope', q: 'ConcretePolytope') -> jnp.ndarray:
    """Vertices of a prism or comb product: every pair, p-major.

    Returns:
        (|p| |q|, dim p + dim q) array
    """
    p_vertices, q_vertices = p.vertices, q.vertices
    n_p, n_q = p_vertices.shape[0], q_vertices.shape[0]
    return jnp.concatenate([
        jnp.repeat(p_vertices, n_q, axis=0),
        jnp.tile(q_vertices, (n_p, 1)),
    ], axis=1)


class ConcretePolytope:
    """An abstract polytope with a point for each of its vertices.

    Attributes:
        vertices: (N, D) array of vertex coordinates
        abstract: The underlying abstract polytope
    """

    __slots__ = ('vertices', 'abstract')

    def __init__(self, vertices, abstract: AbstractPolytope):
        """Pair a vertex set with an abstract polytope.

        Args:
            vertices: Sequence of points or (N, D) array
            abstract: Abstract polytope with N vertices

        Raises:
            ValueError: If the counts differ and construction is strict
        """
        self.vertices = as_points(vertices)
        self.abstract = abstract

        config.check_precondition(
            self.vertices.shape[0] == abstract.vertex_count(),
            f"{self.vertices.shape[0]} vertices given for an abstract polytope "
            f"with {abstract.vertex_count()}",
        )

    # ------------------------------------------------------------------
    # Queries

    @property
    def rank(self) -> int:
        return self.abstract.rank

    @property
    def dim(self) -> Optional[int]:
        """Dimension of the ambient space, or None for the nullitope."""
        if self.vertices.shape[0] == 0:
            return None
        return int(self.vertices.shape[1])

    def element_count(self, rank: int) -> int:
        return self.abstract.element_count(rank)

    def element_counts(self) -> RankedContainer[int]:
        return self.abstract.element_counts()

    def copy(self) -> 'ConcretePolytope':
        return ConcretePolytope(self.vertices, self.abstract.copy())

    def __repr__(self) -> str:
        return f"ConcretePolytope(rank={self.rank}, dim={self.dim}, counts={list(self.element_counts())})"

    # ------------------------------------------------------------------
    # Base shapes

    @classmethod
    def nullitope(cls) -> 'ConcretePolytope':
        return cls(jnp.zeros((0, 0)), AbstractPolytope.nullitope())

    @classmethod
    def point(cls) -> 'ConcretePolytope':
        """A single vertex in zero-dimensional space."""
        return cls(jnp.zeros((1, 0)), AbstractPolytope.point())

    @classmethod
    def dyad(cls) -> 'ConcretePolytope':
        """A unit segment centred at the origin."""
        return cls([[-0.5], [0.5]], AbstractPolytope.dyad())

    @classmethod
    def polygon(cls, n: int) -> 'ConcretePolytope':
        """A regular polygon with unit edges, centred at the origin.

        Args:
            n: Number of sides, at least 2

        Returns:
            Polygon in the plane, circumradius 1 / (2 sin(pi / n))
        """
        abstract = AbstractPolytope.polygon(n)
        radius = 1.0 / (2.0 * math.sin(math.pi / n))
        angles = 2.0 * jnp.pi * jnp.arange(n) / n
        vertices = radius * jnp.stack([jnp.cos(angles), jnp.sin(angles)], axis=1)
        return cls(vertices, abstract)

    # ------------------------------------------------------------------
    # Affine transforms

    def scale(self, k: float) -> 'ConcretePolytope':
        return ConcretePolytope(self.vertices * k, self.abstract.copy())

    def shift(self, o) -> 'ConcretePolytope':
        """Subtract a vector from every vertex."""
        return ConcretePolytope(self.vertices - as_point(o)[None, :], self.abstract.copy())

    def recenter(self) -> 'ConcretePolytope':
        """Move the gravicenter to the origin."""
        gravicenter = self.gravicenter()
        if gravicenter is None:
            return self.copy()
        return self.shift(gravicenter)

    def apply(self, m) -> 'ConcretePolytope':
        """Apply a linear map, given as a (D, D) matrix, to every vertex."""
        m = jnp.asarray(m, dtype=jnp.float64)
        dim = self.dim
        if dim is None:
            return self.copy()
        if m.shape != (dim, dim):
            raise ValueError(f"Expected a ({dim}, {dim}) matrix, got shape {m.shape}")
        return ConcretePolytope(self.vertices @ m.T, self.abstract.copy())

    # ------------------------------------------------------------------
    # Metric properties

    def gravicenter(self) -> Optional[jnp.ndarray]:
        """Mean of the vertices, or None for the nullitope."""
        if self.dim is None:
            return None
        return jnp.mean(self.vertices, axis=0)

    def circumsphere(self, eps: Optional[float] = None) -> Optional[Hypersphere]:
        """The sphere through every vertex, or None if there is none."""
        sphere = fit_circumsphere(self.vertices, eps)
        if sphere is None:
            logger.debug(f"No circumsphere for rank {self.rank} polytope")
        return sphere

    def edge_lengths(self) -> jnp.ndarray:
        """Length of every edge, in edge order."""
        edges = self.abstract.get(1)
        if self.rank < 1 or not edges:
            return jnp.zeros(0)
        indices = jnp.asarray(np.array([el.subs[:2] for el in edges], dtype=np.int64))
        return edge_lengths_from_indices(self.vertices, indices)

    def is_equilateral_with_len(self, length: float, eps: Optional[float] = None) -> bool:
        """Whether every edge has the given length, within `eps`."""
        eps = config.EPSILON if eps is None else eps
        lengths = self.edge_lengths()
        return bool(jnp.all(jnp.abs(lengths - length) <= eps))

    def is_equilateral(self, eps: Optional[float] = None) -> bool:
        """Whether every edge has the length of the first one, within `eps`."""
        lengths = self.edge_lengths()
        if lengths.shape[0] == 0:
            return True
        return self.is_equilateral_with_len(float(lengths[0]), eps)

    def midradius(self) -> Optional[float]:
        """Distance from the origin to the midpoint of the first edge.

        Only meaningful for polytopes centred at the origin with a midsphere.
        """
        edges = self.abstract.get(1)
        if self.rank < 1 or not edges:
            return None
        a, b = edges[0].subs[:2]
        return float(jnp.linalg.norm(self.vertices[a] + self.vertices[b])) / 2.0

    # ------------------------------------------------------------------
    # Duality

    def dual_with_sphere(self, sphere: Hypersphere, eps: Optional[float] = None) -> Optional['ConcretePolytope']:
        """The reciprocal dual about a given sphere.

        Polytopes of rank below 1 are their own duals and are returned as
        copies. This instance is never modified.

        Args:
            sphere: Reciprocation sphere
            eps: Tolerance for a facet passing through the sphere's centre

        Returns:
            The dual, or None if some facet passes through the centre
        """
        if self.rank < 1:
            return self.copy()

        vertices = facet_poles(self, sphere, eps)
        if vertices is None:
            return None
        return ConcretePolytope(vertices, self.abstract.dual())

    def dual(self, eps: Optional[float] = None) -> Optional['ConcretePolytope']:
        """The reciprocal dual about the unit sphere at the origin."""
        return self.dual_with_sphere(Hypersphere.unit(self.dim or 1), eps)

    # ------------------------------------------------------------------
    # Elements

    def get_element_vertices(self, rank: int, idx: int) -> Optional[jnp.ndarray]:
        """Coordinates of an element's vertices, in increasing vertex index."""
        indices = self.abstract.get_element_vertices(rank, idx)
        if indices is None:
            return None
        return self.vertices[jnp.asarray(indices, dtype=jnp.int64)]

    def get_element(self, rank: int, idx: int) -> Optional['ConcretePolytope']:
        """An element as its own polytope, or None if it is out of range."""
        abstract = self.abstract.get_element(rank, idx)
        if abstract is None:
            return None
        if rank == -1:
            return ConcretePolytope.nullitope()
        return ConcretePolytope(self.get_element_vertices(rank, idx), abstract)

    def verf(self, idx: int, eps: Optional[float] = None) -> Optional['ConcretePolytope']:
        """The vertex figure at a given vertex: dual, facet, dual.

        Returns:
            The vertex figure, or None if either dual does not exist or the
            vertex is out of range
        """
        dual = self.dual(eps)
        if dual is None:
            return None
        facet = dual.get_element(self.rank - 1, idx)
        if facet is None:
            return None
        return facet.dual(eps)

    def cross_section(self, hyperplane: Hyperplane, eps: Optional[float] = None,
                      flatten: bool = False) -> Optional['ConcretePolytope']:
        from .sections import cross_section
        return cross_section(self, hyperplane, eps=eps, flatten=flatten)

    # ------------------------------------------------------------------
    # Products

    @classmethod
    def duopyramid(cls, p: 'ConcretePolytope', q: 'ConcretePolytope',
                   height: float = config.DEFAULT_PYRAMID_HEIGHT) -> 'ConcretePolytope':
        return cls(duopyramid_vertices(p, q, height, tegum=False),
                   AbstractPolytope.duopyramid(p.abstract, q.abstract))

    @classmethod
    def duoprism(cls, p: 'ConcretePolytope', q: 'ConcretePolytope') -> 'ConcretePolytope':
        return cls(duoprism_vertices(p, q), AbstractPolytope.duoprism(p.abstract, q.abstract))

    @classmethod
    def duotegum(cls, p: 'ConcretePolytope', q: 'ConcretePolytope') -> 'ConcretePolytope':
        # A point's only vertex is its maximal element, which a tegum leaves out.
        if p.rank == 0:
            return q.copy()
        if q.rank == 0:
            return p.copy()
        return cls(duopyramid_vertices(p, q, 0.0, tegum=True),
                   AbstractPolytope.duotegum(p.abstract, q.abstract))

    @classmethod
    def duocomb(cls, p: 'ConcretePolytope', q: 'ConcretePolytope') -> 'ConcretePolytope':
        return cls(duoprism_vertices(p, q), AbstractPolytope.duocomb(p.abstract, q.abstract))

    @classmethod
    def binary_product(cls, kind: ProductKind, p: 'ConcretePolytope', q: 'ConcretePolytope') -> 'ConcretePolytope':
        if kind is ProductKind.PYRAMID:
            return cls.duopyramid(p, q)
        if kind is ProductKind.PRISM:
            return cls.duoprism(p, q)
        if kind is ProductKind.TEGUM:
            return cls.duotegum(p, q)
        return cls.duocomb(p, q)

    @classmethod
    def multiproduct(cls, kind: ProductKind, factors: Sequence['ConcretePolytope']) -> 'ConcretePolytope':
        identity = cls.nullitope if kind.identity_is_nullitope else cls.point
        return right_fold(
            list(factors),
            lambda p, q: cls.binary_product(kind, p, q),
            identity,
            lambda p: p.copy(),
        )

    @classmethod
    def multipyramid(cls, factors: Sequence['ConcretePolytope']) -> 'ConcretePolytope':
        return cls.multiproduct(ProductKind.PYRAMID, factors)

    @classmethod
    def multiprism(cls, factors: Sequence['ConcretePolytope']) -> 'ConcretePolytope':
        return cls.multiproduct(ProductKind.PRISM, factors)

    @classmethod
    def multitegum(cls, factors: Sequence['ConcretePolytope']) -> 'ConcretePolytope':
        return cls.multiproduct(ProductKind.TEGUM, factors)

    @classmethod
    def multicomb(cls, factors: Sequence['ConcretePolytope']) -> 'ConcretePolytope':
        return cls.multiproduct(ProductKind.COMB, factors)

    def pyramid(self, height: float = config.DEFAULT_PYRAMID_HEIGHT) -> 'ConcretePolytope':
        return self.duopyramid(self, self.point(), height)

    def prism(self, height: float = config.DEFAULT_PRISM_HEIGHT) -> 'ConcretePolytope':
        return self.duoprism(self, self.dyad().scale(height))

    def tegum(self, height: float = config.DEFAULT_PRISM_HEIGHT) -> 'ConcretePolytope':
        return self.duotegum(self, self.dyad().scale(height))

    # ------------------------------------------------------------------
    # Regular families

    @classmethod
    def simplex(cls, rank: int) -> 'ConcretePolytope':
        """The regular simplex of a given rank, unit edges, centred at the origin."""
        if rank == -1:
            return cls.nullitope()

        simplex = cls.point()
        for _ in range(rank):
            radius = simplex.circumsphere().radius
            height = math.sqrt(max(1.0 - radius**2, 0.0))
            simplex = cls.duopyramid(cls.point(), simplex.recenter(), height)
        return simplex.recenter()

    @classmethod
    def hypercube(cls, rank: int) -> 'ConcretePolytope':
        """The hypercube of a given rank, unit edges, centred at the origin."""
        if rank == -1:
            return cls.nullitope()
        return cls.multiprism([cls.dyad()] * rank)

    @classmethod
    def orthoplex(cls, rank: int) -> 'ConcretePolytope':
        """The orthoplex of a given rank, unit edges, centred at the origin."""
        if rank <= 1:
            return cls.hypercube(rank)
        return cls.multitegum([cls.dyad().scale(math.sqrt(2.0))] * rank)

    # ------------------------------------------------------------------
    # Ditopes and antiprisms

    def ditope(self) -> 'ConcretePolytope':
        """The ditope, two copies of the polytope glued along their boundary."""
        if self.rank < 1:
            raise ValueError(f"Concrete ditopes need rank at least 1, got {self.rank}")
        return ConcretePolytope(self.vertices, self.abstract.ditope())

    def antiprism(self, height: float = config.DEFAULT_PRISM_HEIGHT, eps: Optional[float] = None) -> Optional['ConcretePolytope']:
        """The antiprism between the polytope and its reciprocal dual.

        The dual, about the unit sphere at the origin, is placed at -height/2
        along a new axis and the polytope itself at +height/2.

        Returns:
            The antiprism, or None if the dual does not exist
        """
        if self.rank < 0:
            return ConcretePolytope.point()

        dual = self.dual(eps)
        if dual is None:
            return None

        vertices = jnp.concatenate([
            pad_points(dual.vertices, 0, 0, (-height / 2.0,)),
            pad_points(self.vertices, 0, 0, (height / 2.0,)),
        ], axis=0)
        return ConcretePolytope(vertices, self.abstract.antiprism())

