"""
Geometric primitives shared by the concrete polytope layer.

Points are 1-D float64 `jnp.ndarray`s and point sets are `(N, D)` arrays.
A matrix is a `(D, D)` array acting on column vectors, so a point set is mapped
as `points @ m.T`.

Mathematical foundations:
- Affine subspaces are stored as an offset plus an orthonormal basis, grown one
  point at a time by Gram-Schmidt orthogonalization
- Orthogonal projection onto an affine subspace: o + sum_i <p - o, b_i> b_i
- Hyperplanes are the level sets <n, x> = c of a unit normal n
"""

import jax
import jax.numpy as jnp
from typing import NamedTuple, List, Optional, Sequence

from . import config


def as_point(point) -> jnp.ndarray:
    """Convert a coordinate sequence to a float64 point.

    Args:
        point: Sequence of coordinates or array

    Returns:
        (D,) array
    """
    return jnp.asarray(point, dtype=jnp.float64).reshape(-1)


def as_points(points) -> jnp.ndarray:
    """Convert a sequence of coordinate sequences to a float64 point set.

    An empty sequence becomes a (0, 0) array, the vertex set of the nullitope.

    Args:
        points: Sequence of points or (N, D) array

    Returns:
        (N, D) array
    """
    if isinstance(points, (list, tuple)) and len(points) > 0:
        points = jnp.stack([as_point(p) for p in points])
    arr = jnp.asarray(points, dtype=jnp.float64)
    if arr.size == 0 and arr.ndim < 2:
        return jnp.zeros((0, 0), dtype=jnp.float64)
    if arr.ndim != 2:
        raise ValueError(f"Expected an (N, D) point set, got shape {arr.shape}")
    return arr


class Hypersphere(NamedTuple):
    """A hypersphere in Euclidean space.

    Attributes:
        center: (D,) array, the centre of the sphere
        radius: Radius of the sphere
    """
    center: jnp.ndarray
    radius: float

    @classmethod
    def unit(cls, dim: int) -> 'Hypersphere':
        """Unit hypersphere centred at the origin of a `dim`-dimensional space."""
        return cls(center=jnp.zeros(dim, dtype=jnp.float64), radius=1.0)

    @property
    def dim(self) -> int:
        return int(self.center.shape[0])


class Subspace:
    """An affine subspace, spanned incrementally by points.

    The subspace is stored as a point `offset` on it together with an
    orthonormal `basis` of its direction space.
    """

    def __init__(self, offset, eps: Optional[float] = None):
        """Initialize the zero-dimensional subspace containing one point.

        Args:
            offset: A point of the subspace
            eps: Tolerance below which a new direction is considered zero
        """
        self.offset = as_point(offset)
        self.basis: List[jnp.ndarray] = []
        self.eps = config.EPSILON if eps is None else eps

    @property
    def rank(self) -> int:
        """Dimension of the subspace."""
        return len(self.basis)

    @property
    def dim(self) -> int:
        """Dimension of the ambient space."""
        return int(self.offset.shape[0])

    def is_full(self) -> bool:
        return self.rank == self.dim

    def add(self, point) -> Optional[jnp.ndarray]:
        """Add a point to the subspace.

        Args:
            point: Point to add

        Returns:
            The new unit basis direction, or None if the point already lies in
            the subspace
        """
        if self.is_full():
            return None

        v = as_point(point) - self.offset
        for b in self.basis:
            v = v - jnp.dot(v, b) * b

        norm = float(jnp.linalg.norm(v))
        if norm < self.eps:
            return None

        b = v / norm
        self.basis.append(b)
        return b

    def project(self, point) -> jnp.ndarray:
        """Orthogonally project a point onto the subspace.

        Args:
            point: Point to project

        Returns:
            (D,) projected point
        """
        v = as_point(point) - self.offset
        projected = self.offset
        for b in self.basis:
            projected = projected + jnp.dot(v, b) * b
        return projected

    @classmethod
    def from_points(cls, points, eps: Optional[float] = None) -> 'Subspace':
        """Build the affine hull of a non-empty point set.

        Args:
            points: Sequence of points or (N, D) array
            eps: Rank tolerance

        Returns:
            Subspace spanned by the points
        """
        points = as_points(points)
        if points.shape[0] == 0:
            raise ValueError("Cannot span a subspace with no points")

        subspace = cls(points[0], eps)
        for p in points[1:]:
            if subspace.is_full():
                break
            subspace.add(p)
        return subspace


class Hyperplane(NamedTuple):
    """The hyperplane of points x with <normal, x> = offset.

    Attributes:
        normal: (D,) unit normal vector
        offset: Signed distance from the origin along the normal
    """
    normal: jnp.ndarray
    offset: float

    @classmethod
    def new(cls, normal, offset: float = 0.0) -> 'Hyperplane':
        """Build a hyperplane, normalizing the normal vector.

        Args:
            normal: Non-zero normal vector
            offset: Value of <normal, x> on the plane, before normalization

        Returns:
            Hyperplane with unit normal
        """
        normal = as_point(normal)
        norm = float(jnp.linalg.norm(normal))
        if norm == 0.0:
            raise ValueError("Hyperplane normal must be non-zero")
        return cls(normal=normal / norm, offset=float(offset) / norm)

    @classmethod
    def through(cls, point, normal) -> 'Hyperplane':
        """Hyperplane through a point with a given normal."""
        plane = cls.new(normal)
        return cls(normal=plane.normal, offset=float(jnp.dot(plane.normal, as_point(point))))

    @property
    def dim(self) -> int:
        return int(self.normal.shape[0])

    def distance(self, points) -> jnp.ndarray:
        """Signed distances of a point set to the hyperplane.

        Args:
            points: (N, D) array

        Returns:
            (N,) array of signed distances
        """
        return signed_distances(as_points(points), self.normal, self.offset)

    def basis(self) -> List[jnp.ndarray]:
        """Orthonormal basis of the hyperplane's direction space."""
        subspace = Subspace(jnp.zeros(self.dim, dtype=jnp.float64))
        subspace.add(self.normal)
        for e in jnp.eye(self.dim, dtype=jnp.float64):
            if subspace.is_full():
                break
            subspace.add(e)
        return subspace.basis[1:]

    def flatten(self, points) -> jnp.ndarray:
        """Express points of the hyperplane in coordinates of its basis.

        Args:
            points: (N, D) array of points on the hyperplane

        Returns:
            (N, D - 1) array
        """
        points = as_points(points)
        basis = self.basis()
        if not basis:
            return jnp.zeros((points.shape[0], 0), dtype=jnp.float64)
        origin = self.normal * self.offset
        return (points - origin[None, :]) @ jnp.stack(basis).T


@jax.jit
def signed_distances(points: jnp.ndarray, normal: jnp.ndarray, offset: float) -> jnp.ndarray:
    return points @ normal - offset


def squared_norm(v) -> float:
    v = as_point(v)
    return float(jnp.dot(v, v))


def pad_points(points: jnp.ndarray, left: int, right: int, tail: Sequence[float] = ()) -> jnp.ndarray:
    """Pad every point of a set with zeros and optional trailing coordinates.

    Args:
        points: (N, D) array
        left: Number of zeros prepended to each point
        right: Number of zeros appended to each point
        tail: Extra coordinates appended after the right padding

    Returns:
        (N, left + D + right + len(tail)) array
    """
    n = points.shape[0]
    columns = [
        jnp.zeros((n, left), dtype=jnp.float64),
        points,
        jnp.zeros((n, right), dtype=jnp.float64),
    ]
    if len(tail):
        columns.append(jnp.tile(jnp.asarray(tail, dtype=jnp.float64), (n, 1)))
    return jnp.concatenate(columns, axis=1)
