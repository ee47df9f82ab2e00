"""
Abstract polytopes as ranked posets.

An abstract polytope is stored as its Hasse diagram: for every rank from -1
(the nullitope) up to the rank of the polytope, the list of its elements, each
one given by the indices of its subelements one rank below.

Mathematical foundations:
- A valid polytope has a unique minimal and a unique maximal element
- Diamond property: every section of rank 1 has exactly four elements, so each
  element's grandchildren occur exactly twice among its children's children
- Duality reverses the partial order: the dual's k-elements are the original's
  (n - 1 - k)-elements
- Products: the elements of P x Q are pairs of elements of P and Q, with the
  factors' minimal and maximal elements either kept or synthesized
"""

import logging
from collections import Counter, deque
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .elements import Element, ElementList
from .products import ProductKind, right_fold
from .ranked import RankedContainer
from . import config

logger = logging.getLogger(__name__)

Flag = Tuple[int, ...]


class AbstractPolytope:
    """The ranked poset of an abstract polytope."""

    __slots__ = ('layers',)

    def __init__(self, layers: Optional[Iterable[ElementList]] = None):
        """Initialize from element lists, in increasing rank order from -1.

        Args:
            layers: Element lists for ranks -1, 0, 1, ...
        """
        self.layers: RankedContainer[ElementList] = RankedContainer(
            ElementList(layer) for layer in (layers or [])
        )

    @classmethod
    def from_subs(cls, subs_by_rank: Sequence[Sequence[Sequence[int]]]) -> 'AbstractPolytope':
        """Build a polytope from raw subelement lists, ranks -1 and up."""
        return cls(ElementList.from_subs(layer) for layer in subs_by_rank)

    # ------------------------------------------------------------------
    # Queries

    @property
    def rank(self) -> int:
        return self.layers.rank

    def __getitem__(self, rank: int) -> ElementList:
        return self.layers[rank]

    def __setitem__(self, rank: int, layer: ElementList) -> None:
        self.layers[rank] = layer

    def get(self, rank: int) -> Optional[ElementList]:
        """Element list of a rank, or None if out of range."""
        return self.layers.get(rank)

    def element_count(self, rank: int) -> int:
        """Number of elements of a given rank, 0 if out of range."""
        layer = self.layers.get(rank)
        return len(layer) if layer is not None else 0

    def element_counts(self) -> RankedContainer[int]:
        return RankedContainer(len(layer) for layer in self.layers)

    def vertex_count(self) -> int:
        return self.element_count(0)

    def facet_count(self) -> int:
        return self.element_count(self.rank - 1)

    @property
    def min_element(self) -> Element:
        return self.layers[-1][0]

    @property
    def max_element(self) -> Element:
        return self.layers[self.rank][0]

    def copy(self) -> 'AbstractPolytope':
        return AbstractPolytope(layer.copy() for layer in self.layers)

    def to_subs(self) -> List[List[List[int]]]:
        """Raw subelement lists, ranks -1 and up."""
        return [layer.subs_lists() for layer in self.layers]

    def __eq__(self, other) -> bool:
        if isinstance(other, AbstractPolytope):
            return self.layers == other.layers
        return NotImplemented

    def __repr__(self) -> str:
        counts = list(self.element_counts())
        return f"AbstractPolytope(rank={self.rank}, counts={counts})"

    # ------------------------------------------------------------------
    # Incremental construction

    def push(self, layer: ElementList) -> None:
        """Push an element list one rank above the current top."""
        self.layers.push(layer)

    def push_min(self) -> None:
        """Push the minimal element. The polytope must be empty."""
        config.check_precondition(self.layers.is_empty(), "push_min on a non-empty polytope")
        self.push(ElementList.min())

    def push_vertices(self, vertex_count: int) -> None:
        """Push a vertex layer. The polytope must consist of only a minimal element."""
        config.check_precondition(self.rank == -1, "push_vertices requires a rank -1 polytope")
        self.push(ElementList.vertices(vertex_count))

    def push_max(self) -> None:
        """Push a maximal element over every element of the current top rank."""
        self.push(ElementList.max(self.element_count(self.rank)))

    def insert(self, rank: int, layer: ElementList) -> None:
        self.layers.insert(rank, layer)

    # ------------------------------------------------------------------
    # Base shapes

    @classmethod
    def nullitope(cls) -> 'AbstractPolytope':
        """The unique polytope of rank -1."""
        return cls([ElementList.min()])

    @classmethod
    def point(cls) -> 'AbstractPolytope':
        """The unique polytope of rank 0."""
        return cls([ElementList.min(), ElementList.max(1)])

    @classmethod
    def dyad(cls) -> 'AbstractPolytope':
        """The unique polytope of rank 1."""
        return cls([ElementList.min(), ElementList.vertices(2), ElementList.max(2)])

    @classmethod
    def polygon(cls, n: int) -> 'AbstractPolytope':
        """The polygon with `n` vertices and `n` edges, as a single cycle.

        Args:
            n: Number of sides, at least 2

        Returns:
            Rank 2 polytope
        """
        if n < 2:
            raise ValueError(f"A polygon needs at least 2 sides, got {n}")

        edges = ElementList(Element([i % n, (i + 1) % n]) for i in range(1, n + 1))
        return cls([ElementList.min(), ElementList.vertices(n), edges, ElementList.max(n)])

    # ------------------------------------------------------------------
    # Duality

    def dual(self) -> 'AbstractPolytope':
        clone = self.copy()
        clone.dual_mut()
        return clone

    def dual_mut(self) -> None:
        """Replace the polytope by its dual, in place.

        The incidences are transposed one pair of ranks at a time: the
        subelements of rank r - 1 are overwritten with their superelements of
        rank r, while rank r is still read with its original subelements.
        Reversing the ranks then turns superelements back into subelements.
        """
        rank = self.rank

        for r in range(0, rank + 1):
            below, above = self.layers.split_at(r)
            prev_rank, cur_rank = below[-1], above[0]

            for el in prev_rank:
                el.subs = []

            for idx, el in enumerate(cur_rank):
                for sub in el.subs:
                    prev_rank[sub].subs.append(idx)

        # The maximal element becomes the new minimal element.
        self.layers[rank][0].subs = []
        self.layers.reverse()
        logger.debug(f"Took abstract dual of rank {rank} polytope")

    # ------------------------------------------------------------------
    # Elements and sections

    def get_element_vertices(self, rank: int, idx: int) -> Optional[List[int]]:
        """Indices of the vertices of an element, in increasing order.

        Args:
            rank: Rank of the element
            idx: Index of the element in its rank

        Returns:
            Sorted vertex indices, or None for the nullitope or an out of range
            element
        """
        if rank == -1 or not 0 <= idx < self.element_count(rank):
            return None

        indices: Set[int] = {idx}
        for r in range(rank, 0, -1):
            layer = self.layers[r]
            indices = {sub for i in indices for sub in layer[i].subs}
        return sorted(indices)

    def _down_closure(self, rank: int, idx: int, low: int = -1) -> Dict[int, Set[int]]:
        """Elements below a given one, by rank, down to rank `low`."""
        closure = {rank: {idx}}
        for r in range(rank, low, -1):
            layer = self.layers[r]
            closure[r - 1] = {sub for i in closure[r] for sub in layer[i].subs}
        return closure

    def section(self, rank_lo: int, idx_lo: int, rank_hi: int, idx_hi: int) -> Optional['AbstractPolytope']:
        """The section between two incident elements, as its own polytope.

        The lower element becomes the minimal element of the section and the
        upper one its maximal element. Elements of each rank are renumbered in
        increasing order of their original indices.

        Args:
            rank_lo: Rank of the lower element
            idx_lo: Index of the lower element
            rank_hi: Rank of the upper element
            idx_hi: Index of the upper element

        Returns:
            Polytope of rank rank_hi - rank_lo - 1, or None if either element
            is out of range

        Raises:
            ValueError: If the lower element is not below the upper one
        """
        if not 0 <= idx_lo < self.element_count(rank_lo) or not 0 <= idx_hi < self.element_count(rank_hi):
            return None
        if rank_lo > rank_hi or (rank_lo == rank_hi and idx_lo != idx_hi):
            raise ValueError(f"Element ({rank_lo}, {idx_lo}) is not below ({rank_hi}, {idx_hi})")

        below = self._down_closure(rank_hi, idx_hi, rank_lo)
        if idx_lo not in below[rank_lo]:
            raise ValueError(f"Element ({rank_lo}, {idx_lo}) is not below ({rank_hi}, {idx_hi})")

        # Keeps only the elements above the lower one.
        interval = {rank_lo: {idx_lo}}
        for r in range(rank_lo + 1, rank_hi + 1):
            layer = self.layers[r]
            interval[r] = {i for i in below[r] if any(s in interval[r - 1] for s in layer[i].subs)}

        renumber = {r: {old: new for new, old in enumerate(sorted(idxs))} for r, idxs in interval.items()}

        section = AbstractPolytope()
        section.push_min()
        for r in range(rank_lo + 1, rank_hi + 1):
            layer = self.layers[r]
            sub_map = renumber[r - 1]
            section.push(ElementList(
                Element([sub_map[s] for s in layer[old].subs if s in sub_map])
                for old in sorted(interval[r])
            ))
        return section

    def get_element(self, rank: int, idx: int) -> Optional['AbstractPolytope']:
        """The element of a given rank and index, as its own polytope."""
        return self.section(-1, 0, rank, idx)

    def superelements(self) -> RankedContainer[List[List[int]]]:
        """For every element, the indices of the elements one rank above containing it."""
        supers: RankedContainer[List[List[int]]] = RankedContainer(
            [[] for _ in layer] for layer in self.layers
        )
        for r in range(0, self.rank + 1):
            for idx, el in enumerate(self.layers[r]):
                for sub in el.subs:
                    supers[r - 1][sub].append(idx)
        return supers

    # ------------------------------------------------------------------
    # Validity

    def has_min_max_elements(self) -> bool:
        """Whether there is exactly one minimal and one maximal element."""
        return self.element_count(-1) == 1 and self.element_count(self.rank) == 1

    def check_incidences(self) -> bool:
        """Whether every subelement index refers to an existing element."""
        for r in range(-1, self.rank + 1):
            below = self.element_count(r - 1)
            for el in self.layers[r]:
                for sub in el.subs:
                    if not 0 <= sub < below:
                        return False
        return True

    def is_dyadic(self) -> bool:
        """Whether every element's grandchildren occur exactly twice (diamond property)."""
        for r in range(1, self.rank):
            layer, below = self.layers[r], self.layers[r - 1]
            for el in layer:
                sub_subs = Counter(sub_sub for sub in el.subs for sub_sub in below[sub].subs)
                if any(count != 2 for count in sub_subs.values()):
                    return False
        return True

    def is_connected(self) -> bool:
        """Whether the proper elements form a single connected piece.

        Two proper elements are linked when one is a subelement of the other.
        Polytopes of rank 1 or less count as connected.
        """
        if self.rank <= 1:
            return True

        parent: Dict[Tuple[int, int], Tuple[int, int]] = {}

        def find(node):
            while parent[node] != node:
                parent[node] = parent[parent[node]]
                node = parent[node]
            return node

        for r in range(0, self.rank):
            for idx in range(self.element_count(r)):
                parent[(r, idx)] = (r, idx)

        for r in range(1, self.rank):
            for idx, el in enumerate(self.layers[r]):
                root = find((r, idx))
                for sub in el.subs:
                    parent[find((r - 1, sub))] = root

        roots = {find(node) for node in parent}
        return len(roots) <= 1

    def is_strongly_connected(self) -> bool:
        """Whether the polytope and all of its sections of rank 2 or more are connected.

        Checks every incident pair of elements, so the cost grows with the
        number of such pairs.
        """
        if not self.is_connected():
            return False

        for rank_hi in range(2, self.rank + 1):
            for idx_hi in range(self.element_count(rank_hi)):
                below = self._down_closure(rank_hi, idx_hi)
                for rank_lo in range(-1, rank_hi - 2):
                    for idx_lo in below[rank_lo]:
                        if rank_hi == self.rank and rank_lo == -1:
                            continue
                        if not self.section(rank_lo, idx_lo, rank_hi, idx_hi).is_connected():
                            logger.debug(f"Section ({rank_lo}, {idx_lo})-({rank_hi}, {idx_hi}) is disconnected")
                            return False
        return True

    def full_check(self) -> bool:
        """Runs every validity check."""
        return (
            self.has_min_max_elements()
            and self.check_incidences()
            and self.is_dyadic()
            and self.is_strongly_connected()
        )

    # ------------------------------------------------------------------
    # Flags and orientability

    def flags(self) -> List[Flag]:
        """All flags, as tuples of element indices for ranks 0, ..., rank - 1."""
        rank = self.rank
        if rank <= 0:
            return [()]

        flags = []
        stack = [(idx,) for idx in range(self.element_count(rank - 1))]
        while stack:
            chain = stack.pop()
            r = rank - len(chain)
            if r == 0:
                flags.append(tuple(reversed(chain)))
                continue
            for sub in self.layers[r][chain[-1]].subs:
                stack.append(chain + (sub,))
        return flags

    def adjacent_flag(self, flag: Flag, j: int) -> Flag:
        """The flag differing from `flag` exactly in its j-element.

        Raises:
            ValueError: If there is not exactly one such flag
        """
        rank = self.rank
        if j + 1 < rank:
            candidates = self.layers[j + 1][flag[j + 1]].subs
        else:
            candidates = range(self.element_count(j))

        layer = self.layers[j]
        matches = [
            c for c in candidates
            if c != flag[j] and (j == 0 or flag[j - 1] in layer[c].subs)
        ]
        if len(matches) != 1:
            raise ValueError(f"Flag {flag} has {len(matches)} {j}-adjacent flags, expected 1")
        return flag[:j] + (matches[0],) + flag[j + 1:]

    def is_orientable(self) -> bool:
        """Whether the flag graph is bipartite.

        Raises:
            ValueError: If the polytope does not satisfy the diamond property
        """
        if self.rank <= 0:
            return True
        if not self.is_dyadic():
            raise ValueError("Orientability is only defined for dyadic polytopes")

        colors: Dict[Flag, int] = {}
        for start in self.flags():
            if start in colors:
                continue
            colors[start] = 0
            queue = deque([start])
            while queue:
                flag = queue.popleft()
                for j in range(self.rank):
                    neighbor = self.adjacent_flag(flag, j)
                    if neighbor not in colors:
                        colors[neighbor] = 1 - colors[flag]
                        queue.append(neighbor)
                    elif colors[neighbor] == colors[flag]:
                        return False
        return True

    # ------------------------------------------------------------------
    # Products

    @classmethod
    def product(cls, p: 'AbstractPolytope', q: 'AbstractPolytope',
                include_min: bool, include_max: bool) -> 'AbstractPolytope':
        """Direct product of two polytopes.

        The elements of the product are in bijection with pairs of elements of
        `p` and `q`. Elements of one rank are sorted first by the pair of
        ranks, then by the pair of indices, both lexicographically. If
        `include_min` is off the factors' minimal elements are left out and a
        single one is added at the end; `include_max` works the same way for
        maximal elements.

        Args:
            p: First factor
            q: Second factor
            include_min: Whether the factors' minimal elements take part
            include_max: Whether the factors' maximal elements take part

        Returns:
            Product polytope
        """
        p_rank, q_rank = p.rank, q.rank
        min_shift = 1 if include_min else 0

        p_low = -1 if include_min else 0
        p_hi = p_rank if include_max else p_rank - 1
        q_low = -1 if include_min else 0
        q_hi = q_rank if include_max else q_rank - 1

        rank = p_rank + q_rank + 1 - (not include_min) - (not include_max)

        # offset_memo[p_r - p_low][q_r - q_low] counts the product elements
        # of the pairs of ranks (p_r', q_r') with p_r' <= p_r and
        # p_r' + q_r' = p_r + q_r, that is, those added up to (p_r, q_r).
        offset_memo: List[List[int]] = []
        for i, p_r in enumerate(range(p_low, p_hi + 1)):
            row = []
            for j, q_r in enumerate(range(q_low, q_hi + 1)):
                previous = 0 if p_r == p_low or q_r == q_hi else offset_memo[i - 1][j + 1]
                row.append(previous + p.element_count(p_r) * q.element_count(q_r))
            offset_memo.append(row)

        def offset(p_r: int, q_r: int) -> int:
            i, j = p_r - p_low, q_r - q_low
            if 0 <= i < len(offset_memo) and 0 <= j < len(offset_memo[i]):
                return offset_memo[i][j]
            return 0

        def element_index(p_r: int, p_idx: int, q_r: int, q_idx: int) -> int:
            return offset(p_r - 1, q_r + 1) + p_idx * q.element_count(q_r) + q_idx

        product = cls([ElementList() for _ in range(max(rank + 2, 0))])

        for prod_rank in range(-1, rank + 1):
            layer = product[prod_rank]

            for p_r in range(p_low, p_hi + 1):
                q_r = prod_rank - p_r - min_shift
                if q_r < q_low or q_r > q_hi:
                    continue

                for p_idx, p_el in enumerate(p[p_r]):
                    for q_idx, q_el in enumerate(q[q_r]):
                        subs = []
                        if p_r != 0 or include_min:
                            subs.extend(element_index(p_r - 1, s, q_r, q_idx) for s in p_el.subs)
                        if q_r != 0 or include_min:
                            subs.extend(element_index(p_r, p_idx, q_r - 1, s) for s in q_el.subs)
                        layer.append(Element(subs))

        if not include_min:
            product[-1] = ElementList.min()
            product[0] = ElementList.vertices(p.vertex_count() * q.vertex_count())
        if not include_max:
            product[rank] = ElementList.max(product.element_count(rank - 1))

        logger.debug(
            f"Product of ranks {p_rank} and {q_rank} "
            f"(min={include_min}, max={include_max}): {list(product.element_counts())}"
        )
        return product

    @classmethod
    def duopyramid(cls, p: 'AbstractPolytope', q: 'AbstractPolytope') -> 'AbstractPolytope':
        return cls.product(p, q, True, True)

    @classmethod
    def duoprism(cls, p: 'AbstractPolytope', q: 'AbstractPolytope') -> 'AbstractPolytope':
        return cls.product(p, q, False, True)

    @classmethod
    def duotegum(cls, p: 'AbstractPolytope', q: 'AbstractPolytope') -> 'AbstractPolytope':
        return cls.product(p, q, True, False)

    @classmethod
    def duocomb(cls, p: 'AbstractPolytope', q: 'AbstractPolytope') -> 'AbstractPolytope':
        # The comb construction has nothing to pair a point's vertex with.
        if p.rank == 0:
            return q.copy()
        if q.rank == 0:
            return p.copy()
        return cls.product(p, q, False, False)

    @classmethod
    def binary_product(cls, kind: ProductKind, p: 'AbstractPolytope', q: 'AbstractPolytope') -> 'AbstractPolytope':
        if kind is ProductKind.COMB:
            return cls.duocomb(p, q)
        return cls.product(p, q, kind.include_min, kind.include_max)

    @classmethod
    def multiproduct(cls, kind: ProductKind, factors: Sequence['AbstractPolytope']) -> 'AbstractPolytope':
        """Product of any number of factors, folded from the right.

        Args:
            kind: Which product to take
            factors: The factors

        Returns:
            The identity of the product for no factors, a copy of the factor
            for one, the folded product otherwise
        """
        identity = cls.nullitope if kind.identity_is_nullitope else cls.point
        return right_fold(
            list(factors),
            lambda p, q: cls.binary_product(kind, p, q),
            identity,
            lambda p: p.copy(),
        )

    @classmethod
    def multipyramid(cls, factors: Sequence['AbstractPolytope']) -> 'AbstractPolytope':
        return cls.multiproduct(ProductKind.PYRAMID, factors)

    @classmethod
    def multiprism(cls, factors: Sequence['AbstractPolytope']) -> 'AbstractPolytope':
        return cls.multiproduct(ProductKind.PRISM, factors)

    @classmethod
    def multitegum(cls, factors: Sequence['AbstractPolytope']) -> 'AbstractPolytope':
        return cls.multiproduct(ProductKind.TEGUM, factors)

    @classmethod
    def multicomb(cls, factors: Sequence['AbstractPolytope']) -> 'AbstractPolytope':
        return cls.multiproduct(ProductKind.COMB, factors)

    def pyramid(self) -> 'AbstractPolytope':
        return self.duopyramid(self, self.point())

    def prism(self) -> 'AbstractPolytope':
        return self.duoprism(self, self.dyad())

    def tegum(self) -> 'AbstractPolytope':
        return self.duotegum(self, self.dyad())

    @classmethod
    def simplex(cls, rank: int) -> 'AbstractPolytope':
        """The simplex of a given rank, a pyramid product of rank + 1 points."""
        return cls.multipyramid([cls.point()] * (rank + 1))

    @classmethod
    def hypercube(cls, rank: int) -> 'AbstractPolytope':
        """The hypercube of a given rank, a prism product of dyads."""
        if rank == -1:
            return cls.nullitope()
        return cls.multiprism([cls.dyad()] * rank)

    @classmethod
    def orthoplex(cls, rank: int) -> 'AbstractPolytope':
        """The orthoplex of a given rank, a tegum product of dyads."""
        if rank == -1:
            return cls.nullitope()
        return cls.multitegum([cls.dyad()] * rank)

    # ------------------------------------------------------------------
    # Ditopes, hosotopes, antiprisms

    def ditope(self) -> 'AbstractPolytope':
        clone = self.copy()
        clone.ditope_mut()
        return clone

    def ditope_mut(self) -> None:
        """Double the maximal element and cover both copies with a new one."""
        rank = self.rank
        self.layers[rank].append(self.layers[rank][0].copy())
        self.push(ElementList.max(2))

    def hosotope(self) -> 'AbstractPolytope':
        clone = self.copy()
        clone.hosotope_mut()
        return clone

    def hosotope_mut(self) -> None:
        """Double the minimal element and put a new one under both copies."""
        if self.rank >= 0:
            for el in self.layers[0]:
                el.subs = [0, 1]
        self.layers[-1] = ElementList.vertices(2)
        self.insert(-1, ElementList.min())

    def antiprism(self) -> 'AbstractPolytope':
        """The antiprism, built from the pairs of incident elements.

        The pair (F, G) with F <= G has rank rank(F) - rank(G) + rank, and
        covers (F', G) for each subelement F' of F and (F, G') for each
        superelement G' of G. A new maximal element covers every pair of
        rank `rank`, in particular (max, max) and (min, min), the two bases.

        Returns:
            Polytope of rank self.rank + 1
        """
        rank = self.rank
        supers = self.superelements()

        # Every incident pair, keyed (rank F, index F, rank G, index G).
        pairs: Dict[int, List[Tuple[int, int, int, int]]] = {r: [] for r in range(-1, rank + 1)}
        for g_rank in range(-1, rank + 1):
            for g_idx in range(self.element_count(g_rank)):
                for f_rank, f_idxs in self._down_closure(g_rank, g_idx).items():
                    for f_idx in f_idxs:
                        pairs[f_rank - g_rank + rank].append((f_rank, f_idx, g_rank, g_idx))

        position = {}
        for r in pairs:
            pairs[r].sort()
            for i, key in enumerate(pairs[r]):
                position[key] = i

        antiprism = AbstractPolytope()
        for r in range(-1, rank + 1):
            layer = ElementList()
            for f_rank, f_idx, g_rank, g_idx in pairs[r]:
                subs = []
                if f_rank >= 0:
                    subs.extend(
                        position[(f_rank - 1, s, g_rank, g_idx)] for s in self.layers[f_rank][f_idx].subs
                    )
                subs.extend(position[(f_rank, f_idx, g_rank + 1, s)] for s in supers[g_rank][g_idx])
                layer.append(Element(subs))
            antiprism.push(layer)

        antiprism.push_max()
        return antiprism
