"""
Hasse diagram nodes.

An `Element` is defined by the indices of its subelements in the element list
one rank below. An `ElementList` holds all elements of one rank; the position
of an element in its list is its identity.
"""

from dataclasses import dataclass, field
from typing import Iterable, List


@dataclass
class Element:
    """A single element of an abstract polytope.

    Attributes:
        subs: Indices of the subelements, in the element list one rank below
    """
    subs: List[int] = field(default_factory=list)

    @classmethod
    def min(cls) -> 'Element':
        """A minimal element, with no subelements."""
        return cls()

    @classmethod
    def max(cls, facet_count: int) -> 'Element':
        """A maximal element over the facets 0, ..., facet_count - 1."""
        return cls(list(range(facet_count)))

    def copy(self) -> 'Element':
        return Element(list(self.subs))


class ElementList(list):
    """A list of elements of the same rank."""

    def __init__(self, elements: Iterable[Element] = ()):
        super().__init__(elements)

    @classmethod
    def min(cls) -> 'ElementList':
        """The element list holding only the nullitope."""
        return cls([Element.min()])

    @classmethod
    def max(cls, facet_count: int) -> 'ElementList':
        """The element list holding only a maximal element over all facets."""
        return cls([Element.max(facet_count)])

    @classmethod
    def vertices(cls, vertex_count: int) -> 'ElementList':
        """A layer of vertices, each over the single nullitope."""
        return cls(Element([0]) for _ in range(vertex_count))

    @classmethod
    def from_subs(cls, subs_lists: Iterable[Iterable[int]]) -> 'ElementList':
        """Build an element list from raw subelement index lists."""
        return cls(Element(list(subs)) for subs in subs_lists)

    def copy(self) -> 'ElementList':
        return ElementList(el.copy() for el in self)

    def subs_lists(self) -> List[List[int]]:
        return [list(el.subs) for el in self]
