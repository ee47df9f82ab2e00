"""
Rank-indexed storage.

Polytope data is naturally indexed by rank, which starts at -1 for the
nullitope. `RankedContainer` stores a plain zero-based list and maps every rank
through `storage_index(rank) = rank + 1`.
"""

from typing import TypeVar, Generic, Iterable, Iterator, List, Optional, Tuple

T = TypeVar('T')


def storage_index(rank: int) -> int:
    """Position of a rank in the underlying zero-based list."""
    return rank + 1


class RankedContainer(Generic[T]):
    """A list indexed by rank, from -1 up to `rank`."""

    __slots__ = ('_items',)

    def __init__(self, items: Optional[Iterable[T]] = None):
        self._items: List[T] = list(items) if items is not None else []

    @property
    def rank(self) -> int:
        """Greatest rank stored in the container."""
        return len(self._items) - 2

    def ranks(self) -> range:
        return range(-1, self.rank + 1)

    def _in_range(self, rank: int, extra: int = 0) -> bool:
        return rank >= -1 and storage_index(rank) < len(self._items) + extra

    def _check(self, rank: int, extra: int = 0) -> None:
        if not self._in_range(rank, extra):
            raise IndexError(f"Rank {rank} out of range for rank {self.rank} container")

    def get(self, rank: int) -> Optional[T]:
        """Item at a given rank, or None if the rank is out of range."""
        if not self._in_range(rank):
            return None
        return self._items[storage_index(rank)]

    def __getitem__(self, rank: int) -> T:
        self._check(rank)
        return self._items[storage_index(rank)]

    def __setitem__(self, rank: int, value: T) -> None:
        self._check(rank)
        self._items[storage_index(rank)] = value

    def swap(self, a: int, b: int) -> None:
        """Exchange the items at two ranks."""
        self._check(a)
        self._check(b)
        i, j = storage_index(a), storage_index(b)
        self._items[i], self._items[j] = self._items[j], self._items[i]

    def split_at(self, rank: int) -> Tuple[List[T], List[T]]:
        """Split into the items below `rank` and those at or above it.

        Both halves are lists sharing their items with the container, so the
        items themselves can be mutated through either half independently.
        """
        self._check(rank, extra=1)
        mid = storage_index(rank)
        return self._items[:mid], self._items[mid:]

    def push(self, value: T) -> None:
        """Append an item one rank above the current top."""
        self._items.append(value)

    def insert(self, rank: int, value: T) -> None:
        """Insert an item at a rank, shifting higher ranks up by one."""
        self._check(rank, extra=1)
        self._items.insert(storage_index(rank), value)

    def reverse(self) -> None:
        self._items.reverse()

    def is_empty(self) -> bool:
        return not self._items

    def to_list(self) -> List[T]:
        """Items in increasing rank order, starting at rank -1."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other) -> bool:
        if isinstance(other, RankedContainer):
            return self._items == other._items
        return NotImplemented

    def __repr__(self) -> str:
        return f"RankedContainer({self._items!r})"
