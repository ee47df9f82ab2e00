"""
The four standard products of polytopes, as a tagged enumeration.

Every product is one parameterized construction: the factors' minimal and
maximal elements either take part in the product directly, or a single new one
is synthesized afterwards.

    kind      include_min  include_max  identity
    PYRAMID   True         True         nullitope
    PRISM     False        True         point
    TEGUM     True         False        point
    COMB      False        False        point
"""

from enum import Enum
from typing import Callable, Sequence, TypeVar

P = TypeVar('P')


class ProductKind(Enum):
    PYRAMID = (True, True)
    PRISM = (False, True)
    TEGUM = (True, False)
    COMB = (False, False)

    @property
    def include_min(self) -> bool:
        return self.value[0]

    @property
    def include_max(self) -> bool:
        return self.value[1]

    @property
    def identity_is_nullitope(self) -> bool:
        """Whether the identity of the n-ary product is the nullitope (else the point)."""
        return self is ProductKind.PYRAMID


def right_fold(factors: Sequence[P], combine: Callable[[P, P], P], identity: Callable[[], P],
               copy: Callable[[P], P]) -> P:
    """Fold a binary product over a list of factors, right-associatively.

    Args:
        factors: Factors of the product
        combine: Binary product
        identity: Builds the identity element, used when there are no factors
        copy: Copies a factor, used when there is exactly one

    Returns:
        combine(f_0, combine(f_1, ... combine(f_{n-2}, f_{n-1})))
    """
    if not factors:
        return identity()
    if len(factors) == 1:
        return copy(factors[0])

    result = factors[-1]
    for factor in reversed(factors[:-1]):
        result = combine(factor, result)
    return result
