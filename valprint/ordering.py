"""
Deterministic ordering of heterogeneous values.

Mapping keys and set elements have no natural order in general: a dict may mix ints, strings
and complex numbers as keys. compare_values() defines a total order good enough for sorting such
collections so that their rendering does not depend on hashing or insertion order. It makes no
claim of semantic correctness beyond numbers of the same type.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import numbers
from functools import cmp_to_key
from typing import Any, Iterable

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import default_text, shape_name


# Methods --------------------------------------------------------------------------------------------------------------


def compare_values(a: Any, b: Any) -> int:
    """
    Three-way comparison of two arbitrary values.

    Rules, in order:
        1. None sorts before everything else; two Nones are equal.
        2. Values of different types are ordered by their qualified type names.
        3. Integral values of the same type compare numerically.
        4. Floats compare numerically; NaN is less than any number and equal to NaN.
        5. Anything else compares by default_text().

    Returns:
        -1, 0 or 1.

    Examples:
        >>> compare_values(None, 1)
        -1
        >>> compare_values(1.5, -5)   # 'float' < 'int'
        -1
        >>> compare_values(1 + 2j, 7j)  # '(1+2i)' > '(0+7i)'
        1
    """
    if a is None or b is None:
        return _cmp(a is not None, b is not None)

    ta, tb = type(a), type(b)
    if ta is not tb:
        return _cmp(shape_name(ta), shape_name(tb)) or _cmp(id(ta), id(tb))

    if isinstance(a, numbers.Integral):
        return _cmp(int(a), int(b))

    if isinstance(a, float):
        a_nan, b_nan = math.isnan(a), math.isnan(b)
        if a_nan or b_nan:
            return _cmp(not a_nan, not b_nan)
        return _cmp(a, b)

    return _cmp(default_text(a), default_text(b))


def sort_values(values: Iterable[Any]) -> list[Any]:
    """Return values as a new list sorted by compare_values()."""
    return sorted(values, key=_SORT_KEY)


def sort_items(items: Iterable[tuple[Any, Any]]) -> list[tuple[Any, Any]]:
    """Return (key, value) pairs as a new list sorted by key with compare_values()."""
    return sorted(items, key=lambda item: _SORT_KEY(item[0]))


# Private Methods ------------------------------------------------------------------------------------------------------


def _cmp(x: Any, y: Any) -> int:
    return (x > y) - (x < y)


_SORT_KEY = cmp_to_key(compare_values)
