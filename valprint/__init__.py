"""
Valprint: deterministic, human-readable rendering of arbitrary Python values.

    >>> from valprint import Formatter, sprint
    >>> sprint({"b": [2, 3], "a": None})
    '{"a": nil, "b": []{2, 3}}'
    >>> print(Formatter.expanded().sprint([1, (2, 3)]), end="")
    []{
        1,
        [2]{
            2,
            3,
        },
    }
"""

from .options import Formatter, configure, get_options
from .ordering import compare_values, sort_values
from .printer import Printer, fprint, pprint, sprint

__version__ = "0.1.0"

__all__ = [
    "Formatter",
    "Printer",
    "compare_values",
    "configure",
    "fprint",
    "get_options",
    "pprint",
    "sort_values",
    "sprint",
]
