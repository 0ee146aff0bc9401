"""
Per-call traversal state: layout plus cycle and depth guards.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from contextlib import contextmanager
from typing import Any, Iterator

# Local ----------------------------------------------------------------------------------------------------------------
from .layout import Layout, SupportsWrite

CYCLE = "<cycle>"
MAX_DEPTH = "<maxdepth>"


# Classes --------------------------------------------------------------------------------------------------------------


class TraversalState(Layout):
    """
    Mutable state of one top-level formatting call.

    Extends Layout with the two guards needed to terminate on arbitrary input:
        - visited: ids of the composites on the active recursion path. An id leaves the set as
          soon as its subtree is printed, so the same object reached twice through different
          paths is not a cycle.
        - depth: nesting level of the value being printed, 0 for the top-level value. Shared
          with Layout, where it also drives indentation.

    Both guards are needed: a list containing itself is a cycle at depth 1, while a long chain
    of fresh objects is never a cycle but may be arbitrarily deep.

    Never shared between calls or threads.
    """

    def __init__(
        self,
        sink: SupportsWrite,
        *,
        max_depth: int = 100,
        compact: bool = True,
        indent: str = "    ",
        max_width: int = 0,
    ):
        super().__init__(sink, compact=compact, indent=indent, max_width=max_width)
        self.max_depth = max_depth
        self.visited: set[int] = set()

    @property
    def exceeds_depth(self) -> bool:
        return self.depth > self.max_depth

    @contextmanager
    def entering(self) -> Iterator[None]:
        """Enter a nested value: one level deeper for the duration of the block."""
        with self.nested():
            yield

    @contextmanager
    def visiting(self, obj: Any) -> Iterator[bool]:
        """
        Put obj on the active path for the duration of the block.

        Yields False without touching the path if obj is already on it (a cycle), True otherwise.
        """
        key = id(obj)
        if key in self.visited:
            yield False
            return
        self.visited.add(key)
        try:
            yield True
        finally:
            self.visited.discard(key)
