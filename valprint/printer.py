"""
Deterministic text rendering of arbitrary values for debugging and test diffs.

The Printer walks a value once, streaming text through a TraversalState. Every value is tagged
with a Shape and rendered by the matching method; nested values go through the depth and cycle
guards, so self-referential and unbounded data always terminate with visible markers:

    >>> sprint([2, 3, 4])
    '[]{2, 3, 4}'
    >>> sprint({"b": 2, "a": 1})
    '{"a": 1, "b": 2}'
    >>> loop = [1]
    >>> loop.append(loop)
    >>> sprint(loop)
    '[]{1, <cycle>}'
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import inspect
import io
import logging
import sys
from itertools import islice
from typing import Any, Iterable, TextIO, Tuple

# Local ----------------------------------------------------------------------------------------------------------------
from .layout import SupportsWrite
from .options import Formatter, get_options
from .ordering import sort_items, sort_values
from .shapes import Shape, classify, is_public, is_zero, record_fields, unwrap
from .state import CYCLE, MAX_DEPTH, TraversalState
from .utils import default_text, quote, shape_name

logger = logging.getLogger(__name__)

NIL = "nil"
REF = "&"


# Classes --------------------------------------------------------------------------------------------------------------


class Printer:
    """
    Shape-driven renderer bound to one TraversalState.

    Decides what text to emit and when to recurse; all whitespace and line breaks are left to
    the state's Layout.
    """

    def __init__(self, state: TraversalState, formatter: Formatter):
        self.state = state
        self.formatter = formatter
        self._handlers = {
            Shape.ABSENT: self._print_absent,
            Shape.ENUM: self._print_enum,
            Shape.SCALAR: self._print_scalar,
            Shape.TEXT: self._print_text,
            Shape.REFERENCE: self._print_reference,
            Shape.RECORD: self._print_record,
            Shape.SEQUENCE: self._print_sequence,
            Shape.MAPPING: self._print_mapping,
            Shape.SET: self._print_set,
            Shape.OPAQUE: self._print_opaque,
            Shape.UNKNOWN: self._print_unknown,
        }

    def print(self, value: Any) -> None:
        """Render value at the current depth."""
        value = self._unwrap(value)
        if value is _WRAPPER_LOOP:
            self.state.text(CYCLE)
            return

        if self.state.exceeds_depth:
            self.state.text(MAX_DEPTH)
            return

        self._handlers[classify(value)](value)

    def print_nested(self, value: Any) -> None:
        """Render value one level deeper."""
        with self.state.entering():
            self.print(value)

    # Scalars ------------------------------------------

    def _print_absent(self, value: None) -> None:
        self.state.text(NIL)

    def _print_enum(self, value: Any) -> None:
        member = value.name if value.name is not None else default_text(value.value)
        self.state.text(f"{self._type_name(value)}.{member}")

    def _print_scalar(self, value: Any) -> None:
        self.state.text(default_text(value))

    def _print_text(self, value: str | bytes | bytearray) -> None:
        self.state.text(quote(value))

    def _print_opaque(self, value: Any) -> None:
        self.state.text(f"{self._type_name(value)}({default_text(value)})")

    def _print_unknown(self, value: Any) -> None:
        self.state.text(f"<unknown kind: {self._type_name(value)}>")

    # References ---------------------------------------

    def _print_reference(self, value: Any) -> None:
        # Dead weak references resolve to None and render as &nil
        self.state.text(REF)
        self.print_nested(value())

    # Composites ---------------------------------------

    def _print_sequence(self, value: abc.Sequence) -> None:
        with self.state.visiting(value) as fresh:
            if not fresh:
                self.state.text(CYCLE)
                return

            size = f"{len(value)}" if isinstance(value, (tuple, range)) else ""
            try:
                items, had_more = _fmt_head(value, self.formatter.max_elements)
            except Exception as e:
                self._print_broken(value, e)
                return

            self.state.open(f"[{size}]{{", empty=not items)
            for i, item in enumerate(items):
                self.state.before_item(i)
                self.print_nested(item)
                self.state.after_item()
            if had_more:
                self.state.truncated(len(items))
            self.state.close("}")

    def _print_set(self, value: abc.Set) -> None:
        with self.state.visiting(value) as fresh:
            if not fresh:
                self.state.text(CYCLE)
                return

            try:
                elements = sort_values(value)
            except Exception as e:
                self._print_broken(value, e)
                return

            items, had_more = _fmt_head(elements, self.formatter.max_elements)
            self.state.open(f"{self._type_name(value)}{{", empty=not items)
            for i, item in enumerate(items):
                self.state.before_item(i)
                self.print_nested(item)
                self.state.after_item()
            if had_more:
                self.state.truncated(len(items))
            self.state.close("}")

    def _print_mapping(self, value: abc.Mapping) -> None:
        with self.state.visiting(value) as fresh:
            if not fresh:
                self.state.text(CYCLE)
                return

            try:
                pairs = sort_items(value.items())
            except Exception as e:
                self._print_broken(value, e)
                return

            items, had_more = _fmt_head(pairs, self.formatter.max_elements)
            self.state.open("{", empty=not items)
            for i, (key, item) in enumerate(items):
                self.state.before_item(i)
                self.print_nested(key)
                self.state.colon()
                self.print_nested(item)
                self.state.after_item()
            if had_more:
                self.state.truncated(len(items))
            self.state.close("}")

    def _print_record(self, value: Any) -> None:
        with self.state.visiting(value) as fresh:
            if not fresh:
                self.state.text(CYCLE)
                return

            excluded = self.formatter.excluded(type(value))
            members = [
                (name, member)
                for name, member in record_fields(value)
                if is_public(name)
                and name not in excluded
                and (self.formatter.show_zero or not is_zero(member))
            ]

            self.state.open(f"{self._type_name(value)}{{", empty=not members)
            for i, (name, member) in enumerate(members):
                self.state.before_item(i)
                with self.state.nested():
                    self.state.label(name)
                self.print_nested(member)
                self.state.after_item()
            self.state.close("}")

    # Private Methods ----------------------------------

    def _print_broken(self, value: Any, exc: Exception) -> None:
        """Placeholder for a container whose iteration raised."""
        self.state.text(f"<{self._type_name(value)} (iteration failed: {type(exc).__name__})>")

    def _type_name(self, value: Any) -> str:
        return shape_name(type(value), qualified=not self.formatter.omit_namespace)

    @staticmethod
    def _unwrap(value: Any) -> Any:
        """Strip indirections without counting depth; a wrapper that wraps itself is a loop."""
        seen = set()
        while classify(value) is Shape.INDIRECTION:
            if id(value) in seen:
                return _WRAPPER_LOOP
            seen.add(id(value))
            value = unwrap(value)
        return value


# Methods --------------------------------------------------------------------------------------------------------------


def sprint(value: Any, *, formatter: Formatter | None = None) -> str:
    """
    Render value to a new string.

    Args:
        value: Any Python object.
        formatter: Options to use; the module default (see configure()) if None.

    Returns:
        The rendering. Expanded renderings end with a newline, compact ones do not.

    Examples:
        >>> sprint((1, "x", None))
        '[3]{1, "x", nil}'
        >>> sprint(3 - 4j)
        '(3-4i)'
    """
    buf = io.StringIO()
    fprint(value, buf, formatter=formatter)
    return buf.getvalue()


def fprint(value: Any, sink: SupportsWrite, *, formatter: Formatter | None = None) -> None:
    """
    Render value, writing text fragments to sink as they are produced.

    Output is streamed: if the sink fails, the text written so far stays written, the rest of
    the traversal runs without writing, and the first sink exception is raised at the end.

    Args:
        value: Any Python object.
        sink: Object with a write(str) method.
        formatter: Options to use; the module default (see configure()) if None.

    Raises:
        TypeError: If formatter is not a Formatter or sink has no write() method.
        Exception: The first exception raised by sink.write().
    """
    if formatter is None:
        formatter = get_options()
    if not isinstance(formatter, Formatter):
        raise TypeError(f"formatter must be a Formatter, but got {shape_name(formatter, qualified=False)}")
    if not isinstance(sink, SupportsWrite):
        raise TypeError(f"sink must have a write() method, but got {shape_name(sink, qualified=False)}")

    max_depth = min(formatter.max_depth, _depth_budget())
    if max_depth < formatter.max_depth:
        logger.debug("max_depth %d exceeds the recursion limit, using %d", formatter.max_depth, max_depth)

    state = TraversalState(
        sink,
        max_depth=max_depth,
        compact=formatter.compact,
        indent=formatter.indent,
        max_width=formatter.max_width,
    )
    Printer(state, formatter).print(value)

    if state.col != 0 and not state.compact:
        state.newline()
    if state.error is not None:
        raise state.error


def pprint(value: Any, *, formatter: Formatter | None = None, file: TextIO | None = None) -> None:
    """Render value to sys.stdout, or to file if given."""
    fprint(value, sys.stdout if file is None else file, formatter=formatter)


# Private Methods ------------------------------------------------------------------------------------------------------

_WRAPPER_LOOP = object()

# Python frames used per nesting level: print -> shape method -> print_nested
_FRAMES_PER_LEVEL = 3
# Frames kept free for leaf work: sorting, str(), sink writes
_FRAME_RESERVE = 100


def _depth_budget() -> int:
    """Deepest nesting level printable from the current call stack within the recursion limit."""
    frame, used = inspect.currentframe(), 0
    while frame is not None:
        used += 1
        frame = frame.f_back
    return max((sys.getrecursionlimit() - used - _FRAME_RESERVE) // _FRAMES_PER_LEVEL, 1)


def _fmt_head(iterable: Iterable[Any], n: int) -> Tuple[list[Any], bool]:
    """Take up to n items (all if n is 0) and indicate whether there were more items."""
    if n <= 0:
        return list(iterable), False
    buf = list(islice(iter(iterable), n + 1))
    if len(buf) <= n:
        return buf, False
    return buf[:n], True
