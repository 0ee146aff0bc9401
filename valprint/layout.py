"""
Line layout for streamed output.

Layout turns text fragments into lines: it tracks the output column, indents lines in expanded
mode, breaks lines at max_width and owns all separators, so callers never place whitespace
themselves. Writes go straight to the sink; the first sink failure is kept and later writes
are skipped.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
from contextlib import contextmanager
from typing import Iterator, Protocol, runtime_checkable

# Third-party ----------------------------------------------------------------------------------------------------------
from wcwidth import wcswidth, wcwidth

logger = logging.getLogger(__name__)

ELLIPSIS = "..."


# Classes --------------------------------------------------------------------------------------------------------------


@runtime_checkable
class SupportsWrite(Protocol):
    """Protocol for text sinks: io.StringIO, sys.stdout, open files."""

    def write(self, s: str, /) -> object: ...


class Layout:
    """
    Column-aware writer with compact and expanded modes.

    Compact mode keeps each composite on one logical line, elements separated by ", ".
    Expanded mode puts one element per line, indented by `indent` per depth level, each
    followed by a comma. In both modes a positive max_width forces a line break before any
    fragment that would reach that column.

    Attributes:
        compact: Single-line rendering if True, one element per line otherwise.
        indent: Text repeated once per depth level at the start of expanded lines.
        max_width: Column limit; 0 disables width breaks.
        depth: Current indentation level.
        col: Current output column in terminal cells.
        error: First exception raised by the sink, if any.
    """

    def __init__(self, sink: SupportsWrite, *, compact: bool = True, indent: str = "    ", max_width: int = 0):
        self.sink = sink
        self.compact = compact
        self.indent = indent
        self.max_width = max_width
        self.depth = 0
        self.col = 0
        self.error: Exception | None = None
        self._pending_space = False

    # Fragments ----------------------------------------

    def text(self, fragment: str) -> None:
        """
        Emit a text fragment.

        Breaks the line first if the fragment, with any pending space, would reach max_width,
        then indents if the fragment starts an expanded line.
        """
        if not fragment:
            return

        starts_line = fragment.startswith("\n")
        lead = " " if self._pending_space and not starts_line else ""
        self._pending_space = False

        if not starts_line and self._over_width(lead + fragment.split("\n", 1)[0]):
            self.newline()
            lead = ""

        if not self.compact and self.col == 0 and not starts_line:
            pad = self.indent * max(self.depth, 0)
            self._write(pad)
            self.col = text_width(pad)

        fragment = lead + fragment
        self._write(fragment)
        _, breaks, tail = fragment.rpartition("\n")
        self.col = text_width(tail) if breaks else self.col + text_width(fragment)

    def newline(self) -> None:
        self._pending_space = False
        self._write("\n")
        self.col = 0

    def space(self) -> None:
        """
        Single space before the next fragment.

        Deferred until that fragment is known: if the two would reach max_width the space is
        dropped and the line breaks instead, so lines never end with a space.
        """
        self._pending_space = True

    def label(self, name: str) -> None:
        """Member name followed by the name/value separator, never split across lines."""
        self.text(name + ":")
        self.space()

    def colon(self) -> None:
        """Key/value separator, always ': ' whatever the mode."""
        self.text(":")
        self.space()

    def separator(self) -> None:
        """Element separator: ',' then a space (compact) or a newline (expanded)."""
        self.text(",")
        if self.compact:
            self.space()
        else:
            self.newline()

    # Composites ---------------------------------------

    def open(self, token: str, empty: bool = False) -> None:
        """Open a composite; expanded mode moves its elements to the next line."""
        self.text(token)
        if not self.compact and not empty:
            self.newline()

    def close(self, token: str) -> None:
        self.text(token)

    def before_item(self, index: int) -> None:
        if index and self.compact:
            self.separator()

    def after_item(self) -> None:
        if not self.compact:
            self.separator()

    def truncated(self, index: int) -> None:
        """Ellipsis standing for the elements past the element cap."""
        if self.compact:
            self.before_item(index)
            self.text(ELLIPSIS)
        else:
            with self.nested():
                self.text(ELLIPSIS)
            self.newline()

    @contextmanager
    def nested(self) -> Iterator[None]:
        """Indent one level deeper for the duration of the block."""
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    # Private Methods ----------------------------------

    def _over_width(self, fragment: str) -> bool:
        return self.max_width > 0 and self.col > 0 and self.col + text_width(fragment) >= self.max_width

    def _write(self, s: str) -> None:
        if self.error is not None:
            return
        try:
            self.sink.write(s)
        except Exception as e:
            logger.debug("sink write failed, skipping further output: %r", e)
            self.error = e


# Methods --------------------------------------------------------------------------------------------------------------


def text_width(text: str) -> int:
    """
    Number of terminal cells needed to display text.

    Wide East Asian characters take two cells, combining marks none. Characters without a
    defined width (control characters) count as one cell each.

    Examples:
        >>> text_width("abc"), text_width("日本")
        (3, 4)
    """
    width = wcswidth(text)
    if width >= 0:
        return width
    return sum(w if (w := wcwidth(ch)) >= 0 else 1 for ch in text)
