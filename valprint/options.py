"""
Valprint configuration: Formatter options, presets and module defaults.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import logging
import sys
from dataclasses import dataclass, field, replace
from typing import Any, Literal, Mapping, TextIO

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .shapes import is_record_type
from .utils import shape_name

logger = logging.getLogger(__name__)

DEFAULT_INDENT = "    "
DEFAULT_MAX_DEPTH = 100

Preset = Literal["default", "expanded", "debug", "brief"]


# Classes --------------------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class Formatter:
    """
    Formatting options for valprint, plus the entry points that use them.

    Immutable: derive variants with merge() and exclude(). Instances can be shared between
    threads and reused across calls; all per-call state lives in a TraversalState.

    Attributes:
        show_zero: Show record members holding their zero value (None, 0, "", empty containers).
        max_width: Break lines before reaching this column; 0 means unbounded.
        compact: One line per composite if True; one element per indented line otherwise.
        indent: Indentation unit for expanded mode. Empty means 4 spaces.
        max_depth: Nesting level past which values render as <maxdepth>. Non-positive means 100.
        max_elements: Elements shown per sequence, mapping or set before '...'; 0 means all.
        omit_namespace: Render record type names without their module.
        exclusions: Record type -> member names never shown. Applies to subclasses too.

    Examples:
        >>> Formatter().sprint([2, 3, 4])
        '[]{2, 3, 4}'

        >>> Formatter(max_elements=2).sprint([2, 3, 4])
        '[]{2, 3, ...}'

        >>> print(Formatter(compact=False).sprint({"b": 2, "a": 1}), end="")
        {
            "a": 1,
            "b": 2,
        }

        >>> @dataclass
        ... class Player:
        ...     name: str
        ...     token: str
        >>> Formatter(omit_namespace=True).exclude(Player, "token").sprint(Player("Al", "secret"))
        'Player{name: "Al"}'
    """
    show_zero: bool = False
    max_width: int = 0
    compact: bool = True
    indent: str = DEFAULT_INDENT
    max_depth: int = DEFAULT_MAX_DEPTH
    max_elements: int = 0
    omit_namespace: bool = False
    exclusions: Mapping[type, frozenset[str]] = field(default_factory=frozendict)

    def __post_init__(self):
        """Validate and normalize fields"""
        for name in ("show_zero", "compact", "omit_namespace"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise TypeError(f"{name} must be bool, but got {shape_name(value, qualified=False)}")

        for name in ("max_width", "max_depth", "max_elements"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be int, but got {shape_name(value, qualified=False)}")

        if self.max_width < 0:
            raise ValueError(f"max_width must be >=0, but got {self.max_width}")
        if self.max_elements < 0:
            raise ValueError(f"max_elements must be >=0, but got {self.max_elements}")
        if self.max_depth <= 0:
            object.__setattr__(self, "max_depth", DEFAULT_MAX_DEPTH)

        if not isinstance(self.indent, str):
            raise TypeError(f"indent must be str, but got {shape_name(self.indent, qualified=False)}")
        if not self.indent:
            object.__setattr__(self, "indent", DEFAULT_INDENT)

        object.__setattr__(self, "exclusions", _validate_exclusions(self.exclusions))

    # Presets ------------------------------------------

    @classmethod
    def default(cls) -> "Formatter":
        """Compact, unbounded width, zero values hidden. Good for test diffs."""
        return cls()

    @classmethod
    def expanded(cls) -> "Formatter":
        """One element per line, indented by 4 spaces."""
        return cls(compact=False)

    @classmethod
    def debug(cls) -> "Formatter":
        """Expanded with zero values shown and shallow limits, for interactive inspection."""
        return cls(compact=False, show_zero=True, max_depth=8, max_elements=32)

    @classmethod
    def brief(cls) -> "Formatter":
        """Compact and short, for log lines."""
        return cls(omit_namespace=True, max_depth=4, max_elements=8, max_width=0)

    @classmethod
    def from_preset(cls, preset: Preset) -> "Formatter":
        factories = {
            "default": cls.default,
            "expanded": cls.expanded,
            "debug": cls.debug,
            "brief": cls.brief,
        }
        if preset not in factories:
            raise ValueError(f"preset must be one of {', '.join(factories)}, but got {preset!r}")
        return factories[preset]()

    # Methods and Properties ---------------------

    def merge(self, **overrides: Any) -> "Formatter":
        """
        Create a new Formatter with the given fields overridden.

        Raises:
            TypeError: On unknown option names or invalid value types.
            ValueError: On out of range values.
        """
        return replace(self, **overrides)

    def exclude(self, shape: type, *names: str) -> "Formatter":
        """
        Create a new Formatter that never shows the named members of a record type.

        Exclusions registered on a base class apply to its subclasses.

        Args:
            shape: A record type: dataclass, named tuple, attrs class or plain class.
            names: Member names to hide.

        Returns:
            New Formatter with the exclusions added.

        Raises:
            TypeError: If shape is not a record type or a name is not a str.
        """
        if not is_record_type(shape):
            raise TypeError(f"field exclusions apply to record types only, but got {_fmt_shape(shape)}")
        for name in names:
            if not isinstance(name, str):
                raise TypeError(f"excluded field name must be str, but got {shape_name(name, qualified=False)}")

        exclusions = dict(self.exclusions)
        exclusions[shape] = exclusions.get(shape, frozenset()) | frozenset(names)
        return replace(self, exclusions=exclusions)

    def excluded(self, shape: type) -> frozenset[str]:
        """Member names excluded for a record type, including those registered on its bases."""
        if not self.exclusions:
            return frozenset()
        names = frozenset()
        for base in shape.__mro__:
            names |= self.exclusions.get(base, frozenset())
        return names

    # Entry points ---------------------------------

    def sprint(self, value: Any) -> str:
        """Render value to a new string."""
        from .printer import sprint

        return sprint(value, formatter=self)

    def fprint(self, value: Any, sink) -> None:
        """Render value to a text sink. Raises the first sink write error after rendering."""
        from .printer import fprint

        fprint(value, sink, formatter=self)

    def pprint(self, value: Any, file: TextIO | None = None) -> None:
        """Render value to sys.stdout, or to file if given."""
        self.fprint(value, sys.stdout if file is None else file)


# Private Methods ------------------------------------------------------------------------------------------------------


def _validate_exclusions(exclusions: Any) -> Mapping[type, frozenset[str]]:
    """Check and freeze an exclusions mapping."""
    if not isinstance(exclusions, abc.Mapping):
        raise TypeError(f"exclusions must be a mapping, but got {shape_name(exclusions, qualified=False)}")

    frozen = {}
    for shape, names in exclusions.items():
        if not is_record_type(shape):
            raise TypeError(f"field exclusions apply to record types only, but got {_fmt_shape(shape)}")
        if isinstance(names, str):
            names = (names,)
        if not isinstance(names, abc.Iterable):
            raise TypeError(f"excluded fields of {shape_name(shape, qualified=False)} must be str names, "
                            f"but got {shape_name(names, qualified=False)}")
        names = frozenset(names)
        for name in names:
            if not isinstance(name, str):
                raise TypeError(f"excluded field name must be str, but got {shape_name(name, qualified=False)}")
        frozen[shape] = names
    return frozendict(frozen)


def _fmt_shape(shape: Any) -> str:
    if isinstance(shape, type):
        return f"type {shape_name(shape, qualified=False)}"
    return f"{shape_name(shape, qualified=False)} instance"


# Module defaults ------------------------------------------------------------------------------------------------------

_options: Formatter = Formatter()


def configure(preset: Preset | None = None, **overrides: Any) -> Formatter:
    """
    Set the module default Formatter used when no formatter is passed to the entry points.

    Args:
        preset: Start from a preset; None starts from the current defaults.
        overrides: Formatter fields to override.

    Returns:
        The new default Formatter.

    Examples:
        >>> _ = configure(preset="expanded", max_elements=10)
        >>> get_options().compact, get_options().max_elements
        (False, 10)
        >>> _ = configure(preset="default")
    """
    global _options
    base = _options if preset is None else Formatter.from_preset(preset)
    _options = base.merge(**overrides)
    logger.debug("default formatter set to %r", _options)
    return _options


def get_options() -> Formatter:
    """Current module default Formatter."""
    return _options
