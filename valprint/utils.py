"""
Valprint utilities shared across the package.

Contains naming and text helpers used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def shape_name(obj: Any, qualified: bool = True) -> str:
    """
    Get the shape name of an object or a class.

    Returns the type name whether given an instance or the class itself. Builtin types are never
    qualified, so both `shape_name(10)` and `shape_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.
        qualified (bool): If true, prefix user types with their module (the shape namespace).
            If false, return the bare class name without any enclosing class or function.

    Returns:
        str: The shape name.

    Examples:
        Builtin instance and class:
            >>> shape_name(10)
            'int'
            >>> shape_name(int)
            'int'

        Library class, with and without namespace:
            >>> from collections import OrderedDict
            >>> shape_name(OrderedDict())
            'collections.OrderedDict'
            >>> shape_name(OrderedDict, qualified=False)
            'OrderedDict'
    """

    # Check if the obj is an instance or a class
    cls = obj if isinstance(obj, type) else type(obj)

    name = getattr(cls, "__qualname__", None) or cls.__name__
    module = getattr(cls, "__module__", None)

    if not qualified:
        # Drop enclosing classes and functions too: "outer.<locals>.Player" -> "Player"
        return name.rpartition(".")[2]
    if not module or module == "builtins":
        return name
    return module + "." + name


def safe_str(obj: Any) -> str:
    """
    Defensive str() call - handle broken __str__ methods gracefully
    """
    try:
        return str(obj)
    except Exception as e:
        return f"<{shape_name(obj, qualified=False)} object (str failed: {type(e).__name__})>"


def default_text(obj: Any) -> str:
    """
    Default textual form of a value.

    Complex numbers use the explicitly signed '(re+imi)' form, floats use fmt_float(),
    everything else falls back to str().

    Examples:
        >>> default_text(7j)
        '(0+7i)'
        >>> default_text(3 - 4j)
        '(3-4i)'
        >>> default_text("b")
        'b'
    """
    if isinstance(obj, bool):
        return "true" if obj else "false"
    if type(obj) is float:
        return fmt_float(obj)
    if type(obj) is complex:
        return fmt_complex(obj)
    return safe_str(obj)


def fmt_float(x: float) -> str:
    """
    Shortest text for a float.

    Integral values below 1e21 print without a fractional part, larger ones and fractions
    use the shortest round-trip repr. Infinities are signed.

    Examples:
        >>> fmt_float(1.5), fmt_float(3.0), fmt_float(-0.0)
        ('1.5', '3', '-0')
        >>> fmt_float(float("inf")), fmt_float(float("nan"))
        ('+Inf', 'NaN')
    """
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "+Inf" if x > 0 else "-Inf"
    if x.is_integer() and abs(x) < 1e21:
        text = str(int(x))
        # int() drops the sign of negative zero
        return "-0" if text == "0" and math.copysign(1.0, x) < 0 else text
    return repr(x)


def fmt_complex(z: complex) -> str:
    """Complex number as '(re+imi)' or '(re-imi)' with an explicit sign."""
    im = z.imag
    if math.isnan(im):
        sign = "+"
    else:
        sign = "-" if math.copysign(1.0, im) < 0 else "+"
    return f"({fmt_float(z.real)}{sign}{fmt_float(abs(im)).lstrip('+')}i)"


def quote(text: str | bytes | bytearray) -> str:
    """
    Double-quoted form of text with backslash escapes.

    Printable characters are kept as is. Bytes are prefixed with 'b' and escape everything
    outside printable ASCII.
    """
    if isinstance(text, str):
        return '"' + "".join(_escape_char(ch) for ch in text) + '"'
    return 'b"' + "".join(_escape_byte(b) for b in bytes(text)) + '"'


# Private Methods ------------------------------------------------------------------------------------------------------

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def _escape_char(ch: str) -> str:
    if ch in _ESCAPES:
        return _ESCAPES[ch]
    if ch.isprintable():
        return ch
    code = ord(ch)
    if code < 0x80:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def _escape_byte(b: int) -> str:
    ch = chr(b)
    if ch in _ESCAPES:
        return _ESCAPES[ch]
    if 0x20 <= b < 0x7F:
        return ch
    return f"\\x{b:02x}"
