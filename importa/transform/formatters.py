"""
Formatters - total coercion functions from a raw cell value to a normalized one.

Every formatter takes one raw value (str, None, or an already-typed value)
and returns the normalized value or None. None means "could not normalize";
the schema decides whether that is an error (required field) or not.

Formatters never raise. Built-ins are written to be total; user-supplied
formatters are wrapped with ``safe_formatter`` when they are registered.
"""
import functools
import logging
import re
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from importa.core.errors import UnknownFormatterError

logger = logging.getLogger(__name__)

FormatterFn = Callable[[Any], Any]


def _text(value: Any) -> str:
    """Text form of a raw value; None is empty text."""
    if value is None:
        return ""
    return str(value)


def format_raw(value: Any) -> Any:
    """Identity."""
    return value


def format_string(value: Any) -> str:
    """Convert to text and trim leading/trailing whitespace."""
    return _text(value).strip()


# (strptime format, recognizer) in priority order. The first recognizer that
# matches picks the format to try; a failed parse falls through to the next
# matching entry. Ambiguous inputs such as 01-02-2003 resolve month-first
# purely because of this order.
DATE_PATTERNS: Tuple[Tuple[str, "re.Pattern[str]"], ...] = (
    ("%m-%d-%y", re.compile(r"[0-9]{1,2}-[0-9]{1,2}-[0-9]{2}")),  # 1-11-88
    ("%m/%d/%y", re.compile(r"[0-9]{1,2}/[0-9]{1,2}/[0-9]{2}")),  # 01/11/88
    ("%m-%d-%Y", re.compile(r"[0-9]{1,2}-[0-9]{1,2}-[0-9]{4}")),  # 01-11-1988
    ("%m/%d/%Y", re.compile(r"[0-9]{1,2}/[0-9]{1,2}/[0-9]{4}")),  # 01/11/1988
    ("%d-%m-%y", re.compile(r"[0-9]{1,2}-[0-9]{1,2}-[0-9]{2}")),  # 13-01-88
    ("%d/%m/%y", re.compile(r"[0-9]{1,2}/[0-9]{1,2}/[0-9]{2}")),  # 13/01/88
    ("%d-%m-%Y", re.compile(r"[0-9]{1,2}-[0-9]{1,2}-[0-9]{4}")),  # 13-01-1988
    ("%d/%m/%Y", re.compile(r"[0-9]{1,2}/[0-9]{1,2}/[0-9]{4}")),  # 13/01/1988
    ("%Y-%m-%d", re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")),  # 1988-01-11
    ("%Y/%m/%d", re.compile(r"[0-9]{4}/[0-9]{2}/[0-9]{2}")),  # 1988/01/11
    ("%B %d, %Y", re.compile(r"[A-Za-z]+ [0-9]{1,2}, [0-9]{4}")),  # January 11, 1988
    ("%b %d, %Y", re.compile(r"[A-Za-z]{3} [0-9]{1,2}, [0-9]{4}")),  # Jan 11, 1988
    ("%d %B, %Y", re.compile(r"[0-9]{1,2} [A-Za-z]+, [0-9]{4}")),  # 11 January, 1988
    ("%d %b, %Y", re.compile(r"[0-9]{1,2} [A-Za-z]{3}, [0-9]{4}")),  # 11 Jan, 1988
)


def format_date(value: Any) -> Optional[str]:
    """
    Normalize a date to ISO-8601 "YYYY-MM-DD".

    Tries DATE_PATTERNS in order: US month-first forms, then day-first
    forms, then year-first, then named months. Two-digit years pivot the
    way ``%y`` does (69-99 -> 19xx, 00-68 -> 20xx).

    Args:
        value: Date text, or an already-typed date/datetime

    Returns:
        ISO date string, or None if no pattern parses the value
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    text = _text(value)
    for fmt, recognizer in DATE_PATTERNS:
        if not recognizer.fullmatch(text):
            continue
        try:
            return datetime.strptime(text, fmt).date().isoformat()
        except ValueError:
            logger.debug("Date %r matched %s but did not parse", text, fmt)
            continue
    return None


def format_phone(value: Any) -> Optional[str]:
    """
    Normalize a North American phone number to E.164 ("+1XXXXXXXXXX").

    Rules:
    - Strip all non-digits
    - If 11 digits starting with 1 -> drop the leading 1
    - If 10 digits remain -> prefix "+1"
    - Otherwise -> None

    Extensions ("x1234", "ext 1234") are rejected only because their digits
    push the count past 10/11.
    """
    digits = re.sub(r"[^0-9]", "", _text(value))
    if len(digits) == 11 and digits.startswith("1"):
        digits = digits[1:]
    if len(digits) == 10:
        return f"+1{digits}"
    return None


# Single underscores between digits are accepted ("1_000" -> 1000).
_DIGITS = r"[0-9]+(?:_[0-9]+)*"
_INT_PREFIX = re.compile(rf"\s*[+-]?{_DIGITS}")
_FLOAT_PREFIX = re.compile(rf"\s*[+-]?(?:{_DIGITS}(?:\.(?:{_DIGITS})?)?|\.{_DIGITS})(?:[eE][+-]?[0-9]+)?")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_integer(value: Any) -> int:
    """Leading integer of the value's text, or 0 when there is none."""
    parsed = _parse_integer(value)
    return 0 if parsed is None else parsed


def format_float(value: Any) -> float:
    """Leading decimal number of the value's text, or 0.0 when there is none."""
    parsed = _parse_float(value)
    return 0.0 if parsed is None else parsed


def strict_integer(value: Any) -> Optional[int]:
    """Like format_integer, but None when the value has no leading integer."""
    return _parse_integer(value)


def strict_float(value: Any) -> Optional[float]:
    """Like format_float, but None when the value has no leading number."""
    return _parse_float(value)


def _parse_integer(value: Any) -> Optional[int]:
    if _is_number(value):
        try:
            return int(value)
        except (ValueError, OverflowError):  # nan / inf
            return None
    match = _INT_PREFIX.match(_text(value))
    if not match:
        return None
    try:
        return int(match.group())
    except ValueError:  # past sys.get_int_max_str_digits()
        logger.debug("Integer text of %s characters not converted", len(match.group()))
        return None


def _parse_float(value: Any) -> Optional[float]:
    if _is_number(value):
        try:
            return float(value)
        except OverflowError:  # int too large for a float
            return None
    match = _FLOAT_PREFIX.match(_text(value))
    return float(match.group()) if match else None


def format_boolean(value: Any) -> bool:
    """True only for the text "true" (or an already-typed True)."""
    return value is True or (isinstance(value, str) and value == "true")


BUILTIN_FORMATTERS: Dict[str, FormatterFn] = {
    "raw": format_raw,
    "string": format_string,
    "date": format_date,
    "phone": format_phone,
    "integer": format_integer,
    "float": format_float,
    "boolean": format_boolean,
}

STRICT_NUMBER_FORMATTERS: Dict[str, FormatterFn] = {
    "integer": strict_integer,
    "float": strict_float,
}


def safe_formatter(fn: FormatterFn, label: Optional[str] = None) -> FormatterFn:
    """
    Wrap a user-supplied formatter or refinement so it cannot raise.

    An exception inside ``fn`` is logged and the value becomes None, which
    the schema then treats like any other failed coercion.
    """
    if getattr(fn, "__importa_safe__", False):
        return fn
    name = label or getattr(fn, "__name__", repr(fn))

    @functools.wraps(fn)
    def wrapper(value: Any) -> Any:
        try:
            return fn(value)
        except Exception as e:
            logger.warning("Formatter '%s' failed on %r: %s", name, value, e)
            return None

    wrapper.__importa_safe__ = True  # type: ignore[attr-defined]
    return wrapper


class FormatterRegistry:
    """
    Name -> formatter mapping.

    Each schema owns its own registry so registering a custom formatter on
    one schema never leaks into another.
    """

    def __init__(self, formatters: Optional[Dict[str, FormatterFn]] = None):
        self._formatters: Dict[str, FormatterFn] = dict(formatters or {})

    @classmethod
    def with_builtins(cls, strict_numbers: bool = False) -> "FormatterRegistry":
        """Registry seeded with the built-in formatters."""
        formatters = dict(BUILTIN_FORMATTERS)
        if strict_numbers:
            formatters.update(STRICT_NUMBER_FORMATTERS)
        return cls(formatters)

    def register(self, name: str, fn: FormatterFn) -> None:
        """Insert or overwrite the formatter bound to ``name``."""
        if not callable(fn):
            raise TypeError(f"Formatter '{name}' must be callable, got {type(fn).__name__}")
        if fn in BUILTIN_FORMATTERS.values() or fn in STRICT_NUMBER_FORMATTERS.values():
            self._formatters[name] = fn
        else:
            self._formatters[name] = safe_formatter(fn, label=name)

    def resolve(self, name: str) -> FormatterFn:
        """
        Look up a formatter.

        Raises:
            UnknownFormatterError: If nothing is registered under ``name``
        """
        try:
            return self._formatters[name]
        except KeyError:
            raise UnknownFormatterError(name) from None

    def names(self) -> Iterable[str]:
        return tuple(self._formatters)

    def copy(self) -> "FormatterRegistry":
        return FormatterRegistry(self._formatters)

    def __contains__(self, name: object) -> bool:
        return name in self._formatters

    def __len__(self) -> int:
        return len(self._formatters)

    def __repr__(self) -> str:
        return f"<FormatterRegistry: {', '.join(self._formatters)}>"
