"""
Argclip value conversion.

A declaration is bound to a value type given by the caller (bool, int, float,
str, any other one-argument callable, or list[T] for multi-valued
declarations). That type is resolved once, at declaration time, into a closed
ValueKind tag; the parser then dispatches on the tag instead of on the type
itself.

Contract
- resolve(type) -> Resolution(kind, itemtype, multiple), TypeError for
  unsupported types.
- convert(raw, kind, itemtype) -> Conversion(value, success). Malformed text
  never raises; it reports success=False and the caller decides which fault
  to surface.
"""
import typing
from enum import Enum
from types import GenericAlias
from typing import NamedTuple, Any

from .utils import Unset


class ValueKind(Enum):
    """
    closed set of value kinds a declaration can bind.

    - SWITCH: presence-only boolean; “converting” just sets True.
    - INTEGER / FLOAT / STRING: the builtin scalar parses.
    - CUSTOM: any other callable, invoked with the raw text.
    """
    SWITCH = "switch"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    CUSTOM = "custom"


class Resolution(NamedTuple):
    kind: ValueKind
    itemtype: Any
    multiple: bool


class Conversion(NamedTuple):
    value: Any
    success: bool


_KINDS = {
    bool: ValueKind.SWITCH,
    int: ValueKind.INTEGER,
    float: ValueKind.FLOAT,
    str: ValueKind.STRING,
}


def resolve(type, /):
    """
    Resolve a declared value type into its kind, item type and arity.

    - list[T] (and bare list, meaning list[str]) is multi-valued over T.
    - bool resolves to SWITCH and cannot be multi-valued.
    - any other callable that is not itself a parametrized generic resolves
      to CUSTOM.
    """
    multiple = False
    if type is list:
        type, multiple = str, True
    elif typing.get_origin(type) is list:
        try:
            type, = typing.get_args(type)
        except ValueError:
            raise TypeError("multi-valued types must have exactly one item type") from None
        multiple = True

    if isinstance(type, GenericAlias) or typing.get_origin(type) is not None:
        raise TypeError("value item type cannot be a parametrized generic")

    if type in _KINDS:
        kind = _KINDS[type]
    elif callable(type):
        kind = ValueKind.CUSTOM
    else:
        raise TypeError("value type must be bool, int, float, str, list[...] or a callable")

    if kind is ValueKind.SWITCH and multiple:
        raise TypeError("switch values cannot be multi-valued")

    return Resolution(kind, type, multiple)


def convert(raw, kind, itemtype=Unset, /):
    """
    Convert one raw token into a value of the given kind.

    Returns Conversion(value, True) on success and Conversion(None, False)
    when the text is malformed for the target kind. A switch ignores its
    input and always yields True.
    """
    if kind is ValueKind.SWITCH:
        return Conversion(True, True)
    if not isinstance(raw, str):
        return Conversion(None, False)

    match kind:
        case ValueKind.STRING:
            return Conversion(raw, True)
        case ValueKind.INTEGER:
            parse = int
        case ValueKind.FLOAT:
            parse = float
        case ValueKind.CUSTOM:
            if itemtype is Unset:
                raise TypeError("convert() requires an item type for custom values")
            parse = itemtype
        case _:
            raise TypeError("convert() argument must be a value kind")

    try:
        return Conversion(parse(raw), True)
    except (ValueError, TypeError):
        return Conversion(None, False)
    except Exception:
        # user converters fail in their own ways (decimal.InvalidOperation, ...)
        if kind is not ValueKind.CUSTOM:
            raise
        return Conversion(None, False)


__all__ = (
    "ValueKind",
    "Resolution",
    "Conversion",
    "resolve",
    "convert",
)
