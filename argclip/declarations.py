r"""
Argclip declarations: the options and positional arguments a parser accepts.

Overview
- Option[_T]: named declaration with a one-character short key (-k) and a long
  key (--longkey). Boolean options are presence-only switches; list[T] options
  greedily collect every following value token.
- Argument[_T]: positional declaration identified by its name. list[T]
  arguments are variadic and collect every remaining value token.
- switch(...): convenience constructor for a boolean Option.

Metadata (sanitized on construction)
- name: str, non-empty, no whitespace (Option defaults it to the long key).
- descr: Unset | str, non-empty when provided (defaults to None).
- type: bool | int | float | str | list[T] | Callable[[str], T]
  (resolved into a ValueKind tag, see argclip.values).
- default: any value; its presence makes the declaration optional. Switches
  are always optional and default to False. list[T] defaults are copied.

Declarations are immutable once built and carry no parse state: the parser
records what was bound in a per-parse namespace keyed by declaration
identity, so the same declaration can be parsed any number of times.

Quick example:
    >>> from argclip import Option, Argument, switch
    >>> verbose = switch("v", "verbose", "print more")
    >>> count = Option("n", "count", "N", "how many", type=int, default=1)
    >>> files = Argument("files", "input files", type=list[str])
"""
import copy
import itertools
import re

from .utils import *
from .values import ValueKind, resolve, convert


class DeclarationType(type):
    """
    Metaclass of the declarations.

    - every name in a class's __introspectable__ becomes a read-only property
      (see mirror()).
    - __typename__ is the dashed, lowercased class name ("Option" -> "option");
      validation messages and reprs start with it.
    - __repr__ and __rich_repr__ list the introspectable fields in order.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        fields = namespace.get("__introspectable__", ())
        self = super().__new__(cls, name, bases, namespace | {
            "__typename__": re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", name).lower(),
            **{field: mirror(field) for field in fields},
        })

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in type(self).__introspectable__:
                yield field, getattr(self, field)

        @rename("__repr__")
        def __repr__(self):
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(itertools.starmap("{}={!r}".format, self.__rich_repr__())),
            )

        self.__rich_repr__ = __rich_repr__
        self.__repr__ = __repr__
        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the fields shared by every declaration.

    - name: required non-empty string without whitespace, not starting with '-'.
    - descr: Unset or a non-empty string; Unset becomes None.
    - type: resolved through argclip.values.resolve (TypeError when unsupported).
    - default: a list copy for multi-valued declarations; Unset keeps the
      declaration required.

    Mutates the metadata dict in place and adds 'kind', 'itemtype' and
    'multiple'.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif not re.fullmatch(r"[^\s-]\S*", name):
        raise ValueError(f"{cls.__typename__} 'name' cannot contain whitespace or start with '-'")
    metadata["name"] = name

    match descr := metadata["descr"]:
        case UnsetType():
            metadata["descr"] = None
        case str() if descr.strip():
            metadata["descr"] = descr.strip()
        case str():
            raise ValueError(f"{cls.__typename__} description is blank")
        case _:
            raise TypeError(f"{cls.__typename__} description must be a string, got {type(descr).__name__}")

    try:
        metadata |= resolve(metadata["type"])._asdict()
    except TypeError as exception:
        raise TypeError(f"{cls.__typename__} 'type' is not supported: {exception}") from None

    if metadata["kind"] is ValueKind.SWITCH:
        # presence-only: never required, absent means False
        metadata["default"] = bool(coalesce(metadata["default"], False))
    elif metadata["multiple"] and metadata["default"] is not Unset:
        if isinstance(default := metadata["default"], str):
            raise TypeError(f"{cls.__typename__} multi-valued 'default' must be a sequence, not a string")
        try:
            metadata["default"] = list(default)
        except TypeError:
            raise TypeError(f"{cls.__typename__} multi-valued 'default' must be iterable") from None

    metadata["optional"] = metadata["default"] is not Unset


class Declaration(metaclass=DeclarationType):
    """
    Abstract base of Option and Argument.

    Exposes identity (type tag), name, description and optionality, and the
    single conversion entry point used by the parser.
    """

    __introspectable__ = (
        "name",
        "descr",
        "type",
        "default",
        "optional",
    )

    def __new__(cls, *args, **kwargs):
        if cls is Declaration:
            raise TypeError("declaration is abstract, use an option or an argument")
        return super().__new__(cls)

    @property
    def kind(self):
        """ValueKind tag the parser dispatches on."""
        return self._kind

    @property
    def multiple(self):
        """True for list[T] declarations (greedy or variadic)."""
        return self._multiple

    @property
    def switch(self):
        """True for presence-only boolean options."""
        return self._kind is ValueKind.SWITCH

    @property
    def label(self):
        """Human-readable reference used in fault messages."""
        return self._name

    def convert(self, raw, /):
        """
        Convert one raw token into this declaration's item type.

        Returns a Conversion(value, success); never raises for malformed text.
        """
        return convert(raw, self._kind, self._itemtype)

    def fallback(self):
        """
        Value reported when the declaration was not bound by a parse:
        False for a switch, its default when optional, otherwise an empty
        list (multi-valued) or None.
        """
        if self._kind is ValueKind.SWITCH:
            return False
        if self._optional:
            return self.default
        return [] if self._multiple else None

    def _build(self, metadata):
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def __copy__(self):
        # constructors take the metadata positionally, so bypass them
        clone = object.__new__(type(self))
        clone.__dict__.update(self.__dict__)
        return clone

    def __deepcopy__(self, memo, /):
        clone = object.__new__(type(self))
        memo[id(self)] = clone
        clone.__dict__.update(copy.deepcopy(self.__dict__, memo))
        return clone


class Option[_T](Declaration):
    """
    Named declaration bound to a short key and a long key.

    Arity follows the value type
    - bool: presence switch, no value token, always optional (default False).
    - T: exactly one following value token.
    - list[T]: every following value token up to the next key-shaped token.
    """

    __introspectable__ = (
        "key",
        "longkey",
        "name",
        "descr",
        "type",
        "default",
        "optional",
    )

    def __new__(cls, key, longkey, name=Unset, descr=Unset, /, *, type=str, default=Unset):
        """
        Construct an Option.

        Parameters
        - key: str
          Single character used as -k (not whitespace, not '-').
        - longkey: str
          Name used as --longkey (no whitespace or '=', not starting with '-').
        - name: Unset | str
          Value label shown in usage (e.g., -n <count>); defaults to longkey.
        - descr: Unset | str
          Short description for usage.
        - type: value type (bool, int, float, str, list[T] or a callable).
        - default: any; makes the option optional when given.
        """
        if not isinstance(key, str):
            raise TypeError(f"{cls.__typename__} 'key' must be a string")
        elif not re.fullmatch(r"[^\s-]", key):
            raise ValueError(f"{cls.__typename__} 'key' must be a single non-blank character other than '-'")

        if not isinstance(longkey, str):
            raise TypeError(f"{cls.__typename__} 'longkey' must be a string")
        elif not re.fullmatch(r"[^\s=-][^\s=]*", longkey):
            raise ValueError(f"{cls.__typename__} 'longkey' must be a non-empty name without whitespace or '='")

        metadata = {
            "key": key,
            "longkey": longkey,
            "name": coalesce(name, longkey),
            "descr": descr,
            "type": type,
            "default": default,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        self._build(metadata)
        return self

    @property
    def label(self):
        return "-%s(%s)" % (self._key, self._longkey)


class Argument[_T](Declaration):
    """
    Positional declaration identified by its name.

    - T: binds one value token, in declaration order.
    - list[T]: variadic; binds every remaining value token. It must be the last
      argument of its parser.
    """

    def __new__(cls, name, descr=Unset, /, *, type=str, default=Unset):
        """
        Construct an Argument.

        Parameters
        - name: str
          Positional name shown in usage; unique within a parser.
        - descr: Unset | str
          Short description for usage.
        - type: value type (int, float, str, list[T] or a callable; not bool).
        - default: any; makes the argument optional when given.
        """
        metadata = {
            "name": name,
            "descr": descr,
            "type": type,
            "default": default,
        }
        _sanitize_metadata(cls, metadata)
        if metadata["kind"] is ValueKind.SWITCH:
            raise TypeError(f"{cls.__typename__} cannot be a boolean switch")

        self = super().__new__(cls)
        self._build(metadata)
        return self


def switch(key, longkey, descr=Unset, /, default=False):
    """
    Build a presence-only boolean Option (-k / --longkey).

    Switches are always optional. default is kept as metadata only: an
    absent switch always reads False.
    """
    return Option(key, longkey, Unset, descr, type=bool, default=default)


__all__ = (
    "Declaration",
    "Option",
    "Argument",
    "switch",
)

# the metaclass is an implementation detail
del DeclarationType
