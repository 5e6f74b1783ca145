"""
Argclip faults (declaration, parse and accessor errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by the moment they can happen so logs/searches stay predictable.
- ClipException: base type that carries message + options and knows how to
  render itself (rich) or raise itself, depending on the “shell” option.
- trigger(): central entry point to surface any fault.

When faults happen
- declaration-time (Parser.add): DuplicateKeyError, DuplicateNameError,
  VariadicAlreadyClosedError. Raised to the registering caller.
- parse-time (Parser.parse): UnknownOptionError, TooFewArgumentsError,
  InvalidTypeError, MissingRequiredError. Never raised; the parser collects
  them, exposes their text through Parser.error and, when configured to show
  errors, renders them on stderr.
- accessor-time (Parser.option/Parser.argument): TypeMismatchError. Raised.

Integration
- Parse code builds a fault and hands it to Parser.trigger(fault), which stamps
  runtime options (tool, colorful, fancy, shell) through __replace__.
- Host applications can restyle renders with a __styles__ mapping and relabel
  codes with a __codes__ mapping, both looked up in __main__.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    Stable numeric fault identifiers.

    The hundreds digit groups them by the moment they can happen:
    - parse-time (111xx)
      • UNKNOWN_OPTION, TOO_FEW_ARGUMENTS, INVALID_TYPE, MISSING_REQUIRED
    - declaration-time (131xx)
      • DUPLICATE_KEY, DUPLICATE_NAME, VARIADIC_ALREADY_CLOSED
    - accessor-time (141xx)
      • TYPE_MISMATCH
    """
    # parse
    UNKNOWN_OPTION              = 11111
    TOO_FEW_ARGUMENTS           = 11112
    INVALID_TYPE                = 11113
    MISSING_REQUIRED            = 11114

    # declaration
    DUPLICATE_KEY               = 13101
    DUPLICATE_NAME              = 13102
    VARIADIC_ALREADY_CLOSED     = 13103

    # access
    TYPE_MISMATCH               = 14101

    def normalize(self):
        """
        Label shown in renders: __main__.__codes__[self] when the host maps
        this code, the number otherwise.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ClipException(Exception):
    """
    base fault carrying a message plus free-form render options.

    class-level defaults
    - code: FaultCode identifying the fault kind.
    - title: short lowercased title shown in the render header.

    common options
    - tool: the Parser that surfaced the fault (names the program in renders).
    - shell: when true, __trigger__ prints instead of raising.
    - colorful, fancy: render styling switches.
    - hint: one actionable sentence shown under the message.
    - declaration, token, index: context about where the fault happened.
    """
    code = Unset
    title = "error"

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)

        palette = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def paint(fragment, role):
            return Text(str(fragment), palette[role] if colorful else "")

        tool = self.options.get("tool")
        header = Text.assemble(
            "[ ",
            paint(getattr(main, "__prog__", getattr(tool, "name", None) or "argclip"), "prog-name"),
            " - ",
            paint(self.code.normalize() if self.code else "?", "code"),
            " | ",
            paint(self.options.get("title", self.title).title(), "error-title"),
            " ]",
        )

        body = [paint(self.message, "error-message")]
        if hint := self.options.get("hint"):
            body.append(paint(" -> ", "hint-arrow") + paint(hint, "hint"))

        if self.options.get("fancy", False):
            return Panel(Group(*body), title=header, title_align="left")
        return Group(header, *body)

    def __trigger__(self):
        if self.options.get("shell", False):
            console.print(self, soft_wrap=True)
        else:
            raise self

    def __replace__(self, *positional, **overrides):
        if positional:
            raise TypeError("__replace__() takes keyword arguments only")
        return type(self)(self.message, **(dict(self.options) | overrides))


class UnknownOptionError(ClipException):
    code = FaultCode.UNKNOWN_OPTION
    title = "unknown option"


class TooFewArgumentsError(ClipException):
    code = FaultCode.TOO_FEW_ARGUMENTS
    title = "too few arguments"


class InvalidTypeError(ClipException):
    code = FaultCode.INVALID_TYPE
    title = "invalid type"


class MissingRequiredError(ClipException):
    code = FaultCode.MISSING_REQUIRED
    title = "missing required"


class DuplicateKeyError(ClipException):
    code = FaultCode.DUPLICATE_KEY
    title = "duplicate key"


class DuplicateNameError(ClipException):
    code = FaultCode.DUPLICATE_NAME
    title = "duplicate name"


class VariadicAlreadyClosedError(ClipException):
    code = FaultCode.VARIADIC_ALREADY_CLOSED
    title = "variadic already closed"


class TypeMismatchError(ClipException):
    code = FaultCode.TYPE_MISMATCH
    title = "type mismatch"


def trigger(fault, /, **options):
    """
    Stamp options onto a copy of fault and surface it.

    Shell faults are printed on stderr, the others are raised.
    """
    for hook in ("__trigger__", "__replace__"):
        if not callable(getattr(fault, hook, None)):
            raise TypeError(f"trigger() argument has no {hook} method")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "ClipException",
    "UnknownOptionError",
    "TooFewArgumentsError",
    "InvalidTypeError",
    "MissingRequiredError",
    "DuplicateKeyError",
    "DuplicateNameError",
    "VariadicAlreadyClosedError",
    "TypeMismatchError",
    "FaultCode",
    "trigger",
)
