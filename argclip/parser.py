"""
Argclip parser: register declarations, parse an argument vector, read values.

What this module provides
- Parser: owns a Registry (the declarations) and a UsageFormatter, runs the
  parse, keeps the values bound by the last parse and renders usage/faults.
- ParseResult: the three-valued outcome of Parser.parse (SUCCESS, FAILURE,
  HELPSHOWN), each with a conventional process exit code.

Parse phases
- tokenize: argv[1:] is classified into VALUE/KEY/LONGKEY tokens; argv[0]
  becomes the program name (directory components dropped).
- scan: tokens are consumed left to right.
    • --longkey / -k look up one option; switches bind True, single-valued
      options take exactly the next value token, list options take every value
      token up to the next key-shaped one.
    • -abc binds every listed switch; any non-switch key in it is a fault.
    • value tokens bind positional arguments in declaration order; a variadic
      argument takes all the rest; values with nowhere to go are dropped.
    • the first fault stops the scan. Binding the help switch stops it too.
- validate: the first required option, then the first required argument, not
  bound by the scan is reported as missing.
- conclude: help wins over everything. If any token asked for help (even one
  after a fault), usage is shown and nothing else is reported. Otherwise
  faults are rendered on stderr when the parser shows errors.

Quick start
    import sys
    from argclip import Parser, Option, Argument, switch, ParseResult

    parser = Parser("copy files somewhere.")
    parser.add(
        switch("v", "verbose", "print every copied file"),
        Option("n", "count", "N", "how many copies", type=int, default=1),
        Argument("files", "files to copy", type=list[str]),
    )
    if (result := parser.parse()) is not ParseResult.SUCCESS:
        sys.exit(result.exitcode)
    print(parser.option("count"), parser.argument("files"))
"""
import difflib
import itertools
import sys
from collections import deque
from enum import Enum
from types import GenericAlias

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .declarations import Declaration
from .faults import *
from .registry import Registry, Ownership
from .tokens import TokenKind, tokenize
from .usage import UsageFormatter
from .utils import *

console = Console(soft_wrap=True, highlight=False)


class ParseResult(Enum):
    """
    outcome of one Parser.parse call.

    - SUCCESS: every token was accepted and every required declaration bound.
    - FAILURE: a fault stopped the parse (see Parser.error).
    - HELPSHOWN: help was requested and usage has been printed.
    """
    SUCCESS = "success"
    FAILURE = "failure"
    HELPSHOWN = "help-shown"

    @property
    def exitcode(self):
        """Process exit status conventionally associated with the outcome."""
        return 1 if self is ParseResult.FAILURE else 0


class State(Enum):
    """internal parse state; every scan stage reports one of these."""
    SCANNING = "scanning"
    SUCCESS = "success"
    FAILURE = "failure"
    HELP = "help"


class Parser:
    """
    Command-line parser over a registry of options and positional arguments.

    Responsibilities
    - Registration: add() options and arguments (borrowed or owned).
    - Parsing: parse() an argument vector into a per-parse namespace keyed by
      declaration identity; the last parse is what accessors read.
    - Reporting: error (fault text), usage (plain text), show_usage() (stdout).
    - Access: option()/argument() by key, long key, name or index, and
      value()/isset() by declaration handle.

    Runtime flags
    - showerrors: render faults on stderr when a parse fails. Defaults to True
      when a description is given, False otherwise.
    - colorful: style usage and fault renders.
    - fancy: wrap renders in a panel.
    """

    def __init__(self, descr=Unset, /, *, showerrors=Unset, colorful=False, fancy=False):
        if not isinstance(descr, str | Unset):
            raise TypeError("parser 'descr' must be a string")
        if isinstance(descr, str) and not descr.strip():
            raise ValueError("parser description is blank")
        descr = descr.strip() if descr else descr

        self._descr = coalesce(descr)
        self._showerrors = bool(coalesce(showerrors, descr is not Unset))
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)

        self._registry = Registry()
        self._formatter = UsageFormatter(self._registry, self._descr, colorful=self._colorful)
        self._name = progname(sys.argv[0]) if sys.argv else ""
        self._namespace = {}
        self._faults = []
        self._result = None
        self._tokens = deque()
        self._index = 0

    @property
    def descr(self):
        return self._descr

    @property
    def showerrors(self):
        return self._showerrors

    @property
    def colorful(self):
        return self._colorful

    @property
    def fancy(self):
        return self._fancy

    @property
    def name(self):
        """
        Program name: the last path component of argv[0] of the last parse
        (of sys.argv[0] before any parse).
        """
        return self._name

    @property
    def options(self):
        """Registered options, the help switch first."""
        return self._registry.options

    @property
    def arguments(self):
        """Registered positional arguments in declaration order."""
        return self._registry.arguments

    @property
    def result(self):
        """ParseResult of the last parse, None before the first one."""
        return self._result

    @property
    def faults(self):
        return tuple(self._faults)

    @property
    def error(self):
        """Fault text of the last parse; empty after a clean one."""
        return "\n".join(map(str, self._faults))

    @property
    def usage(self):
        """Plain usage text, as show_usage() prints it."""
        return self._formatter.render(self._name).plain

    def add(self, *declarations, ownership=Ownership.BORROWED):
        """
        Register options and arguments; returns the parser for chaining.

        Duplicate keys/names and arguments after a variadic one raise (see
        argclip.registry.Registry.add); nothing from a rejected batch is kept.
        """
        self._registry.add(*declarations, ownership=ownership)
        return self

    def trigger(self, fault, /, **options):
        """
        Record a parse fault, stamped with this parser's render options.

        Faults are surfaced once the parse concludes, and only when it does
        not end by showing help.
        """
        if not isinstance(fault, ClipException):
            raise TypeError(f"trigger() expects a fault, got {type(fault).__name__}")
        self._faults.append(fault.__replace__(
            **options, tool=self, shell=True, fancy=self._fancy, colorful=self._colorful
        ))

    def _fail(self, fault):
        self.trigger(fault)
        return State.FAILURE

    def parse(self, argv=Unset, /):
        """
        Parse an argument vector (sys.argv when omitted); argv[0] is the program.

        Returns a ParseResult. Parse faults never raise: they are recorded
        (see error/faults) and rendered on stderr when showerrors is set.
        """
        if self._registry.closed:
            raise RuntimeError("parser is closed")

        argv = sys.argv if argv is Unset else argv
        if isinstance(argv, str):
            raise TypeError("parse() argument must be a sequence of strings, not a string")
        argv = list(argv)
        if not all(isinstance(raw, str) for raw in argv):
            raise TypeError("parse() argument must be a sequence of strings")

        self._namespace = {}
        self._faults = []
        if argv:
            self._name = progname(argv[0])

        tokens = tokenize(argv[1:])
        self._tokens = deque(tokens)
        self._index = 0

        state = self._scan()
        if state is State.SCANNING:
            state = self._validate()
        if state is State.FAILURE and self._requested_help(tokens):
            state = State.HELP

        self._result = self._finalize(state)
        return self._result

    def _scan(self):
        """
        consume the token deque; stop at the first fault or at the help switch.
        """
        pending = deque(self._registry.arguments)

        while self._tokens:
            token = self._tokens.popleft()
            self._index += 1

            match token.kind:
                case TokenKind.VALUE:
                    state = self._parse_positional(pending, token)
                case TokenKind.LONGKEY:
                    state = self._parse_option(self._registry.find_longkey(token.keys), token)
                case TokenKind.KEY if not token.keys:
                    # a lone '-' carries nothing
                    state = State.SCANNING
                case TokenKind.KEY if token.bundle:
                    state = self._parse_bundle(token)
                case TokenKind.KEY:
                    state = self._parse_option(self._registry.find_key(token.keys), token)
                case _:
                    raise RuntimeError("unexpected token")

            if state is not State.SCANNING:
                return state

        return State.SCANNING

    def _unknown(self, token, spelling):
        """
        fault for an option spelling nothing is registered under, with a suggestion.
        """
        if token.kind is TokenKind.LONGKEY:
            known = ["--" + option.longkey for option in self._registry.options]
        else:
            known = ["-" + option.key for option in self._registry.options]
        suggestions = difflib.get_close_matches(spelling, known, 5)
        try:
            hint = "did you mean %r? you can also run '%s --help' to see all options" % (suggestions[0], self._name)
        except IndexError:
            hint = "try '%s --help' to see all available options" % self._name

        return self._fail(UnknownOptionError(
            "invalid argument name specified: %s" % spelling,
            token=token.raw,
            index=self._index,
            suggestions=suggestions,
            hint=hint,
        ))

    def _parse_option(self, option, token):
        if option is None:
            return self._unknown(token, token.raw)

        if option.switch:
            self._namespace[option] = True
            return State.HELP if option is self._registry.helper else State.SCANNING

        if option.multiple:
            # greedy: stop before the next key-shaped token, which is scanned normally
            while self._tokens and not self._tokens[0].keyed:
                value = self._tokens.popleft()
                self._index += 1
                conversion = option.convert(value.raw)
                if not conversion.success:
                    return self._invalid(option, value)
                self._namespace.setdefault(option, []).append(conversion.value)
            return State.SCANNING

        if not self._tokens or self._tokens[0].keyed or option in self._namespace:
            return self._fail(TooFewArgumentsError(
                "argument should be specified for %s" % option.label,
                declaration=option,
                token=token.raw,
                index=self._index,
                hint="pass exactly one value after %s (for example: %s <%s>)" % (
                    token.raw, token.raw, option.name
                ),
            ))

        value = self._tokens.popleft()
        self._index += 1
        conversion = option.convert(value.raw)
        if not conversion.success:
            return self._invalid(option, value)
        self._namespace[option] = conversion.value
        return State.SCANNING

    def _parse_bundle(self, token):
        for key in token.keys:
            if (option := self._registry.find_key(key)) is None:
                return self._unknown(token, "-" + key)
            if not option.switch:
                return self._fail(InvalidTypeError(
                    "invalid type was specified for %s" % option.label,
                    declaration=option,
                    token=token.raw,
                    index=self._index,
                    hint="only switches can be combined; pass -%s on its own" % key,
                ))
            self._namespace[option] = True
            if option is self._registry.helper:
                return State.HELP
        return State.SCANNING

    def _parse_positional(self, pending, token):
        if not pending:
            # nothing left to bind
            return State.SCANNING

        argument = pending[0]
        if not argument.multiple:
            pending.popleft()

        conversion = argument.convert(token.raw)
        if not conversion.success:
            return self._invalid(argument, token)
        if argument.multiple:
            self._namespace.setdefault(argument, []).append(conversion.value)
        else:
            self._namespace[argument] = conversion.value
        return State.SCANNING

    def _invalid(self, declaration, token):
        return self._fail(InvalidTypeError(
            "invalid type was specified for %s" % declaration.label,
            declaration=declaration,
            token=token.raw,
            index=self._index,
            hint="%r cannot be read as %s" % (token.raw, declaration.kind.value),
        ))

    def _validate(self):
        """
        report the first required declaration left unbound, options first.
        """
        for declaration in itertools.chain(self._registry.options, self._registry.arguments):
            if declaration.optional or declaration in self._namespace:
                continue
            return self._fail(MissingRequiredError(
                "%s should be specified." % declaration.label,
                declaration=declaration,
                hint="run '%s --help' to see the expected usage" % self._name,
            ))
        return State.SUCCESS

    def _requested_help(self, tokens):
        helper = self._registry.helper
        for token in tokens:
            if token.kind is TokenKind.LONGKEY and token.keys == helper.longkey:
                return True
            if token.kind is TokenKind.KEY and helper.key in token.keys:
                return True
        return False

    def _finalize(self, state):
        match state:
            case State.HELP:
                self.show_usage()
                return ParseResult.HELPSHOWN
            case State.FAILURE:
                if self._showerrors:
                    for fault in self._faults:
                        trigger(fault)
                return ParseResult.FAILURE
            case State.SUCCESS:
                return ParseResult.SUCCESS
            case _:
                raise RuntimeError("unexpected parse state")

    def show_usage(self):
        """
        Print the usage text on stdout.
        """
        renderable = self._formatter.render(self._name)
        if self._fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", f"{self._name} HELP".upper(), " ", "]"),
                title_align="left",
            )
        console.print(renderable)

    def option(self, key, /, type=Unset):
        """
        Value of an option by short key, long key or index.

        - str: a one-character string is tried as a short key first, then as a
          long key; longer strings are long keys.
        - int: 0 is the first user-added option (the help switch is skipped).
        - type: when given it must equal the option's declared type, otherwise
          TypeMismatchError is raised.

        Raises KeyError/IndexError when nothing matches.
        """
        match key:
            case bool():
                raise TypeError("option() argument must be a key, a long key or an index")
            case int():
                if key < 0:
                    raise IndexError("option index out of range")
                try:
                    option = self._registry.options[key + 1]
                except IndexError:
                    raise IndexError("option index out of range") from None
            case str():
                option = None
                if len(key) == 1:
                    option = self._registry.find_key(key)
                if option is None:
                    option = self._registry.find_longkey(key)
                if option is None:
                    raise KeyError("no option registered as %r" % key)
            case _:
                raise TypeError("option() argument must be a key, a long key or an index")
        return self._lookup(option, type)

    def argument(self, name, /, type=Unset):
        """
        Value of a positional argument by name or declaration index.

        Same type check and lookup errors as option().
        """
        match name:
            case bool():
                raise TypeError("argument() argument must be a name or an index")
            case int():
                if name < 0:
                    raise IndexError("argument index out of range")
                try:
                    argument = self._registry.arguments[name]
                except IndexError:
                    raise IndexError("argument index out of range") from None
            case str():
                if (argument := self._registry.find_name(name)) is None:
                    raise KeyError("no argument registered as %r" % name)
            case _:
                raise TypeError("argument() argument must be a name or an index")
        return self._lookup(argument, type)

    def _lookup(self, declaration, type):
        if type is not Unset and type != declaration.type:
            trigger(TypeMismatchError(
                "%s is declared as %s, not %s" % (
                    declaration.label, _typename(declaration.type), _typename(type)
                ),
                tool=self,
                declaration=declaration,
                hint="read it with type=%s" % _typename(declaration.type),
            ))
        return self.value(declaration)

    def value(self, declaration, /):
        """
        Value bound to a registered declaration by the last parse, or its
        fallback (default, [] or None) when the parse did not bind it.
        """
        self._registered(declaration)
        if declaration not in self._namespace:
            return declaration.fallback()
        value = self._namespace[declaration]
        return list(value) if declaration.multiple else value

    def isset(self, declaration, /):
        """True when the last parse bound a value to the declaration."""
        self._registered(declaration)
        return declaration in self._namespace

    def _registered(self, declaration):
        if not isinstance(declaration, Declaration):
            raise TypeError("expected an option or an argument")
        self._registry.ownership(declaration)

    def close(self):
        """
        Release owned declarations and forget borrowed ones. Idempotent.
        """
        self._registry.close()
        self._namespace = {}
        self._faults = []
        self._tokens.clear()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __repr__(self):
        return "parser(name=%r, descr=%r, options=%d, arguments=%d)" % (
            self._name, self._descr, len(self._registry.options), len(self._registry.arguments)
        )


def _typename(type):
    if isinstance(type, GenericAlias):
        return repr(type)
    return getattr(type, "__name__", repr(type))


__all__ = (
    "ParseResult",
    "Parser",
)
