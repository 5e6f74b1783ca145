"""
Argclip registry: the ordered, validated set of declarations of one parser.

Invariants
- short keys are unique across options, long keys are unique across options.
- the reserved help switch (-h/--help) is always the first option.
- argument names are unique; at most one argument is variadic (list[T]) and
  once it is declared no further argument may follow.
- add() is atomic: a batch is validated as a whole before anything is stored.

Ownership
- Ownership.BORROWED registers the caller's declaration object itself; the
  caller keeps it and can use it as a handle (Parser.value(declaration)).
- Ownership.OWNED registers a private copy that belongs to the registry and is
  released by close(). close() only forgets borrowed declarations.

Every successful add() bumps `version`, which the usage formatter uses to
know its cached text is stale.
"""
import copy
from enum import Enum

from .declarations import Option, Argument, switch
from .faults import *


class Ownership(Enum):
    BORROWED = "borrowed"
    OWNED = "owned"


class Registry:
    """
    Ordered options and positional arguments with uniqueness checks.
    """

    def __init__(self):
        self._options = []
        self._arguments = []
        self._ownership = {}
        self._variadic = False
        self._closed = False
        self._version = 0
        self.add(switch("h", "help", "display usage and information."), ownership=Ownership.OWNED)

    @property
    def options(self):
        """Options in declaration order, the help switch first."""
        return tuple(self._options)

    @property
    def arguments(self):
        """Positional arguments in declaration order."""
        return tuple(self._arguments)

    @property
    def helper(self):
        """The built-in help switch."""
        return self.find_key("h")

    @property
    def variadic(self):
        """True once a variadic argument closed the positional list."""
        return self._variadic

    @property
    def version(self):
        return self._version

    @property
    def closed(self):
        return self._closed

    def add(self, *declarations, ownership=Ownership.BORROWED):
        """
        Register options and arguments, in order.

        raises
        - DuplicateKeyError: an option reuses a short or long key.
        - DuplicateNameError: an argument reuses a name.
        - VariadicAlreadyClosedError: an argument follows a variadic one.
        - TypeError: a non-declaration or a bad ownership mode is given.
        - RuntimeError: the registry was closed.

        nothing is stored unless the whole batch is valid.
        """
        if self._closed:
            raise RuntimeError("registry is closed")
        if not isinstance(ownership, Ownership):
            raise TypeError("add() 'ownership' must be an ownership mode")

        keys = {option.key for option in self._options}
        longkeys = {option.longkey for option in self._options}
        names = {argument.name for argument in self._arguments}
        variadic = self._variadic

        for declaration in declarations:
            if isinstance(declaration, Option):
                if declaration.key in keys or declaration.longkey in longkeys:
                    trigger(DuplicateKeyError(
                        "key '-%s' or long key '--%s' is already registered in option list" % (
                            declaration.key, declaration.longkey
                        ),
                        declaration=declaration,
                        hint="pick a short key and a long key that no other option uses",
                    ))
                keys.add(declaration.key)
                longkeys.add(declaration.longkey)
            elif isinstance(declaration, Argument):
                if variadic:
                    trigger(VariadicAlreadyClosedError(
                        "argument %r added after variable arguments" % declaration.name,
                        declaration=declaration,
                        hint="declare the variadic argument last",
                    ))
                if declaration.name in names:
                    trigger(DuplicateNameError(
                        "name %r is already registered in argument list" % declaration.name,
                        declaration=declaration,
                        hint="give every positional argument its own name",
                    ))
                names.add(declaration.name)
                variadic |= declaration.multiple
            else:
                raise TypeError("add() arguments must be options or arguments")

        for declaration in declarations:
            if ownership is Ownership.OWNED:
                declaration = copy.copy(declaration)
            if isinstance(declaration, Option):
                self._options.append(declaration)
            else:
                self._arguments.append(declaration)
            self._ownership[declaration] = ownership

        self._variadic = variadic
        if declarations:
            self._version += 1
        return self

    def ownership(self, declaration, /):
        """Ownership mode a registered declaration was added with."""
        try:
            return self._ownership[declaration]
        except KeyError:
            raise KeyError("declaration is not registered") from None

    def find_key(self, key, /):
        for option in self._options:
            if option.key == key:
                return option
        return None

    def find_longkey(self, longkey, /):
        for option in self._options:
            if option.longkey == longkey:
                return option
        return None

    def find_name(self, name, /):
        for argument in self._arguments:
            if argument.name == name:
                return argument
        return None

    def close(self):
        """
        Release owned declarations and forget borrowed ones.

        Owned copies are only referenced from here, so dropping them releases
        them; borrowed declarations stay untouched and usable by the caller.
        Idempotent: a second call does nothing.
        """
        if self._closed:
            return
        self._ownership.clear()
        self._options.clear()
        self._arguments.clear()
        self._closed = True
        self._version += 1

    def __iter__(self):
        yield from self._options
        yield from self._arguments

    def __len__(self):
        return len(self._options) + len(self._arguments)


__all__ = (
    "Ownership",
    "Registry",
)
