"""
Argclip usage formatter.

Layout (plain form, four-space indents)

    Usage:
        prog [-a] [-h] -n <count> [-t <tag...>] input [extra...]

    Arguments:
        input    file to read
        extra    (optional) more files

    Options:
        -a  --all    (optional) include everything
        -h  --help   display usage and information.
        -n  --count  how many
        -t  --tag    (optional) tags to apply

    <parser description>

Rules
- options are listed by short key ascending, arguments in declaration order.
- the name column is padded to the longest argument name + 2, the long-key
  column to the longest long key + 2 (the "--" prefix takes that room), and
  both are followed by two spaces.
- optional declarations are bracketed in the usage line and marked
  "(optional)" in their block; the help switch never is marked.
- multi-valued declarations carry "..." after their name.
- the Arguments block is skipped when there are none; so is the description.

The text is built as rich Text (styled only when colorful) and cached until
the registry changes or the program name does.
"""
import operator
from collections import defaultdict

from rich.text import Text

from .declarations import Option


class UsageFormatter:
    """
    Build and cache the usage text of a registry.

    Palette keys
    - usage-label, program-name, block-label
    - option-key, argument-name, metavar
    - optional-mark, description, epilog-section

    Customization
    - Define a mapping named __styles__ in __main__ to override any palette entry.
    - When colorful is False, styling is suppressed.
    """

    def __init__(self, registry, descr=None, *, colorful=False):
        self._registry = registry
        self._descr = descr
        self._colorful = bool(colorful)
        self._cache = None

    def render(self, name, /):
        """
        Return the usage Text for the given program name (a copy of the cached one).
        """
        key = (self._registry.version, name)
        if self._cache is None or self._cache[0] != key:
            self._cache = key, self._build(name)
        return self._cache[1].copy()

    def _build(self, name):
        styles = defaultdict(str, {
            # === Head ===
            "usage-label": "bold #00E6FF",  # cyan headline
            "program-name": "bold #FF4D94",  # pink program name
            "block-label": "bold #FFFFFF",  # white block headers

            # === Names / metavars ===
            "option-key": "bold #00E6FF",
            "argument-name": "bold #22C55E",
            "metavar": "bold #FFD600",

            # === Descriptions ===
            "optional-mark": "italic #737373",
            "description": "#9CA3AF",
            "epilog-section": "#737373",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self._colorful else ""

        options = sorted(self._registry.options, key=operator.attrgetter("key"))
        arguments = self._registry.arguments
        helper = self._registry.helper

        usage = Text()
        usage.append("Usage", styler("usage-label")).append(":\n")
        usage.append("    ").append(name, styler("program-name"))
        for declaration in (*options, *arguments):
            usage.append(" ").append(self._syntax(declaration, styler))

        sections = [usage]

        if arguments:
            width = max(len(argument.name) for argument in arguments) + 2
            block = Text()
            block.append("Arguments", styler("block-label")).append(":")
            for argument in arguments:
                line = Text.assemble(
                    "    ",
                    (argument.name.ljust(width), styler("argument-name")),
                    "  ",
                    ("(optional) " if argument.optional else "", styler("optional-mark")),
                    (argument.descr or "", styler("description")),
                )
                line.rstrip()
                block.append("\n").append(line)
            sections.append(block)

        if options:
            width = max(len(option.longkey) for option in options) + 2
            block = Text()
            block.append("Options", styler("block-label")).append(":")
            for option in options:
                line = Text.assemble(
                    "    ",
                    ("-" + option.key, styler("option-key")),
                    "  ",
                    (("--" + option.longkey).ljust(width), styler("option-key")),
                    "  ",
                    ("(optional) " if option.optional and option is not helper else "", styler("optional-mark")),
                    (option.descr or "", styler("description")),
                )
                line.rstrip()
                block.append("\n").append(line)
            sections.append(block)

        if self._descr:
            sections.append(Text(self._descr, styler("epilog-section")))

        return Text("\n\n").join(sections)

    @staticmethod
    def _syntax(declaration, styler):
        """
        Inline usage token of one declaration, e.g. "[-n <count>]" or "files...".
        """
        if isinstance(declaration, Option):
            syntax = Text("-" + declaration.key, styler("option-key"))
            if not declaration.switch:
                metavar = declaration.name + ("..." if declaration.multiple else "")
                syntax.append(" ").append("<" + metavar + ">", styler("metavar"))
        else:
            syntax = Text(declaration.name + ("..." if declaration.multiple else ""), styler("argument-name"))

        if declaration.optional:
            return Text.assemble("[", syntax, "]")
        return syntax


__all__ = (
    "UsageFormatter",
)
