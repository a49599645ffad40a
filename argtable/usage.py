"""
Argtable usage and help rendering.

Read-only consumer of a Registry: nothing here affects parsing.

- usage(registry, prog): one-line invocation summary as plain text, e.g.
      usage: tool [-v] [-c {blue,green,red}] -n <number> <source> [<target>]
  • required flags/options appear bare, optional ones in brackets.
  • required positionals appear as <name>, optional ones as [<name>].
  • arguments keep their declaration order.

- render(registry, prog, colorful=True, fancy=False): a rich renderable holding the
  usage line followed by one detail row per argument:
  letter and name, description, allowed values, default, and a required marker.

Palette keys
- usage-label, program-name, usage-section
- group-label, option-name, flag-name, positional-name
- argument-description, choice, default, required-marker

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .arguments import Kind
from .utils import Unset


def _palette():
    return defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan

        # === Groups / arguments ===
        "group-label": "bold #FFFFFF",  # Pure white headers
        "argument-description": "#9CA3AF",  # Muted gray

        # === Names ===
        "option-name": "bold #00E6FF",  # CYAN for options
        "flag-name": "bold #22C55E",  # GREEN for flags
        "positional-name": "bold #FFD600",  # AMBER for positionals

        # === Values ===
        "choice": "bold #FF4D94",  # MAGENTA → choices stand out
        "default": "italic #D1D5DB",
        "required-marker": "bold #EF4444",  # RED
    } | getattr(__import__("__main__"), "__styles__", {}))


def _metavar(argument):
    if argument.choices:
        return "{%s}" % ",".join(argument.choices)
    return "<%s>" % argument.name


def _synopsis(argument):
    """
    the usage fragment of one argument, brackets included.
    """
    if not argument.named:
        fragment = _metavar(argument)
    else:
        fragment = "-" + argument.letter if argument.letter else "--" + argument.name
        if argument.valued:
            fragment = "%s %s" % (fragment, _metavar(argument))
    return fragment if argument.required else "[%s]" % fragment


def usage(registry, prog, /):
    """
    return the one-line invocation summary as plain text.
    """
    return " ".join(["usage:", prog, *map(_synopsis, registry)])


def render(registry, prog, /, *, colorful=True, fancy=False):
    """
    build the help renderable for a registry.

    layout
    - "usage: prog ..." line
    - "arguments:" label, then a two-column grid: names | details
      • names: "-x, --name" for named arguments, "<name>" for positionals.
      • details: description, then "choices: ...", "default: ...", "(required)" as applicable.
    - fancy=True wraps the argument details in a rounded Panel titled with the usage line.
    """
    styles = _palette()

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    renders = []

    summary = Text.assemble(
        text("usage:", styler("usage-label")),
        " ",
        text(prog, styler("program-name")),
    )
    for argument in registry:
        summary.append(" ")
        summary.append_text(text(_synopsis(argument), styler("usage-section")))
    renders.append(summary)
    renders.append(Text(""))
    renders.append(text("arguments:", styler("group-label")))

    grid = Table.grid(padding=(0, 3))
    grid.add_column(no_wrap=True)
    grid.add_column()

    for argument in registry:
        match argument.kind:
            case Kind.FLAG:
                style = "flag-name"
            case Kind.OPTION:
                style = "option-name"
            case Kind.POSITIONAL:
                style = "positional-name"

        if argument.named:
            names = Text(", ").join(
                text(name, styler(style))
                for name in ("-" + argument.letter if argument.letter else "", "--" + argument.name)
                if name
            )
        else:
            names = text("<%s>" % argument.name, styler(style))

        details = []
        if argument.descr:
            details.append(text(argument.descr, styler("argument-description")))
        if argument.choices:
            details.append(Text.assemble(
                "choices: ",
                Text(", ").join(text(choice, styler("choice")) for choice in argument.choices),
            ))
        if argument.default is not Unset:
            details.append(Text.assemble("default: ", text(repr(argument.default), styler("default"))))
        if argument.required:
            details.append(text("(required)", styler("required-marker")))

        grid.add_row(Text.assemble("  ", names), Text("\n").join(details) if details else Text(""))

    renders.append(grid)

    if fancy:
        return Panel(Group(*renders[2:]), title=summary, title_align="left", box=ROUNDED)

    return Group(*renders)


__all__ = (
    "usage",
    "render",
)
