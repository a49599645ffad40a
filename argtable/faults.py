"""
Argtable faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing parse issues
  (errors and warnings). Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- ArgumentException / ArgumentWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/deferred/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: parse messages include the ordinal position of the
  offending token (“at third position”) and the argument name involved.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.

Integration
- The parser builds a fault and calls Parser.trigger(fault, **ctx), which merges
  the runtime switches and hands it to trigger().
- In non-shell mode, exceptions are raised and warnings go through warnings.warn;
  in shell mode, both are rendered via rich on stderr.

Registration problems are not faults: a bad declaration table is a programming
error and surfaces as a plain TypeError/ValueError from the registry.
"""
import copy
import inspect
import sys
import warnings
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
    canonical fault codes used by the parser (stable identifiers).

    grouping (by high-level domain)
    - tokens and names (1111x)
      • MALFORMED_TOKEN, UNKNOWN_ARGUMENT, MISSING_VALUE
    - values and presence (1112x)
      • INVALID_CHOICE, MISSING_REQUIRED
    - conversions (1113x)
      • UNCONVERTIBLE_VALUE
    - warnings (12xxx)
      • REPEATED_ARGUMENT

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- token/name errors (111xx) ---
    MALFORMED_TOKEN             = 11111
    UNKNOWN_ARGUMENT            = 11112
    MISSING_VALUE               = 11117

    # --- value/presence errors (112xx) ---
    INVALID_CHOICE              = 11124
    MISSING_REQUIRED            = 11125

    # --- conversion errors (113xx) ---
    UNCONVERTIBLE_VALUE         = 11131

    # --- warnings (12xxx) ---
    REPEATED_ARGUMENT           = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, title):
    """
    build the rich renderable shared by exceptions and warnings.

    layout
    - header: "[ prog — code | title ]"
    - body: the message, then an arrowed hint line.
    - fancy=True wraps body in a Panel titled by the header.

    the palette may be overridden per key through __styles__ in __main__.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

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

    prog = text(getattr(main, "__prog__", options.get("prog") or "program"), styler("prog-name"))

    try:
        code = options["code"].normalize()
    except KeyError:
        code = "?"

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code, styler("code")),
        " | ",
        text(options.get("title", type(fault).__name__).title(), styler(title)),
        " ]"
    )
    message = text(fault.message, styler(title.replace("title", "message")))
    renders = [message]
    if options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(options["hint"], styler("hint"))))

    if fancy:
        return Panel(Group(*renders), title=header, title_align="left")

    return Group(header, *renders)


class ArgumentException(Exception):
    """
    base class for every parse-time fault.

    the message is the human-readable explanation (also what str() returns);
    options is a read-only mapping with the context the reporter may want to
    show: title, code, hint, token, index, argument, and the runtime switches
    (prog, shell, fancy, colorful, deferred) merged in by trigger().
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message or "")
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MalformedTokenError(ArgumentException): ...
class UnknownArgumentError(ArgumentException): ...
class MissingValueError(ArgumentException): ...
class InvalidChoiceError(ArgumentException): ...
class MissingRequiredError(ArgumentException): ...
class ConversionError(ArgumentException, ValueError): ...


class ArgumentWarning(Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message or "")
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RepeatedArgumentWarning(ArgumentWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise, exceptions are
      raised and warnings are emitted through the warnings module.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ArgumentException",
    "MalformedTokenError",
    "UnknownArgumentError",
    "MissingValueError",
    "InvalidChoiceError",
    "MissingRequiredError",
    "ConversionError",
    "ArgumentWarning",
    "RepeatedArgumentWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
