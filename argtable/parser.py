"""
Argtable parser: scan a token sequence against a registry into a namespace.

What this module provides
- Namespace: the result of one successful parse. A read-only mapping from argument
  name to the raw string value, covering arguments given on the command line and
  arguments with a default. Flags that are present map to "".
  Typed accessors (get_int/get_float/get_bool) delegate to argtable.conversions.
- Parser: owns the runtime switches (prog/shell/fancy/colorful/deferred), runs the
  scan, surfaces faults, and remembers the last successful namespace so that the
  accessors can also be called on the parser itself.

Token syntax
- "--name": long form of a flag or option.
- "-x": short form (the letter index is tried first, then the name index).
- bare token: the next free positional, or the value following an option.
- a dashed token that resolves to nothing is offered to the next free positional
  as-is, so values like "-5" can still be positionals.

Fault policy
- every fault is built with a position-first message naming the token and the
  argument involved, then handed to Parser.trigger().
- non-shell mode raises the fault. shell mode prints the usage line and the fault
  to stderr and exits with status 1, or returns None from parse() when deferred.
- a failed parse clears the remembered namespace: parser-level accessors raise
  RuntimeError until the next successful parse. namespaces returned earlier are
  independent objects and stay valid.

Quick example:
    >>> registry = Registry(
    ...     flag("version", "v", "Display version information"),
    ...     option("colour", "c", "Colour", ("red", "green", "blue")),
    ...     option("number", "n", "Number of things"),
    ... )
    >>> namespace = Parser(registry).parse(["-v", "-c", "red", "--number", "5"])
    >>> namespace.is_set("version"), namespace["colour"], namespace.get_int("number")
    (True, 'red', 5)
"""
import os.path
import sys
from collections import deque
from collections.abc import Iterable, Mapping

from rich.console import Console

from .arguments import Kind
from .conversions import to_int, to_float, to_bool
from .faults import *
from .registry import Registry
from .usage import usage, render
from .utils import *


class Namespace(Mapping):
    """
    Read-only view over the values produced by one successful parse.

    namespace[name] raises KeyError when the argument is not set; get(name)
    returns None (or the given default) instead. All lookups use the full name,
    never the letter.
    """

    __slots__ = ("_registry", "_values")

    def __init__(self, registry, values, /):
        self._registry = registry
        self._values = dict(values)

    def __getitem__(self, name, /):
        try:
            return self._values[name]
        except KeyError:
            if name in self._registry:
                raise KeyError(f"argument {name!r} is not set") from None
            raise KeyError(f"argument {name!r} is not declared") from None

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"namespace({self._values!r})"

    def __rich_repr__(self):
        yield from self._values.items()

    def is_set(self, name, /):
        return name in self._values

    def get_int(self, name, /):
        return to_int(self[name], name)

    def get_float(self, name, /):
        return to_float(self[name], name)

    def get_bool(self, name, /):
        return to_bool(self[name], name)


class Parser:
    """
    Parse token sequences against a shared, read-only registry.

    Parameters
    - registry: Registry
      The declarations to parse against.
    - prog: Unset | str
      Program name shown in usage and fault headers. Defaults to the basename of
      sys.argv[0]. A host may also set __prog__ in __main__, which wins in faults.
    - shell: bool
      Print faults instead of raising them.
    - fancy: bool
      Render faults and help inside rich panels.
    - colorful: bool
      Style rendered output; False yields plain text.
    - deferred: bool
      In shell mode, return None from parse() after a fault instead of exiting.

    Concurrency
    - each parse() builds its own value store, but the "last result" slot is
      shared: concurrent parse() calls on the same Parser are not supported.
    """

    __introspectable__ = (
        "registry",
        "shell",
        "fancy",
        "colorful",
        "deferred",
    )

    registry = mirror("registry")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    deferred = mirror("deferred")

    def __init__(self, registry, /, *, prog=Unset, shell=False, fancy=False, colorful=True, deferred=False):
        if not isinstance(registry, Registry):
            raise TypeError("parser 'registry' must be a registry")
        if not isinstance(prog, str | Unset):
            raise TypeError("parser 'prog' must be a string")
        elif isinstance(prog, str) and not (prog := prog.strip()):
            raise ValueError("parser 'prog' cannot be empty")

        self._registry = registry
        self._prog = prog
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._deferred = bool(deferred)
        self._result = Unset

    def __repr__(self):
        return "parser(%s)" % ", ".join("%s=%r" % (name, getattr(self, name)) for name in self.__introspectable__)

    @property
    def prog(self):
        if self._prog is not Unset:
            return self._prog
        return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "program"

    @property
    def result(self):
        """
        the namespace of the last successful parse.

        raises RuntimeError before the first parse and after a failed one.
        """
        if self._result is Unset:
            raise RuntimeError("no successful parse to query; check the result of parse() first")
        return self._result

    def trigger(self, fault, /, **options):
        """
        surface a fault with this parser's runtime switches merged in.

        in shell mode the usage line is printed to stderr ahead of an error so
        the user sees the expected shape right above what went wrong.
        """
        if self.shell and isinstance(fault, ArgumentException):
            Console(stderr=True, highlight=False).print(self.usage(), markup=False, emoji=False)
        trigger(
            fault,
            **options,
            prog=self.prog,
            shell=self.shell,
            fancy=self.fancy,
            colorful=self.colorful,
            deferred=self.deferred
        )

    def parse(self, tokens, /):
        """
        parse an already-tokenized command line (no program-name slot).

        returns the fresh Namespace on success. on failure the fault is triggered
        (raised, or printed in shell mode); when it does not raise or exit, None
        is returned.
        """
        return self._parse(tokens, index=1)

    def parse_argv(self, argv=Unset, /):
        """
        parse a process-style argument vector: slot 0 (the program name) is ignored.

        defaults to sys.argv. positions in messages keep counting from the first
        real argument, matching what the user typed.
        """
        argv = coalesce(argv, sys.argv)
        if isinstance(argv, str) or not isinstance(argv, Iterable):
            raise TypeError("parse_argv() argument must be a sequence of strings")
        return self._parse(list(argv)[1:], index=1)

    def _parse(self, tokens, *, index):
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("parse() argument must be a sequence of strings")
        tokens = tuple(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError(f"parse() tokens must be strings, not {type(token).__name__!r}")

        self._result = Unset

        values = self._scan(tokens, index=index)
        if values is None:
            return None

        self._result = Namespace(self.registry, values)
        return self._result

    def _strip(self, token, position):
        """
        turn a dashed token into a name/letter candidate.

        "-x" → "x", "--name" → "name". tokens made only of dashes, or with three
        or more leading dashes, are malformed; None is returned after the fault
        is triggered.
        """
        candidate = token[2:] if token.startswith("--") else token[1:]
        if not candidate or candidate.startswith("-"):
            return self.trigger(MalformedTokenError(
                "bad form of argument %r at %s position" % (token, ordinal(position)),
                title="malformed argument",
                code=FaultCode.MALFORMED_TOKEN,
                hint="use -x for a letter or --name for a full name",
                token=token,
                index=position,
                docs=getdoc(FaultCode.MALFORMED_TOKEN)
            ))
        return candidate

    def _scan(self, tokens, *, index):
        """
        single left-to-right pass over the tokens, no backtracking.

        phases
        - seed the store with every declared default.
        - per token: resolve to a flag (record ""), an option (take the next
          token as its value), or the next free positional (take the raw token).
        - after the scan: every required argument must be present.

        returns the value dict, or None once a fault has been triggered.
        """
        registry = self.registry
        values = registry.defaults()
        positionals = deque(registry.positionals)
        seen = {}
        cursor = 0

        while cursor < len(tokens):
            token = tokens[cursor]
            position = index + cursor

            if not token:
                return self.trigger(MalformedTokenError(
                    "empty argument at %s position" % ordinal(position),
                    title="malformed argument",
                    code=FaultCode.MALFORMED_TOKEN,
                    hint="remove the empty argument or quote a real value",
                    token=token,
                    index=position,
                    docs=getdoc(FaultCode.MALFORMED_TOKEN)
                ))

            argument = None
            if token.startswith("-"):
                if (candidate := self._strip(token, position)) is None:
                    return None
                argument = registry.resolve(candidate)

            if argument is None:
                if not positionals:
                    return self.trigger(UnknownArgumentError(
                        "couldn't find %r in specified list of arguments at %s position" % (token, ordinal(position)),
                        title="unknown argument",
                        code=FaultCode.UNKNOWN_ARGUMENT,
                        hint="try '%s --help' or check the usage line for accepted arguments" % self.prog,
                        token=token,
                        index=position,
                        docs=getdoc(FaultCode.UNKNOWN_ARGUMENT)
                    ))
                argument = registry[positionals.popleft()]
                if not argument.accepts(token):
                    return self._invalid(argument, token, position)
                values[argument.name] = token
                seen[argument.name] = position
                cursor += 1
                continue

            if argument.name in seen:
                self.trigger(RepeatedArgumentWarning(
                    "argument %r at %s position was already given at %s position" % (
                        argument.name, ordinal(position), ordinal(seen[argument.name])
                    ),
                    title="repeated argument",
                    code=FaultCode.REPEATED_ARGUMENT,
                    hint="the last occurrence wins; remove the earlier one",
                    token=token,
                    index=position,
                    argument=argument,
                    docs=getdoc(FaultCode.REPEATED_ARGUMENT)
                ))
            seen[argument.name] = position

            match argument.kind:
                case Kind.FLAG:
                    values[argument.name] = ""
                    cursor += 1
                case Kind.OPTION:
                    if cursor + 1 >= len(tokens):
                        return self.trigger(MissingValueError(
                            "argument %r (%r at %s position) given without a value" % (
                                argument.name, token, ordinal(position)
                            ),
                            title="missing value",
                            code=FaultCode.MISSING_VALUE,
                            hint="pass a value after a space (for example: %s <value>)" % token,
                            token=token,
                            index=position,
                            argument=argument,
                            docs=getdoc(FaultCode.MISSING_VALUE)
                        ))
                    value = tokens[cursor + 1]
                    if not argument.accepts(value):
                        return self._invalid(argument, value, position + 1)
                    values[argument.name] = value
                    cursor += 2

        for argument in registry:
            if argument.required and argument.name not in values:
                return self.trigger(MissingRequiredError(
                    "argument %r is required but not set" % argument.name,
                    title="missing required argument",
                    code=FaultCode.MISSING_REQUIRED,
                    hint=(
                        "pass a value for <%s>" % argument.name
                        if argument.kind is Kind.POSITIONAL else
                        "add --%s to the command line" % argument.name
                    ),
                    argument=argument,
                    docs=getdoc(FaultCode.MISSING_REQUIRED)
                ))

        return values

    def _invalid(self, argument, value, position):
        return self.trigger(InvalidChoiceError(
            "value %r for argument %r at %s position is not one of the options" % (
                value, argument.name, ordinal(position)
            ),
            title="invalid choice",
            code=FaultCode.INVALID_CHOICE,
            hint="choose one of: %s" % ", ".join(map(repr, argument.choices)),
            token=value,
            index=position,
            argument=argument,
            docs=getdoc(FaultCode.INVALID_CHOICE)
        ))

    def is_set(self, name, /):
        return self.result.is_set(name)

    def get(self, name, default=None, /):
        return self.result.get(name, default)

    def get_int(self, name, /):
        return self.result.get_int(name)

    def get_float(self, name, /):
        return self.result.get_float(name)

    def get_bool(self, name, /):
        return self.result.get_bool(name)

    def usage(self):
        """
        return the one-line invocation summary as plain text.
        """
        return usage(self.registry, self.prog)

    def help(self, *, stderr=False):
        """
        print the usage line and the per-argument details.
        """
        Console(stderr=stderr).print(render(self.registry, self.prog, colorful=self.colorful, fancy=self.fancy))


__all__ = (
    "Namespace",
    "Parser",
)
