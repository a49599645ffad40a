"""
Argtable registry: the validated, immutable table of declared arguments.

What this module provides
- Registry: built once from an ordered list of Argument declarations. Construction
  validates the table as a whole and either yields a fully usable registry or raises;
  no partially-built registry is ever observable.

Indices (built at construction, exposed read-only)
- names: full name → Argument (insertion order preserved).
- letters: short letter → full name.
- positionals: tuple of positional names, in declaration order.

Validation (ValueError unless stated otherwise)
- the declaration list must not be empty.
- every entry must be an Argument (TypeError).
- names must be at least two characters long and must not start with '-'.
- letters, when present, must be exactly one character and not '-'.
- kind-specific rules:
  • flags carry neither choices nor a default.
  • positionals carry no letter; once a positional is optional every later
    positional must be optional too. a default makes a positional optional
    whatever its declared ordinality.
  • a default must be one of the choices when choices are declared.
- names and letters are unique across the whole table.

Lookups
- resolve(candidate): letter index first, then name index; None when unknown.
"""
from collections.abc import Iterable

from .arguments import Argument, Kind
from .utils import *


def _check_shape(argument):
    """
    validate one declaration on its own, switching on its kind tag.
    """
    name = argument.name
    if len(name) < 2:
        raise ValueError(f"argument name {name!r} must be at least two characters long")
    if name.startswith("-"):
        raise ValueError(f"argument name {name!r} cannot start with '-'")

    if argument.letter is not None:
        if len(argument.letter) != 1:
            raise ValueError(f"argument {name!r} letter {argument.letter!r} must be a single character")
        if argument.letter == "-":
            raise ValueError(f"argument {name!r} letter cannot be '-'")

    match argument.kind:
        case Kind.FLAG:
            if argument.choices:
                raise ValueError(f"flag {name!r} cannot have choices")
            if argument.default is not Unset:
                raise ValueError(f"flag {name!r} cannot have a default")
        case Kind.POSITIONAL:
            if argument.letter is not None:
                raise ValueError(f"positional {name!r} cannot have a letter")

    if argument.default is not Unset and not argument.accepts(argument.default):
        raise ValueError(f"default {argument.default!r} of argument {name!r} is not one of its choices")


class Registry:
    """
    Ordered, validated and immutable set of declarations for one application.

    Registry(*arguments) or Registry(arguments): both forms accept the
    declarations in the order they should appear in usage output and in which
    positionals are filled.

    The registry can be shared freely: it is never mutated after construction
    and parsers only read from it.
    """

    __slots__ = ("_arguments", "_names", "_letters", "_positionals")

    names = mirror("names")
    letters = mirror("letters")
    positionals = mirror("positionals")

    def __init__(self, *arguments):
        if len(arguments) == 1 and isinstance(arguments[0], Iterable) and not isinstance(arguments[0], Argument):
            arguments = tuple(arguments[0])

        if not arguments:
            raise ValueError("registry must declare at least one argument")

        names = {}
        letters = {}
        positionals = []
        optional = None

        for argument in arguments:
            if not isinstance(argument, Argument):
                raise TypeError(f"registry entries must be arguments, not {type(argument).__name__!r}")

            _check_shape(argument)

            if argument.name in names:
                raise ValueError(f"argument name {argument.name!r} is declared more than once")
            if argument.letter is not None and argument.letter in letters:
                raise ValueError(f"argument letter {argument.letter!r} is used by both {letters[argument.letter]!r} and {argument.name!r}")

            if argument.kind is Kind.POSITIONAL:
                if not argument.required:
                    if optional is None:
                        optional = argument.name
                elif optional is not None:
                    raise ValueError(f"required positional {argument.name!r} cannot follow optional positional {optional!r}")
                positionals.append(argument.name)

            names[argument.name] = argument
            if argument.letter is not None:
                letters[argument.letter] = argument.name

        object.__setattr__(self, "_arguments", tuple(arguments))
        object.__setattr__(self, "_names", names)
        object.__setattr__(self, "_letters", letters)
        object.__setattr__(self, "_positionals", tuple(positionals))

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __iter__(self):
        return iter(self._arguments)

    def __len__(self):
        return len(self._arguments)

    def __contains__(self, name, /):
        return name in self._names

    def __getitem__(self, name, /):
        return self._names[name]

    def __repr__(self):
        return f"registry({", ".join(argument.name for argument in self._arguments)})"

    def __rich_repr__(self):
        yield from self._arguments

    def resolve(self, candidate, /):
        """
        map a name or letter candidate (dashes already stripped) to its declaration.

        the letter index is consulted first, then the name index. positionals are
        never matched by name: they are filled by position only.
        """
        argument = self._names.get(self._letters.get(candidate, candidate))
        if argument is None or not argument.named:
            return None
        return argument

    def defaults(self):
        """
        return a fresh dict of every declared default, keyed by name.
        """
        return {argument.name: argument.default for argument in self._arguments if argument.default is not Unset}


__all__ = (
    "Registry",
)

