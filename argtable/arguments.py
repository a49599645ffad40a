r"""
Argtable argument declarations.

Overview
- Argument: one declared command-line argument. A single record with an explicit
  kind tag instead of a class per kind:
  • Kind.FLAG: named, presence-only switch (no payload), e.g. -v/--version.
  • Kind.OPTION: named, value-bearing argument taking exactly one following token.
  • Kind.POSITIONAL: unnamed on the command line, matched by scan order.
- Ordinality: whether an argument is REQUIRED or OPTIONAL. A declared default
  makes the argument effectively optional whatever its ordinality says.

- Factories
  • flag(name, letter, descr): build a Kind.FLAG declaration.
  • option(name, letter, descr, choices, default=..., ordinality=...): build a Kind.OPTION declaration.
  • positional(name, descr, choices, default=..., ordinality=...): build a Kind.POSITIONAL declaration.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields declared in __introspectable__ as read-only properties.

Metadata (sanitized on construction)
- name: str, trimmed. Length and uniqueness are checked by the registry.
- letter: Unset | str, trimmed; "" means no short form.
- descr: Unset | str | Text (short help), non-empty when provided.
- kind: Kind (or its string value).
- choices: Iterable[str]; duplicates rejected unless a Set. Stored as an ordered tuple.
- default: Unset | str.
- ordinality: Ordinality (or its string value).

Construction only checks types and shapes. Whether a declaration makes sense as a
whole (a flag with choices, a positional with a letter, a default outside the
choices...) is decided by the registry, which sees every declaration at once.

Quick example:
    >>> from argtable.arguments import flag, option, positional
    >>> version = flag("version", "v", "Display version information")
    >>> colour = option("colour", "c", "Colour", {"red", "green", "blue"})
    >>> source = positional("source", "File to read")
"""
import functools
import operator
import re
from collections.abc import Iterable, Set
from enum import Enum

from rich.text import Text

from .utils import *


class Kind(Enum):
    """
    the kind tag of a declaration.
    """
    FLAG = "flag"
    OPTION = "option"
    POSITIONAL = "positional"


class Ordinality(Enum):
    """
    whether a declaration must be satisfied by the command line.
    """
    REQUIRED = "required"
    OPTIONAL = "optional"


class ArgumentType(type):
    """
    Metaclass that turns declarations into introspectable records.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and help output.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    - __rich_repr__ yields the fields of __introspectable__, in order.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - argument(name='colour', letter='c', kind=<Kind.OPTION: 'option'>, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_strings(cls, metadata, /):
    """
    Internal: normalize and validate the textual fields of a declaration.

    - name: must be a string; trimmed.
    - letter: Unset or a string; trimmed; an empty letter means "no short form"
      and is normalized to None.
    - descr: Unset, str or rich Text. Strings must be non-empty after trimming.
      Unset becomes None.
    - default: Unset or a string. Not trimmed; "" is a legitimate default.

    Raises
    - TypeError: for values of the wrong type.
    - ValueError: for an empty description.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    metadata["name"] = name.strip()

    if not isinstance(letter := metadata["letter"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'letter' must be a string")
    metadata["letter"] = coalesce(letter, "").strip() or None

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    if not isinstance(metadata["default"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'default' must be a string")


def _sanitize_tags(cls, metadata, /):
    """
    Internal: coerce 'kind' and 'ordinality' into their enumerations.

    Accepts either the member itself or its string value ("flag", "required", ...).
    Unknown values raise ValueError; other types raise TypeError.
    """
    for field, enum in (("kind", Kind), ("ordinality", Ordinality)):
        if not isinstance(value := metadata[field], enum | str):
            raise TypeError(f"{cls.__typename__} {field!r} must be a {enum.__name__} or a string")
        try:
            metadata[field] = enum(value)
        except ValueError:
            raise ValueError(f"{cls.__typename__} {field!r} must be one of %s" % ", ".join(
                repr(member.value) for member in enum
            )) from None


def _sanitize_choices(cls, metadata, /):
    """
    Internal: validate and normalize the allowed-value set.

    - choices must be a non-string iterable of strings.
    - a Set is accepted as-is (sorted for stable display); any other iterable
      must not contain duplicates and keeps its declaration order.
    - the result is stored as a tuple; an empty tuple means "any value".
    """
    if isinstance(choices := metadata["choices"], str) or not isinstance(choices, Iterable):
        raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")

    sanitized = []
    for choice in choices:
        if not isinstance(choice, str):
            raise TypeError(f"{cls.__typename__} 'choices' must only contain strings")
        if choice in sanitized:
            raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
        sanitized.append(choice)

    metadata["choices"] = tuple(sorted(sanitized)) if isinstance(choices, Set) else tuple(sanitized)


class Argument(metaclass=ArgumentType):
    """
    One declared command-line argument.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes,
      mirroring the sanitized metadata values.
    - required: True when the ordinality is REQUIRED and there is no default to
      fall back on.
    - named: True for flags and options (matched by -x/--name tokens).
    - valued: True for options and positionals (they carry a string value).
    """

    __introspectable__ = (
        "name",
        "letter",
        "descr",
        "kind",
        "choices",
        "default",
        "ordinality",
    )

    def __new__(
            cls,
            name,
            /,
            letter=Unset,
            descr=Unset,
            kind=Kind.OPTION,
            choices=(),
            default=Unset,
            ordinality=Ordinality.OPTIONAL,
    ):
        """
        Construct a declaration with the provided metadata.

        Parameters
        - name: str
          Full name, used as "--name" on the command line and as the lookup key
          for every accessor.
        - letter: Unset | str
          Short form, used as "-x". Omit (or pass "") for no short form.
        - descr: Unset | str | Text
          Short description for help. If Unset, becomes None.
        - kind: Kind | str
          Flag, option or positional.
        - choices: Iterable[str]
          Allowed values; empty means any value is accepted.
        - default: Unset | str
          Value recorded when the argument is absent from the command line.
        - ordinality: Ordinality | str
          Whether the command line must provide the argument.
        """
        metadata = {
            "name": name,
            "letter": letter,
            "descr": descr,
            "kind": kind,
            "choices": choices,
            "default": default,
            "ordinality": ordinality,
        }
        _sanitize_strings(cls, metadata)
        _sanitize_tags(cls, metadata)
        _sanitize_choices(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def required(self):
        return self.ordinality is Ordinality.REQUIRED and self.default is Unset

    @property
    def named(self):
        return self.kind is not Kind.POSITIONAL

    @property
    def valued(self):
        return self.kind is not Kind.FLAG

    def accepts(self, value, /):
        """
        tell whether 'value' is allowed by the declared choices (empty = any).
        """
        return not self.choices or value in self.choices


def flag(name, letter=Unset, descr=Unset, /, *, ordinality=Ordinality.OPTIONAL):
    """
    Declare a presence-only flag, e.g. flag("version", "v", "Display version information").
    """
    return Argument(name, letter, descr, Kind.FLAG, ordinality=ordinality)


def option(name, letter=Unset, descr=Unset, choices=(), /, *, default=Unset, ordinality=Ordinality.OPTIONAL):
    """
    Declare a named option taking exactly one value.

    Usage
        option("colour", "c", "Colour", ("red", "green", "blue"))
        option("count", "n", "Number of things", default="5")
    """
    return Argument(name, letter, descr, Kind.OPTION, choices, default, ordinality)


def positional(name, descr=Unset, choices=(), /, *, default=Unset, ordinality=Ordinality.REQUIRED):
    """
    Declare a positional argument; positionals are filled in declaration order.
    """
    return Argument(name, Unset, descr, Kind.POSITIONAL, choices, default, ordinality)


__all__ = (
    # Tags
    "Kind",
    "Ordinality",

    # Declaration record
    "Argument",

    # Factories
    "flag",
    "option",
    "positional",
)
