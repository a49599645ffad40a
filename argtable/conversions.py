"""
Argtable conversions: text → int / float / bool for the typed accessors.

The parser only deals in strings; these helpers turn a stored value into a
primitive using the plain textual grammar of each type, and nothing more
permissive than that:

- to_int: optional sign, then ASCII decimal digits ("5", "-12", "+7").
  Python's int() would also take "1_000", "٣" or surrounding blanks; those are rejected.
- to_float: optional sign, decimal digits with an optional fraction, optional
  exponent ("1.456", ".5", "5.", "1e3", "-2.5E-2"). No "nan", "inf" or underscores.
- to_bool: the case-sensitive literals "true"/"false", plus "1"/"0" so that a
  declaration whose choices are {"true", "false", "1", "0"} is always convertible.

Every failure raises ConversionError (a ValueError) naming the value and the target type.
"""
import re

from .faults import ConversionError, FaultCode, getdoc

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_BOOLEANS = {
    "true": True,
    "1": True,
    "false": False,
    "0": False,
}


def _unconvertible(value, typename, name):
    subject = "value %r" % value if name is None else "value %r of argument %r" % (value, name)
    return ConversionError(
        "%s is not a valid %s" % (subject, typename),
        title="unconvertible value",
        code=FaultCode.UNCONVERTIBLE_VALUE,
        hint={
            "integer": "use decimal digits with an optional sign (for example: 42 or -7)",
            "float": "use decimal notation with an optional exponent (for example: 1.5 or 2e-3)",
            "boolean": "use 'true' or 'false' (or '1' / '0')",
        }[typename],
        value=value,
        argument=name,
        docs=getdoc(FaultCode.UNCONVERTIBLE_VALUE)
    )


def to_int(value, /, name=None):
    if not isinstance(value, str):
        raise TypeError("to_int() argument must be a string")
    if not _INTEGER.fullmatch(value):
        raise _unconvertible(value, "integer", name)
    return int(value)


def to_float(value, /, name=None):
    if not isinstance(value, str):
        raise TypeError("to_float() argument must be a string")
    if not _FLOAT.fullmatch(value):
        raise _unconvertible(value, "float", name)
    return float(value)


def to_bool(value, /, name=None):
    if not isinstance(value, str):
        raise TypeError("to_bool() argument must be a string")
    try:
        return _BOOLEANS[value]
    except KeyError:
        raise _unconvertible(value, "boolean", name) from None


__all__ = (
    "to_int",
    "to_float",
    "to_bool",
)
