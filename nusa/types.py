"""Runtime values for NusaLang.

A value is one of:

* a Python ``float`` (number),
* a Python ``str`` (string),
* a :class:`FunctionValue` (user-defined function).

Numbers are always floats, including the results of calls, so the
interpreter never has to reconcile ``int`` and ``float``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple, Union
import math

from .ast import Stmt


@dataclass(frozen=True)
class FunctionValue:
    """A user-defined function.

    Holds only the parameter names and body taken from the definition,
    never the environment it was defined in. Calls see whatever the caller
    can see at the time of the call.
    """
    name: str
    params: Tuple[str, ...]
    body: Tuple[Stmt, ...]

    @property
    def arity(self) -> int:
        return len(self.params)

    def __repr__(self) -> str:
        return f"<function {self.name}>"


Value = Union[float, str, FunctionValue]


def format_number(n: float) -> str:
    """Render a number in plain decimal notation.

    Integral values drop the fractional part (``9.0`` -> ``9``) and no
    value ever uses exponent notation (``1e-07`` -> ``0.0000001``).
    """
    if math.isnan(n):
        return 'NaN'
    if math.isinf(n):
        return 'inf' if n > 0 else '-inf'
    text = format(Decimal(repr(n)), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def to_string(value: Value) -> str:
    """Textual form used by ``print``."""
    if isinstance(value, FunctionValue):
        return '<function>'
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        return format_number(value)
    raise TypeError(f"not a NusaLang value: {value!r}")


def type_name(value: Value) -> str:
    if isinstance(value, FunctionValue):
        return 'function'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, float):
        return 'number'
    raise TypeError(f"not a NusaLang value: {value!r}")
