"""Builtin functions and the root environment. Every builtin takes exactly two integers, bound as `a` and `b` in the
call frame.

Division truncates toward zero and `%` takes the sign of the dividend, so that `(/ -7 2)` is -3 and `(% -7 2)` is -1.
Results must fit in a 64-bit signed integer.
"""

import operator

from blisp.lang.error import DivisionByZero, FormTypeError, IntegerOverflow
from blisp.pure.environment import Environment
from blisp.pure.forms import NIL, Builtin, Integer, show


PARAMS = ("a", "b")


def truncdiv(a, b):
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def truncmod(a, b):
    """Remainder of truncdiv: has the sign of a."""
    return a - b * truncdiv(a, b)


def operands(frame, verb):
    """Returns the int values of a and b in frame. Raises FormTypeError unless both are Integers."""
    a, b = (frame.lookup(param) for param in PARAMS)
    if not isinstance(a, Integer) or not isinstance(b, Integer):
        bad = a if not isinstance(a, Integer) else b
        msg = "'{}' is not an integer: cannot " + verb + " '{}' and '{}'"
        raise FormTypeError(msg, (show(bad), show(a), show(b)))
    return a.value, b.value


def numeric(verb, func, divides=False):
    """Returns the callback of a two-integer builtin. divides guards against a zero b."""

    def builtin(frame):
        a, b = operands(frame, verb)
        if divides and b == 0:
            raise DivisionByZero("cannot " + verb + " '{}' by zero", str(a))

        result = func(a, b)
        if not Integer.in_range(result):
            msg = "result of " + verb + " '{}' and '{}' does not fit in a 64-bit integer"
            raise IntegerOverflow(msg, (str(a), str(b)))
        return Integer(result)

    return builtin


BUILTINS = {
    "+": numeric("add", operator.add),
    "-": numeric("subtract", operator.sub),
    "*": numeric("multiply", operator.mul),
    "/": numeric("divide", truncdiv, divides=True),
    "%": numeric("mod", truncmod, divides=True),
}


def make_root_environment():
    """Returns a new parentless frame holding nil and every builtin."""
    root = Environment({"nil": NIL})
    for name, func in BUILTINS.items():
        root.define(name, Builtin(name, PARAMS, func))
    return root
