"""Forms: the closed set of values in blisp. A form is at once a node of the syntax tree produced by the reader and a
runtime value produced by the evaluator; there is no separate compiled representation.

```
<form> ::= nil | true | false          ; Nil, Bool
         | <integer>                   ; Integer, 64-bit signed
         | <string>                    ; String, "..." with \\n, \\\\ and \\" escapes
         | <symbol>                    ; Symbol
         | "(" <form>+ ")"             ; List ("()" reads as nil)
```

Lambda and Builtin forms are never read, only produced by evaluation. They print as opaque labels.
"""

from dataclasses import dataclass, field
from typing import Callable, Tuple

from blisp.lang.error import GenericException


class Form:
    """Superclass of every blisp form. Subclasses are the only variants: dispatch on them with isinstance."""

    def __str__(self):
        return show(self)


@dataclass(frozen=True)
class Nil(Form):
    """The empty/absent value."""


@dataclass(frozen=True)
class Bool(Form):
    value: bool


@dataclass(frozen=True)
class Integer(Form):
    value: int

    MIN = -2 ** 63
    MAX = 2 ** 63 - 1

    @staticmethod
    def in_range(value):
        return Integer.MIN <= value <= Integer.MAX


@dataclass(frozen=True)
class String(Form):
    value: str


@dataclass(frozen=True)
class Symbol(Form):
    name: str


@dataclass(frozen=True)
class List(Form):
    elements: Tuple[Form, ...]

    def __post_init__(self):
        assert self.elements, "empty lists must be read as nil"


@dataclass(frozen=True, eq=False)
class Lambda(Form):
    """User-defined function. env is the Environment active where the lambda was evaluated."""
    params: Tuple[str, ...]
    body: Form
    env: "Environment" = field(repr=False)


@dataclass(frozen=True, eq=False)
class Builtin(Form):
    """Native function. func receives the call frame and looks its arguments up by name."""
    name: str
    params: Tuple[str, ...]
    func: Callable = field(repr=False)


NIL = Nil()
TRUE = Bool(True)
FALSE = Bool(False)


def is_truthy(form):
    """Only nil and false are falsy: 0, "" and lists are all truthy."""
    return not isinstance(form, Nil) and form != FALSE


def escape(text):
    """Inverse of unescape: escapes newlines, backslashes and double quotes."""
    return text.replace("\\", "\\\\").replace("\n", "\\n").replace("\"", "\\\"")


def unescape(text):
    """Decodes the body of a string token. '\\n' is a newline, any other escaped character stands for itself."""
    chars = []
    escaped = False
    for char in text:
        if escaped:
            chars.append("\n" if char == "n" else char)
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            chars.append(char)
    return "".join(chars)


def show(form):
    """Returns the canonical printed form of form. Never fails for a Form."""
    if isinstance(form, Nil):
        return "nil"
    elif isinstance(form, Bool):
        return "true" if form.value else "false"
    elif isinstance(form, Integer):
        return str(form.value)
    elif isinstance(form, String):
        return f"\"{escape(form.value)}\""
    elif isinstance(form, Symbol):
        return form.name
    elif isinstance(form, List):
        return "(" + " ".join(show(element) for element in form.elements) + ")"
    elif isinstance(form, Lambda):
        return "<function>"
    elif isinstance(form, Builtin):
        return "<builtin function>"
    raise GenericException("'{}' is not a blisp form", repr(form), internal=True)
