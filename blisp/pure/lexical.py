"""Lexical analysis for blisp: tokenization of a line of source and reading of the token stream into forms.

Tokens are tried in this order:

```
<token> ::= "~@"                                ; splice marker (one token, not "~" then "@")
          | "[" | "]" | "{" | "}" | "(" | ")"
          | "~" | "@" | "^" | "'" | "`"         ; quoting markers
          | '"' (<escaped char> | <char>)* '"'  ; string (may be unterminated, reader rejects it)
          | ";" <char>*                         ; comment: consumed, never emitted
          | <atom char>+                        ; anything but whitespace, ",", brackets, ";^'`"
```

Whitespace and commas separate tokens and are never emitted. Tokenization never fails: malformed input produces tokens
that the Reader rejects.
"""

import re

from blisp.lang.error import InvalidInteger, UnexpectedToken, UnterminatedList, UnterminatedString
from blisp.pure.forms import FALSE, NIL, TRUE, Integer, List, String, Symbol, unescape


TOKEN = re.compile(r"""[\s,]*(~@|[\[\]{}()'`~^@]|"(?:\\.|[^\\"])*"?|;.*|[^\s\[\]{}()'"`,;^]+)""")
STRING = re.compile(r'"(?:\\.|[^\\"])*"', re.DOTALL)
INTEGER = re.compile(r"[0-9]+")


def tokenize(text):
    """Splits text into a list of tokens, dropping separators and comments."""
    return [token for token in TOKEN.findall(text) if not token.startswith(";")]


class Reader:
    """Reads forms from a token list by advancing a single cursor, pos, over it."""
    CLOSERS = [")", "]", "}"]
    UNSUPPORTED = ["[", "{", "'", "`", "~", "~@", "^", "@"]  # no vectors, maps, macros or quasiquote

    def __init__(self, tokens):
        self.tokens = tokens
        self.pos = 0

    def next(self):
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def peek(self):
        return self.tokens[self.pos]

    def empty(self):
        return self.pos >= len(self.tokens)

    def rest(self):
        """Tokens not yet consumed."""
        return self.tokens[self.pos:]

    def read_form(self):
        """Reads exactly one form and leaves the remaining tokens unread. Returns None if there are no tokens."""
        if self.empty():
            return None
        if self.peek() == "(":
            return self.read_list()
        return self.read_atom()

    def read_list(self):
        """Reads sub-forms up to the matching ")". "()" reads as nil."""
        self.next()  # skip open paren

        elements = []
        while True:
            if self.empty():
                raise UnterminatedList("unterminated list: expected '{}' before end of input", ")", diagnosis=False)
            if self.peek() == ")":
                break
            elements.append(self.read_form())
        self.next()  # eat close paren

        if not elements:
            return NIL
        return List(tuple(elements))

    def read_atom(self):
        token = self.next()

        if token in Reader.CLOSERS:
            raise UnexpectedToken("unexpected '{}'", token)
        elif token in Reader.UNSUPPORTED:
            raise UnexpectedToken("'{}' is not supported syntax", token)

        elif token.startswith("\""):
            if not STRING.fullmatch(token):
                raise UnterminatedString("'{}' is missing its closing quote", token)
            return String(unescape(token[1:-1]))

        elif "0" <= token[0] <= "9":
            if not INTEGER.fullmatch(token):
                raise InvalidInteger("'{}' is not a valid integer", token)
            value = int(token)
            if not Integer.in_range(value):
                raise InvalidInteger("'{}' does not fit in a 64-bit integer", token)
            return Integer(value)

        elif token == "true":
            return TRUE
        elif token == "false":
            return FALSE
        return Symbol(token)
