"""blisp: a minimal Lisp interpreter.

Basic program flow, once per line of input:
    1. Lexer: splits the line into tokens (see blisp/pure/lexical.py)
    2. Reader: reads one form from the tokens, advancing a single cursor over them
        - The form is both the syntax tree and a runtime value (see blisp/pure/forms.py)
    3. Evaluator: evaluates the form against an Environment (see blisp/pure/evaluator.py)
        - The root Environment holds nil and the builtins (see blisp/lang/builtins.py) and lives as long as the session
    4. Printer: prints the resulting form

Errors end evaluation of their own line only; see blisp/lang/error.py.
"""

from blisp.lang.builtins import make_root_environment
from blisp.pure.evaluator import Evaluator
from blisp.pure.forms import show
from blisp.pure.lexical import Reader, tokenize


def read(line):
    """Reads the first form of line. Returns None if line has no form (blank or comment only)."""
    return Reader(tokenize(line)).read_form()


def evaluate(form, env, error_handler=None):
    """Evaluates form in env."""
    return Evaluator(error_handler).eval(form, env)


def rep(line, env=None):
    """Reads, evaluates and prints line. Returns None if line has no form."""
    form = read(line)
    if form is None:
        return None
    return show(evaluate(form, env if env is not None else make_root_environment()))
