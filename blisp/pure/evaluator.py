"""Evaluation of blisp forms against an Environment.

Symbols are looked up, lists are either special forms or applications, and every other form evaluates to itself.
Special forms are recognized on the literal head symbol of a list, before anything is looked up, so `let`, `if`,
`lambda` and `set!` always mean the special form in call position. They can still be bound as ordinary names, but
such a binding can never be called.

```
(let (<symbol> <form>) <body>)     ; one binding, visible in <body> only
(if <cond> <then> <else>)          ; only the selected branch is evaluated
(lambda (<symbol>*) <body>)        ; closes over the environment it is evaluated in
(set! <symbol> <form>)             ; rebinds the nearest binding, or defines it locally if unbound
```
"""

from blisp.lang.error import ArityError, FormTypeError, NotCallable, UnboundSymbol
from blisp.pure.environment import Environment
from blisp.pure.forms import Builtin, Lambda, List, Nil, Symbol, is_truthy, show


class Evaluator:
    """Evaluates forms. error_handler, if given, receives warnings and trace steps."""
    SPECIAL_FORMS = {"let": "eval_let", "if": "eval_if", "lambda": "eval_lambda", "set!": "eval_set"}

    def __init__(self, error_handler=None):
        self.error_handler = error_handler
        self.depth = 0  # application nesting, used to indent trace steps

    def eval(self, form, env):
        """Evaluates form in env and returns the resulting form."""
        if isinstance(form, Symbol):
            value = env.lookup(form.name)
            if value is None:
                raise UnboundSymbol("unbound symbol '{}'", form.name)
            return value

        elif isinstance(form, List):
            head, *args = form.elements
            if isinstance(head, Symbol) and head.name in Evaluator.SPECIAL_FORMS:
                return getattr(self, Evaluator.SPECIAL_FORMS[head.name])(head, args, env)
            return self.apply(self.eval(head, env), form, env)

        return form  # nil, booleans, integers, strings and functions are self-evaluating

    def eval_let(self, head, args, env):
        Evaluator._check_arity(head, args, 2)
        binding, body = args

        if not isinstance(binding, List) or len(binding.elements) != 2:
            raise FormTypeError("first argument to let must be a (name value) list, got '{}'", show(binding))

        name, value = binding.elements
        if not isinstance(name, Symbol):
            raise FormTypeError("let can only bind a symbol, got '{}'", show(name))
        self._check_name(name.name)

        let_env = env.child()
        let_env.define(name.name, self.eval(value, env))
        return self.eval(body, let_env)

    def eval_if(self, head, args, env):
        Evaluator._check_arity(head, args, 3)
        cond, then, otherwise = args

        if is_truthy(self.eval(cond, env)):
            return self.eval(then, env)
        return self.eval(otherwise, env)

    def eval_lambda(self, head, args, env):
        Evaluator._check_arity(head, args, 2)
        param_list, body = args

        if isinstance(param_list, Nil):  # "()" reads as nil
            return Lambda((), body, env)
        elif not isinstance(param_list, List):
            raise FormTypeError("first argument to lambda must be a parameter list, got '{}'", show(param_list))

        params = []
        for param in param_list.elements:
            if not isinstance(param, Symbol):
                raise FormTypeError("lambda parameter '{}' is not a symbol", show(param))
            elif param.name in params:
                raise FormTypeError("lambda parameter '{}' is repeated", param.name)
            self._check_name(param.name)
            params.append(param.name)

        return Lambda(tuple(params), body, env)

    def eval_set(self, head, args, env):
        Evaluator._check_arity(head, args, 2)
        name, value = args

        if not isinstance(name, Symbol):
            raise FormTypeError("first argument to set! must be a symbol, got '{}'", show(name))
        self._check_name(name.name)

        value = self.eval(value, env)
        env.assign(name.name, value)
        return value

    def apply(self, func, form, env):
        """Applies func to the arguments of call form, evaluated left to right in the caller's env. A Lambda's body is
        evaluated in a new frame under its captured env; a Builtin is handed a parentless frame holding its arguments.
        """
        head, *args = form.elements

        if not isinstance(func, (Lambda, Builtin)):
            raise NotCallable("'{}' is not callable (it is '{}')", (show(head), show(func)))
        elif len(args) != len(func.params):
            msg = "'{}' expects {} argument(s), got {}"
            raise ArityError(msg, (show(head), str(len(func.params)), str(len(args))))

        values = [self.eval(arg, env) for arg in args]

        if self.error_handler:
            self.error_handler.register_step("apply", show(form), self.depth)

        frame = func.env.child() if isinstance(func, Lambda) else Environment()
        for param, value in zip(func.params, values):
            frame.define(param, value)

        self.depth += 1
        try:
            if isinstance(func, Lambda):
                return self.eval(func.body, frame)
            return func.func(frame)
        finally:
            self.depth -= 1

    def _check_name(self, name):
        """Warns if name is a special form keyword, since a binding for it can never be called."""
        if name in Evaluator.SPECIAL_FORMS and self.error_handler:
            self.error_handler.warn("'{}' is a special form: this binding can never be called", name)

    @staticmethod
    def _check_arity(head, args, expected):
        if len(args) != expected:
            msg = "wrong number of arguments to '{}', expecting {}, got {}"
            raise ArityError(msg, (head.name, str(expected), str(len(args))))
