import unittest

from blisp.lang.builtins import BUILTINS, make_root_environment, truncdiv, truncmod
from blisp.lang.error import DivisionByZero, FormTypeError, IntegerOverflow
from blisp.pure.evaluator import Evaluator
from blisp.pure.forms import NIL, Builtin, Integer
from blisp.pure.lexical import Reader, tokenize


class RootEnvironmentTestCase(unittest.TestCase):

    def test_make_root_environment(self):
        root = make_root_environment()
        self.assertIsNone(root.parent)
        self.assertEqual(NIL, root.lookup("nil"))

        for name in ["+", "-", "*", "/", "%"]:
            builtin = root.lookup(name)
            self.assertIsInstance(builtin, Builtin, name)
            self.assertEqual(("a", "b"), builtin.params, name)

        self.assertEqual(sorted(BUILTINS) + ["nil"], sorted(root.bindings))

    def test_fresh_root_per_call(self):
        first, second = make_root_environment(), make_root_environment()
        first.define("x", Integer(1))
        self.assertIsNone(second.lookup("x"))


class NumericTestCase(unittest.TestCase):

    def setUp(self):
        self.env = make_root_environment()

    def run_line(self, line):
        return Evaluator().eval(Reader(tokenize(line)).read_form(), self.env)

    def test_arithmetic(self):
        cases = {
            "(+ 1 2)": 3,
            "(- 5 3)": 2,
            "(- 3 5)": -2,
            "(* 4 5)": 20,
            "(/ 10 2)": 5,
            "(/ 7 2)": 3,
            "(% 7 2)": 1,
            "(% 10 5)": 0,
            "(+ 9223372036854775806 1)": 2 ** 63 - 1,
        }
        for case, expected in cases.items():
            self.assertEqual(Integer(expected), self.run_line(case), case)

    def test_truncation(self):
        cases = {(7, 2): (3, 1), (-7, 2): (-3, -1), (7, -2): (-3, 1), (-7, -2): (3, -1), (0, 3): (0, 0)}
        for (a, b), (quotient, remainder) in cases.items():
            self.assertEqual(quotient, truncdiv(a, b), (a, b))
            self.assertEqual(remainder, truncmod(a, b), (a, b))

    def test_errors(self):
        should_raise = {
            "(/ 1 0)": DivisionByZero,
            "(% 1 0)": DivisionByZero,
            "(+ 1 true)": FormTypeError,
            "(+ \"1\" 2)": FormTypeError,
            "(* nil 2)": FormTypeError,
            "(- + 1)": FormTypeError,
            "(+ 9223372036854775807 1)": IntegerOverflow,
            "(* 9223372036854775807 2)": IntegerOverflow,
            "(- (- 0 9223372036854775807) 2)": IntegerOverflow,
        }
        for case, error in should_raise.items():
            self.assertRaises(error, self.run_line, case)

    def test_type_error_names_offending_value(self):
        try:
            self.run_line("(+ 1 \"two\")")
        except FormTypeError as error:
            self.assertEqual("\"two\"", error.expr)
        else:
            self.fail("FormTypeError not raised")


if __name__ == '__main__':
    unittest.main()
