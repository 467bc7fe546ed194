import unittest

from blisp.pure.environment import Environment
from blisp.pure.forms import Integer


class EnvironmentTestCase(unittest.TestCase):

    def setUp(self):
        self.root = Environment({"x": Integer(1), "y": Integer(2)})
        self.child = self.root.child()
        self.grandchild = self.child.child()

    def test_lookup(self):
        self.child.define("x", Integer(10))

        self.assertEqual(Integer(10), self.grandchild.lookup("x"))
        self.assertEqual(Integer(2), self.grandchild.lookup("y"))
        self.assertEqual(Integer(1), self.root.lookup("x"))
        self.assertIsNone(self.grandchild.lookup("z"))

    def test_find(self):
        self.assertIs(self.root, self.grandchild.find("x"))
        self.assertIsNone(self.grandchild.find("z"))
        self.assertIn("y", self.grandchild)
        self.assertNotIn("z", self.grandchild)

    def test_define_replaces_in_same_frame(self):
        self.root.define("x", Integer(5))
        self.assertEqual(Integer(5), self.root.lookup("x"))

    def test_define_does_not_touch_parent(self):
        self.grandchild.define("x", Integer(3))
        self.assertEqual(Integer(1), self.root.lookup("x"))
        self.assertNotIn("x", self.child.bindings)

    def test_assign(self):
        self.grandchild.assign("x", Integer(7))
        self.assertEqual(Integer(7), self.root.lookup("x"))
        self.assertNotIn("x", self.grandchild.bindings)

        self.grandchild.assign("z", Integer(8))
        self.assertEqual(Integer(8), self.grandchild.bindings["z"])
        self.assertIsNone(self.child.lookup("z"))

    def test_child_sees_later_changes(self):
        self.root.define("late", Integer(4))
        self.assertEqual(Integer(4), self.grandchild.lookup("late"))


if __name__ == '__main__':
    unittest.main()
