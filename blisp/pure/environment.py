"""Lexical environments: a chain of binding frames, each falling back to its parent.

Frames are plain objects shared by reference. A Lambda holds on to the frame it was defined in, so that frame lives as
long as the Lambda does, even after the call or let that created it has returned.
"""


class Environment:
    """One frame of bindings (name: Form) plus an optional parent frame."""

    def __init__(self, bindings=None, parent=None):
        self.bindings = dict(bindings) if bindings else {}
        self.parent = parent

    def find(self, name):
        """Returns the nearest frame (self or an ancestor) binding name, or None."""
        frame = self
        while frame is not None:
            if name in frame.bindings:
                return frame
            frame = frame.parent
        return None

    def lookup(self, name):
        """Returns the nearest binding of name, or None if name is unbound in the whole chain."""
        frame = self.find(name)
        return frame.bindings[name] if frame is not None else None

    def define(self, name, value):
        """Binds name in this frame only. An existing binding in this frame is replaced."""
        self.bindings[name] = value

    def assign(self, name, value):
        """Rebinds the nearest existing binding of name. If there is none, name is defined in this frame."""
        frame = self.find(name)
        (frame if frame is not None else self).define(name, value)

    def child(self):
        """Returns a new, empty frame whose parent is this one."""
        return Environment(parent=self)

    def __contains__(self, name):
        return self.find(name) is not None

    def __repr__(self):
        return f"Environment({', '.join(self.bindings)})"
