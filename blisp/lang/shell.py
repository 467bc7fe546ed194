"""Handles interactive/command-line mode for blisp interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """blisp interpreter shell."""
    intro = "blisp interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "blisp> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0

    def default(self, line):
        """Reads, evaluates and prints one blisp form."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if self.sess.add(line, self.line_num):
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the blisp interpreter!\n\n"
              "Type one form per line. Integers, strings, true, false and nil evaluate to \n"
              "themselves; + - * / % take two integers; let, if, lambda and set! are special \n"
              "forms.\n\n"
              "Try it out by typing '(set! inc (lambda (n) (+ n 1)))'. This binds a function \n"
              "to 'inc'. Next, try typing '(inc 41)', giving 42 as the result.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
