"""Session control for blisp. Runs the read/eval/print pipeline line by line, either in command line mode or file
interpretation mode. A session keeps one root Environment for its whole lifetime.
"""

from blisp.lang.builtins import make_root_environment
from blisp.lang.error import GenericException
from blisp.pure.evaluator import Evaluator
from blisp.pure.forms import show
from blisp.pure.lexical import Reader, tokenize


class Session:
    """Governs a blisp session, with control over the root environment."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line):
        if path == Session.SH_FILE and not cmd_line:
            raise GenericException("'<in>' is a reserved filename", diagnosis=False)

        self.error_handler = error_handler
        self.error_handler.register_file(path)
        self.error_handler.fatal = False  # an error only ends evaluation of its own line

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = make_root_environment()
        self.evaluator = Evaluator(error_handler)
        self.results = []  # values of evaluated lines, latest last

    def add(self, line, line_num):
        """Reads one form from line, evaluates it in the session's environment and appends the value to results.
        Returns whether line held a form. Any tokens after the first form are ignored with a warning.
        """
        line = line.rstrip("\n")
        self.error_handler.register_line(self.path, line, line_num)  # in case error is raised

        reader = Reader(tokenize(line))
        form = reader.read_form()
        if not reader.empty():
            ignored = " ".join(reader.rest())
            self.error_handler.warn("ignoring '{}': only one form is read per line", ignored, diagnosis=False)

        if form is not None:
            self.results.append(self.evaluator.eval(form, self.env))

        self.error_handler.remove_line(self.path)  # error was not raised
        return form is not None

    def pop(self):
        """Removes the latest result and returns its printed form."""
        return show(self.results.pop())

    def run(self):
        """Runs every line of self.path, printing each result as soon as it is evaluated. An error in one line is
        reported and the next line is run.
        """
        try:
            with open(self.path, "r") as file:
                lines = file.readlines()
        except OSError:
            raise GenericException("'{}' could not be opened", self.path, diagnosis=False)

        for line_num, line in enumerate(lines, 1):
            with self.error_handler:
                if self.add(line, line_num):
                    print(self.pop())
