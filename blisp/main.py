"""Uses blisp implementation to interpret blisp files or run in command-line mode. Also uses error handling context
manager. Called from blisp executable script.
"""

import argparse
import sys

from blisp.lang.error import ErrorHandler
from blisp.lang.session import Session
from blisp.lang.shell import Shell


def main(argv=None):
    """Runs blisp interpreter. Returns the exit status: 1 if a file run reported any error, else 0."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="blisp", description="minimal Lisp interpreter")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-t", "--trace", help="print every function application", action="store_true")
        args = parser.parse_args(argv)

        error_handler.trace = args.trace

        if args.file is None:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()
            return 0

        Session(error_handler, args.file, cmd_line=False).run()

    return 1 if error_handler.errors else 0


if __name__ == "__main__":
    sys.exit(main())
