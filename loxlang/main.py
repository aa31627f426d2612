"""Runs .lox files or the interactive command-line mode of the Lox interpreter, inside the error handling context
manager. Called from the lox console script.
"""

import argparse
import logging

from loxlang.lang.error import ErrorHandler
from loxlang.lang.session import Config, Session
from loxlang.lang.shell import Shell


def main(argv=None):
    """Runs lox interpreter. Called from lox console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="lox")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-p", "--parse-tree", help="print the parse tree of the source", action="store_true")
        parser.add_argument("-a", "--emit-ast", help="print the syntax tree of the source before running it",
                            action="store_true")
        parser.add_argument("-v", "--verbose", help="log debug information", action="store_true")
        args = parser.parse_args(argv)

        config = Config(args.file, args.parse_tree, args.emit_ast, args.verbose)
        logging.basicConfig(format="%(levelname)s: %(message)s",
                            level=logging.DEBUG if config.verbose else logging.WARNING)

        if config.path is not None:
            Session(error_handler, config.path, config, cmd_line=False).run_file()

        else:
            Shell(Session(error_handler, Session.SH_FILE, config, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
