"""Runs equation programs from files or the command line, or starts the interactive shell. Also uses the error
handling context manager. Installed as the `equation` executable.
"""

import argparse

from equation.lang.error import ErrorHandler
from equation.lang.session import Session
from equation.lang.shell import Shell


def get_parser():
    parser = argparse.ArgumentParser(prog="equation", description="The equation calculus")
    parser.add_argument("target", help="file to run, or program with -e (if empty, goes to command-line mode)",
                        nargs="?")
    parser.add_argument("-e", "--expression", action="store_true", help="interpret target as a program, not a file")
    parser.add_argument("-t", "--trace", action="store_true", help="print every reduction step")
    parser.add_argument("-n", "--max-steps", type=int, default=None, metavar="N",
                        help="give up after N reduction steps (default: no limit)")
    parser.add_argument("-s", "--show", action="store_true", help="print the parsed program before running it")
    parser.add_argument("-d", "--dump", action="store_true", help="print the compiled procedures before running")
    return parser


def main(argv=None):
    """Runs equation interpreter. Called from equation executable script."""
    with ErrorHandler() as error_handler:
        args = get_parser().parse_args(argv)

        if args.target is None:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, trace=args.trace, max_steps=args.max_steps)
            Shell(sess).cmdloop()
            return

        path = Session.EXPR_FILE if args.expression else args.target
        sess = Session(error_handler, path, trace=args.trace, max_steps=args.max_steps)
        if args.expression:
            sess.add(args.target)
        else:
            sess.load(args.target)

        if args.show:
            print(sess.show() + "\n")
        if args.dump:
            print(sess.dump() + "\n")

        sess.run()
        for result in sess.results:
            print(result)


if __name__ == "__main__":
    main()
