"""Handles interactive/command-line mode for the equation interpreter. Uses cmd as backend."""

import cmd

from equation.grammar.tokens import PUNCT, tokenize
from equation.lang.error import ParseError, UnterminatedComment


class Shell(cmd.Cmd):
    """Equation calculus interpreter shell."""
    intro = "Equation calculus interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continutations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess
        self._tmp_line = ""

    @staticmethod
    def needs_continuation(line):
        """Whether line has unclosed parentheses or block comment, or is an unfinished `name params = term` without its
        ';'. Comments don't count: only tokens do.
        """
        try:
            tokens = tokenize(line)[:-1]  # drop EOF
        except UnterminatedComment:
            return True
        except ParseError:
            return False  # reported when the line is added

        punct = [token.text for token in tokens if token.kind == PUNCT]
        if punct.count("(") > punct.count(")"):
            return True
        return "=" in punct and tokens[-1].text != ";"

    def default(self, line):
        """Adds a definition to the session."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line = self._tmp_line + line + "\n"

            if self.needs_continuation(line):
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt
            self.sess.add(line)

    def do_run(self, arg):
        """Evaluates 'main' and prints its normal form."""
        with self.sess.error_handler:
            self.sess.run()
            print(self.sess.pop())

    def do_eval(self, arg):
        """Evaluates a term using the current definitions, e.g. 'eval K I K'."""
        with self.sess.error_handler:
            self.sess.evaluate(arg)
            print(self.sess.pop())

    def do_show(self, arg):
        """Prints the current definitions."""
        print(self.sess.show())

    def do_dump(self, arg):
        """Prints the compiled procedures (requires a 'main' definition)."""
        with self.sess.error_handler:
            print(self.sess.dump())

    def do_trace(self, arg):
        """Toggles printing of every reduction step."""
        self.sess.trace = not self.sess.trace
        print(f"trace {'on' if self.sess.trace else 'off'}")

    def do_reset(self, arg):
        """Forgets every definition."""
        self.sess.definitions = []

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the equation interpreter!\n\n"
              "Programs are lists of definitions such as 'K x y = x;', whose bodies are \n"
              "applications of definitions and parameters. Evaluation starts from 'main'.\n\n"
              "Try it out by typing 'I x = x;' and 'K x y = x;'. Next, try typing \n"
              "'eval K I K'. This will apply 'K' to 'I' and 'K', giving 'I' as the result.\n\n"
              "Commands: run, eval TERM, show, dump, trace, reset, exit.")

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
