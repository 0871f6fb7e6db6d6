import unittest

from equation.grammar.tokens import EOF, NAME, PUNCT, tokenize
from equation.lang.error import ParseError, UnterminatedComment
from equation.lang.lexical import parse_program, parse_term
from equation.pure.term import Application, Definition, Variable


def app(*names):
    return Application([Variable(name) if isinstance(name, str) else name for name in names])


class TokenizeTestCase(unittest.TestCase):

    def test_tokenize(self):
        tokens = tokenize("id (x) = x; -- comment ( = ;\n/* block\n comment */ main1")
        self.assertEqual([NAME, PUNCT, NAME, PUNCT, PUNCT, NAME, PUNCT, NAME, EOF], [token.kind for token in tokens])
        self.assertEqual(["id", "(", "x", ")", "=", "x", ";", "main1", ""], [token.text for token in tokens])
        self.assertEqual(0, tokens[0].pos)

    def test_junk_only(self):
        cases = ["", "   \n\t", "-- just a comment\n", "/* a */ /* b */", "-- no newline"]
        for case in cases:
            self.assertEqual([EOF], [token.kind for token in tokenize(case)], case)

    def test_errors(self):
        should_raise = ["f = x + y;", "main = /* never closed", "f.x", "λx.x"]
        for case in should_raise:
            self.assertRaises(ParseError, tokenize, case)

    def test_unterminated_comment(self):
        should_raise = ["main = /* never closed", "/*", "K x y = x; /* x */ /* y"]
        for case in should_raise:
            self.assertRaises(UnterminatedComment, tokenize, case)

        with self.assertRaises(ParseError) as context:
            tokenize("main = K $")
        self.assertNotIsInstance(context.exception, UnterminatedComment)

    def test_error_location(self):
        with self.assertRaises(ParseError) as context:
            tokenize("a = a;\nmain = b $;")
        error = context.exception
        self.assertEqual(2, error.line_num)
        self.assertEqual(9, error.start)
        self.assertEqual(10, error.end)
        self.assertEqual("main = b $;", error.expr)


class ParseTestCase(unittest.TestCase):

    def test_parse_program(self):
        cases = {
            "K x y = x;": [Definition("K", ["x", "y"], Variable("x"))],
            "id (x) x": [Definition("id", ["x"], Variable("x"))],
            "main () (id id)": [Definition("main", [], app("id", "id"))],
            "x() = x;": [Definition("x", [], Variable("x"))],
            "main = f (g x) b;": [Definition("main", [], app("f", app("g", "x"), "b"))],
            "main = (f a) b;": [Definition("main", [], app(app("f", "a"), "b"))],
            "main = ((x));": [Definition("main", [], Variable("x"))],
            "id (x) x; main () (id id);": [Definition("id", ["x"], Variable("x")),
                                          Definition("main", [], app("id", "id"))],
            "S x y z = x z (y z);\n-- comment\nI = S K K;": [
                Definition("S", ["x", "y", "z"], app("x", "z", app("y", "z"))),
                Definition("I", [], app("S", "K", "K")),
            ],
            "": [],
            "-- just a comment\n": [],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_program(case), case)

    def test_parse_program_errors(self):
        should_raise = [
            "K x y x;",          # missing '='
            "main = ;",          # missing body
            "main = (f x;",      # unclosed application
            "main = f x",        # missing ';'
            "= x;",              # missing name
            "main () x y",       # 'y' is not a definition
            "main = f ) ;",
            "main (x = x;",
            "main = ();",
        ]
        for case in should_raise:
            self.assertRaises(ParseError, parse_program, case)

    def test_parse_term(self):
        cases = {
            "f": Variable("f"),
            "f (g x)": app("f", app("g", "x")),
            " (f a) /* c */ b ": app(app("f", "a"), "b"),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_term(case), case)

        should_raise = ["", "f )", "f = g", "(f"]
        for case in should_raise:
            self.assertRaises(ParseError, parse_term, case)

    def test_path(self):
        with self.assertRaises(ParseError) as context:
            parse_program("main = ;", "prog.eq")
        self.assertEqual("prog.eq", context.exception.path)
        self.assertEqual(1, context.exception.line_num)


if __name__ == '__main__':
    unittest.main()
