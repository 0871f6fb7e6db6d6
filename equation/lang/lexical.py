"""Parser for equation programs: turns source text into a list of Definitions (see pure/term.py). For the grammar, see
grammar/tokens.py.

Two spellings of a definition are accepted:

```
k x y = x;          -- parameters separated by spaces, body up to ';'
k (x y) x           -- compact form: parenthesized parameters, a single atom as body
```

The parser is a plain recursive descent over the token list. It does no name resolution: undefined variables and
duplicate names are the compiler's business.
"""

from equation.grammar.tokens import EOF, NAME, Source, tokenize
from equation.pure.term import Application, Definition, Variable


class Parser:
    """Recursive-descent parser over the tokens of one Source."""

    def __init__(self, text, path=None):
        self.source = Source(text, path)
        self.tokens = tokenize(self.source)
        self.pos = 0

    @property
    def token(self):
        return self.tokens[self.pos]

    def advance(self):
        token = self.token
        if token.kind != EOF:
            self.pos += 1
        return token

    def accept(self, text):
        """Consumes the current token if it is the punctuation text. Returns whether it did."""
        if self.token.kind != NAME and self.token.text == text:
            self.advance()
            return True
        return False

    def expect(self, text, context):
        if not self.accept(text):
            raise self.error("'{}' expected '{}' " + context + ", got {}", (text, self.token))

    def expect_name(self, context):
        if self.token.kind != NAME:
            raise self.error("'{}' expected a name " + context + ", got {}", (self.token,))
        return self.advance().text

    def error(self, msg, details=()):
        token = self.token
        return self.source.error(msg, token.pos, len(token.text), details)

    def program(self):
        definitions = []
        while self.token.kind != EOF:
            definitions.append(self.definition())
        return definitions

    def definition(self):
        name = self.expect_name("to start a definition")

        compact = self.accept("(")
        params = []
        while self.token.kind == NAME:
            params.append(self.advance().text)
        if compact:
            self.expect(")", "to close the parameter list of '" + name + "'")

        if self.accept("="):
            body = self.term()
            self.expect(";", "to end the definition of '" + name + "'")
        elif compact:
            body = self.atom()
            self.accept(";")
        else:
            raise self.error("'{}' expected '=' after the parameters of '{}', got {}", (name, self.token))

        return Definition(name, params, body)

    def term(self):
        terms = [self.atom()]
        while self.token.kind == NAME or self.token.text == "(":
            terms.append(self.atom())
        return terms[0] if len(terms) == 1 else Application(terms)

    def atom(self):
        if self.token.kind == NAME:
            return Variable(self.advance().text)
        elif self.accept("("):
            term = self.term()
            self.expect(")", "to close the application")
            return term
        raise self.error("'{}' expected a name or '(', got {}", (self.token,))


def parse_program(text, path=None):
    """Parses text into a list of Definitions. Raises ParseError on invalid syntax."""
    return Parser(text, path).program()


def parse_term(text, path=None):
    """Parses text as a single term, e.g. for evaluating a term typed into the shell."""
    parser = Parser(text, path)
    term = parser.term()
    if parser.token.kind != EOF:
        raise parser.error("'{}' has trailing {} after the term", (parser.token,))
    return term
