"""Token generator for the equation calculus.

The surface grammar is small enough to state in full:

```
<program>    ::= <definition>*
<definition> ::= <name> <params> "=" <term> ";"
               | <name> "(" <name>* ")" <atom> [";"]   ; compact form: `id (x) x`
<params>     ::= <name>* | "(" <name>* ")"
<term>       ::= <atom> <atom>*                       ; two or more atoms form an application
<atom>       ::= <name> | "(" <term> ")"              ; `(x)` is just `x`
<name>       ::= [A-Za-z0-9]+                         ; maximal alphanumeric run
```

Whitespace, line comments (`-- ...` to end of line) and block comments (`/* ... */`, not nesting) may appear between
any two tokens. Parsing proper lives in lang/lexical.py.
"""

from dataclasses import dataclass
import re

from equation.lang.error import ParseError, UnterminatedComment


class Invariate:
    """Punctuation tokens."""
    CHARS = {
        "<open_paren>": "(",
        "<close_paren>": ")",
        "<equals>": "=",
        "<semicolon>": ";",
    }


NAME = "name"
PUNCT = "punct"
EOF = "eof"

_NAME = re.compile(r"[A-Za-z0-9]+")
_SPACE = re.compile(r"\s+")
_LINE_COMMENT = re.compile(r"--[^\n]*")
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int  # offset into the source text

    def __str__(self):
        return "end of input" if self.kind == EOF else f"'{self.text}'"


class Source:
    """Source text with helpers to turn offsets into line numbers for error messages."""

    def __init__(self, text, path=None):
        self.text = text
        self.path = path

    def locate(self, pos):
        """Returns (line, line_num, col) of offset pos. line_num is 1-based, col 0-based."""
        line_start = self.text.rfind("\n", 0, pos) + 1
        line_end = self.text.find("\n", pos)
        if line_end == -1:
            line_end = len(self.text)
        return self.text[line_start:line_end], self.text.count("\n", 0, pos) + 1, pos - line_start

    def error(self, msg, pos, length=1, details=(), error=ParseError):
        """Returns an error (a ParseError class) pointing at the `length` chars starting from offset pos. The offending
        line fills the first {} of msg, details fill the rest.
        """
        line, line_num, col = self.locate(pos)
        return error(msg, (line,) + tuple(details), line_num, col, col + max(length, 1), path=self.path)


def junk(source, pos):
    """Skips whitespace and comments starting from pos. Returns the offset of the next token."""
    text = source.text
    while pos < len(text):
        for pattern in (_SPACE, _LINE_COMMENT, _BLOCK_COMMENT):
            match = pattern.match(text, pos)
            if match:
                pos = match.end()
                break
        else:
            if text.startswith("/*", pos):
                raise source.error("'{}' has an unterminated block comment", pos, 2, error=UnterminatedComment)
            return pos
    return pos


def tokenize(source):
    """Returns the list of Tokens in source, always terminated by an EOF token."""
    if isinstance(source, str):
        source = Source(source)

    text = source.text
    tokens = []
    pos = junk(source, 0)

    while pos < len(text):
        match = _NAME.match(text, pos)
        if match:
            tokens.append(Token(NAME, match.group(), pos))
            pos = match.end()
        elif text[pos] in Invariate.CHARS.values():
            tokens.append(Token(PUNCT, text[pos], pos))
            pos += 1
        else:
            raise source.error("'{}' contains unexpected character '{}'", pos, details=(text[pos],))
        pos = junk(source, pos)

    tokens.append(Token(EOF, "", len(text)))
    return tokens
