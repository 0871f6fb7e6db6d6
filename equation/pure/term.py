"""Abstract syntax tree for the equation calculus, plus the printer that turns it back into surface syntax.

A program is a list of Definitions. Definition bodies are Terms, and a Term is either a Variable or an Application of
two or more Terms:

```
(f a b)       = Application([Variable("f"), Variable("a"), Variable("b")])
(f (g x) b)   = Application([Variable("f"), Application([Variable("g"), Variable("x")]), Variable("b")])
```

There are no abstractions: the only binders are the parameters of a Definition.
"""

from dataclasses import dataclass


class Term:
    """Superclass for Variables and Applications."""

    def __str__(self):
        return format_term(self)


@dataclass(frozen=True)
class Variable(Term):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True, init=False)
class Application(Term):
    """Application of a head term to one or more arguments. Stored n-ary: (f a b) is not nested as ((f a) b)."""
    terms: tuple

    def __init__(self, terms):
        terms = tuple(terms)
        if len(terms) < 2:
            raise ValueError("an application needs at least two terms, got {}".format(len(terms)))
        object.__setattr__(self, "terms", terms)


@dataclass(frozen=True, init=False)
class Definition:
    """Named, arity-bearing definition: `name params = body;`."""
    name: str
    params: tuple
    body: Term

    def __init__(self, name, params, body):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "params", tuple(params))
        object.__setattr__(self, "body", body)

    @property
    def arity(self):
        return len(self.params)

    def __str__(self):
        return show_definition(self)


def format_term(term):
    """Formats term in surface syntax. Every Application is parenthesized, whatever its depth."""
    if isinstance(term, Variable):
        return term.name

    # work-list of terms and literal punctuation, so deeply nested terms don't hit the recursion limit
    parts = []
    todo = [term]
    while todo:
        node = todo.pop()
        if isinstance(node, str):
            parts.append(node)
        elif isinstance(node, Variable):
            parts.append(node.name)
        else:
            todo.append(")")
            for idx in range(len(node.terms) - 1, -1, -1):
                todo.append(node.terms[idx])
                if idx:
                    todo.append(" ")
            todo.append("(")

    return "".join(parts)


def show_definition(definition):
    """Formats definition as `name p1 p2 = body;`."""
    head = " ".join((definition.name,) + definition.params)
    return f"{head} = {format_term(definition.body)};"


def show_program(definitions):
    return "\n".join(show_definition(definition) for definition in definitions)
