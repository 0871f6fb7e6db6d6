"""Equation calculus interpreter.

Programs are lists of named definitions whose bodies are applications of other definitions and of their own
parameters: no lambdas, no literals, no built-in operators. Basic program flow:
    1. Parser: produces a list of Definitions from source text
        - For the grammar, see equation/grammar/tokens.py
        - For the parser itself, see equation/lang/lexical.py
    2. Compiler: resolves every variable to a definition or a parameter by index, and flattens each body into a
       reversed postfix instruction sequence (equation/pure/compiler.py)
    3. Reducer: rewrites a single instruction stack, substituting arguments into procedure bodies, until the term on
       it is in normal form (equation/pure/reducer.py)
    4. Reconstruction: turns the final stack back into a term for display (equation/pure/reconstruct.py)
"""

from equation.lang.lexical import parse_program, parse_term
from equation.pure.compiler import compile_program
from equation.pure.reconstruct import to_term
from equation.pure.reducer import run
from equation.pure.term import format_term
