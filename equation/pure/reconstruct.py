"""Rebuilds Terms from instruction sequences, for display only. This is the inverse of the flattening in
pure/compiler.py, up to parenthesization: `((f a) b)` comes back as `(f a b)`.
"""

from equation.pure.compiler import Call, Combine
from equation.pure.term import Application, Variable, format_term


def leaf(names, instruction, params=()):
    if isinstance(instruction, Call):
        return Variable(names[instruction.index])
    elif instruction.slot < len(params):
        return Variable(params[instruction.slot])
    return Variable(f"${instruction.slot}")


def to_term(names, instructions, params=()):
    """Reconstructs the term at the active end (the last element) of instructions. Returns None if no term starts
    there, i.e. instructions is empty or ends in a Combine. names are the procedure names, params the parameter names
    used to display Params (if any).

    Reading from the active end, a Call/Param starts a term, and further complete terms are collected as its arguments
    until a Combine (or the end of input) is read. A Combine therefore closes the innermost open application. Open
    applications are kept on an explicit list of frames rather than on the Python call stack, since terms can be
    arbitrarily deep.
    """
    instructions = reversed(instructions)
    frames = []

    while True:
        instruction = next(instructions, None)
        if instruction is not None and not isinstance(instruction, Combine):
            frames.append([leaf(names, instruction, params)])
            continue

        if not frames:
            return None

        terms = frames.pop()
        term = terms[0] if len(terms) == 1 else Application(terms)
        if not frames:
            return term
        frames[-1].append(term)


def is_complete(instructions):
    """Whether instructions (in stack order) encode exactly one term. Scanning from the active end, every Call/Param
    adds one value and every Combine merges two into one; a complete term never runs out of values midway and ends
    with exactly one.
    """
    balance = 0
    for instruction in reversed(instructions):
        balance += -1 if isinstance(instruction, Combine) else 1
        if balance <= 0:
            return False
    return balance == 1


def show_stack(names, stack, params=()):
    """Formats the term encoded by stack, or '' if there is none."""
    term = to_term(names, stack, params)
    return format_term(term) if term is not None else ""
