"""Lowers Definitions into a Program: a table of Procedures whose bodies are flat, index-based instruction sequences.

Instructions are postfix: a term is written head first, and each further argument is followed by a Combine that
applies everything before it to that argument. For example

```
f a b          ->  Call(f) Call(a) Combine Call(b) Combine
f (g x) b      ->  Call(f) Call(g) Param(x) Combine Combine Call(b) Combine
```

Every body is then stored reversed, so that the head of the term ends up last. Pushing a body onto the evaluation
stack in order therefore leaves the head on top, ready to be popped, and each argument directly beneath it, ready to
be extracted (see pure/reducer.py).
"""

from dataclasses import dataclass

from equation.lang.error import DuplicateName, MissingEntryPoint, UndefinedVariable
from equation.pure.term import Variable

ENTRY = "main"


@dataclass(frozen=True)
class Combine:
    """Applies the two most recently produced values, function to argument."""

    def __repr__(self):
        return "Combine"


@dataclass(frozen=True)
class Call:
    """Reference to a procedure by its position in the Program."""
    index: int


@dataclass(frozen=True)
class Param:
    """Reference to a parameter of the enclosing procedure by its position in the parameter list."""
    slot: int


COMBINE = Combine()


@dataclass(frozen=True)
class Procedure:
    name: str
    params: tuple
    body: tuple  # reversed flattening of the definition's body

    @property
    def arity(self):
        return len(self.params)


@dataclass(frozen=True)
class Program:
    """Compiled program. Read-only once built."""
    procedures: tuple
    entry: int
    shadowed: tuple = ()  # (definition name, parameter name) pairs, see resolve

    @property
    def names(self):
        return tuple(procedure.name for procedure in self.procedures)


def resolve(name, def_indices, param_indices, definition):
    """Resolves a variable occurrence. Definitions take precedence over parameters."""
    if name in def_indices:
        return Call(def_indices[name])
    elif name in param_indices:
        return Param(param_indices[name])
    raise UndefinedVariable(name, definition)


def flatten(term, def_indices, param_indices, definition):
    """Flattens term into postfix instructions (not yet reversed)."""
    if isinstance(term, Variable):
        return [resolve(term.name, def_indices, param_indices, definition)]

    head, *args = term.terms
    instructions = flatten(head, def_indices, param_indices, definition)
    for arg in args:
        instructions.extend(flatten(arg, def_indices, param_indices, definition))
        instructions.append(COMBINE)
    return instructions


def compile_definition(definition, def_indices):
    param_indices = {}
    for slot, param in enumerate(definition.params):
        if param in param_indices:
            raise DuplicateName(param, definition.name)
        param_indices[param] = slot

    body = flatten(definition.body, def_indices, param_indices, definition.name)
    body.reverse()
    return Procedure(definition.name, definition.params, tuple(body))


def compile_program(definitions):
    """Compiles definitions into a Program. Raises a CompileError (and produces nothing) if a variable is undefined,
    a name is defined twice or a parameter is repeated, or there is no definition named `main`.

    A parameter that shares its name with a definition can never be referred to: every occurrence of the name compiles
    to a Call. Such parameters are listed in Program.shadowed so that callers can warn about them.
    """
    def_indices = {}
    for idx, definition in enumerate(definitions):
        if definition.name in def_indices:
            raise DuplicateName(definition.name)
        def_indices[definition.name] = idx

    procedures = tuple(compile_definition(definition, def_indices) for definition in definitions)
    if ENTRY not in def_indices:
        raise MissingEntryPoint(ENTRY)

    shadowed = tuple((definition.name, param)
                     for definition in definitions for param in definition.params if param in def_indices)

    return Program(procedures, def_indices[ENTRY], shadowed)


def show_instruction(program, instruction, params=()):
    """Formats instruction: '@' for Combine, the procedure name for a Call and the parameter name (or $k) for a Param.
    """
    if isinstance(instruction, Call):
        return program.procedures[instruction.index].name
    elif isinstance(instruction, Param):
        if instruction.slot < len(params):
            return params[instruction.slot]
        return f"${instruction.slot}"
    return "@"


def show_procedure(program, index):
    """Disassembles procedure index of program as `name/arity: instr instr ...`, in stored (reversed) order."""
    procedure = program.procedures[index]
    body = " ".join(show_instruction(program, instruction, procedure.params) for instruction in procedure.body)
    return f"{procedure.name}/{procedure.arity}: {body}"
