"""Session control for the equation calculus: collects definitions from files, expressions or the command line, then
compiles and evaluates them.
"""

from equation.lang.error import GenericException
from equation.lang.lexical import parse_program, parse_term
from equation.pure.compiler import ENTRY, compile_program, show_procedure
from equation.pure.reducer import State, Status
from equation.pure.term import Definition, show_program


class Session:
    """Governs an equation session: its definitions, and the results of evaluating them."""
    SH_FILE = "<in>"     # command-line interpreter filename
    EXPR_FILE = "<expr>"  # filename used for programs given with --expression

    def __init__(self, error_handler, path, cmd_line=False, trace=False, max_steps=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path              # used for error messages
        self.cmd_line = cmd_line      # whether or not in command-line mode
        self.trace = trace            # whether or not to print every reduction step
        self.max_steps = max_steps    # step budget, None for unlimited

        self.definitions = []  # in order of appearance, which is also procedure order
        self.results = []      # formatted normal forms, in order of evaluation

        if self.cmd_line:
            self.error_handler.fatal = False

    def load(self, path):
        """Reads and adds the definitions in the file at path."""
        try:
            with open(path, "r") as file:
                text = file.read()
        except OSError:
            raise GenericException("'{}' could not be opened", path, diagnosis=False)

        self.add(text)

    def add(self, text):
        """Parses text and adds its definitions to the session. In command-line mode, a definition replaces any earlier
        one with the same name; otherwise duplicates are kept, and rejected when compiling.
        """
        for definition in parse_program(text, self.path):
            if self.cmd_line:
                self.definitions = [old for old in self.definitions if old.name != definition.name]
            self.definitions.append(definition)

    def compile(self, definitions=None):
        """Compiles definitions (by default, the session's), warning about parameters that can't be referred to."""
        program = compile_program(self.definitions if definitions is None else definitions)
        for name, param in program.shadowed:
            self.error_handler.warn("parameter '{}' of '{}' is shadowed by the definition of the same name",
                                    (param, name), diagnosis=False)
        return program

    def run(self, definitions=None):
        """Compiles and evaluates the session's program from `main`. Returns the final State, and records its
        formatted stack in self.results.
        """
        state = State(self.compile(definitions))

        on_step = None
        if self.trace:
            on_step = self._register_step
            self.error_handler.register_step(f"{state.steps:>4}", state.show())
        state.run(self.max_steps, on_step)

        if state.status is Status.STUCK:
            self.error_handler.warn("reduction got stuck after {} steps", str(state.steps), diagnosis=False)
        elif state.status is Status.OUT_OF_STEPS:
            msg = "'{}' has no normal form within {} steps"
            self.error_handler.warn(msg, (ENTRY, str(state.steps)), diagnosis=False)

        self.results.append(state.show())
        return state

    def evaluate(self, text):
        """Evaluates the term in text against the session's definitions, as if it were the body of `main`."""
        main = Definition(ENTRY, (), parse_term(text, self.path))
        return self.run([definition for definition in self.definitions if definition.name != ENTRY] + [main])

    def _register_step(self, state, index):
        name = state.program.procedures[index].name
        self.error_handler.register_step(f"{state.steps:>4} {name}", state.show())

    def pop(self):
        """Removes and returns the last result."""
        return self.results.pop()

    def show(self):
        return show_program(self.definitions)

    def dump(self):
        """Returns the disassembly of every compiled procedure, one per line."""
        program = compile_program(self.definitions)
        return "\n".join(show_procedure(program, index) for index in range(len(program.procedures)))
