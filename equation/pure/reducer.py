"""Stack-based reduction of a compiled Program to normal form.

The whole term being reduced lives on a single instruction stack, in the reversed postfix form produced by the
compiler: its head is on top, and each argument sits beneath it, closed off by the Combine that applied it. A step
pops the head; if it is a procedure of arity n, the n arguments beneath it are extracted, and the procedure's body is
pushed in their place with every Param replaced by a copy of the corresponding argument. Arguments are copied, never
shared, so a parameter used twice is reduced twice.

Reduction stops as soon as a step cannot make progress: the head is a procedure that is not applied to enough
arguments (or there is no head at all). Reduction never raises; a program that never reaches such a state runs
forever, unless a step budget is given.
"""

from enum import Enum

from equation.pure.compiler import Call, Combine, Param
from equation.pure.reconstruct import is_complete, show_stack


class Status(Enum):
    RUNNING = "running"
    NORMAL_FORM = "normal form"    # no redex left, the stack holds one complete term
    STUCK = "stuck"                # no redex left, but the stack is not one complete term
    OUT_OF_STEPS = "out of steps"  # step budget used up before reaching a normal form


def get_arg(stack, end, args, ranges):
    """Extracts the right-most complete term of stack[:end] into args, recording its range in ranges. Returns the
    index of the Combine that applied it, which is where the next argument ends, or None if stack[:end] has no complete
    term followed by such a Combine. stack itself is not modified.

    Scanning down from the top, every Call/Param adds one available value and every Combine consumes one; the first
    Combine that brings the balance to zero applied the function to this argument.
    """
    balance = 0
    for idx in range(end - 1, -1, -1):
        if isinstance(stack[idx], Combine):
            balance -= 1
            if balance <= 0:
                break
        else:
            balance += 1
    else:
        return None

    if idx == end - 1:
        return None  # Combine on top: no argument

    start = len(args)
    args.extend(stack[idx + 1:end])
    ranges.append((start, len(args)))
    return idx


class State:
    """Evaluation state: the instruction stack plus scratch buffers reused across steps."""

    def __init__(self, program, stack=None):
        self.program = program
        self.stack = [Call(program.entry)] if stack is None else list(stack)
        self.args = []
        self.ranges = []

        self.steps = 0
        self.status = Status.RUNNING

    def _redex(self):
        """Returns (procedure, end) for the redex on top of the stack, with its arguments extracted into the scratch
        buffers and end the index where the consumed part of the stack starts, or None if there is no redex.
        """
        stack = self.stack
        if not stack or not isinstance(stack[-1], Call):
            return None

        procedure = self.program.procedures[stack[-1].index]

        self.args.clear()
        self.ranges.clear()

        end = len(stack) - 1
        for __ in range(procedure.arity):
            end = get_arg(stack, end, self.args, self.ranges)
            if end is None:
                return None
        return procedure, end

    def step(self):
        """Performs one reduction step in place. Returns whether progress was made; if not, the stack is untouched."""
        redex = self._redex()
        if redex is None:
            return False

        self._apply(*redex)
        return True

    def _apply(self, procedure, end):
        """Replaces the redex found by _redex with the body of procedure, its Params substituted."""
        stack = self.stack

        del stack[end:]  # head, arguments and the Combines that applied them
        for instruction in procedure.body:
            if isinstance(instruction, Param):
                start, stop = self.ranges[instruction.slot]
                stack.extend(self.args[start:stop])
            else:
                stack.append(instruction)

        self.steps += 1

    def run(self, max_steps=None, on_step=None):
        """Steps until no progress is made, or max_steps steps have been taken. on_step(state, index) is called after
        every step, index being the procedure that was just reduced. Returns self.
        """
        while True:
            redex = self._redex()
            if redex is None:
                self.status = Status.NORMAL_FORM if is_complete(self.stack) else Status.STUCK
                return self
            elif max_steps is not None and self.steps >= max_steps:
                self.status = Status.OUT_OF_STEPS
                return self

            index = self.stack[-1].index
            self._apply(*redex)
            if on_step is not None:
                on_step(self, index)

    def show(self):
        return show_stack(self.program.names, self.stack)

    def __repr__(self):
        return f"State(status={self.status.value}, steps={self.steps}, stack={self.show()!r})"


def run(program, max_steps=None, on_step=None):
    """Reduces program from its entry procedure. See State.run."""
    return State(program).run(max_steps, on_step)
