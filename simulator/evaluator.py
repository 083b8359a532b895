from simulator.errors import StepLimitExceeded, TapeBoundsError, UndefinedTransitionError
from simulator.kernel import (
    NO_LIMIT, STATUS_OUT_OF_BOUNDS, STATUS_STEP_LIMIT, STATUS_UNDEFINED, pack_table, simulate_machine,
)
from simulator.symbols import Direction, Symbol
from simulator.turing_machine import EngineStatus


def read_result(tape):
    """Number of ZERO cells anywhere on the tape."""
    return tape.count(Symbol.ZERO)


def evaluate(machine, max_steps=None):
    """Run ``machine`` with the reference engine and decode the result."""
    machine.run(max_steps=max_steps)
    return read_result(machine.tape)


def evaluate_fast(machine, max_steps=None):
    """
    Host-side launch of the compiled kernel.

    Same semantics as ``evaluate`` (tie-break, fallback or strict lookup,
    bounds, halting, step ceiling) but without step records. The machine's
    tape, state and step counter are updated so the two paths can be compared.
    """
    machine.reset()
    transitions = pack_table(machine.table)
    limit = NO_LIMIT if max_steps is None else max_steps

    steps, head, state, status = simulate_machine(
        transitions,
        machine.table.halting_state,
        machine.tape.cells,
        machine.tape.head,
        limit,
        machine.strict,
    )
    machine.steps = int(steps)
    machine.current_state = int(state)

    if status == STATUS_OUT_OF_BOUNDS:
        direction = Direction.LEFT if head < 0 else Direction.RIGHT
        machine.tape.head = int(head) - direction
        raise TapeBoundsError(machine.tape.head, direction, machine.tape.capacity, step=machine.steps)

    machine.tape.head = int(head)
    if status == STATUS_STEP_LIMIT:
        raise StepLimitExceeded(machine.steps)
    if status == STATUS_UNDEFINED:
        raise UndefinedTransitionError(machine.current_state, machine.tape.read(), machine.steps + 1)

    machine.status = EngineStatus.HALTED
    return read_result(machine.tape)
