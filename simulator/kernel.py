import numpy as np
from numba import njit

# Kernel exit codes
STATUS_HALTED = 0
STATUS_STEP_LIMIT = 1
STATUS_OUT_OF_BOUNDS = 2
STATUS_UNDEFINED = 3

NO_LIMIT = -1


def pack_table(table):
    """Flatten a TransitionTable into one int64 array with a row per transition."""
    return np.array(
        [[int(t.state_from), int(t.read), int(t.state_to), int(t.write), int(t.move)] for t in table],
        dtype=np.int64,
    )


@njit
def simulate_machine(transitions, halting_state, tape, head, max_steps, strict):
    """
    Run one machine in place on ``tape``.

    Returns (steps, head, state, status). On STATUS_OUT_OF_BOUNDS ``head`` is
    the off-tape index the machine tried to reach and ``steps`` counts the
    failing step. On STATUS_UNDEFINED ``steps`` counts only completed steps.
    """
    num_transitions = transitions.shape[0]
    tape_size = tape.shape[0]
    state = 1
    steps = 0

    while True:
        if max_steps != NO_LIMIT and steps >= max_steps:
            return steps, head, state, STATUS_STEP_LIMIT

        symbol = tape[head]
        match = -1
        for i in range(num_transitions):
            if transitions[i, 0] == state and transitions[i, 1] == symbol:
                match = i

        if match == -1:
            if strict:
                return steps, head, state, STATUS_UNDEFINED
            match = 0

        tape[head] = transitions[match, 3]
        state = transitions[match, 2]
        steps += 1

        target = head + transitions[match, 4]
        if target < 0 or target >= tape_size:
            return steps, target, state, STATUS_OUT_OF_BOUNDS
        head = target

        if state == halting_state:
            return steps, head, state, STATUS_HALTED
