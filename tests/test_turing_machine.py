import pytest

from simulator.encoding import Transition, TransitionTable, encode
from simulator.errors import (
    ConfigurationError, DecodeError, StepLimitExceeded, TapeBoundsError, UndefinedTransitionError,
)
from simulator.evaluator import read_result
from simulator.symbols import Direction, Symbol
from simulator.turing_machine import EngineStatus, StepRecord, TraceMode, UniversalTuringMachine


def table_of(*transitions):
    return TransitionTable(tuple(transitions))


# === Reference programs ===
def test_addition_two_plus_four(addition_code):
    machine = UniversalTuringMachine.from_numbers(addition_code, 2, 4, tape_size=200)
    steps = machine.run()

    assert steps == 115
    assert machine.status is EngineStatus.HALTED
    assert machine.current_state == machine.table.halting_state == 7
    assert read_result(machine.tape) == 6
    assert "".join(machine.tape.render()).strip("_") == "000000"


def test_addition_from_composite_code(addition_code):
    machine = UniversalTuringMachine.from_code(addition_code + "111" + "000010001", tape_size=200)
    assert machine.run() == 154
    assert read_result(machine.tape) == 7


def test_multiplication_ten_times_eight(multiplication_code):
    machine = UniversalTuringMachine.from_numbers(multiplication_code, 10, 8, tape_size=200)
    assert machine.run() == 7510
    assert read_result(machine.tape) == 80


def test_rerun_is_deterministic(addition_code):
    machine = UniversalTuringMachine.from_numbers(addition_code, 3, 5, tape_size=60)
    first_steps = machine.run()
    first_tape = machine.tape.render()

    second_steps = machine.run()
    assert second_steps == first_steps
    assert machine.tape.render() == first_tape


# === Matching ===
def test_later_transition_wins_tie_break():
    table = table_of(
        Transition(1, Symbol.ZERO, 2, Symbol.ONE, Direction.RIGHT),
        Transition(1, Symbol.ZERO, 2, Symbol.MARKER, Direction.RIGHT),
    )
    machine = UniversalTuringMachine(table, "0", tape_size=4)
    record = machine.step()

    assert "".join(record.tape) == "_X__"
    assert record.head == 2
    assert machine.halted


def test_fallback_to_first_transition(runaway_code):
    machine = UniversalTuringMachine.from_word(runaway_code, "00", tape_size=4)
    with pytest.raises(TapeBoundsError) as excinfo:
        machine.run()

    # steps 3 and 4 find nothing for (q1, _) and reuse transition 0
    assert excinfo.value.step == 4
    assert excinfo.value.direction is Direction.RIGHT
    assert machine.tape.head == 3
    assert "".join(machine.tape.render()) == "0000"


def test_strict_mode_rejects_undefined_transition(runaway_code):
    machine = UniversalTuringMachine.from_word(runaway_code, "00", tape_size=4, strict=True)
    with pytest.raises(UndefinedTransitionError) as excinfo:
        machine.run()

    assert excinfo.value.step == 3
    assert excinfo.value.state == 1
    assert excinfo.value.symbol is Symbol.BLANK
    assert machine.steps == 2


def test_addition_fallback_versus_strict(addition_code):
    lenient = UniversalTuringMachine.from_word(addition_code, "11", tape_size=20)
    assert lenient.run() == 17
    assert read_result(lenient.tape) == 1

    strict = UniversalTuringMachine.from_word(addition_code, "11", tape_size=20, strict=True)
    with pytest.raises(UndefinedTransitionError) as excinfo:
        strict.run()
    assert excinfo.value.step == 2
    assert excinfo.value.state == 2


# === Bounds and halting ===
def test_head_leaving_the_left_edge(addition_code):
    machine = UniversalTuringMachine.from_numbers(addition_code, 2, 4, tape_size=16)
    with pytest.raises(TapeBoundsError) as excinfo:
        machine.run()

    assert excinfo.value.step == 105
    assert excinfo.value.direction is Direction.LEFT
    assert machine.tape.head == 0
    assert "step 105" in str(excinfo.value)


def test_halting_state_is_checked_after_the_step():
    table = table_of(Transition(1, Symbol.ZERO, 1, Symbol.ONE, Direction.RIGHT))
    machine = UniversalTuringMachine(table, "0", tape_size=4)
    assert machine.run() == 1
    assert "".join(machine.tape.render()) == "_1__"


def test_step_after_halt_is_an_error():
    table = table_of(Transition(1, Symbol.ZERO, 2, Symbol.ZERO, Direction.RIGHT))
    machine = UniversalTuringMachine(table, "0", tape_size=4)
    machine.step()
    with pytest.raises(RuntimeError):
        machine.step()
    machine.reset()
    assert machine.status is EngineStatus.RUNNING
    assert machine.steps == 0


def test_step_ceiling(addition_code):
    machine = UniversalTuringMachine.from_numbers(addition_code, 2, 4, tape_size=200)
    with pytest.raises(StepLimitExceeded) as excinfo:
        machine.run(max_steps=50)
    assert excinfo.value.steps == 50
    assert machine.steps == 50

    # a ceiling that is not reached changes nothing
    assert machine.run(max_steps=115) == 115
    assert read_result(machine.tape) == 6


# === Trace ===
def test_step_trace_yields_every_step(addition_code):
    machine = UniversalTuringMachine.from_numbers(addition_code, 2, 4, tape_size=200)
    records = list(machine.trace(TraceMode.STEP))

    assert [r.step for r in records] == list(range(1, 116))
    assert all(len(r.tape) == 200 for r in records)
    assert records[-1].state == 7
    assert records[-1].head == machine.tape.head
    assert records[-1].state_name == "q7"


def test_trace_is_restartable(addition_code):
    machine = UniversalTuringMachine.from_numbers(addition_code, 1, 2, tape_size=40)
    assert list(machine.trace("STEP")) == list(machine.trace("STEP"))


def test_side_by_side_traces_do_not_interfere(addition_code):
    machine = UniversalTuringMachine.from_numbers(addition_code, 2, 4, tape_size=200)
    single = list(machine.trace(TraceMode.STEP))

    pairs = list(zip(machine.trace(TraceMode.STEP), machine.trace(TraceMode.STEP)))
    assert len(pairs) == 115
    assert [a for a, _ in pairs] == single
    assert [b for _, b in pairs] == single


def test_run_during_a_trace_leaves_the_trace_alone(addition_code):
    machine = UniversalTuringMachine.from_numbers(addition_code, 2, 4, tape_size=200)
    single = list(machine.trace(TraceMode.STEP))

    trace = machine.trace(TraceMode.STEP)
    head = [next(trace) for _ in range(10)]
    assert machine.run() == 115
    assert head + list(trace) == single
    assert machine.halted
    assert read_result(machine.tape) == 6


def test_end_step_yields_only_final_record(addition_code):
    machine = UniversalTuringMachine.from_numbers(addition_code, 2, 4, tape_size=200)
    records = list(machine.trace("end_step"))
    assert len(records) == 1
    assert records[0].step == 115
    assert records[0].to_dict()["tape"].strip("_") == "000000"


def test_none_mode_yields_nothing_but_runs(addition_code):
    machine = UniversalTuringMachine.from_numbers(addition_code, 2, 4, tape_size=200)
    assert list(machine.trace(TraceMode.NONE)) == []
    assert machine.halted


def test_step_record_dict():
    record = StepRecord(step=1, state=3, head=4, tape=("_", "0"))
    assert record.to_dict() == {"step": 1, "state": "q3", "head": 4, "tape": "_0"}


def test_unknown_trace_mode():
    with pytest.raises(ConfigurationError):
        TraceMode.parse("VERBOSE")


# === Construction errors ===
def test_construction_fails_before_execution():
    with pytest.raises(DecodeError):
        UniversalTuringMachine.from_word("1".join(["0", "00000", "0", "0", "00"]), "0")


def test_word_too_long_for_tape(addition_code):
    with pytest.raises(ConfigurationError):
        UniversalTuringMachine.from_numbers(addition_code, 10, 10, tape_size=20)


def test_encoded_table_runs_like_built_table():
    transitions = [
        Transition(1, Symbol.ZERO, 1, Symbol.MARKER, Direction.RIGHT),
        Transition(1, Symbol.BLANK, 2, Symbol.BLANK, Direction.LEFT),
    ]
    machine = UniversalTuringMachine.from_word(encode(transitions), "000", tape_size=10)
    assert machine.run() == 4
    assert "".join(machine.tape.render()) == "__XXX_____"
    assert machine.tape.head == 4
