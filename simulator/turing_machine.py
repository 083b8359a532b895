from dataclasses import dataclass
from enum import Enum

from simulator.encoding import INITIAL_STATE, decode, operands_to_word, parse_word, split_composite
from simulator.errors import (
    ConfigurationError, SimulatorError, StepLimitExceeded, TapeBoundsError, UndefinedTransitionError,
)
from simulator.tape import Tape


class TraceMode(str, Enum):
    NONE = "NONE"
    STEP = "STEP"
    END_STEP = "END_STEP"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            choices = ", ".join(mode.value for mode in cls)
            raise ConfigurationError(f"Unknown trace mode '{value}' (expected one of {choices})") from None


class EngineStatus(Enum):
    RUNNING = "running"
    HALTED = "halted"


@dataclass(frozen=True)
class StepRecord:
    step: int
    state: int
    head: int
    tape: tuple

    @property
    def state_name(self):
        return f"q{self.state}"

    def to_dict(self):
        return {
            "step": self.step,
            "state": self.state_name,
            "head": self.head,
            "tape": "".join(self.tape),
        }


@dataclass
class Configuration:
    """Tape, state and step counter of one run."""
    tape: Tape
    state: int = INITIAL_STATE
    steps: int = 0
    status: EngineStatus = EngineStatus.RUNNING

    def snapshot(self):
        return StepRecord(
            step=self.steps,
            state=self.state,
            head=self.tape.head,
            tape=tuple(self.tape.render()),
        )


class UniversalTuringMachine:
    def __init__(self, table, word, tape_size=200, strict=False):
        self.table = table
        self.word = parse_word(word) if isinstance(word, str) else list(word)
        self.tape_size = tape_size
        self.strict = strict
        self.reset()

    # === Constructors ===
    @classmethod
    def from_word(cls, machine_code, word, tape_size=200, strict=False):
        return cls(decode(machine_code), word, tape_size=tape_size, strict=strict)

    @classmethod
    def from_numbers(cls, machine_code, first, second, tape_size=200, strict=False):
        return cls.from_word(machine_code, operands_to_word(first, second), tape_size=tape_size, strict=strict)

    @classmethod
    def from_code(cls, code, tape_size=200, strict=False):
        machine_code, word = split_composite(code)
        return cls.from_word(machine_code, word, tape_size=tape_size, strict=strict)

    # === Execution ===
    def reset(self):
        """Restore the initial tape, state and step counter."""
        self._publish(self._initial())

    @property
    def halted(self):
        return self.status is EngineStatus.HALTED

    def match(self, state, symbol, step=None):
        """Last transition for (state, symbol); later entries win."""
        matched = None
        for transition in self.table:
            if transition.state_from == state and transition.read == symbol:
                matched = transition
        if matched is None:
            if self.strict:
                raise UndefinedTransitionError(state, symbol, step)
            matched = self.table[0]
        return matched

    def step(self):
        """Execute one transition from the current configuration and return its StepRecord."""
        config = Configuration(self.tape, self.current_state, self.steps, self.status)
        try:
            self._advance(config)
        finally:
            self._publish(config)
        return config.snapshot()

    def snapshot(self):
        return Configuration(self.tape, self.current_state, self.steps, self.status).snapshot()

    def trace(self, mode=TraceMode.STEP, max_steps=None):
        """
        Run from the initial configuration, yielding StepRecords per ``mode``.

        Each trace works on its own tape, so several traces of one machine can
        be consumed side by side and each yields the same records. The machine
        takes over the final configuration when a trace halts or fails. Raises
        StepLimitExceeded when ``max_steps`` steps ran without reaching the
        halting state.
        """
        mode = TraceMode.parse(mode)
        config = self._initial()
        try:
            while config.status is EngineStatus.RUNNING:
                if max_steps is not None and config.steps >= max_steps:
                    raise StepLimitExceeded(config.steps)
                self._advance(config)
                if mode is TraceMode.STEP:
                    record = config.snapshot()
                    if config.status is EngineStatus.HALTED:
                        self._publish(config)
                    yield record
        except SimulatorError:
            self._publish(config)
            raise
        self._publish(config)
        if mode is TraceMode.END_STEP:
            yield config.snapshot()

    def run(self, max_steps=None):
        """Run to the halting state and return the number of steps taken."""
        for _ in self.trace(TraceMode.NONE, max_steps=max_steps):
            pass
        return self.steps

    def _initial(self):
        return Configuration(Tape(self.word, self.tape_size))

    def _publish(self, config):
        self.tape = config.tape
        self.current_state = config.state
        self.steps = config.steps
        self.status = config.status

    def _advance(self, config):
        """One transition on ``config`` without rendering the tape."""
        if config.status is EngineStatus.HALTED:
            raise RuntimeError("Machine has already halted; call reset() to run it again")
        tape = config.tape
        transition = self.match(config.state, tape.read(), config.steps + 1)
        tape.write(transition.write)
        config.state = transition.state_to
        try:
            tape.move_head(transition.move)
        except TapeBoundsError as e:
            raise e.at_step(config.steps + 1)
        config.steps += 1
        if config.state == self.table.halting_state:
            config.status = EngineStatus.HALTED
