"""
Binary machine encoding.

A machine is written over the alphabet {0, 1}. Every quantity is a run of
``0`` characters whose length is the encoded value:

    state q_n       -> n zeros
    symbol 0/1/_/X  -> 1/2/3/4 zeros
    move L/R        -> 1/2 zeros

Fields of one transition are separated by ``1``, transitions by ``11`` and a
machine from its input word by ``111``. For example the transition
(q1, 1) -> (q3, 0, R) is ``0100100010100``.
"""

from dataclasses import dataclass

from simulator.errors import ConfigurationError, DecodeError
from simulator.symbols import (
    Direction, Symbol, direction_code, direction_of, symbol_code, symbol_from_char, symbol_of,
)

FIELD_SEPARATOR = "1"
TRANSITION_SEPARATOR = "11"
INPUT_SEPARATOR = "111"
FIELDS_PER_TRANSITION = 5
INITIAL_STATE = 1


@dataclass(frozen=True)
class Transition:
    state_from: int
    read: Symbol
    state_to: int
    write: Symbol
    move: Direction

    def __str__(self):
        return (f"(q{self.state_from}, {self.read.char}) => "
                f"(q{self.state_to}, {self.write.char}, {self.move.char})")


@dataclass(frozen=True)
class TransitionTable:
    """Ordered transitions; the halting state is where the last one leads."""
    transitions: tuple

    def __post_init__(self):
        if not self.transitions:
            raise DecodeError("machine has no transitions")

    @property
    def halting_state(self):
        return self.transitions[-1].state_to

    def __len__(self):
        return len(self.transitions)

    def __iter__(self):
        return iter(self.transitions)

    def __getitem__(self, index):
        return self.transitions[index]


# === DECODING ===
def decode_transition(record, index=None):
    """Decode one transition record such as ``0100100010100``."""
    fields = record.split(FIELD_SEPARATOR)
    if len(fields) != FIELDS_PER_TRANSITION:
        raise DecodeError(f"expected {FIELDS_PER_TRANSITION} fields, found {len(fields)}", record=index)

    state_from, read, state_to, write, move = (len(field) for field in fields)
    try:
        return Transition(
            state_from=state_from,
            read=symbol_of(read),
            state_to=state_to,
            write=symbol_of(write),
            move=direction_of(move),
        )
    except DecodeError as e:
        raise DecodeError(str(e), record=index) from None


def decode(machine_code):
    """Decode a machine code into a TransitionTable, keeping record order."""
    if not machine_code:
        raise DecodeError("machine code is empty")
    invalid = set(machine_code) - {"0", "1"}
    if invalid:
        raise DecodeError(f"machine code may only contain 0 and 1, found {sorted(invalid)}")

    transitions = [
        decode_transition(record, index)
        for index, record in enumerate(machine_code.split(TRANSITION_SEPARATOR))
    ]
    return TransitionTable(tuple(transitions))


def split_composite(code):
    """Split ``<machine>111<word>`` into the machine code and the input word."""
    machine_code, separator, word = code.partition(INPUT_SEPARATOR)
    if not separator:
        raise DecodeError(f"composite code has no '{INPUT_SEPARATOR}' between machine and input")
    return machine_code, word


# === ENCODING ===
def encode_transition(transition):
    runs = (
        transition.state_from,
        symbol_code(transition.read),
        transition.state_to,
        symbol_code(transition.write),
        direction_code(transition.move),
    )
    return FIELD_SEPARATOR.join("0" * run for run in runs)


def encode(transitions):
    return TRANSITION_SEPARATOR.join(encode_transition(t) for t in transitions)


def join_composite(machine_code, word):
    return machine_code + INPUT_SEPARATOR + word


# === INPUT WORDS ===
def integer_to_unary(number):
    """n -> n zeros followed by a single one."""
    if number < 0:
        raise ConfigurationError(f"Operands must be natural numbers, got {number}")
    return "0" * number + "1"


def operands_to_word(*numbers):
    return "".join(integer_to_unary(n) for n in numbers)


def parse_word(word):
    return [symbol_from_char(char) for char in word]
