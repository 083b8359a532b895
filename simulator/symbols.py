from enum import IntEnum

from simulator.errors import ConfigurationError, DecodeError


class Symbol(IntEnum):
    ZERO = 0
    ONE = 1
    BLANK = 2
    MARKER = 3

    @property
    def char(self):
        return SYMBOL_CHARS[self]


class Direction(IntEnum):
    LEFT = -1
    RIGHT = 1

    @property
    def char(self):
        return "L" if self is Direction.LEFT else "R"


SYMBOL_CHARS = {
    Symbol.ZERO: "0",
    Symbol.ONE: "1",
    Symbol.BLANK: "_",
    Symbol.MARKER: "X",
}
CHAR_SYMBOLS = {char: symbol for symbol, char in SYMBOL_CHARS.items()}

# === RUN LENGTH MAPS ===
SYMBOL_RUN_LENGTHS = {1: Symbol.ZERO, 2: Symbol.ONE, 3: Symbol.BLANK, 4: Symbol.MARKER}
DIRECTION_RUN_LENGTHS = {1: Direction.LEFT, 2: Direction.RIGHT}

SYMBOL_CODES = {symbol: length for length, symbol in SYMBOL_RUN_LENGTHS.items()}
DIRECTION_CODES = {direction: length for length, direction in DIRECTION_RUN_LENGTHS.items()}


def symbol_of(run_length):
    """Decode the run length of a symbol field."""
    try:
        return SYMBOL_RUN_LENGTHS[run_length]
    except KeyError:
        raise DecodeError(f"run length {run_length} is not a tape symbol") from None


def direction_of(run_length):
    """Decode the run length of a move field."""
    try:
        return DIRECTION_RUN_LENGTHS[run_length]
    except KeyError:
        raise DecodeError(f"run length {run_length} is not a direction") from None


def symbol_code(symbol):
    return SYMBOL_CODES[Symbol(symbol)]


def direction_code(direction):
    return DIRECTION_CODES[Direction(direction)]


def symbol_from_char(char):
    try:
        return CHAR_SYMBOLS[char]
    except KeyError:
        raise ConfigurationError(f"'{char}' is not a tape symbol (expected one of 0, 1, _, X)") from None
