import numpy as np

from simulator.errors import ConfigurationError, TapeBoundsError
from simulator.symbols import Direction, Symbol, SYMBOL_CHARS

CELL_DTYPE = np.int64


class Tape:
    """
    Fixed-capacity tape with one head.

    The initial content is right-aligned against the middle of the tape: its
    last symbol sits at ``capacity // 2 - 1`` and the head starts on its first
    symbol.
    """

    def __init__(self, content=(), capacity=200):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ConfigurationError(f"Tape capacity must be a positive integer, got {capacity!r}")
        try:
            content = [Symbol(s) for s in content]
        except ValueError:
            raise ConfigurationError(f"Tape content must be Symbol values, got {content!r}") from None
        middle = capacity // 2
        if len(content) > middle:
            raise ConfigurationError(
                f"Content of {len(content)} symbols does not fit left of the middle of a {capacity}-cell tape"
            )

        self.capacity = capacity
        self.cells = np.full(capacity, int(Symbol.BLANK), dtype=CELL_DTYPE)
        start = middle - len(content)
        self.cells[start:middle] = [int(s) for s in content]
        self.head = start

    def read(self):
        return Symbol(int(self.cells[self.head]))

    def write(self, symbol):
        self.cells[self.head] = int(Symbol(symbol))

    def move_head(self, direction):
        """Move one cell; raises TapeBoundsError and leaves the head unchanged if the move would leave the tape."""
        direction = Direction(direction)
        target = self.head + direction
        if target < 0 or target >= self.capacity:
            raise TapeBoundsError(self.head, direction, self.capacity)
        self.head = target

    def count(self, symbol):
        return int(np.count_nonzero(self.cells == int(Symbol(symbol))))

    def render(self):
        """Cells as a list of symbol characters."""
        return [SYMBOL_CHARS[Symbol(int(cell))] for cell in self.cells]

    def __str__(self):
        return "Tape: [" + ", ".join(self.render()) + "]"
