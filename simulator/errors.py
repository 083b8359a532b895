class SimulatorError(Exception):
    """Base class for everything the simulator raises on a failed run."""


class DecodeError(SimulatorError, ValueError):
    def __init__(self, message, record=None):
        if record is not None:
            message = f"Record {record}: {message}"
        super().__init__(message)
        self.record = record


class ConfigurationError(SimulatorError, ValueError):
    pass


class TapeBoundsError(SimulatorError, IndexError):
    def __init__(self, head, direction, capacity, step=None):
        self.head = head
        self.direction = direction
        self.capacity = capacity
        self.step = step
        super().__init__(self._message())

    def _message(self):
        where = f"step {self.step}: " if self.step is not None else ""
        return (f"{where}head at {self.head} cannot move {self.direction.name} "
                f"on a tape of {self.capacity} cells")

    def at_step(self, step):
        """Attach the step index once the engine knows it."""
        self.step = step
        self.args = (self._message(),)
        return self


class UndefinedTransitionError(SimulatorError, LookupError):
    def __init__(self, state, symbol, step):
        self.state = state
        self.symbol = symbol
        self.step = step
        super().__init__(f"step {step}: no transition for (q{state}, {symbol.char})")


class StepLimitExceeded(SimulatorError, RuntimeError):
    def __init__(self, steps):
        self.steps = steps
        super().__init__(f"Machine did not halt within {steps:,} steps")
