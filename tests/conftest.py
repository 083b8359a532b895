"""
Pytest configuration and fixtures
"""
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from simulator.encoding import Transition, encode
from simulator.programs import ADDITION, MULTIPLICATION
from simulator.symbols import Direction, Symbol


@pytest.fixture
def addition_code():
    return ADDITION.machine_code


@pytest.fixture
def multiplication_code():
    return MULTIPLICATION.machine_code


@pytest.fixture
def runaway_code():
    """Walks right over zeros; q2 (the halting state) is never entered."""
    return encode([
        Transition(1, Symbol.ZERO, 1, Symbol.ZERO, Direction.RIGHT),
        Transition(2, Symbol.BLANK, 2, Symbol.BLANK, Direction.RIGHT),
    ])
