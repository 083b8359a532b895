"""Reference machines: unary addition and multiplication."""

from dataclasses import dataclass

from simulator.errors import ConfigurationError


@dataclass(frozen=True)
class Program:
    name: str
    description: str
    machine_code: str
    sample_word: str


ADDITION = Program(
    name="add",
    description="Unary addition: 0^a 1 0^b 1 -> 0^(a+b)",
    machine_code=(
        "010101010011"
        "01001001001011"
        "0010100010010011"
        "0001010001010011"
        "000100100010010011"
        "0001000100001010011"
        "00001010000101011"
        "000010001000010001011"
        "00001001000001001011"
        "0000010100010010011"
        "000001001000001001011"
        "0000010001000000100010011"
        "0000001001000000100010011"
        "000000101000000010100"
    ),
    sample_word="000010001",
)

MULTIPLICATION = Program(
    name="mul",
    description="Unary multiplication: 0^a 1 0^b 1 -> 0^(a*b)",
    machine_code=(
        "010100100010011"
        "010010000000100010011"
        "00101001010011"
        "00100100010010011"
        "00010100001000010011"
        "00010010000001001011"
        "000010100001010011"
        "00001001000010010011"
        "00001000100000101011"
        "0000010100000101011"
        "000001001000001001011"
        "000001000010001000010011"
        "000000101000000101011"
        "00000010010000001001011"
        "000000100001000000101011"
        "000000100010100010011"
        "00000001010000000100010011"
        "00000001001000000001000100"
    ),
    sample_word="0001000001",
)

PROGRAMS = {program.name: program for program in (ADDITION, MULTIPLICATION)}


def get_program(name):
    if name not in PROGRAMS:
        raise ConfigurationError(f"Unknown program '{name}' (available: {', '.join(sorted(PROGRAMS))})")
    return PROGRAMS[name]
