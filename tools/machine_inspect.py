import argparse

from simulator.encoding import decode, split_composite
from simulator.programs import get_program
from simulator.symbols import Symbol


def format_transitions(table):
    """One line per transition in table order, halting transition flagged."""
    lines = []
    for idx, transition in enumerate(table):
        line = f"Transition Nr. {idx}: {transition}"
        if idx == len(table) - 1:
            line += f"  [halts in q{table.halting_state}]"
        lines.append(line)
    return lines


def state_symbol_grid(table):
    """Map state -> {symbol char: action}; later transitions overwrite earlier ones."""
    grid = {}
    for transition in table:
        row = grid.setdefault(transition.state_from, {})
        row[transition.read.char] = f"{transition.write.char}{transition.move.char}q{transition.state_to}"
    return grid


def pretty_print_machine(table):
    """Pretty print the machine as a listing, a state x symbol table and LaTeX."""
    print("\n=== Transitions ===")
    for line in format_transitions(table):
        print(line)

    symbols = [symbol.char for symbol in Symbol]
    grid = state_symbol_grid(table)

    # === Terminal Human-Readable Table ===
    print("\n=== Transition Table ===")
    print("\t".join([" "] + symbols))
    latex_rows = []
    for state in sorted(grid):
        actions = [grid[state].get(char, "-") for char in symbols]
        print("\t".join([f"q{state}"] + actions))
        latex_rows.append([f"q_{{{state}}}"] + actions)

    # === LaTeX Table Output ===
    print("\n=== LaTeX Table ===")
    print(r"\begin{array}{c|" + "c" * len(symbols) + "}")
    print("State/Symbol & " + " & ".join([f"\\text{{{c}}}" for c in symbols]) + r" \\ \hline")
    for latex_row in latex_rows:
        print(" & ".join(latex_row) + r" \\")
    print(r"\end{array}")


def main():
    parser = argparse.ArgumentParser(description="Universal Turing Machine Inspector")
    parser.add_argument("--program", help="Built-in program to inspect, e.g. add or mul")
    parser.add_argument("--machine", help="Encoded machine to inspect")
    parser.add_argument("--code", help="Composite code <machine>111<word> to inspect")
    args = parser.parse_args()

    if args.program:
        machine_code = get_program(args.program).machine_code
    elif args.machine:
        machine_code = args.machine
    elif args.code:
        machine_code, word = split_composite(args.code)
        print(f"[INFO] Input word: {word}")
    else:
        raise ValueError("You must specify one of --program, --machine or --code.")

    table = decode(machine_code)
    print(f"[INFO] {len(table)} transitions, halting state q{table.halting_state}")
    pretty_print_machine(table)

if __name__ == "__main__":
    main()
