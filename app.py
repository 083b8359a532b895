# app.py

import argparse
import sys
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt, IntPrompt, Confirm
from rich.markup import escape
from rich.table import Table

from config.config_loader import DEFAULT_CONFIG, DEFAULT_CONFIG_PATH, load_config, save_config, validate_config
from logger.logger import JSONLogger
from simulator.encoding import INPUT_SEPARATOR
from simulator.errors import SimulatorError
from simulator.evaluator import evaluate_fast, read_result
from simulator.programs import PROGRAMS, get_program
from simulator.turing_machine import TraceMode, UniversalTuringMachine
from tools.machine_inspect import format_transitions

console = Console()

# === Utilities ===
def load_runtime_config(path=DEFAULT_CONFIG_PATH):
    if not Path(path).exists():
        console.print(f"[yellow]No config at {path}, using defaults.[/yellow]")
        return DEFAULT_CONFIG.copy()
    return load_config(path, verbose=False)

def render_step(record):
    return "\n".join([
        f"Calculation nr. {record.step}",
        f"Current state: {record.state_name}",
        f"Current position: {record.head}",
        "Tape: [" + ", ".join(record.tape) + "]",
    ])

def show_machine(machine):
    console.print(str(machine.tape), markup=False, highlight=False, soft_wrap=True)
    for line in format_transitions(machine.table):
        console.print(line, markup=False, highlight=False, soft_wrap=True)

def execute(machine, config, logger=None, label="machine"):
    """Run ``machine`` as configured, print the trace and the result, return the result."""
    mode = TraceMode.parse(config["mode"])
    max_steps = config["max_steps"]
    run_id = f"{label}-{datetime.now().strftime('%Y%m%dT%H%M%S%f')}"

    try:
        if config["use_jit"] and mode is TraceMode.NONE:
            result = evaluate_fast(machine, max_steps=max_steps)
        else:
            records = []
            for record in machine.trace(mode, max_steps=max_steps):
                console.print(render_step(record) + "\n", markup=False, highlight=False, soft_wrap=True)
                if config["log_steps"]:
                    records.append(record)
            result = read_result(machine.tape)
            if logger and records:
                logger.log_steps(run_id, records)
    except SimulatorError as e:
        if logger:
            logger.log({"run_id": run_id, "event": "failed", "steps": machine.steps,
                        "error": type(e).__name__, "message": str(e)})
        raise

    if logger:
        logger.log({"run_id": run_id, "event": "halted", "steps": machine.steps,
                    "state": f"q{machine.current_state}", "result": result})
    console.print(f"[bold green]Result: {result}[/bold green]")
    return result

def make_logger(config):
    return JSONLogger(config["output_directory"], config["log_file_prefix"])

# === Menu ===
def show_main_menu():
    console.print("\n[bold cyan]Universal Turing Machine[/bold cyan]")
    console.print("[1] Run Built-in Program")
    console.print("[2] Run Custom Machine")
    console.print("[3] Inspect Machine")
    console.print("[4] Edit Config")
    console.print("[5] Exit")

def handle_program(config):
    console.print("\n[bold]Run Built-in Program[/bold]")
    for program in PROGRAMS.values():
        console.print(f"  [cyan]{program.name}[/cyan]: {program.description}")

    name = Prompt.ask("Program", choices=list(PROGRAMS), default="add")
    first = IntPrompt.ask("First operand", default=2)
    second = IntPrompt.ask("Second operand", default=4)

    machine = UniversalTuringMachine.from_numbers(
        get_program(name).machine_code, first, second,
        tape_size=config["tape_size"], strict=config["strict"]
    )
    execute(machine, config, make_logger(config), label=name)

def handle_custom(config):
    console.print("\n[bold]Run Custom Machine[/bold]")
    code = Prompt.ask(f"Machine code (or <machine>{INPUT_SEPARATOR}<word>)")
    if INPUT_SEPARATOR in code:
        machine = UniversalTuringMachine.from_code(code, tape_size=config["tape_size"], strict=config["strict"])
    else:
        word = Prompt.ask("Input word over 0, 1, _, X", default="")
        machine = UniversalTuringMachine.from_word(code, word, tape_size=config["tape_size"], strict=config["strict"])
    execute(machine, config, make_logger(config), label="custom")

def handle_inspect():
    console.print("\n[bold]Inspect Machine[/bold]")
    name = Prompt.ask("Program name or machine code", default="add")
    code = get_program(name).machine_code if name in PROGRAMS else name
    machine = UniversalTuringMachine.from_word(code.partition(INPUT_SEPARATOR)[0], "")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Nr.", justify="center")
    table.add_column("From", justify="center")
    table.add_column("Read", justify="center")
    table.add_column("To", justify="center")
    table.add_column("Write", justify="center")
    table.add_column("Move", justify="center")
    for idx, t in enumerate(machine.table):
        table.add_row(str(idx), f"q{t.state_from}", t.read.char, f"q{t.state_to}", t.write.char, t.move.char)

    console.print(table)
    console.print(f"Halting state: [green]q{machine.table.halting_state}[/green]")

def handle_edit_config(config, path=DEFAULT_CONFIG_PATH):
    console.print("\n[bold]Edit Configuration[/bold]")

    tape_size = IntPrompt.ask("Tape Size", default=config.get("tape_size", 200))
    mode = Prompt.ask("Trace Mode", choices=[m.value for m in TraceMode], default=config.get("mode", "NONE"))
    strict = Confirm.ask("Fail on undefined transitions?", default=config.get("strict", False))
    max_steps = IntPrompt.ask("Max Steps (0 = unbounded)", default=config.get("max_steps") or 0)
    use_jit = Confirm.ask("Use compiled kernel when not tracing?", default=config.get("use_jit", False))
    log_steps = Confirm.ask("Log step records?", default=config.get("log_steps", False))

    config.update({
        "tape_size": tape_size,
        "mode": mode,
        "strict": strict,
        "max_steps": max_steps or None,
        "use_jit": use_jit,
        "log_steps": log_steps
    })

    save_config(config, path)
    console.print("[green]Configuration updated successfully.[/green]")

def interactive_main(config_path=DEFAULT_CONFIG_PATH):
    config = load_runtime_config(config_path)

    while True:
        show_main_menu()
        choice = Prompt.ask("\nChoose an option", choices=["1", "2", "3", "4", "5"], default="5")

        try:
            if choice == "1":
                handle_program(config)
            elif choice == "2":
                handle_custom(config)
            elif choice == "3":
                handle_inspect()
            elif choice == "4":
                handle_edit_config(config, config_path)
                config = load_runtime_config(config_path)
            elif choice == "5":
                console.print("[bold green]Goodbye![/bold green]")
                break
        except SimulatorError as e:
            console.print(f"[red]{type(e).__name__}: {escape(str(e))}[/red]")

# === CLI Mode for Automation ===
def build_machine(args, config):
    options = {"tape_size": config["tape_size"], "strict": config["strict"]}
    if args.code:
        return UniversalTuringMachine.from_code(args.code, **options)

    if args.program:
        program = get_program(args.program)
        machine_code = program.machine_code
        default_word = program.sample_word
    else:
        machine_code = args.machine
        default_word = ""

    if args.numbers:
        first, second = args.numbers
        return UniversalTuringMachine.from_numbers(machine_code, first, second, **options)
    word = args.word if args.word is not None else default_word
    return UniversalTuringMachine.from_word(machine_code, word, **options)

def cli_main(args):
    config = load_runtime_config(args.config)
    if args.mode:
        config["mode"] = args.mode
    if args.tape_size is not None:
        config["tape_size"] = args.tape_size
    if args.strict:
        config["strict"] = True
    if args.max_steps is not None:
        config["max_steps"] = args.max_steps
    if args.jit:
        config["use_jit"] = True

    try:
        validate_config(config)
        machine = build_machine(args, config)
        if TraceMode.parse(config["mode"]) is TraceMode.STEP:
            show_machine(machine)
        execute(machine, config, make_logger(config) if args.log else None, label=args.program or "machine")
    except SimulatorError as e:
        console.print(f"[red]{type(e).__name__}: {escape(str(e))}[/red]")
        return 1
    return 0

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Universal Turing Machine Simulator")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--program", choices=sorted(PROGRAMS), help="Run a built-in program")
    source.add_argument("--machine", help="Encoded machine (0/1 string)")
    source.add_argument("--code", help=f"Composite code <machine>{INPUT_SEPARATOR}<word>")
    parser.add_argument("--word", help="Initial tape word over 0, 1, _, X")
    parser.add_argument("--numbers", type=int, nargs=2, metavar=("A", "B"), help="Two natural number operands")
    parser.add_argument("--mode", choices=[m.value for m in TraceMode], help="Trace mode")
    parser.add_argument("--tape-size", type=int, help="Tape size (cells)")
    parser.add_argument("--strict", action="store_true", help="Fail on undefined transitions")
    parser.add_argument("--max-steps", type=int, help="Abort after this many steps")
    parser.add_argument("--jit", action="store_true", help="Use the compiled kernel when not tracing")
    parser.add_argument("--log", action="store_true", help="Write JSONL run logs")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Runtime config path")
    return parser.parse_args(argv)

def main():
    args = parse_args()

    if args.program or args.machine or args.code:
        sys.exit(cli_main(args))
    else:
        interactive_main(args.config)

if __name__ == "__main__":
    main()
