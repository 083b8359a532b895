# tools/simulate_pool.py

import argparse
import json
import os
from pathlib import Path
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from logger.logger import JSONLogger
from simulator.errors import SimulatorError, ConfigurationError
from simulator.evaluator import evaluate, evaluate_fast
from simulator.programs import get_program
from simulator.turing_machine import UniversalTuringMachine

# === Job Construction ===
def build_machine(job, tape_size=200, strict=False):
    """
    Build a machine from one pool entry. Accepted shapes:
      {"job_id", "code"}                      composite <machine>111<word>
      {"job_id", "machine" | "program", "word"}
      {"job_id", "machine" | "program", "numbers": [a, b]}
    """
    tape_size = job.get("tape_size", tape_size)
    if "code" in job:
        return UniversalTuringMachine.from_code(job["code"], tape_size=tape_size, strict=strict)

    if "program" in job:
        machine_code = get_program(job["program"]).machine_code
    elif "machine" in job:
        machine_code = job["machine"]
    else:
        raise ConfigurationError(f"Job {job.get('job_id')} has neither 'code', 'machine' nor 'program'")

    if "numbers" in job:
        first, second = job["numbers"]
        return UniversalTuringMachine.from_numbers(machine_code, first, second, tape_size=tape_size, strict=strict)
    return UniversalTuringMachine.from_word(machine_code, job.get("word", ""), tape_size=tape_size, strict=strict)

# === Utility Loaders ===
def load_job_pool(job_pool_file):
    with open(job_pool_file, "r", encoding="utf-8") as f:
        jobs = [json.loads(line) for line in f if line.strip()]
    return jobs

def load_checkpoint(checkpoint_path):
    if checkpoint_path.exists():
        with open(checkpoint_path, "r", encoding="utf-8") as f:
            checkpoint = json.load(f)
        return checkpoint.get("completed", [])
    return []

def save_checkpoint(completed, checkpoint_path):
    with open(checkpoint_path, "w", encoding="utf-8") as f:
        json.dump({"completed": completed}, f, indent=4)

def console_message(msg):
    print(f"[{Path(os.getcwd()).name}] {msg}")

# === Main Simulation Runner ===
def simulate_pool(job_pool_file, output_name="results", results_root="results", batch_size=256,
                  max_steps=1000000, tape_size=200, strict=False, use_jit=False, logger=None):
    pool_name = Path(job_pool_file).stem
    results_folder = Path(results_root) / pool_name
    results_folder.mkdir(parents=True, exist_ok=True)
    results_file = results_folder / f"{output_name}.jsonl"
    checkpoint_file = results_folder / f"{output_name}_checkpoint.json"
    logger = logger or JSONLogger(output_directory=str(results_folder / "logs"))

    all_jobs = load_job_pool(job_pool_file)
    completed = load_checkpoint(checkpoint_file)

    pending_jobs = [job for job in all_jobs if job["job_id"] not in completed]
    console_message(f"Loaded {len(all_jobs):,} total jobs. {len(pending_jobs):,} pending.")

    run = evaluate_fast if use_jit else evaluate

    with open(results_file, "a", encoding="utf-8") as results_fh:
        for batch_start in range(0, len(pending_jobs), batch_size):
            batch = pending_jobs[batch_start:batch_start + batch_size]
            console_message(f"Processing batch {batch_start // batch_size + 1} with {len(batch):,} jobs...")

            with Progress(
                    SpinnerColumn(),
                    BarColumn(),
                    "[progress.percentage]{task.percentage:>3.0f}%",
                    TextColumn("[progress.completed]/[progress.total] Jobs"),
                    TimeElapsedColumn()
            ) as progress:

                task = progress.add_task("[cyan]Simulating...", total=len(batch))

                batch_results = []
                halted_entries = []
                failed_entries = []

                for job in batch:
                    job_id = job["job_id"]
                    try:
                        machine = build_machine(job, tape_size=tape_size, strict=strict)
                        result = run(machine, max_steps=max_steps)
                        entry = {
                            "job_id": job_id,
                            "steps_taken": machine.steps,
                            "halted": True,
                            "result": result
                        }
                        halted_entries.append(entry)
                    except SimulatorError as e:
                        entry = {
                            "job_id": job_id,
                            "halted": False,
                            "error": type(e).__name__,
                            "message": str(e)
                        }
                        failed_entries.append(entry)
                        console_message(f"[WARNING] Job {job_id} failed: {e}")

                    batch_results.append(entry)
                    completed.append(job_id)
                    progress.update(task, advance=1)

                # === BULK WRITE once per batch ===
                for entry in batch_results:
                    results_fh.write(json.dumps(entry) + "\n")
                results_fh.flush()

                if halted_entries:
                    logger.log_halted(halted_entries)
                if failed_entries:
                    logger.log_failed(failed_entries)

                save_checkpoint(completed, checkpoint_file)
                console_message("[INFO] Batch completed. Checkpoint saved.")

    console_message("[SUCCESS] All jobs simulated. Results saved.")
    return results_file


# === CLI ===
def main():
    parser = argparse.ArgumentParser(description="Run a pool of encoded machines with checkpointing and optional JIT acceleration.")
    parser.add_argument("--pool", required=True, help="Path to job pool file (one JSON job per line)")
    parser.add_argument("--output", default="results", help="Output result file name (default: results)")
    parser.add_argument("--batch_size", type=int, default=256, help="Batch size per save/checkpoint")
    parser.add_argument("--max_steps", type=int, default=1000000, help="Maximum steps before giving up on a job")
    parser.add_argument("--tape_size", type=int, default=200, help="Tape size (cells)")
    parser.add_argument("--strict", action="store_true", help="Fail on undefined transitions instead of using transition 0")
    parser.add_argument("--jit", action="store_true", help="Use the compiled kernel")
    args = parser.parse_args()

    simulate_pool(
        args.pool,
        args.output,
        batch_size=args.batch_size,
        max_steps=args.max_steps,
        tape_size=args.tape_size,
        strict=args.strict,
        use_jit=args.jit
    )

if __name__ == "__main__":
    main()
