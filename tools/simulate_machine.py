# tools/simulate_machine.py

import argparse
import sys
from datetime import datetime
from typing import NamedTuple

from rich.console import Console
from rich.markup import escape

from dsl.errors import ParseError
from dsl.parser import load_machine
from logger.logger import JSONLogger
from simulator.tape import Tape
from simulator.turing_machine import Stopped, TuringMachine

console = Console()


class RunResult(NamedTuple):
    state: object
    tape: Tape
    steps: int
    halted: bool


def tape_from_string(text, start_position=0, default="#"):
    """Whitespace-separated symbols -> Tape, e.g. "1 + 1 1 =" -> ["1", "+", "1", "1", "="]."""
    return Tape.new_with_default(text.split(), start_position, default)


# === Step Loop ===
def run_machine(machine, max_steps=None, on_step=None):
    """
    Step `machine` until it stops or `max_steps` transitions were taken.

    `on_step` sees every running machine right before it is stepped.
    """
    steps = 0
    while max_steps is None or steps < max_steps:
        if on_step is not None:
            on_step(machine)
        outcome = machine.step()
        if isinstance(outcome, Stopped):
            return RunResult(outcome.state, outcome.tape, steps, True)
        machine = outcome.machine
        steps += 1
    return RunResult(machine.state, machine.tape, steps, False)


def run_record(machine_file, tape_text, result):
    return {
        "machine_file": str(machine_file),
        "initial_tape": tape_text,
        "final_tape": list(result.tape.cells()),
        "final_state": str(result.state),
        "head": result.tape.index,
        "steps": result.steps,
        "halted": result.halted,
        "timestamp": datetime.now().isoformat()
    }


def simulate_file(machine_file, tape_text, start_position=0, max_steps=None, trace=True,
                  run_logger=None, out=None):
    if out is None:
        out = console
    definition = load_machine(machine_file)
    tape = tape_from_string(tape_text, start_position, definition.empty)
    out.print(f"Tape: {tape}", markup=False, highlight=False)

    machine = TuringMachine(definition.movements, tape, definition.initial_state)
    on_step = None
    if trace:
        on_step = lambda m: out.print(m.tape.render(m.state), markup=False, highlight=False)
    result = run_machine(machine, max_steps=max_steps, on_step=on_step)

    if result.halted:
        out.print(f"STOPPED: state {result.state}", markup=False, highlight=False)
    else:
        out.print(f"[WARNING] Step budget of {max_steps:,} exhausted in state {result.state}.",
                  style="yellow", markup=False, highlight=False)
    out.print(str(result.tape), markup=False, highlight=False)

    if run_logger is not None:
        run_logger.log_run(run_record(machine_file, tape_text, result))

    return result


# === CLI ===
def main(argv=None):
    parser = argparse.ArgumentParser(description="Run a Turing machine described in the transition-table DSL.")
    parser.add_argument("--machine", default="machines/unary_add.tm", help="Path to the .tm machine file")
    parser.add_argument("--tape", default="1 + 1 1 =", help="Whitespace-separated initial tape")
    parser.add_argument("--start", type=int, default=0, help="Initial head position (default: 0)")
    parser.add_argument("--max_steps", type=int, default=10000, help="Step budget, 0 for unlimited")
    parser.add_argument("--quiet", action="store_true", help="Do not print the tape before every step")
    parser.add_argument("--no-log", action="store_true", help="Do not write a JSONL run record")
    parser.add_argument("--log_dir", default="logs/", help="Directory for run logs")
    args = parser.parse_args(argv)

    run_logger = None if args.no_log else JSONLogger(args.log_dir)
    try:
        result = simulate_file(
            args.machine,
            args.tape,
            start_position=args.start,
            max_steps=args.max_steps or None,
            trace=not args.quiet,
            run_logger=run_logger
        )
    except (ParseError, FileNotFoundError, IndexError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]", highlight=False)
        sys.exit(1)
    return result

if __name__ == "__main__":
    main()
