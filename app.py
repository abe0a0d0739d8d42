# app.py

import argparse
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt, IntPrompt, Confirm

from config.config_loader import DEFAULT_CONFIG_PATH, load_config, save_config
from dsl.errors import ParseError
from logger.logger import JSONLogger
from tools.simulate_machine import simulate_file
from tools.table_inspect import inspect_source

console = Console()

# === Utilities ===
def load_runtime_config(path=DEFAULT_CONFIG_PATH):
    if not Path(path).exists():
        console.print(f"[red]Error: {escape(str(path))} not found![/red]")
        exit(1)
    return load_config(path, verbose=False)

def save_runtime_config(config, path=DEFAULT_CONFIG_PATH):
    save_config(config, path)
    console.print("[green]Configuration updated successfully.[/green]")

def show_main_menu():
    console.print("\n[bold cyan]Turing Machine Interpreter[/bold cyan]")
    console.print("[1] Run Machine")
    console.print("[2] Inspect Transition Table")
    console.print("[3] Edit Config")
    console.print("[4] Exit")

def run_from_config(config, machine_file=None, tape=None):
    run_logger = None
    if config["log_runs"]:
        run_logger = JSONLogger(config["output_directory"], config["log_file_prefix"])
    try:
        return simulate_file(
            machine_file or config["machine_file"],
            tape if tape is not None else config["tape"],
            start_position=config["start_position"],
            max_steps=config["max_steps"] or None,
            trace=config["trace"],
            run_logger=run_logger
        )
    except (ParseError, FileNotFoundError, IndexError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return None

def inspect_file(machine_file):
    try:
        with open(machine_file, "r", encoding="utf-8") as f:
            return inspect_source(f.read(), console)
    except (ParseError, FileNotFoundError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return None

def handle_run(config):
    console.print("\n[bold]Run Machine[/bold]")

    machine_file = Prompt.ask("Machine file", default=config["machine_file"])
    tape = Prompt.ask("Initial tape (space separated)", default=config["tape"])

    console.print(f"[cyan]Running {escape(machine_file)}...[/cyan]")
    result = run_from_config(config, machine_file, tape)
    if result is not None:
        console.print(f"[green]Finished after {result.steps:,} steps.[/green]")

def handle_inspect(config):
    console.print("\n[bold]Inspect Transition Table[/bold]")
    machine_file = Prompt.ask("Machine file", default=config["machine_file"])
    inspect_file(machine_file)

def handle_edit_config(config, path=DEFAULT_CONFIG_PATH):
    console.print("\n[bold]Edit Configuration[/bold]")

    machine_file = Prompt.ask("Machine file", default=config["machine_file"])
    tape = Prompt.ask("Initial tape", default=config["tape"])
    start_position = IntPrompt.ask("Start position", default=config["start_position"])
    max_steps = IntPrompt.ask("Max Steps (0 = unlimited)", default=config["max_steps"])
    trace = Confirm.ask("Trace every step?", default=config["trace"])
    log_runs = Confirm.ask("Log runs to JSONL?", default=config["log_runs"])

    config.update({
        "machine_file": machine_file,
        "tape": tape,
        "start_position": start_position,
        "max_steps": max_steps,
        "trace": trace,
        "log_runs": log_runs
    })

    try:
        save_runtime_config(config, path)
    except (ValueError, TypeError) as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")

def interactive_main(config_path=DEFAULT_CONFIG_PATH):
    config = load_runtime_config(config_path)

    while True:
        show_main_menu()
        choice = Prompt.ask("\nChoose an option", choices=["1", "2", "3", "4"], default="4")

        if choice == "1":
            handle_run(config)
        elif choice == "2":
            handle_inspect(config)
        elif choice == "3":
            handle_edit_config(config, config_path)
            config = load_runtime_config(config_path)
        elif choice == "4":
            console.print("[bold green]Goodbye![/bold green]")
            break

# === CLI Mode for Automation ===
def cli_main(args):
    config = load_runtime_config(args.config)
    machine_file = args.machine or config["machine_file"]

    if args.inspect:
        if inspect_file(machine_file) is None:
            exit(1)
    if args.run:
        if run_from_config(config, machine_file, args.tape) is None:
            exit(1)

def main():
    parser = argparse.ArgumentParser(description="Turing Machine Interpreter")
    parser.add_argument("--run", action="store_true", help="Run the configured machine immediately")
    parser.add_argument("--inspect", action="store_true", help="Print the machine's transition table")
    parser.add_argument("--machine", help="Override the configured machine file")
    parser.add_argument("--tape", help="Override the configured initial tape")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to runtime_config.json")
    args = parser.parse_args()

    if args.run or args.inspect:
        cli_main(args)
    else:
        interactive_main(args.config)

if __name__ == "__main__":
    main()
