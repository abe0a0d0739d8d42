import argparse
import sys
from collections import defaultdict

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dsl.errors import ParseError
from dsl.parser import parse_rules

console = Console()

def find_duplicate_rules(rules):
    """Map each (state, symbol) defined more than once to all its transitions, in source order."""
    seen = defaultdict(list)
    for curr_state, next_state in rules:
        seen[curr_state].append(next_state)
    return {key: transitions for key, transitions in seen.items() if len(transitions) > 1}

def _ordered_unique(values):
    return list(dict.fromkeys(values))

def transition_grid(definition):
    """
    States x symbols grid of the table, in first-appearance order.

    The initial state comes first and the EMPTY symbol last; cells read like
    "1 R q2", unmapped configurations are "HALT".
    """
    states = _ordered_unique(
        [definition.initial_state]
        + [state for state, _ in definition.movements]
        + [new_state for new_state, _, _ in definition.movements.values()]
    )
    symbols = [s for s in _ordered_unique(symbol for _, symbol in definition.movements) if s != definition.empty]
    symbols.append(definition.empty)

    rows = []
    for state in states:
        row = []
        for symbol in symbols:
            transition = definition.movements.get((state, symbol))
            if transition is None:
                row.append("HALT")
            else:
                new_state, new_symbol, move = transition
                row.append(f"{new_symbol} {move.value} {new_state}")
        rows.append(row)
    return states, symbols, rows

def table_summary(definition):
    states, symbols, _ = transition_grid(definition)
    return {
        "initial_state": definition.initial_state,
        "empty": definition.empty,
        "states": len(states),
        "symbols": len(symbols),
        "rules": len(definition.movements)
    }

def pretty_print_table(definition, out=None):
    if out is None:
        out = console
    states, symbols, rows = transition_grid(definition)

    table = Table(title="Transition Table", show_header=True, header_style="bold magenta")
    table.add_column("State", justify="center")
    for symbol in symbols:
        label = repr(symbol) if symbol == "" else symbol
        if symbol == definition.empty:
            label = f"{label} (EMPTY)"
        table.add_column(escape(label), justify="center")

    for state, row in zip(states, rows):
        name = f"{state} (initial)" if state == definition.initial_state else state
        cells = [f"[red]{c}[/red]" if c == "HALT" else escape(c) for c in row]
        table.add_row(escape(name), *cells)

    out.print(table)
    return table

def inspect_source(source, out=None):
    if out is None:
        out = console
    parsed = parse_rules(source)
    definition = parsed.definition()

    summary = table_summary(definition)
    out.print(f"[INFO] Initial state: {escape(summary['initial_state'])}, empty symbol: {escape(repr(summary['empty']))}", highlight=False)
    out.print(f"[INFO] {summary['rules']} rules over {summary['states']} states and {summary['symbols']} symbols", highlight=False)

    for (state, symbol), transitions in find_duplicate_rules(parsed.rules).items():
        out.print(
            f"[yellow][WARNING] ({escape(state)}, {escape(symbol)}) defined {len(transitions)} times; "
            f"the last definition wins.[/yellow]",
            highlight=False
        )

    pretty_print_table(definition, out)
    return definition

def main(argv=None):
    parser = argparse.ArgumentParser(description="Transition Table Inspector")
    parser.add_argument("--machine", required=True, help="Path to the .tm machine file")
    args = parser.parse_args(argv)

    try:
        with open(args.machine, "r", encoding="utf-8") as f:
            source = f.read()
        inspect_source(source)
    except (ParseError, FileNotFoundError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]", highlight=False)
        sys.exit(1)

if __name__ == "__main__":
    main()
