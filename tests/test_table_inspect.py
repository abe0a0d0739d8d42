import io
from pathlib import Path

from rich.console import Console

from dsl.parser import load_machine, parse, parse_rules
from simulator.turing_machine import Move
from tools.table_inspect import find_duplicate_rules, inspect_source, table_summary, transition_grid

UNARY_ADD = Path(__file__).resolve().parents[1] / "machines" / "unary_add.tm"


def test_transition_grid_for_unary_addition():
    states, symbols, rows = transition_grid(load_machine(UNARY_ADD))

    assert states == ["q0", "q1", "q2"]
    assert symbols == ["+", "1", "=", "0", "#"]
    assert rows[0] == ["+ R q0", "0 R q1", "HALT", "HALT", "HALT"]
    assert rows[1][4] == "1 L q2"


def test_target_only_states_get_a_row():
    states, _, rows = transition_grid(parse("EMPTY: _ INITIAL_STATE: a (a, _): (done, x, R)"))
    assert states == ["a", "done"]
    assert rows[1] == ["HALT"]


def test_table_summary():
    summary = table_summary(load_machine(UNARY_ADD))
    assert summary == {"initial_state": "q0", "empty": "#", "states": 3, "symbols": 5, "rules": 10}


def test_find_duplicate_rules():
    rules = parse_rules(
        "EMPTY: # INITIAL_STATE: q0 (q0, 1): (q1, 0, R) (q0, 0): (q0, 0, R) (q0, 1): (q2, 1, L)"
    ).rules
    assert find_duplicate_rules(rules) == {
        ("q0", "1"): [("q1", "0", Move.RIGHT), ("q2", "1", Move.LEFT)]
    }


def test_inspect_source_warns_about_overridden_rules():
    out = Console(file=io.StringIO(), width=200)
    definition = inspect_source("EMPTY: # INITIAL_STATE: q0 (q0, 1): (q1, 0, R) (q0, 1): (q2, 1, L)", out)

    text = out.file.getvalue()
    assert "(q0, 1) defined 2 times" in text
    assert "Transition Table" in text
    assert definition.movements[("q0", "1")] == ("q2", "1", Move.LEFT)
