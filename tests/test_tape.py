import random

import pytest

from simulator.tape import Tape


def test_new_with_default_positions_head():
    tape = Tape.new_with_default(["a", "b", "c"], 1, "#")
    assert tape.read() == "b"
    assert tape.cells() == ("a", "b", "c")
    assert len(tape) == 3


def test_new_with_default_copies_symbols():
    symbols = ["a", "b"]
    tape = Tape.new_with_default(symbols, 0, "#")
    tape.write("z")
    assert symbols == ["a", "b"]


def test_empty_symbols_get_one_default_cell():
    tape = Tape.new_with_default([], 0, "#")
    assert tape.cells() == ("#",)
    assert tape.read() == "#"


@pytest.mark.parametrize("index", [2, -1])
def test_index_outside_tape_is_rejected(index):
    with pytest.raises(IndexError):
        Tape.new_with_default(["a", "b"], index, "#")


def test_write_then_read():
    tape = Tape.new_with_default(["a", "b"], 1, "#")
    tape.write("x")
    assert tape.read() == "x"
    assert tape.cells() == ("a", "x")
    assert tape.index == 1


def test_move_right_past_end_appends_one_default():
    tape = Tape.new_with_default(["a", "b"], 1, "#")
    tape.move_right()
    assert tape.index == 2
    assert tape.cells() == ("a", "b", "#")
    assert tape.read() == "#"


def test_move_right_inside_tape_does_not_grow():
    tape = Tape.new_with_default(["a", "b"], 0, "#")
    tape.move_right()
    assert tape.index == 1
    assert len(tape) == 2


def test_move_left_past_start_inserts_one_default():
    tape = Tape.new_with_default(["a", "b"], 0, "#")
    tape.move_left()
    assert tape.index == 0
    assert tape.cells() == ("#", "a", "b")
    assert tape.read() == "#"


def test_move_left_inside_tape_does_not_grow():
    tape = Tape.new_with_default(["a", "b"], 1, "#")
    tape.move_left()
    assert tape.index == 0
    assert tape.read() == "a"
    assert len(tape) == 2


def test_head_stays_in_bounds_for_any_walk():
    rng = random.Random(1234)
    tape = Tape.new_with_default(["x"], 0, "_")
    for _ in range(2000):
        if rng.random() < 0.5:
            tape.move_left()
        else:
            tape.move_right()
        assert 0 <= tape.index < len(tape)
    assert "x" in tape.cells()


def test_default_tape_is_single_default_cell():
    tape = Tape(0)
    assert tape.cells() == (0,)
    tape.move_right()
    tape.write(1)
    assert tape.cells() == (0, 1)


def test_render_places_state_before_head_cell():
    tape = Tape.new_with_default(["1", "+", "1"], 1, "#")
    assert tape.render("q0") == " 1 q0 + 1"
    assert str(tape) == " 1 > + 1"


def test_render_accepts_non_string_labels():
    tape = Tape.new_with_default([0, 1], 0, 0)
    assert tape.render(7) == " 7 0 1"
