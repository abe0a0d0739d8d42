from enum import Enum
from typing import Dict, Generic, Hashable, NamedTuple, Tuple, TypeVar, Union

from simulator.tape import Tape

State = TypeVar("State", bound=Hashable)
Data = TypeVar("Data", bound=Hashable)


class Move(Enum):
    LEFT = "L"
    RIGHT = "R"


# (state, symbol under head) -> (new state, symbol to write, head move)
CurrState = Tuple[State, Data]
NextState = Tuple[State, Data, Move]
Movements = Dict[CurrState, NextState]


class MachineConsumedError(RuntimeError):
    """Raised when a machine is used again after it has been stepped."""


class Running(NamedTuple):
    machine: "TuringMachine"


class Stopped(NamedTuple):
    state: Hashable
    tape: Tape


StepResult = Union[Running, Stopped]


class TuringMachine(Generic[State, Data]):
    def __init__(self, movements: Movements, tape: Tape, state: State):
        self._movements = movements
        self._tape = tape
        self._state = state
        self._consumed = False

    def _check_live(self):
        if self._consumed:
            raise MachineConsumedError("Machine was already stepped; use the returned result instead.")

    @property
    def tape(self) -> Tape:
        self._check_live()
        return self._tape

    @property
    def state(self) -> State:
        self._check_live()
        return self._state

    @property
    def movements(self) -> Movements:
        self._check_live()
        return self._movements

    def step(self) -> StepResult:
        """
        Perform one transition and hand the machine over to the result.

        Returns Running with the advanced machine, or Stopped with the current
        state and the untouched tape when no rule matches (state, symbol).
        The machine this is called on is spent afterwards.
        """
        self._check_live()
        self._consumed = True
        movements, tape, state = self._movements, self._tape, self._state
        self._movements = self._tape = self._state = None

        transition = movements.get((state, tape.read()))
        if transition is None:
            return Stopped(state, tape)

        new_state, new_symbol, move = transition
        tape.write(new_symbol)
        if move is Move.LEFT:
            tape.move_left()
        else:
            tape.move_right()
        return Running(TuringMachine(movements, tape, new_state))

    def __repr__(self):
        if self._consumed:
            return "TuringMachine(<consumed>)"
        return f"TuringMachine(state={self._state!r}, tape={self._tape!r}, rules={len(self._movements)})"
