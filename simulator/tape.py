from typing import Generic, Hashable, List, Sequence, TypeVar

Data = TypeVar("Data", bound=Hashable)


class Tape(Generic[Data]):
    """
    Unbounded tape with a single read/write head.

    The tape grows by one `default` cell whenever the head steps past either
    end, so `0 <= index < len(mem)` holds after every operation.
    """

    def __init__(self, default: Data):
        self.default = default
        self.index = 0
        self.mem: List[Data] = [default]

    @classmethod
    def new_with_default(cls, symbols: Sequence[Data], index: int, default: Data) -> "Tape[Data]":
        """Build a tape over a copy of `symbols`. Raises IndexError if `index` is off the tape."""
        tape = cls(default)
        if symbols:
            tape.mem = list(symbols)
        if not 0 <= index < len(tape.mem):
            raise IndexError(f"Head index {index} outside tape of length {len(tape.mem)}.")
        tape.index = index
        return tape

    def read(self) -> Data:
        return self.mem[self.index]

    def write(self, symbol: Data):
        self.mem[self.index] = symbol

    def move_right(self):
        self.index += 1
        if self.index == len(self.mem):
            self.mem.append(self.default)

    def move_left(self):
        # Left growth shifts every cell; fine for demonstration-sized tapes.
        if self.index == 0:
            self.mem.insert(0, self.default)
        else:
            self.index -= 1

    def cells(self):
        return tuple(self.mem)

    def render(self, state_label) -> str:
        """Single-line dump of the tape with `state_label` placed before the head cell."""
        parts = []
        for idx, symbol in enumerate(self.mem):
            if idx == self.index:
                parts.append(f" {state_label}")
            parts.append(f" {symbol}")
        return "".join(parts)

    def __len__(self):
        return len(self.mem)

    def __eq__(self, other):
        if not isinstance(other, Tape):
            return NotImplemented
        return (self.index, self.mem, self.default) == (other.index, other.mem, other.default)

    def __repr__(self):
        return f"Tape(mem={self.mem!r}, index={self.index}, default={self.default!r})"

    def __str__(self):
        return self.render(">")
