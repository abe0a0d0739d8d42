from enum import Enum


class ErrorKind(Enum):
    EMPTY_DECLARATION = "malformed EMPTY declaration"
    INITIAL_STATE_DECLARATION = "malformed INITIAL_STATE declaration"
    RULE = "malformed rule"
    UNTERMINATED_STRING = "unterminated quoted symbol"
    INVALID_ESCAPE = "invalid escape sequence"
    TRAILING_INPUT = "unparsed trailing input"


class EscapeError(ValueError):
    """Unknown backslash escape inside a quoted symbol, at `position` in the source."""

    def __init__(self, position):
        super().__init__(position)
        self.position = position


def line_column(source, position):
    line = source.count("\n", 0, position) + 1
    column = position - (source.rfind("\n", 0, position) + 1) + 1
    return line, column


def fragment_at(source, position, width=20):
    rest = source[position:].split("\n", 1)[0]
    if not rest:
        return "end of line" if position < len(source) else "end of input"
    return rest[:width]


class ParseError(ValueError):
    """A transition-table source that does not match the grammar."""

    def __init__(self, kind: ErrorKind, source: str, position: int, expected: str):
        self.kind = kind
        self.position = position
        self.expected = expected
        self.line, self.column = line_column(source, position)
        self.fragment = fragment_at(source, position)
        super().__init__(
            f"{kind.value} at line {self.line}, column {self.column}: "
            f"expected {expected}, found '{self.fragment}'"
        )
