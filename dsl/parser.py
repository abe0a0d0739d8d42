"""
Transition-table DSL.

    EMPTY: #
    INITIAL_STATE: q0
    (q0, 1): (q1, 0, R)
    (q1, "a b"): (q1, #, L)

The EMPTY symbol fills new tape cells, INITIAL_STATE names the start state, and
each rule maps (state, symbol) to (new state, symbol to write, move).
"""

import re
from pathlib import Path
from typing import Dict, List, NamedTuple, Tuple

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken, VisitError

from dsl.errors import ErrorKind, EscapeError, ParseError
from simulator.turing_machine import Move

CurrState = Tuple[str, str]
NextState = Tuple[str, str, Move]
StateChange = Tuple[CurrState, NextState]


class MachineRules(NamedTuple):
    """Parsed source with every rule kept in source order."""
    empty: str
    initial_state: str
    rules: List[StateChange]

    def definition(self) -> "MachineDefinition":
        # dict() keeps the last transition given for a repeated key
        return MachineDefinition(self.empty, self.initial_state, dict(self.rules))


class MachineDefinition(NamedTuple):
    empty: str
    initial_state: str
    movements: Dict[CurrState, NextState]


# ============================================================
# Grammar (LALR, contextual lexer)
# ============================================================

GRAMMAR = r"""
    start: empty_decl initial_decl rule*

    empty_decl: _EMPTY symbol
    initial_decl: _INITIAL IDENT

    rule: configuration _COLON transition
    configuration: _LPAR IDENT _COMMA symbol _RPAR
    transition: _LPAR IDENT _COMMA symbol _COMMA direction _RPAR
    direction: RIGHT | LEFT

    symbol: (QUOTED | BARE)?

    _EMPTY: "EMPTY:"
    _INITIAL: "INITIAL_STATE:"
    _LPAR: "("
    _RPAR: ")"
    _COMMA: ","
    _COLON: ":"
    RIGHT: "R"
    LEFT: "L"
    IDENT: /[A-Za-z_][A-Za-z0-9_]*/
    QUOTED: /"(?:[^"\\]|\\.)*"/s
    BARE: /[^ \t\r\n(),"]+/

    %ignore /[ \t\r\n]+/
"""

parser = Lark(GRAMMAR, parser="lalr", lexer="contextual")

# Terminal names as shown in error messages, in the order they are listed.
EXPECTED = {
    "_EMPTY": "'EMPTY:'",
    "_INITIAL": "'INITIAL_STATE:'",
    "_LPAR": "'('",
    "IDENT": "identifier",
    "_COMMA": "','",
    "QUOTED": "'\"'",
    "BARE": "symbol",
    "_RPAR": "')'",
    "_COLON": "':'",
    "RIGHT": "'R'",
    "LEFT": "'L'",
    "$END": "end of input",
}

ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
}

ESCAPE = re.compile(r"\\(u\{[0-9A-Fa-f]{1,6}\}|.)", re.S)


def unquote(token):
    """Strip the quotes from a QUOTED token and resolve its escapes, including \\u{XXXX}."""
    def replace(match):
        code = match.group(1)
        if code in ESCAPES:
            return ESCAPES[code]
        if code.startswith("u{"):
            value = int(code[2:-1], 16)
            if value <= 0x10FFFF and not 0xD800 <= value <= 0xDFFF:
                return chr(value)
        raise EscapeError(token.start_pos + 1 + match.start())

    return ESCAPE.sub(replace, token[1:-1])


@v_args(inline=True)
class MachineBuilder(Transformer):
    def start(self, empty, initial_state, *rules):
        return MachineRules(empty, initial_state, list(rules))

    def empty_decl(self, symbol):
        return symbol

    def initial_decl(self, ident):
        return str(ident)

    def rule(self, configuration, transition):
        return configuration, transition

    def configuration(self, state, symbol):
        return str(state), symbol

    def transition(self, state, symbol, move):
        return str(state), symbol, move

    def direction(self, token):
        return Move.RIGHT if token.type == "RIGHT" else Move.LEFT

    def symbol(self, token=None):
        if token is None:
            return ""
        if token.type == "QUOTED":
            return unquote(token)
        return str(token)


machine_builder = MachineBuilder()


# ============================================================
# Error classification
# ============================================================

def _describe(names):
    names = names or ()
    return " or ".join(text for name, text in EXPECTED.items() if name in names) or "valid input"


def _error_kind(consumed):
    """Which construct was being read, judged from the tokens accepted before the failure."""
    types = [token.type for token in consumed]
    if "_INITIAL" not in types:
        if types[1:2] and types[0] == "_EMPTY":
            return ErrorKind.INITIAL_STATE_DECLARATION
        return ErrorKind.EMPTY_DECLARATION
    if types[-1] == "_INITIAL":
        return ErrorKind.INITIAL_STATE_DECLARATION

    # A rule opens with "(" and closes with the second ")".
    in_rule = False
    closed = 0
    for kind in types[types.index("_INITIAL") + 2:]:
        if kind == "_LPAR" and not in_rule:
            in_rule, closed = True, 0
        elif kind == "_RPAR":
            closed += 1
            if closed == 2:
                in_rule = False
    return ErrorKind.RULE if in_rule else ErrorKind.TRAILING_INPUT


def _tokenize_and_parse(source, consumed):
    interactive = parser.parse_interactive(source)
    for token in interactive.iter_parse():
        consumed.append(token)
    return interactive.feed_eof(consumed[-1] if consumed else None)


def parse_rules(source: str) -> MachineRules:
    """Parse the whole of `source`, keeping duplicate rules. Raises ParseError."""
    consumed = []
    try:
        tree = _tokenize_and_parse(source, consumed)
    except UnexpectedCharacters as err:
        # Every other character starts some terminal, so only an open quote fails to lex.
        kind = ErrorKind.UNTERMINATED_STRING if err.char == '"' else _error_kind(consumed)
        expected = "closing '\"'" if err.char == '"' else _describe(err.allowed)
        raise ParseError(kind, source, err.pos_in_stream, expected) from None
    except UnexpectedToken as err:
        if consumed and err.token is consumed[-1]:
            consumed.pop()
        position = len(source) if err.token.type == "$END" else err.token.start_pos
        raise ParseError(_error_kind(consumed), source, position, _describe(err.expected)) from None
    except UnexpectedEOF as err:
        raise ParseError(_error_kind(consumed), source, len(source), _describe(err.expected)) from None

    try:
        return machine_builder.transform(tree)
    except VisitError as err:
        if isinstance(err.orig_exc, EscapeError):
            raise ParseError(ErrorKind.INVALID_ESCAPE, source, err.orig_exc.position, "escape sequence") from None
        raise


def parse(source: str) -> MachineDefinition:
    """
    Compile DSL text into (empty symbol, initial state, movements).

    When two rules share a (state, symbol) key the later one wins.
    """
    return parse_rules(source).definition()


def load_machine(path) -> MachineDefinition:
    with open(Path(path), "r", encoding="utf-8") as f:
        return parse(f.read())
