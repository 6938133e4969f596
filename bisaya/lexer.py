"""Tokenizer for the Bisaya++ language.

The raw source is scanned by a Lark basic lexer configured with the
terminals of the language. Lark takes care of whitespace, `--` comments and
longest-match selection; this module then classifies the terminals into the
token kinds the parser works with:

    IDENT    identifiers (case preserved)
    KEYWORD  reserved uppercase words such as SUGOD, MUGNA, KUNG, UG
    INT      integer literals
    FLOAT    floating point literals
    STRING   single- or double-quoted text, quotes included
    ESCAPE   bracket-escaped single character, e.g. `[#]`
    OP       operators, including `&` (concatenation) and `$` (newline)
    PUNCT    `( ) { } , :`

The stream is flat: newlines are not tokens. Statement boundaries are found
by the parser from keyword lookahead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import BisayaError
from .types import ErrorVal


KEYWORDS = frozenset({
    'SUGOD', 'KATAPUSAN', 'MUGNA',
    'NUMERO', 'TIPIK', 'LETRA', 'TINUOD',
    'IPAKITA', 'DAWAT',
    'KUNG', 'WALA', 'PUNDOK', 'ALANG', 'SA',
    'UG', 'O', 'DILI', 'OO',
})


# `++` and `--` are step operators only when glued to the end of a name
# (`i++`), so they are lexed together with it as STEPPED and split up again
# in `tokenize`. Everywhere else, even right after a number, `--` opens a
# comment.
BISAYA_TERMINALS = r"""
    start: _token*
    _token: NAME | NUMBER | STRING | ESCAPE | STEPPED | OPERATOR | PUNCT

    NAME: /[A-Za-z_][A-Za-z0-9_]*/
    NUMBER: /\d+(\.\d+)?/
    STRING: /"[^"\n]*"/ | /'[^'\n]*'/
    ESCAPE: /\[[^\n]\]/
    STEPPED.2: /[A-Za-z_][A-Za-z0-9_]*(\+\+|--)/
    OPERATOR: "==" | "<>" | "<=" | ">=" | "<" | ">" | "=" | "+" | "-" | "*" | "/" | "%" | "&" | "$"
    PUNCT: "(" | ")" | "{" | "}" | "," | ":"

    COMMENT: /--[^\n]*/
    %ignore COMMENT

    %import common.WS
    %ignore WS
"""


BISAYA_LEXER = Lark(
    BISAYA_TERMINALS,
    parser='lalr',
    lexer='basic',
)


@dataclass(frozen=True)
class Token:
    type: str
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"{self.type}({self.value!r}@{self.line}:{self.column})"


def classify(terminal: str, value: str) -> str:
    """Map a Lark terminal name onto a Bisaya++ token kind."""
    if terminal == 'NAME':
        return 'KEYWORD' if value in KEYWORDS else 'IDENT'
    if terminal == 'NUMBER':
        return 'FLOAT' if '.' in value else 'INT'
    if terminal == 'OPERATOR':
        return 'OP'
    return terminal


def tokenize(source: str) -> List[Token]:
    """Convert source code into a flat list of tokens.

    An unrecognized character raises a SyntaxError carrying its line and
    column; nothing is silently skipped.
    """
    tokens: List[Token] = []
    try:
        for tok in BISAYA_LEXER.lex(source):
            value = str(tok.value)
            if tok.type == 'STEPPED':
                name, op = value[:-2], value[-2:]
                tokens.append(Token(classify('NAME', name), name, tok.line, tok.column))
                tokens.append(Token('OP', op, tok.line, tok.column + len(name)))
                continue
            tokens.append(Token(classify(tok.type, value), value, tok.line, tok.column))
    except UnexpectedCharacters as e:
        raise BisayaError(ErrorVal(
            'SyntaxError', f'unexpected character {e.char!r}', e.line, e.column))
    return tokens
