"""Parser for the Bisaya++ language.

The parser is a hand-written recursive descent over the flat token list
produced by `bisaya.lexer.tokenize`. Statements are recognized from their
leading keyword (two-word keywords such as `KUNG DILI` and `ALANG SA` are
matched with one token of lookahead), so a statement, a loop header or a
PUNDOK block may be laid out over any number of source lines.

Expressions are parsed with one method per precedence level, from `O`
(lowest) down to unary `DILI`/`-` and primaries. Every binary level is left
associative.

The `parse_program` function is the public entry point and returns a
`Program` AST node representing the entire source file.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .ast import (
    Program, Block, Declaration, Assignment, Step, Print, Input,
    Branch, Conditional, Loop, BinaryOp, UnaryOp, Literal, Ident,
    Newline, Escape, Node,
)
from .errors import BisayaError, error
from .lexer import Token, tokenize
from .types import TypeSpec, TYPE_KEYWORDS, TRUE_WORD, FALSE_WORD, strip_quotes


# Token kinds whose value is matched against keyword/operator spellings
_FIXED_KINDS = ('KEYWORD', 'OP', 'PUNCT')

_BOOLEAN_STRINGS = {f'"{TRUE_WORD}"': True, f'"{FALSE_WORD}"': False}


def describe(token: Token) -> str:
    if token.type == 'IDENT':
        return f"name {token.value!r}"
    return repr(token.value)


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self, offset: int = 0) -> Optional[Token]:
        if self.pos + offset < len(self.tokens):
            return self.tokens[self.pos + offset]
        return None

    def fail(self, message: str, token: Optional[Token] = None,
             name: str = 'SyntaxError') -> BisayaError:
        if token is None:
            token = self.peek()
        if token is None and self.tokens:
            # past the end: report at the last token
            token = self.tokens[-1]
        return error(name, message, token)

    def match(self, expected: str, offset: int = 0) -> bool:
        token = self.peek(offset)
        if token is None:
            return False
        if token.type == expected:
            return True
        return token.type in _FIXED_KINDS and token.value == expected

    def consume(self, expected: str, what: Optional[str] = None) -> Token:
        token = self.peek()
        label = what or repr(expected)
        if token is None:
            raise self.fail(f"unexpected end of input, expected {label}")
        if not self.match(expected):
            raise self.fail(f"expected {label}, got {describe(token)}", token)
        self.pos += 1
        return token

    def parse_program(self) -> Program:
        if not self.match('SUGOD'):
            raise self.fail("program must begin with SUGOD")
        self.consume('SUGOD')
        statements: List[Node] = []
        while not self.match('KATAPUSAN'):
            if self.peek() is None:
                raise self.fail("program must end with KATAPUSAN")
            statements.append(self.parse_statement())
        self.consume('KATAPUSAN')
        trailing = self.peek()
        if trailing is not None:
            raise self.fail(f"unexpected {describe(trailing)} after KATAPUSAN", trailing)
        return Program(statements)

    def parse_statement(self) -> Node:
        token = self.peek()
        if token is None:
            raise self.fail("unexpected end of input")
        if self.match('MUGNA'):
            return self.parse_declaration()
        if self.match('IPAKITA'):
            return self.parse_print()
        if self.match('DAWAT'):
            return self.parse_input()
        if self.match('KUNG'):
            # continuation branches are only valid right after a KUNG chain
            if self.match('DILI', 1) or self.match('WALA', 1):
                raise self.fail(f"KUNG {self.peek(1).value} without a preceding KUNG", token)
            return self.parse_conditional()
        if self.match('ALANG'):
            return self.parse_loop()
        if token.type == 'IDENT':
            return self.parse_simple_statement()
        raise self.fail(f"unexpected {describe(token)}", token)

    def parse_block(self) -> Block:
        opener = self.consume('PUNDOK')
        self.consume('{')
        statements: List[Node] = []
        while not self.match('}'):
            if self.peek() is None or self.match('KATAPUSAN'):
                raise self.fail(
                    f"unterminated PUNDOK block opened at {opener.line}:{opener.column}")
            statements.append(self.parse_statement())
        self.consume('}')
        return Block(statements)

    def parse_declaration(self) -> Declaration:
        self.consume('MUGNA')
        type_token = self.peek()
        if type_token is None or type_token.type != 'KEYWORD' or type_token.value not in TYPE_KEYWORDS:
            raise self.fail("expected a type (NUMERO, TIPIK, LETRA or TINUOD) after MUGNA")
        self.pos += 1
        type_spec = TypeSpec(type_token.value)
        items: List[Tuple[str, Optional[Literal]]] = []
        while True:
            name_token = self.consume('IDENT', 'a variable name')
            initializer: Optional[Literal] = None
            if self.match('='):
                self.consume('=')
                initializer = self.parse_declaration_literal(type_spec, name_token.value)
            items.append((name_token.value, initializer))
            if not self.match(','):
                break
            self.consume(',')
        return Declaration(type_spec, items)

    def parse_declaration_literal(self, type_spec: TypeSpec, name: str) -> Literal:
        # Initializers are literals only, and must lexically match the type.
        kind = type_spec.kind
        sign = ''
        if kind in ('NUMERO', 'TIPIK') and (self.match('-') or self.match('+')):
            sign = self.consume('OP').value
        token = self.peek()
        if token is None:
            raise self.fail(f"missing value for {name}")
        literal: Optional[Literal] = None
        if kind == 'NUMERO' and token.type == 'INT':
            literal = Literal(int(sign + token.value), kind)
        elif kind == 'TIPIK' and token.type in ('INT', 'FLOAT'):
            literal = Literal(float(sign + token.value), kind)
        elif kind == 'LETRA' and token.type == 'STRING' and not sign:
            literal = Literal(strip_quotes(token.value), kind)
        elif kind == 'TINUOD' and not sign:
            # same Boolean spellings as in expressions; bare DILI is NOT
            if token.type == 'STRING' and token.value in _BOOLEAN_STRINGS:
                literal = Literal(_BOOLEAN_STRINGS[token.value], kind)
            elif token.type == 'KEYWORD' and token.value == TRUE_WORD:
                literal = Literal(True, kind)
        if literal is None:
            raise self.fail(f"invalid {kind} value {sign}{token.value} for {name}",
                            token, name='DeclarationError')
        self.pos += 1
        return literal

    def parse_simple_statement(self, allow_comma_targets: bool = True) -> Node:
        """Parse an assignment chain or an `x++` / `x--` step.

        Targets are separated by `,` or `=`; a name counts as another target
        only when it is itself followed by `=` (or `,`). Inside an ALANG SA
        header commas separate the clauses, so comma targets are turned off.
        """
        name_token = self.consume('IDENT', 'a variable name')
        if self.match('++') or self.match('--'):
            op_token = self.consume('OP')
            return Step(name_token.value, op_token.value)
        targets = [name_token.value]
        while True:
            if allow_comma_targets and self.match(','):
                self.consume(',')
                targets.append(self.consume('IDENT', 'a variable name').value)
                continue
            self.consume('=', "'=' in assignment")
            ahead = self.peek(1)
            if self.match('IDENT') and ahead is not None and (
                    (ahead.type == 'OP' and ahead.value == '=')
                    or (allow_comma_targets and ahead.type == 'PUNCT' and ahead.value == ',')):
                targets.append(self.consume('IDENT').value)
                continue
            break
        value = self.parse_expression()
        return Assignment(targets, value)

    def parse_print(self) -> Print:
        self.consume('IPAKITA')
        self.consume(':', "':' after IPAKITA")
        segments = [self.parse_segment()]
        while self.match('&'):
            self.consume('&')
            segments.append(self.parse_segment())
        return Print(segments)

    def parse_segment(self) -> Node:
        if self.match('$'):
            self.consume('$')
            return Newline()
        if self.match('ESCAPE'):
            token = self.consume('ESCAPE')
            return Escape(token.value[1])
        return self.parse_expression()

    def parse_input(self) -> Input:
        self.consume('DAWAT')
        self.consume(':', "':' after DAWAT")
        names = [self.consume('IDENT', 'a variable name').value]
        while self.match(','):
            self.consume(',')
            names.append(self.consume('IDENT', 'a variable name').value)
        return Input(names)

    def parse_condition(self) -> Node:
        self.consume('(', "'(' before condition")
        condition = self.parse_expression()
        self.consume(')', "')' after condition")
        return condition

    def parse_conditional(self) -> Conditional:
        self.consume('KUNG')
        branches = [Branch(self.parse_condition(), self.parse_block())]
        while self.match('KUNG'):
            if self.match('DILI', 1):
                self.consume('KUNG')
                self.consume('DILI')
                branches.append(Branch(self.parse_condition(), self.parse_block()))
            elif self.match('WALA', 1):
                self.consume('KUNG')
                self.consume('WALA')
                branches.append(Branch(None, self.parse_block()))
                break
            else:
                # a fresh KUNG starts a new statement
                break
        return Conditional(branches)

    def parse_loop(self) -> Loop:
        self.consume('ALANG')
        self.consume('SA', "SA after ALANG")
        self.consume('(', "'(' after ALANG SA")
        init = self.parse_simple_statement(allow_comma_targets=False)
        self.consume(',', "',' after loop initializer")
        condition = self.parse_expression()
        self.consume(',', "',' after loop condition")
        update = self.parse_simple_statement(allow_comma_targets=False)
        self.consume(')', "')' after loop update")
        body = self.parse_block()
        return Loop(init, condition, update, body)

    # Expression parsing
    def parse_expression(self) -> Node:
        return self.parse_logic_or()

    def parse_logic_or(self) -> Node:
        node = self.parse_logic_and()
        while self.match('O'):
            op_token = self.consume('O')
            right = self.parse_logic_and()
            node = BinaryOp(op_token.value, node, right)
        return node

    def parse_logic_and(self) -> Node:
        node = self.parse_equality()
        while self.match('UG'):
            op_token = self.consume('UG')
            right = self.parse_equality()
            node = BinaryOp(op_token.value, node, right)
        return node

    def parse_equality(self) -> Node:
        node = self.parse_comparison()
        while self.match('==') or self.match('<>'):
            op_token = self.consume('OP')
            right = self.parse_comparison()
            node = BinaryOp(op_token.value, node, right)
        return node

    def parse_comparison(self) -> Node:
        node = self.parse_term()
        while any(self.match(op) for op in ('<', '>', '<=', '>=')):
            op_token = self.consume('OP')
            right = self.parse_term()
            node = BinaryOp(op_token.value, node, right)
        return node

    def parse_term(self) -> Node:
        node = self.parse_factor()
        while self.match('+') or self.match('-'):
            op_token = self.consume('OP')
            right = self.parse_factor()
            node = BinaryOp(op_token.value, node, right)
        return node

    def parse_factor(self) -> Node:
        node = self.parse_unary()
        while any(self.match(op) for op in ('*', '/', '%')):
            op_token = self.consume('OP')
            right = self.parse_unary()
            node = BinaryOp(op_token.value, node, right)
        return node

    def parse_unary(self) -> Node:
        if self.match('DILI'):
            self.consume('DILI')
            return UnaryOp('DILI', self.parse_unary())
        if self.match('-') or self.match('+'):
            op_token = self.consume('OP')
            return UnaryOp(op_token.value, self.parse_unary())
        return self.parse_primary()

    def parse_primary(self) -> Node:
        token = self.peek()
        if token is None:
            raise self.fail("unexpected end of input in expression")
        if token.type == 'INT':
            self.pos += 1
            return Literal(int(token.value), 'NUMERO')
        if token.type == 'FLOAT':
            self.pos += 1
            return Literal(float(token.value), 'TIPIK')
        if token.type == 'STRING':
            self.pos += 1
            # "OO" and "DILI" in double quotes are the Boolean literals
            if token.value in _BOOLEAN_STRINGS:
                return Literal(_BOOLEAN_STRINGS[token.value], 'TINUOD')
            return Literal(strip_quotes(token.value), 'LETRA')
        if self.match('OO'):
            self.pos += 1
            return Literal(True, 'TINUOD')
        if token.type == 'IDENT':
            self.pos += 1
            return Ident(token.value)
        if self.match('('):
            self.consume('(')
            expr = self.parse_expression()
            self.consume(')', "')' to close '('")
            return expr
        raise self.fail(f"unexpected {describe(token)} in expression", token)


def parse(tokens: List[Token]) -> Program:
    """Parse a token list into a Program AST."""
    return Parser(tokens).parse_program()


def parse_program(source: str) -> Program:
    """Parse Bisaya++ source code into a Program AST.

    Lexical and syntax errors are raised as BisayaError with the offending
    line and column.
    """
    return parse(tokenize(source))
