r"""
Parser for the algebraic expression syntax.

Grammar (whitespace is insignificant)::

    expr    := term ('+' term)*
    term    := factor ('*' factor)*
    factor  := atom ('^' atom)*
    atom    := number | identifier
             | 'sin(' expr ')' | 'cos(' expr ')'
             | 'log(' expr ')' | 'log(' number ',' expr ')'
             | '(' expr ')'
    number  := ['-'] digits ['.' digits] [('e' | 'E') ['+' | '-'] digits]

``^`` is left associative and needs a bare numeric literal on at least one
side: ``x ^ 2`` is a :class:`Pow`, ``2 ^ x`` an :class:`Exp`. With literals on
both sides the exponent wins. There is no subtraction or division; write
``x + -1 * y`` and ``x ^ -1``.
"""

import math
import re
from typing import Collection, NamedTuple, NoReturn, Optional

from geodesix.errors import ParseError
from geodesix.expression.nodes import (
    Add,
    Const,
    Cos,
    Exp,
    Expression,
    LogBase,
    Mul,
    Pow,
    Sin,
    Var,
)

FUNCTIONS = ("sin", "cos", "log")

IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
    rf"|(?P<ident>{IDENTIFIER.pattern})"
    r"|(?P<op>[-+*^(),])"
    r")"
)


class Token(NamedTuple):
    kind: str  # "number", "ident", "op" or "end"
    text: str
    position: int


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into tokens, ending with an ``end`` token."""
    tokens = []
    position = 0
    stripped_end = len(text.rstrip())
    while position < stripped_end:
        match = _TOKEN_RE.match(text, position)
        if match is None or match.lastgroup is None:
            start = position + len(text[position:]) - len(text[position:].lstrip())
            raise ParseError(f"Unexpected character {text[start]!r}", text, start)
        kind = match.lastgroup
        tokens.append(Token(kind, match.group(kind), match.start(kind)))
        position = match.end()
    tokens.append(Token("end", "", len(text)))
    return tokens


class _Parser:
    def __init__(self, text: str, allowed_variables: Optional[Collection[str]]):
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0
        self.allowed_variables = (
            None if allowed_variables is None else frozenset(allowed_variables)
        )

    # -- token helpers -------------------------------------------------------

    def peek(self, offset: int = 0) -> Token:
        index = min(self.index + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def at_op(self, symbol: str, offset: int = 0) -> bool:
        token = self.peek(offset)
        return token.kind == "op" and token.text == symbol

    def expect_op(self, symbol: str) -> Token:
        if not self.at_op(symbol):
            self.fail(f"Expected {symbol!r}")
        return self.advance()

    def fail(self, message: str, token: Optional[Token] = None) -> NoReturn:
        token = token or self.peek()
        found = "end of input" if token.kind == "end" else repr(token.text)
        raise ParseError(f"{message}, found {found}", self.text, token.position)

    # -- grammar -------------------------------------------------------------

    def parse(self) -> Expression:
        if self.peek().kind == "end":
            raise ParseError("Empty expression", self.text, 0)
        expr = self.expr()
        if self.peek().kind != "end":
            self.fail("Expected an operator or end of input")
        return expr

    def expr(self) -> Expression:
        node = self.term()
        while self.at_op("+"):
            self.advance()
            node = Add(node, self.term())
        return node

    def term(self) -> Expression:
        node = self.factor()
        while self.at_op("*"):
            self.advance()
            node = Mul(node, self.factor())
        return node

    def factor(self) -> Expression:
        node, literal = self.atom()
        while self.at_op("^"):
            caret = self.advance()
            right, right_literal = self.atom()
            if right_literal is not None:
                node = Pow(node, right_literal)
            elif literal is not None:
                node = Exp(literal, right)
            else:
                raise ParseError(
                    "'^' needs a numeric literal as base or exponent",
                    self.text,
                    caret.position,
                )
            literal = None
        return node

    def atom(self) -> tuple[Expression, Optional[float]]:
        """Parse one atom; the second item is its value if it is a bare literal."""
        token = self.peek()

        if token.kind == "number" or self.at_op("-"):
            value = self.number()
            return Const(value), value

        if token.kind == "ident":
            self.advance()
            if token.text in FUNCTIONS:
                return self.call(token), None
            if (
                self.allowed_variables is not None
                and token.text not in self.allowed_variables
            ):
                allowed = ", ".join(sorted(self.allowed_variables))
                raise ParseError(
                    f"Unknown variable {token.text!r} (allowed: {allowed})",
                    self.text,
                    token.position,
                )
            return Var(token.text), None

        if self.at_op("("):
            self.advance()
            node = self.expr()
            self.expect_op(")")
            return node, None

        self.fail("Expected a number, variable, function or '('")

    def number(self) -> float:
        sign = 1.0
        if self.at_op("-"):
            minus = self.advance()
            if self.peek().kind != "number":
                self.fail("'-' is only allowed in front of a number", minus)
            sign = -1.0
        return sign * float(self.advance().text)

    def call(self, name: Token) -> Expression:
        if not self.at_op("("):
            self.fail(f"Expected '(' after {name.text!r}")
        self.advance()

        if name.text == "log":
            base = math.e
            # log(number, expr): literal base followed by a comma
            literal_width = 2 if self.at_op("-") else 1
            if self.peek(literal_width - 1).kind == "number" and self.at_op(
                ",", literal_width
            ):
                base_token = self.peek()
                base = self.number()
                self.expect_op(",")
                if base <= 0.0 or base == 1.0:
                    raise ParseError(
                        f"Logarithm base must be positive and not 1, got {base}",
                        self.text,
                        base_token.position,
                    )
            argument = self.expr()
            self.expect_op(")")
            return LogBase(base, argument)

        argument = self.expr()
        self.expect_op(")")
        return Sin(argument) if name.text == "sin" else Cos(argument)


def parse(text: str, allowed_variables: Optional[Collection[str]] = None) -> Expression:
    """
    Parse ``text`` into an :class:`Expression`.

    Parameters
    ----------
    text : str
        Expression in the algebraic surface syntax (see module docstring).
    allowed_variables : collection of str, optional
        If given, identifiers outside this set are rejected. Metric editors
        pass the two coordinate names here.

    Returns
    -------
    Expression
        The parsed tree.

    Raises
    ------
    ParseError
        On malformed input or a disallowed variable. The error carries the
        character position of the offending token.

    Examples
    --------
    >>> parse("sin(x) ^ 2", allowed_variables=("x", "y"))
    Pow(base=Sin(argument=Var(name='x')), exponent=2.0)
    """
    return _Parser(text, allowed_variables).parse()


def try_parse(
    text: str, allowed_variables: Optional[Collection[str]] = None
) -> Optional[Expression]:
    """Like :func:`parse` but return None instead of raising on invalid input."""
    try:
        return parse(text, allowed_variables)
    except ParseError:
        return None
