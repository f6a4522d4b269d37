"""Safe arithmetic expression evaluator for the calculator.

Grammar (whitespace ignored)::

    expression := term (("+" | "-") term)*
    term       := factor (("*" | "×" | "/" | "÷" | "%") factor)*
    factor     := ("+" | "-") factor | number | "(" expression ")"
    number     := digits ["." digits] | "." digits

``%`` is the remainder operator. Evaluation uses Decimal; nothing is ever
handed to ``eval``.
"""

import re
from decimal import Decimal, DivisionByZero, InvalidOperation
from typing import Optional

from moneymind.domain.errors import ValidationError

_TOKEN_RE = re.compile(r"\s*(?:(\d+(?:\.\d*)?|\.\d+)|(.))")

_OPERATOR_ALIASES = {"×": "*", "÷": "/", "−": "-"}

MAX_EXPRESSION_LENGTH = 200


def _tokenize(expression: str) -> list[str]:
    tokens = []
    for number, symbol in _TOKEN_RE.findall(expression):
        if number:
            tokens.append(number)
            continue
        if symbol.isspace() or not symbol:
            continue
        symbol = _OPERATOR_ALIASES.get(symbol, symbol)
        if symbol not in "+-*/%()":
            raise ValidationError(f"Unexpected character '{symbol}' in expression", field="expression")
        tokens.append(symbol)
    return tokens


class _Parser:
    """Recursive-descent evaluator over a token list."""

    def __init__(self, tokens: list[str]):
        self.tokens = tokens
        self.pos = 0

    def _peek(self) -> Optional[str]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _next(self) -> Optional[str]:
        token = self._peek()
        self.pos += 1
        return token

    def parse(self) -> Decimal:
        value = self._expression()
        if self._peek() is not None:
            raise ValidationError(f"Unexpected '{self._peek()}' in expression", field="expression")
        return value

    def _expression(self) -> Decimal:
        value = self._term()
        while self._peek() in ("+", "-"):
            operator = self._next()
            right = self._term()
            value = value + right if operator == "+" else value - right
        return value

    def _term(self) -> Decimal:
        value = self._factor()
        while self._peek() in ("*", "/", "%"):
            operator = self._next()
            right = self._factor()
            if operator == "*":
                value = value * right
            elif right == 0:
                raise ValidationError("Division by zero", field="expression")
            elif operator == "/":
                value = value / right
            else:
                value = value % right
        return value

    def _factor(self) -> Decimal:
        token = self._next()
        if token is None:
            raise ValidationError("Incomplete expression", field="expression")
        if token == "-":
            return -self._factor()
        if token == "+":
            return self._factor()
        if token == "(":
            value = self._expression()
            if self._next() != ")":
                raise ValidationError("Missing closing parenthesis", field="expression")
            return value
        if token in "*/%)":
            raise ValidationError(f"Unexpected '{token}' in expression", field="expression")
        return Decimal(token)


def evaluate_expression(expression: str) -> Decimal:
    """Evaluate a calculator expression such as ``"(1200 + 300) × 12 ÷ 100"``.

    Raises:
        ValidationError: On empty input, bad syntax, or division by zero
    """
    if expression is None or not expression.strip():
        raise ValidationError("Empty expression", field="expression")
    if len(expression) > MAX_EXPRESSION_LENGTH:
        raise ValidationError("Expression is too long", field="expression")

    try:
        return _Parser(_tokenize(expression)).parse()
    except (DivisionByZero, InvalidOperation) as e:
        raise ValidationError(f"Cannot evaluate expression: {e}", field="expression") from e


def format_result(value: Decimal) -> str:
    """Render a calculator result without trailing zeros ("2.50" -> "2.5").

    Integral results of any size are written out in full ("1E+30" becomes
    "1" followed by thirty zeros).
    """
    return format(value.normalize(), "f")
