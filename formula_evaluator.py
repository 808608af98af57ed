"""Parseo y evaluación de expresiones en base 10 para la calculadora de bases."""

import math
import operator
import re

from calc_errors import (
    DivisionByZeroError,
    ExpressionSyntaxError,
    OutOfRangeError,
)


# Mayor entero representable exactamente en un double (2**53)
MAX_EXACT_INTEGER = 9007199254740992


class PythonMathProvider:
    """Provee las operaciones numéricas sobre floats de doble precisión."""

    def build_namespace(self) -> dict:
        return {
            "number": float,
            "+": operator.add,
            "-": operator.sub,
            "*": operator.mul,
            "/": operator.truediv,
            "%": math.fmod,
            "^": math.pow,
            "neg": operator.neg,
            "is_real": lambda value: not isinstance(value, complex),
            "isnan": math.isnan,
        }


class FormulaEvaluator:
    """Evalúa por descenso recursivo expresiones con + - * / % ^ y paréntesis.

    Gramática (precedencia ascendente):

        Expression := Term (('+'|'-') Term)*
        Term       := Factor (('*'|'/'|'%') Factor)*
        Factor     := ('+'|'-')? Power
        Power      := (Number | '(' Expression ')') ('^' Power)?
    """

    _NUMBER_RE = re.compile(r"[+\-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+\-]?\d+)?", re.ASCII)
    _WHITESPACE = " \t\n\v\f\r"

    def __init__(self, provider=None):
        self._provider = provider if provider is not None else PythonMathProvider()

    def evaluate(self, expression: str) -> int:
        """Evalúa la expresión y devuelve el resultado truncado a entero.

        Raises:
            ExpressionSyntaxError: expresión mal formada o con restos.
            DivisionByZeroError: división o módulo por cero.
            OutOfRangeError: resultado negativo, no finito o >= 2**53.
        """
        self._text = expression
        self._pos = 0
        self._ns = self._provider.build_namespace()

        try:
            value = self._parse_expression()
        except RecursionError as exc:
            raise ExpressionSyntaxError("expresión demasiado anidada") from exc

        self._skip_whitespace()
        if self._pos != len(self._text):
            raise ExpressionSyntaxError(
                f"carácter inesperado '{self._text[self._pos]}'"
            )
        return self._to_magnitude(value)

    # ── Reglas de la gramática ───────────────────────────────────

    def _parse_expression(self):
        result = self._parse_term()
        while True:
            op = self._peek_operator("+-")
            if op is None:
                return result
            right = self._parse_term()
            result = self._apply(op, result, right)

    def _parse_term(self):
        result = self._parse_factor()
        while True:
            op = self._peek_operator("*/%")
            if op is None:
                return result
            right = self._parse_factor()
            if op in "/%" and right == 0:
                raise DivisionByZeroError()
            result = self._apply(op, result, right)

    def _parse_factor(self):
        self._skip_whitespace()
        negative = False
        if self._current() == "-":
            negative = True
            self._pos += 1
        elif self._current() == "+":
            self._pos += 1

        result = self._parse_power()
        if negative:
            result = self._ns["neg"](result)
        return result

    def _parse_power(self):
        self._skip_whitespace()
        if self._current() == "(":
            self._pos += 1
            result = self._parse_expression()
            self._skip_whitespace()
            if self._current() != ")":
                raise ExpressionSyntaxError("falta ')'")
            self._pos += 1
        else:
            result = self._parse_number()

        self._skip_whitespace()
        if self._current() == "^":
            self._pos += 1
            exponent = self._parse_power()
            result = self._apply("^", result, exponent)
        return result

    def _parse_number(self):
        self._skip_whitespace()
        match = self._NUMBER_RE.match(self._text, self._pos)
        if not match:
            if self._pos >= len(self._text):
                raise ExpressionSyntaxError("expresión incompleta")
            raise ExpressionSyntaxError(
                f"se esperaba un número en '{self._text[self._pos:]}'"
            )
        self._pos = match.end()
        return self._ns["number"](match.group())

    # ── Utilidades ───────────────────────────────────────────────

    def _current(self) -> str:
        if self._pos < len(self._text):
            return self._text[self._pos]
        return ""

    def _skip_whitespace(self):
        while self._pos < len(self._text) and self._text[self._pos] in self._WHITESPACE:
            self._pos += 1

    def _peek_operator(self, accepted: str) -> str | None:
        self._skip_whitespace()
        ch = self._current()
        if ch and ch in accepted:
            self._pos += 1
            return ch
        return None

    def _apply(self, op: str, left, right):
        try:
            return self._ns[op](left, right)
        except (OverflowError, ValueError, ZeroDivisionError, TypeError) as exc:
            # pow/fmod fuera de dominio o desbordados: el resultado no es representable
            raise OutOfRangeError() from exc

    def _to_magnitude(self, value) -> int:
        ns = self._ns
        if not ns["is_real"](value) or ns["isnan"](value):
            raise OutOfRangeError()
        if value < 0 or value >= MAX_EXACT_INTEGER:
            raise OutOfRangeError()
        return int(value)
