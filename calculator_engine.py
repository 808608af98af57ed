"""
Motor de cálculo de la calculadora de bases.

Este módulo provee la clase CalculatorEngine, que lleva una expresión
escrita en la base de entrada hasta su magnitud entera. Está diseñado
como módulo independiente: la sesión interactiva y el modo archivo
comparten exactamente la misma tubería.

Contrato de interfaz:
    - evaluate(expression: str, base: int) -> int
    - result_lines(expression, base, value, output_bases) -> list[str]
"""

import logging

from base_transliterator import transliterate
from calc_errors import BaseJumpError
from formula_evaluator import FormulaEvaluator, PythonMathProvider
from numeral_codec import format_magnitude


logger = logging.getLogger(__name__)


class CalculatorEngine:
    """Traduce a base 10, evalúa y formatea resultados en varias bases."""

    def __init__(self, provider=None):
        self._provider = provider if provider is not None else PythonMathProvider()
        self._evaluator = FormulaEvaluator(self._provider)

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str, base: int) -> int:
        """Evalúa `expression`, cuyos numerales están escritos en `base`.

        Raises:
            InvalidExpressionError: carácter no convertible desde `base`.
            ExpressionSyntaxError: expresión mal formada.
            DivisionByZeroError: división o módulo por cero.
            OutOfRangeError: resultado negativo o >= 2**53.
        """
        try:
            decimal_expression = transliterate(expression, base, 10)
            return self._evaluate_decimal(decimal_expression)
        except BaseJumpError as exc:
            logger.debug("Fallo al evaluar %r en base %d: %s", expression, base, exc)
            raise

    def _evaluate_decimal(self, expression: str) -> int:
        return self._evaluator.evaluate(expression)

    # ── Formato del resultado ────────────────────────────────────

    @staticmethod
    def format_result(value: int, base: int) -> str:
        return format_magnitude(value, base)

    def result_lines(self, expression: str, base: int, value: int,
                     output_bases) -> list[str]:
        lines = [
            f"Expresión (base {base}): {expression}",
            f"Resultado (base {base}): {self.format_result(value, base)}",
        ]
        lines.extend(self.base_lines(value, output_bases))
        return lines

    def base_lines(self, value: int, output_bases) -> list[str]:
        return [
            f"Base {out}: {self.format_result(value, out)}"
            for out in output_bases
        ]

    @staticmethod
    def error_message(expression: str, exc: Exception) -> str:
        return f'No se puede evaluar la expresión "{expression}" ({exc})'
