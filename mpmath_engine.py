"""Motor de cálculo sobre mpmath limitado al rango de un double."""

from __future__ import annotations

import operator
import sys

from calculator_engine import CalculatorEngine

try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc


# Mayor magnitud finita de un double
DOUBLE_MAX = mp.mpf(sys.float_info.max)
# log2 de DOUBLE_MAX y del menor subnormal, con margen
_DOUBLE_MAX_EXPONENT = 1024
_DOUBLE_MIN_EXPONENT = -1100


class MPMathProvider:
    """Proveedor matemático basado en mpmath.

    Con 53 bits de precisión redondea igual que un double. Cualquier
    resultado intermedio que se salga del rango de un double se trata
    como desbordamiento (OverflowError), igual que math.pow en el
    proveedor de floats. Las potencias se acotan antes de calcularlas,
    así que 3^2^2^2^2^2 falla al instante en lugar de calcular 2^65536.
    """

    @staticmethod
    def _is_real(value) -> bool:
        return not isinstance(value, mp.mpc)

    @staticmethod
    def _bounded(value):
        if abs(value) > DOUBLE_MAX:
            raise OverflowError("resultado fuera del rango de un double")
        return value

    def _binary(self, operation):
        def apply(left, right):
            return self._bounded(operation(left, right))

        return apply

    def _power(self, base, exponent):
        if base != 0 and exponent != 0 and self._is_real(base):
            scale = mp.log(abs(base), 2) * exponent
            if scale > _DOUBLE_MAX_EXPONENT:
                raise OverflowError("potencia fuera del rango de un double")
            if scale < _DOUBLE_MIN_EXPONENT and (base > 0 or mp.isint(exponent)):
                # Un double se queda en cero
                return mp.mpf(0)
        return self._bounded(mp.power(base, exponent))

    def _number(self, text):
        value = mp.mpf(text)
        # Como float("1e400"): un literal enorme vale infinito
        if abs(value) > DOUBLE_MAX:
            return mp.inf if value > 0 else -mp.inf
        return value

    def build_namespace(self) -> dict:
        return {
            "number": self._number,
            "+": self._binary(operator.add),
            "-": self._binary(operator.sub),
            "*": self._binary(operator.mul),
            "/": self._binary(operator.truediv),
            "%": self._binary(mp.fmod),
            "^": self._power,
            "neg": operator.neg,
            "is_real": self._is_real,
            "isnan": mp.isnan,
        }


class MPMathCalculatorEngine(CalculatorEngine):
    """Evalúa con mpmath a la precisión binaria indicada (53 bits por defecto)."""

    DOUBLE_PRECISION_BITS = 53

    def __init__(self, precision_bits: int = DOUBLE_PRECISION_BITS):
        super().__init__(provider=MPMathProvider())
        self._precision_bits = max(self.DOUBLE_PRECISION_BITS, precision_bits)

    @property
    def precision_bits(self) -> int:
        return self._precision_bits

    def _evaluate_decimal(self, expression: str) -> int:
        with mp.workprec(self._precision_bits):
            return super()._evaluate_decimal(expression)
