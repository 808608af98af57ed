"""Errores de la calculadora de bases.

Todos derivan de ValueError para que la interfaz pueda atraparlos en un
único punto; los de división y rango también heredan de la familia
aritmética nativa equivalente.
"""


class BaseJumpError(ValueError):
    """Error recuperable al convertir o evaluar una expresión."""

    default_message = "error de cálculo"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class InvalidBaseError(BaseJumpError):
    default_message = "base fuera de rango (2-36)"


class InvalidDigitError(BaseJumpError):
    default_message = "dígito inválido para la base"


class InvalidExpressionError(BaseJumpError):
    default_message = "la expresión contiene caracteres no convertibles"


class ExpressionSyntaxError(BaseJumpError):
    default_message = "error de sintaxis"


class DivisionByZeroError(BaseJumpError, ZeroDivisionError):
    default_message = "división por cero"


class OutOfRangeError(BaseJumpError, OverflowError):
    default_message = "resultado fuera de rango"
