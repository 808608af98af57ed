"""Reescritura de los numerales de una expresión de una base a otra."""

from calc_errors import BaseJumpError, InvalidExpressionError
from numeral_codec import (
    base_in_range,
    format_magnitude,
    is_digit_for_base,
    parse_magnitude,
)


OPERATOR_CHARS = frozenset("+-*/%^()")
WHITESPACE_CHARS = frozenset(" \t\n\v\f\r")


def transliterate(expression: str, from_base: int, to_base: int) -> str:
    """Convierte cada numeral de `expression` de `from_base` a `to_base`.

    Operadores, paréntesis y espacios se copian tal cual. Cualquier otro
    carácter invalida la expresión completa.

    Raises:
        InvalidExpressionError: carácter no convertible o base inválida.
    """
    if not (base_in_range(from_base) and base_in_range(to_base)):
        raise InvalidExpressionError(
            f"bases inválidas: {from_base} -> {to_base}"
        )

    pieces = []
    i = 0
    length = len(expression)

    while i < length:
        ch = expression[i]

        if is_digit_for_base(ch, from_base):
            start = i
            while i < length and is_digit_for_base(expression[i], from_base):
                i += 1
            try:
                value = parse_magnitude(expression[start:i], from_base)
                pieces.append(format_magnitude(value, to_base))
            except BaseJumpError as exc:
                raise InvalidExpressionError(str(exc)) from exc
            continue

        if ch in OPERATOR_CHARS or ch in WHITESPACE_CHARS:
            pieces.append(ch)
            i += 1
            continue

        raise InvalidExpressionError(
            f"'{ch}' no es convertible desde base {from_base}"
        )

    return "".join(pieces)


def normalize_numeral(numeral: str, base: int) -> str:
    """Pasa un numeral por base 10 y de vuelta: mayúsculas y sin ceros a la izquierda."""
    return transliterate(transliterate(numeral, base, 10), 10, base)
