"""
Conversión de numerales entre bases 2-36 y magnitudes enteras.

Las magnitudes se comportan como enteros sin signo de 64 bits: al
interpretar un numeral demasiado largo el valor da la vuelta (módulo
2**64) en lugar de producir un error, igual que la versión original
de la herramienta.
"""

from calc_errors import InvalidBaseError, InvalidDigitError, OutOfRangeError


MIN_BASE = 2
MAX_BASE = 36
MAGNITUDE_BITS = 64
MAGNITUDE_MASK = (1 << MAGNITUDE_BITS) - 1

_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def base_in_range(base: int) -> bool:
    return MIN_BASE <= base <= MAX_BASE


def _check_base(base: int):
    if not base_in_range(base):
        raise InvalidBaseError(f"base {base} fuera de rango (2-36)")


def digit_value(ch: str) -> int | None:
    """Valor de un dígito (0-35) o None si el carácter no es un dígito."""
    if "0" <= ch <= "9":
        return ord(ch) - ord("0")
    if "A" <= ch <= "Z":
        return ord(ch) - ord("A") + 10
    if "a" <= ch <= "z":
        return ord(ch) - ord("a") + 10
    return None


def digit_char(value: int) -> str:
    if not 0 <= value < MAX_BASE:
        raise ValueError(f"valor de dígito inválido: {value}")
    return _DIGITS[value]


def is_digit_for_base(ch: str, base: int) -> bool:
    value = digit_value(ch)
    return value is not None and value < base


def parse_magnitude(text: str, base: int) -> int:
    """Interpreta `text` en `base` y devuelve su magnitud de 64 bits.

    Raises:
        InvalidBaseError: base fuera de 2-36.
        InvalidDigitError: texto vacío o con dígitos inválidos para la base.
    """
    _check_base(base)
    if not text:
        raise InvalidDigitError("numeral vacío")

    value = 0
    for ch in text:
        digit = digit_value(ch)
        if digit is None or digit >= base:
            raise InvalidDigitError(f"'{ch}' no es un dígito de base {base}")
        value = (value * base + digit) & MAGNITUDE_MASK
    return value


def format_magnitude(value: int, base: int) -> str:
    """Representación mínima de `value` en `base`, dígito más significativo primero."""
    _check_base(base)
    if value < 0 or value > MAGNITUDE_MASK:
        raise OutOfRangeError(f"magnitud fuera de 64 bits: {value}")
    if value == 0:
        return "0"

    chars = []
    while value > 0:
        value, digit = divmod(value, base)
        chars.append(_DIGITS[digit])
    return "".join(reversed(chars))
