"""Configuración de sesión y validación de bases (línea de comandos y comandos :i / :o)."""

from dataclasses import dataclass, field

from numeral_codec import MAX_BASE, base_in_range


DEFAULT_INPUT_BASE = 10
DEFAULT_OUTPUT_BASES = (2, 10, 16)
MAX_OUTPUT_BASES = MAX_BASE - 1


def _digits_only(text: str) -> bool:
    return bool(text) and all("0" <= ch <= "9" for ch in text)


def parse_base(value: str) -> int:
    """Convierte un texto de solo dígitos en una base 2-36."""
    if not _digits_only(value):
        raise ValueError(f"'{value}' no es un número de base válido.")

    base = int(value)
    if not base_in_range(base):
        raise ValueError(f"La base {base} está fuera de rango (2-36).")
    return base


def parse_output_bases(value: str) -> list[int]:
    """Interpreta una lista de bases separadas por comas, p. ej. '2,8,16'.

    Rechaza comas al inicio, al final o consecutivas, tokens que no sean
    dígitos, bases fuera de rango y bases repetidas.
    """
    if not value:
        raise ValueError("La lista de bases está vacía.")
    if value.startswith(",") or value.endswith(",") or ",," in value:
        raise ValueError(f"Lista de bases mal formada: '{value}'.")

    bases: list[int] = []
    for token in value.split(","):
        base = parse_base(token)
        if base in bases:
            raise ValueError(f"La base {base} está repetida.")
        if len(bases) >= MAX_OUTPUT_BASES:
            raise ValueError("Demasiadas bases de salida.")
        bases.append(base)
    return bases


@dataclass
class SessionConfig:
    input_base: int = DEFAULT_INPUT_BASE
    output_bases: list[int] = field(default_factory=lambda: list(DEFAULT_OUTPUT_BASES))
    file_path: str | None = None

    def banner_lines(self) -> list[str]:
        return [
            "Bienvenido a basejump.",
            f"Base de entrada: {self.input_base}",
            f"Bases de salida: {', '.join(map(str, self.output_bases))}",
        ]
