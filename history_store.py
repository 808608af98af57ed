"""Historial de cálculos de la sesión."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HistoryEntry:
    expression: str
    base: int
    result: int


class HistoryStore:
    """Registro ordenado y de solo anexado de los cálculos exitosos."""

    def __init__(self):
        self._entries: list[HistoryEntry] = []

    def append(self, expression: str, base: int, result: int) -> HistoryEntry:
        entry = HistoryEntry(expression, base, result)
        self._entries.append(entry)
        return entry

    def list_all(self) -> tuple[HistoryEntry, ...]:
        """Todas las entradas, de la más antigua a la más reciente."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
