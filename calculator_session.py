"""
Sesión interactiva de la calculadora de bases.

La sesión recibe las teclas de una en una, arma la expresión en la base
de entrada, atiende los comandos ':' y vuelve a dibujar el estado tras
cada tecla aceptada. No lee del terminal ni lo configura: eso lo hace
terminal_ui.
"""

import enum
import logging

from base_transliterator import normalize_numeral
from calc_errors import BaseJumpError
from calculator_engine import CalculatorEngine
from history_store import HistoryStore
from numeral_codec import is_digit_for_base, parse_magnitude
from session_config import SessionConfig, parse_base, parse_output_bases
from terminal_ui import TerminalDisplay


logger = logging.getLogger(__name__)


class SessionMode(enum.Enum):
    NORMAL = "normal"
    COMMAND = "command"
    # Igual que NORMAL, pero la próxima tecla puede descartarse
    POST_RESULT = "post_result"


class CalculatorSession:
    """Máquina de estados que convierte pulsaciones en cálculos."""

    MAX_INPUT = 64        # dígitos del numeral en curso
    MAX_COMMAND = 127     # caracteres de un comando ':'

    KEY_ENTER = "\n"
    KEY_ESCAPE = "\x1b"
    KEYS_BACKSPACE = ("\x7f", "\b")
    KEY_COMMAND = ":"
    OPERATORS = "+-*/"

    OUT_OF_MEMORY = "basejump: memoria insuficiente, tecla ignorada"

    def __init__(self, config: SessionConfig | None = None, engine=None,
                 display=None, history: HistoryStore | None = None):
        self.config = config if config is not None else SessionConfig()
        self.engine = engine if engine is not None else CalculatorEngine()
        self.display = display if display is not None else TerminalDisplay()
        self.history = history if history is not None else HistoryStore()

        self._mode = SessionMode.NORMAL
        self._raw_token = ""
        self._expression = ""
        self._command = ""

    # ── Estado observable ────────────────────────────────────────

    @property
    def mode(self) -> SessionMode:
        return self._mode

    @property
    def raw_token(self) -> str:
        return self._raw_token

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def command_buffer(self) -> str:
        return self._command

    @property
    def input_base(self) -> int:
        return self.config.input_base

    @property
    def output_bases(self) -> list[int]:
        return list(self.config.output_bases)

    # ── Entrada ──────────────────────────────────────────────────

    def feed(self, keys: str):
        for key in keys:
            self.handle_key(key)

    def handle_key(self, key: str):
        if self._mode is SessionMode.POST_RESULT:
            self._mode = SessionMode.NORMAL
            if not self._continues_after_result(key):
                self.render()
                return

        if self._mode is SessionMode.COMMAND:
            self._on_command_key(key)
            return

        self._on_key(self._classify(key), key)

    def _classify(self, key: str) -> str:
        if key == self.KEY_COMMAND:
            return "command"
        if key == self.KEY_ESCAPE:
            return "clear"
        if key in self.KEYS_BACKSPACE:
            return "backspace"
        if key == self.KEY_ENTER:
            return "equals"
        if key in self.OPERATORS:
            return "operator"
        if is_digit_for_base(key, self.input_base):
            return "digit"
        return "ignore"

    def _continues_after_result(self, key: str) -> bool:
        return self._classify(key) != "ignore"

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, action: str, key: str):
        if action == "command":
            self._mode = SessionMode.COMMAND
            self._command = ""
            return

        if action == "equals":
            self._calculate()
            return

        try:
            if action == "clear":
                self._clear_buffers()
            elif action == "backspace":
                self._raw_token = self._raw_token[:-1]
            elif action == "operator":
                self._expression = self._committed_expression(zero_if_empty=True) + key
                self._raw_token = ""
            elif action == "digit":
                if len(self._raw_token) < self.MAX_INPUT:
                    self._raw_token += key
        except MemoryError:
            # La tecla no tiene efecto; los buffers quedan como estaban
            self._report_out_of_memory()
            return
        self.render()

    def _committed_expression(self, zero_if_empty: bool) -> str:
        """Expresión con el numeral en curso ya añadido (sin modificar el estado)."""
        if self._raw_token:
            return self._expression + normalize_numeral(self._raw_token, self.input_base)
        if zero_if_empty:
            return self._expression + "0"
        return self._expression

    def _report_out_of_memory(self):
        logger.error("Memoria insuficiente para ampliar los buffers")
        self.display.error(self.OUT_OF_MEMORY)

    def _clear_buffers(self):
        self._raw_token = ""
        self._expression = ""

    # ── Cálculo ──────────────────────────────────────────────────

    def _calculate(self):
        try:
            expression = self._committed_expression(zero_if_empty=False) or "0"
        except MemoryError:
            self._report_out_of_memory()
            return
        base = self.input_base
        self._clear_buffers()

        try:
            value = self.engine.evaluate(expression, base)
        except BaseJumpError as exc:
            self.display.error(self.engine.error_message(expression, exc))
            return

        self.history.append(expression, base, value)
        self.display.refresh(
            self.engine.result_lines(expression, base, value, self.output_bases)
        )
        self._mode = SessionMode.POST_RESULT

    # ── Modo comando ─────────────────────────────────────────────

    def _on_command_key(self, key: str):
        if key != self.KEY_ENTER:
            if len(self._command) < self.MAX_COMMAND:
                try:
                    self._command += key
                except MemoryError:
                    self._report_out_of_memory()
            return

        command = self._command
        self._command = ""
        self._mode = SessionMode.NORMAL

        if command == "h":
            self._show_history()
            return
        if command.startswith("i"):
            self._set_input_base(command[1:])
        elif command.startswith("o"):
            self._set_output_bases(command[1:])
        self.render()

    def _set_input_base(self, body: str):
        try:
            base = parse_base(body)
        except ValueError as exc:
            logger.debug("Comando :i ignorado: %s", exc)
            return
        self.config.input_base = base
        self._clear_buffers()
        logger.info("Base de entrada cambiada a %d", base)

    def _set_output_bases(self, body: str):
        if not body:
            return
        try:
            self.config.output_bases = parse_output_bases(body)
            logger.info("Bases de salida cambiadas a %s", self.config.output_bases)
        except ValueError as exc:
            logger.debug("Comando :o ignorado: %s", exc)
        self._clear_buffers()

    def _show_history(self):
        lines = []
        for entry in self.history.list_all():
            lines.append(f"Expresión (base {entry.base}): {entry.expression}")
            lines.append(
                f"Resultado (base {entry.base}): "
                f"{self.engine.format_result(entry.result, entry.base)}"
            )
        self.display.refresh(lines or ["Historial vacío."])

    # ── Dibujo ───────────────────────────────────────────────────

    def prompt_lines(self) -> list[str]:
        base = self.input_base
        value = parse_magnitude(self._raw_token, base) if self._raw_token else 0
        lines = [
            f"Expresión (base {base}): {self._expression}",
            f"Entrada (base {base}): {self._raw_token}",
        ]
        lines.extend(self.engine.base_lines(value, self.output_bases))
        return lines

    def render(self):
        self.display.refresh(self.prompt_lines())
