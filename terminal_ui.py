"""
Interfaz de terminal de la calculadora de bases.

Lee el teclado carácter a carácter (modo no canónico y sin eco), limpia
la pantalla con secuencias ANSI y escribe las líneas que produce la
sesión. Si la entrada no es un terminal todo funciona igual, pero sin
tocar la configuración del terminal ni limpiar la pantalla.
"""

import logging
import sys
from contextlib import contextmanager


logger = logging.getLogger(__name__)

KEY_END_OF_TRANSMISSION = "\x04"
FAREWELL = "¡Gracias por usar basejump!"


def _is_terminal(stream) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


@contextmanager
def raw_input_mode(stream=None):
    """Desactiva modo canónico y eco mientras dure el bloque.

    La configuración original se restaura siempre, también ante
    excepciones o Ctrl-C.
    """
    stream = stream if stream is not None else sys.stdin
    if not _is_terminal(stream):
        yield
        return

    import termios

    fd = stream.fileno()
    original = termios.tcgetattr(fd)
    raw = termios.tcgetattr(fd)
    raw[3] &= ~(termios.ICANON | termios.ECHO)
    raw[6][termios.VMIN] = 1
    raw[6][termios.VTIME] = 0
    termios.tcsetattr(fd, termios.TCSANOW, raw)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSANOW, original)


def read_keys(stream):
    """Genera las teclas leídas hasta fin de archivo o EOT (Ctrl-D)."""
    while True:
        key = stream.read(1)
        if not key or key == KEY_END_OF_TRANSMISSION:
            return
        yield key


class TerminalDisplay:
    """Destino de dibujo: líneas a stdout, diagnósticos a stderr."""

    CLEAR_SEQUENCE = "\033[2J\033[H"

    def __init__(self, out=None, err=None, clear_screen: bool | None = None):
        self._out = out if out is not None else sys.stdout
        self._err = err if err is not None else sys.stderr
        if clear_screen is None:
            clear_screen = _is_terminal(sys.stdin)
        self._clear_screen = clear_screen

    def clear(self):
        if self._clear_screen:
            self._out.write(self.CLEAR_SEQUENCE)

    def write_lines(self, lines):
        for line in lines:
            self._out.write(f"{line}\n")
        self._out.flush()

    def refresh(self, lines):
        self.clear()
        self.write_lines(lines)

    def error(self, message: str):
        self._err.write(f"{message}\n")
        self._err.flush()


def run_interactive(session, stdin=None):
    """Bucle principal: una tecla se procesa por completo antes de leer la siguiente."""
    stdin = stdin if stdin is not None else sys.stdin

    with raw_input_mode(stdin):
        try:
            for key in read_keys(stdin):
                session.handle_key(key)
        except KeyboardInterrupt:
            logger.info("Sesión interrumpida con Ctrl-C")

    session.display.write_lines([FAREWELL])
