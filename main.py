"""Punto de entrada de la calculadora de bases."""

import argparse
import logging
import os
import sys

from calc_errors import BaseJumpError, ExpressionSyntaxError
from calculator_engine import CalculatorEngine
from calculator_session import CalculatorSession
from session_config import SessionConfig, parse_base, parse_output_bases
from terminal_ui import FAREWELL, TerminalDisplay, run_interactive


USE_MPMATH = True
MPMATH_PRECISION_BITS = 53
LOG_LEVEL = os.environ.get("BASEJUMP_LOG_LEVEL", "WARNING")

EXIT_INVALID_ARGS = 17
EXIT_OPEN_FILE = 13

USAGE = "Usage: basejump [--obases 2..36] [--inputbase 2..36] [--file string]"
PROMPT_HINT = "Introduce tus números y expresiones."

logger = logging.getLogger(__name__)


# ── Línea de comandos ────────────────────────────────────────────

class _ArgumentParser(argparse.ArgumentParser):
    """Cualquier error de argumentos termina con el uso y el código 17."""

    def error(self, message):
        logger.debug("Argumentos inválidos: %s", message)
        self.exit(EXIT_INVALID_ARGS, f"{USAGE}\n")


class _StoreOnce(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest) is not None:
            parser.error(f"{option_string} repetido")
        setattr(namespace, self.dest, values)


def _non_empty(value: str) -> str:
    if not value:
        raise ValueError("valor vacío")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="basejump", add_help=False, allow_abbrev=False)
    parser.add_argument("--inputbase", dest="input_base", type=parse_base,
                        action=_StoreOnce, default=None)
    parser.add_argument("--obases", dest="output_bases", type=parse_output_bases,
                        action=_StoreOnce, default=None)
    parser.add_argument("--file", dest="file_path", type=_non_empty,
                        action=_StoreOnce, default=None)
    return parser


def parse_arguments(argv) -> SessionConfig:
    args = build_arg_parser().parse_args(argv)
    config = SessionConfig(file_path=args.file_path)
    if args.input_base is not None:
        config.input_base = args.input_base
    if args.output_bases is not None:
        config.output_bases = args.output_bases
    return config


def build_engine() -> CalculatorEngine:
    if USE_MPMATH:
        from mpmath_engine import MPMathCalculatorEngine

        return MPMathCalculatorEngine(precision_bits=MPMATH_PRECISION_BITS)
    return CalculatorEngine()


# ── Modo archivo ─────────────────────────────────────────────────

def evaluate_line(engine: CalculatorEngine, config: SessionConfig,
                  display: TerminalDisplay, expression: str) -> bool:
    try:
        value = engine.evaluate(expression, config.input_base)
    except BaseJumpError as exc:
        display.error(engine.error_message(expression, exc))
        return False
    display.write_lines(
        engine.result_lines(expression, config.input_base, value, config.output_bases)
    )
    return True


def run_file(config: SessionConfig, engine: CalculatorEngine,
             display: TerminalDisplay) -> int:
    try:
        handle = open(config.file_path, encoding="utf-8", errors="replace", newline="\n")
    except OSError as exc:
        logger.debug("No se pudo abrir %s: %s", config.file_path, exc)
        display.error(f'basejump: no se puede leer el archivo "{config.file_path}"')
        return EXIT_OPEN_FILE

    logger.info("Procesando archivo %s", config.file_path)
    with handle:
        display.write_lines(config.banner_lines())
        has_content = False
        for line in handle:
            has_content = True
            evaluate_line(engine, config, display, line.rstrip("\r\n"))

    if not has_content:
        display.error(engine.error_message("", ExpressionSyntaxError("archivo vacío")))

    display.write_lines([FAREWELL])
    return 0


# ── Modo interactivo ─────────────────────────────────────────────

def run_session(config: SessionConfig, engine: CalculatorEngine,
                display: TerminalDisplay, stdin=None) -> int:
    display.clear()
    display.write_lines(config.banner_lines() + [PROMPT_HINT])
    session = CalculatorSession(config, engine=engine, display=display)
    run_interactive(session, stdin)
    return 0


def main(argv=None) -> int:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    config = parse_arguments(sys.argv[1:] if argv is None else argv)
    engine = build_engine()
    display = TerminalDisplay()

    if config.file_path is not None:
        return run_file(config, engine, display)
    return run_session(config, engine, display)


if __name__ == "__main__":
    sys.exit(main())
