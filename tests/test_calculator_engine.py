from __future__ import annotations

import threading
import time

import pytest

from calc_errors import (
    DivisionByZeroError,
    ExpressionSyntaxError,
    InvalidExpressionError,
    OutOfRangeError,
)
from calculator_engine import CalculatorEngine
from mpmath_engine import MPMathCalculatorEngine


@pytest.fixture(params=[CalculatorEngine, MPMathCalculatorEngine])
def engine(request):
    return request.param()


@pytest.mark.parametrize(
    "expression, base, expected",
    [
        ("FF", 16, 255),
        ("ff + 1", 16, 256),
        ("101 * 11", 2, 15),
        ("(7 + 1) / 2", 8, 4),
        ("ZZ % A", 36, 5),
        ("2 ^ 10", 10, 1024),
    ],
)
def test_evaluate_in_base(engine, expression, base, expected):
    assert engine.evaluate(expression, base) == expected


def test_pipeline_errors(engine):
    with pytest.raises(InvalidExpressionError):
        engine.evaluate("12 + 9", 8)
    with pytest.raises(ExpressionSyntaxError):
        engine.evaluate("1 +", 10)
    with pytest.raises(DivisionByZeroError):
        engine.evaluate("A / 0", 16)
    with pytest.raises(OutOfRangeError):
        engine.evaluate("1 - 10", 2)


def test_huge_power_is_out_of_range(engine):
    with pytest.raises(OutOfRangeError):
        engine.evaluate("10 ^ 10 ^ 10", 10)


def test_result_lines(engine):
    assert engine.result_lines("FF+1", 16, 256, [2, 10]) == [
        "Expresión (base 16): FF+1",
        "Resultado (base 16): 100",
        "Base 2: 100000000",
        "Base 10: 256",
    ]


def test_error_message_names_expression_and_reason():
    message = CalculatorEngine.error_message("5/0", DivisionByZeroError())
    assert message == 'No se puede evaluar la expresión "5/0" (división por cero)'


def test_mpmath_engine_precision_never_drops_below_double():
    assert MPMathCalculatorEngine(precision_bits=20).precision_bits == 53
    assert MPMathCalculatorEngine(precision_bits=80).precision_bits == 80


@pytest.mark.parametrize(
    "expression",
    [
        "10^400 % 7",
        "(10^400)/(10^400)",
        "(2^2^2^2^2^2)/(2^2^2^2^2^2)",
        "2^1024 - 2^1024",
        "10^200 * 10^200 / 10^200",
    ],
)
def test_intermediate_outside_double_range_is_out_of_range(engine, expression):
    with pytest.raises(OutOfRangeError):
        engine.evaluate(expression, 10)


def test_tower_of_powers_fails_without_computing_it():
    engine = MPMathCalculatorEngine()
    outcome = {}

    def _run():
        try:
            engine.evaluate("3^2^2^2^2^2", 10)
        except OutOfRangeError as exc:
            outcome["error"] = exc

    worker = threading.Thread(target=_run, daemon=True)
    started = time.monotonic()
    worker.start()
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert time.monotonic() - started < 5
    assert isinstance(outcome.get("error"), OutOfRangeError)


def test_tiny_powers_underflow_to_zero_like_a_double(engine):
    assert engine.evaluate("2^(0-2000) + 4", 10) == 4
