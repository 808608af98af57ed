from __future__ import annotations

import io

from calculator_session import CalculatorSession
from session_config import SessionConfig
from terminal_ui import (
    FAREWELL,
    TerminalDisplay,
    raw_input_mode,
    read_keys,
    run_interactive,
)


def test_read_keys_stops_at_end_of_transmission():
    assert list(read_keys(io.StringIO("12\x0434"))) == ["1", "2"]
    assert list(read_keys(io.StringIO("ab"))) == ["a", "b"]


def test_raw_input_mode_is_noop_without_terminal():
    stream = io.StringIO("x")
    with raw_input_mode(stream):
        assert stream.read(1) == "x"


def test_display_clears_only_when_asked():
    out = io.StringIO()
    TerminalDisplay(out=out, err=io.StringIO(), clear_screen=True).refresh(["a", "b"])
    assert out.getvalue() == TerminalDisplay.CLEAR_SEQUENCE + "a\nb\n"

    out = io.StringIO()
    TerminalDisplay(out=out, err=io.StringIO(), clear_screen=False).refresh(["a"])
    assert out.getvalue() == "a\n"


def test_display_errors_go_to_error_stream():
    out, err = io.StringIO(), io.StringIO()
    TerminalDisplay(out=out, err=err, clear_screen=False).error("fallo")
    assert out.getvalue() == ""
    assert err.getvalue() == "fallo\n"


def test_run_interactive_processes_keys_then_says_goodbye():
    out, err = io.StringIO(), io.StringIO()
    display = TerminalDisplay(out=out, err=err, clear_screen=False)
    session = CalculatorSession(SessionConfig(), display=display)

    run_interactive(session, io.StringIO("6*7\n"))

    assert session.history.list_all()[0].result == 42
    assert "Resultado (base 10): 42\n" in out.getvalue()
    assert out.getvalue().endswith(FAREWELL + "\n")
    assert err.getvalue() == ""


class _InterruptingStream:
    def __init__(self, keys):
        self._keys = list(keys)

    def isatty(self):
        return False

    def read(self, _size):
        if not self._keys:
            raise KeyboardInterrupt
        return self._keys.pop(0)


def test_ctrl_c_ends_the_session_cleanly():
    out = io.StringIO()
    display = TerminalDisplay(out=out, err=io.StringIO(), clear_screen=False)
    session = CalculatorSession(SessionConfig(), display=display)

    run_interactive(session, _InterruptingStream("12"))

    assert session.raw_token == "12"
    assert out.getvalue().endswith(FAREWELL + "\n")
