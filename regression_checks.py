from calculator_session import CalculatorSession, SessionMode
from mpmath_engine import MPMathCalculatorEngine
from session_config import SessionConfig
import sys


class _RecordingDisplay:
	def __init__(self):
		self.screens = []
		self.errors = []

	def clear(self):
		return None

	def write_lines(self, lines):
		self.screens.append(list(lines))

	def refresh(self, lines):
		self.screens.append(list(lines))

	def error(self, message):
		self.errors.append(message)

	@property
	def last_screen(self):
		return self.screens[-1] if self.screens else []


def _walk(keys: str, *, input_base: int = 10, output_bases=(2, 10, 16)):
	display = _RecordingDisplay()
	session = CalculatorSession(
		SessionConfig(input_base=input_base, output_bases=list(output_bases)),
		engine=MPMathCalculatorEngine(),
		display=display,
	)
	session.feed(keys)
	return session, display


def _decode_keys(text: str) -> str:
	"""Permite escribir teclas especiales en la línea de comandos: \\n, \\e, \\b."""
	return (
		text.replace("\\n", "\n")
		.replace("\\e", "\x1b")
		.replace("\\b", "\x7f")
	)


def inspect_keys(
	keys: str,
	*,
	input_base: int = 10,
	show: int = 3,
) -> None:
	"""Imprime las últimas pantallas dibujadas tras una secuencia de teclas."""
	session, display = _walk(keys, input_base=input_base)

	print("Key inspection")
	print(f"keys:           {keys!r}")
	print(f"input base:     {input_base}")
	print(f"screens drawn:  {len(display.screens)}")
	print(f"final mode:     {session.mode.value}")
	print(f"history size:   {len(session.history)}")

	limit = max(1, show)
	for i, screen in enumerate(display.screens[-limit:], start=1):
		print(f"  screen {i}:")
		for line in screen:
			print(f"    {line}")

	for message in display.errors:
		print(f"error:          {message}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	session, _ = _walk("FF\n\x1b", input_base=16)
	entries = session.history.list_all()
	checks.append((
		"FF enter escape leaves both buffers empty",
		session.raw_token == "" and session.expression == "",
	))
	checks.append((
		"FF enter records one history entry",
		len(entries) == 1
		and (entries[0].expression, entries[0].base, entries[0].result) == ("FF", 16, 255),
	))

	session, _ = _walk("10+:i8\n")
	checks.append((
		":i8 discards stale base-10 expression",
		session.expression == "" and session.input_base == 8,
	))

	session, _ = _walk(":o2,2\n")
	checks.append((
		":o2,2 keeps previous output bases",
		session.output_bases == [2, 10, 16],
	))

	session, display = _walk("5\nZ")
	checks.append((
		"invalid key after result is discarded",
		session.mode is SessionMode.NORMAL and session.raw_token == "" and session.expression == "",
	))
	expected_actual.append((
		"idle prompt after discarded key",
		"Entrada (base 10): ",
		display.last_screen[1] if len(display.last_screen) > 1 else "",
	))

	session, _ = _walk("00ff+1\n", input_base=16)
	expected_actual.append((
		"operator normalises leading zeros and case",
		"FF+1",
		session.history.list_all()[-1].expression if len(session.history) else "",
	))

	session, _ = _walk("5+*2\n")
	checks.append((
		"chained operator inserts implicit zero",
		len(session.history) == 1 and session.history.list_all()[0].expression == "5+0*2",
	))

	session, display = _walk("-5\n")
	checks.append((
		"negative result is reported and not recorded",
		len(display.errors) == 1 and len(session.history) == 0,
	))

	session, display = _walk("5/0\n")
	checks.append((
		"division by zero clears buffers and stays normal",
		len(display.errors) == 1
		and session.mode is SessionMode.NORMAL
		and session.expression == "",
	))

	session, _ = _walk("2+3\n4\n")
	checks.append((
		"digit after result starts a fresh expression",
		[entry.result for entry in session.history.list_all()] == [5, 4],
	))

	session, _ = _walk("123\x7f\n")
	checks.append((
		"backspace drops last digit only",
		session.history.list_all()[-1].result == 12,
	))

	session, display = _walk("7*6\n:h\n", input_base=10)
	expected_actual.append((
		":h lists expression then result",
		"Expresión (base 10): 7*6 | Resultado (base 10): 42",
		" | ".join(display.last_screen),
	))

	session, _ = _walk("1" * 70, input_base=2)
	checks.append((
		"raw token stops at 64 digits",
		len(session.raw_token) == CalculatorSession.MAX_INPUT,
	))

	failed = [name for name, ok in checks if not ok]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")
		if expected != actual:
			failed.append(label)

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "FF+1\n" --base 16
	#   python regression_checks.py --inspect "7*6\n:h\n" --show 2
	if "--inspect" in sys.argv:
		try:
			keys = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing keys after --inspect")

		def _read_int(flag: str, default: int) -> int:
			if flag not in sys.argv:
				return default
			idx = sys.argv.index(flag)
			try:
				return int(sys.argv[idx + 1])
			except (ValueError, IndexError):
				raise SystemExit(f"Invalid value for {flag}")

		inspect_keys(
			_decode_keys(keys),
			input_base=_read_int("--base", 10),
			show=_read_int("--show", 3),
		)
	else:
		run_regressions()
