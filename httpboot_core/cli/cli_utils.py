import sys

BLUE = "\033[1;34m"
GREEN = "\033[1;32m"
YELLOW = "\033[1;33m"
RED = "\033[1;31m"
RESET = "\033[0m"

RULE = "=" * 56


def _color(code: str) -> str:
    # no escape codes when piped
    return code if sys.stdout.isatty() else ""


def echo_status(msg: str) -> None:
    print(f"{_color(BLUE)}>>> {msg}{_color(RESET)}")


def echo_success(msg: str) -> None:
    print(f"{_color(GREEN)}{msg}{_color(RESET)}")


def echo_warning(msg: str) -> None:
    print(f"{_color(YELLOW)}WARNING: {msg}{_color(RESET)}")


def echo_error(msg: str) -> None:
    print(f"{_color(RED)}ERROR: {msg}{_color(RESET)}")
