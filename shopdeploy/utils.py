"""Utility functions for shopdeploy."""

import sys
from decimal import Decimal, InvalidOperation, localcontext

# Enough digits for any uint256 amount
DECIMAL_PRECISION = 80

# ANSI color codes
RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
YELLOW = "\033[33m"
GREEN = "\033[32m"
BLUE = "\033[34m"
CYAN = "\033[36m"


def print_banner(network: str) -> None:
    """Print the shopdeploy banner."""
    print(bold("shopdeploy") + " - MyToken / Shop deployment")
    print(f"{bold('Network:')} {bold_yellow(network)}")


def section_header(title: str) -> None:
    """Print a section header."""
    print()
    print(f"--- {title} ---")


def section_footer(message: str) -> None:
    """Print a section footer."""
    print()
    print(message)


def error(message: object) -> None:
    """Print an error message in red to stderr."""
    print(f"{RED}[error]{RESET} {message}", file=sys.stderr)


def warn(message: str) -> None:
    """Print a warning message in yellow."""
    print(f"{YELLOW}[warn]{RESET} {message}")


def info(message: str) -> None:
    """Print an info message in blue."""
    print(f"{BLUE}[info]{RESET} {message}")


def success(message: str) -> None:
    """Print a success message in green."""
    print(f"{GREEN}[success]{RESET} {message}")


def result(message: str) -> None:
    """Print a result message in cyan."""
    print(f"{CYAN}[result]{RESET} {message}")


def bold(message: str) -> str:
    """Return a bold formatted message."""
    return f"{BOLD}{message}{RESET}"


def bold_yellow(message: str) -> str:
    """Return a bold yellow formatted message."""
    return f"{BOLD}{YELLOW}{message}{RESET}"


def bold_green(message: str) -> str:
    """Return a bold green formatted message."""
    return f"{BOLD}{GREEN}{message}{RESET}"


def parse_units(value: str, decimals: int) -> int:
    """
    Convert a human-readable decimal string into base units.

    Uses exact decimal arithmetic, so "1000000" with 18 decimals is exactly
    1000000 * 10**18.

    Raises:
        ValueError: If the value is not a number or has more fractional
            digits than ``decimals`` allows.
    """
    if decimals < 0:
        raise ValueError("decimals must be non-negative")
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")

    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        scaled = amount.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"Amount {value!r} has more than {decimals} decimal places")
    return int(scaled)


def format_units(raw: int, decimals: int) -> str:
    """Convert base units back into a human-readable decimal string."""
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        amount = Decimal(raw).scaleb(-decimals)
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
