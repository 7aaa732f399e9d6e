"""Terminal output for the vzconf command line."""

import sys

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
NC = "\033[0m"


def log_step(msg: str) -> None:
    """Log a step in progress."""
    print(f"{YELLOW}-> {msg}{NC}")


def log_success(msg: str) -> None:
    """Log a successful operation."""
    print(f"{GREEN}OK {msg}{NC}")


def log_warning(msg: str) -> None:
    """Log a non-fatal problem to stderr."""
    print(f"{YELLOW}WARNING: {msg}{NC}", file=sys.stderr)


def log_error(msg: str) -> None:
    """Log an error to stderr."""
    print(f"{RED}ERROR: {msg}{NC}", file=sys.stderr)


def die(msg: str, code: int = 1) -> None:
    """Log error and exit with the given status."""
    log_error(msg)
    sys.exit(code)


def print_table(headers: list[str], rows: list[list[str]]) -> None:
    """Print rows as left-aligned columns under a header line."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def fmt(cells):
        return "  ".join(c.ljust(w) for c, w in zip(cells, widths)).rstrip()

    print(fmt(headers))
    for row in rows:
        print(fmt(row))
