"""Helper functions for the sample application."""

import sys

TAX_RATE = 0.1
MAX_ITEMS: int = 50


def validate_email(email: str) -> bool:
    """Return True when *email* looks like an address."""
    return "@" in email and "." in email.split("@")[1]


def format_name(first: str, last: str) -> str:
    return f"{first.capitalize()} {last.capitalize()}"


def calculate_total(items: list, tax_rate: float = TAX_RATE) -> float:
    subtotal = sum(items)
    return subtotal + subtotal * tax_rate


if sys.platform == "win32":
    def normalize_path(path: str) -> str:
        return path.replace("\\", "/")
