"""Shared utilities used across the scheduling core."""

import re


def normalize_phone(value: str) -> str:
    """Normalize a phone number by stripping every non-digit character.

    No country-code canonicalization is applied.

    Examples:
        >>> normalize_phone("(123) 456-7890")
        '1234567890'
        >>> normalize_phone("+1 123 456 7890")
        '11234567890'
    """
    return re.sub(r"[^\d]", "", value)


def phones_match(first: str, second: str) -> bool:
    """Return True when both numbers carry the same digits."""
    left = normalize_phone(first)
    return bool(left) and left == normalize_phone(second)


def format_phone(value: str) -> str:
    """Format up to ten digits progressively as ``XXX-XXX-XXXX``.

    Examples:
        >>> format_phone("1234")
        '123-4'
        >>> format_phone("(123) 456 78901")
        '123-456-7890'
    """
    digits = normalize_phone(value)
    if len(digits) <= 3:
        return digits
    if len(digits) <= 6:
        return f"{digits[:3]}-{digits[3:6]}"
    return f"{digits[:3]}-{digits[3:6]}-{digits[6:10]}"
