"""Small arithmetic helpers."""


def add(left: int, right: int) -> int:
    """Return the sum of two non-negative integers."""
    return left + right