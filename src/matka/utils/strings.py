from __future__ import annotations
from collections import Counter

def norm(x: object) -> str:
    """Trim-and-stringify; None becomes the empty string. No numeric coercion."""
    return "" if x is None else str(x).strip()

def is_digits(s: str, n: int) -> bool:
    return len(s) == n and s.isascii() and s.isdigit()

def digit_sum(x: str | int) -> int:
    s = norm(x)
    if not s.isdigit():
        raise ValueError(f"Not numeric: {x}")
    return sum(int(ch) for ch in s)

def sum_to_digit(pana: str | int) -> str:
    return str(digit_sum(pana) % 10)

def sum_to_single_digit(n: int) -> int:
    while n >= 10:
        n = digit_sum(n)
    return n

def classify_pana(pana: str) -> str:
    """'single' (all distinct), 'double' (one pair) or 'triple' (all same)."""
    s = norm(pana)
    if not is_digits(s, 3):
        raise ValueError(f"Pana must be 3 digits: {pana!r}")
    counts = sorted(Counter(s).values())
    if counts == [3]:
        return "triple"
    if counts == [1, 2]:
        return "double"
    return "single"

def build_jodi(open_digit: str | int, close_digit: str | int) -> str:
    return f"{norm(open_digit)}{norm(close_digit)}".zfill(2)
