import math
import re
from typing import Optional

# Ведущее десятичное число, как его понимает JavaScript parseFloat
_LEADING_FLOAT = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?",
    re.ASCII,
)


def parse_float(raw) -> Optional[float]:
    """
    Разбирает значение числового поля ввода.

    Поведение повторяет parseFloat из браузера: берётся самый длинный
    числовой префикс строки ("6.6abc" -> 6.6, "  3" -> 3.0).

    Args:
        raw: строка из поля ввода (или уже число).

    Returns:
        Конечное число или None, если значение не является числом
        (пустая строка, "abc", "NaN", "Infinity").
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return None
    elif isinstance(raw, str):
        match = _LEADING_FLOAT.match(raw.lstrip())
        if match is None:
            return None
        value = float(match.group(0))
    else:
        return None
    return value if math.isfinite(value) else None
