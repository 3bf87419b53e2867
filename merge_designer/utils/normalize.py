"""Soft-fail normalization of positions, sizes and colors."""
import math
import re
from typing import Any

MIN_FONT_SIZE = 8
MAX_FONT_SIZE = 200
FALLBACK_PERCENT = 50.0
FALLBACK_COLOR = "000000"

_HEX6 = re.compile(r"[0-9A-Fa-f]{6}")
_HEX3 = re.compile(r"[0-9A-Fa-f]{3}")


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def clamp_percent(value: Any) -> float:
    """Clamp into [0, 100]; NaN, infinities and non-numbers map to 50."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return FALLBACK_PERCENT
    if not math.isfinite(number):
        return FALLBACK_PERCENT
    return clamp(number, 0.0, 100.0)


def clamp_font_size(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return float(MIN_FONT_SIZE)
    if math.isnan(number):
        return float(MIN_FONT_SIZE)
    return clamp(number, MIN_FONT_SIZE, MAX_FONT_SIZE)


def hex_to_docx_color(value: Any) -> str:
    """Uppercase RRGGBB without '#'; anything unparseable becomes black."""
    if not isinstance(value, str):
        return FALLBACK_COLOR
    cleaned = value.replace("#", "", 1)
    if _HEX6.fullmatch(cleaned):
        return cleaned.upper()
    if _HEX3.fullmatch(cleaned):
        return "".join(ch * 2 for ch in cleaned).upper()
    return FALLBACK_COLOR
