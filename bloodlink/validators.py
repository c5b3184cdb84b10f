import math
import re

# Leading integer, the way form inputs are read: " 30", "30.9" and "30 yrs" all give 30
_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')

# Longer numbers are not counts or ages, and would hit the int conversion limit
MAX_DIGITS = 15


def parse_int(raw):
    """Return the leading integer of ``raw``, or None when there is none"""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None
    if raw is None:
        return None
    match = _LEADING_INT.match(str(raw))
    if not match:
        return None
    digits = match.group(1)
    if len(digits.lstrip('+-').lstrip('0')) > MAX_DIGITS:
        return None
    return int(digits)


def coerce_target(raw):
    """Target counts are non-negative integers; anything else becomes 0"""
    value = parse_int(raw)
    if value is None or value < 0:
        return 0
    return value
