"""
Pace arithmetic.

Conversions between Pace values and total seconds per kilometer, display
formatting, and the derived training paces used by the planner. All functions
are total: out-of-range values are clamped rather than rejected.
"""

import math

from run_planner.plan_schemas import Pace

EASY_OFFSET_SECONDS = 60
TEMPO_OFFSET_SECONDS = 15
INTERVAL_OFFSET_SECONDS = -15
RECOVERY_OFFSET_SECONDS = 75


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def pace_to_seconds(pace: Pace) -> int:
    """Total seconds per kilometer, floored at zero."""
    return max(0, pace.minutes * 60 + pace.seconds)


def seconds_to_pace(seconds: float) -> Pace:
    """Build a Pace from seconds per kilometer, rounding and flooring at zero."""
    total = max(0, round_half_up(seconds))
    return Pace(minutes=total // 60, seconds=total % 60)


def normalize_pace(pace: Pace) -> Pace:
    return seconds_to_pace(pace_to_seconds(pace))


def format_pace(pace: Pace) -> str:
    """
    Render a pace as "M:SS/km".

    The pace is normalized first, so repeated formatting is stable.
    """
    normalized = normalize_pace(pace)
    return f"{normalized.minutes}:{normalized.seconds:02d}/km"


def _offset_pace(pace: Pace, offset_seconds: int) -> str:
    return format_pace(seconds_to_pace(pace_to_seconds(pace) + offset_seconds))


def get_easy_pace(pace: Pace) -> str:
    """Easy/Zone 2 pace, about a minute slower than the base pace."""
    return _offset_pace(pace, EASY_OFFSET_SECONDS)


def get_tempo_pace(pace: Pace) -> str:
    return _offset_pace(pace, TEMPO_OFFSET_SECONDS)


def get_interval_pace(pace: Pace) -> str:
    return _offset_pace(pace, INTERVAL_OFFSET_SECONDS)


def get_recovery_pace(pace: Pace) -> str:
    return _offset_pace(pace, RECOVERY_OFFSET_SECONDS)


def pace_string_to_seconds(text: str) -> int:
    """
    Parse a formatted pace such as "5:30/km" back into seconds per kilometer.

    Raises:
        ValueError: If the text is not in M:SS form
    """
    value = text.strip()
    if value.endswith("/km"):
        value = value[: -len("/km")]
    minutes, sep, seconds = value.partition(":")
    if not sep or not minutes.isdigit() or not seconds.isdigit() or len(seconds) != 2:
        raise ValueError(f"Invalid pace '{text}'. Expected M:SS, e.g. 5:30")
    if int(seconds) > 59:
        raise ValueError(f"Invalid pace '{text}'. Seconds must be 00-59")
    return int(minutes) * 60 + int(seconds)
