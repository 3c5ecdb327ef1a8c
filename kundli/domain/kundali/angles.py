"""
Angle and time helpers shared by every calculator.

All segment lookups use closed-open intervals: a longitude sitting exactly
on a boundary belongs to the upper segment.
"""
import math
from datetime import datetime, timezone
from typing import Tuple

from kundli.domain.kundali.constants import NAKSHATRA_SPAN, PADA_SPAN, SIGN_SPAN
from kundli.domain.kundali.errors import InvalidInputError


# Guards floor() against values like 29.999999999 that are really 30
_EPSILON = 1e-9


# ─────────────────────────────────────────────
# Normalization
# ─────────────────────────────────────────────

def normalize(degrees: float) -> float:
    """
    Normalize any angle (negative or >= 360) into [0, 360).
    """
    if not math.isfinite(degrees):
        raise InvalidInputError(f"Non-finite angle: {degrees}")

    value = degrees % 360.0
    # -1e-15 % 360 == 360.0 in floating point
    if value >= 360.0:
        value = 0.0
    return value


def forward_distance(start: float, end: float) -> float:
    """
    Degrees travelled going forward (zodiacal order) from start to end.
    """
    return normalize(end - start)


def is_day_birth(ascendant_longitude: float, sun_longitude: float) -> bool:
    """
    Sun above the horizon: within the 180° behind the rising degree.
    """
    return forward_distance(ascendant_longitude, sun_longitude) >= 180.0


def angular_distance(a: float, b: float) -> float:
    """
    Shortest arc between two longitudes, in [0, 180].
    """
    diff = forward_distance(a, b)
    return 360.0 - diff if diff > 180.0 else diff


def sign_distance(from_sign: int, to_sign: int) -> int:
    """
    Zero-based forward count of signs (0 = same sign, 11 = 12th).
    """
    return (to_sign - from_sign) % 12


def house_from(reference_sign: int, target_sign: int) -> int:
    """
    Inclusive forward house count (1–12) of target from reference.
    """
    return sign_distance(reference_sign, target_sign) + 1


# ─────────────────────────────────────────────
# Segment indices
# ─────────────────────────────────────────────

def _segment(longitude: float, span: float, count: int) -> int:
    lon = normalize(longitude)
    index = int(math.floor(lon / span + _EPSILON))
    return min(index, count - 1)


def sign_index(longitude: float) -> int:
    return _segment(longitude, SIGN_SPAN, 12)


def degree_in_sign(longitude: float) -> float:
    lon = normalize(longitude)
    return max(0.0, lon - sign_index(lon) * SIGN_SPAN)


def nakshatra_index(longitude: float) -> int:
    return _segment(longitude, NAKSHATRA_SPAN, 27)


def pada(longitude: float) -> int:
    return _segment(longitude, PADA_SPAN, 108) % 4 + 1


def nakshatra_fraction(longitude: float) -> float:
    """
    Fraction (0 ≤ f < 1) of the current nakshatra already traversed.
    """
    lon = normalize(longitude)
    traversed = max(0.0, lon - nakshatra_index(lon) * NAKSHATRA_SPAN)
    return min(traversed / NAKSHATRA_SPAN, 1.0 - _EPSILON)


# ─────────────────────────────────────────────
# Degrees ↔ DMS
# ─────────────────────────────────────────────

def to_dms(degrees: float) -> Tuple[int, int, float]:
    """
    Split decimal degrees into (degrees, minutes, seconds).

    The sign is carried on the first non-zero component.
    """
    negative = degrees < 0
    value = abs(degrees)

    d = int(value)
    minutes_full = (value - d) * 60
    m = int(minutes_full)
    s = round((minutes_full - m) * 60, 2)

    if s >= 60.0:
        s = 0.0
        m += 1
    if m >= 60:
        m = 0
        d += 1

    if negative:
        if d:
            d = -d
        elif m:
            m = -m
        else:
            s = -s
    return d, m, s


def from_dms(degrees: int, minutes: int = 0, seconds: float = 0.0) -> float:
    negative = degrees < 0 or minutes < 0 or seconds < 0
    value = abs(degrees) + abs(minutes) / 60.0 + abs(seconds) / 3600.0
    return -value if negative else value


def format_dms(degrees: float) -> str:
    d, m, s = to_dms(degrees)
    return f"{d}°{abs(m):02d}'{abs(s):05.2f}\""


# ─────────────────────────────────────────────
# Time
# ─────────────────────────────────────────────

def ensure_utc(instant: datetime) -> datetime:
    """
    Convert an aware datetime to UTC. Naive datetimes are ambiguous
    and rejected.
    """
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise InvalidInputError(
            f"Instant {instant.isoformat()} has no timezone; pass an aware datetime"
        )
    return instant.astimezone(timezone.utc)


def julian_day(instant: datetime) -> float:
    """
    Julian Day (UT) for an aware datetime in the proleptic Gregorian calendar.

    Meeus, Astronomical Algorithms, ch. 7, with the Gregorian correction
    applied to every date.
    """
    dt = ensure_utc(instant)

    year, month = dt.year, dt.month
    day = (
        dt.day
        + (dt.hour + dt.minute / 60.0 + (dt.second + dt.microsecond / 1e6) / 3600.0) / 24.0
    )

    if month <= 2:
        year -= 1
        month += 12

    a = year // 100
    b = 2 - a + a // 4

    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day + b - 1524.5
    )


def decimal_year(instant: datetime) -> float:
    dt = ensure_utc(instant)
    start = datetime(dt.year, 1, 1, tzinfo=timezone.utc)
    end = datetime(dt.year + 1, 1, 1, tzinfo=timezone.utc)
    return dt.year + (dt - start).total_seconds() / (end - start).total_seconds()
