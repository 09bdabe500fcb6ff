"""
Western zodiac sign lookup for partner birthdays.
"""

from datetime import tzinfo
from typing import Optional

from .dates import DateLike, try_parse_local_datetime

# (sign, last month, last day): a date belongs to the first sign whose end it does not pass
_SIGN_ENDS = (
    ("Capricorn", 1, 19),
    ("Aquarius", 2, 18),
    ("Pisces", 3, 20),
    ("Aries", 4, 19),
    ("Taurus", 5, 20),
    ("Gemini", 6, 21),
    ("Cancer", 7, 22),
    ("Leo", 8, 22),
    ("Virgo", 9, 22),
    ("Libra", 10, 23),
    ("Scorpio", 11, 21),
    ("Sagittarius", 12, 21),
)


def zodiac_sign(dob: DateLike, tz: Optional[tzinfo] = None) -> str:
    """Return the zodiac sign for a date of birth, or "" when it is unusable."""
    if not dob:
        return ""
    parsed = try_parse_local_datetime(dob, tz)
    if parsed is None:
        return ""

    for sign, month, day in _SIGN_ENDS:
        if (parsed.month, parsed.day) <= (month, day):
            return sign
    # Dec 22 - Dec 31
    return "Capricorn"
