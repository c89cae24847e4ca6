"""
Strength estimation: brute-force crack time plus a five-level tier.

The crack-time model assumes an attacker who knows the alphabet and the
length and tries candidates uniformly; on average half the keyspace is
searched before a hit.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum

from .config import DEFAULT_CONFIG

SECONDS_PER_YEAR = 60 * 60 * 24 * 365.25

NOT_APPLICABLE = "-"


class Tier(Enum):
    """Strength categories, weakest to strongest. NONE is for empty input."""

    NONE = ("-", "")
    VERY_WEAK = ("Very Weak", "very-weak")
    WEAK = ("Weak", "weak")
    GOOD = ("Good", "good")
    STRONG = ("Strong", "strong")
    VERY_STRONG = ("Very Strong", "very-strong")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def tag(self) -> str:
        return self.value[1]


# (threshold in years, singular, plural), largest first.
TIME_UNITS: list[tuple[float, str, str]] = [
    (1e30, "nonillion year", "nonillion years"),
    (1e27, "octillion year", "octillion years"),
    (1e24, "septillion year", "septillion years"),
    (1e21, "sextillion year", "sextillion years"),
    (1e18, "quintillion year", "quintillion years"),
    (1e15, "quadrillion year", "quadrillion years"),
    (1e12, "trillion year", "trillion years"),
    (1e9, "billion year", "billion years"),
    (1e6, "million year", "million years"),
    (1e3, "thousand year", "thousand years"),
    (100, "century", "centuries"),
    (10, "decade", "decades"),
    (1, "year", "years"),
    (1 / 12, "month", "months"),
    (1 / 52, "week", "weeks"),
    (1 / 365.25, "day", "days"),
    (1 / (365.25 * 24), "hour", "hours"),
    (1 / (365.25 * 24 * 60), "minute", "minutes"),
]

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")
_SYMBOL = re.compile(r"[^A-Za-z0-9]")


@dataclass(frozen=True)
class StrengthAssessment:
    tier: Tier
    score: int
    crack_time_seconds: float
    crack_time_years: float
    time_label: str

    @property
    def label(self) -> str:
        return self.tier.label


NEUTRAL_ASSESSMENT = StrengthAssessment(
    tier=Tier.NONE,
    score=0,
    crack_time_seconds=0.0,
    crack_time_years=0.0,
    time_label=NOT_APPLICABLE,
)


def crack_time_seconds(
    length: int,
    alphabet_size: int,
    guesses_per_second: float = DEFAULT_CONFIG.guesses_per_second,
) -> float:
    """
    Average seconds to brute-force a password of `length` characters drawn
    from `alphabet_size` symbols. Returns inf when the value overflows a float.
    """
    pool = max(alphabet_size, 1)
    keyspace = pool ** max(length, 0)
    try:
        return keyspace / 2 / guesses_per_second
    except OverflowError:
        return math.inf


def format_crack_time(years: float) -> str:
    """
    Pick the largest time unit that `years` reaches and name it,
    singular when the rounded count is exactly one.
    """
    for threshold, singular, plural in TIME_UNITS:
        if years >= threshold:
            if math.isinf(years):
                return plural
            return singular if round(years / threshold) == 1 else plural
    return "seconds"


def score_password(password: str) -> int:
    """
    Score in [0, 8]: one point per length step (8, 12, 16, 20) and one per
    character kind present (upper, lower, digit, other).
    """
    length = len(password)
    score = sum(1 for step in (8, 12, 16, 20) if length >= step)
    for pattern in (_UPPER, _LOWER, _DIGIT, _SYMBOL):
        if pattern.search(password):
            score += 1
    return score


def tier_for_score(score: int) -> Tier:
    if score <= 2:
        return Tier.VERY_WEAK
    if score <= 4:
        return Tier.WEAK
    if score <= 6:
        return Tier.GOOD
    if score <= 7:
        return Tier.STRONG
    return Tier.VERY_STRONG


def estimate(
    password: str,
    allowed_alphabet_size: int,
    guesses_per_second: float = DEFAULT_CONFIG.guesses_per_second,
) -> StrengthAssessment:
    """
    Assess `password` against an alphabet of `allowed_alphabet_size` symbols.
    An empty password gets the neutral assessment.
    """
    if not password:
        return NEUTRAL_ASSESSMENT

    seconds = crack_time_seconds(len(password), allowed_alphabet_size, guesses_per_second)
    years = seconds / SECONDS_PER_YEAR
    score = score_password(password)

    return StrengthAssessment(
        tier=tier_for_score(score),
        score=score,
        crack_time_seconds=seconds,
        crack_time_years=years,
        time_label=format_crack_time(years),
    )
