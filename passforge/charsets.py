"""
Character classes and the effective-alphabet builder.

An effective alphabet maps each enabled class to its characters with the
excluded ones removed. Classes left empty by exclusion are dropped.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable


class CharacterClass(Enum):
    # Declaration order is the canonical class order.
    UPPER = "upper"
    LOWER = "lower"
    NUMBERS = "numbers"
    SYMBOLS = "symbols"


CHAR_SETS: dict[CharacterClass, str] = {
    CharacterClass.UPPER: "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    CharacterClass.LOWER: "abcdefghijklmnopqrstuvwxyz",
    CharacterClass.NUMBERS: "0123456789",
    CharacterClass.SYMBOLS: "!@#$%^&*()_+-=[]{}|;:'\",.<>/?",
}

ALL_CLASSES = frozenset(CharacterClass)


class UnknownCharacterClassError(ValueError):
    """Raised when a class name does not match any CharacterClass."""


def build_effective_alphabet(
    enabled_classes: Iterable[CharacterClass],
    excluded_chars: Iterable[str] = "",
) -> dict[CharacterClass, str]:
    """
    Return {class: filtered characters} for every enabled class that still
    has characters left after removing `excluded_chars`.
    """
    enabled = set(enabled_classes)
    excluded = set(excluded_chars)

    effective: dict[CharacterClass, str] = {}
    for cls in CharacterClass:
        if cls not in enabled:
            continue
        filtered = "".join(ch for ch in CHAR_SETS[cls] if ch not in excluded)
        if filtered:
            effective[cls] = filtered
    return effective


def flatten_alphabet(effective: dict[CharacterClass, str]) -> str:
    """Concatenate the per-class sequences in canonical class order."""
    return "".join(effective[cls] for cls in CharacterClass if cls in effective)


def allowed_alphabet(
    enabled_classes: Iterable[CharacterClass],
    excluded_chars: Iterable[str] = "",
) -> str:
    return flatten_alphabet(build_effective_alphabet(enabled_classes, excluded_chars))


def parse_classes(text: str) -> set[CharacterClass]:
    """
    Parse a comma-separated list such as "upper,lower" into classes.
    Whitespace and case are ignored; "all" selects every class.
    """
    names = [part.strip().lower() for part in text.split(",") if part.strip()]
    if "all" in names:
        return set(ALL_CLASSES)

    classes: set[CharacterClass] = set()
    for name in names:
        try:
            classes.add(CharacterClass(name))
        except ValueError:
            valid = ", ".join(cls.value for cls in CharacterClass)
            raise UnknownCharacterClassError(
                f"Unknown character class {name!r} (expected one of: {valid})"
            ) from None
    return classes
