"""
Password synthesis: turn an effective alphabet and a target length into a
password that covers every active character class.
"""

from __future__ import annotations

import logging

from .charsets import CharacterClass, flatten_alphabet
from .config import DEFAULT_CONFIG
from .entropy import RandomSource, SystemRandomSource

logger = logging.getLogger(__name__)


def clamp_length(
    value: object,
    min_length: int = DEFAULT_CONFIG.min_length,
    max_length: int = DEFAULT_CONFIG.max_length,
) -> int:
    """
    Coerce `value` to an int within [min_length, max_length].
    Anything that is not a number collapses to min_length.
    """
    try:
        num = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return min_length
    return min(max(num, min_length), max_length)


def shuffle_in_place(chars: list[str], rng: RandomSource) -> None:
    """Fisher-Yates: walk from the last index down to 1, swapping with [0, i]."""
    for i in range(len(chars) - 1, 0, -1):
        j = rng.randbelow(i + 1)
        chars[i], chars[j] = chars[j], chars[i]


def synthesize(
    effective_alphabet: dict[CharacterClass, str],
    target_length: int,
    rng: RandomSource | None = None,
    min_length: int = DEFAULT_CONFIG.min_length,
    max_length: int = DEFAULT_CONFIG.max_length,
) -> str:
    """
    Build a password from `effective_alphabet`.

    - Returns "" when no class survived filtering.
    - One character is drawn from each active class, then the rest come
      from the flat alphabet until `target_length` (clamped) is reached.
    - The result is shuffled so the class representatives are not
      always at the front.

    If there are more active classes than the target length, every class
    still gets its representative and the password is longer than asked.
    """
    if not effective_alphabet:
        return ""

    rng = rng or SystemRandomSource()
    length = clamp_length(target_length, min_length, max_length)

    all_chars = flatten_alphabet(effective_alphabet)
    chars: list[str] = []

    # Coverage pass, canonical class order.
    for cls in CharacterClass:
        pool = effective_alphabet.get(cls)
        if pool:
            chars.append(pool[rng.randbelow(len(pool))])

    while len(chars) < length:
        chars.append(all_chars[rng.randbelow(len(all_chars))])

    shuffle_in_place(chars, rng)

    logger.debug(
        "Synthesized password (length=%d, classes=%s, pool=%d)",
        len(chars),
        ",".join(cls.value for cls in effective_alphabet),
        len(all_chars),
    )
    return "".join(chars)
