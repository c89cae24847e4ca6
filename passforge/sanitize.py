"""
Keep hand-edited passwords consistent with the active constraints.
"""

from __future__ import annotations

from .config import DEFAULT_CONFIG


def sanitize(text: str, allowed_alphabet: str) -> str:
    """Drop every character of `text` not in `allowed_alphabet`, keeping order."""
    allowed = set(allowed_alphabet)
    return "".join(ch for ch in text if ch in allowed)


def truncate_to_length(password: str, length: int) -> str:
    """Cut `password` down to `length` characters; shorter input is unchanged."""
    if len(password) > length:
        return password[:length]
    return password


def splice_paste(
    current: str,
    pasted: str,
    start: int,
    end: int,
    allowed_alphabet: str,
    max_length: int = DEFAULT_CONFIG.max_length,
) -> tuple[str, int]:
    """
    Replace the selection [start, end) of `current` with the allowed part of
    `pasted`. Returns the new value, capped at `max_length`, and the cursor
    position just after the inserted text.
    """
    start, end = sorted((max(start, 0), max(end, 0)))
    filtered = sanitize(pasted, allowed_alphabet)

    value = current[:start] + filtered + current[end:]
    value = truncate_to_length(value, max_length)

    cursor = min(start + len(filtered), len(value))
    return value, cursor
