"""Tests for password synthesis."""

import pytest

from passforge.charsets import ALL_CLASSES, CharacterClass, build_effective_alphabet, flatten_alphabet
from passforge.entropy import SeededRandomSource
from passforge.synth import clamp_length, shuffle_in_place, synthesize


@pytest.mark.parametrize("length", [4, 5, 12, 64, 128])
def test_length_alphabet_and_coverage(length):
    effective = build_effective_alphabet(ALL_CLASSES, "")
    flat = set(flatten_alphabet(effective))

    for seed in range(25):
        password = synthesize(effective, length, rng=SeededRandomSource(seed))
        assert len(password) == length
        assert set(password) <= flat
        for chars in effective.values():
            assert any(ch in chars for ch in password)


def test_lower_and_numbers_with_exclusions():
    effective = build_effective_alphabet(
        {CharacterClass.LOWER, CharacterClass.NUMBERS}, {"0", "o"}
    )
    for _ in range(200):
        password = synthesize(effective, 6)
        assert len(password) == 6
        assert any(ch.isdigit() for ch in password)
        assert any(ch.islower() for ch in password)
        assert "0" not in password
        assert "o" not in password


def test_empty_alphabet_gives_empty_password():
    assert synthesize({}, 12) == ""
    assert synthesize(build_effective_alphabet(set(), ""), 128) == ""


@pytest.mark.parametrize("requested, expected", [(1, 4), (-5, 4), (500, 128), (20, 20)])
def test_target_length_is_clamped(requested, expected):
    effective = build_effective_alphabet({CharacterClass.UPPER}, "")
    assert len(synthesize(effective, requested)) == expected


def test_coverage_kept_when_classes_exceed_target():
    effective = build_effective_alphabet(ALL_CLASSES, "")
    password = synthesize(effective, 2, rng=SeededRandomSource(7), min_length=1)
    assert len(password) == 4
    for chars in effective.values():
        assert sum(ch in chars for ch in password) == 1


def test_single_character_alphabet():
    effective = build_effective_alphabet({CharacterClass.NUMBERS}, "012345678")
    assert synthesize(effective, 8) == "99999999"


def test_seeded_source_is_reproducible():
    effective = build_effective_alphabet(ALL_CLASSES, "")
    first = synthesize(effective, 16, rng=SeededRandomSource(42))
    second = synthesize(effective, 16, rng=SeededRandomSource(42))
    assert first == second


def test_shuffle_is_a_permutation():
    chars = list("abcdefghij")
    shuffle_in_place(chars, SeededRandomSource(3))
    assert sorted(chars) == list("abcdefghij")


def test_shuffle_moves_first_position_around():
    # The coverage pass puts the uppercase letter first; after shuffling it
    # must not stay there every time.
    effective = build_effective_alphabet({CharacterClass.UPPER, CharacterClass.NUMBERS}, "")
    first_chars = {synthesize(effective, 8, rng=SeededRandomSource(s))[0].isupper() for s in range(50)}
    assert first_chars == {True, False}


@pytest.mark.parametrize(
    "value, expected",
    [(12, 12), ("16", 16), (0, 4), (999, 128), ("abc", 4), (None, 4), (7.9, 7)],
)
def test_clamp_length(value, expected):
    assert clamp_length(value) == expected
