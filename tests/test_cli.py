"""Tests for the high-level generator and the command-line interface."""

import pytest

from passforge.charsets import CharacterClass
from passforge.cli import Constraints, generate_password, generate_password_with_meta, main
from passforge.config import PassForgeConfig
from passforge.entropy import SeededRandomSource
from passforge.strength import Tier


def test_generate_with_meta_defaults():
    result = generate_password_with_meta()
    assert result.ok
    assert len(result.password) == 12
    assert result.alphabet_size == 26 + 26 + 10 + 29
    assert result.assessment.tier is not Tier.NONE


def test_generate_with_meta_respects_constraints():
    constraints = Constraints(
        enabled_classes=frozenset({CharacterClass.LOWER, CharacterClass.NUMBERS}),
        excluded_chars="0o",
        length=6,
    )
    result = generate_password_with_meta(constraints, rng=SeededRandomSource(11))
    assert len(result.password) == 6
    assert result.alphabet_size == 25 + 9
    assert not set("0o") & set(result.password)


def test_generate_with_everything_excluded():
    constraints = Constraints(
        enabled_classes=frozenset({CharacterClass.NUMBERS}),
        excluded_chars="0123456789",
    )
    result = generate_password_with_meta(constraints)
    assert not result.ok
    assert result.password == ""
    assert result.assessment.tier is Tier.NONE
    assert result.assessment.time_label == "-"


def test_generate_password_uses_config_default_length():
    assert len(generate_password(config=PassForgeConfig(default_length=30))) == 30


def test_cli_generate(capsys):
    code = main(["generate", "--length", "20", "--classes", "upper,numbers", "--exclude", "0O"])
    out = capsys.readouterr().out.splitlines()
    assert code == 0
    password = out[0]
    assert len(password) == 20
    assert all(ch.isupper() or ch.isdigit() for ch in password)
    assert "0" not in password and "O" not in password
    assert out[1].startswith("Strength:")
    assert out[2].startswith("Crack time:")


def test_cli_generate_seeded_is_reproducible(capsys):
    main(["generate", "--seed", "3"])
    first = capsys.readouterr().out
    main(["generate", "--seed", "3"])
    assert capsys.readouterr().out == first


def test_cli_generate_clamps_bad_length(capsys):
    assert main(["generate", "--length", "abc"]) == 0
    assert len(capsys.readouterr().out.splitlines()[0]) == 4


def test_cli_no_class_survives(capsys):
    code = main(["generate", "--classes", "numbers", "--exclude", "0123456789"])
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "No characters available" in captured.err


def test_cli_bare_invocation_generates(capsys):
    assert main([]) == 0
    assert len(capsys.readouterr().out.splitlines()[0]) == 12


def test_cli_estimate(capsys):
    assert main(["estimate", "a1!B"]) == 0
    out = capsys.readouterr().out
    assert "Weak (score 4/8)" in out
    assert "Crack time: seconds" in out


def test_cli_estimate_with_pool_size(capsys):
    assert main(["estimate", "abcd", "--pool-size", "26"]) == 0
    assert "Very Weak" in capsys.readouterr().out


def test_cli_unknown_class_is_usage_error(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["generate", "--classes", "emoji"])
    assert exc_info.value.code == 2
    assert "Unknown character class" in capsys.readouterr().err
