"""
Command-line interface and high-level generator function.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from typing import Sequence

from .charsets import (
    ALL_CLASSES,
    CharacterClass,
    UnknownCharacterClassError,
    build_effective_alphabet,
    flatten_alphabet,
    parse_classes,
)
from .config import PassForgeConfig
from .entropy import RandomSource, make_random_source
from .logger import setup_logger
from .strength import StrengthAssessment, estimate
from .synth import clamp_length, synthesize

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_ALPHABET = 1


@dataclass
class Constraints:
    """
    One snapshot of the user's choices. Rebuilt on every change.
    """
    enabled_classes: frozenset[CharacterClass] = field(default=ALL_CLASSES)
    excluded_chars: str = ""
    length: int = 12


@dataclass
class GenerationResult:
    """
    Full result of one password generation.
    """
    # Final password ("" when no class survived filtering)
    password: str

    # Per-class characters that were actually available
    effective_alphabet: dict[CharacterClass, str]
    alphabet_size: int

    assessment: StrengthAssessment
    constraints: Constraints

    @property
    def ok(self) -> bool:
        return bool(self.password)


def generate_password_with_meta(
    constraints: Constraints | None = None,
    config: PassForgeConfig | None = None,
    rng: RandomSource | None = None,
) -> GenerationResult:
    """
    High-level generation pipeline with metadata:

    - Build the effective alphabet from classes and exclusions.
    - Synthesize a password covering every active class.
    - Estimate its strength against the flat alphabet size.
    """
    cfg = config or PassForgeConfig()
    cons = constraints or Constraints(length=cfg.default_length)
    rng = rng or make_random_source(config=cfg)

    effective = build_effective_alphabet(cons.enabled_classes, cons.excluded_chars)
    alphabet_size = len(flatten_alphabet(effective))

    if not effective:
        logger.warning("No character class left after exclusions; nothing generated")

    password = synthesize(
        effective,
        cons.length,
        rng=rng,
        min_length=cfg.min_length,
        max_length=cfg.max_length,
    )
    assessment = estimate(password, alphabet_size, cfg.guesses_per_second)

    return GenerationResult(
        password=password,
        effective_alphabet=effective,
        alphabet_size=alphabet_size,
        assessment=assessment,
        constraints=cons,
    )


def generate_password(
    constraints: Constraints | None = None,
    config: PassForgeConfig | None = None,
) -> str:
    """
    High-level function returning only the password.
    """
    return generate_password_with_meta(constraints, config).password


# ---------- argparse front end ----------

def _classes_arg(text: str) -> frozenset[CharacterClass]:
    try:
        return frozenset(parse_classes(text))
    except UnknownCharacterClassError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _add_constraint_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--classes",
        type=_classes_arg,
        default=ALL_CLASSES,
        help="comma-separated classes: upper,lower,numbers,symbols (default: all)",
    )
    parser.add_argument(
        "--exclude",
        default="",
        help="characters that must never appear, e.g. \"0O1l\"",
    )


def build_parser(config: PassForgeConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="passforge",
        description="Generate passwords and estimate their brute-force resistance.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser("generate", help="generate a new password")
    gen.add_argument(
        "--length",
        default=config.default_length,
        help=f"password length, clamped to {config.min_length}-{config.max_length}",
    )
    _add_constraint_args(gen)
    gen.add_argument(
        "--source",
        choices=("system", "quantum"),
        default=None,
        help=f"randomness source (default: {config.random_source})",
    )
    gen.add_argument("--seed", type=int, default=None, help="reproducible output (testing only)")

    est = sub.add_parser("estimate", help="estimate the strength of a password")
    est.add_argument("password")
    _add_constraint_args(est)
    est.add_argument(
        "--pool-size",
        type=int,
        default=None,
        help="alphabet size to assume instead of deriving it from --classes/--exclude",
    )

    return parser


def _print_assessment(assessment: StrengthAssessment) -> None:
    print(f"Strength:   {assessment.label} (score {assessment.score}/8)")
    print(f"Crack time: {assessment.time_label}")


def _run_generate(args: argparse.Namespace, config: PassForgeConfig) -> int:
    constraints = Constraints(
        enabled_classes=frozenset(args.classes),
        excluded_chars=args.exclude,
        length=clamp_length(args.length, config.min_length, config.max_length),
    )
    rng = make_random_source(args.source, config, seed=args.seed)
    result = generate_password_with_meta(constraints, config, rng)

    if not result.ok:
        print("No characters available: every selected class was excluded.", file=sys.stderr)
        return EXIT_NO_ALPHABET

    print(result.password)
    _print_assessment(result.assessment)
    return EXIT_OK


def _run_estimate(args: argparse.Namespace, config: PassForgeConfig) -> int:
    if args.pool_size is not None:
        pool_size = args.pool_size
    else:
        effective = build_effective_alphabet(args.classes, args.exclude)
        if not effective:
            print("No characters available: every selected class was excluded.", file=sys.stderr)
            return EXIT_NO_ALPHABET
        pool_size = len(flatten_alphabet(effective))

    _print_assessment(estimate(args.password, pool_size, config.guesses_per_second))
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """
    Entry point for `passforge`, `python -m passforge` or `run_passforge.py`.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    config = PassForgeConfig.from_env()
    parser = build_parser(config)
    args = parser.parse_args(argv)
    setup_logger(verbose=args.verbose)

    if args.command is None:
        # Bare invocation: generate with defaults.
        args = parser.parse_args([*argv, "generate"])

    if args.command == "estimate":
        return _run_estimate(args, config)
    return _run_generate(args, config)
