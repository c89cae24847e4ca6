"""
PassForge: constrained password generator with brute-force strength estimates.
"""

from .charsets import CharacterClass, build_effective_alphabet, flatten_alphabet
from .cli import Constraints, generate_password, generate_password_with_meta
from .config import PassForgeConfig, DEFAULT_CONFIG
from .sanitize import sanitize
from .strength import StrengthAssessment, Tier, estimate
from .synth import synthesize

__all__ = [
    "CharacterClass",
    "Constraints",
    "DEFAULT_CONFIG",
    "PassForgeConfig",
    "StrengthAssessment",
    "Tier",
    "build_effective_alphabet",
    "estimate",
    "flatten_alphabet",
    "generate_password",
    "generate_password_with_meta",
    "sanitize",
    "synthesize",
]
