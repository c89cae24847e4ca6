"""
Configuration for the PassForge password generator.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace


@dataclass
class PassForgeConfig:
    # Bounds applied to every requested password length.
    min_length: int = 4
    max_length: int = 128

    # Length shown when the GUI starts or the CLI gets no --length.
    default_length: int = 12

    # Brute-force attacker speed used by the crack-time estimate.
    guesses_per_second: float = 1e12

    # GUI timings (milliseconds).
    debounce_ms: int = 300
    copy_feedback_ms: int = 2000
    clipboard_clear_ms: int = 15000

    # "system" (OS CSPRNG) or "quantum" (simulated qubits).
    random_source: str = "system"

    # Quantum source only: qubits per circuit run and SHA-256 mixing rounds.
    # NOTE: Keep num_qubits <= backend limit (often 20-29 for local simulators).
    num_qubits: int = 20
    entropy_rounds: int = 2

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "PassForgeConfig":
        """
        Build a config from defaults overlaid with PASSFORGE_<FIELD> variables,
        e.g. PASSFORGE_DEFAULT_LENGTH=20 or PASSFORGE_RANDOM_SOURCE=quantum.
        """
        env = os.environ if environ is None else environ
        base = cls()
        overrides: dict[str, object] = {}

        for f in fields(cls):
            raw = env.get(f"PASSFORGE_{f.name.upper()}")
            if raw is None:
                continue
            default = getattr(base, f.name)
            try:
                overrides[f.name] = type(default)(raw)
            except ValueError:
                raise ValueError(
                    f"Invalid value for PASSFORGE_{f.name.upper()}: {raw!r}"
                ) from None

        return replace(base, **overrides)


# Default configuration instance you can import elsewhere
DEFAULT_CONFIG = PassForgeConfig()
