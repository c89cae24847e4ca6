"""
Randomness sources for password synthesis.

Every source exposes randbelow(n) -> int, uniform over [0, n).
The quantum source turns qubit measurements into an amplified bit pool
and draws indices from it by rejection sampling.
"""

from __future__ import annotations

import hashlib
import logging
import random
import secrets
from typing import Callable, List, Protocol

from .config import PassForgeConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def randbelow(self, n: int) -> int: ...


def bits_to_bytes(bits: List[int]) -> bytes:
    """
    Pack a list of bits [0,1,1,0,...] into bytes (8 bits per byte).
    If bits length is not a multiple of 8, pad with zeros at the end.
    """
    if not bits:
        return b""

    pad_len = (8 - (len(bits) % 8)) % 8
    bits_padded = bits + [0] * pad_len

    byte_values = []
    for i in range(0, len(bits_padded), 8):
        byte = 0
        for bit in bits_padded[i : i + 8]:
            byte = (byte << 1) | bit
        byte_values.append(byte)

    return bytes(byte_values)


def bytes_to_bits(data: bytes) -> List[int]:
    """
    Convert bytes back into a list of bits (0/1), MSB first.
    """
    out_bits: List[int] = []
    for byte in data:
        for i in range(8):
            out_bits.append((byte >> (7 - i)) & 1)
    return out_bits


def amplify_entropy(bits: List[int], rounds: int = 1) -> List[int]:
    """
    Apply SHA-256 `rounds` times to mix a raw bitstream.

    With rounds >= 1 the output is always 256 bits, however short the input.
    """
    if rounds <= 0:
        return bits

    data = bits_to_bytes(bits)
    for _ in range(rounds):
        data = hashlib.sha256(data).digest()

    return bytes_to_bits(data)


class SystemRandomSource:
    """Operating-system CSPRNG via the secrets module."""

    def randbelow(self, n: int) -> int:
        return secrets.randbelow(n)


class SeededRandomSource:
    """
    Reproducible Mersenne Twister stream. Not suitable for real passwords.
    """

    def __init__(self, seed: int) -> None:
        self._random = random.Random(seed)

    def randbelow(self, n: int) -> int:
        return self._random.randrange(n)


class QuantumRandomSource:
    """
    Draw indices from bits measured on a simulated quantum circuit.

    `bit_provider` returns one batch of raw bits per call; by default it is a
    QuantumEngine built from the config. Tests can inject any callable.
    """

    def __init__(
        self,
        config: PassForgeConfig | None = None,
        bit_provider: Callable[[], List[int]] | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        if bit_provider is None:
            # Imported here so qiskit is only loaded when this source is used.
            from .quantum_engine import QuantumEngine

            bit_provider = QuantumEngine(self.config).get_raw_bits
        self._bit_provider = bit_provider
        self._pool: list[int] = []

    def _refill(self) -> None:
        raw_bits = self._bit_provider()
        if not raw_bits:
            raise ValueError("Quantum bit provider returned no bits.")
        self._pool.extend(amplify_entropy(raw_bits, self.config.entropy_rounds))
        logger.debug("Quantum bit pool refilled to %d bits", len(self._pool))

    def _take_bits(self, count: int) -> int:
        while len(self._pool) < count:
            self._refill()
        chunk, self._pool = self._pool[:count], self._pool[count:]

        value = 0
        for bit in chunk:
            value = (value << 1) | bit
        return value

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError("randbelow() requires a positive bound")
        if n == 1:
            return 0

        # Reject values >= n instead of reducing modulo n to avoid bias.
        width = (n - 1).bit_length()
        while True:
            value = self._take_bits(width)
            if value < n:
                return value


def make_random_source(
    name: str | None = None,
    config: PassForgeConfig | None = None,
    seed: int | None = None,
) -> RandomSource:
    """
    Build a random source by name ("system" or "quantum").
    A seed always selects the reproducible source.
    """
    cfg = config or DEFAULT_CONFIG
    if seed is not None:
        logger.warning("Using seeded random source; output is reproducible")
        return SeededRandomSource(seed)

    name = (name or cfg.random_source).lower()
    if name == "system":
        return SystemRandomSource()
    if name == "quantum":
        return QuantumRandomSource(cfg)
    raise ValueError(f"Unknown random source {name!r} (expected 'system' or 'quantum')")
