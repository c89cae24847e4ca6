"""Tests for randomness sources and bit helpers."""

import itertools
from collections import Counter

import pytest

from passforge.config import PassForgeConfig
from passforge.entropy import (
    QuantumRandomSource,
    SeededRandomSource,
    SystemRandomSource,
    amplify_entropy,
    bits_to_bytes,
    bytes_to_bits,
    make_random_source,
)


def test_bits_to_bytes_pads_with_zeros():
    assert bits_to_bytes([1, 0, 1]) == bytes([0b10100000])
    assert bits_to_bytes([]) == b""
    assert bytes_to_bits(b"\x81") == [1, 0, 0, 0, 0, 0, 0, 1]


def test_amplify_entropy_produces_256_bits():
    assert len(amplify_entropy([1, 0, 1, 1], rounds=2)) == 256
    assert amplify_entropy([1, 0], rounds=0) == [1, 0]


@pytest.mark.parametrize("source", [SystemRandomSource(), SeededRandomSource(1)])
def test_sources_stay_in_range(source):
    for n in (1, 2, 7, 88):
        assert all(0 <= source.randbelow(n) < n for _ in range(200))


def _counting_provider():
    counter = itertools.count()

    def provide():
        value = next(counter)
        return [(value >> i) & 1 for i in range(20)]

    return provide


def test_quantum_source_uses_injected_bits():
    config = PassForgeConfig(entropy_rounds=1)
    source = QuantumRandomSource(config, bit_provider=_counting_provider())

    draws = [source.randbelow(88) for _ in range(2000)]
    assert all(0 <= d < 88 for d in draws)
    # Every value should turn up with a roughly even spread.
    counts = Counter(draws)
    assert len(counts) == 88


def test_quantum_source_without_amplification_reads_raw_bits():
    config = PassForgeConfig(entropy_rounds=0)
    source = QuantumRandomSource(config, bit_provider=lambda: [1, 0, 1, 1])
    # n=6 needs 3 bits per draw; the first three are 101.
    assert source.randbelow(6) == 5
    assert source.randbelow(1) == 0


def test_quantum_source_rejects_empty_provider():
    source = QuantumRandomSource(PassForgeConfig(), bit_provider=lambda: [])
    with pytest.raises(ValueError):
        source.randbelow(10)


def test_make_random_source():
    assert isinstance(make_random_source("system"), SystemRandomSource)
    assert isinstance(make_random_source("quantum", seed=5), SeededRandomSource)
    with pytest.raises(ValueError, match="Unknown random source"):
        make_random_source("dice")


def test_quantum_engine_bits():
    pytest.importorskip("qiskit_aer")
    from passforge.quantum_engine import QuantumEngine

    engine = QuantumEngine(PassForgeConfig(num_qubits=8))
    bits = engine.get_raw_bits()
    assert len(bits) == 8
    assert set(bits) <= {0, 1}

    source = make_random_source("quantum", PassForgeConfig(num_qubits=8))
    assert 0 <= source.randbelow(88) < 88


def test_quantum_engine_rejects_zero_qubits():
    pytest.importorskip("qiskit_aer")
    from passforge.quantum_engine import QuantumEngine

    with pytest.raises(ValueError):
        QuantumEngine(PassForgeConfig(num_qubits=0))
