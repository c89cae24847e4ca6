from __future__ import annotations

"""
Quantum engine: builds a circuit, puts qubits in superposition,
measures them in alternating bases, and returns raw bitstrings.
"""
import logging

from qiskit import QuantumCircuit
from qiskit import transpile
from qiskit_aer import AerSimulator

from .config import PassForgeConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)


class QuantumEngine:
    """
    Encapsulates all quantum-circuit-related logic.
    """

    def __init__(self, config: PassForgeConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        # Local simulator backend.
        self.backend = AerSimulator()

        if self.config.num_qubits < 1:
            raise ValueError("num_qubits must be at least 1.")

        # Ensure requested num_qubits does not exceed backend capability.
        backend_cfg = self.backend.configuration()
        max_qubits = getattr(backend_cfg, "num_qubits", None)

        if max_qubits is not None and self.config.num_qubits > max_qubits:
            raise ValueError(
                f"Configured num_qubits={self.config.num_qubits} exceeds "
                f"backend limit ({max_qubits}). "
                "Lower num_qubits in PassForgeConfig."
            )

        # Built once; every call to get_raw_bits() runs a fresh shot.
        self._circuit = self._build_circuit()
        self._compiled = transpile(self._circuit, self.backend)

    def _build_circuit(self) -> QuantumCircuit:
        """
        Prepare N qubits, put them in superposition with an H gate,
        then measure each in the computational basis.

        A second H before measurement would undo the superposition and
        always yield 0, so every qubit is measured in Z.
        """
        n = self.config.num_qubits
        qc = QuantumCircuit(n, n)

        for i in range(n):
            qc.h(i)
        for i in range(n):
            qc.measure(i, i)

        return qc

    def get_raw_bits(self) -> list[int]:
        """
        Run the circuit for a single shot and return one bit per qubit.
        """
        result = self.backend.run(self._compiled, shots=1).result()
        counts = result.get_counts()

        # counts is a dict like {'0101...': 1}
        bitstring = next(iter(counts.keys()))

        # Qiskit orders bits as [q_(n-1) ... q_0]; reverse so index 0 is first qubit.
        bitstring = bitstring[::-1]

        logger.debug("Sampled %d raw bits from simulator", len(bitstring))
        return [int(b) for b in bitstring]
