from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .state import validate_state


@dataclass(frozen=True)
class BlochVector:
    qubit: int
    x: float
    y: float
    z: float
    magnitude: float  # < 1 means the qubit is mixed, e.g. entangled with the rest


def bloch_vector(state: np.ndarray, num_qubits: int, qubit: int) -> BlochVector:
    """
    Bloch vector of one qubit's reduced state.

    Sums over index pairs (i, i | mask) with the qubit's bit clear:
      x = 2 Re(sum conj(a0) a1), y = 2 Im(sum conj(a0) a1), z = p0 - p1
    """
    validate_state(state, num_qubits)
    if qubit < 0 or qubit >= num_qubits:
        raise ValueError(f"qubit must be in [0, {num_qubits - 1}], got {qubit}")

    psi = np.asarray(state, dtype=complex)
    mask = 1 << (num_qubits - 1 - qubit)

    idx = np.arange(len(psi))
    zeros = idx[(idx & mask) == 0]
    a0 = psi[zeros]
    a1 = psi[zeros | mask]

    cross = np.sum(np.conjugate(a0) * a1)
    p0 = float(np.sum(np.abs(a0) ** 2))
    p1 = float(np.sum(np.abs(a1) ** 2))

    x = 2.0 * float(np.real(cross))
    y = 2.0 * float(np.imag(cross))
    z = p0 - p1
    mag = min(1.0, max(0.0, math.sqrt(x * x + y * y + z * z)))

    return BlochVector(qubit=qubit, x=x, y=y, z=z, magnitude=mag)


def bloch_vectors(state: np.ndarray, num_qubits: int) -> list[BlochVector]:
    return [bloch_vector(state, num_qubits, q) for q in range(num_qubits)]


def overall_bloch_vector(vectors: Sequence[BlochVector]) -> BlochVector:
    """Average of per-qubit vectors; |0> (z=1) when there are none. qubit is -1."""
    if not vectors:
        return BlochVector(qubit=-1, x=0.0, y=0.0, z=1.0, magnitude=1.0)

    n = len(vectors)
    x = sum(v.x for v in vectors) / n
    y = sum(v.y for v in vectors) / n
    z = sum(v.z for v in vectors) / n
    mag = min(1.0, math.sqrt(x * x + y * y + z * z))
    return BlochVector(qubit=-1, x=x, y=y, z=z, magnitude=mag)
