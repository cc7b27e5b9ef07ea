import numpy as np

from .errors import DimensionMismatchError, QubitCountError


def basis_state(index: int, num_qubits: int) -> np.ndarray:
    if num_qubits < 1:
        raise QubitCountError(f"num_qubits must be positive, got {num_qubits}")
    dim = 2 ** num_qubits
    if index < 0 or index >= dim:
        raise ValueError(f"index must be between 0 and {dim-1}, got {index}")

    state = np.zeros(dim, dtype=complex)
    state[index] = 1.0
    return state


def zero_state(num_qubits: int) -> np.ndarray:
    return basis_state(0, num_qubits)


def normalize(state: np.ndarray) -> np.ndarray:
    state = np.asarray(state, dtype=complex)
    norm = np.linalg.norm(state)
    if norm == 0:
        raise ValueError("Cannot normalise zero vector!")
    return state / norm


def validate_state(state, num_qubits: int) -> None:
    state = np.asarray(state)
    dim = 2 ** num_qubits
    if state.ndim != 1 or state.shape[0] != dim:
        raise DimensionMismatchError(
            f"state must have shape ({dim},) for num_qubits={num_qubits}, got {state.shape}"
        )


def copy_state(state) -> np.ndarray:
    return np.array(state, dtype=complex, copy=True)


def num_qubits_for(state) -> int:
    """Infer n from a statevector of length 2**n."""
    dim = len(state)
    n = dim.bit_length() - 1
    if dim < 2 or (1 << n) != dim:
        raise DimensionMismatchError(f"state length must be a power of two >= 2, got {dim}")
    return n
