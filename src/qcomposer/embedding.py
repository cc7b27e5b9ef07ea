import numpy as np


def extend_gate_matrix(U, qubit: int, num_qubits: int) -> np.ndarray:
    """
    Embed a single-qubit operator U acting on `qubit` into the full
    2**num_qubits x 2**num_qubits operator (identity on every other wire).

    M[i][j] = U[bit_i][bit_j] when i and j agree on every bit except the one
    belonging to `qubit`, and 0 otherwise. Qubit 0 is the most significant bit.

    This is a dense O(4**n) construction and is the scaling limit of the
    engine; it is meant for roughly n <= 10.
    """
    U = np.asarray(U, dtype=complex)
    if U.shape != (2, 2):
        raise ValueError(f"U must be a 2x2 matrix, got shape {U.shape}")
    if qubit < 0 or qubit >= num_qubits:
        raise ValueError(f"qubit must be in [0, {num_qubits - 1}], got {qubit}")

    dim = 2 ** num_qubits
    bit_pos = num_qubits - 1 - qubit
    mask = 1 << bit_pos

    idx = np.arange(dim)
    bits = (idx >> bit_pos) & 1
    others = idx & ~mask

    same_elsewhere = others[:, None] == others[None, :]
    M = np.where(same_elsewhere, U[bits[:, None], bits[None, :]], 0.0)
    return M.astype(complex)


def expand_single_qubit_gate(gate, target: int, num_qubits: int) -> np.ndarray:
    """Same operator as extend_gate_matrix, built as I (x) ... (x) U (x) ... (x) I."""
    from .gates import I

    if target < 0 or target >= num_qubits:
        raise ValueError(f"target must be in [0, {num_qubits - 1}], got {target}")

    big_op = None
    for qubit in range(num_qubits):
        op = np.asarray(gate, dtype=complex) if qubit == target else I
        big_op = op if big_op is None else np.kron(big_op, op)

    return big_op
