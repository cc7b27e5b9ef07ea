import numpy as np

from .errors import DimensionMismatchError


def apply_matrix(M, state) -> np.ndarray:
    """
    Return M @ state as a new statevector: result[i] = sum_j M[i][j] * state[j].

    Every gate application during a run goes through here.
    """
    M = np.asarray(M, dtype=complex)
    state = np.asarray(state, dtype=complex)

    if state.ndim != 1:
        raise DimensionMismatchError(f"state must be 1-D, got shape {state.shape}")

    dim = state.shape[0]
    if M.ndim != 2 or M.shape != (dim, dim):
        raise DimensionMismatchError(
            f"matrix shape must be {(dim, dim)} to act on a state of length {dim}, got {M.shape}"
        )

    return M @ state


def tensor_product(s1, s2) -> np.ndarray:
    """
    Kronecker product of two statevectors. Entry i*len(s2)+j is s1[i]*s2[j],
    so the first factor ends up in the most significant bits.
    """
    s1 = np.asarray(s1, dtype=complex).reshape(-1)
    s2 = np.asarray(s2, dtype=complex).reshape(-1)
    return np.kron(s1, s2)
