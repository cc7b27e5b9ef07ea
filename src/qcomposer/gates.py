import numpy as np

from .errors import UnsupportedGateError


def _frozen(m: np.ndarray) -> np.ndarray:
    m.setflags(write=False)
    return m


## 1 qubit gates

I = _frozen(np.array([
    [1, 0],
    [0, 1],
], dtype=complex))

X = _frozen(np.array([
    [0, 1],
    [1, 0],
], dtype=complex))

Y = _frozen(np.array([
    [0, -1j],
    [1j, 0],
], dtype=complex))

Z = _frozen(np.array([
    [1, 0],
    [0, -1],
], dtype=complex))

H = _frozen((1 / np.sqrt(2)) * np.array([
    [1, 1],
    [1, -1],
], dtype=complex))

S = _frozen(np.array([
    [1, 0],
    [0, 1j],
], dtype=complex))

T = _frozen(np.array([
    [1, 0],
    [0, np.exp(1j * np.pi / 4)],
], dtype=complex))


ELEMENTARY_GATES = ("X", "Y", "Z", "H", "S", "T")

GATE_MAP = {
    "X": X,
    "Y": Y,
    "Z": Z,
    "H": H,
    "S": S,
    "T": T,
}


def lookup_gate(symbol: str) -> np.ndarray:
    """Return the 2x2 matrix for an elementary gate symbol (case-insensitive)."""
    key = str(symbol).strip().upper()
    try:
        return GATE_MAP[key]
    except KeyError:
        raise UnsupportedGateError(symbol) from None


def is_unitary(M, atol: float = 1e-10) -> bool:
    M = np.asarray(M, dtype=complex)
    if M.ndim != 2 or M.shape[0] != M.shape[1]:
        return False
    return bool(np.allclose(M @ M.conj().T, np.eye(M.shape[0]), atol=atol))


## reference multi-qubit gates (qubit 0 = most significant bit)

CNOT = _frozen(np.array([
    [1,0,0,0],
    [0,1,0,0],
    [0,0,0,1],
    [0,0,1,0],
], dtype=complex))

CZ = _frozen(np.array([
    [1,0,0,0],
    [0,1,0,0],
    [0,0,1,0],
    [0,0,0,-1],
], dtype=complex))

TOF = _frozen(np.array([
    [1,0,0,0,0,0,0,0],
    [0,1,0,0,0,0,0,0],
    [0,0,1,0,0,0,0,0],
    [0,0,0,1,0,0,0,0],
    [0,0,0,0,1,0,0,0],
    [0,0,0,0,0,1,0,0],
    [0,0,0,0,0,0,0,1],
    [0,0,0,0,0,0,1,0],
], dtype=complex))
