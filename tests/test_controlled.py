import numpy as np
import pytest

from qcomposer import gates as g
from qcomposer.controlled import build_multi_controlled_u_matrix, is_off_diagonal
from qcomposer.embedding import expand_single_qubit_gate
from qcomposer.errors import MalformedGateError
from qcomposer.state import basis_state


def _reference(controls, targets, U, n):
    # (I - P) + (U on every target) P, P = projector onto "all controls are 1"
    dim = 2 ** n
    mask = 0
    for q in controls:
        mask |= 1 << (n - 1 - q)
    P = np.diag([1.0 if (i & mask) == mask else 0.0 for i in range(dim)]).astype(complex)

    Ut = np.eye(dim, dtype=complex)
    for t in targets:
        Ut = expand_single_qubit_gate(U, t, n) @ Ut

    return (np.eye(dim) - P) + Ut @ P


def test_cnot_matches_reference_matrix():
    assert np.allclose(build_multi_controlled_u_matrix([0], [1], g.X, 2), g.CNOT)


def test_cz_matches_reference_matrix():
    assert np.allclose(build_multi_controlled_u_matrix([0], [1], g.Z, 2), g.CZ)


def test_toffoli_matches_reference_matrix():
    assert np.allclose(build_multi_controlled_u_matrix([0, 1], [2], g.X, 3), g.TOF)


def test_reversed_cnot():
    # control wire 1, target wire 0: |01> -> |11>
    M = build_multi_controlled_u_matrix([1], [0], g.X, 2)
    assert np.allclose(M @ basis_state(1, 2), basis_state(3, 2))
    assert np.allclose(M @ basis_state(2, 2), basis_state(2, 2))


def test_controlled_y_phase():
    # Y|0> = i|1>, so CY|10> = i|11>
    M = build_multi_controlled_u_matrix([0], [1], g.Y, 2)
    out = M @ basis_state(2, 2)
    assert np.isclose(out[3], 1j)


def test_multi_target_x_flips_every_target():
    M = build_multi_controlled_u_matrix([0], [1, 2], g.X, 3)
    assert np.allclose(M @ basis_state(4, 3), basis_state(7, 3))
    assert np.allclose(M @ basis_state(0, 3), basis_state(0, 3))


def test_three_controls_flip_only_when_all_set():
    M = build_multi_controlled_u_matrix([0, 1, 2], [3], g.X, 4)
    for src in range(16):
        expected = src ^ 1 if (src & 0b1110) == 0b1110 else src
        assert np.allclose(M @ basis_state(src, 4), basis_state(expected, 4))


def test_is_off_diagonal():
    assert is_off_diagonal(g.X)
    assert is_off_diagonal(g.Y)
    for U in (g.Z, g.H, g.S, g.T):
        assert not is_off_diagonal(U)


@pytest.mark.parametrize("symbol", g.ELEMENTARY_GATES)
def test_random_subsets_are_unitary_and_match_reference(symbol):
    U = g.lookup_gate(symbol)
    rng = np.random.default_rng(2024)

    for n in (2, 3, 4):
        for _ in range(8):
            wires = [int(w) for w in rng.permutation(n)]
            k = int(rng.integers(1, n))
            m = int(rng.integers(1, n - k + 1))
            controls, targets = wires[:k], wires[k:k + m]

            M = build_multi_controlled_u_matrix(controls, targets, U, n)
            assert g.is_unitary(M), (symbol, controls, targets)
            assert np.allclose(M, _reference(controls, targets, U, n)), (symbol, controls, targets)


@pytest.mark.parametrize("controls, targets", [
    ([], [1]),
    ([0], []),
    ([0], [0]),
    ([0, 0], [1]),
    ([0], [5]),
    ([-1], [1]),
])
def test_malformed_wire_sets_are_rejected(controls, targets):
    with pytest.raises(MalformedGateError):
        build_multi_controlled_u_matrix(controls, targets, g.X, 3)
