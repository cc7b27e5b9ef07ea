import numpy as np
import pytest

from qcomposer import gates as g
from qcomposer.errors import UnsupportedGateError


@pytest.mark.parametrize("symbol", g.ELEMENTARY_GATES)
def test_catalog_gates_are_unitary(symbol):
    assert g.is_unitary(g.lookup_gate(symbol))


def test_catalog_entries():
    assert np.allclose(g.X, [[0, 1], [1, 0]])
    assert np.allclose(g.Y, [[0, -1j], [1j, 0]])
    assert np.allclose(g.Z, [[1, 0], [0, -1]])
    assert np.allclose(g.H, np.array([[1, 1], [1, -1]]) / np.sqrt(2))
    assert np.allclose(g.S, [[1, 0], [0, 1j]])
    assert np.allclose(g.T, [[1, 0], [0, (1 + 1j) / np.sqrt(2)]])
    # S = T^2, Z = S^2
    assert np.allclose(g.T @ g.T, g.S)
    assert np.allclose(g.S @ g.S, g.Z)


def test_lookup_is_case_insensitive():
    assert g.lookup_gate(" h ") is g.H


def test_lookup_unknown_symbol_raises():
    with pytest.raises(UnsupportedGateError) as exc:
        g.lookup_gate("RZ")
    assert exc.value.symbol == "RZ"


def test_catalog_is_read_only():
    with pytest.raises(ValueError):
        g.X[0, 0] = 1


def test_is_unitary_rejects_non_unitary():
    assert not g.is_unitary(np.array([[1, 1], [0, 1]]))
    assert not g.is_unitary(np.ones((2, 3)))
