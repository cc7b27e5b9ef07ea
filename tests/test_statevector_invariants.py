import numpy as np
import pytest

from qcomposer.circuit import Circuit, ghz, random_circuit
from qcomposer.simulator import run_statevector, simulate


def test_empty_circuit_is_zero_state():
    c = Circuit(3)
    psi = run_statevector(c)
    assert psi.shape == (8,)
    assert np.allclose(psi, np.array([1, 0, 0, 0, 0, 0, 0, 0], dtype=complex))


@pytest.mark.parametrize("n", [1, 2, 3, 5])
def test_empty_circuit_puts_all_mass_on_zero_bitstring(n):
    probs = simulate(Circuit(n)).probabilities
    assert len(probs) == 2 ** n
    assert probs["0" * n] == 1.0
    assert all(p == 0.0 for k, p in probs.items() if k != "0" * n)


def test_x_on_qubit0_flips_msb():
    # qubit 0 is the most significant bit: |100> is index 4 for 3 qubits
    c = Circuit(3)
    c.x(0)
    psi = run_statevector(c)

    expected = np.zeros(8, dtype=complex)
    expected[4] = 1.0
    assert np.allclose(psi, expected)


def test_h_on_single_qubit_gives_half_half_probs():
    c = Circuit(1)
    c.h(0)
    psi = run_statevector(c)

    probs = np.abs(psi) ** 2
    assert np.allclose(probs.sum(), 1.0)
    assert np.allclose(probs, np.array([0.5, 0.5], dtype=float), atol=1e-12)


def test_bell_state_support_only_00_11():
    c = Circuit(2)
    c.h(0)
    c.cx(0, 1)

    psi = run_statevector(c)

    probs = np.abs(psi) ** 2
    assert np.allclose(probs.sum(), 1.0)

    # Bell = (|00> + |11>)/sqrt(2) => indices 0 and 3 only
    assert np.isclose(probs[0], 0.5, atol=1e-12)
    assert np.isclose(probs[3], 0.5, atol=1e-12)
    assert np.isclose(probs[1], 0.0, atol=1e-12)
    assert np.isclose(probs[2], 0.0, atol=1e-12)


def test_toffoli_deterministic_mapping_110_to_111():
    c = Circuit(3)
    c.x(0)
    c.x(1)           # prepares |110>
    c.ccx(0, 1, 2)   # flips qubit 2 iff q0=q1=1 => |111>

    psi = run_statevector(c)

    expected = np.zeros(8, dtype=complex)
    expected[7] = 1.0  # |111> is index 7
    assert np.allclose(psi, expected)


def test_ghz_amplitudes():
    psi = run_statevector(ghz(4))
    assert np.isclose(abs(psi[0]), 1 / np.sqrt(2))
    assert np.isclose(abs(psi[15]), 1 / np.sqrt(2))
    assert np.isclose(np.sum(np.abs(psi[1:15]) ** 2), 0.0)


@pytest.mark.parametrize("seed", range(12))
def test_random_circuits_stay_normalised(seed):
    c = random_circuit(seed, num_qubits=4, depth=6)
    result = simulate(c)
    assert result.ok
    assert np.isclose(sum(result.probabilities.values()), 1.0, atol=1e-9)
    assert all(0.0 <= p <= 1.0 + 1e-12 for p in result.probabilities.values())
