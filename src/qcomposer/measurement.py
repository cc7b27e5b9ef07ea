from __future__ import annotations

import math
from typing import Optional

import numpy as np

from .amplitude import format_complex, magnitude, magnitude_squared
from .state import num_qubits_for, validate_state


def bitstring(index: int, num_qubits: int) -> str:
    """Basis index as a bitstring, qubit 0 leftmost."""
    return format(index, f"0{num_qubits}b")


def probabilities(state: np.ndarray, num_qubits: int) -> dict[str, float]:
    """
    Exact measurement probabilities for every basis state, keyed by bitstring.
    No sampling and no collapse.
    """
    validate_state(state, num_qubits)
    return {
        bitstring(i, num_qubits): magnitude_squared(amp)
        for i, amp in enumerate(state)
    }


def total_probability(probs: dict[str, float]) -> float:
    return float(math.fsum(probs.values()))


def format_state(state: np.ndarray, precision: int = 2) -> str:
    """
    Sum-of-kets rendering, e.g. (0.71)|00⟩ + (0.71)|11⟩.
    Terms whose amplitude rounds to (0) are left out.
    """
    n = num_qubits_for(state)
    terms = []
    for i, amp in enumerate(state):
        coeff = format_complex(amp, precision)
        if coeff == "(0)":
            continue
        terms.append(f"{coeff}|{bitstring(i, n)}⟩")
    return " + ".join(terms)


def format_state_polar(state: np.ndarray, precision: int = 2) -> str:
    """
    Polar rendering that makes relative phases visible, e.g.
    |0⟩: 0.71e^(i * 0.00°), |1⟩: 0.71e^(i * 45.00°)
    """
    n = num_qubits_for(state)
    terms = []
    for i, amp in enumerate(state):
        mag = round(magnitude(amp), precision)
        if mag == 0:
            continue
        phase = math.degrees(math.atan2(complex(amp).imag, complex(amp).real))
        if round(phase, precision) == 0:
            phase = 0.0  # no "-0.00°"
        terms.append(f"|{bitstring(i, n)}⟩: {mag:.{precision}f}e^(i * {phase:.{precision}f}°)")
    return ", ".join(terms)


_SQRT2_INV = 1 / math.sqrt(2)


def _approx_coeff(x: float, tol: float) -> str:
    if abs(abs(x) - _SQRT2_INV) < tol:
        return "1/√2" if x > 0 else "-1/√2"
    if abs(x) < tol:
        return "0"
    return f"{x:.2f}"


def format_state_approximate(state: np.ndarray, tol: float = 1e-10) -> str:
    """
    Compact rendering with the basis index in decimal and ±1/√2 recognised,
    e.g. 1/√2|0⟩ + 1/√2|3⟩. Returns "0" for the zero vector.
    """
    terms = []
    for i, amp in enumerate(np.asarray(state, dtype=complex)):
        re, im = float(amp.real), float(amp.imag)
        coeff = _approx_coeff(re, tol)

        if abs(im) > tol:
            im_str = "1/√2" if abs(abs(im) - _SQRT2_INV) < tol else f"{abs(im):.2f}"
            if coeff == "0":
                coeff = ("-" if im < 0 else "") + im_str + "i"
            else:
                coeff += ("-" if im < 0 else "+") + im_str + "i"

        if coeff != "0":
            terms.append(f"{coeff}|{i}⟩")

    return " + ".join(terms) if terms else "0"


def describe(state: np.ndarray, num_qubits: int, tol: float = 1e-12, max_terms: Optional[int] = 32) -> str:
    """
    State as a list of basis kets sorted by probability.

    Args:
      tol: ignore amplitudes with |amp| < tol
      max_terms: limit number of listed terms (None for no limit)
    """
    validate_state(state, num_qubits)

    terms = []
    for i, amp in enumerate(state):
        if magnitude(amp) < tol:
            continue
        terms.append((i, complex(amp), magnitude_squared(amp), bitstring(i, num_qubits)))

    terms.sort(key=lambda t: t[2], reverse=True)

    if max_terms is not None:
        terms = terms[:max_terms]

    lines = [f"{num_qubits}-qubit state |ψ⟩ with {len(terms)} shown term(s):"]
    for _, a, prob, ket in terms:
        lines.append(f"  {a.real:+.6f}{a.imag:+.6f}j  |{ket}⟩   P={prob:.6f}")
    return "\n".join(lines)
