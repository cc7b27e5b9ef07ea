from __future__ import annotations

from itertools import product
from typing import Sequence

import numpy as np

from .amplitude import is_zero, multiply
from .errors import MalformedGateError


def is_off_diagonal(U) -> bool:
    """True when U only ever flips its qubit (both diagonal entries are zero), e.g. X and Y."""
    U = np.asarray(U, dtype=complex)
    return U[0, 0] == 0 and U[1, 1] == 0


def _bit_mask(qubits: Sequence[int], num_qubits: int) -> int:
    mask = 0
    for q in qubits:
        mask |= 1 << (num_qubits - 1 - q)
    return mask


def _check_wires(controls, targets, num_qubits: int) -> None:
    if len(controls) == 0:
        raise MalformedGateError("controlled gate needs at least one control")
    if len(targets) == 0:
        raise MalformedGateError("controlled gate needs at least one target")

    for q in list(controls) + list(targets):
        if q < 0 or q >= num_qubits:
            raise MalformedGateError(f"wire {q} out of range for num_qubits={num_qubits}")

    if len(set(controls)) != len(controls) or len(set(targets)) != len(targets):
        raise MalformedGateError(f"duplicate wires in controls={controls} targets={targets}")

    overlap = set(controls) & set(targets)
    if overlap:
        raise MalformedGateError(f"wires {sorted(overlap)} cannot be both control and target")


def _flip_walk(src: int, target_bits: list[int], U: np.ndarray) -> tuple[int, complex]:
    # U maps |b> -> U[1-b][b] |1-b> for every target
    dest = src
    amp = 1 + 0j
    for bit in target_bits:
        b = 1 if dest & bit else 0
        u_amp = U[1 - b, b]
        if not is_zero(u_amp):
            dest ^= bit
        amp = multiply(amp, u_amp)
    return dest, amp


def build_multi_controlled_u_matrix(
    controls: Sequence[int],
    targets: Sequence[int],
    U,
    num_qubits: int,
) -> np.ndarray:
    """
    Full 2**n x 2**n unitary that applies the 2x2 operator U to every wire in
    `targets` when every wire in `controls` reads 1, identity otherwise.

    Generalises CNOT / Toffoli (U = X) to any base operator and any number of
    controls and targets. Wire numbers are absolute, qubit 0 is the most
    significant bit.

    For each source basis index `src` with the controls satisfied, column
    `src` holds U applied to each target bit of `src` independently, i.e.
    U (x) ... (x) U on the target subspace. When U is off-diagonal (X, Y)
    only the fully flipped destination survives and the column is filled by
    walking the targets and flipping each bit.
    """
    U = np.asarray(U, dtype=complex)
    if U.shape != (2, 2):
        raise ValueError(f"U must be a 2x2 matrix, got shape {U.shape}")

    controls = [int(q) for q in controls]
    targets = [int(q) for q in targets]
    _check_wires(controls, targets, num_qubits)

    n = num_qubits
    dim = 2 ** n
    control_mask = _bit_mask(controls, n)
    target_bits = [1 << (n - 1 - q) for q in targets]
    flip_only = is_off_diagonal(U)

    M = np.zeros((dim, dim), dtype=complex)

    for src in range(dim):
        if (src & control_mask) != control_mask:
            M[src, src] = 1.0
            continue

        if flip_only:
            dest, amp = _flip_walk(src, target_bits, U)
            if not is_zero(amp):
                M[dest, src] = amp
            continue

        in_bits = [1 if src & bit else 0 for bit in target_bits]
        for out_bits in product((0, 1), repeat=len(target_bits)):
            dest = src
            amp = 1 + 0j
            for bit, b_in, b_out in zip(target_bits, in_bits, out_bits):
                amp = multiply(amp, U[b_out, b_in])
                if is_zero(amp):
                    break
                if b_out != b_in:
                    dest ^= bit
            if not is_zero(amp):
                M[dest, src] = amp

    return M
