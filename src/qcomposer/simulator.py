from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .apply import apply_matrix
from .circuit import Circuit, ControlledGate, ElementaryGate
from .config import DEFAULT_OPTIONS, SimulatorOptions
from .controlled import build_multi_controlled_u_matrix
from .embedding import extend_gate_matrix
from .errors import (
    MalformedGateError,
    NormDriftError,
    QubitCountError,
    UnsupportedGateError,
)
from .gates import lookup_gate
from .measurement import format_state, format_state_polar, probabilities
from .state import zero_state

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """A gate that was skipped (treated as identity) and why."""
    gate: object
    reason: str


@dataclass(frozen=True, eq=False)
class SimulationResult:
    probabilities: dict
    state: np.ndarray
    formatted_state: Optional[str] = None
    formatted_state_polar: Optional[str] = None
    diagnostics: tuple = field(default_factory=tuple)

    @property
    def num_qubits(self) -> int:
        return len(next(iter(self.probabilities)))

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def as_dict(self) -> dict:
        out = {"probabilities": dict(self.probabilities)}
        if self.formatted_state is not None:
            out["formattedState"] = self.formatted_state
        if self.formatted_state_polar is not None:
            out["formattedStatePolar"] = self.formatted_state_polar
        return out


class _Run:
    """Per-call bookkeeping: options and the diagnostics of skipped gates."""

    def __init__(self, options: SimulatorOptions):
        self.options = options
        self.diagnostics: list[Diagnostic] = []

    def skip(self, gate, err: Exception) -> None:
        if self.options.strict:
            raise err
        logger.warning("skipping gate %r: %s", gate, err)
        self.diagnostics.append(Diagnostic(gate=gate, reason=str(err)))


def group_by_column(gates) -> list[tuple[int, list]]:
    """[(column, [gates...]), ...] in increasing column order, insertion order within a column."""
    columns: dict[int, list] = {}
    for g in gates:
        columns.setdefault(int(g.column), []).append(g)
    return sorted(columns.items())


def _check_wire(q: int, num_qubits: int) -> None:
    if q < 0 or q >= num_qubits:
        raise MalformedGateError(f"wire {q} out of range for num_qubits={num_qubits}")


def resolve_controlled(gate: ControlledGate, num_qubits: int) -> tuple[list[int], list[int]]:
    """Map gate-local control/target indices to wire numbers, rejecting malformed gates."""
    wires = list(gate.wires)
    for q in wires:
        _check_wire(q, num_qubits)
    if len(set(wires)) != len(wires):
        raise MalformedGateError(f"duplicate wires {wires}")

    if not gate.controls or not gate.targets:
        raise MalformedGateError("controlled gate needs at least one control and one target")

    for i in list(gate.controls) + list(gate.targets):
        if i < 0 or i >= len(wires):
            raise MalformedGateError(f"index {i} is outside the gate's wire list {wires}")

    if set(gate.controls) & set(gate.targets):
        raise MalformedGateError("a wire cannot be both control and target in the same gate")

    return [wires[i] for i in gate.controls], [wires[i] for i in gate.targets]


def _elementary_operator(gate: ElementaryGate, num_qubits: int) -> np.ndarray:
    _check_wire(int(gate.wire), num_qubits)
    U = lookup_gate(gate.symbol)
    return extend_gate_matrix(U, int(gate.wire), num_qubits)


def _controlled_operator(gate: ControlledGate, num_qubits: int) -> np.ndarray:
    controls, targets = resolve_controlled(gate, num_qubits)
    U = lookup_gate(gate.base)
    return build_multi_controlled_u_matrix(controls, targets, U, num_qubits)


def _apply(state: np.ndarray, gate, build, num_qubits: int, run: _Run) -> np.ndarray:
    try:
        M = build(gate, num_qubits)
    except (UnsupportedGateError, MalformedGateError) as err:
        run.skip(gate, err)
        return state
    return apply_matrix(M, state)


def _run_single_qubit(circuit: Circuit, run: _Run) -> np.ndarray:
    # no control/target encoding exists on one wire: plain fold in column order
    state = zero_state(1)
    for _, gates in group_by_column(circuit.gates):
        for g in gates:
            if isinstance(g, ElementaryGate):
                state = _apply(state, g, _elementary_operator, 1, run)
            elif isinstance(g, ControlledGate):
                run.skip(g, MalformedGateError("controlled gate needs at least two wires"))
            else:
                run.skip(g, MalformedGateError(f"unknown placed gate type {type(g).__name__}"))
    return state


def _run_multi_qubit(circuit: Circuit, run: _Run) -> np.ndarray:
    n = circuit.num_qubits
    if n < 2:
        raise QubitCountError(f"multi-qubit evaluation needs at least 2 qubits, got {n}")

    state = zero_state(n)

    for col, gates in group_by_column(circuit.gates):
        plain = [g for g in gates if isinstance(g, ElementaryGate)]
        controlled = [g for g in gates if isinstance(g, ControlledGate)]

        for g in gates:
            if not isinstance(g, (ElementaryGate, ControlledGate)):
                run.skip(g, MalformedGateError(f"unknown placed gate type {type(g).__name__}"))

        for g in plain:
            state = _apply(state, g, _elementary_operator, n, run)

        for g in controlled:
            state = _apply(state, g, _controlled_operator, n, run)

        logger.debug("column %d: %d plain, %d controlled", col, len(plain), len(controlled))

    return state


def _check_qubit_count(circuit: Circuit, options: SimulatorOptions) -> int:
    n = int(circuit.num_qubits)
    if n < 1:
        raise QubitCountError(f"num_qubits must be positive, got {n}")
    if n > options.max_qubits:
        raise QubitCountError(
            f"num_qubits={n} exceeds max_qubits={options.max_qubits} "
            f"(dense matrices need 4**n entries)"
        )
    return n


def _evaluate(circuit: Circuit, options: SimulatorOptions) -> tuple[np.ndarray, _Run]:
    n = _check_qubit_count(circuit, options)
    run = _Run(options)

    if n == 1:
        state = _run_single_qubit(circuit, run)
    else:
        state = _run_multi_qubit(circuit, run)

    if options.check_norm:
        norm = np.linalg.norm(state)
        if not np.isclose(norm, 1.0, atol=options.norm_atol):
            raise NormDriftError(f"State norm drifted: ||psi||={norm} (expected ~1.0)")

    logger.debug(
        "simulated %d-qubit circuit: %d gate(s), %d skipped",
        n, len(circuit.gates), len(run.diagnostics),
    )
    return state, run


def run_statevector(circuit: Circuit, options: Optional[SimulatorOptions] = None) -> np.ndarray:
    """Final statevector of `circuit` started from |0...0>."""
    state, _ = _evaluate(circuit, options or DEFAULT_OPTIONS)
    return state


def simulate(circuit: Circuit, options: Optional[SimulatorOptions] = None) -> SimulationResult:
    """
    Run `circuit` from |0...0> and return exact measurement probabilities.

    Gates are evaluated column by column in increasing column order; inside
    a column every elementary gate is applied first, then every controlled
    gate. Unsupported or malformed gates are skipped and reported in
    `diagnostics` unless options.strict is set.
    """
    options = options or DEFAULT_OPTIONS
    state, run = _evaluate(circuit, options)
    n = circuit.num_qubits

    formatted = polar = None
    if options.format_state:
        formatted = format_state(state, options.precision)
        polar = format_state_polar(state, options.precision)

    return SimulationResult(
        probabilities=probabilities(state, n),
        state=state,
        formatted_state=formatted,
        formatted_state_polar=polar,
        diagnostics=tuple(run.diagnostics),
    )
