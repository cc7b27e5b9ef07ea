from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Sequence, Union

import numpy as np

from .errors import QubitCountError
from .gates import ELEMENTARY_GATES


@dataclass(frozen=True)
class ElementaryGate:
    """One of X/Y/Z/H/S/T on a single wire."""
    symbol: str
    wire: int
    column: int = 0

    kind: ClassVar[str] = "elementary"

    @property
    def qubits(self) -> tuple[int, ...]:
        return (self.wire,)


@dataclass(frozen=True)
class ControlledGate:
    """
    An elementary `base` gate applied to the target wires when every control
    wire reads 1.

    `controls` and `targets` are indices into `wires`, not wire numbers:
    ControlledGate("X", wires=(3, 1), column=0, controls=(0,), targets=(1,))
    is a CNOT with control wire 3 and target wire 1.
    """
    base: str
    wires: tuple[int, ...]
    column: int
    controls: tuple[int, ...]
    targets: tuple[int, ...]

    kind: ClassVar[str] = "controlled"

    def __post_init__(self):
        object.__setattr__(self, "wires", tuple(int(w) for w in self.wires))
        object.__setattr__(self, "controls", tuple(int(i) for i in self.controls))
        object.__setattr__(self, "targets", tuple(int(i) for i in self.targets))

    @property
    def qubits(self) -> tuple[int, ...]:
        return self.wires

    @property
    def control_wires(self) -> tuple[int, ...]:
        return tuple(self.wires[i] for i in self.controls)

    @property
    def target_wires(self) -> tuple[int, ...]:
        return tuple(self.wires[i] for i in self.targets)


PlacedGate = Union[ElementaryGate, ControlledGate]


def default_qubit_labels(num_qubits: int) -> list[str]:
    return [f"Qubit {i}" for i in range(num_qubits)]


@dataclass
class Circuit:
    """
    Qubit count plus an unordered collection of placed gates.

    The builder methods (x, h, cx, ...) put each new gate in the left-most
    column that is free on every wire it touches, so gates added in program
    order are evaluated in program order.
    """
    num_qubits: int
    gates: list = field(default_factory=list)

    def __post_init__(self):
        if self.num_qubits <= 0:
            raise QubitCountError("num_qubits must be positive")
        self.gates = list(self.gates)

    def __repr__(self):
        return f"Circuit(num_qubits={self.num_qubits}, gates={len(self.gates)}, columns={self.column_count()})"

    ## queries

    def column_count(self) -> int:
        if not self.gates:
            return 0
        return max(g.column for g in self.gates) + 1

    def gates_in_column(self, col: int) -> list:
        return [g for g in self.gates if g.column == col]

    def next_free_column(self, wires: Iterable[int]) -> int:
        wires = set(wires)
        occupied = [g.column for g in self.gates if wires.intersection(g.qubits)]
        return max(occupied) + 1 if occupied else 0

    ## builders

    def _check_wire(self, q: int) -> int:
        q = int(q)
        if not (0 <= q < self.num_qubits):
            raise ValueError(f"wire must be in [0, {self.num_qubits - 1}], got {q}")
        return q

    def add(self, gate: PlacedGate) -> PlacedGate:
        self.gates.append(gate)
        return gate

    def gate(self, symbol: str, wire: int, column: int | None = None) -> ElementaryGate:
        symbol = str(symbol).strip().upper()
        if symbol not in ELEMENTARY_GATES:
            raise ValueError(f"symbol must be one of {ELEMENTARY_GATES}, got {symbol!r}")
        wire = self._check_wire(wire)
        if column is None:
            column = self.next_free_column([wire])
        return self.add(ElementaryGate(symbol, wire, int(column)))

    def x(self, q: int): return self.gate("X", q)
    def y(self, q: int): return self.gate("Y", q)
    def z(self, q: int): return self.gate("Z", q)
    def h(self, q: int): return self.gate("H", q)
    def s(self, q: int): return self.gate("S", q)
    def t(self, q: int): return self.gate("T", q)

    def controlled(
        self,
        base: str,
        controls: Sequence[int],
        targets: Sequence[int],
        column: int | None = None,
    ) -> ControlledGate:
        """Add a controlled gate from absolute control and target wire numbers."""
        base = str(base).strip().upper()
        if base not in ELEMENTARY_GATES:
            raise ValueError(f"base must be one of {ELEMENTARY_GATES}, got {base!r}")

        controls = [self._check_wire(q) for q in controls]
        targets = [self._check_wire(q) for q in targets]
        if not controls or not targets:
            raise ValueError("controlled gate needs at least one control and one target")

        wires = controls + targets
        if len(set(wires)) != len(wires):
            raise ValueError(f"wires must be distinct, got controls={controls} targets={targets}")

        if column is None:
            column = self.next_free_column(wires)

        k = len(controls)
        return self.add(ControlledGate(
            base=base,
            wires=tuple(wires),
            column=int(column),
            controls=tuple(range(k)),
            targets=tuple(range(k, len(wires))),
        ))

    def cx(self, control: int, target: int):
        return self.controlled("X", [control], [target])

    def cy(self, control: int, target: int):
        return self.controlled("Y", [control], [target])

    def cz(self, control: int, target: int):
        return self.controlled("Z", [control], [target])

    def ccx(self, c1: int, c2: int, target: int):
        return self.controlled("X", [c1, c2], [target])

    def mcx(self, controls: Sequence[int], target: int):
        return self.controlled("X", controls, [target])


# ----------------------------
# Circuit generators (programmatic)
# ----------------------------

def bell_pair(q0: int = 0, q1: int = 1) -> Circuit:
    """
    H q0
    CNOT q0 q1
    """
    q0 = int(q0); q1 = int(q1)
    c = Circuit(max(q0, q1) + 1)
    c.h(q0)
    c.cx(q0, q1)
    return c


def ghz(n: int) -> Circuit:
    """
    H 0
    CNOT 0 1
    CNOT 0 2
    ...
    GHZ(1) is just |+>.
    """
    n = int(n)
    if n <= 0:
        raise ValueError("n must be positive")

    c = Circuit(n)
    c.h(0)
    for t in range(1, n):
        c.cx(0, t)
    return c


def uniform_superposition(n: int) -> Circuit:
    """H on every qubit of an n-qubit register."""
    c = Circuit(int(n))
    for q in range(c.num_qubits):
        c.h(q)
    return c


def toffoli_check(num_controls: int = 2, *, prepare: bool = True) -> Circuit:
    """
    X on every control (when `prepare`), then a multi-controlled X onto the
    last wire. With prepare=True the result is |1...1>, otherwise |0...0>.
    """
    num_controls = int(num_controls)
    if num_controls <= 0:
        raise ValueError("num_controls must be positive")

    c = Circuit(num_controls + 1)
    controls = list(range(num_controls))
    if prepare:
        for q in controls:
            c.x(q)
    c.mcx(controls, num_controls)
    return c


def random_circuit(
    seed: int,
    *,
    num_qubits: int = 3,
    depth: int = 8,
    controlled_p: float = 0.4,
) -> Circuit:
    """
    Random layered circuit over the whole elementary set plus
    multi-controlled gates with random control/target subsets.
    """
    num_qubits = int(num_qubits)
    depth = int(depth)
    if num_qubits <= 0:
        raise ValueError("num_qubits must be positive")
    if depth <= 0:
        raise ValueError("depth must be positive")

    rng = np.random.default_rng(int(seed))
    c = Circuit(num_qubits)

    for _ in range(depth):
        for q in range(num_qubits):
            if rng.random() < 0.6:
                c.gate(ELEMENTARY_GATES[int(rng.integers(0, len(ELEMENTARY_GATES)))], q)

        if num_qubits >= 2 and rng.random() < controlled_p:
            wires = [int(w) for w in rng.permutation(num_qubits)]
            k = int(rng.integers(1, num_qubits))        # number of controls
            m = int(rng.integers(1, num_qubits - k + 1))  # number of targets
            base = ELEMENTARY_GATES[int(rng.integers(0, len(ELEMENTARY_GATES)))]
            c.controlled(base, wires[:k], wires[k:k + m])

    return c
