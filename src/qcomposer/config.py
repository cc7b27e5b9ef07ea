from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulatorOptions:
    max_qubits: int = 10        # dense 2^n x 2^n matrices, O(4^n) memory
    strict: bool = False        # raise instead of skipping bad gates
    check_norm: bool = True     # verify ||psi|| ~ 1 after the run
    norm_atol: float = 1e-9
    format_state: bool = True   # fill formatted_state / formatted_state_polar
    precision: int = 2

    def __post_init__(self):
        if self.max_qubits < 1:
            raise ValueError(f"max_qubits must be positive, got {self.max_qubits}")
        if self.norm_atol <= 0:
            raise ValueError(f"norm_atol must be positive, got {self.norm_atol}")
        if self.precision < 0:
            raise ValueError(f"precision must be >= 0, got {self.precision}")


DEFAULT_OPTIONS = SimulatorOptions()
