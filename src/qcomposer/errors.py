class SimulationError(ValueError):
    """Base class for every error raised by the engine."""


class DimensionMismatchError(SimulationError):
    pass


class UnsupportedGateError(SimulationError):
    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__(f"unsupported gate: {symbol!r}")


class QubitCountError(SimulationError):
    pass


class MalformedGateError(SimulationError):
    pass


class NormDriftError(SimulationError):
    pass
