import argparse
import logging
import sys

from .circuit import bell_pair, ghz, toffoli_check, uniform_superposition
from .config import SimulatorOptions
from .simulator import simulate

DEMOS = {
    "bell": lambda n: bell_pair(0, 1),
    "ghz": lambda n: ghz(n),
    "toffoli": lambda n: toffoli_check(max(n - 1, 1)),
    "superposition": lambda n: uniform_superposition(n),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qcomposer",
        description="Simulate a demo circuit and print its measurement probabilities",
    )
    parser.add_argument("demo", choices=sorted(DEMOS), help="circuit to run")
    parser.add_argument("-n", "--qubits", type=int, default=3,
                        help="register size for ghz / toffoli / superposition (default: 3)")
    parser.add_argument("--polar", action="store_true", help="also print the state in polar form")
    parser.add_argument("--plot", metavar="FILE", help="save a probability bar chart to FILE")
    parser.add_argument("--max-qubits", type=int, default=10)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        circuit = DEMOS[args.demo](args.qubits)
        result = simulate(circuit, SimulatorOptions(max_qubits=args.max_qubits))
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    for bits, p in sorted(result.probabilities.items()):
        print(f"{bits}  {p:.6f}")
    print("state:", result.formatted_state)
    if args.polar:
        print("polar:", result.formatted_state_polar)

    if args.plot:
        from .viz import plot_result
        fig = plot_result(result, title=f"{args.demo} probabilities")
        fig.savefig(args.plot)
        print("saved", args.plot)

    return 0


if __name__ == "__main__":
    sys.exit(main())
