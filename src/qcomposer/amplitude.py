"""
Scalar complex arithmetic on amplitudes.

Amplitudes are plain Python / numpy ``complex`` values, so these helpers are
thin, but every probability in the engine goes through ``magnitude_squared``
to avoid a square root.
"""
from __future__ import annotations

import math


def add(a: complex, b: complex) -> complex:
    return complex(a) + complex(b)


def multiply(a: complex, b: complex) -> complex:
    # (ac - bd) + (ad + bc)i
    a = complex(a)
    b = complex(b)
    return complex(a.real * b.real - a.imag * b.imag,
                   a.real * b.imag + a.imag * b.real)


def scale(z: complex, k: float) -> complex:
    z = complex(z)
    return complex(z.real * k, z.imag * k)


def conjugate(z: complex) -> complex:
    z = complex(z)
    return complex(z.real, -z.imag)


def magnitude(z: complex) -> float:
    return math.sqrt(magnitude_squared(z))


def magnitude_squared(z: complex) -> float:
    z = complex(z)
    return z.real * z.real + z.imag * z.imag


def is_zero(z: complex, tol: float = 0.0) -> bool:
    z = complex(z)
    if tol == 0.0:
        return z.real == 0.0 and z.imag == 0.0
    return magnitude_squared(z) <= tol * tol


def format_complex(z: complex, precision: int = 2) -> str:
    """
    Render an amplitude the way the circuit view shows it:

      0         -> (0)
      0.7071    -> (0.71)
      1j        -> (i)
      0.5-0.5j  -> (0.50 - 0.50i)

    Parts that round to zero at ``precision`` are dropped.
    """
    z = complex(z)
    re = round(z.real, precision)
    im = round(z.imag, precision)
    # -0.0 after rounding
    re = 0.0 if re == 0 else re
    im = 0.0 if im == 0 else im

    if re == 0 and im == 0:
        return "(0)"

    out = ""
    if re != 0:
        out += f"{re:.{precision}f}"

    if im != 0:
        if im == 1:
            out += ("" if re == 0 else " + ") + "i"
        elif im == -1:
            out += ("-" if re == 0 else " - ") + "i"
        else:
            part = f"{abs(im):.{precision}f}i"
            if re == 0:
                out += ("-" if im < 0 else "") + part
            else:
                out += (" - " if im < 0 else " + ") + part

    return f"({out})"
