"""Lumped parameters of a damped pendulum on a cart.

The cart-pole equations of motion are affine in a handful of *lumped*
combinations of the physical parameters (masses, length, damping). Once those
combinations are known, the parameters can be identified by linear least
squares on logged data.

Run:
    python examples/lumped_parameters_pendulum.py
"""

from __future__ import annotations

import logging

import sympy as sp

from symbolic_decompose import decompose_lumped_parameters, format_lumped_decomposition, setup_logging


def main() -> None:
    setup_logging(level=logging.DEBUG)

    # State, inputs and accelerations.
    x, theta, xd, thetad, xdd, thetadd, u = sp.symbols("x theta xd thetad xdd thetadd u")
    # Physical parameters.
    mc, mp, l, g, b = sp.symbols("m_c m_p l g b")

    # Lagrangian residuals (= 0 along trajectories).
    f = [
        (mc + mp) * xdd + mp * l * thetadd * sp.cos(theta) - mp * l * thetad**2 * sp.sin(theta) + b * xd - u,
        mp * l * xdd * sp.cos(theta) + mp * l**2 * thetadd + mp * g * l * sp.sin(theta),
    ]

    dec = decompose_lumped_parameters(f, [mc, mp, l, g, b])
    print(format_lumped_decomposition(dec))
    print("\nExact reconstruction:", dec.is_exact(f))


if __name__ == "__main__":
    main()
