"""Classify expressions as linear, quadratic or second-order-cone terms.

A model-building layer typically tries the cheapest representation first:
affine, then quadratic, then |A·x + b|₂ (a Lorentz cone constraint).

Run:
    python examples/norm_constraints.py
"""

from __future__ import annotations

import numpy as np
import sympy as sp

from symbolic_decompose import (
    decompose_l2_norm_expression,
    decompose_quadratic_polynomial,
    extract_and_decompose_affine,
    extract_variables,
    is_affine,
)
from symbolic_decompose.polynomial import is_polynomial, monomial_to_coefficient_map, total_degree


def classify(e: sp.Expr) -> str:
    if is_affine([[e]]):
        M, v, variables = extract_and_decompose_affine([e])
        return f"affine: M={M.tolist()}, v={v.tolist()}, x={variables}"
    if is_polynomial(e) and total_degree(monomial_to_coefficient_map(e)) == 2:
        variables, index = extract_variables(e)
        Q, b, c = decompose_quadratic_polynomial(e, index)
        return f"quadratic: Q={Q.tolist()}, b={b.tolist()}, c={c}, x={variables}"
    res = decompose_l2_norm_expression(e)
    if res.is_l2norm:
        return f"L2 norm: A={np.round(res.A, 6).tolist()}, b={np.round(res.b, 6).tolist()}, x={res.variables}"
    return "unsupported"


def main() -> None:
    x, y, z = sp.symbols("x y z")
    exprs = [
        2 * x - y + 3,
        x**2 + 2 * x * y + 5 * y**2,
        sp.sqrt(x**2 + 4 * y**2 + 4 * y + 1),
        sp.sqrt((x - y) ** 2 + z**2),
        sp.sqrt(x * y),
        sp.exp(x),
    ]
    for e in exprs:
        print(f"{e}\n    -> {classify(e)}")


if __name__ == "__main__":
    main()
