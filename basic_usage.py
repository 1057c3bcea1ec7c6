#!/usr/bin/env python3
"""
Basic Usage Examples for symbolic_decompose

This script demonstrates the core features of the package with simple,
self-contained examples.
"""

import numpy as np
import sympy as sp

from symbolic_decompose import (
    decompose_l2_norm_expression,
    decompose_lumped_parameters,
    decompose_quadratic_polynomial,
    extract_and_decompose_affine,
    extract_variables,
    format_affine_decomposition,
    format_lumped_decomposition,
    is_affine,
)


def example_1_affine():
    """Read the coefficients of affine expressions."""
    print("\n" + "=" * 50)
    print("Example 1: Affine Decomposition")
    print("=" * 50)

    x, y, z = sp.symbols("x y z")
    exprs = [x + 2 * y - 1, 3 * z + y]

    print(f"\nis_affine({exprs}): {is_affine([exprs])}")
    print(f"is_affine([[x*y]]): {is_affine([[x * y]])}")

    M, v, variables = extract_and_decompose_affine(exprs)
    print()
    print(format_affine_decomposition(M, v, variables))


def example_2_quadratic():
    """Decompose a quadratic polynomial as 0.5 x'Qx + b'x + c."""
    print("\n" + "=" * 50)
    print("Example 2: Quadratic Form")
    print("=" * 50)

    x, y = sp.symbols("x y")
    e = x**2 + x * y + 3 * y**2 - 2 * x + 5
    variables, index = extract_variables(e)
    Q, b, c = decompose_quadratic_polynomial(e, index)

    print(f"\n{e}")
    print(f"  variables: {variables}")
    print(f"  Q =\n{Q}")
    print(f"  b = {b}")
    print(f"  c = {c}")


def example_3_l2_norm():
    """Recognize a Euclidean norm."""
    print("\n" + "=" * 50)
    print("Example 3: L2 Norm Recognition")
    print("=" * 50)

    x, y = sp.symbols("x y")
    for e in [sp.sqrt((x - 1) ** 2 + (y - 2) ** 2), sp.sqrt(x**2 + y)]:
        res = decompose_l2_norm_expression(e)
        print(f"\n{e}: is_l2norm={res.is_l2norm}")
        if res.is_l2norm:
            print(f"  A =\n{np.round(res.A, 6)}")
            print(f"  b = {np.round(res.b, 6)}")
            print(f"  variables: {res.variables}")


def example_4_lumped_parameters():
    """Separate state variables from parameters."""
    print("\n" + "=" * 50)
    print("Example 4: Lumped Parameters")
    print("=" * 50)

    x1, x2, p, q = sp.symbols("x1 x2 p q")
    f = [x1 * p + x2 * p * q, x2 * p + sp.sin(x1) * q**2 + 1]

    dec = decompose_lumped_parameters(f, [p, q])
    print()
    print(format_lumped_decomposition(dec))
    print(f"\nExact: {dec.is_exact(f)}")
    print(f"alpha at p=2, q=3: {dec.evaluate_alpha({p: 2.0, q: 3.0})}")


if __name__ == "__main__":
    example_1_affine()
    example_2_quadratic()
    example_3_l2_norm()
    example_4_lumped_parameters()
