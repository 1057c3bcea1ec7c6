from __future__ import annotations

from typing import Dict, Tuple, Union

import numpy as np
import sympy as sp

from .errors import DegreeExceededError
from .polynomial import (
    constant_value,
    is_zero_constant,
    monomial_degree,
    monomial_to_coefficient_map,
    monomial_to_expr,
)
from .variables import check_index_map


def _index_of(var: sp.Symbol, var_to_index: Dict[sp.Symbol, int]) -> int:
    if var not in var_to_index:
        raise ValueError(f"variable {var} is missing from var_to_index")
    return var_to_index[var]


def decompose_quadratic_polynomial(
    poly: Union[sp.Poly, sp.Expr],
    var_to_index: Dict[sp.Symbol, int],
) -> Tuple[np.ndarray, np.ndarray, float]:
    """Decompose a polynomial of degree <= 2 as 0.5·xᵀQx + bᵀx + c.

    Parameters
    ----------
    poly:
        ``sympy.Poly`` or polynomial expression with numeric coefficients.
        The caller is responsible for having checked the degree.
    var_to_index:
        Position of each variable in x (positions 0..n-1).

    Returns
    -------
    (Q, b, c)
        Symmetric n×n matrix Q, length-n vector b and scalar c.

    Raises
    ------
    DegreeExceededError
        If a monomial has total degree higher than 2.
    """
    n = check_index_map(var_to_index)
    Q = np.zeros((n, n))
    b = np.zeros(n)
    c = 0.0

    if isinstance(poly, sp.Poly):
        expr = poly.as_expr()
        terms = monomial_to_coefficient_map(poly)
    else:
        expr = sp.sympify(poly)
        terms = monomial_to_coefficient_map(expr, sorted(var_to_index, key=var_to_index.get))

    for mono, coeff in terms.items():
        if is_zero_constant(coeff):
            raise RuntimeError(f"zero coefficient for monomial {monomial_to_expr(mono)} in {expr}")
        coefficient = constant_value(coeff, expr)
        if monomial_degree(mono) > 2:
            raise DegreeExceededError(monomial_to_expr(mono), 2)

        if len(mono) == 2:
            # cross term a*x*y
            (x1, p1), (x2, p2) = mono
            i = _index_of(x1, var_to_index)
            j = _index_of(x2, var_to_index)
            Q[i, j] += coefficient
            Q[j, i] = Q[i, j]
        elif len(mono) == 1:
            (x, p), = mono
            i = _index_of(x, var_to_index)
            if p == 2:
                Q[i, i] += 2 * coefficient
            else:
                b[i] += coefficient
        else:
            c += coefficient
    return Q, b, c
