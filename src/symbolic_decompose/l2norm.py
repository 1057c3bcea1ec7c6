"""Recognition of Euclidean-norm expressions.

An expression is an L2 norm if it has the form sqrt(q(x)) with q a quadratic
polynomial that can be written as q(x) = |A·x + b|². Recognition is
best-effort: any structural mismatch yields a negative result, not an error.
"""

from __future__ import annotations

import logging
from typing import Any, List, NamedTuple

import numpy as np
import sympy as sp
from scipy.linalg import lstsq

from . import config
from .linalg import decompose_psd_matrix_into_xtx
from .polynomial import is_polynomial, monomial_to_coefficient_map, total_degree
from .quadratic import decompose_quadratic_polynomial
from .variables import extract_variables

logger = logging.getLogger(__name__)


class L2NormDecomposition(NamedTuple):
    """Result of :func:`decompose_l2_norm_expression`.

    When `is_l2norm` is True the expression equals |A·x + b|₂ with x the
    `variables` in order. Otherwise A, b and `variables` are empty.
    """

    is_l2norm: bool
    A: np.ndarray
    b: np.ndarray
    variables: List[sp.Symbol]


def _not_l2norm(e: sp.Expr, reason: str) -> L2NormDecomposition:
    logger.debug("%s is not an L2 norm: %s", e, reason)
    return L2NormDecomposition(False, np.zeros((0, 0)), np.zeros(0), [])


def _is_sqrt(e: sp.Expr) -> bool:
    return isinstance(e, sp.Pow) and e.exp == sp.S.Half


def decompose_l2_norm_expression(
    e: Any,
    psd_tol: float = config.PSD_TOL,
    coefficient_tol: float = config.COEFFICIENT_TOL,
) -> L2NormDecomposition:
    """Check whether e = |A·x + b|₂ and recover A and b.

    Parameters
    ----------
    e:
        Scalar expression.
    psd_tol:
        Tolerance for accepting near-zero negative eigenvalues of the quadratic
        form when factoring it as AᵀA.
    coefficient_tol:
        Tolerance on the linear and constant terms when matching b.

    Returns
    -------
    L2NormDecomposition
        ``(is_l2norm, A, b, variables)``.
    """
    if psd_tol < 0:
        raise ValueError("psd_tol must be non-negative")
    if coefficient_tol < 0:
        raise ValueError("coefficient_tol must be non-negative")

    e = sp.sympify(e)
    if not _is_sqrt(e):
        return _not_l2norm(e, "not a square root")
    arg = e.base
    if not is_polynomial(arg):
        return _not_l2norm(e, "argument is not a polynomial")

    variables, var_to_index = extract_variables(e)
    terms = monomial_to_coefficient_map(arg, variables)
    if total_degree(terms) != 2:
        return _not_l2norm(e, "argument is not of degree 2")

    # q(x) = 0.5·xᵀQx + rᵀx + s
    Q, r, s = decompose_quadratic_polynomial(sp.Poly(arg, *variables), var_to_index)

    A = decompose_psd_matrix_into_xtx(0.5 * Q, psd_tol, return_empty_if_not_psd=True)
    if A.shape[0] == 0:
        return _not_l2norm(e, "quadratic form is not positive semidefinite")

    b = lstsq(A.T, 0.5 * r)[0]
    if np.max(np.abs(A.T @ b - 0.5 * r)) > coefficient_tol:
        return _not_l2norm(e, "linear term is not in the range of Aᵀ")
    if abs(s - b.dot(b)) > coefficient_tol:
        return _not_l2norm(e, "constant term does not match |b|²")

    return L2NormDecomposition(True, A, b, variables)
