"""Linear and affine coefficient extraction.

An expression e is affine in x if it can be written as e = Σⱼ M[j]·xⱼ + v with
numeric M, v; it is linear if in addition v = 0. The functions here read M and
v off the polynomial normal form of each expression.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import sympy as sp

from .errors import DegreeExceededError, InputNotPolynomialError, UnexpectedConstantTermError
from .polynomial import (
    Monomial,
    constant_value,
    is_polynomial,
    monomial_degree,
    monomial_to_coefficient_map,
    total_degree,
)
from .variables import as_expression_list, check_index_map, extract_variables

logger = logging.getLogger(__name__)


def _checked_variables(variables: Iterable[sp.Symbol]) -> List[sp.Symbol]:
    out = list(variables)
    for v in out:
        if not isinstance(v, sp.Symbol):
            raise ValueError(f"variables must be SymPy symbols; got {v!r}")
    if len(set(out)) != len(out):
        raise ValueError("variables must be distinct")
    return out


def _affine_terms(e: sp.Expr, variables: Sequence[sp.Symbol]) -> Dict[Monomial, sp.Expr]:
    """Monomial map of e in `variables`, checked to be of degree <= 1."""
    if not is_polynomial(e):
        raise InputNotPolynomialError(e)
    terms = monomial_to_coefficient_map(e, variables)
    if total_degree(terms) > 1:
        raise DegreeExceededError(e, 1, variables)
    return terms


def _coefficient_row(
    terms: Dict[Monomial, sp.Expr],
    variables: Sequence[sp.Symbol],
    e: sp.Expr,
) -> np.ndarray:
    row = np.zeros(len(variables))
    for j, var in enumerate(variables):
        coeff = terms.get(((var, 1),))
        if coeff is not None:
            row[j] = constant_value(coeff, e)
    return row


def _is_not_affine(e: sp.Expr, variables: Optional[Sequence[sp.Symbol]]) -> bool:
    # Non-polynomial or degree computed only w.r.t. `variables` when given.
    if not is_polynomial(e, variables):
        return True
    return total_degree(monomial_to_coefficient_map(e, variables)) > 1


def is_affine(m: Any, variables: Optional[Iterable[sp.Symbol]] = None) -> bool:
    """Return True if every entry of the matrix m is affine.

    Parameters
    ----------
    m:
        2-D grid of expressions (SymPy matrix, nested lists or NumPy object array).
    variables:
        If given, affinity is checked with respect to these symbols only; other
        symbols are treated as constants. Otherwise each entry is checked with
        respect to its own free symbols.

    Notes
    -----
    When `variables` is given the degree is computed from the polynomial in
    `variables`. Non-affine behaviour that only cancels through symbols outside
    `variables` is not detected specially.
    """
    M = m if isinstance(m, sp.MatrixBase) else sp.Matrix(m)
    if M.rows * M.cols == 0:
        return True
    vars_ = list(variables) if variables is not None else None
    return not any(_is_not_affine(sp.sympify(e), vars_) for e in M)


def decompose_linear_expressions(expressions: Any, variables: Iterable[sp.Symbol]) -> np.ndarray:
    """Decompose linear expressions e = M·vars.

    Parameters
    ----------
    expressions:
        Expressions e_i (a single expression or a sequence).
    variables:
        Ordered indeterminates; column j of M belongs to variables[j].

    Returns
    -------
    M:
        ``len(expressions) × len(variables)`` float array.

    Raises
    ------
    InputNotPolynomialError, DegreeExceededError, UnexpectedConstantTermError,
    NonConstantCoefficientError
    """
    exprs = as_expression_list(expressions)
    vars_ = _checked_variables(variables)
    M = np.zeros((len(exprs), len(vars_)))
    for i, e in enumerate(exprs):
        terms = _affine_terms(e, vars_)
        if () in terms:
            raise UnexpectedConstantTermError(e, terms[()], vars_)
        M[i, :] = _coefficient_row(terms, vars_, e)
    return M


def decompose_affine_expressions(
    expressions: Any,
    variables: Iterable[sp.Symbol],
) -> Tuple[np.ndarray, np.ndarray]:
    """Decompose affine expressions e = M·vars + v.

    Returns
    -------
    (M, v)
        M is ``m × n`` and v has length m.
    """
    exprs = as_expression_list(expressions)
    vars_ = _checked_variables(variables)
    M = np.zeros((len(exprs), len(vars_)))
    v = np.zeros(len(exprs))
    for i, e in enumerate(exprs):
        terms = _affine_terms(e, vars_)
        M[i, :] = _coefficient_row(terms, vars_, e)
        if () in terms:
            v[i] = constant_value(terms[()], e)
    return M, v


def decompose_affine_expression(
    e: Any,
    var_to_index: Dict[sp.Symbol, int],
) -> Tuple[int, np.ndarray, float]:
    """Decompose a single affine expression over an existing variable index.

    Returns
    -------
    (num_variables, coeffs, constant_term)
        `coeffs[var_to_index[x]]` is the coefficient of x and
        `num_variables` counts the variables whose coefficient is nonzero.
    """
    n = check_index_map(var_to_index)
    e = sp.sympify(e)
    if not is_polynomial(e):
        raise InputNotPolynomialError(e)

    coeffs = np.zeros(n)
    constant_term = 0.0
    num_variables = 0
    for mono, coeff in monomial_to_coefficient_map(e).items():
        degree = monomial_degree(mono)
        if degree > 1:
            raise DegreeExceededError(e, 1)
        value = constant_value(coeff, e)
        if degree == 1:
            var = mono[0][0]
            if var not in var_to_index:
                raise ValueError(f"variable {var} of {e} is missing from var_to_index")
            coeffs[var_to_index[var]] = value
            if value != 0:
                num_variables += 1
        else:
            constant_term = value
    return num_variables, coeffs, constant_term


def extract_and_decompose_affine(expressions: Any) -> Tuple[np.ndarray, np.ndarray, List[sp.Symbol]]:
    """Decompose e = M·x + v where x are the variables found in the expressions.

    Variables are indexed in order of first appearance across the whole
    sequence before any row is decomposed, so every row shares one column order.

    Returns
    -------
    (M, v, variables)
    """
    exprs = as_expression_list(expressions)
    variables, var_to_index = extract_variables(exprs)
    logger.debug("Decomposing %d affine expressions in %d variables", len(exprs), len(variables))

    M = np.zeros((len(exprs), len(variables)))
    v = np.zeros(len(exprs))
    for i, e in enumerate(exprs):
        _, M[i, :], v[i] = decompose_affine_expression(e, var_to_index)
    return M, v, variables
