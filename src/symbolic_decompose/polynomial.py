"""Monomial/coefficient view of SymPy polynomials.

A monomial is represented as a tuple of ``(symbol, exponent)`` pairs with
positive exponents, in the order of the polynomial's indeterminates; the empty
tuple is the constant monomial. A polynomial is read as a mapping from such
monomials to (SymPy) coefficients. Coefficients are symbolic in general: when
the indeterminates are a strict subset of the free symbols, the remaining
symbols end up in the coefficients.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence, Tuple, Union

import sympy as sp

from .errors import NonConstantCoefficientError
from .variables import extract_variables

Monomial = Tuple[Tuple[sp.Symbol, int], ...]


def is_zero_constant(e: sp.Expr) -> bool:
    """True iff e is literally the number zero (no simplification attempted)."""
    return bool(e.is_Number) and bool(e.is_zero)


def is_polynomial(e: Any, variables: Optional[Iterable[sp.Symbol]] = None) -> bool:
    """Return True if e is a polynomial in `variables` (default: its free symbols)."""
    e = sp.sympify(e)
    if variables is None:
        return bool(e.is_polynomial())
    gens = list(variables)
    if not gens:
        return True
    return bool(e.is_polynomial(*gens))


def monomial_to_coefficient_map(
    e: Union[sp.Expr, sp.Poly],
    indeterminates: Optional[Sequence[sp.Symbol]] = None,
) -> Dict[Monomial, sp.Expr]:
    """Expand e and return its monomial -> coefficient mapping.

    Parameters
    ----------
    e:
        A polynomial expression or a ``sympy.Poly`` (whose generators are then
        used and `indeterminates` is ignored).
    indeterminates:
        Symbols to treat as polynomial variables. Defaults to the free
        symbols of e in order of first appearance.

    Notes
    -----
    The caller is expected to have checked :func:`is_polynomial`; otherwise
    SymPy raises ``PolynomialError``.
    """
    if isinstance(e, sp.Poly):
        poly = e
        gens = tuple(e.gens)
    else:
        expr = sp.sympify(e)
        if indeterminates is None:
            gens = tuple(extract_variables(expr)[0])
        else:
            gens = tuple(indeterminates)
        if not gens:
            expr = sp.expand(expr)
            return {} if is_zero_constant(expr) else {(): expr}
        poly = sp.Poly(expr, *gens)

    terms: Dict[Monomial, sp.Expr] = {}
    for powers, coeff in poly.as_dict(native=False).items():
        mono = tuple((g, int(p)) for g, p in zip(gens, powers) if p)
        terms[mono] = coeff
    return terms


def monomial_degree(monomial: Monomial) -> int:
    return sum(p for _, p in monomial)


def total_degree(terms: Dict[Monomial, sp.Expr]) -> int:
    """Maximal monomial degree (0 for the zero polynomial)."""
    return max((monomial_degree(m) for m in terms), default=0)


def monomial_to_expr(monomial: Monomial) -> sp.Expr:
    return sp.Mul(*[v**p for v, p in monomial])


def constant_value(coefficient: sp.Expr, expression: Optional[sp.Expr] = None) -> float:
    """Reduce a coefficient to a float.

    Raises
    ------
    NonConstantCoefficientError
        If the coefficient still depends on symbols or is not real.
    """
    c = sp.sympify(coefficient)
    if not c.is_number:
        raise NonConstantCoefficientError(c, expression)
    try:
        return float(c)
    except TypeError as exc:
        raise NonConstantCoefficientError(c, expression) from exc
