"""Exceptions raised while decomposing symbolic expressions.

Every failure is reported immediately and carries the printable form of the
offending (sub-)expression. Where a degree bound was checked against a list of
indeterminates, that list is attached as well.

Precondition failures (negative tolerances, inconsistent index maps, ...) are
plain :class:`ValueError` and are not part of this hierarchy.
"""

from __future__ import annotations

from typing import Optional, Sequence

import sympy as sp


def _format_variables(variables: Optional[Sequence[sp.Symbol]]) -> str:
    if variables is None:
        return ""
    return " of indeterminates [" + ", ".join(str(v) for v in variables) + "]"


class DecompositionError(RuntimeError):
    """Base exception for decomposition failures.

    Parameters
    ----------
    expression:
        The expression that could not be decomposed.
    message:
        Human-readable description.
    variables:
        Optional indeterminates used for the degree computation.
    """

    def __init__(
        self,
        expression: sp.Expr,
        message: str,
        variables: Optional[Sequence[sp.Symbol]] = None,
    ):
        self.expression = expression
        self.variables = tuple(variables) if variables is not None else None
        super().__init__(message)


def _detected(kind: str, expression: sp.Expr, extra: str = "") -> str:
    return f"While decomposing an expression, we detected a {kind} expression: {expression}{extra}."


class InputNotPolynomialError(DecompositionError):
    """Raised when an expression is not a polynomial."""

    def __init__(self, expression: sp.Expr):
        super().__init__(expression, _detected("non-polynomial", expression))


class DegreeExceededError(DecompositionError):
    """Raised when a polynomial exceeds the degree a decomposition supports.

    Parameters
    ----------
    expression:
        The offending expression (or monomial).
    max_degree:
        The largest total degree the caller accepts.
    variables:
        Indeterminates the degree was computed in.
    """

    def __init__(
        self,
        expression: sp.Expr,
        max_degree: int,
        variables: Optional[Sequence[sp.Symbol]] = None,
    ):
        self.max_degree = int(max_degree)
        kind = "non-linear" if self.max_degree <= 1 else f"degree > {self.max_degree}"
        super().__init__(
            expression,
            _detected(kind, expression, _format_variables(variables)),
            variables,
        )


class UnexpectedConstantTermError(DecompositionError):
    """Raised by the linear decomposition when a constant term is present."""

    def __init__(
        self,
        expression: sp.Expr,
        constant: sp.Expr,
        variables: Optional[Sequence[sp.Symbol]] = None,
    ):
        self.constant = constant
        extra = (
            f"{_format_variables(variables)}, with a constant term {constant}. "
            "This is an affine expression; a linear should have no constant terms"
        )
        super().__init__(expression, _detected("non-linear", expression, extra), variables)


class NonConstantCoefficientError(DecompositionError):
    """Raised when a coefficient does not reduce to a real number."""

    def __init__(self, coefficient: sp.Expr, expression: Optional[sp.Expr] = None):
        self.coefficient = coefficient
        extra = f" (in {expression})" if expression is not None else ""
        super().__init__(
            expression if expression is not None else coefficient,
            _detected("non-constant", coefficient, extra),
        )


class LumpedParameterError(DecompositionError):
    """Base class for failures of the lumped-parameter factorization."""


class UnsupportedMixedPowerError(LumpedParameterError):
    """A constant power of a mixed parameter/state base.

    Such a term *can* be factored (by repeated multiplication), but the
    factorization does not handle it.
    """

    def __init__(self, expression: sp.Expr):
        super().__init__(
            expression,
            f"{expression} CAN be factored into lumped parameters, but this case "
            "has not been implemented yet.",
        )


class NonSeparablePowerError(LumpedParameterError):
    """A power mixing parameters and state variables through its exponent."""

    def __init__(self, expression: sp.Expr):
        super().__init__(
            expression,
            f"{expression} cannot be factored into lumped parameters, since it depends "
            "on both parameters and non-parameter variables in a non-multiplicative way.",
        )


class NonSeparableNonlinearTermError(LumpedParameterError):
    """A nonlinear term (sin, abs, division, ...) mixing parameters and state."""

    def __init__(self, expression: sp.Expr, kind: object):
        self.kind = kind
        kind_name = getattr(kind, "value", kind)
        super().__init__(
            expression,
            f"{expression} cannot be factored into lumped parameters, since it depends "
            f"on both parameters and non-parameter variables (operator kind: {kind_name}).",
        )
