"""Operator-kind tagging of SymPy expression nodes.

SymPy has no division, square-root or conditional node of its own: x/y is
``Mul(x, Pow(y, -1))``, sqrt(x) is ``Pow(x, 1/2)`` and conditionals are
``Piecewise``. :func:`expression_kind` maps each node onto the operator kinds
the decompositions reason about.
"""

from __future__ import annotations

from enum import Enum

import sympy as sp
from sympy.core.function import AppliedUndef


class ExpressionKind(Enum):
    CONSTANT = "constant"
    VARIABLE = "variable"
    ADDITION = "addition"
    MULTIPLICATION = "multiplication"
    POW = "pow"
    DIVISION = "division"
    SQRT = "sqrt"
    ABS = "abs"
    LOG = "log"
    EXP = "exp"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    ATAN2 = "atan2"
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"
    MIN = "min"
    MAX = "max"
    CEIL = "ceil"
    FLOOR = "floor"
    IF_THEN_ELSE = "if_then_else"
    UNINTERPRETED_FUNCTION = "uninterpreted_function"


_FUNCTION_KINDS = {
    sp.Abs: ExpressionKind.ABS,
    sp.log: ExpressionKind.LOG,
    sp.exp: ExpressionKind.EXP,
    sp.sin: ExpressionKind.SIN,
    sp.cos: ExpressionKind.COS,
    sp.tan: ExpressionKind.TAN,
    sp.asin: ExpressionKind.ASIN,
    sp.acos: ExpressionKind.ACOS,
    sp.atan: ExpressionKind.ATAN,
    sp.atan2: ExpressionKind.ATAN2,
    sp.sinh: ExpressionKind.SINH,
    sp.cosh: ExpressionKind.COSH,
    sp.tanh: ExpressionKind.TANH,
    sp.Min: ExpressionKind.MIN,
    sp.Max: ExpressionKind.MAX,
    sp.ceiling: ExpressionKind.CEIL,
    sp.floor: ExpressionKind.FLOOR,
    sp.Piecewise: ExpressionKind.IF_THEN_ELSE,
}


def expression_kind(e: sp.Expr) -> ExpressionKind:
    """Return the operator kind of the top-level node of e.

    Nodes without a dedicated kind (special functions, applied undefined
    functions, ...) are reported as uninterpreted functions.
    """
    if isinstance(e, sp.Symbol):
        return ExpressionKind.VARIABLE
    if e.is_number:
        return ExpressionKind.CONSTANT
    if isinstance(e, sp.Add):
        return ExpressionKind.ADDITION
    if isinstance(e, sp.Mul):
        return ExpressionKind.MULTIPLICATION
    if isinstance(e, sp.Pow):
        if e.exp == sp.S.Half:
            return ExpressionKind.SQRT
        if e.exp.is_number and e.exp.is_negative:
            return ExpressionKind.DIVISION
        return ExpressionKind.POW
    if isinstance(e, AppliedUndef):
        return ExpressionKind.UNINTERPRETED_FUNCTION
    return _FUNCTION_KINDS.get(e.func, ExpressionKind.UNINTERPRETED_FUNCTION)


NONLINEAR_KINDS = frozenset(
    kind
    for kind in ExpressionKind
    if kind
    not in (
        ExpressionKind.CONSTANT,
        ExpressionKind.VARIABLE,
        ExpressionKind.ADDITION,
        ExpressionKind.MULTIPLICATION,
        ExpressionKind.POW,
    )
)
