"""Lumped-parameter factorization.

Given an expression e and a set of parameters p, the factorization rewrites e as

    e = Σᵢ Wᵢ(x)·αᵢ(p) + w0(x),

where x are the remaining ("state") variables. The αᵢ are the *lumped
parameters*: once they are treated as new unknowns, e is linear in them.
This is the form used to build identification problems that are linear in
the lumped parameters (e.g. least-squares system identification of
mechanical models whose dynamics are affine in mass/inertia terms).

The factorization walks the (expanded) expression tree bottom-up and
combines sub-results per operator kind:

- variables and constants are leaves;
- sums merge the sub-factorizations of their terms;
- products multiply sub-factorizations pairwise;
- powers and nonlinear functions are accepted only when they depend on
  parameters alone or on state variables alone.

Anything that couples x and p in a way that is not a finite sum of
(state term)·(parameter term) products raises a
:class:`~symbolic_decompose.errors.LumpedParameterError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Iterable, Iterator, List, Mapping, NamedTuple, Tuple

import numpy as np
import sympy as sp

from .errors import (
    NonSeparableNonlinearTermError,
    NonSeparablePowerError,
    UnsupportedMixedPowerError,
)
from .kinds import NONLINEAR_KINDS, ExpressionKind, expression_kind
from .polynomial import is_zero_constant
from .variables import as_expression_list

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LumpedFactorization:
    """Factorization e = Σᵢ weights[i]·alpha[i] + w0 of a single expression.

    Parameters
    ----------
    weights:
        Expressions in the state variables only.
    alpha:
        Expressions in the parameters only, paired position-wise with `weights`.
    w0:
        The parameter-independent remainder.

    Notes
    -----
    Unpacks as a 3-tuple: ``W, alpha, w0 = factorization``.
    """

    weights: Tuple[sp.Expr, ...]
    alpha: Tuple[sp.Expr, ...]
    w0: sp.Expr

    def __post_init__(self) -> None:
        if len(self.weights) != len(self.alpha):
            raise ValueError("weights and alpha must have the same length")

    def __iter__(self) -> Iterator[Any]:
        return iter((self.weights, self.alpha, self.w0))

    def to_expression(self) -> sp.Expr:
        """Return Σᵢ weights[i]·alpha[i] + w0."""
        return sp.Add(*[w * a for w, a in zip(self.weights, self.alpha)]) + self.w0


_ONE = sp.S.One
_ZERO = sp.S.Zero


def _parameter_term(e: sp.Expr) -> LumpedFactorization:
    # W = [1], alpha = [e], w0 = 0
    return LumpedFactorization((_ONE,), (e,), _ZERO)


def _state_term(e: sp.Expr) -> LumpedFactorization:
    # W = [], alpha = [], w0 = e
    return LumpedFactorization((), (), e)


def _multiply(a: LumpedFactorization, b: LumpedFactorization) -> LumpedFactorization:
    """Product of two factorizations.

    a·b = (wa·αa + w0a)(wb·αb + w0b)
        = w0a·w0b + Σᵢⱼ waᵢ·wbⱼ·αaᵢ·αbⱼ + Σⱼ w0a·wbⱼ·αbⱼ + Σᵢ w0b·waᵢ·αaᵢ
    """
    # Skip terms with a zero factor, otherwise they accumulate quickly.
    nonzero_w0a = not is_zero_constant(a.w0)
    nonzero_w0b = not is_zero_constant(b.w0)

    weights: List[sp.Expr] = []
    alpha: List[sp.Expr] = []
    for wa, aa in zip(a.weights, a.alpha):
        for wb, ab in zip(b.weights, b.alpha):
            weights.append(wa * wb)
            alpha.append(aa * ab)
    if nonzero_w0a:
        weights.extend(a.w0 * wb for wb in b.weights)
        alpha.extend(b.alpha)
    if nonzero_w0b:
        weights.extend(b.w0 * wa for wa in a.weights)
        alpha.extend(a.alpha)
    return LumpedFactorization(tuple(weights), tuple(alpha), a.w0 * b.w0)


def _as_parameter_set(parameters: Iterable[sp.Symbol]) -> FrozenSet[sp.Symbol]:
    if isinstance(parameters, sp.Symbol):
        parameters = [parameters]
    out = frozenset(parameters)
    for p in out:
        if not isinstance(p, sp.Symbol):
            raise ValueError(f"parameters must be SymPy symbols; got {p!r}")
    return out


class LumpedParameterDecomposition(NamedTuple):
    """Shared factorization f = W·alpha + w0 of a vector of expressions.

    W is an m×k SymPy matrix in the state variables, alpha a k×1 matrix of
    distinct parameter expressions, w0 an m×1 matrix in the state variables.
    """

    W: sp.Matrix
    alpha: sp.Matrix
    w0: sp.Matrix

    @property
    def num_lumped_parameters(self) -> int:
        return self.alpha.rows

    def to_expressions(self) -> sp.Matrix:
        """Return W·alpha + w0."""
        return self.W * self.alpha + self.w0

    def is_exact(self, f: Any) -> bool:
        """Check symbolically that W·alpha + w0 expands to the same as f."""
        exprs = as_expression_list(f)
        rebuilt = list(self.to_expressions())
        if len(exprs) != len(rebuilt):
            return False
        return all(sp.expand(r - e) == 0 for r, e in zip(rebuilt, exprs))

    def evaluate_alpha(self, parameter_values: Mapping[sp.Symbol, float]) -> np.ndarray:
        """Evaluate the lumped parameters numerically.

        Parameters
        ----------
        parameter_values:
            Value for every parameter symbol appearing in alpha.
        """
        if self.alpha.rows == 0:
            return np.zeros(0)
        params = sorted(self.alpha.free_symbols, key=sp.default_sort_key)
        missing = [p for p in params if p not in parameter_values]
        if missing:
            raise ValueError(f"missing values for parameters {missing}")
        alpha_num = sp.lambdify(params, self.alpha, modules="numpy")
        values = [float(parameter_values[p]) for p in params]
        return np.array(alpha_num(*values), dtype=float).reshape((self.alpha.rows,))


class LumpedParameterDecomposer:
    """Factor expressions into state-dependent weights times lumped parameters.

    Parameters
    ----------
    parameters:
        Symbols treated as parameters. Every other free symbol is a state
        variable.

    Examples
    --------
    >>> x, p = sp.symbols("x p")
    >>> LumpedParameterDecomposer([p]).factorize(x * p + x**2)
    LumpedFactorization(weights=(x,), alpha=(p,), w0=x**2)
    """

    def __init__(self, parameters: Iterable[sp.Symbol]):
        self.parameters = _as_parameter_set(parameters)
        self._handlers: Dict[ExpressionKind, Callable[[sp.Expr], LumpedFactorization]] = {
            ExpressionKind.CONSTANT: self._visit_constant,
            ExpressionKind.VARIABLE: self._visit_variable,
            ExpressionKind.ADDITION: self._visit_addition,
            ExpressionKind.MULTIPLICATION: self._visit_multiplication,
            ExpressionKind.POW: self._visit_pow,
        }

    def factorize(self, e: Any) -> LumpedFactorization:
        """Factor a scalar expression.

        The expression is expanded once up front; the tree walk then relies on
        sums of products being at the top.
        """
        return self._visit(sp.expand(sp.sympify(e)))

    def decompose(self, f: Any) -> LumpedParameterDecomposition:
        """Factor a vector of expressions over one shared set of lumped parameters.

        Identical (structurally equal) parameter expressions from different
        rows, or from different terms of one row, share a column of W.
        """
        exprs = as_expression_list(f)
        m = len(exprs)
        logger.debug("Decomposing %d expressions over parameters %s", m, sorted(self.parameters, key=str))

        # alpha -> column of W
        alpha_map: Dict[sp.Expr, List[sp.Expr]] = {}
        w0: List[sp.Expr] = []
        for i, e in enumerate(exprs):
            weights, alpha, this_w0 = self.factorize(e)
            w0.append(this_w0)
            for w, a in zip(weights, alpha):
                column = alpha_map.setdefault(a, [_ZERO] * m)
                column[i] += w

        keys = sorted(alpha_map, key=sp.default_sort_key)
        W = sp.Matrix.zeros(m, len(keys))
        for j, key in enumerate(keys):
            for i, w in enumerate(alpha_map[key]):
                W[i, j] = w
        return LumpedParameterDecomposition(W, sp.Matrix(len(keys), 1, keys), sp.Matrix(m, 1, w0))

    # -----------------------------
    # Visitors
    # -----------------------------

    def _visit(self, e: sp.Expr) -> LumpedFactorization:
        kind = expression_kind(e)
        if kind in NONLINEAR_KINDS:
            return self._visit_nonpolynomial_term(e, kind)
        return self._handlers[kind](e)

    def _visit_constant(self, e: sp.Expr) -> LumpedFactorization:
        return _state_term(e)

    def _visit_variable(self, e: sp.Expr) -> LumpedFactorization:
        if e in self.parameters:
            return _parameter_term(e)
        return _state_term(e)

    def _visit_addition(self, e: sp.Expr) -> LumpedFactorization:
        # e = c₀ + Σᵢ cᵢ·eᵢ
        #   => [c₁w₁, c₂w₂, ...]·[α₁, α₂, ...] + (c₀ + Σᵢ cᵢ·w0ᵢ)
        # with terms sharing the same weight merged.
        c0, terms = e.as_coeff_add()
        w0 = c0
        w_map: Dict[sp.Expr, sp.Expr] = {}
        for term in terms:
            c_i, e_i = term.as_coeff_Mul()
            w_i, alpha_i, w0_i = self._visit(e_i)
            w0 += c_i * w0_i
            # TODO: also merge weights that only differ by a constant factor.
            for w, a in zip(w_i, alpha_i):
                key = c_i * w
                w_map[key] = w_map.get(key, _ZERO) + a

        keys = sorted(w_map, key=sp.default_sort_key)
        return LumpedFactorization(tuple(keys), tuple(w_map[k] for k in keys), w0)

    def _visit_multiplication(self, e: sp.Expr) -> LumpedFactorization:
        """Multiply the factorizations of the factors of e.

        A mixed factor with a negative exponent, such as ``(x + p)**-1``, is
        tagged as a division and fails as a nonlinear term rather than through
        the power rule.
        """
        # e = c·∏ᵢ baseᵢ^expᵢ; factors with exponent 1 are visited directly,
        # powers go through the Pow (or division/sqrt) rules.
        c, rest = e.as_coeff_Mul()
        f = _state_term(c)
        for factor in sp.Mul.make_args(rest):
            f = _multiply(f, self._visit(factor))
        return f

    def _visit_pow(self, e: sp.Expr) -> LumpedFactorization:
        variables = e.free_symbols
        if variables <= self.parameters:
            return _parameter_term(e)
        if not (variables & self.parameters):
            return _state_term(e)
        if e.exp.is_number:
            raise UnsupportedMixedPowerError(e)
        raise NonSeparablePowerError(e)

    def _visit_nonpolynomial_term(self, e: sp.Expr, kind: ExpressionKind) -> LumpedFactorization:
        # Must be either all parameters or all state variables.
        variables = e.free_symbols
        if variables <= self.parameters:
            return _parameter_term(e)
        if not (variables & self.parameters):
            return _state_term(e)
        raise NonSeparableNonlinearTermError(e, kind)


def factorize_lumped_parameters(e: Any, parameters: Iterable[sp.Symbol]) -> LumpedFactorization:
    """Factor e = Σᵢ Wᵢ(x)·αᵢ(p) + w0(x) for parameters p."""
    return LumpedParameterDecomposer(parameters).factorize(e)


def decompose_lumped_parameters(f: Any, parameters: Iterable[sp.Symbol]) -> LumpedParameterDecomposition:
    """Factor f = W(x)·α(p) + w0(x) for a vector of expressions f.

    Parameters
    ----------
    f:
        A single expression or a sequence of m expressions.
    parameters:
        Parameter symbols p.

    Returns
    -------
    LumpedParameterDecomposition
        ``(W, alpha, w0)`` with W m×k, alpha k×1, w0 m×1 SymPy matrices.

    Raises
    ------
    UnsupportedMixedPowerError, NonSeparablePowerError, NonSeparableNonlinearTermError
        If some row cannot be written in this form. No partial result is
        returned.
    """
    return LumpedParameterDecomposer(parameters).decompose(f)
