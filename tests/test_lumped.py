import numpy as np
import pytest
import sympy as sp

from symbolic_decompose import (
    ExpressionKind,
    LumpedFactorization,
    LumpedParameterDecomposer,
    NonSeparableNonlinearTermError,
    NonSeparablePowerError,
    UnsupportedMixedPowerError,
    decompose_lumped_parameters,
    factorize_lumped_parameters,
)
from symbolic_decompose.lumped import _multiply

x, y, x1, x2, a, b = sp.symbols("x y x1 x2 a b")
p, p1, p2, q = sp.symbols("p p1 p2 q")


def _assert_round_trip(e, parameters):
    W, alpha, w0 = factorize_lumped_parameters(e, parameters)
    params = set(parameters)
    for w in list(W) + [w0]:
        assert not (w.free_symbols & params)
    for al in alpha:
        assert al.free_symbols <= params
        assert al != 1
    rebuilt = sum((wi * ai for wi, ai in zip(W, alpha)), w0)
    assert sp.expand(rebuilt - e) == 0


def test_leaves():
    assert tuple(factorize_lumped_parameters(p, [p])) == ((1,), (p,), 0)
    assert tuple(factorize_lumped_parameters(x, [p])) == ((), (), x)
    assert tuple(factorize_lumped_parameters(sp.Integer(3), [p])) == ((), (), 3)


def test_simple_product():
    W, alpha, w0 = factorize_lumped_parameters(x * p + x**2, [p])
    assert W == (x,)
    assert alpha == (p,)
    assert w0 == x**2


def test_addition_merges_terms_with_identical_weights():
    W, alpha, w0 = factorize_lumped_parameters(x * p1 + x * p2 + 3, [p1, p2])
    assert W == (x,)
    assert alpha == (p1 + p2,)
    assert w0 == 3


def test_addition_keeps_distinct_weights_for_shared_alpha():
    W, alpha, w0 = factorize_lumped_parameters(a * p1 + b * p1, [p1])
    assert set(W) == {a, b}
    assert alpha == (p1, p1)
    assert w0 == 0


def test_vector_driver_merges_shared_alpha():
    W, alpha, w0 = decompose_lumped_parameters([a * p1 + b * p1], [p1])
    assert alpha == sp.Matrix([p1])
    assert W.shape == (1, 1)
    assert sp.expand(W[0, 0] - (a + b)) == 0
    assert w0 == sp.Matrix([0])


def test_vector_driver_shares_columns_across_rows():
    W, alpha, w0 = decompose_lumped_parameters([x1 * p, x2 * p], [p])
    assert alpha == sp.Matrix([p])
    assert W == sp.Matrix([[x1], [x2]])
    assert w0 == sp.Matrix([0, 0])


def test_vector_driver_round_trip():
    f = [
        x * p1 + y * p1 * p2 + sp.sin(x) * p2**2 + 2,
        (x + p1) ** 2 + sp.cos(q) * y,
        x / p2 - sp.exp(y),
    ]
    dec = decompose_lumped_parameters(f, [p1, p2, q])
    assert dec.W.shape == (3, dec.num_lumped_parameters)
    assert dec.alpha.shape == (dec.num_lumped_parameters, 1)
    assert dec.is_exact(f)
    assert len(set(dec.alpha)) == dec.alpha.rows


def test_round_trip_various_expressions():
    _assert_round_trip((x + p) ** 3, [p])
    _assert_round_trip(x * y * p1 * p2 - 2 * x * p1 + y, [p1, p2])
    _assert_round_trip(sp.exp(x + p) * y, [p])
    _assert_round_trip(sp.sin(p) * x + sp.Abs(x) * sp.sqrt(p), [p])
    _assert_round_trip(x * p / (1 + p**2), [p])


def test_parameter_only_and_state_only_expressions():
    W, alpha, w0 = factorize_lumped_parameters(p1 * p2 + p1**2, [p1, p2])
    assert W == (1,)
    assert sp.expand(alpha[0] - (p1 * p2 + p1**2)) == 0
    assert w0 == 0

    W, alpha, w0 = factorize_lumped_parameters(sp.sin(x) + x**2, [p])
    assert W == ()
    assert w0 == sp.sin(x) + x**2


def test_mixed_nonlinear_term_fails():
    with pytest.raises(NonSeparableNonlinearTermError) as info:
        factorize_lumped_parameters(sp.sin(x * p), [p])
    assert info.value.kind == ExpressionKind.SIN
    assert info.value.expression == sp.sin(x * p)


def test_mixed_division_fails():
    with pytest.raises(NonSeparableNonlinearTermError) as info:
        factorize_lumped_parameters(x / (x + p), [p])
    assert info.value.kind == ExpressionKind.DIVISION


def test_mixed_powers_fail():
    with pytest.raises(NonSeparablePowerError):
        factorize_lumped_parameters(x**p, [p])
    with pytest.raises(UnsupportedMixedPowerError):
        factorize_lumped_parameters((x + p) ** sp.Rational(1, 3), [p])


def test_vector_failure_aborts_whole_decomposition():
    with pytest.raises(NonSeparableNonlinearTermError):
        decompose_lumped_parameters([x * p, sp.tanh(x + p)], [p])


def test_multiply_skips_zero_constant_terms():
    fa = LumpedFactorization((x,), (p1,), sp.Integer(0))
    fb = LumpedFactorization((y,), (p2,), sp.Integer(2))
    W, alpha, w0 = _multiply(fa, fb)
    assert w0 == 0
    assert list(zip(W, alpha)) == [(x * y, p1 * p2), (2 * x, p1)]


def test_decomposer_rejects_non_symbol_parameters():
    with pytest.raises(ValueError):
        LumpedParameterDecomposer([p + 1])


def test_evaluate_alpha():
    dec = decompose_lumped_parameters([x * p1 * p2 + y * p2], [p1, p2])
    values = dec.evaluate_alpha({p1: 2.0, p2: 3.0})
    expected = [float(al.subs({p1: 2.0, p2: 3.0})) for al in dec.alpha]
    np.testing.assert_allclose(values, expected)
    with pytest.raises(ValueError):
        dec.evaluate_alpha({p1: 2.0})
