import numpy as np
import pytest
import sympy as sp

from symbolic_decompose import DegreeExceededError, decompose_quadratic_polynomial, extract_variables


def _quadratic_form(Q, b, c, xv):
    return 0.5 * xv @ Q @ xv + b @ xv + c


def test_quadratic_decomposition_reproduces_polynomial(rng):
    x, y, z = sp.symbols("x y z")
    e = 3 * x**2 + 2 * x * y - y * z + 5 * z - 7 + y**2 / 2
    variables, index = extract_variables(e)

    Q, b, c = decompose_quadratic_polynomial(sp.Poly(e, *variables), index)

    np.testing.assert_allclose(Q, Q.T)
    for _ in range(5):
        xv = rng.normal(size=len(variables))
        expected = float(e.subs(dict(zip(variables, xv))))
        assert _quadratic_form(Q, b, c, xv) == pytest.approx(expected)


def test_quadratic_decomposition_entries():
    x, y = sp.symbols("x y")
    Q, b, c = decompose_quadratic_polynomial(x**2 + 4 * x * y - 3 * y + 2, {x: 0, y: 1})
    np.testing.assert_allclose(Q, [[2, 4], [4, 0]])
    np.testing.assert_allclose(b, [0, -3])
    assert c == 2


def test_quadratic_decomposition_rejects_cubic():
    x, y = sp.symbols("x y")
    with pytest.raises(DegreeExceededError):
        decompose_quadratic_polynomial(x**2 * y, {x: 0, y: 1})


def test_quadratic_decomposition_rejects_bad_index_map():
    x = sp.Symbol("x")
    with pytest.raises(ValueError):
        decompose_quadratic_polynomial(x**2, {x: 3})
