import numpy as np
import pytest
import sympy as sp

from symbolic_decompose import (
    DegreeExceededError,
    InputNotPolynomialError,
    NonConstantCoefficientError,
    UnexpectedConstantTermError,
    decompose_affine_expression,
    decompose_affine_expressions,
    decompose_linear_expressions,
    extract_and_decompose_affine,
    is_affine,
)

x, y, z = sp.symbols("x y z")


def test_is_affine_examples():
    assert is_affine(sp.Matrix([]))
    assert is_affine([[x + 2 * y]])
    assert not is_affine([[x * x]])
    assert not is_affine([[x + 1, sp.sin(y)]])


def test_is_affine_with_restricting_variables():
    # Degree is computed in the restricting set only.
    assert is_affine([[x * y + z]], variables=[x])
    assert not is_affine([[x * y + z]], variables=[x, y])
    assert is_affine([[sp.sin(y) * x]], variables=[x])
    assert is_affine([[x**2]], variables=[])


def test_linear_decomposition_recovers_coefficients():
    M = decompose_linear_expressions([2 * x - 3 * z, y / 2, sp.Integer(0)], [x, y, z])
    np.testing.assert_allclose(M, [[2, 0, -3], [0, 0.5, 0], [0, 0, 0]])


def test_linear_decomposition_rejects_constant_term():
    with pytest.raises(UnexpectedConstantTermError) as info:
        decompose_linear_expressions([x + 1], [x])
    assert info.value.constant == 1
    assert info.value.variables == (x,)


def test_linear_decomposition_rejects_nonlinear_and_nonpolynomial():
    with pytest.raises(DegreeExceededError):
        decompose_linear_expressions([x * y], [x, y])
    with pytest.raises(InputNotPolynomialError):
        decompose_linear_expressions([sp.cos(x)], [x])


def test_linear_decomposition_rejects_symbolic_coefficient():
    # y is not an indeterminate here, so it ends up in a coefficient.
    with pytest.raises(NonConstantCoefficientError):
        decompose_linear_expressions([x * y], [x])


def test_linear_decomposition_rejects_duplicate_variables():
    with pytest.raises(ValueError):
        decompose_linear_expressions([x], [x, x])


def test_affine_decomposition():
    M, v = decompose_affine_expressions([x + 2 * y + 3, 4 * z - 1.5], [x, y, z])
    np.testing.assert_allclose(M, [[1, 2, 0], [0, 0, 4]])
    np.testing.assert_allclose(v, [3, -1.5])


def test_affine_decomposition_expands_products():
    M, v = decompose_affine_expressions([(x + 1) * 3 - (x - y)], [x, y])
    np.testing.assert_allclose(M, [[2, 1]])
    np.testing.assert_allclose(v, [3])


def test_extract_and_decompose_affine():
    M, v, variables = extract_and_decompose_affine([x + 2 * y + 1, 3 * z])
    assert set(variables) == {x, y, z}
    assert variables[-1] == z

    col = {var: j for j, var in enumerate(variables)}
    assert M.shape == (2, 3)
    assert M[0, col[x]] == 1
    assert M[0, col[y]] == 2
    assert M[1, col[z]] == 3
    assert M[1, col[x]] == 0
    np.testing.assert_allclose(v, [1, 0])


def test_extract_and_decompose_affine_rejects_quadratic():
    with pytest.raises(DegreeExceededError):
        extract_and_decompose_affine([x + 1, y * y])


def test_decompose_affine_expression_counts_nonzero_coefficients():
    index = {x: 0, y: 1, z: 2}
    num, coeffs, constant = decompose_affine_expression(2 * x - z + 4, index)
    assert num == 2
    np.testing.assert_allclose(coeffs, [2, 0, -1])
    assert constant == 4


def test_decompose_affine_expression_preconditions():
    with pytest.raises(ValueError):
        decompose_affine_expression(x, {x: 1})
    with pytest.raises(ValueError):
        decompose_affine_expression(x + y, {x: 0})
    with pytest.raises(InputNotPolynomialError):
        decompose_affine_expression(sp.sqrt(x), {x: 0})
