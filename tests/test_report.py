import sympy as sp

from symbolic_decompose import (
    ReportOptions,
    decompose_lumped_parameters,
    extract_and_decompose_affine,
    format_affine_decomposition,
    format_lumped_decomposition,
    lumped_decomposition_to_latex,
)

x, y, p = sp.symbols("x y p")


def test_format_lumped_decomposition():
    dec = decompose_lumped_parameters([x * p + 1, y * p], [p])
    text = format_lumped_decomposition(dec)

    assert "1 lumped parameters" in text
    assert "alpha1 = p" in text
    assert "f1 = (x)*alpha1 + 1" in text
    assert "f2 = (y)*alpha1" in text


def test_format_lumped_decomposition_truncates_rows():
    dec = decompose_lumped_parameters([x * p, y * p, x + y], [p])
    text = format_lumped_decomposition(dec, options=ReportOptions(max_rows=1))
    assert "... (2 more rows)" in text


def test_lumped_decomposition_to_latex():
    dec = decompose_lumped_parameters([x * p], [p])
    tex = lumped_decomposition_to_latex(dec)
    assert tex.startswith("\\begin{align}")
    assert "\\alpha_{1} &= p" in tex


def test_format_affine_decomposition():
    M, v, variables = extract_and_decompose_affine([2 * x + 1, y])
    text = format_affine_decomposition(M, v, variables, options=ReportOptions(include_matrix=True))
    assert text.startswith("### affine (2 rows, 2 variables)")
    assert "e2 = " in text
    assert "M =" in text


def test_format_lumped_decomposition_folds_negative_terms():
    u = sp.Symbol("u")
    dec = decompose_lumped_parameters([x * p - u], [p])
    text = format_lumped_decomposition(dec)
    assert "f1 = (x)*alpha1 - u" in text
    assert "+ -" not in text
