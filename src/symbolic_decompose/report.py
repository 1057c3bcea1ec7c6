"""Human-readable reporting utilities.

Lightweight helpers producing console / Markdown text from decomposition
results. Nothing here is required for the decompositions themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import sympy as sp

from .lumped import LumpedParameterDecomposition


def _expr_to_str(e: sp.Expr) -> str:
    """Stable string for SymPy expressions in reports."""
    return sp.sstr(e)


@dataclass
class ReportOptions:
    """Tunable knobs for report verbosity."""

    max_rows: int = 12
    include_matrix: bool = False
    precision: int = 6


def _join_terms(terms: Sequence[str]) -> str:
    """Join term strings with " + ", folding a leading minus into " - "."""
    out = terms[0]
    for t in terms[1:]:
        out += f" - {t[1:]}" if t.startswith("-") else f" + {t}"
    return out


def _truncated(lines: List[str], total: int, max_rows: int, what: str) -> List[str]:
    if total > max_rows:
        lines.append(f"... ({total - max_rows} more {what})")
    return lines


def format_affine_rows(
    M: np.ndarray,
    v: np.ndarray,
    variables: Sequence[sp.Symbol],
    *,
    options: Optional[ReportOptions] = None,
) -> List[str]:
    """Format e_i = Σⱼ M[i,j]·xⱼ + v[i] as strings "e1 = ..."."""
    opt = options or ReportOptions()
    x = sp.Matrix(list(variables))
    lines: List[str] = []
    for i in range(min(M.shape[0], int(opt.max_rows))):
        row = sum((sp.Float(M[i, j], opt.precision) * x[j] for j in range(M.shape[1]) if M[i, j] != 0), sp.S.Zero)
        if v[i] != 0:
            row += sp.Float(v[i], opt.precision)
        lines.append(f"e{i+1} = {_expr_to_str(row)}")
    return _truncated(lines, M.shape[0], opt.max_rows, "rows")


def format_affine_decomposition(
    M: np.ndarray,
    v: np.ndarray,
    variables: Sequence[sp.Symbol],
    *,
    options: Optional[ReportOptions] = None,
) -> str:
    """Format an affine decomposition (M, v) over `variables`."""
    opt = options or ReportOptions()
    lines: List[str] = []
    lines.append(f"### affine ({M.shape[0]} rows, {len(variables)} variables)")
    lines.append("Variables: " + ", ".join(str(s) for s in variables))
    lines.extend("  " + s for s in format_affine_rows(M, v, variables, options=opt))
    if opt.include_matrix:
        lines.append("M =")
        lines.append(np.array2string(np.asarray(M), precision=opt.precision))
        lines.append("v =")
        lines.append(np.array2string(np.asarray(v), precision=opt.precision))
    return "\n".join(lines)


def format_lumped_decomposition(
    decomposition: LumpedParameterDecomposition,
    *,
    options: Optional[ReportOptions] = None,
) -> str:
    """Format f = W·alpha + w0 with one line per lumped parameter and row."""
    opt = options or ReportOptions()
    W, alpha, w0 = decomposition

    lines: List[str] = []
    lines.append(f"### lumped parameters ({W.rows} rows, {alpha.rows} lumped parameters)")

    if alpha.rows:
        lines.append("Lumped parameters:")
        for j in range(min(alpha.rows, int(opt.max_rows))):
            lines.append(f"  alpha{j+1} = {_expr_to_str(alpha[j, 0])}")
        _truncated(lines, alpha.rows, opt.max_rows, "lumped parameters")

    lines.append("Rows:")
    for i in range(min(W.rows, int(opt.max_rows))):
        terms = [f"({_expr_to_str(W[i, j])})*alpha{j+1}" for j in range(W.cols) if W[i, j] != 0]
        if w0[i, 0] != 0 or not terms:
            terms.append(_expr_to_str(w0[i, 0]))
        lines.append(f"  f{i+1} = " + _join_terms(terms))
    _truncated(lines, W.rows, opt.max_rows, "rows")

    if opt.include_matrix:
        lines.append("W =")
        lines.append(sp.pretty(W))
    return "\n".join(lines)


def lumped_decomposition_to_latex(decomposition: LumpedParameterDecomposition) -> str:
    """Render f = W·alpha + w0 as a LaTeX align environment."""
    W, alpha, w0 = decomposition
    lines = []
    for j in range(alpha.rows):
        lines.append(f"\\alpha_{{{j+1}}} &= {sp.latex(alpha[j, 0])}")
    for i in range(W.rows):
        terms = [f"\\left({sp.latex(W[i, j])}\\right) \\alpha_{{{j+1}}}" for j in range(W.cols) if W[i, j] != 0]
        if w0[i, 0] != 0 or not terms:
            terms.append(sp.latex(w0[i, 0]))
        lines.append(f"f_{{{i+1}}} &= " + " + ".join(terms))
    body = " \\\\\n".join(lines)
    return "\\begin{align}\n" + body + "\n\\end{align}"
