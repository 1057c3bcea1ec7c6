"""Top-level package API for symbolic_decompose.

This package decomposes SymPy expressions into the algebraic normal forms used
when building linear, quadratic and conic optimization problems from symbolic
models:

- linear / affine coefficient extraction (e = M·x + v),
- quadratic forms (0.5·xᵀQx + bᵀx + c),
- recognition of Euclidean norms (|A·x + b|₂),
- lumped-parameter factorization (f = W(x)·α(p) + w0(x)).

Public API:
- extract_variables, extract_and_append_variables
- is_affine, decompose_linear_expressions, decompose_affine_expressions,
  decompose_affine_expression, extract_and_decompose_affine
- decompose_quadratic_polynomial
- decompose_l2_norm_expression, decompose_psd_matrix_into_xtx
- LumpedParameterDecomposer, factorize_lumped_parameters,
  decompose_lumped_parameters
"""

from .log_config import setup_logging
from .errors import (
    DecompositionError,
    InputNotPolynomialError,
    DegreeExceededError,
    UnexpectedConstantTermError,
    NonConstantCoefficientError,
    LumpedParameterError,
    UnsupportedMixedPowerError,
    NonSeparablePowerError,
    NonSeparableNonlinearTermError,
)
from .variables import extract_variables, extract_and_append_variables
from .kinds import ExpressionKind, expression_kind
from .affine import (
    is_affine,
    decompose_linear_expressions,
    decompose_affine_expressions,
    decompose_affine_expression,
    extract_and_decompose_affine,
)
from .quadratic import decompose_quadratic_polynomial
from .linalg import decompose_psd_matrix_into_xtx
from .l2norm import L2NormDecomposition, decompose_l2_norm_expression
from .lumped import (
    LumpedFactorization,
    LumpedParameterDecomposition,
    LumpedParameterDecomposer,
    factorize_lumped_parameters,
    decompose_lumped_parameters,
)
from .report import (
    ReportOptions,
    format_affine_decomposition,
    format_lumped_decomposition,
    lumped_decomposition_to_latex,
)

__all__ = [
    "setup_logging",
    "DecompositionError",
    "InputNotPolynomialError",
    "DegreeExceededError",
    "UnexpectedConstantTermError",
    "NonConstantCoefficientError",
    "LumpedParameterError",
    "UnsupportedMixedPowerError",
    "NonSeparablePowerError",
    "NonSeparableNonlinearTermError",
    "extract_variables",
    "extract_and_append_variables",
    "ExpressionKind",
    "expression_kind",
    "is_affine",
    "decompose_linear_expressions",
    "decompose_affine_expressions",
    "decompose_affine_expression",
    "extract_and_decompose_affine",
    "decompose_quadratic_polynomial",
    "decompose_psd_matrix_into_xtx",
    "L2NormDecomposition",
    "decompose_l2_norm_expression",
    "LumpedFactorization",
    "LumpedParameterDecomposition",
    "LumpedParameterDecomposer",
    "factorize_lumped_parameters",
    "decompose_lumped_parameters",
    "ReportOptions",
    "format_affine_decomposition",
    "format_lumped_decomposition",
    "lumped_decomposition_to_latex",
]
