from __future__ import annotations

from typing import Any, Dict, Iterator, List, Tuple

import numpy as np
import sympy as sp


def as_expression_list(expressions: Any) -> List[sp.Expr]:
    """Flatten a single expression or a sequence of expressions into a list.

    Accepts a SymPy expression, a list/tuple of expressions, a SymPy matrix
    (read in row-major order) or a NumPy object array.
    """
    if isinstance(expressions, sp.MatrixBase):
        return [sp.sympify(e) for e in expressions]
    if isinstance(expressions, np.ndarray):
        return [sp.sympify(e) for e in expressions.ravel()]
    if isinstance(expressions, (list, tuple)):
        return [sp.sympify(e) for e in expressions]
    return [sp.sympify(expressions)]


def _iter_free_symbols(e: sp.Expr) -> Iterator[sp.Symbol]:
    """Yield the free symbols of e in depth-first pre-order (with repeats)."""
    free = e.free_symbols
    if not free:
        return
    for node in sp.preorder_traversal(e):
        if isinstance(node, sp.Symbol) and node in free:
            yield node


def extract_and_append_variables(
    e: sp.Expr,
    variables: List[sp.Symbol],
    var_to_index: Dict[sp.Symbol, int],
) -> None:
    """Append the variables of e that are not yet indexed.

    `variables` and `var_to_index` are updated in place; new variables get the
    next free position, in order of first appearance in e.
    """
    if len(variables) != len(var_to_index):
        raise ValueError("variables and var_to_index must have the same size")
    for var in _iter_free_symbols(sp.sympify(e)):
        if var not in var_to_index:
            var_to_index[var] = len(variables)
            variables.append(var)


def extract_variables(expressions: Any) -> Tuple[List[sp.Symbol], Dict[sp.Symbol, int]]:
    """Collect the distinct free variables of one or more expressions.

    Parameters
    ----------
    expressions:
        A single expression or an ordered sequence of expressions.

    Returns
    -------
    (variables, var_to_index)
        `variables` lists each free symbol once, in order of first appearance
        (depth-first over each expression, expressions in sequence order).
        `var_to_index` maps each symbol to its position in `variables`.
    """
    variables: List[sp.Symbol] = []
    var_to_index: Dict[sp.Symbol, int] = {}
    for e in as_expression_list(expressions):
        extract_and_append_variables(e, variables, var_to_index)
    return variables, var_to_index


def check_index_map(var_to_index: Dict[sp.Symbol, int]) -> int:
    """Validate that positions are exactly 0..n-1 and return n."""
    n = len(var_to_index)
    if sorted(int(i) for i in var_to_index.values()) != list(range(n)):
        raise ValueError(f"var_to_index must map onto the positions 0..{n - 1}")
    return n
