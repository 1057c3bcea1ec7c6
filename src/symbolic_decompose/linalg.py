from __future__ import annotations

import numpy as np
from scipy.linalg import eigh


def decompose_psd_matrix_into_xtx(
    Y: np.ndarray,
    zero_tol: float,
    return_empty_if_not_psd: bool = False,
) -> np.ndarray:
    """Factor a positive semidefinite matrix as Y = XᵀX.

    Parameters
    ----------
    Y:
        Square symmetric matrix.
    zero_tol:
        Eigenvalues in [-zero_tol, zero_tol] are treated as zero; an eigenvalue
        below -zero_tol means Y is not PSD.
    return_empty_if_not_psd:
        If True, return a ``0 × n`` array instead of raising when Y is not PSD.

    Returns
    -------
    X:
        ``r × n`` array with one row per eigenvalue larger than `zero_tol`. Rows are
        normalized so the result does not depend on the eigensolver's sign
        choices.
    """
    Y = np.asarray(Y, dtype=float)
    if Y.ndim != 2 or Y.shape[0] != Y.shape[1]:
        raise ValueError(f"Y must be square; got shape {Y.shape}")
    if zero_tol < 0:
        raise ValueError("zero_tol should be non-negative")

    n = Y.shape[0]
    if n == 0:
        return np.zeros((0, 0))

    w, V = eigh(Y)
    if w[0] < -zero_tol:
        if return_empty_if_not_psd:
            return np.zeros((0, n))
        raise ValueError(f"Y is not positive semidefinite (min eigenvalue {w[0]:g})")

    keep = w > zero_tol
    X = np.sqrt(w[keep])[:, None] * V[:, keep].T

    # Canonical form: largest-magnitude entry of each row is positive, rows
    # sorted by the column of that entry.
    pivots = np.argmax(np.abs(X), axis=1)
    signs = np.sign(X[np.arange(X.shape[0]), pivots])
    signs[signs == 0] = 1.0
    X = X * signs[:, None]
    return X[np.argsort(pivots, kind="stable")]
