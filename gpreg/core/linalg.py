# gpreg/core/linalg.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Cholesky-based linear-algebra utilities shared across gpreg.core modules.

All solves against a covariance matrix K go through its lower-triangular
Cholesky factor C (K = C Cᵀ). No inverse of K is ever formed.
"""
import gpreg.num as gnp
from gpreg.config import get_logger
from .errors import FactorizationError

_logger = get_logger()


def cholesky_factor(K):
    """Return the lower-triangular Cholesky factor of K.

    Parameters
    ----------
    K : array_like, shape (n, n)
        Symmetric matrix.

    Returns
    -------
    C : array_like, shape (n, n)
        Lower-triangular factor with K = C Cᵀ.

    Raises
    ------
    FactorizationError
        If K is not positive definite or contains non-finite entries.
    """
    if not gnp.all(gnp.isfinite(K)):
        _logger.debug("Cholesky factorization refused: non-finite entries.")
        raise FactorizationError("Covariance matrix contains non-finite entries.")
    try:
        C = gnp.cholesky(K)
    except Exception as exc:
        if gnp._is_linalg_exception(exc):
            _logger.debug("Cholesky factorization failed: %s", exc)
            raise FactorizationError(
                "Cholesky decomposition failed: the covariance matrix is not "
                "positive definite (duplicate inputs or noise too small?)."
            ) from exc
        raise
    if not gnp.all(gnp.isfinite(C)):
        raise FactorizationError("Cholesky decomposition produced non-finite values.")
    return C


def forward_solve(C, b):
    """Return C^{-1} b for a lower-triangular C."""
    return gnp.solve_triangular(C, b, lower=True)


def cholesky_solve(C, b):
    """Solve K x = b given the Cholesky factor C of K.

    Parameters
    ----------
    C : array_like, shape (n, n)
        Lower-triangular factor, K = C Cᵀ.
    b : array_like, shape (n,) or (n, m)
        Right-hand side(s).

    Returns
    -------
    x : array_like, same shape as b
    """
    y = gnp.solve_triangular(C, b, lower=True)
    return gnp.solve_triangular(C.T, y, lower=False)


def log_determinant(C):
    """Return log|K| = 2 Σ log C_ii from the Cholesky factor C of K."""
    return 2.0 * gnp.sum(gnp.log(gnp.diag(C)))


def trace_solve(C, A):
    """Return trace(K^{-1} A) given the Cholesky factor C of K."""
    return gnp.trace(cholesky_solve(C, A))
