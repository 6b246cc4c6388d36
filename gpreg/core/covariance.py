# gpreg/core/covariance.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Covariance matrices and their hyperparameter gradients.

Kernels follow the capability contract of `gpreg.kernel`: ``kernel(x, y)``
and ``kernel.gradient(x, y)`` broadcast over leading axes of rows of shape
(..., d). Symmetric matrices are evaluated on their lower triangle only
and then mirrored.
"""
import gpreg.num as gnp
from .linalg import cholesky_factor


def cross_covariance(xa, xb, kernel):
    """Covariance between each row of xa and each row of xb.

    Parameters
    ----------
    xa : array_like, shape (na, d)
    xb : array_like, shape (nb, d)
    kernel : kernel object

    Returns
    -------
    K : array_like, shape (na, nb)
        K[i, j] = kernel(xa[i], xb[j]).
    """
    return kernel(xa[:, None, :], xb[None, :, :])


def prior_covariance_diag(xt, kernel):
    """Return k(x, x) for each row x of xt, shape (m,)."""
    return kernel(xt, xt)


def _lower_triangle_pairs(xi):
    rows, cols = gnp.tril_indices(xi.shape[0])
    return rows, cols, xi[rows], xi[cols]


def training_covariance(xi, kernel, noise):
    """Covariance matrix of the training rows and its Cholesky factor.

    Parameters
    ----------
    xi : array_like, shape (n, d)
        Training rows.
    kernel : kernel object
    noise : float
        Standard deviation of the observation noise; noise² is added
        to the diagonal.

    Returns
    -------
    K : array_like, shape (n, n)
    C : array_like, shape (n, n)
        Lower-triangular factor, K = C Cᵀ.

    Raises
    ------
    FactorizationError
        If K is not positive definite.
    """
    n = xi.shape[0]
    rows, cols, x, y = _lower_triangle_pairs(xi)
    values = kernel(x, y)
    K = gnp.empty((n, n))
    K[rows, cols] = values
    K[cols, rows] = values
    K += noise**2 * gnp.eye(n)
    return K, cholesky_factor(K)


def gradient_matrices(xi, kernel):
    """Gradient of the noise-free covariance matrix w.r.t. each kernel parameter.

    Returns
    -------
    dK : array_like, shape (P, n, n)
        dK[p] = ∂K/∂θ_p, symmetric.
    """
    n = xi.shape[0]
    rows, cols, x, y = _lower_triangle_pairs(xi)
    values = gnp.moveaxis(kernel.gradient(x, y), -1, 0)  # (P, n(n+1)/2)
    dK = gnp.empty((values.shape[0], n, n))
    dK[:, rows, cols] = values
    dK[:, cols, rows] = values
    return dK
