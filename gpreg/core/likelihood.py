# gpreg/core/likelihood.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Log marginal likelihood and its gradient.

All functions take the cached quantities of a fitted model: the centered
outputs r = zi - m(xi), the weights alpha = K^{-1} r and the Cholesky
factor C of K. Traces involving K^{-1} are evaluated through Cholesky
solves.
"""
import gpreg.num as gnp
from .linalg import log_determinant, trace_solve


def log_likelihood(zi_centered, alpha, C):
    """Log marginal likelihood of the observations.

    Parameters
    ----------
    zi_centered : array_like, shape (n,)
        Outputs minus the prior mean at the training rows.
    alpha : array_like, shape (n,)
        K^{-1} zi_centered.
    C : array_like, shape (n, n)
        Cholesky factor of K.

    Returns
    -------
    ll : float
        -1/2 rᵀ K^{-1} r - 1/2 log|K| - n/2 log(2π)
    """
    n = zi_centered.shape[0]
    norm2 = gnp.einsum("i, i", zi_centered, alpha)
    ldetK = log_determinant(C)
    return gnp.to_scalar(-0.5 * (norm2 + ldetK + n * gnp.log(2.0 * gnp.pi)))


def negative_log_likelihood(zi_centered, alpha, C):
    """Negated `log_likelihood`, for minimisation-oriented callers."""
    return -log_likelihood(zi_centered, alpha, C)


def _gradient_term(alpha, C, dK):
    # 1/2 trace((alpha alphaᵀ - K^{-1}) dK) = 1/2 (alphaᵀ dK alpha - trace(K^{-1} dK))
    return 0.5 * (gnp.einsum("i, ij, j", alpha, dK, alpha) - trace_solve(C, dK))


def log_likelihood_gradient_kernel(alpha, C, dK):
    """Gradient of the log likelihood w.r.t. the kernel parameters.

    Parameters
    ----------
    alpha : array_like, shape (n,)
    C : array_like, shape (n, n)
    dK : array_like, shape (P, n, n)
        Covariance gradient matrices, see
        `gpreg.core.covariance.gradient_matrices`.

    Returns
    -------
    grad : array_like, shape (P,)
    """
    grad = gnp.zeros((dK.shape[0],))
    for p in range(dK.shape[0]):
        grad[p] = _gradient_term(alpha, C, dK[p])
    return grad


def log_likelihood_gradient_noise(alpha, C, noise):
    """Derivative of the log likelihood w.r.t. the noise standard deviation.

    The diagonal term noise² gives dK/dnoise = 2 noise I.
    """
    n = alpha.shape[0]
    return gnp.to_scalar(_gradient_term(alpha, C, 2.0 * noise * gnp.eye(n)))


def log_likelihood_gradient_prior(alpha, dm):
    """Gradient of the log likelihood w.r.t. the prior parameters.

    Parameters
    ----------
    alpha : array_like, shape (n,)
    dm : array_like, shape (n, Q)
        Jacobian of the prior mean at the training rows.

    Returns
    -------
    grad : array_like, shape (Q,)
        dmᵀ alpha, since ∂r/∂θ = -dm.
    """
    return gnp.matmul(dm.T, alpha)
