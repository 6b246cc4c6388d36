# gpreg/core/kriging.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Posterior mean, variance and covariance of a fitted Gaussian process.

These routines read the cached state of a `gpreg.core.GaussianProcess`
(prior, kernel, training rows, Cholesky factor C of K and weights
alpha = K^{-1}(zi - m(xi))) and never modify it.

Functions
---------
predict_mean(model, xt)
    m(xt) + K(xt, xi) alpha.
predict_variance(model, xt, zero_neg_variances=True)
    k(x, x) - k_xᵀ K^{-1} k_x for each row of xt.
predict_covariance(model, xt)
    K(xt, xt) - K(xt, xi) K^{-1} K(xi, xt).
sample_distribution(model, xt, method='chol')
    Posterior multivariate normal at xt.
"""
import warnings
import gpreg.num as gnp
from .covariance import cross_covariance, prior_covariance_diag
from .linalg import forward_solve
from .sample_paths import MultivariateNormal


def predict_mean(model, xt):
    """Posterior mean at the rows of xt, shape (m,)."""
    Kti = cross_covariance(xt, model.xi, model.kernel)
    return model.prior.mean(xt) + gnp.matmul(Kti, model.alpha)


def predict_variance(model, xt, zero_neg_variances=True):
    """Posterior variance at the rows of xt, shape (m,).

    With V = C^{-1} K(xi, xt), the variance at column j is
    k(x_j, x_j) - ||V[:, j]||², i.e. one triangular solve instead of
    two. Negative values produced by round-off are replaced with zero
    when `zero_neg_variances` is True.
    """
    Kit = cross_covariance(model.xi, xt, model.kernel)
    V = forward_solve(model.cholesky, Kit)
    zt_posterior_variance = prior_covariance_diag(xt, model.kernel) - gnp.sum(
        V * V, axis=0
    )
    return _postprocess_variance(zt_posterior_variance, zero_neg_variances)


def predict_covariance(model, xt):
    """Posterior covariance matrix at the rows of xt, shape (m, m)."""
    Kit = cross_covariance(model.xi, xt, model.kernel)
    V = forward_solve(model.cholesky, Kit)
    Ktt = cross_covariance(xt, xt, model.kernel)
    zt_posterior_covariance = Ktt - gnp.matmul(V.T, V)
    # symmetrize against round-off
    return 0.5 * (zt_posterior_covariance + zt_posterior_covariance.T)


def sample_distribution(model, xt, method="chol"):
    """Return the posterior `MultivariateNormal` at the rows of xt."""
    return MultivariateNormal(
        predict_mean(model, xt), predict_covariance(model, xt), method=method
    )


# --------------------------------------------------------------------------
# Internal helpers
# --------------------------------------------------------------------------
def _postprocess_variance(zt_posterior_variance, zero_neg_variances):
    # tolerance scaled on the prior variance; below it, negatives are round-off
    tol = gnp.sqrt(gnp.eps) * gnp.max(gnp.abs(zt_posterior_variance), initial=1.0)
    if gnp.any(zt_posterior_variance < -tol):
        warnings.warn(
            "Negative variances detected. Consider increasing the noise.",
            RuntimeWarning,
        )
    if zero_neg_variances:
        zt_posterior_variance = gnp.maximum(zt_posterior_variance, 0.0)
    return zt_posterior_variance
