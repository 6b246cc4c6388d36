# gpreg/core/sample_paths.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Sampling from the posterior distribution of a Gaussian process.

`MultivariateNormal` holds a mean vector, a covariance matrix and a
square-root factor of the covariance. Draws are taken with a random
generator supplied by the caller at each call, so the same object can
be sampled repeatedly and reproducibly.
"""
import gpreg.num as gnp
from .linalg import cholesky_factor


class MultivariateNormal:
    """Multivariate normal distribution N(mean, covariance).

    Parameters
    ----------
    mean : array_like, shape (m,)
    covariance : array_like, shape (m, m)
    method : {'chol','svd'}, optional (default: 'chol')
        Factorization used to draw samples.

    Notes
    -----
    - 'chol': covariance = C Cᵀ, draw as mean + C z. Raises
      `FactorizationError` if the covariance is not positive definite,
      which happens for instance when querying at training rows with a
      very small noise.
    - 'svd' : covariance = U diag(s) Uᵀ (symmetric eigendecomposition),
      draw as mean + U sqrt(diag(max(s, 0))) Uᵀ z. Negative eigenvalues
      coming from round-off are clamped to zero, so the factor is the
      square root of the nearest positive semi-definite matrix.
    """

    def __init__(self, mean, covariance, method="chol"):
        self.mean = gnp.asarray(mean).reshape(-1)
        self.covariance = gnp.asarray(covariance)
        m = self.mean.shape[0]
        if self.covariance.shape != (m, m):
            raise ValueError(
                f"covariance has shape {self.covariance.shape}, expected {(m, m)}"
            )
        if method == "chol":
            self.factor = cholesky_factor(self.covariance)
        elif method == "svd":
            s, U = gnp.eigh(self.covariance)
            s = gnp.maximum(s, 0.0)
            self.factor = gnp.matmul(U * gnp.sqrt(s), U.T)
        else:
            raise ValueError("method must be 'chol' or 'svd'")
        self.method = method

    def __repr__(self):
        return f"<gpreg.core.MultivariateNormal dim={self.dim} method={self.method!r}>"

    @property
    def dim(self):
        return self.mean.shape[0]

    def sample(self, rng, nb_paths=None):
        """Draw from the distribution.

        Parameters
        ----------
        rng : numpy.random.Generator
            Source of standard normal draws. Not stored.
        nb_paths : int, optional
            If None, return a single draw of shape (m,); otherwise return
            nb_paths independent draws stacked as columns, shape (m, nb_paths).
        """
        if nb_paths is None:
            z = gnp.randn(rng, self.dim)
            return self.mean + gnp.matmul(self.factor, z)
        z = gnp.randn(rng, self.dim, nb_paths)
        return self.mean[:, None] + gnp.matmul(self.factor, z)
