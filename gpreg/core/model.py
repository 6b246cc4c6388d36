# gpreg/core/model.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian process regression model.
"""
import gpreg.num as gnp
from gpreg.config import get_config, get_logger

from . import covariance
from . import kriging
from . import likelihood
from . import optimizer
from . import utils
from .errors import FactorizationError
from .linalg import cholesky_solve

_logger = get_logger()


class GaussianProcess:
    """Gaussian Process (GP) regression model.

    The model owns its training data, a prior mean function, a kernel,
    the noise standard deviation and a cache made of the Cholesky factor
    C of the training covariance K (noise² on the diagonal) and of the
    weights alpha = K^{-1} (zi - prior.mean(xi)). The cache is rebuilt
    by every operation that changes the data or the parameters.

    Attributes
    ----------
    prior : object
        Prior mean, see `gpreg.kernel.Prior`. The prior is the value to
        which the process regresses in the absence of information.
    kernel : object
        Covariance function, see `gpreg.kernel.Kernel`.
    noise : float
        Standard deviation of the observation noise.

    Public API (methods)
    --------------------
    predict, predict_several
        Posterior mean.
    predict_variance, predict_variance_several
        Posterior variance (non-negative).
    predict_covariance_several
        Posterior covariance matrix.
    sample_at, sample_at_several
        Posterior `MultivariateNormal` at query rows.
    likelihood
        Log marginal likelihood of the training data.
    optimize_parameters, fit_parameters
        Hyperparameter selection by gradient ascent.
    add_samples, add_samples_fit
        Extend the training set.

    Examples
    --------
    >>> import numpy as np
    >>> import gpreg
    >>> xi = [[0.8], [1.2], [3.8], [4.2]]
    >>> zi = [3.0, 4.0, -2.0, -2.0]
    >>> gp = gpreg.GaussianProcess.default(xi, zi)
    >>> mean, var = gp.predict([1.0]), gp.predict_variance([1.0])
    >>> info = gp.optimize_parameters(100, 0.01)
    >>> sampler = gp.sample_at_several([[1.0], [2.0]])
    >>> draw = sampler.sample(np.random.default_rng(0))
    """

    def __init__(self, prior, kernel, noise, xi, zi):
        """
        Parameters
        ----------
        prior : object
            Prior mean function.
        kernel : object
            Covariance function.
        noise : float
            Standard deviation of the observation noise.
        xi : array_like, shape (n, d)
            Training rows.
        zi : array_like, shape (n,)
            Training outputs.

        Raises
        ------
        ValueError
            If the training set is empty or malformed.
        FactorizationError
            If the training covariance is not positive definite.
        """
        xi, zi, _ = utils.ensure_shapes_and_type(xi=xi, zi=zi)
        self.prior = prior
        self.kernel = kernel
        self.noise = float(noise)
        self._xi = xi
        self._zi = zi
        self._cholesky = None
        self._alpha = None
        self.refresh()

    @classmethod
    def default(cls, xi, zi):
        """Model with a constant zero prior, a Gaussian kernel and noise 1e-7.

        No parameter is fitted.
        """
        from gpreg.kernel import ConstantPrior, Gaussian

        xi, zi, _ = utils.ensure_shapes_and_type(xi=xi, zi=zi)
        prior = ConstantPrior.default(xi.shape[1])
        return cls(prior, Gaussian.default(), get_config().default_noise, xi, zi)

    def __repr__(self):
        output = str("<gpreg.core.GaussianProcess object> " + hex(id(self)))
        return output

    def __str__(self):
        return (
            f"GP Model:\n"
            f"  Prior: {self.prior!r}\n"
            f"  Kernel: {self.kernel!r}\n"
            f"  Noise: {self.noise}\n"
            f"  Training samples: {self.nb_samples} (dim {self.dim})"
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def xi(self):
        return self._xi

    @property
    def zi(self):
        return self._zi

    @property
    def nb_samples(self):
        return self._xi.shape[0]

    @property
    def dim(self):
        return self._xi.shape[1]

    @property
    def cholesky(self):
        """Cholesky factor of the training covariance (None if invalid)."""
        return self._cholesky

    @property
    def alpha(self):
        """K^{-1} (zi - prior.mean(xi)) (None if invalid)."""
        return self._alpha

    def zi_centered(self):
        return self._zi - self.prior.mean(self._xi)

    def refresh(self):
        """Recompute the Cholesky factor and alpha at the current parameters.

        Raises
        ------
        FactorizationError
            If the training covariance is not positive definite. The cache
            is left empty in that case.
        """
        self._cholesky = None
        self._alpha = None
        _, C = covariance.training_covariance(self._xi, self.kernel, self.noise)
        self._alpha = cholesky_solve(C, self.zi_centered())
        self._cholesky = C

    def _query_rows(self, xt):
        _, _, xt = utils.ensure_shapes_and_type(xt=xt, dim=self.dim)
        return xt

    def _query_row(self, x):
        return utils.ensure_row(x, self.dim)

    # ------------------------------------------------------------------
    # Prediction (delegating to gpreg.core.kriging)
    # ------------------------------------------------------------------
    def predict(self, x):
        """Posterior mean at a single row x (shape (d,)), as a float."""
        return gnp.to_scalar(kriging.predict_mean(self, self._query_row(x))[0])

    def predict_several(self, xt):
        """Posterior mean at each row of xt (m, d), shape (m,)."""
        return kriging.predict_mean(self, self._query_rows(xt))

    def predict_variance(self, x):
        """Posterior variance at a single row x, as a non-negative float."""
        return gnp.to_scalar(kriging.predict_variance(self, self._query_row(x))[0])

    def predict_variance_several(self, xt):
        """Posterior variance at each row of xt, shape (m,), non-negative."""
        return kriging.predict_variance(self, self._query_rows(xt))

    def predict_covariance_several(self, xt):
        """Posterior covariance matrix between the rows of xt, shape (m, m)."""
        return kriging.predict_covariance(self, self._query_rows(xt))

    def sample_at(self, x, method="chol"):
        """Posterior distribution at a single row x (one-dimensional normal)."""
        return kriging.sample_distribution(self, self._query_row(x), method=method)

    def sample_at_several(self, xt, method="chol"):
        """Posterior `MultivariateNormal` at the rows of xt.

        Parameters
        ----------
        xt : array_like, shape (m, d)
        method : {'chol','svd'}, optional
            Factorization of the posterior covariance, see
            `gpreg.core.sample_paths.MultivariateNormal`.
        """
        return kriging.sample_distribution(self, self._query_rows(xt), method=method)

    # ------------------------------------------------------------------
    # Likelihood (delegating to gpreg.core.likelihood)
    # ------------------------------------------------------------------
    def likelihood(self):
        """Log marginal likelihood of the training data under the model."""
        return likelihood.log_likelihood(self.zi_centered(), self._alpha, self._cholesky)

    # ------------------------------------------------------------------
    # Parameter selection (delegating to gpreg.core.optimizer)
    # ------------------------------------------------------------------
    def optimize_parameters(
        self, iterations, rate, verbose=False, fit_prior=False, fit_kernel=True
    ):
        """Maximise the log likelihood by fixed-rate gradient ascent.

        Parameters
        ----------
        iterations : int
            Number of gradient steps (positive).
        rate : float
            Learning rate (positive).
        verbose : bool, optional
            Log the likelihood at every iteration.
        fit_prior : bool, optional
            Optimize the prior parameters (default False).
        fit_kernel : bool, optional
            Optimize the kernel parameters and the noise (default True).

        Returns
        -------
        info : dict
            Optimization history, see `gpreg.core.optimizer.gradient_ascent`.

        Raises
        ------
        ConvergenceError
            If the optimization diverges. The model keeps the last valid
            parameters.
        """
        return optimizer.gradient_ascent(
            self,
            iterations,
            rate,
            fit_prior=fit_prior,
            fit_kernel=fit_kernel,
            verbose=verbose,
        )

    def fit_parameters(self, fit_prior, fit_kernel):
        """Fit the requested parameter sets on the training data.

        The prior is fitted in closed form (`prior.fit`). The kernel
        parameters and the noise are fitted by gradient ascent with the
        iteration count and learning rate of `gpreg.config`. The cache is
        recomputed in all cases.

        Returns
        -------
        info : dict or None
            Optimization history when `fit_kernel` is set.
        """
        if fit_prior:
            self.prior.fit(self._xi, self._zi)
        if not fit_kernel:
            self.refresh()
            return None
        config = get_config()
        return self.optimize_parameters(
            config.iterations, config.learning_rate, fit_prior=False, fit_kernel=True
        )

    # ------------------------------------------------------------------
    # Training set updates
    # ------------------------------------------------------------------
    def add_samples_fit(self, xi_new, zi_new, fit_prior=False, fit_kernel=False):
        """Append training samples, optionally refit, and rebuild the cache.

        Parameters
        ----------
        xi_new : array_like, shape (k, d)
        zi_new : array_like, shape (k,)
        fit_prior, fit_kernel : bool
            Parameter sets to refit after the update.

        Returns
        -------
        info : dict or None
            Optimization history when the kernel is refitted, see
            `fit_parameters`.

        Notes
        -----
        Passing no new sample leaves the model unchanged. The factorization
        is recomputed from scratch. If the extended covariance cannot be
        factorized, the new samples are dropped, the prior parameters are
        restored and `FactorizationError` is raised.
        """
        if utils.is_empty(xi_new) and utils.is_empty(zi_new):
            _logger.debug("add_samples_fit: no new sample, model unchanged.")
            return None
        xi_new, zi_new, _ = utils.ensure_shapes_and_type(xi=xi_new, zi=zi_new)
        utils.ensure_shapes_and_type(xi=xi_new, dim=self.dim)
        xi_old, zi_old = self._xi, self._zi
        prior_param = self.prior.get_parameters()
        self._xi = gnp.vstack((self._xi, xi_new))
        self._zi = gnp.concatenate((self._zi, zi_new))
        self._cholesky = None
        self._alpha = None
        try:
            return self.fit_parameters(fit_prior, fit_kernel)
        except FactorizationError:
            self._xi, self._zi = xi_old, zi_old
            self.prior.set_parameters(prior_param)
            self.refresh()
            raise

    def add_samples(self, xi_new, zi_new):
        """Append training samples without refitting any parameter."""
        self.add_samples_fit(xi_new, zi_new, fit_prior=False, fit_kernel=False)
