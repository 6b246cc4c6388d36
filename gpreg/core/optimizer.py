# gpreg/core/optimizer.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Hyperparameter selection by maximisation of the log marginal likelihood.

The optimized vector concatenates, in this order, the prior parameters
(when ``fit_prior``) then the kernel parameters and the noise standard
deviation (when ``fit_kernel``).
"""
import time
import gpreg.num as gnp
from gpreg.config import get_config, get_logger
from .covariance import gradient_matrices
from .errors import ConvergenceError, FactorizationError
from .likelihood import (
    log_likelihood_gradient_kernel,
    log_likelihood_gradient_noise,
    log_likelihood_gradient_prior,
)

_logger = get_logger()


def pack_parameters(model, fit_prior, fit_kernel):
    """Concatenate the selected parameters of `model` into one vector."""
    parts = []
    if fit_prior:
        parts.append(gnp.asarray(model.prior.get_parameters()).reshape(-1))
    if fit_kernel:
        parts.append(gnp.asarray(model.kernel.get_parameters()).reshape(-1))
        parts.append(gnp.array([model.noise]))
    if not parts:
        return gnp.zeros((0,))
    return gnp.concatenate(parts)


def unpack_parameters(model, param, fit_prior, fit_kernel):
    """Inverse of `pack_parameters`: write param back into `model`.

    The cached factorization of `model` is left untouched; callers must
    refresh it.
    """
    offset = 0
    if fit_prior:
        q = model.prior.nb_parameters
        model.prior.set_parameters(param[offset : offset + q])
        offset += q
    if fit_kernel:
        p = model.kernel.nb_parameters
        model.kernel.set_parameters(param[offset : offset + p])
        offset += p
        model.noise = float(param[offset])
        offset += 1
    if offset != param.shape[0]:
        raise ValueError(
            f"parameter vector has length {param.shape[0]}, expected {offset}"
        )


def log_likelihood_and_gradient(model, fit_prior, fit_kernel):
    """Refresh the model cache and return (log likelihood, gradient).

    Raises
    ------
    FactorizationError
        If the covariance at the current parameters is not positive definite.
    """
    model.refresh()
    grads = []
    if fit_prior:
        dm = model.prior.gradient(model.xi)
        grads.append(log_likelihood_gradient_prior(model.alpha, dm))
    if fit_kernel:
        dK = gradient_matrices(model.xi, model.kernel)
        if gnp.all(gnp.isfinite(dK)):
            grads.append(
                log_likelihood_gradient_kernel(model.alpha, model.cholesky, dK)
            )
        else:
            # the triangular solves reject non-finite right-hand sides
            grads.append(gnp.full((dK.shape[0],), gnp.nan))
        grads.append(
            gnp.array(
                [log_likelihood_gradient_noise(model.alpha, model.cholesky, model.noise)]
            )
        )
    grad = gnp.concatenate(grads) if grads else gnp.zeros((0,))
    return model.likelihood(), grad


def gradient_ascent(
    model, iterations, rate, fit_prior=False, fit_kernel=True, verbose=False
):
    """Fixed-rate gradient ascent on the log marginal likelihood.

    Parameters
    ----------
    model : gpreg.core.GaussianProcess
        Model whose prior/kernel/noise are updated in place.
    iterations : int
        Number of ascent steps, > 0.
    rate : float
        Learning rate, > 0. Each step is ``param += rate * gradient``.
    fit_prior : bool, default False
        Optimize the prior parameters.
    fit_kernel : bool, default True
        Optimize the kernel parameters and the noise.
    verbose : bool, default False
        Log the likelihood of every iteration at INFO level (DEBUG otherwise).

    Returns
    -------
    info : dict
        ``history_params``, ``history_likelihood``, ``initial_params``,
        ``final_params``, ``iterations``, ``total_time``.

    Raises
    ------
    FactorizationError
        If the covariance is not positive definite at the starting point.
    ConvergenceError
        If at some step the covariance cannot be factorized, the
        likelihood or gradient is not finite, or the likelihood drops by
        more than ``config.decrease_tolerance`` (relative) below the
        previous step. The model is then reset to the last accepted
        parameters, with a valid cache.

    Notes
    -----
    On return the model cache (Cholesky factor, alpha) corresponds to the
    final parameters.
    """
    if int(iterations) != iterations or iterations <= 0:
        raise ValueError("iterations must be a positive integer")
    if not rate > 0.0:
        raise ValueError("rate must be a positive number")
    iterations = int(iterations)
    log = _logger.info if verbose else _logger.debug
    tol = get_config().decrease_tolerance

    tic = time.time()
    # an invalid starting point is a data problem, not a divergence
    model.refresh()
    param = pack_parameters(model, fit_prior, fit_kernel)
    info = {
        "history_params": [],
        "history_likelihood": [],
        "initial_params": param.copy(),
        "final_params": param.copy(),
        "iterations": 0,
        "total_time": 0.0,
    }
    if param.shape[0] == 0:
        log("No parameter selected for optimization.")
        return info

    last_valid = param.copy()
    for it in range(iterations + 1):
        try:
            ll, grad = log_likelihood_and_gradient(model, fit_prior, fit_kernel)
        except FactorizationError as exc:
            _restore_and_fail(
                model, last_valid, fit_prior, fit_kernel, it, info,
                f"covariance matrix not positive definite at iteration {it}", exc,
            )
        if not (gnp.isfinite(ll) and gnp.all(gnp.isfinite(grad))):
            _restore_and_fail(
                model, last_valid, fit_prior, fit_kernel, it, info,
                f"non-finite likelihood or gradient at iteration {it}", None,
            )
        if it > 0:
            ll_prev = info["history_likelihood"][-1]
            if ll < ll_prev - tol * (1.0 + abs(ll_prev)):
                _restore_and_fail(
                    model, last_valid, fit_prior, fit_kernel, it, info,
                    f"log-likelihood decreased at iteration {it} "
                    f"({ll_prev:.6g} -> {ll:.6g}), learning rate too large", None,
                )
        last_valid = param.copy()
        info["history_params"].append(param.copy())
        info["history_likelihood"].append(ll)
        if it == iterations:
            # evaluated at the final parameters: stop here
            break
        log("iteration %d: log-likelihood = %.6g", it, ll)
        param = param + rate * grad
        unpack_parameters(model, param, fit_prior, fit_kernel)

    log("final log-likelihood = %.6g", info["history_likelihood"][-1])
    info["final_params"] = param.copy()
    info["iterations"] = iterations
    info["total_time"] = time.time() - tic
    return info


def _restore_and_fail(model, last_valid, fit_prior, fit_kernel, it, info, message, cause):
    unpack_parameters(model, last_valid, fit_prior, fit_kernel)
    model.refresh()
    info["final_params"] = last_valid.copy()
    info["iterations"] = it
    _logger.warning("Optimization diverged: %s.", message)
    raise ConvergenceError(message, iteration=it, info=info) from cause
