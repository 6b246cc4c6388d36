# gpreg/core/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------

"""
Core components of the gpreg package.

This subpackage contains the numerical routines for Gaussian process
regression: covariance construction, Cholesky solves, log likelihood
and its gradient, gradient-ascent parameter selection, prediction and
posterior sampling.

Public API
----------
GaussianProcess : class
    Gaussian process regression model combining all core routines.
GaussianProcessBuilder : class
    Mutable configuration producing a trained `GaussianProcess`.
MultivariateNormal : class
    Posterior distribution returned by `GaussianProcess.sample_at_several`.
FactorizationError, ConvergenceError, GPRegError : exceptions
"""

from .errors import GPRegError, FactorizationError, ConvergenceError
from .sample_paths import MultivariateNormal
from .model import GaussianProcess
from .builder import GaussianProcessBuilder

__all__ = [
    "GaussianProcess",
    "GaussianProcessBuilder",
    "MultivariateNormal",
    "GPRegError",
    "FactorizationError",
    "ConvergenceError",
]
