# gpreg/core/errors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Exceptions raised by gpreg.core.
"""
import numpy


class GPRegError(Exception):
    """Base class for gpreg errors."""


class FactorizationError(GPRegError, numpy.linalg.LinAlgError):
    """The covariance matrix is not positive definite.

    Usually caused by duplicate or near-duplicate input rows combined
    with a noise level too small to keep the matrix well conditioned.
    """


class ConvergenceError(GPRegError, RuntimeError):
    """Hyperparameter optimization produced a non-finite likelihood or
    gradient, or a covariance matrix that could not be factorized.

    Attributes
    ----------
    iteration : int
        Index of the iteration at which the failure was detected.
    info : dict
        Optimization history up to the failure (same keys as the dict
        returned by `gpreg.core.optimizer.gradient_ascent`).
    """

    def __init__(self, message, iteration=None, info=None):
        super().__init__(message)
        self.iteration = iteration
        self.info = info
