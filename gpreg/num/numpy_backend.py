# gpreg/num/numpy_backend.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""NumPy numerical backend for gpreg.

Only the operations used by gpreg.core, gpreg.kernel and the tests are
exposed. Arrays are float64 throughout.
"""

import builtins
from typing import Any, Optional
from gpreg.config import init_backend, get_logger

ArrayLike = Any

_gpreg_backend_: str = init_backend()
_logger = get_logger()
_logger.debug("Using backend: %s", _gpreg_backend_)

# substrings identifying LAPACK failures raised as generic exceptions
_LINALG_ERROR_KEYWORDS = (
    "singular",
    "not positive definite",
    "not positive-definite",
    "cholesky",
    "decomposition",
    "factorization",
    "lapack",
)

import numpy

_np_dtype = numpy.float64

from numpy import (
    any,
    all,
    isfinite,
    allclose,
    hstack,
    vstack,
    concatenate,
    stack,
    diag,
    arange,
    moveaxis,
    tril_indices,
    tril,
    abs,
    sqrt,
    exp,
    log,
    sum,
    mean,
    cov,
    max,
    maximum,
    einsum,
    matmul,
    trace,
)
from numpy.linalg import eigh, lstsq
from numpy import pi, inf, nan
from scipy.linalg import solve_triangular

eps = numpy.finfo(_np_dtype).eps


def _is_linalg_exception(exc: Exception) -> bool:
    if isinstance(exc, numpy.linalg.LinAlgError):
        return True
    msg = str(exc).lower()
    return builtins.any(keyword in msg for keyword in _LINALG_ERROR_KEYWORDS)


# ..................................................


def array(x, dtype=None):
    if dtype is not None:
        return numpy.array(x, dtype=dtype)
    out = numpy.array(x)
    if out.dtype.kind in "iuf":
        return out.astype(_np_dtype, copy=False)
    return out


def asarray(x, dtype=None):
    if dtype is not None:
        return numpy.asarray(x, dtype=dtype)
    if isinstance(x, (int, float)):
        return numpy.array([x], dtype=_np_dtype)
    out = numpy.asarray(x)
    if out.dtype.kind in "iuf":
        return out.astype(_np_dtype, copy=False)
    return out


def empty(shape):
    return numpy.empty(shape, dtype=_np_dtype)


def zeros(shape):
    return numpy.zeros(shape, dtype=_np_dtype)


def ones(shape):
    return numpy.ones(shape, dtype=_np_dtype)


def full(shape, fill_value):
    return numpy.full(shape, fill_value, dtype=_np_dtype)


def eye(n):
    return numpy.eye(n, dtype=_np_dtype)


def to_scalar(x):
    return numpy.asarray(x).item()


# ..................................................


def sqdist(x: ArrayLike, y: ArrayLike) -> ArrayLike:
    """Squared Euclidean distance along the last axis, with broadcasting."""
    return sum((x - y) ** 2, axis=-1)


def cholesky(A):
    return numpy.linalg.cholesky(A)


# ..................................................

# gpreg never holds a global generator: callers pass one to every draw.


def default_rng(seed: Optional[int] = None):
    return numpy.random.default_rng(seed=seed)


def randn(rng, *shape: int) -> ArrayLike:
    return rng.standard_normal(size=shape).astype(_np_dtype, copy=False)
