# gpreg/kernel/interface.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Capability contracts for kernels and priors.

These are structural types: any object exposing the listed attributes
can be used by gpreg.core, no subclassing is involved.
"""
from typing import Any, Protocol

ArrayLike = Any


class Kernel(Protocol):
    """Covariance function k(x, y) with P hyperparameters.

    ``x`` and ``y`` are rows of shape (..., d) broadcasting against each
    other; ``__call__`` returns values of shape (...) and ``gradient``
    returns shape (..., P).
    """

    nb_parameters: int

    def __call__(self, x: ArrayLike, y: ArrayLike) -> ArrayLike: ...

    def gradient(self, x: ArrayLike, y: ArrayLike) -> ArrayLike: ...

    def get_parameters(self) -> ArrayLike: ...

    def set_parameters(self, parameters: ArrayLike) -> None: ...


class Prior(Protocol):
    """Mean function m(x) with Q hyperparameters.

    ``mean`` maps rows (n, d) to (n,); ``gradient`` returns ∂m/∂θ with
    shape (n, Q).
    """

    nb_parameters: int

    @classmethod
    def default(cls, dim: int) -> "Prior": ...

    def mean(self, x: ArrayLike) -> ArrayLike: ...

    def gradient(self, x: ArrayLike) -> ArrayLike: ...

    def get_parameters(self) -> ArrayLike: ...

    def set_parameters(self, parameters: ArrayLike) -> None: ...

    def fit(self, xi: ArrayLike, zi: ArrayLike) -> None: ...
