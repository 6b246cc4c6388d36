# gpreg/kernel/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Covariance functions (kernels) and prior mean functions.

Modules
-------
interface
    Structural contracts `Kernel` and `Prior` consumed by gpreg.core.
exponential
    Gaussian (squared exponential) and exponential kernels.
matern
    Matérn kernels with regularity 3/2 and 5/2.
dot_product
    Linear and polynomial kernels.
priors
    Zero, constant and linear prior means.

Public API
-----------
- Kernels: Gaussian, Exponential, Matern1, Matern2, Linear, Polynomial
- Priors: ZeroPrior, ConstantPrior, LinearPrior
- Dispatch tables: KERNELS, PRIORS, make_kernel, make_prior
"""

from .interface import Kernel, Prior
from .exponential import Gaussian, Exponential
from .matern import Matern1, Matern2
from .dot_product import Linear, Polynomial
from .priors import ZeroPrior, ConstantPrior, LinearPrior

KERNELS = {
    "gaussian": Gaussian,
    "exponential": Exponential,
    "matern1": Matern1,
    "matern2": Matern2,
    "linear": Linear,
    "polynomial": Polynomial,
}

PRIORS = {
    "zero": ZeroPrior,
    "constant": ConstantPrior,
    "linear": LinearPrior,
}


def make_kernel(name, **kwargs):
    """Instantiate a kernel from its name in `KERNELS`."""
    try:
        cls = KERNELS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown kernel '{name}'. Supported kernels are {sorted(KERNELS)}."
        ) from None
    return cls(**kwargs)


def make_prior(name, dim):
    """Instantiate the default prior of a given name for rows of width dim."""
    try:
        cls = PRIORS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown prior '{name}'. Supported priors are {sorted(PRIORS)}."
        ) from None
    return cls.default(dim)


__all__ = [
    # Contracts
    "Kernel",
    "Prior",
    # Kernels
    "Gaussian",
    "Exponential",
    "Matern1",
    "Matern2",
    "Linear",
    "Polynomial",
    # Priors
    "ZeroPrior",
    "ConstantPrior",
    "LinearPrior",
    # Dispatch
    "KERNELS",
    "PRIORS",
    "make_kernel",
    "make_prior",
]
