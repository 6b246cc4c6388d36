# gpreg/__init__.py

from . import config
from . import num
from . import core
from . import kernel
from .core import (
    GaussianProcess,
    GaussianProcessBuilder,
    MultivariateNormal,
    GPRegError,
    FactorizationError,
    ConvergenceError,
)

__all__ = [
    "num",
    "kernel",
    "GaussianProcess",
    "GaussianProcessBuilder",
    "MultivariateNormal",
    "GPRegError",
    "FactorizationError",
    "ConvergenceError",
    "__version__",
]

__version__ = config.__version__
