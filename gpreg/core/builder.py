# gpreg/core/builder.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Step-by-step configuration of a `GaussianProcess`.
"""
from gpreg.config import get_config
from . import utils
from .model import GaussianProcess


class GaussianProcessBuilder:
    """Mutable configuration from which a `GaussianProcess` is trained.

    Defaults are a constant prior set to 0, a Gaussian kernel, a noise
    of 1e-7, and no parameter fitting. Setters return the builder so
    that calls can be chained.

    Examples
    --------
    >>> gp = (GaussianProcessBuilder(xi, zi)
    ...       .set_kernel(Matern2())
    ...       .set_noise(0.1)
    ...       .fit_kernel()
    ...       .train())
    """

    def __init__(self, xi, zi):
        from gpreg.kernel import ConstantPrior, Gaussian

        xi, zi, _ = utils.ensure_shapes_and_type(xi=xi, zi=zi)
        self.training_inputs = xi
        self.training_outputs = zi
        self.prior = ConstantPrior.default(xi.shape[1])
        self.kernel = Gaussian.default()
        self.noise = get_config().default_noise
        self.should_fit_kernel = False
        self.should_fit_prior = False

    def __repr__(self):
        return (
            f"<gpreg.core.GaussianProcessBuilder prior={self.prior!r} "
            f"kernel={self.kernel!r} noise={self.noise!r} "
            f"fit_prior={self.should_fit_prior} fit_kernel={self.should_fit_kernel}>"
        )

    def set_prior(self, prior):
        self.prior = prior
        return self

    def set_kernel(self, kernel):
        self.kernel = kernel
        return self

    def set_noise(self, noise):
        """Set the magnitude (standard deviation) of the noise in the data."""
        if not noise >= 0.0:
            raise ValueError("noise must be non-negative")
        self.noise = float(noise)
        return self

    def fit_kernel(self):
        """Request fitting of the kernel parameters (and noise) on the data."""
        self.should_fit_kernel = True
        return self

    def fit_prior(self):
        """Request fitting of the prior on the data."""
        self.should_fit_prior = True
        return self

    def train(self):
        """Build the `GaussianProcess` and fit the requested parameters."""
        gp = GaussianProcess(
            self.prior,
            self.kernel,
            self.noise,
            self.training_inputs,
            self.training_outputs,
        )
        if self.should_fit_prior or self.should_fit_kernel:
            gp.fit_parameters(self.should_fit_prior, self.should_fit_kernel)
        return gp
