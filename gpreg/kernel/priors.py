# gpreg/kernel/priors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Prior mean functions.

A prior is the value a Gaussian process regresses to in the absence of
information. Each prior exposes ``mean(x)`` for rows x of shape (n, d),
its parameters, the Jacobian ``gradient(x)`` of the mean with respect to
those parameters (n, Q), and a closed-form ``fit(xi, zi)``.
"""
import gpreg.num as gnp


class ZeroPrior:
    """Prior mean identically zero. No parameters."""

    nb_parameters = 0

    @classmethod
    def default(cls, dim):
        return cls()

    def __repr__(self):
        return "ZeroPrior()"

    def mean(self, x):
        return gnp.zeros((x.shape[0],))

    def gradient(self, x):
        return gnp.zeros((x.shape[0], 0))

    def get_parameters(self):
        return gnp.zeros((0,))

    def set_parameters(self, parameters):
        if len(parameters) != 0:
            raise ValueError("ZeroPrior has no parameters")

    def fit(self, xi, zi):
        pass


class ConstantPrior:
    """Constant prior mean m(x) = c.

    Parameter vector: [c]. ``fit`` sets c to the mean of the outputs.
    """

    nb_parameters = 1

    def __init__(self, c=0.0):
        self.c = float(c)

    @classmethod
    def default(cls, dim):
        return cls(0.0)

    def __repr__(self):
        return f"ConstantPrior(c={self.c!r})"

    def mean(self, x):
        return gnp.full((x.shape[0],), self.c)

    def gradient(self, x):
        return gnp.ones((x.shape[0], 1))

    def get_parameters(self):
        return gnp.array([self.c])

    def set_parameters(self, parameters):
        (self.c,) = (float(p) for p in parameters)

    def fit(self, xi, zi):
        self.c = gnp.to_scalar(gnp.mean(zi))


class LinearPrior:
    """Linear prior mean m(x) = w · x + b.

    Parameter vector: [w_1, ..., w_d, b]. ``fit`` performs an ordinary
    least-squares regression of the outputs on the rows.
    """

    def __init__(self, weights, intercept=0.0):
        self.weights = gnp.array(weights).reshape(-1)
        self.intercept = float(intercept)

    @property
    def nb_parameters(self):
        return self.weights.shape[0] + 1

    @classmethod
    def default(cls, dim):
        return cls(gnp.zeros((dim,)), 0.0)

    def __repr__(self):
        return f"LinearPrior(weights={self.weights.tolist()!r}, intercept={self.intercept!r})"

    def mean(self, x):
        return gnp.matmul(x, self.weights) + self.intercept

    def gradient(self, x):
        return gnp.hstack((x, gnp.ones((x.shape[0], 1))))

    def get_parameters(self):
        return gnp.concatenate((self.weights, gnp.array([self.intercept])))

    def set_parameters(self, parameters):
        parameters = gnp.array(parameters).reshape(-1)
        if parameters.shape[0] != self.nb_parameters:
            raise ValueError(
                f"LinearPrior expects {self.nb_parameters} parameters, got {parameters.shape[0]}"
            )
        self.weights = parameters[:-1].copy()
        self.intercept = float(parameters[-1])

    def fit(self, xi, zi):
        P = self.gradient(xi)
        coefs, _, _, _ = gnp.lstsq(P, zi, rcond=None)
        self.set_parameters(coefs)
