# gpreg/kernel/exponential.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import gpreg.num as gnp


class Gaussian:
    """Gaussian (squared exponential) kernel.

    .. math::
        k(x, y) = a \\exp\\left(-\\frac{\\|x - y\\|^2}{2 \\ell^2}\\right)

    Parameters
    ----------
    ampl : float
        Amplitude a.
    ls : float
        Length scale :math:`\\ell`.

    Notes
    -----
    Parameter vector: [ampl, ls].
    """

    nb_parameters = 2

    def __init__(self, ampl=1.0, ls=1.0):
        self.ampl = float(ampl)
        self.ls = float(ls)

    @classmethod
    def default(cls):
        return cls()

    def __repr__(self):
        return f"Gaussian(ampl={self.ampl!r}, ls={self.ls!r})"

    def __call__(self, x, y):
        d2 = gnp.sqdist(x, y)
        return self.ampl * gnp.exp(-d2 / (2.0 * self.ls**2))

    def gradient(self, x, y):
        d2 = gnp.sqdist(x, y)
        e = gnp.exp(-d2 / (2.0 * self.ls**2))
        grad_ampl = e
        grad_ls = self.ampl * e * d2 / self.ls**3
        return gnp.stack((grad_ampl, grad_ls), axis=-1)

    def get_parameters(self):
        return gnp.array([self.ampl, self.ls])

    def set_parameters(self, parameters):
        self.ampl, self.ls = (float(p) for p in parameters)


class Exponential:
    """Exponential kernel.

    .. math::
        k(x, y) = a \\exp\\left(-\\frac{\\|x - y\\|}{\\ell}\\right)

    Parameter vector: [ampl, ls].
    """

    nb_parameters = 2

    def __init__(self, ampl=1.0, ls=1.0):
        self.ampl = float(ampl)
        self.ls = float(ls)

    @classmethod
    def default(cls):
        return cls()

    def __repr__(self):
        return f"Exponential(ampl={self.ampl!r}, ls={self.ls!r})"

    def __call__(self, x, y):
        r = gnp.sqrt(gnp.sqdist(x, y))
        return self.ampl * gnp.exp(-r / self.ls)

    def gradient(self, x, y):
        r = gnp.sqrt(gnp.sqdist(x, y))
        e = gnp.exp(-r / self.ls)
        return gnp.stack((e, self.ampl * e * r / self.ls**2), axis=-1)

    def get_parameters(self):
        return gnp.array([self.ampl, self.ls])

    def set_parameters(self, parameters):
        self.ampl, self.ls = (float(p) for p in parameters)
