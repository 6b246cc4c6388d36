# gpreg/kernel/matern.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
from math import sqrt
import gpreg.num as gnp


class Matern1:
    """Matérn kernel with regularity :math:`\\nu = 3/2`.

    .. math::
        k(x, y) = a (1 + t) \\exp(-t), \\quad t = \\sqrt{3}\\,\\|x - y\\| / \\ell

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
        return f"Matern1(ampl={self.ampl!r}, ls={self.ls!r})"

    def _t(self, x, y):
        return sqrt(3.0) * gnp.sqrt(gnp.sqdist(x, y)) / self.ls

    def __call__(self, x, y):
        t = self._t(x, y)
        return self.ampl * (1.0 + t) * gnp.exp(-t)

    def gradient(self, x, y):
        t = self._t(x, y)
        e = gnp.exp(-t)
        grad_ampl = (1.0 + t) * e
        # dk/dt = -a t e^{-t}, dt/dls = -t/ls
        grad_ls = self.ampl * t**2 * e / self.ls
        return gnp.stack((grad_ampl, grad_ls), axis=-1)

    def get_parameters(self):
        return gnp.array([self.ampl, self.ls])

    def set_parameters(self, parameters):
        self.ampl, self.ls = (float(p) for p in parameters)


class Matern2:
    """Matérn kernel with regularity :math:`\\nu = 5/2`.

    .. math::
        k(x, y) = a (1 + t + t^2/3) \\exp(-t), \\quad t = \\sqrt{5}\\,\\|x - y\\| / \\ell

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
        return f"Matern2(ampl={self.ampl!r}, ls={self.ls!r})"

    def _t(self, x, y):
        return sqrt(5.0) * gnp.sqrt(gnp.sqdist(x, y)) / self.ls

    def __call__(self, x, y):
        t = self._t(x, y)
        return self.ampl * (1.0 + t + t**2 / 3.0) * gnp.exp(-t)

    def gradient(self, x, y):
        t = self._t(x, y)
        e = gnp.exp(-t)
        grad_ampl = (1.0 + t + t**2 / 3.0) * e
        grad_ls = self.ampl * t**2 * (1.0 + t) * e / (3.0 * self.ls)
        return gnp.stack((grad_ampl, grad_ls), axis=-1)

    def get_parameters(self):
        return gnp.array([self.ampl, self.ls])

    def set_parameters(self, parameters):
        self.ampl, self.ls = (float(p) for p in parameters)
