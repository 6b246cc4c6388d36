# gpreg/kernel/dot_product.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import gpreg.num as gnp


def _dot(x, y):
    return gnp.sum(x * y, axis=-1)


class Linear:
    """Linear kernel :math:`k(x, y) = x \\cdot y + c`.

    Parameter vector: [c].
    """

    nb_parameters = 1

    def __init__(self, c=0.0):
        self.c = float(c)

    @classmethod
    def default(cls):
        return cls()

    def __repr__(self):
        return f"Linear(c={self.c!r})"

    def __call__(self, x, y):
        return _dot(x, y) + self.c

    def gradient(self, x, y):
        return gnp.ones(_dot(x, y).shape + (1,))

    def get_parameters(self):
        return gnp.array([self.c])

    def set_parameters(self, parameters):
        (self.c,) = (float(p) for p in parameters)


class Polynomial:
    """Polynomial kernel :math:`k(x, y) = (\\alpha\\, x \\cdot y + c)^p`.

    The degree p is fixed at construction and is not trainable.

    Parameter vector: [alpha, c].
    """

    nb_parameters = 2

    def __init__(self, alpha=1.0, c=0.0, degree=2):
        if int(degree) != degree or degree < 1:
            raise ValueError("degree must be a positive integer")
        self.alpha = float(alpha)
        self.c = float(c)
        self.degree = int(degree)

    @classmethod
    def default(cls):
        return cls()

    def __repr__(self):
        return f"Polynomial(alpha={self.alpha!r}, c={self.c!r}, degree={self.degree!r})"

    def __call__(self, x, y):
        return (self.alpha * _dot(x, y) + self.c) ** self.degree

    def gradient(self, x, y):
        xy = _dot(x, y)
        dbase = self.degree * (self.alpha * xy + self.c) ** (self.degree - 1)
        return gnp.stack((dbase * xy, dbase), axis=-1)

    def get_parameters(self):
        return gnp.array([self.alpha, self.c])

    def set_parameters(self, parameters):
        self.alpha, self.c = (float(p) for p in parameters)
