# gpreg/core/utils.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Small utilities used across `gpreg.core` modules.

This file hosts shape/type validation & conversion helpers for
training rows, training outputs and query rows.
"""
import gpreg.num as gnp


def ensure_shapes_and_type(*, xi=None, zi=None, xt=None, dim=None):
    """Validate and adjust shapes/types of input arrays.

    Parameters
    ----------
    xi : array_like, optional
        Training rows (n, d).
    zi : array_like, optional
        Training outputs (n,) or (n, 1).
    xt : array_like, optional
        Query rows (m, d).
    dim : int, optional
        Expected row width. When given, xi and xt must match it.

    Returns
    -------
    tuple
        (xi, zi, xt) converted with `gnp.asarray`, zi flattened to (n,).

    Raises
    ------
    ValueError
        On empty sets, ragged or non-numeric rows, width mismatches
        or a row count that differs between xi and zi.
    """
    if xi is not None:
        xi = _as_rows(xi, "xi")
    if zi is not None:
        zi = _as_numeric(zi, "zi")
        if zi.ndim == 2:
            if zi.shape[1] != 1:
                raise ValueError("zi should only have one column if it's a 2D array")
            zi = zi.reshape(-1)  # (n,1) -> (n,)
        elif zi.ndim != 1:
            raise ValueError("zi should be 1D or a 2D column array")
    if xt is not None:
        xt = _as_rows(xt, "xt")

    if xi is not None and zi is not None and xi.shape[0] != zi.shape[0]:
        raise ValueError(
            f"xi and zi must have the same number of rows ({xi.shape[0]} != {zi.shape[0]})"
        )
    if xi is not None and xt is not None and xi.shape[1] != xt.shape[1]:
        raise ValueError("xi and xt must have the same number of columns")
    if dim is not None:
        for name, x in (("xi", xi), ("xt", xt)):
            if x is not None and x.shape[1] != dim:
                raise ValueError(
                    f"{name} rows have width {x.shape[1]}, expected {dim}"
                )
    return xi, zi, xt


def ensure_row(x, dim):
    """Convert a single query row to shape (1, d)."""
    x = _as_numeric(x, "x").reshape(-1)
    if x.shape[0] != dim:
        raise ValueError(f"row has width {x.shape[0]}, expected {dim}")
    return x.reshape(1, -1)


def is_empty(x):
    """True if x holds no rows (None, [], or an array with zero rows)."""
    if x is None:
        return True
    return len(x) == 0


def _as_numeric(x, name):
    try:
        x = gnp.asarray(x)
    except ValueError as exc:
        # ragged nested sequences
        raise ValueError(f"{name} must be a rectangular numeric array") from exc
    if x.dtype.kind not in "fiu":
        raise ValueError(f"{name} must be a rectangular numeric array")
    return x


def _as_rows(x, name):
    x = _as_numeric(x, name)
    if x.ndim != 2:
        raise ValueError(f"{name} should be a 2D array of rows")
    if x.shape[0] == 0:
        raise ValueError(f"{name} should contain at least one row")
    if x.shape[1] == 0:
        raise ValueError(f"{name} rows should have at least one column")
    return x
