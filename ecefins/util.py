"""Utility functions.

Functions
---------
.. autosummary::
    :toctree: generated

    mv_prod
    skew_matrix
    fmod
    to_180_range
"""
import numpy as np
import pandas as pd


LLA_COLS = ['lat', 'lon', 'alt']
VEL_COLS = ['VN', 'VE', 'VD']
RPH_COLS = ['roll', 'pitch', 'heading']
THETA_COLS = ['theta_x', 'theta_y', 'theta_z']
DV_COLS = ['dv_x', 'dv_y', 'dv_z']
NED_COLS = ["north", "east", "down"]
TRAJECTORY_COLS = LLA_COLS + VEL_COLS + RPH_COLS
INDEX_TO_XYZ = {0: 'x', 1: 'y', 2: 'z'}


def mv_prod(a, b, at=False):
    """Compute products of multiple matrices and vectors stored in a stack.

    Parameters
    ----------
    a : array_like with 2 or 3 dimensions
        Single matrix or stack of matrices. Matrices are stored in the two
        trailing dimensions.
    b : ndarray with 1 or 2 dimensions
        Single vector or stack of vectors. Vectors are stored in the trailing
        dimension.
    at : bool, optional
        Whether to use transpose of `a`.

    Returns
    -------
    ndarray
        Computed products.
    """
    a = np.asarray(a)
    b = np.asarray(b)

    if a.ndim not in [2, 3]:
        raise ValueError("Wrong number of dimensions in `a`.")
    if b.ndim not in [1, 2]:
        raise ValueError("Wrong number of dimensions in `b`.")

    if at:
        a = np.swapaxes(a, -1, -2)

    return np.einsum("...ij,...j->...i", a, b)


def skew_matrix(vec):
    """Create a skew matrix corresponding to a vector.

    The matrix ``S`` satisfies ``S @ x == np.cross(vec, x)`` for any ``x``.

    Parameters
    ----------
    vec : array_like, shape (3,) or (n, 3)
        Vector.

    Returns
    -------
    ndarray, shape (3, 3) or (n, 3, 3)
        Corresponding skew matrix.
    """
    vec = np.asarray(vec, dtype=float)
    single = vec.ndim == 1
    n = 1 if single else len(vec)
    vec = np.atleast_2d(vec)
    result = np.zeros((n, 3, 3))
    result[:, 0, 1] = -vec[:, 2]
    result[:, 0, 2] = vec[:, 1]
    result[:, 1, 0] = vec[:, 2]
    result[:, 1, 2] = -vec[:, 0]
    result[:, 2, 0] = -vec[:, 1]
    result[:, 2, 1] = vec[:, 0]
    return result[0] if single else result


def fmod(num, den):
    """Compute floating point remainder of division.

    The result has the sign of `num` like C ``fmod``, unlike Python ``%``.
    """
    return np.fmod(num, den)


def to_180_range(angle):
    """Reduce angle in degrees to the range of (-180, 180]."""
    is_pandas = isinstance(angle, (pd.Series, pd.DataFrame))
    if not is_pandas:
        angle = np.asarray(angle, dtype=float)
    result = fmod(angle, 360)
    if is_pandas or result.ndim > 0:
        result[result <= -180] += 360
        result[result > 180] -= 360
    elif result <= -180:
        result += 360
    elif result > 180:
        result -= 360
    return result
