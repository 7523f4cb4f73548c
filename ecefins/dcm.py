"""Create and manipulate direction cosine matrices.

Functions
---------
.. autosummary::
    :toctree: generated/

    from_rv
    orthonormality_error
    orthonormalize
"""
import numpy as np
from scipy.linalg import polar
from . import _numba_dcm


def from_rv(rv):
    """Create a direction cosine matrix from a rotation vector.

    The direction of a rotation vector determines the axis of rotation and its
    magnitude determines the angle of rotation. The matrix is computed by
    Rodrigues' formula::

        C = I + sin(theta) / theta * K + (1 - cos(theta)) / theta**2 * K @ K

    where ``K`` is the skew matrix of `rv` and ``theta`` is its norm. It is the
    exact matrix exponential of ``K``. For ``theta**2 <= 1e-6`` the coefficients
    are computed by truncated Taylor series.

    The returned DCM projects a vector from the rotated frame to the original
    frame.

    Parameters
    ----------
    rv : array_like, shape (3,) or (n, 3)
        Rotation vectors.

    Returns
    -------
    dcm : ndarray, shape (3, 3) or (n, 3, 3)
        Direction cosine matrices.
    """
    rv = np.ascontiguousarray(rv, dtype=float)
    if rv.ndim == 1:
        result = np.empty((3, 3))
        _numba_dcm.mat_from_rotvec(rv, result)
    else:
        result = np.empty((len(rv), 3, 3))
        _numba_dcm.mats_from_rotvecs(rv, result)
    return result


def orthonormality_error(dcm):
    """Compute deviation of a matrix from orthonormality.

    The measure is the Frobenius norm of ``dcm @ dcm.T - I``.

    Parameters
    ----------
    dcm : array_like, shape (3, 3)
        Direction cosine matrix.

    Returns
    -------
    float
        Orthonormality error.
    """
    return _numba_dcm.orthonormality_error(np.ascontiguousarray(dcm, dtype=float))


def orthonormalize(dcm):
    """Find the orthonormal matrix closest to a given one.

    The orthonormal factor of the polar decomposition is returned, it minimizes
    the Frobenius norm of the difference with `dcm`.

    Parameters
    ----------
    dcm : array_like, shape (3, 3)
        Approximately orthonormal matrix.

    Returns
    -------
    ndarray, shape (3, 3)
        Orthonormal matrix.
    """
    u, _ = polar(np.asarray(dcm, dtype=float))
    return u
