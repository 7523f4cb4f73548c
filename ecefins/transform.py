"""Coordinate and attitude transformations.

Functions
---------
.. autosummary::
    :toctree: generated

    lla_to_ecef
    ecef_to_lla
    lla_to_ned
    mat_ne_from_ll
    mat_en_from_ll
    mat_from_rph
    mat_to_rph
"""
from warnings import warn
import numpy as np
import pandas as pd
from scipy.spatial.transform import Rotation
from .util import LLA_COLS, NED_COLS
from . import earth, util


def lla_to_ecef(lla):
    """Convert latitude, longitude, altitude into ECEF Cartesian coordinates.

    Parameters
    ----------
    lla : array_like, shape (3,) or (n, 3)
        Latitude, longitude and altitude values.

    Returns
    -------
    r_e : ndarray, shape (3,) or (n, 3)
        Cartesian coordinates in ECEF frame.
    """
    lat, lon, alt = np.asarray(lla, dtype=float).T

    sin_lat = np.sin(np.deg2rad(lat))
    cos_lat = np.cos(np.deg2rad(lat))
    sin_lon = np.sin(np.deg2rad(lon))
    cos_lon = np.cos(np.deg2rad(lon))

    _, re, _ = earth.principal_radii(lat, 0)
    r_e = np.empty((3,) + np.shape(lat))
    r_e[0] = (re + alt) * cos_lat * cos_lon
    r_e[1] = (re + alt) * cos_lat * sin_lon
    r_e[2] = ((1 - earth.E2) * re + alt) * sin_lat

    return r_e.transpose()


def ecef_to_lla(r_e):
    """Convert ECEF Cartesian coordinates into latitude, longitude, altitude.

    The closed form approximation of Bowring is used for the latitude. Its error is
    of the order of 1e-11 rad for altitudes up to 50 km. The altitude is computed
    as ``p / cos(lat) - N`` where ``p`` is the distance from the polar axis and
    ``N`` is the prime vertical radius. For latitudes exceeding 45 degrees by
    absolute value the polar-radius form ``z / sin(lat) - N (1 - e2)`` is used
    instead, which avoids the singularity at the poles.

    Close to Earth center the denominator of Bowring's formula becomes
    non-positive. The latitude is set to +90 or -90 degrees by the sign of ``z``
    there, the pole is the nearest point of the ellipsoid for such positions. A
    warning is issued unless the point lies on the polar axis. In particular, the
    origin of ECEF frame is mapped to the North pole with the altitude equal to
    minus semi-minor axis.

    Parameters
    ----------
    r_e : array_like, shape (3,) or (n, 3)
        Cartesian coordinates in ECEF frame.

    Returns
    -------
    lla : ndarray, shape (3,) or (n, 3)
        Latitude, longitude and altitude. Longitude is in the range (-180, 180].
    """
    x, y, z = np.asarray(r_e, dtype=float).T
    p = np.hypot(x, y)

    theta = np.arctan2(earth.A * z, earth.B * p)
    num = z + earth.EP2 * earth.B * np.sin(theta) ** 3
    den = p - earth.E2 * earth.A * np.cos(theta) ** 3

    degenerate = den <= 0
    if np.any(degenerate & ((p > 0) | (z == 0))):
        warn("ECEF position too close to Earth center encountered, geodetic "
             "latitude is undefined and replaced by the nearest pole.",
             RuntimeWarning)

    lat = np.where(degenerate, np.where(z < 0, -0.5 * np.pi, 0.5 * np.pi),
                   np.arctan2(num, den))

    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    re = earth.A / np.sqrt(1 - earth.E2 * sin_lat ** 2)
    with np.errstate(divide='ignore', invalid='ignore'):
        alt = np.where(np.abs(sin_lat) > np.abs(cos_lat),
                       z / sin_lat - re * (1 - earth.E2),
                       p / cos_lat - re)

    lon = util.to_180_range(np.rad2deg(np.arctan2(y, x)))

    return np.array([np.rad2deg(lat), lon, alt]).transpose()


def lla_to_ned(lla, lla_origin=None):
    """Convert lla into NED Cartesian coordinates.

    Parameters
    ----------
    lla : array_like, shape (n, 3)
        Latitude, longitude and altitude values. If DataFrame (with columns 'lat',
        'lon', 'alt) the result will be DataFrame with columns 'north', 'east', 'down'.
    lla_origin : array_like with shape (3,) or None, optional
        Values of latitude, longitude and latitude of the origin point.
        If None (default), the first row in `lla` will be used.

    Returns
    -------
    ndarray of DataFrame
        NED coordinates.
    """
    is_dataframe = isinstance(lla, pd.DataFrame)
    if is_dataframe:
        time = lla.index
        lla = lla[LLA_COLS].values
    else:
        lla = np.asarray(lla)
    if lla_origin is None:
        lla_origin = lla[0]
    r_e = lla_to_ecef(lla) - lla_to_ecef(lla_origin)
    mat_ne = mat_ne_from_ll(lla_origin[0], lla_origin[1])
    r_n = util.mv_prod(mat_ne, r_e)
    return pd.DataFrame(r_n, index=time, columns=NED_COLS) if is_dataframe else r_n


def mat_ne_from_ll(lat, lon):
    """Create a rotation matrix projecting from ECEF to NED frame.

    Rows of the matrix are North, East and Down directions expressed in ECEF.

    Parameters
    ----------
    lat, lon : float or array_like, shape (n,)
        Latitude and longitude.

    Returns
    -------
    ndarray, shape (3, 3) or (n, 3, 3)
        Rotation matrices.
    """
    lat, lon = np.broadcast_arrays(np.deg2rad(lat), np.deg2rad(lon))
    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    sin_lon = np.sin(lon)
    cos_lon = np.cos(lon)

    result = np.empty(lat.shape + (3, 3))
    result[..., 0, 0] = -sin_lat * cos_lon
    result[..., 0, 1] = -sin_lat * sin_lon
    result[..., 0, 2] = cos_lat
    result[..., 1, 0] = -sin_lon
    result[..., 1, 1] = cos_lon
    result[..., 1, 2] = 0
    result[..., 2, 0] = -cos_lat * cos_lon
    result[..., 2, 1] = -cos_lat * sin_lon
    result[..., 2, 2] = -sin_lat
    return result


def mat_en_from_ll(lat, lon):
    """Create a rotation matrix projecting from NED to ECEF frame.

    It is the transpose of `mat_ne_from_ll`.

    Parameters
    ----------
    lat, lon : float or array_like, shape (n,)
        Latitude and longitude.

    Returns
    -------
    ndarray, shape (3, 3) or (n, 3, 3)
        Rotation matrices.
    """
    return np.swapaxes(mat_ne_from_ll(lat, lon), -1, -2)


def mat_from_rph(rph):
    """Create a rotation matrix from roll, pitch and heading.

    The matrix projects from the body frame to NED frame.

    Parameters
    ----------
    rph : array_like, shape (3,) or (n, 3)
        Roll, pitch and heading.

    Returns
    -------
    ndarray, shape (3, 3) or (n, 3, 3)
        Rotation matrices.
    """
    return Rotation.from_euler('xyz', rph, degrees=True).as_matrix()


def mat_to_rph(mat):
    """Convert a rotation matrix to roll, pitch and heading angles.

    Parameters
    ----------
    mat : array_like, shape (3, 3) or (n, 3, 3)
        Rotation matrices.

    Returns
    -------
    ndarray, with shape (3,) or (n, 3)
        Roll, pitch and heading angles.
    """
    return Rotation.from_matrix(mat).as_euler('xyz', degrees=True)
