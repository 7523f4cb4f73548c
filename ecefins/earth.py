"""Earth geometry and gravity models.

This module defines constants and computation models for ellipsoidal Earth. The
ellipsoid is defined by the semi-major axis and the flattening of GRS80 which
coincides with WGS84 up to sub-millimeter level. All definitions and explanations
for used models can be found in [1]_.

Constants
---------
.. autosummary::
    :toctree: generated

    RATE
    A
    F
    B
    E2
    EP2
    GE
    GP
    KM

Functions
---------
.. autosummary::
    :toctree: generated/

    principal_radii
    gravity
    gravity_n
    gravity_ecef
    constant_gravity_ecef

References
----------
.. [1] P. D. Groves, "Principles of GNSS, Inertial, and Multisensor Integrated
       Navigation Systems", 2nd edition
"""
import numpy as np
from . import transform, util


#: Rotation rate of Earth in rad/s.
RATE = 7.2921159e-5
#: Semi major axis of Earth ellipsoid.
A = 6378137.0
#: Flattening of Earth ellipsoid.
F = 1 / 298.257222101
#: Semi minor axis of Earth ellipsoid.
B = A * (1 - F)
#: Squared eccentricity of Earth ellipsoid.
E2 = 2 * F - F ** 2
#: Squared second eccentricity of Earth ellipsoid.
EP2 = (A ** 2 - B ** 2) / B ** 2
#: Gravity at the equator.
GE = 9.7803267715
#: Gravity at the pole.
GP = 9.8321863685
#: Gravitational constant of Earth in m^3/s^2.
KM = 3.986005e14
SOMIGLIANA_K = (1 - E2) ** 0.5 * GP / GE - 1


def principal_radii(lat, alt):
    """Compute the principal radii of curvature of Earth ellipsoid.

    Parameters
    ----------
    lat, alt : array_like
        Latitude and altitude.

    Returns
    -------
    rn : float or ndarray
        Principle radius in North direction.
    re : float or ndarray
        Principle radius in East direction.
    rp : float or ndarray
        Radius of cross-section along the parallel.
    """
    sin_lat = np.sin(np.deg2rad(lat))
    cos_lat = np.sqrt(1 - sin_lat**2)

    x = 1 - E2 * sin_lat ** 2
    re = A / np.sqrt(x)
    rn = re * (1 - E2) / x

    return rn + alt, re + alt, (re + alt) * cos_lat


def gravity(lat, alt):
    """Compute gravity magnitude.

    Somigliana model with linear vertical correction is implemented. The model
    gives the magnitude of the sum of gravitational and centrifugal accelerations,
    its error relative to the true gravity is at the level of 1e-4 g.

    Parameters
    ----------
    lat, alt : array_like
        Latitude and altitude.

    Returns
    -------
    gravity : float or ndarray
        Magnitude of the gravity.
    """
    sin_lat = np.sin(np.deg2rad(lat))
    alt = np.asarray(alt)
    return (GE * (1 + SOMIGLIANA_K * sin_lat**2) / (1 - E2 * sin_lat**2) ** 0.5
            * (1 - 2 * alt / A))


def gravity_n(lat, alt):
    """Compute gravity vector in NED frame.

    Parameters
    ----------
    lat, alt : array_like
        Latitude and altitude.

    Returns
    -------
    g_n : ndarray, shape (3,) or (n, 3)
        Vector of the gravity.
    """
    g = gravity(lat, alt)
    if g.ndim == 0:
        return np.array([0, 0, g])
    else:
        result = np.zeros((len(g), 3))
        result[:, 2] = g
        return result


def gravity_ecef(r_e):
    """Compute gravity vector in ECEF frame.

    The vector is directed along the ellipsoid normal (down) and has the magnitude
    given by `gravity`. This is the default gravity model of the strapdown
    integration.

    Parameters
    ----------
    r_e : array_like, shape (3,) or (n, 3)
        Cartesian coordinates in ECEF frame.

    Returns
    -------
    g_e : ndarray, shape (3,) or (n, 3)
        Gravity vectors expressed in ECEF frame.
    """
    lat, lon, alt = np.asarray(transform.ecef_to_lla(r_e)).T
    mat_en = transform.mat_en_from_ll(lat, lon)
    return util.mv_prod(mat_en, gravity_n(lat, alt))


def constant_gravity_ecef(r_e):
    """Compute gravity vector in ECEF frame using the equatorial value.

    The magnitude is always `GE` and the direction is down along the ellipsoid
    normal. The error of this model reaches 0.5% near the poles, it is intended
    only as a placeholder.

    Parameters
    ----------
    r_e : array_like, shape (3,) or (n, 3)
        Cartesian coordinates in ECEF frame.

    Returns
    -------
    g_e : ndarray, shape (3,) or (n, 3)
        Gravity vectors expressed in ECEF frame.
    """
    lat, lon, _ = np.asarray(transform.ecef_to_lla(r_e)).T
    mat_en = transform.mat_en_from_ll(lat, lon)
    g_n = np.zeros(np.shape(r_e))
    g_n[..., 2] = GE
    return util.mv_prod(mat_en, g_n)
