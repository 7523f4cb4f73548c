"""Simulation of IMU increments.

Functions
---------
.. autosummary::
    :toctree: generated/

    generate_stationary_increments
"""
import numpy as np
import pandas as pd
from . import earth, transform
from .strapdown import NavState
from .util import THETA_COLS, DV_COLS


def generate_stationary_increments(lla, rph, time, gravity_model=None):
    """Generate increments of an error-free IMU fixed relative to Earth.

    The gyros sense only Earth rotation and the accelerometers sense the specific
    force opposing gravity. Integration of the generated increments by
    `ecefins.strapdown.Strapdown` with the same gravity model keeps the state
    constant.

    Parameters
    ----------
    lla : array_like, shape (3,)
        Latitude, longitude and altitude.
    rph : array_like, shape (3,)
        Roll, pitch and heading.
    time : array_like, shape (n,)
        Increasing time values. The increments are generated for intervals between
        consecutive values, the first value is the initial time.
    gravity_model : callable or None, optional
        Gravity model, see `ecefins.strapdown.Strapdown`. None (default) uses
        `ecefins.earth.gravity_ecef`.

    Returns
    -------
    nav_state : `ecefins.strapdown.NavState`
        Navigation state at the initial time.
    increments : Increments
        Attitude and velocity increments indexed by ``time[1:]``.
    """
    if gravity_model is None:
        gravity_model = earth.gravity_ecef

    time = np.asarray(time, dtype=float)
    if time.ndim != 1 or len(time) < 2:
        raise ValueError("`time` must be 1-D with at least 2 elements")
    dt = np.diff(time)
    if np.any(dt <= 0):
        raise ValueError("`time` must be strictly increasing")

    lla = np.asarray(lla, dtype=float)
    r_e = transform.lla_to_ecef(lla)
    mat_eb = transform.mat_en_from_ll(lla[0], lla[1]) @ transform.mat_from_rph(rph)

    earth_rate_b = mat_eb.T @ np.array([0.0, 0.0, earth.RATE])
    specific_force_b = -mat_eb.T @ np.asarray(gravity_model(r_e), dtype=float)

    increments = pd.DataFrame(
        np.hstack([dt[:, None] * earth_rate_b, dt[:, None] * specific_force_b]),
        index=time[1:], columns=THETA_COLS + DV_COLS)
    increments.index.name = 'time'
    return NavState(r_e, np.zeros(3), mat_eb), increments
