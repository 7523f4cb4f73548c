"""Strapdown INS integration algorithm in ECEF frame.

This module provides implementation of the classic "strapdown algorithm" to obtain
position, velocity and attitude by integration of IMU increments. The navigation
state is maintained in ECEF frame which makes the algorithm free of singularities
at the poles. The attitude is updated by the exact rotation generated by a constant
angular rate over the sampling interval, velocity and position are updated by the
trapezoid rule. The implementation follows [1]_.

Classes
-------
.. autosummary::
    :toctree: generated/

    ImuMeasurement
    NavState
    Strapdown
    InvalidTimestepError

Functions
---------
.. autosummary::
    :toctree: generated/

    measurements_from_increments

References
----------
.. [1] P. D. Groves, "Principles of GNSS, Inertial, and Multisensor Integrated
       Navigation Systems", 2nd edition
"""
import numpy as np
import pandas as pd
from . import dcm, earth, transform, util
from .util import LLA_COLS, VEL_COLS, RPH_COLS, THETA_COLS, DV_COLS, TRAJECTORY_COLS


class InvalidTimestepError(ValueError):
    """Raised when a measurement is not strictly later than the current time."""


class ImuMeasurement:
    """IMU measurement integrated over a sampling interval.

    Parameters
    ----------
    t : float
        Time at the end of the interval in seconds.
    dv : array_like, shape (3,)
        Velocity increment in m/s.
    theta : array_like, shape (3,)
        Rotation vector (attitude increment) in rad.
    """
    def __init__(self, t, dv, theta):
        self.t = float(t)
        self.dv = np.array(dv, dtype=float)
        self.theta = np.array(theta, dtype=float)
        if self.dv.shape != (3,):
            raise ValueError("`dv` must have shape (3,)")
        if self.theta.shape != (3,):
            raise ValueError("`theta` must have shape (3,)")

    def __repr__(self):
        return f"ImuMeasurement(t={self.t!r}, dv={self.dv!r}, theta={self.theta!r})"


class NavState:
    """Position, velocity and attitude in ECEF frame.

    Parameters
    ----------
    position_e : array_like, shape (3,)
        Position in ECEF frame in meters.
    velocity_e : array_like, shape (3,)
        Velocity relative to Earth expressed in ECEF frame in m/s.
    mat_eb : array_like, shape (3, 3)
        Rotation matrix projecting from the body frame to ECEF.
    """
    def __init__(self, position_e, velocity_e, mat_eb):
        self.position_e = np.array(position_e, dtype=float)
        self.velocity_e = np.array(velocity_e, dtype=float)
        self.mat_eb = np.array(mat_eb, dtype=float)
        if self.position_e.shape != (3,):
            raise ValueError("`position_e` must have shape (3,)")
        if self.velocity_e.shape != (3,):
            raise ValueError("`velocity_e` must have shape (3,)")
        if self.mat_eb.shape != (3, 3):
            raise ValueError("`mat_eb` must have shape (3, 3)")

    @classmethod
    def from_pva(cls, pva):
        """Create the state from geodetic position-velocity-attitude.

        Parameters
        ----------
        pva : Series
            Series with 'lat', 'lon', 'alt', 'VN', 'VE', 'VD', 'roll', 'pitch',
            'heading'.

        Returns
        -------
        NavState
        """
        lla = np.asarray(pva[LLA_COLS], dtype=float)
        mat_en = transform.mat_en_from_ll(lla[0], lla[1])
        return cls(transform.lla_to_ecef(lla),
                   mat_en @ np.asarray(pva[VEL_COLS], dtype=float),
                   mat_en @ transform.mat_from_rph(np.asarray(pva[RPH_COLS],
                                                              dtype=float)))

    def to_pva(self):
        """Convert the state to geodetic position-velocity-attitude.

        Returns
        -------
        Pva
            Series with 'lat', 'lon', 'alt', 'VN', 'VE', 'VD', 'roll', 'pitch',
            'heading'.
        """
        lla = transform.ecef_to_lla(self.position_e)
        mat_ne = transform.mat_ne_from_ll(lla[0], lla[1])
        rph = transform.mat_to_rph(mat_ne @ self.mat_eb)
        return pd.Series(np.hstack([lla, mat_ne @ self.velocity_e, rph]),
                         index=TRAJECTORY_COLS)

    def copy(self):
        return NavState(self.position_e, self.velocity_e, self.mat_eb)

    def __repr__(self):
        return (f"NavState(position_e={self.position_e!r}, "
                f"velocity_e={self.velocity_e!r}, mat_eb={self.mat_eb!r})")


def measurements_from_increments(increments):
    """Iterate over IMU measurements stored in a DataFrame.

    Parameters
    ----------
    increments : Increments
        DataFrame indexed by time with columns 'theta_x', 'theta_y', 'theta_z',
        'dv_x', 'dv_y', 'dv_z'. Other columns are ignored.

    Yields
    ------
    ImuMeasurement
    """
    theta = increments[THETA_COLS].values
    dv = increments[DV_COLS].values
    for t, dv_i, theta_i in zip(increments.index, dv, theta):
        yield ImuMeasurement(t, dv_i, theta_i)


def _make_trajectory(times, pvas):
    trajectory = pd.DataFrame(np.vstack(pvas), index=times, columns=TRAJECTORY_COLS)
    trajectory.index.name = 'time'
    return trajectory


class Strapdown:
    """Strapdown INS integration algorithm in ECEF frame.

    Each call of `advance` performs the following steps for a measurement with
    time interval ``dt``:

        1. Attitude is rotated by the rotation vector of the body relative to ECEF,
           which is the measured rotation vector minus Earth rotation. Rodrigues'
           formula is used.
        2. Acceleration in ECEF is computed as a sum of Coriolis, centrifugal,
           specific force and gravity terms using the velocity predicted with the
           previous acceleration.
        3. Velocity and position are updated by the trapezoid rule.

    The accumulated round-off deviation of the attitude matrix from orthonormality
    is removed periodically by polar decomposition.

    Parameters
    ----------
    t : float
        Initial time.
    nav_state : NavState
        Initial position-velocity-attitude.
    gravity_model : callable or None, optional
        Function ``gravity_model(r_e) -> g_e`` computing the gravity vector in ECEF
        from position in ECEF. None (default) uses `ecefins.earth.gravity_ecef`.
    acceleration_e : array_like, shape (3,) or None, optional
        Acceleration at the initial time used as the previous acceleration in the
        first step. None (default) corresponds to zero.
    renormalization_period : int or None, optional
        Number of steps between re-orthonormalizations of the attitude matrix.
        None disables it. Default is 1000.
    """
    EARTH_RATE_E = np.array([0.0, 0.0, earth.RATE])

    def __init__(self, t, nav_state, gravity_model=None, acceleration_e=None,
                 renormalization_period=1000):
        if renormalization_period is not None and renormalization_period < 1:
            raise ValueError("`renormalization_period` must be positive or None")
        if acceleration_e is None:
            acceleration_e = np.zeros(3)
        acceleration_e = np.array(acceleration_e, dtype=float)
        if acceleration_e.shape != (3,):
            raise ValueError("`acceleration_e` must have shape (3,)")

        self.t = float(t)
        self.gravity_model = (earth.gravity_ecef if gravity_model is None
                              else gravity_model)
        self.renormalization_period = renormalization_period
        self.n_steps = 0
        self._nav_state = nav_state.copy()
        self._previous_nav_state = None
        self._acceleration_e = acceleration_e

    @property
    def nav_state(self):
        """Current position-velocity-attitude, a copy."""
        return self._nav_state.copy()

    @property
    def previous_nav_state(self):
        """Position-velocity-attitude before the last step, a copy or None."""
        if self._previous_nav_state is None:
            return None
        return self._previous_nav_state.copy()

    @property
    def acceleration_e(self):
        """Acceleration relative to Earth computed in the last step."""
        return self._acceleration_e.copy()

    def advance(self, measurement):
        """Integrate a single IMU measurement.

        Parameters
        ----------
        measurement : ImuMeasurement
            Measurement corrected for sensor errors.

        Returns
        -------
        NavState
            Updated position-velocity-attitude.

        Raises
        ------
        InvalidTimestepError
            If the measurement time is not greater than the current time. The state
            is not modified in this case.
        """
        dt = measurement.t - self.t
        if not dt > 0:
            raise InvalidTimestepError(
                f"Measurement time {measurement.t} must be greater than "
                f"the current time {self.t}")

        state = self._nav_state
        earth_rate_e = self.EARTH_RATE_E
        omega_ie_e = util.skew_matrix(earth_rate_e)

        rate_ib_b = measurement.theta / dt
        rate_eb_b = rate_ib_b - state.mat_eb.T @ earth_rate_e
        mat_eb = state.mat_eb @ dcm.from_rv(rate_eb_b * dt)

        acceleration_prev = self._acceleration_e
        velocity_pred = state.velocity_e + acceleration_prev * dt

        coriolis = -2 * omega_ie_e @ velocity_pred
        centrifugal = -omega_ie_e @ omega_ie_e @ (
            0.5 * dt * (state.velocity_e + velocity_pred))
        specific_force = mat_eb @ (measurement.dv / dt)
        gravity = np.asarray(self.gravity_model(state.position_e), dtype=float)
        acceleration = coriolis + centrifugal + specific_force + gravity

        velocity = state.velocity_e + 0.5 * dt * (acceleration_prev + acceleration)
        position = state.position_e + 0.5 * dt * (state.velocity_e + velocity)

        self.n_steps += 1
        if (self.renormalization_period is not None and
                self.n_steps % self.renormalization_period == 0):
            mat_eb = dcm.orthonormalize(mat_eb)

        self.t = measurement.t
        self._previous_nav_state = state
        self._nav_state = NavState(position, velocity, mat_eb)
        self._acceleration_e = acceleration

        return self.nav_state

    def orthonormality_error(self):
        """Compute deviation of the attitude matrix from orthonormality."""
        return dcm.orthonormality_error(self._nav_state.mat_eb)

    def renormalize(self):
        """Replace the attitude matrix by the closest orthonormal matrix."""
        self._nav_state.mat_eb = dcm.orthonormalize(self._nav_state.mat_eb)

    def set_nav_state(self, nav_state):
        """Set (overwrite) the current position-velocity-attitude."""
        self._nav_state = nav_state.copy()

    def get_pva(self):
        """Get the current geodetic position-velocity-attitude."""
        return self._nav_state.to_pva()

    def integrate(self, increments):
        """Integrate a sequence of increments.

        The integration continues from the current state.

        Parameters
        ----------
        increments : Increments
            Attitude and velocity increments indexed by time.

        Returns
        -------
        Trajectory
            Computed trajectory including the point before `increments` were
            integrated.
        """
        times = [self.t]
        pvas = [self.get_pva()]
        for measurement in measurements_from_increments(increments):
            self.advance(measurement)
            times.append(self.t)
            pvas.append(self.get_pva())
        return _make_trajectory(times, pvas)
