"""Navigation combining IMU error compensation and strapdown integration.

Classes
-------
.. autosummary::
    :toctree: generated/

    Navigation
"""
from .inertial_sensor import ImuError, correct_imu
from .strapdown import measurements_from_increments, _make_trajectory


class Navigation:
    """Top level navigation object.

    Raw IMU measurements are compensated using the current IMU error model and then
    integrated by the strapdown algorithm.

    A navigation filter can be attached through `feedback`. It is called as
    ``feedback(navigation)`` after every integrated measurement and may correct the
    navigation state by `set_nav_state` or replace `imu_error`. The next
    measurement is compensated with the updated `imu_error`.

    Parameters
    ----------
    strapdown : `ecefins.strapdown.Strapdown`
        Strapdown integrator holding the initial state. It becomes exclusively owned
        by the created object.
    imu_error : `ecefins.inertial_sensor.ImuError` or None, optional
        Initial IMU error model. None (default) corresponds to error-free IMU.
    feedback : callable or None, optional
        Function called after each step. None (default) means no corrections.

    Attributes
    ----------
    strapdown : `ecefins.strapdown.Strapdown`
        Strapdown integrator.
    imu_error : `ecefins.inertial_sensor.ImuError`
        Current IMU error model.
    feedback : callable or None
        Function called after each step.
    """
    def __init__(self, strapdown, imu_error=None, feedback=None):
        self.strapdown = strapdown
        self.imu_error = ImuError.zero() if imu_error is None else imu_error
        self.feedback = feedback

    @property
    def t(self):
        """Time of the current navigation state."""
        return self.strapdown.t

    @property
    def nav_state(self):
        """Current position-velocity-attitude."""
        return self.strapdown.nav_state

    def set_nav_state(self, nav_state):
        """Set (overwrite) the current position-velocity-attitude."""
        self.strapdown.set_nav_state(nav_state)

    def advance(self, measurement):
        """Process a raw IMU measurement.

        Parameters
        ----------
        measurement : `ecefins.strapdown.ImuMeasurement`
            Raw measurement.

        Returns
        -------
        `ecefins.strapdown.NavState`
            Updated position-velocity-attitude.

        Raises
        ------
        `ecefins.strapdown.InvalidTimestepError`
            If the measurement time is not greater than the current time. The state
            is not modified in this case.
        """
        dt = measurement.t - self.strapdown.t
        corrected = correct_imu(measurement, self.imu_error, dt)
        self.strapdown.advance(corrected)
        if self.feedback is not None:
            self.feedback(self)
        return self.nav_state

    def run(self, increments):
        """Process a sequence of raw increments.

        Parameters
        ----------
        increments : Increments
            Raw attitude and velocity increments indexed by time.

        Returns
        -------
        Trajectory
            Computed trajectory including the point before `increments` were
            processed.
        """
        times = [self.t]
        pvas = [self.strapdown.get_pva()]
        for measurement in measurements_from_increments(increments):
            self.advance(measurement)
            times.append(self.t)
            pvas.append(self.strapdown.get_pva())
        return _make_trajectory(times, pvas)
