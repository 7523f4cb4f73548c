"""Error models of inertial sensors and compensation of IMU increments.

Gyroscopes and accelerometers are described by the same model::

    x_corrected = S @ M @ (x - b * dt)

where

    - ``x`` is a raw increment (rotation vector or velocity increment) over the
      interval ``dt``
    - ``S = I + diag(scale_factor) / 1e6`` is a scale factor matrix with scale
      factor errors given in ppm
    - ``M`` is a misalignment matrix with unit diagonal and 6 off-diagonal elements
      given in row major order::

          [[1,  m0, m1],
           [m2, 1,  m3],
           [m4, m5, 1]]

    - ``b`` is a bias, in rad/s for gyros and m/s^2 for accelerometers

Classes
-------
.. autosummary::
    :toctree: generated/

    SensorError
    GyroscopeError
    AccelerometerError
    ImuError

Functions
---------
.. autosummary::
    :toctree: generated/

    correct_imu
    apply_imu_error
"""
import numpy as np
import pandas as pd
from .util import INDEX_TO_XYZ


class SensorError:
    """Error parameters of a sensor triad.

    Parameters
    ----------
    scale_factor : array_like, shape (3,) or None, optional
        Scale factor errors in ppm. None (default) corresponds to zero.
    misalignment : array_like, shape (6,) or None, optional
        Off-diagonal elements of the misalignment matrix in row major order.
        None (default) corresponds to zero.
    bias : array_like, shape (3,) or None, optional
        Bias. None (default) corresponds to zero.

    Floats are accepted for every parameter, in this case the value is used for all
    elements.
    """
    def __init__(self, scale_factor=None, misalignment=None, bias=None):
        self.scale_factor = self._verify_param(scale_factor, (3,), "scale_factor")
        self.misalignment = self._verify_param(misalignment, (6,), "misalignment")
        self.bias = self._verify_param(bias, (3,), "bias")

    @staticmethod
    def _verify_param(param, shape, name):
        if param is None:
            return np.zeros(shape)

        param = np.asarray(param, dtype=float)
        if param.ndim == 0:
            param = np.resize(param, shape)
        elif param.shape != shape:
            raise ValueError(f"`{name}` might be float or array with shape {shape}")

        return param.copy()

    def scale_factor_matrix(self):
        """Compute the scale factor matrix ``I + diag(scale_factor) / 1e6``."""
        return np.identity(3) + np.diag(self.scale_factor / 1e6)

    def misalignment_matrix(self):
        """Compute the misalignment matrix with unit diagonal."""
        m = self.misalignment
        return np.array([
            [1.0, m[0], m[1]],
            [m[2], 1.0, m[3]],
            [m[4], m[5], 1.0]
        ])

    def correct(self, increment, dt):
        """Compensate errors in a raw increment.

        Parameters
        ----------
        increment : array_like, shape (3,)
            Raw increment.
        dt : float
            Time interval of the increment.

        Returns
        -------
        ndarray, shape (3,)
            Corrected increment.
        """
        increment = np.asarray(increment, dtype=float)
        return (self.scale_factor_matrix() @ self.misalignment_matrix()
                @ (increment - self.bias * dt))

    def apply(self, increment, dt):
        """Apply errors to a true increment.

        This is the exact inverse of `correct`, useful for simulation.

        Parameters
        ----------
        increment : array_like, shape (3,)
            True increment.
        dt : float
            Time interval of the increment.

        Returns
        -------
        ndarray, shape (3,)
            Increment containing errors.
        """
        transform = self.scale_factor_matrix() @ self.misalignment_matrix()
        return np.linalg.solve(transform, np.asarray(increment, dtype=float)) + \
            self.bias * dt

    def to_series(self, prefix):
        """Represent parameters as Series.

        Parameters
        ----------
        prefix : str
            Prefix added to the parameter names.

        Returns
        -------
        Series
            Parameters indexed by names like 'gyro_sf_x', 'gyro_ms_1', 'gyro_bias_z'.
        """
        data = {}
        for axis in range(3):
            data[f"{prefix}_sf_{INDEX_TO_XYZ[axis]}"] = self.scale_factor[axis]
        for i in range(6):
            data[f"{prefix}_ms_{i}"] = self.misalignment[i]
        for axis in range(3):
            data[f"{prefix}_bias_{INDEX_TO_XYZ[axis]}"] = self.bias[axis]
        return pd.Series(data)

    def __repr__(self):
        return (f"{self.__class__.__name__}(scale_factor={self.scale_factor!r}, "
                f"misalignment={self.misalignment!r}, bias={self.bias!r})")


class GyroscopeError(SensorError):
    """Gyroscope triad errors.

    Bias is measured in rad/s, see `SensorError` for the parameters.
    """


class AccelerometerError(SensorError):
    """Accelerometer triad errors.

    Bias is measured in m/s^2, see `SensorError` for the parameters.
    """


class ImuError:
    """IMU error model combining gyroscope and accelerometer errors.

    Parameters
    ----------
    gyro : `GyroscopeError` or None, optional
        Gyroscope errors. None (default) corresponds to error-free gyros.
    accel : `AccelerometerError` or None, optional
        Accelerometer errors. None (default) corresponds to error-free
        accelerometers.
    """
    def __init__(self, gyro=None, accel=None):
        self.gyro = GyroscopeError() if gyro is None else gyro
        self.accel = AccelerometerError() if accel is None else accel

    @classmethod
    def zero(cls):
        """Create an error model without any errors."""
        return cls()

    def to_series(self):
        """Represent all parameters as Series."""
        return pd.concat([self.gyro.to_series('gyro'), self.accel.to_series('accel')])

    def __repr__(self):
        return f"ImuError(gyro={self.gyro!r}, accel={self.accel!r})"


def correct_imu(measurement, imu_error, dt):
    """Correct an IMU measurement given an error model.

    The function has no side effects and doesn't validate `dt`.

    Parameters
    ----------
    measurement : `ecefins.strapdown.ImuMeasurement`
        Raw measurement.
    imu_error : `ImuError`
        IMU error model.
    dt : float
        Time interval of the measurement.

    Returns
    -------
    `ecefins.strapdown.ImuMeasurement`
        Corrected measurement with the same time.
    """
    return type(measurement)(measurement.t,
                             imu_error.accel.correct(measurement.dv, dt),
                             imu_error.gyro.correct(measurement.theta, dt))


def apply_imu_error(measurement, imu_error, dt):
    """Apply errors to an error-free IMU measurement.

    This is the exact inverse of `correct_imu`.

    Parameters
    ----------
    measurement : `ecefins.strapdown.ImuMeasurement`
        Error-free measurement.
    imu_error : `ImuError`
        IMU error model.
    dt : float
        Time interval of the measurement.

    Returns
    -------
    `ecefins.strapdown.ImuMeasurement`
        Measurement containing errors.
    """
    return type(measurement)(measurement.t,
                             imu_error.accel.apply(measurement.dv, dt),
                             imu_error.gyro.apply(measurement.theta, dt))
