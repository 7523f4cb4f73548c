"""ecefins: strapdown inertial navigation in Earth-centered Earth-fixed frame.

Type naming conventions
-----------------------
Navigation state and IMU measurements are processed one at a time as plain objects:

    - `ImuMeasurement` - time, velocity increment 'dv' and rotation vector 'theta'
      integrated by an IMU over a sampling interval
    - `NavState` - position and velocity in ECEF frame and a rotation matrix
      projecting from the body frame to ECEF

Sequences and geodetic representations use pandas DataFrame or Series with fixed
sets of columns:

    - `Trajectory` - DataFrame containing INS trajectory with columns 'lat', 'lon',
      'alt', 'VN', 'VE', 'VD', 'roll', 'pitch', 'heading'. These comprise geodetic
      position, velocity resolved in North-East-Down frame and Euler angles for
      the attitude
    - `Pva` - Series representing position-velocity-attitude - a single row of
      `Trajectory`
    - `Increments` - DataFrame containing attitude and velocity increments with
      columns 'theta_x, 'theta_y', 'theta_z' - components of the rotation vector,
      'dv_x', 'dv_y', 'dv_z' - velocity increments

All data are indexed by time in seconds.

Variable naming convention
--------------------------
Geometric vectors and rotation matrices are associated with frames of reference.
A vector ``vec`` expressed in a frame ``a`` is typically denoted as ``vec_a``.
A rotation matrix projecting from frame ``b`` to frame ``a`` is denoted as ``mat_ab``.

The following one-letter notation for the frames of reference is used:

    - e - Earth-centered Earth-fixed frame (ECEF)
    - i - Earth-centered inertial frame (ECI)
    - n - North-East-Down local horizon frame
    - b - frame associated with IMU axes also known as "body frame"

Units of measurement
--------------------
Generally all parameters are measured in International System of Units.
Angle parameters (latitude, longitude, roll, pitch, heading) are measured in
degrees. Scale factor errors of inertial sensors are measured in ppm.

Modules
-------
.. autosummary::
   :toctree: generated/

   dcm
   earth
   inertial_sensor
   navigation
   sim
   strapdown
   transform
   util
"""
from . import (dcm, earth, inertial_sensor, navigation, sim, strapdown, transform,
               util)
from .inertial_sensor import (AccelerometerError, GyroscopeError, ImuError,
                              correct_imu)
from .navigation import Navigation
from .strapdown import ImuMeasurement, InvalidTimestepError, NavState, Strapdown

__version__ = "0.1"
