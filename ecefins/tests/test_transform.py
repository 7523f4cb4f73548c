import warnings
import numpy as np
from numpy.testing import assert_allclose, assert_equal
import pandas as pd
import pytest
from scipy.spatial.transform import Rotation
from ecefins import earth, transform
from ecefins.util import LLA_COLS, NED_COLS


def test_lla_to_ecef():
    r_e = transform.lla_to_ecef([0, 0, 10])
    assert_allclose(r_e, [earth.A + 10, 0, 0])

    r_e = transform.lla_to_ecef([-90, 0, -10])
    assert_allclose(r_e, [0, 0, -earth.B + 10], atol=1e-6)

    r_e = transform.lla_to_ecef([[0, 0, 10], [-90, 0, -10]])
    assert_allclose(r_e, [[earth.A + 10, 0, 0], [0, 0, -earth.B + 10]], atol=1e-6)


def test_lla_to_ecef_reference_point():
    r_e = transform.lla_to_ecef([45.0, -93.0, 100.0])
    assert_allclose(r_e, [-236436.13927, -4511470.29137, 4487419.11943], atol=1e-3)

    lla = transform.ecef_to_lla(r_e)
    assert_allclose(lla[:2], [45.0, -93.0], atol=1e-6)
    assert_allclose(lla[2], 100.0, atol=1e-3)


def test_ecef_to_lla():
    assert_allclose(transform.ecef_to_lla([earth.A + 10, 0, 0]), [0, 0, 10],
                    atol=1e-6)
    assert_allclose(transform.ecef_to_lla([0, 0, earth.B]), [90, 0, 0], atol=1e-6)
    assert_allclose(transform.ecef_to_lla([0, 0, -earth.B - 100]), [-90, 0, 100],
                    atol=1e-6)
    assert_allclose(transform.ecef_to_lla([0, -earth.A, 0]), [0, -90, 0], atol=1e-6)

    lla = transform.ecef_to_lla([-earth.A - 5, -0.0, 0])
    assert_allclose(lla, [0, 180, 5], atol=1e-6)

    lla = transform.ecef_to_lla([[earth.A + 10, 0, 0], [0, 0, earth.B]])
    assert lla.shape == (2, 3)
    assert_allclose(lla, [[0, 0, 10], [90, 0, 0]], atol=1e-6)


def test_ecef_to_lla_zero_vector():
    with pytest.warns(RuntimeWarning):
        lla = transform.ecef_to_lla([0, 0, 0])
    assert np.all(np.isfinite(lla))
    assert_allclose(lla, [90, 0, -earth.B], atol=1e-6)


def test_ecef_to_lla_near_center():
    with pytest.warns(RuntimeWarning):
        lla = transform.ecef_to_lla([1e-300, 0, 0])
    assert_allclose(lla, [90, 0, -earth.B], atol=1e-6)

    with pytest.warns(RuntimeWarning):
        lla = transform.ecef_to_lla([0, 1e-9, 0])
    assert_allclose(lla, [90, 90, -earth.B], atol=1e-6)

    with pytest.warns(RuntimeWarning):
        lla = transform.ecef_to_lla([[1.0, 0, 1.0], [1.0, 0, -1.0]])
    assert_allclose(lla, [[90, 0, 1 - earth.B], [-90, 0, 1 - earth.B]], atol=1e-6)

    np.random.seed(0)
    r_e = np.random.uniform(-1e5, 1e5, (1000, 3))
    with pytest.warns(RuntimeWarning):
        lla = transform.ecef_to_lla(r_e)
    assert np.all(np.isfinite(lla))
    assert np.all(np.abs(lla[:, 0]) <= 90)
    assert np.all(lla[:, 1] > -180)
    assert np.all(lla[:, 1] <= 180)


def test_ecef_to_lla_polar_axis():
    with warnings.catch_warnings():
        warnings.simplefilter('error')
        lla = transform.ecef_to_lla([[0, 0, earth.B], [0, 0, -earth.B - 100],
                                     [0, 0, 1.0]])
    assert_allclose(lla, [[90, 0, 0], [-90, 0, 100], [90, 0, 1 - earth.B]],
                    atol=1e-6)


@pytest.mark.parametrize("alt", [-1000.0, 0.0, 100.0, 10000.0, 50000.0])
def test_round_trip(alt):
    lat = np.linspace(-90, 90, 181)
    lon = np.linspace(-179.5, 180, 38)
    lat, lon = np.meshgrid(lat, lon)
    lla = np.column_stack([lat.ravel(), lon.ravel(), np.full(lat.size, alt)])

    with warnings.catch_warnings():
        warnings.simplefilter('error')
        result = transform.ecef_to_lla(transform.lla_to_ecef(lla))

    assert np.all(np.isfinite(result))
    assert_allclose(result[:, 0], lla[:, 0], atol=1e-6)
    assert_allclose(result[:, 2], lla[:, 2], atol=1e-3)

    not_polar = np.abs(lla[:, 0]) < 90
    assert_allclose(result[not_polar, 1], lla[not_polar, 1], atol=1e-6)
    assert np.all(result[:, 1] > -180)
    assert np.all(result[:, 1] <= 180)


def test_round_trip_near_poles():
    lat = np.array([89.9, 89.999, 89.9999999, -89.99999, 45.0, 44.9999999, -45.0])
    lla = np.column_stack([lat, np.full(len(lat), 23.0), np.full(len(lat), 250.0)])
    result = transform.ecef_to_lla(transform.lla_to_ecef(lla))
    assert_allclose(result[:, :2], lla[:, :2], atol=1e-6)
    assert_allclose(result[:, 2], lla[:, 2], atol=1e-3)


def test_round_trip_equator_zero_altitude():
    lla = np.array([[0, 0, 0], [0, 120, 0], [1e-9, -60, 0], [-1e-9, 180, 0]])
    result = transform.ecef_to_lla(transform.lla_to_ecef(lla))
    assert_allclose(result, lla, atol=1e-6)


def test_mat_ne_from_ll():
    A1 = np.eye(3)
    A2 = np.array([[0, 0, 1], [0, 1, 0], [-1, 0, 0]])

    assert_allclose(transform.mat_ne_from_ll(-90, 0), A1, rtol=1e-10, atol=1e-10)
    assert_allclose(transform.mat_ne_from_ll(0, 0), A2, rtol=1e-10, atol=1e-10)
    assert_allclose(transform.mat_ne_from_ll([-90, 0], [0, 0]),
                    np.stack([A1, A2]), rtol=1e-10, atol=1e-10)

    # Rows are directions of North, East, Down.
    lla = [55.0, 37.0, 0.0]
    r0 = transform.lla_to_ecef(lla)
    mat_ne = transform.mat_ne_from_ll(lla[0], lla[1])
    north = transform.lla_to_ecef([55.0 + 1e-6, 37.0, 0.0]) - r0
    up = transform.lla_to_ecef([55.0, 37.0, 1.0]) - r0
    assert_allclose(mat_ne[0], north / np.linalg.norm(north), atol=1e-7)
    assert_allclose(mat_ne[2], -up, atol=1e-6)


def test_mat_en_from_ll():
    np.random.seed(0)
    lat = np.random.uniform(-90, 90, 50)
    lon = np.random.uniform(-180, 180, 50)
    mat_ne = transform.mat_ne_from_ll(lat, lon)
    mat_en = transform.mat_en_from_ll(lat, lon)
    assert_equal(mat_en, mat_ne.transpose((0, 2, 1)))
    assert_allclose(mat_en @ mat_ne, np.broadcast_to(np.eye(3), (50, 3, 3)),
                    atol=1e-14)
    assert_allclose(np.linalg.det(mat_ne), 1, rtol=1e-14)

    assert_equal(transform.mat_en_from_ll(lat[0], lon[0]), mat_ne[0].T)


def test_lla_to_ned():
    lla = [[0, 0, 1000], [90, 90, 0], [0, -90, -1000]]
    ned = transform.lla_to_ned(lla)
    a = earth.A + 1000
    expected = [[0, 0, 0], [earth.B, 0, a], [0, -earth.A + 1000, a]]
    assert_allclose(ned, expected, atol=1e-6)
    assert isinstance(ned, np.ndarray)

    lla = pd.DataFrame(data=lla, columns=LLA_COLS)
    ned = transform.lla_to_ned(lla)
    expected = pd.DataFrame(data=expected, columns=NED_COLS)
    assert_allclose(ned, expected, atol=1e-6)
    assert isinstance(ned, pd.DataFrame)


def test_mat_from_rph():
    assert_allclose(transform.mat_from_rph([0, 0, 0]), np.eye(3))

    rph1 = [90, 0, 0]
    mat1 = [[1, 0, 0], [0, 0, -1], [0, 1, 0]]
    assert_allclose(transform.mat_from_rph(rph1), mat1, atol=1e-14)

    rph2 = [0, -90, 0]
    mat2 = [[0, 0, -1], [0, 1, 0], [1, 0, 0]]
    assert_allclose(transform.mat_from_rph(rph2), mat2, atol=1e-14)

    rph3 = [0, 0, 180]
    mat3 = [[-1, 0, 0], [0, -1, 0], [0, 0, 1]]
    assert_allclose(transform.mat_from_rph(rph3), mat3, atol=1e-14)


def test_mat_to_rph():
    assert_allclose(transform.mat_to_rph(np.eye(3)), 0)

    np.random.seed(0)
    rph = 30 * np.random.randn(10, 3)
    mat = Rotation.from_euler('xyz', rph, degrees=True).as_matrix()
    assert_allclose(transform.mat_to_rph(mat), rph)
    assert_allclose(transform.mat_to_rph(mat[0]), rph[0])

