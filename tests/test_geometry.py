import numpy as np
import pytest

from ipltools.geometry import quaternion_to_euler, quaternion_to_matrix


def test_identity():
    assert quaternion_to_euler(0.0, 0.0, 0.0, 1.0) == pytest.approx((0.0, 0.0, 0.0), abs=1e-9)


def test_matrix_of_z_quarter_turn():
    s = 0.5 ** 0.5
    matrix = quaternion_to_matrix(0.0, 0.0, s, s)
    expected = np.array([[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
    np.testing.assert_allclose(matrix, expected, atol=1e-9)


def test_z_quarter_turn():
    s = 0.5 ** 0.5
    assert quaternion_to_euler(0.0, 0.0, s, s) == pytest.approx((0.0, 0.0, -90.0), abs=1e-6)


def test_half_turn_about_z():
    rx, ry, rz = quaternion_to_euler(0.0, 0.0, 1.0, 0.0)
    assert rx == pytest.approx(0.0, abs=1e-9)
    assert ry == pytest.approx(0.0, abs=1e-9)
    assert abs(rz) == pytest.approx(180.0)


def test_gimbal_lock_does_not_divide_by_zero():
    s = 0.5 ** 0.5
    rx, ry, rz = quaternion_to_euler(s, 0.0, 0.0, s)
    assert abs(rx) == pytest.approx(90.0)
    assert rz == 0.0
