"""
Rotation helpers for IPL placements.

IPL files store rotations as quaternions (x, y, z, w). Tools that place
objects by Euler angles need (rx, ry, rz) in degrees, using the same
convention as the map editor these files are loaded into.
"""

import math
from typing import Tuple

import numpy as np

# Below this the Y/Z decomposition is degenerate (rx at +/-90 degrees)
GIMBAL_EPSILON = 1e-9


def quaternion_to_matrix(x: float, y: float, z: float, w: float) -> np.ndarray:
    """
    Rotation matrix for a unit quaternion.

    Built as I + 2*S + 2*w*A with S the symmetric part and A the
    cross-product matrix of (x, y, z).
    """
    symmetric = np.array([
        [-(y * y) - (z * z), x * y, x * z],
        [x * y, -(x * x) - (z * z), y * z],
        [x * z, y * z, -(x * x) - (y * y)],
    ])
    antisymmetric = np.array([
        [0.0, -z, y],
        [z, 0.0, -x],
        [-y, x, 0.0],
    ])
    return np.identity(3) + 2.0 * symmetric + 2.0 * w * antisymmetric


def matrix_to_euler(matrix: np.ndarray) -> Tuple[float, float, float]:
    """Euler angles (degrees) from a 3x3 rotation matrix."""
    (x1, y1, z1), (x2, y2, z2), (x3, y3, z3) = matrix.tolist()
    z2 = max(-1.0, min(1.0, z2))

    rx = math.degrees(math.asin(z2))

    nz3 = math.sqrt(x2 * x2 + y2 * y2)
    if nz3 < GIMBAL_EPSILON:
        # rz folded into ry
        ry = -math.degrees(math.atan2(-z2 * y1, -z2 * y3))
        return rx, ry, 0.0

    nz1 = -x2 * z2 / nz3
    nz2 = -y2 * z2 / nz3
    vx = nz1 * x1 + nz2 * y1 + nz3 * z1
    vz = nz1 * x3 + nz2 * y3 + nz3 * z3

    ry = -math.degrees(math.atan2(vx, vz))
    rz = -math.degrees(math.atan2(x2, y2))
    return rx, ry, rz


def quaternion_to_euler(x: float, y: float, z: float, w: float) -> Tuple[float, float, float]:
    """Convert an IPL quaternion to (rx, ry, rz) in degrees."""
    return matrix_to_euler(quaternion_to_matrix(x, y, z, w))
