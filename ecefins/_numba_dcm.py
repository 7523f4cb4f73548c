import numba
import numpy as np


@numba.njit
def mat_from_rotvec(rv, mat):
    norm2 = np.sum(rv ** 2)
    if norm2 > 1e-6:
        norm = norm2 ** 0.5
        cos = np.cos(norm)
        k1 = np.sin(norm) / norm
        k2 = (1 - cos) / norm2
    else:
        norm4 = norm2 * norm2
        cos = 1 - norm2 / 2 + norm4 / 24
        k1 = 1 - norm2 / 6 + norm4 / 120
        k2 = 0.5 - norm2 / 24 + norm4 / 720

    mat[0, 0] = k2 * rv[0] * rv[0] + cos
    mat[0, 1] = k2 * rv[0] * rv[1] - k1 * rv[2]
    mat[0, 2] = k2 * rv[0] * rv[2] + k1 * rv[1]
    mat[1, 0] = k2 * rv[1] * rv[0] + k1 * rv[2]
    mat[1, 1] = k2 * rv[1] * rv[1] + cos
    mat[1, 2] = k2 * rv[1] * rv[2] - k1 * rv[0]
    mat[2, 0] = k2 * rv[2] * rv[0] - k1 * rv[1]
    mat[2, 1] = k2 * rv[2] * rv[1] + k1 * rv[0]
    mat[2, 2] = k2 * rv[2] * rv[2] + cos


@numba.njit
def mats_from_rotvecs(rv, mat):
    for i in range(len(rv)):
        mat_from_rotvec(rv[i], mat[i])


@numba.njit
def orthonormality_error(mat):
    result = 0.0
    for i in range(3):
        for j in range(3):
            s = 0.0
            for k in range(3):
                s += mat[i, k] * mat[j, k]
            if i == j:
                s -= 1.0
            result += s * s
    return result ** 0.5
