"""
Transform helpers for scene scripts (4x4 float32, column vectors).
"""

import math
from typing import Sequence, Union

import numpy as np

Vector3 = Union[Sequence[float], np.ndarray]


def identity() -> np.ndarray:
    return np.eye(4, dtype=np.float32)


def translation(offset: Vector3) -> np.ndarray:
    m = identity()
    m[:3, 3] = np.asarray(offset, dtype=np.float32)
    return m


def scaling(factor: Union[float, Vector3]) -> np.ndarray:
    s = np.broadcast_to(np.asarray(factor, dtype=np.float32), (3,))
    m = identity()
    m[0, 0], m[1, 1], m[2, 2] = s
    return m


def rotation_y(degrees: float) -> np.ndarray:
    r = math.radians(degrees)
    c, s = math.cos(r), math.sin(r)
    m = identity()
    m[0, 0], m[0, 2] = c, s
    m[2, 0], m[2, 2] = -s, c
    return m


def compose(*transforms: np.ndarray) -> np.ndarray:
    """compose(a, b, c) == a @ b @ c (c applied first)."""
    m = identity()
    for t in transforms:
        m = m @ np.asarray(t, dtype=np.float32)
    return m


def as_transform(value) -> np.ndarray:
    """Validate and convert anything 4x4-shaped to a float32 matrix."""
    if value is None:
        return identity()
    m = np.asarray(value, dtype=np.float32)
    if m.shape != (4, 4):
        raise ValueError(f"Transform must be 4x4, got shape {m.shape}")
    return m
