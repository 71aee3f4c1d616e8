"""Numeric codec — vectors, colours and rotations as flat float lists.

Component order is fixed: ``x, y, z, w`` for vectors and ``r, g, b, a`` for
colours.  Arrays of vectors are flattened vertex by vertex.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

Vector = Sequence[float]


def _take(vec: Vector, count: int) -> list[float]:
    if len(vec) < count:
        raise ValueError(
            f"Expected at least {count} components, got {len(vec)}"
        )
    return [float(vec[i]) for i in range(count)]


def to_float2(vec: Vector) -> list[float]:
    return _take(vec, 2)


def to_float3(vec: Vector) -> list[float]:
    return _take(vec, 3)


def to_float4(vec: Vector) -> list[float]:
    return _take(vec, 4)


def color_to_float3(color: Vector) -> list[float]:
    """RGB components of *color*; any alpha is dropped."""
    return _take(color, 3)


def color_to_float4(color: Vector) -> list[float]:
    """RGBA components of *color*, with alpha 1.0 for an RGB input."""
    if len(color) == 3:
        return _take(color, 3) + [1.0]
    return _take(color, 4)


def flatten_float2(vecs: Iterable[Vector]) -> list[float]:
    out: list[float] = []
    for vec in vecs:
        out.extend(_take(vec, 2))
    return out


def flatten_float3(vecs: Iterable[Vector]) -> list[float]:
    out: list[float] = []
    for vec in vecs:
        out.extend(_take(vec, 3))
    return out


# ---------------------------------------------------------------------------
# Rotations
# ---------------------------------------------------------------------------

# Euler angles are applied Z first, then X, then Y (R = Ry * Rx * Rz).

_GIMBAL_EPSILON = 1e-6
_ANGLE_DIGITS = 5


def _normalize_degrees(angle: float) -> float:
    return round(angle, _ANGLE_DIGITS) % 360.0


def quaternion_to_euler(quat: Vector) -> list[float]:
    """Convert an ``(x, y, z, w)`` quaternion to Euler angles in degrees.

    Each angle is normalised to ``[0, 360)``.
    """
    x, y, z, w = _take(quat, 4)
    norm = math.sqrt(x * x + y * y + z * z + w * w)
    if norm == 0.0:
        return [0.0, 0.0, 0.0]
    x, y, z, w = x / norm, y / norm, z / norm, w / norm

    m00 = 1.0 - 2.0 * (y * y + z * z)
    m02 = 2.0 * (x * z + w * y)
    m10 = 2.0 * (x * y + w * z)
    m11 = 1.0 - 2.0 * (x * x + z * z)
    m12 = 2.0 * (y * z - w * x)
    m20 = 2.0 * (x * z - w * y)
    m22 = 1.0 - 2.0 * (x * x + y * y)

    pitch = math.asin(max(-1.0, min(1.0, -m12)))
    if abs(m12) < 1.0 - _GIMBAL_EPSILON:
        yaw = math.atan2(m02, m22)
        roll = math.atan2(m10, m11)
    else:
        # Gimbal lock: fold all of the remaining rotation into yaw
        yaw = math.atan2(-m20, m00)
        roll = 0.0

    return [
        _normalize_degrees(math.degrees(pitch)),
        _normalize_degrees(math.degrees(yaw)),
        _normalize_degrees(math.degrees(roll)),
    ]
