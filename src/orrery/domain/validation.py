# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Boundary validation for records entering the layout engine.

The numeric core assumes well-formed input; adapters call these on
every record read from storage before handing it to the core.
"""
import math

from orrery.domain.cluster_placement import ClusterCenter
from orrery.domain.collision_mitigation import CelestialBody


def _is_number(value) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, float))


def validate_finite(value, name: str) -> float:
    """Return value as float; raise ValueError if it is not a finite number."""
    if not _is_number(value):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return float(value)


def validate_index(value, name: str = "index") -> int:
    """Return value if it is a non-negative integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


def validate_radius(value, name: str = "radius") -> float:
    """Return value as float if it is a finite, strictly positive number."""
    radius = validate_finite(value, name)
    if radius <= 0:
        raise ValueError(f"{name} must be positive, got {radius}")
    return radius


def validate_elapsed_time(value) -> float:
    """Elapsed time may be any finite number, including negative."""
    return validate_finite(value, "elapsed_time")


def validate_center(center: ClusterCenter) -> ClusterCenter:
    """Raise ValueError if any coordinate is not finite."""
    for axis in ("x", "y", "z"):
        validate_finite(getattr(center, axis), f"center.{axis}")
    return center


def validate_body(body: CelestialBody) -> CelestialBody:
    """Raise ValueError if a body's id or orbit is malformed."""
    if not isinstance(body.id, str) or not body.id:
        raise ValueError(f"body id must be a non-empty string, got {body.id!r}")
    validate_radius(body.radius, f"body {body.id} radius")
    validate_finite(body.angle, f"body {body.id} angle")
    validate_finite(body.speed, f"body {body.id} speed")
    return body
