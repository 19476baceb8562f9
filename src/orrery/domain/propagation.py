# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Live position evaluation for circular orbits.

Stateless: the position is a closed-form function of elapsed time, so
frames may be evaluated in any order.
No external dependencies; only stdlib math.
"""
import math

from orrery.domain.cluster_placement import ClusterCenter


def current_angle(initial_angle: float, angular_speed: float, elapsed_time: float) -> float:
    """Orbital phase (radians) after elapsed_time."""
    return initial_angle + angular_speed * elapsed_time


def planar_offset(radius: float, angle: float) -> tuple[float, float]:
    """(dx, dz) offset from the cluster center for a body at the given phase."""
    return radius * math.cos(angle), radius * math.sin(angle)


def evaluate_position(
    center: ClusterCenter,
    radius: float,
    initial_angle: float,
    angular_speed: float,
    elapsed_time: float,
) -> tuple[float, float, float]:
    """
    Current 3D position of an orbiting body.

    Orbits lie in the horizontal plane through the cluster center
    (y is constant).

    Args:
        center: Cluster center.
        radius: Orbit radius.
        initial_angle: Phase at elapsed_time = 0 (radians).
        angular_speed: Radians per time unit.
        elapsed_time: Time since the scene epoch.

    Returns:
        (x, y, z) tuple.
    """
    dx, dz = planar_offset(radius, current_angle(initial_angle, angular_speed, elapsed_time))
    return center.x + dx, center.y, center.z + dz
