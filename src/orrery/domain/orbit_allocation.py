# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Satellite orbit allocation within a cluster.

Each body gets a unique circular orbit radius, a golden-angle phase and
an angular speed scaled by an irrational multiplier so that no two
bodies settle into a repeating (resonant) close pass.

The used-radius accumulator is owned by the caller and passed in
explicitly; nothing here keeps state between calls.
"""
import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from orrery.domain.config import AllocationConfig

logger = logging.getLogger(__name__)

_DEFAULT_ALLOCATION = AllocationConfig()

# Speed multipliers for bodies 1..7. Pairwise ratios are irrational.
RESONANCE_MULTIPLIERS: tuple[float, ...] = (
    (1.0 + math.sqrt(5.0)) / 2.0,   # golden ratio
    math.sqrt(2.0) + 1.0,           # silver ratio
    math.pi,
    2.0 + math.sqrt(5.0),
    3.0 + 2.0 * math.sqrt(2.0),
    4.0 + 2.0 * math.sqrt(3.0),
    5.0 + 2.0 * math.sqrt(5.0),
)


@dataclass(frozen=True)
class OrbitAssignment:
    """Static orbit of one satellite body around its cluster center."""
    radius: float
    angle: float           # radians, interpreted mod 2π
    angular_speed: float   # radians per time unit


def _conflicts(radius: float, existing_radii: Sequence[float], tolerance: float) -> bool:
    return any(abs(radius - r) < tolerance for r in existing_radii)


def allocate_radius(
    body_index: int,
    existing_radii: Sequence[float],
    config: AllocationConfig = _DEFAULT_ALLOCATION,
) -> float:
    """
    First orbit slot at or beyond the body's own slot that is free.

    Slots are base_orbit_radius + k * orbit_gap. After max_attempts
    advances the current slot is accepted even if it still conflicts.
    """
    attempts = 0
    radius = config.base_orbit_radius + body_index * config.orbit_gap
    while _conflicts(radius, existing_radii, config.tolerance) and attempts < config.max_attempts:
        attempts += 1
        radius = config.base_orbit_radius + (body_index + attempts) * config.orbit_gap

    if _conflicts(radius, existing_radii, config.tolerance):
        logger.warning(
            "No free orbit radius for body index %d after %d attempts; using %.3f",
            body_index, attempts, radius,
        )
    return radius


def initial_phase(
    body_index: int,
    cluster_angle_offset: float = 0.0,
    config: AllocationConfig = _DEFAULT_ALLOCATION,
) -> float:
    """Golden-angle phase (radians) shifted by the cluster's offset (degrees)."""
    planet_angle = (body_index * config.golden_angle_deg) % 360.0
    total_angle = (planet_angle + cluster_angle_offset) % 360.0
    return math.radians(total_angle)


def resonance_multiplier(body_index: int) -> float:
    """Speed multiplier for a body; 1.0 for the innermost body."""
    if body_index == 0:
        return 1.0
    if body_index - 1 < len(RESONANCE_MULTIPLIERS):
        return RESONANCE_MULTIPLIERS[body_index - 1]
    return body_index * math.sqrt(2.0)


def angular_speed(
    body_index: int,
    radius: float,
    config: AllocationConfig = _DEFAULT_ALLOCATION,
) -> float:
    """
    Angular speed for a body on the given radius.

    base = speed_constant / sqrt(radius), so inner bodies move faster,
    scaled by the body's resonance multiplier and clamped to
    [min_speed, max_speed].
    """
    base = config.speed_constant / math.sqrt(radius)
    speed = base * resonance_multiplier(body_index)
    return min(max(speed, config.min_speed), config.max_speed)


def calculate_orbit_assignment(
    body_index: int,
    existing_radii: Sequence[float] = (),
    cluster_angle_offset: float = 0.0,
    config: AllocationConfig = _DEFAULT_ALLOCATION,
) -> OrbitAssignment:
    """
    Assign radius, phase and angular speed to one satellite body.

    Args:
        body_index: Non-negative creation-order index of the body.
        existing_radii: Radii already in use in this cluster.
        cluster_angle_offset: Tenant phase offset in degrees.
        config: Allocation parameters.

    Returns:
        OrbitAssignment. Same inputs always give the same output.
    """
    radius = allocate_radius(body_index, existing_radii, config)
    return OrbitAssignment(
        radius=radius,
        angle=initial_phase(body_index, cluster_angle_offset, config),
        angular_speed=angular_speed(body_index, radius, config),
    )


def allocate_orbits(
    body_indices: Iterable[int],
    existing_radii: Sequence[float] = (),
    cluster_angle_offset: float = 0.0,
    config: AllocationConfig = _DEFAULT_ALLOCATION,
) -> list[OrbitAssignment]:
    """
    Allocate orbits for several bodies of one cluster in the given order.

    Each new radius is added to a local copy of existing_radii before
    the next body is allocated; the caller's sequence is not mutated.
    """
    used = list(existing_radii)
    assignments: list[OrbitAssignment] = []
    for body_index in body_indices:
        orbit = calculate_orbit_assignment(body_index, used, cluster_angle_offset, config)
        used.append(orbit.radius)
        assignments.append(orbit)
    return assignments
