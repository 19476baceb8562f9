# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Runtime collision mitigation for co-orbiting bodies.

One-step speed damping: for every pair closer than the safe distance
at the current instant, the outer body is slowed by a constant factor.
Each call starts from the speeds it is given, so repeated calls on the
same inputs give the same result.
"""
import logging
import math
from dataclasses import dataclass, replace

from orrery.domain.config import MitigationConfig
from orrery.domain.propagation import current_angle, planar_offset

logger = logging.getLogger(__name__)

_DEFAULT_MITIGATION = MitigationConfig()


@dataclass(frozen=True)
class CelestialBody:
    """Runtime view of a satellite: identity plus its orbit."""
    id: str
    radius: float
    angle: float
    speed: float


def planar_position(body: CelestialBody, elapsed_time: float) -> tuple[float, float]:
    """Body offset from its cluster center in the orbital plane."""
    return planar_offset(body.radius, current_angle(body.angle, body.speed, elapsed_time))


def planar_distance(a: CelestialBody, b: CelestialBody, elapsed_time: float) -> float:
    """Distance between two bodies of the same cluster at elapsed_time."""
    ax, az = planar_position(a, elapsed_time)
    bx, bz = planar_position(b, elapsed_time)
    return math.hypot(bx - ax, bz - az)


def _damped_speed(speed: float, factor: float, floor: float) -> float:
    if speed <= 0:
        return speed * factor
    return min(speed, max(speed * factor, floor))

def mitigate_collisions(
    bodies: list[CelestialBody],
    elapsed_time: float,
    min_safe_distance: float | None = None,
    config: MitigationConfig = _DEFAULT_MITIGATION,
) -> list[CelestialBody]:
    """
    Damp the outer body of every close pair.

    Distances are computed from the input speeds only; damping from one
    pair does not feed into the distance check of another. A body that
    is the outer member of several close pairs is damped once per pair.
    Positive speeds never drop below config.speed_floor and damping
    never raises a speed; stationary and retrograde bodies are scaled
    toward zero. Equal radii damp the second body of the pair.

    Args:
        bodies: Bodies of one cluster. Not mutated.
        elapsed_time: Current scene time.
        min_safe_distance: Override of config.min_safe_distance.
        config: Mitigation parameters.

    Returns:
        New list, same order, with adjusted speeds.
    """
    if min_safe_distance is None:
        min_safe_distance = config.min_safe_distance

    factors = [1.0] * len(bodies)
    for i in range(len(bodies)):
        for j in range(i + 1, len(bodies)):
            dist = planar_distance(bodies[i], bodies[j], elapsed_time)
            if dist < min_safe_distance:
                outer = i if bodies[i].radius > bodies[j].radius else j
                factors[outer] *= config.damping_factor
                logger.debug(
                    "Close approach %s/%s at t=%.3f (%.3f < %.3f); damping %s",
                    bodies[i].id, bodies[j].id, elapsed_time, dist,
                    min_safe_distance, bodies[outer].id,
                )

    adjusted: list[CelestialBody] = []
    for body, factor in zip(bodies, factors):
        if factor == 1.0:
            adjusted.append(body)
        else:
            speed = _damped_speed(body.speed, factor, config.speed_floor)
            adjusted.append(replace(body, speed=speed))
    return adjusted
