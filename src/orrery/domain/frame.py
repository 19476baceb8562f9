# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Per-frame evaluation of a whole cluster.

Combines runtime mitigation with position evaluation the way a render
loop uses them: mitigate (near field only), then place every body.
"""
from dataclasses import dataclass

from orrery.domain.cluster_placement import ClusterCenter
from orrery.domain.collision_mitigation import CelestialBody, mitigate_collisions
from orrery.domain.config import MitigationConfig
from orrery.domain.propagation import evaluate_position

_DEFAULT_MITIGATION = MitigationConfig()


@dataclass(frozen=True)
class BodyPosition:
    """Where one body is drawn in the current frame."""
    id: str
    position: tuple[float, float, float]
    speed: float


def cluster_frame(
    center: ClusterCenter,
    bodies: list[CelestialBody],
    elapsed_time: float,
    mitigate: bool = True,
    mitigation: MitigationConfig = _DEFAULT_MITIGATION,
) -> list[BodyPosition]:
    """
    Positions of every body in a cluster at elapsed_time.

    Mitigation is skipped for single-body clusters and when mitigate is
    False (low level of detail).
    """
    if mitigate and len(bodies) > 1:
        bodies = mitigate_collisions(bodies, elapsed_time, config=mitigation)
    return [
        BodyPosition(
            id=body.id,
            position=evaluate_position(center, body.radius, body.angle, body.speed, elapsed_time),
            speed=body.speed,
        )
        for body in bodies
    ]
