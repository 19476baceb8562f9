# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orrery

Spatial layout and collision-avoidance engine for multi-tenant orbital
clusters: spiral placement of cluster centers, golden-angle orbit
allocation with resonance-free speeds, closed-form live positions,
per-frame speed damping for close approaches, and sampled collision
risk prediction.
"""

from orrery.domain.config import (
    PlacementConfig,
    AllocationConfig,
    MitigationConfig,
    RiskConfig,
    LayoutConfig,
)
from orrery.domain.cluster_placement import (
    ClusterCenter,
    calculate_cluster_center,
    check_cluster_overlap,
    cluster_angle_offset,
    assign_cluster_center,
)
from orrery.domain.orbit_allocation import (
    OrbitAssignment,
    RESONANCE_MULTIPLIERS,
    calculate_orbit_assignment,
    allocate_orbits,
)
from orrery.domain.propagation import (
    current_angle,
    evaluate_position,
)
from orrery.domain.collision_mitigation import (
    CelestialBody,
    planar_distance,
    mitigate_collisions,
)
from orrery.domain.risk_prediction import (
    RiskLevel,
    RiskPair,
    CollisionRiskReport,
    classify_risk,
    predict_collision_risk,
)
from orrery.domain.frame import (
    BodyPosition,
    cluster_frame,
)

__all__ = [
    "PlacementConfig",
    "AllocationConfig",
    "MitigationConfig",
    "RiskConfig",
    "LayoutConfig",
    "ClusterCenter",
    "calculate_cluster_center",
    "check_cluster_overlap",
    "cluster_angle_offset",
    "assign_cluster_center",
    "OrbitAssignment",
    "RESONANCE_MULTIPLIERS",
    "calculate_orbit_assignment",
    "allocate_orbits",
    "current_angle",
    "evaluate_position",
    "CelestialBody",
    "planar_distance",
    "mitigate_collisions",
    "RiskLevel",
    "RiskPair",
    "CollisionRiskReport",
    "classify_risk",
    "predict_collision_risk",
    "BodyPosition",
    "cluster_frame",
]
