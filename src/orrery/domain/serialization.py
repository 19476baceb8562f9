# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Record serialization for the storage boundary.

Pure conversions between domain objects and plain dicts that the
persistence layer stores verbatim. Incoming records are validated.
"""
import math
from typing import Any

from orrery.domain.cluster_placement import ClusterCenter
from orrery.domain.collision_mitigation import CelestialBody
from orrery.domain.orbit_allocation import OrbitAssignment
from orrery.domain.risk_prediction import CollisionRiskReport
from orrery.domain.validation import validate_center, validate_finite, validate_radius


def _require(record: dict, key: str, kind: str) -> Any:
    if not isinstance(record, dict):
        raise ValueError(f"{kind} record must be a mapping, got {type(record).__name__}")
    if key not in record:
        raise ValueError(f"{kind} record missing '{key}'")
    return record[key]


def center_to_record(center: ClusterCenter) -> dict[str, float]:
    """ClusterCenter → {"x", "y", "z"}."""
    return {"x": center.x, "y": center.y, "z": center.z}


def center_from_record(record: dict) -> ClusterCenter:
    """
    Parse a stored cluster center.

    Raises:
        ValueError: On missing or non-finite coordinates.
    """
    center = ClusterCenter(
        x=_require(record, "x", "center"),
        y=_require(record, "y", "center"),
        z=_require(record, "z", "center"),
    )
    validate_center(center)
    return ClusterCenter(x=float(center.x), y=float(center.y), z=float(center.z))


def orbit_to_record(orbit: OrbitAssignment) -> dict[str, float]:
    """OrbitAssignment → {"radius", "angle", "angular_speed"}."""
    return {
        "radius": orbit.radius,
        "angle": orbit.angle,
        "angular_speed": orbit.angular_speed,
    }


def orbit_from_record(record: dict) -> OrbitAssignment:
    """
    Parse a stored orbit assignment.

    Raises:
        ValueError: On missing fields, non-positive radius or non-finite values.
    """
    return OrbitAssignment(
        radius=validate_radius(_require(record, "radius", "orbit"), "orbit radius"),
        angle=validate_finite(_require(record, "angle", "orbit"), "orbit angle"),
        angular_speed=validate_finite(
            _require(record, "angular_speed", "orbit"), "orbit angular_speed",
        ),
    )


def body_from_orbit(body_id: str, orbit: OrbitAssignment) -> CelestialBody:
    """Runtime view of a stored orbit."""
    return CelestialBody(
        id=body_id,
        radius=orbit.radius,
        angle=orbit.angle,
        speed=orbit.angular_speed,
    )


def risk_report_to_record(report: CollisionRiskReport) -> dict[str, Any]:
    """
    CollisionRiskReport → JSON-ready dict.

    An infinite closest approach (fewer than two bodies) is stored as None.
    """
    return {
        "has_risk": report.has_risk,
        "risk_level": report.risk_level.value,
        "closest_approach": (
            report.closest_approach if math.isfinite(report.closest_approach) else None
        ),
        "closest_approach_time": report.closest_approach_time,
        "risk_pairs": [
            {
                "id_a": p.id_a,
                "id_b": p.id_b,
                "min_distance": p.min_distance,
                "time_offset": p.time_offset,
            }
            for p in report.risk_pairs
        ],
    }
