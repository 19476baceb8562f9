# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Cluster center placement.

Deterministic Archimedean spiral distribution of tenant cluster centers
with bounded jitter retries to keep every pair of centers apart.
"""
import logging
import math
from dataclasses import dataclass

from orrery.domain.config import PlacementConfig

logger = logging.getLogger(__name__)

_DEFAULT_PLACEMENT = PlacementConfig()

# Degrees between the first-satellite bearings of consecutive tenants.
CLUSTER_PHASE_STEP_DEG = 60.0


@dataclass(frozen=True)
class ClusterCenter:
    """Center of one tenant's cluster in scene units."""
    x: float
    y: float
    z: float


def calculate_cluster_center(
    tenant_index: int,
    config: PlacementConfig = _DEFAULT_PLACEMENT,
) -> ClusterCenter:
    """
    Spiral position of a tenant's cluster center.

    r = base_radius + spiral_growth * i, one full turn every
    tenants_per_turn tenants, three vertical bands cycling -1/0/+1.

    Args:
        tenant_index: Non-negative tenant index.
        config: Spiral parameters.

    Returns:
        ClusterCenter, a pure function of tenant_index.
    """
    theta = tenant_index * (2.0 * math.pi / config.tenants_per_turn)
    r = config.base_radius + config.spiral_growth * tenant_index
    return ClusterCenter(
        x=r * math.cos(theta),
        y=(tenant_index % 3 - 1) * config.vertical_spread,
        z=r * math.sin(theta),
    )


def cluster_distance(a: ClusterCenter, b: ClusterCenter) -> float:
    """Euclidean distance between two cluster centers."""
    return math.sqrt((b.x - a.x) ** 2 + (b.y - a.y) ** 2 + (b.z - a.z) ** 2)


def check_cluster_overlap(
    a: ClusterCenter,
    b: ClusterCenter,
    min_distance: float = _DEFAULT_PLACEMENT.min_separation,
) -> bool:
    """True if the two centers are closer than min_distance."""
    return cluster_distance(a, b) < min_distance


def cluster_angle_offset(tenant_index: int) -> float:
    """Phase offset (degrees) applied to every satellite of a tenant."""
    return tenant_index * CLUSTER_PHASE_STEP_DEG


def _jitter(center: ClusterCenter, attempt: int, config: PlacementConfig) -> ClusterCenter:
    offset = attempt * config.jitter_step
    return ClusterCenter(
        x=center.x + offset * math.cos(attempt),
        y=center.y + (attempt % 3 - 1) * config.vertical_jitter,
        z=center.z + offset * math.sin(attempt),
    )


def assign_cluster_center(
    existing_centers: list[ClusterCenter],
    tenant_index: int,
    max_attempts: int | None = None,
    config: PlacementConfig = _DEFAULT_PLACEMENT,
) -> ClusterCenter:
    """
    Place a new tenant's cluster away from every existing cluster.

    Starts from the spiral candidate and, on conflict, applies a jitter
    that grows with the attempt counter. Jitter accumulates across
    attempts. If no conflict-free position is found after max_attempts
    retries the last candidate is returned and a warning is logged;
    tenant creation is never blocked.

    Args:
        existing_centers: Centers already assigned to other tenants.
        tenant_index: Non-negative tenant index.
        max_attempts: Retry cap; defaults to config.max_attempts.
        config: Placement parameters.

    Returns:
        The assigned ClusterCenter.
    """
    if max_attempts is None:
        max_attempts = config.max_attempts

    candidate = calculate_cluster_center(tenant_index, config)
    for attempt in range(max_attempts + 1):
        if not any(
            check_cluster_overlap(candidate, other, config.min_separation)
            for other in existing_centers
        ):
            return candidate
        if attempt == max_attempts:
            break
        candidate = _jitter(candidate, attempt + 1, config)

    logger.warning(
        "No non-overlapping cluster position for tenant index %d after %d attempts; "
        "using (%.3f, %.3f, %.3f)",
        tenant_index, max_attempts, candidate.x, candidate.y, candidate.z,
    )
    return candidate
