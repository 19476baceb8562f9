# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Sampled collision risk prediction for one cluster.

Brute-force screening: every body's phase is evaluated on a fixed time
grid and every pair's separation is checked at every sample. Accuracy
is bounded by the sample step; no refinement between samples.

Uses numpy for the per-pair distance series.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from orrery.domain.collision_mitigation import CelestialBody
from orrery.domain.config import RiskConfig

logger = logging.getLogger(__name__)

_DEFAULT_RISK = RiskConfig()

# Upper bound on the sample grid length for one prediction.
MAX_SAMPLES = 1_000_000


class RiskLevel(str, Enum):
    """Advisory severity of a cluster's closest approach."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class RiskPair:
    """A pair of bodies passing inside the advisory distance."""
    id_a: str
    id_b: str
    min_distance: float
    time_offset: float


@dataclass(frozen=True)
class CollisionRiskReport:
    """Result of a risk prediction run."""
    has_risk: bool
    risk_level: RiskLevel
    closest_approach: float
    closest_approach_time: float | None
    risk_pairs: tuple[RiskPair, ...]


def classify_risk(closest_approach: float, config: RiskConfig = _DEFAULT_RISK) -> RiskLevel:
    """Map a closest-approach distance to a RiskLevel."""
    if closest_approach < config.high_threshold:
        return RiskLevel.HIGH
    if closest_approach < config.medium_threshold:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def sample_times(time_horizon: float, step: float) -> np.ndarray:
    """
    Sample grid 0, step, 2*step, ... up to time_horizon inclusive.

    Raises:
        ValueError: If step <= 0, time_horizon is negative or not finite,
            or the grid would exceed MAX_SAMPLES.
    """
    if not step > 0 or not math.isfinite(step):
        raise ValueError(f"step must be positive and finite, got {step}")
    if not math.isfinite(time_horizon) or time_horizon < 0:
        raise ValueError(f"time_horizon must be finite and non-negative, got {time_horizon}")
    n_samples = int(math.floor(time_horizon / step + 1e-9)) + 1
    if n_samples > MAX_SAMPLES:
        raise ValueError(
            f"time_horizon {time_horizon} with step {step} needs {n_samples} samples; "
            f"limit is {MAX_SAMPLES}"
        )
    return np.arange(n_samples, dtype=np.float64) * step


def predict_collision_risk(
    bodies: list[CelestialBody],
    time_horizon: float = 100.0,
    config: RiskConfig = _DEFAULT_RISK,
) -> CollisionRiskReport:
    """
    Predict close approaches between bodies of one cluster.

    Cost is O(pairs x samples); call on demand, not per frame.

    Args:
        bodies: Bodies of one cluster, sharing a center.
        time_horizon: Look-ahead window in scene time units.
        config: Sampling step and distance thresholds.

    Returns:
        CollisionRiskReport. risk_pairs holds one entry per pair whose
        minimum sampled distance is below config.advisory_distance,
        sorted by distance ascending.
    """
    times = sample_times(time_horizon, config.step)

    if len(bodies) < 2:
        return CollisionRiskReport(
            has_risk=False,
            risk_level=RiskLevel.LOW,
            closest_approach=math.inf,
            closest_approach_time=None,
            risk_pairs=(),
        )

    radii = np.array([b.radius for b in bodies], dtype=np.float64)[:, None]
    angles = np.array([b.angle for b in bodies], dtype=np.float64)[:, None]
    speeds = np.array([b.speed for b in bodies], dtype=np.float64)[:, None]
    phases = angles + speeds * times[None, :]
    xs = radii * np.cos(phases)
    zs = radii * np.sin(phases)

    closest = math.inf
    closest_time: float | None = None
    pairs: list[RiskPair] = []

    for i in range(len(bodies)):
        for j in range(i + 1, len(bodies)):
            dist = np.hypot(xs[j] - xs[i], zs[j] - zs[i])
            k = int(np.argmin(dist))
            pair_min = float(dist[k])
            pair_time = float(times[k])
            if pair_min < closest:
                closest = pair_min
                closest_time = pair_time
            if pair_min < config.advisory_distance:
                pairs.append(RiskPair(
                    id_a=bodies[i].id,
                    id_b=bodies[j].id,
                    min_distance=pair_min,
                    time_offset=pair_time,
                ))

    pairs.sort(key=lambda p: p.min_distance)
    level = classify_risk(closest, config)
    logger.debug(
        "Risk over %d samples for %d bodies: closest %.3f at t=%s (%s, %d pairs)",
        len(times), len(bodies), closest, closest_time, level.value, len(pairs),
    )
    return CollisionRiskReport(
        has_risk=closest < config.advisory_distance,
        risk_level=level,
        closest_approach=closest,
        closest_approach_time=closest_time,
        risk_pairs=tuple(pairs),
    )
