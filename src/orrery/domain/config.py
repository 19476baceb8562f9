# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Layout engine configuration.

Immutable parameter sets for cluster placement, orbit allocation,
runtime collision mitigation and risk prediction. Defaults reproduce
the portal's production layout.
No external dependencies; only stdlib dataclasses.
"""
import math
from dataclasses import dataclass, field, fields, replace
from typing import Any


@dataclass(frozen=True)
class PlacementConfig:
    """Archimedean spiral and jitter parameters for cluster centers."""
    base_radius: float = 20.0
    spiral_growth: float = 3.0
    vertical_spread: float = 10.0
    tenants_per_turn: int = 5
    min_separation: float = 15.0
    max_attempts: int = 50
    jitter_step: float = 2.0
    vertical_jitter: float = 2.0


@dataclass(frozen=True)
class AllocationConfig:
    """Orbit radius, phase and angular speed allocation parameters."""
    base_orbit_radius: float = 4.0
    orbit_gap: float = 3.0
    tolerance: float = 0.5
    max_attempts: int = 50
    golden_angle_deg: float = 137.508
    speed_constant: float = 0.2
    min_speed: float = 0.01
    max_speed: float = 0.5


@dataclass(frozen=True)
class MitigationConfig:
    """Per-frame speed damping parameters."""
    min_safe_distance: float = 2.5
    damping_factor: float = 0.95
    speed_floor: float = 0.001


@dataclass(frozen=True)
class RiskConfig:
    """Sampled risk prediction parameters."""
    step: float = 0.1
    advisory_distance: float = 3.0
    high_threshold: float = 2.0
    medium_threshold: float = 2.5


_SECTIONS = {
    'placement': PlacementConfig,
    'allocation': AllocationConfig,
    'mitigation': MitigationConfig,
    'risk': RiskConfig,
}


def _section_from_dict(cls, data: dict[str, Any]):
    """Build one config section, rejecting unknown or non-numeric values."""
    if not isinstance(data, dict):
        raise ValueError(f"{cls.__name__} section must be a mapping, got {type(data).__name__}")
    known = {f.name: f for f in fields(cls)}
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key, raw in data.items():
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise ValueError(f"{cls.__name__}.{key} must be a number, got {raw!r}")
        if not math.isfinite(raw):
            raise ValueError(f"{cls.__name__}.{key} must be finite, got {raw!r}")
        if known[key].type in (int, 'int'):
            if raw != int(raw):
                raise ValueError(f"{cls.__name__}.{key} must be an integer, got {raw!r}")
            raw = int(raw)
        else:
            raw = float(raw)
        values[key] = raw
    return replace(cls(), **values)


@dataclass(frozen=True)
class LayoutConfig:
    """Complete engine configuration."""
    placement: PlacementConfig = field(default_factory=PlacementConfig)
    allocation: AllocationConfig = field(default_factory=AllocationConfig)
    mitigation: MitigationConfig = field(default_factory=MitigationConfig)
    risk: RiskConfig = field(default_factory=RiskConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LayoutConfig":
        """
        Build a LayoutConfig from a partial nested mapping.

        Missing sections and keys keep their defaults.

        Args:
            data: Mapping such as ``{"placement": {"min_separation": 20}}``.

        Returns:
            LayoutConfig with overrides applied.

        Raises:
            ValueError: On unknown sections/keys or non-numeric values.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Layout config must be a mapping, got {type(data).__name__}")
        unknown = sorted(set(data) - set(_SECTIONS))
        if unknown:
            raise ValueError(f"Unknown config sections: {', '.join(unknown)}")
        sections = {
            name: _section_from_dict(section_cls, data[name])
            for name, section_cls in _SECTIONS.items()
            if name in data
        }
        return cls(**sections)
