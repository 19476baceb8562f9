# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for cluster layout.

Usage:
    # Place new clusters and allocate orbits for new bodies
    orrery -i registry.json -o layout.json

    # Override engine parameters
    orrery -i registry.json -o layout.json --config layout-config.json

    # Export every body's position at t=42 (with runtime mitigation)
    orrery -i registry.json -o layout.json --export-csv frame.csv --time 42

    # Print a collision risk summary per cluster
    orrery -i registry.json -o layout.json --risk --horizon 200
"""
import argparse
import logging
import sys
from typing import Any

from orrery.domain.config import LayoutConfig
from orrery.domain.cluster_placement import (
    ClusterCenter,
    assign_cluster_center,
    cluster_angle_offset,
)
from orrery.domain.orbit_allocation import allocate_orbits
from orrery.domain.collision_mitigation import CelestialBody
from orrery.domain.frame import BodyPosition, cluster_frame
from orrery.domain.risk_prediction import CollisionRiskReport, predict_collision_risk
from orrery.domain.serialization import (
    body_from_orbit,
    center_from_record,
    center_to_record,
    orbit_from_record,
    orbit_to_record,
)
from orrery.domain.validation import validate_body, validate_elapsed_time
from orrery.adapters.json_io import JsonRegistryReader, JsonRegistryWriter
from orrery.adapters.csv_exporter import CsvFrameExporter
from orrery.logging_config import setup_logging

logger = logging.getLogger(__name__)


def place_clusters(registry: dict[str, Any], config: LayoutConfig) -> int:
    """
    Assign centers to tenants that have none, in ascending tenant index.

    Stored centers are kept and seed the placement accumulator.

    Returns:
        Number of clusters placed.
    """
    tenants = sorted(registry['tenants'], key=lambda t: t['index'])
    placed: list[ClusterCenter] = [
        center_from_record(t['center']) for t in tenants if t.get('center') is not None
    ]
    count = 0
    for tenant in tenants:
        if tenant.get('center') is not None:
            continue
        center = assign_cluster_center(placed, tenant['index'], config=config.placement)
        placed.append(center)
        tenant['center'] = center_to_record(center)
        count += 1
    return count


def allocate_bodies(tenant: dict[str, Any], config: LayoutConfig) -> int:
    """
    Allocate orbits for a tenant's bodies that have none.

    Stored orbits seed the radius accumulator; new bodies are allocated
    in ascending body index.

    Returns:
        Number of bodies allocated.
    """
    bodies = tenant.get('bodies', [])
    used_radii = [
        orbit_from_record(b['orbit']).radius for b in bodies if b.get('orbit') is not None
    ]
    pending = sorted(
        (b for b in bodies if b.get('orbit') is None),
        key=lambda b: b['index'],
    )
    orbits = allocate_orbits(
        [b['index'] for b in pending],
        used_radii,
        cluster_angle_offset(tenant['index']),
        config.allocation,
    )
    for body, orbit in zip(pending, orbits):
        body['orbit'] = orbit_to_record(orbit)
    return len(pending)


def cluster_bodies(tenant: dict[str, Any]) -> list[CelestialBody]:
    """Runtime bodies of a tenant, ordered by body index."""
    return [
        validate_body(body_from_orbit(b['id'], orbit_from_record(b['orbit'])))
        for b in sorted(tenant.get('bodies', []), key=lambda b: b['index'])
        if b.get('orbit') is not None
    ]


def render_frames(
    registry: dict[str, Any],
    elapsed_time: float,
    config: LayoutConfig,
) -> dict[str, list[BodyPosition]]:
    """Evaluate one frame for every placed tenant."""
    elapsed_time = validate_elapsed_time(elapsed_time)
    frames: dict[str, list[BodyPosition]] = {}
    for tenant in sorted(registry['tenants'], key=lambda t: t['index']):
        if tenant.get('center') is None:
            continue
        frames[tenant['id']] = cluster_frame(
            center_from_record(tenant['center']),
            cluster_bodies(tenant),
            elapsed_time,
            mitigation=config.mitigation,
        )
    return frames


def assess_risk(
    registry: dict[str, Any],
    time_horizon: float,
    config: LayoutConfig,
) -> dict[str, CollisionRiskReport]:
    """Risk report for every tenant with at least one body."""
    reports: dict[str, CollisionRiskReport] = {}
    for tenant in sorted(registry['tenants'], key=lambda t: t['index']):
        bodies = cluster_bodies(tenant)
        if bodies:
            reports[tenant['id']] = predict_collision_risk(bodies, time_horizon, config.risk)
    return reports


def run(
    input_path: str,
    output_path: str,
    config: LayoutConfig | None = None,
) -> tuple[int, int, dict[str, Any]]:
    """
    Lay out a registry and write the enriched registry.

    Returns:
        (clusters_placed, bodies_allocated, registry).
    """
    if config is None:
        config = LayoutConfig()

    reader = JsonRegistryReader()
    writer = JsonRegistryWriter()

    registry = reader.read_registry(input_path)
    placed = place_clusters(registry, config)
    allocated = sum(allocate_bodies(t, config) for t in registry['tenants'])
    logger.info("Placed %d clusters, allocated %d orbits", placed, allocated)

    writer.write_registry(registry, output_path)
    return placed, allocated, registry


def main():
    parser = argparse.ArgumentParser(
        description="Place tenant clusters and allocate satellite orbits",
    )
    parser.add_argument(
        '--input', '-i', required=True,
        help="Input registry JSON (tenants and bodies)"
    )
    parser.add_argument(
        '--output', '-o', required=True,
        help="Output registry JSON with centers and orbits filled in"
    )
    parser.add_argument(
        '--config',
        help="JSON file overriding placement/allocation/mitigation/risk parameters"
    )
    parser.add_argument(
        '--verbose', '-v', action='count', default=0,
        help="Increase log verbosity (-v info, -vv debug)"
    )
    parser.add_argument(
        '--log-file',
        help="Also write log output to this file"
    )

    frame_group = parser.add_argument_group('frame export')
    frame_group.add_argument(
        '--export-csv',
        help="Export every body's position at --time to CSV"
    )
    frame_group.add_argument(
        '--time', type=float, default=0.0,
        help="Elapsed scene time for --export-csv (default: 0)"
    )

    risk_group = parser.add_argument_group('risk prediction')
    risk_group.add_argument(
        '--risk', action='store_true', default=False,
        help="Print a collision risk summary per cluster"
    )
    risk_group.add_argument(
        '--horizon', type=float, default=100.0,
        help="Risk prediction horizon in scene time units (default: 100)"
    )

    args = parser.parse_args()

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    setup_logging(level, args.log_file)

    try:
        config = JsonRegistryReader().read_config(args.config) if args.config else LayoutConfig()

        placed, allocated, registry = run(args.input, args.output, config)
        print(
            f"Generated {args.output}: placed {placed} clusters, "
            f"allocated {allocated} orbits."
        )

        if args.export_csv:
            frames = render_frames(registry, args.time, config)
            n = CsvFrameExporter().export(frames, args.export_csv, args.time)
            print(f"Exported {n} bodies at t={args.time:g} to {args.export_csv}")

        if args.risk:
            for tenant_id, report in assess_risk(registry, args.horizon, config).items():
                print(
                    f"{tenant_id}: {report.risk_level.value} risk, "
                    f"closest approach {report.closest_approach:.3f}, "
                    f"{len(report.risk_pairs)} pair(s) inside advisory distance"
                )

    except FileNotFoundError as e:
        print(
            f"Error: File not found: {e.filename}\n"
            f"Expected a registry JSON with a 'tenants' list.",
            file=sys.stderr,
        )
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
