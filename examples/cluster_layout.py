#!/usr/bin/env python3
"""Cluster layout example: place tenants, allocate orbits, animate, screen.

Places a handful of tenant clusters, allocates satellite orbits with a
caller-owned radius accumulator, evaluates a few frames with runtime
mitigation, and prints a collision risk summary per cluster.

Usage:
    python examples/cluster_layout.py
"""
from orrery import (
    CelestialBody,
    assign_cluster_center,
    allocate_orbits,
    cluster_angle_offset,
    cluster_frame,
    predict_collision_risk,
)


def main():
    satellites_per_tenant = [3, 1, 6, 0, 4]

    # --- Step 1: Place cluster centers ---
    centers = []
    for tenant_index in range(len(satellites_per_tenant)):
        centers.append(assign_cluster_center(centers, tenant_index))

    print("Cluster centers:")
    for i, c in enumerate(centers):
        print(f"  tenant {i}: ({c.x:7.2f}, {c.y:6.2f}, {c.z:7.2f})")

    # --- Step 2: Allocate orbits per cluster ---
    clusters = []
    for tenant_index, count in enumerate(satellites_per_tenant):
        orbits = allocate_orbits(range(count), [], cluster_angle_offset(tenant_index))
        bodies = [
            CelestialBody(id=f"t{tenant_index}-p{k}", radius=o.radius, angle=o.angle, speed=o.angular_speed)
            for k, o in enumerate(orbits)
        ]
        clusters.append(bodies)

    # --- Step 3: Evaluate a few frames ---
    print("\nTenant 2 positions:")
    for t in (0.0, 10.0, 60.0):
        frame = cluster_frame(centers[2], clusters[2], t)
        coords = ", ".join(f"{p.id}=({p.position[0]:.1f}, {p.position[2]:.1f})" for p in frame)
        print(f"  t={t:5.1f}: {coords}")

    # --- Step 4: Screen for close approaches ---
    print("\nRisk over 100 time units:")
    for tenant_index, bodies in enumerate(clusters):
        report = predict_collision_risk(bodies, 100.0)
        print(
            f"  tenant {tenant_index}: {report.risk_level.value:<6} "
            f"closest={report.closest_approach:.2f} pairs={len(report.risk_pairs)}"
        )


if __name__ == "__main__":
    main()
