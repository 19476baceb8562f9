# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CSV frame exporter.

Exports the position of every body in one frame as CSV.
External dependencies (csv, file I/O) are confined to this adapter.
"""
import csv

from orrery.ports import FrameExporter
from orrery.domain.frame import BodyPosition


_HEADER = ['tenant_id', 'body_id', 'elapsed_time', 'x', 'y', 'z', 'angular_speed']


class CsvFrameExporter(FrameExporter):
    """Exports body positions of one frame to CSV."""

    def export(
        self,
        frames: dict[str, list[BodyPosition]],
        path: str,
        elapsed_time: float,
    ) -> int:
        count = 0
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(_HEADER)

            for tenant_id, positions in frames.items():
                for body in positions:
                    x, y, z = body.position
                    writer.writerow([
                        tenant_id,
                        body.id,
                        f'{elapsed_time:.3f}',
                        f'{x:.6f}',
                        f'{y:.6f}',
                        f'{z:.6f}',
                        f'{body.speed:.6f}',
                    ])
                    count += 1

        return count
