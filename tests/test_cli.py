# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the registry layout run and the command-line entry point."""
import csv
import json
import logging
import math
import sys

import pytest

from orrery.domain.config import LayoutConfig, PlacementConfig
from orrery.domain.cluster_placement import (
    ClusterCenter,
    calculate_cluster_center,
    cluster_distance,
)
from orrery.domain.orbit_allocation import calculate_orbit_assignment


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """main() installs handlers on the package logger; drop them after each test."""
    yield
    logger = logging.getLogger("orrery")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def _fresh_registry():
    return {
        "tenants": [
            {"id": "carol", "index": 2, "bodies": [{"id": "c-1", "index": 0}]},
            {"id": "alice", "index": 0, "bodies": [
                {"id": "a-2", "index": 1},
                {"id": "a-1", "index": 0},
            ]},
            {"id": "bob", "index": 1, "bodies": []},
        ],
    }


# ── run ─────────────────────────────────────────────────────────────

class TestRun:

    def test_fresh_registry(self, tmp_path):
        from orrery.cli import run

        src = _write(tmp_path / "in.json", _fresh_registry())
        out = str(tmp_path / "out.json")
        placed, allocated, registry = run(src, out)

        assert (placed, allocated) == (3, 3)
        with open(out, encoding="utf-8") as f:
            written = json.load(f)
        assert written == registry

        by_id = {t["id"]: t for t in written["tenants"]}
        for tenant in by_id.values():
            expected = calculate_cluster_center(tenant["index"])
            assert tenant["center"] == pytest.approx(
                {"x": expected.x, "y": expected.y, "z": expected.z}
            )

    def test_orbits_follow_body_index_and_tenant_offset(self, tmp_path):
        from orrery.cli import run

        src = _write(tmp_path / "in.json", _fresh_registry())
        _, _, registry = run(src, str(tmp_path / "out.json"))
        alice = next(t for t in registry["tenants"] if t["id"] == "alice")
        orbits = {b["id"]: b["orbit"] for b in alice["bodies"]}
        assert orbits["a-1"]["radius"] == pytest.approx(4.0)
        assert orbits["a-2"]["radius"] == pytest.approx(7.0)

        carol = next(t for t in registry["tenants"] if t["id"] == "carol")
        expected = calculate_orbit_assignment(0, [], 120.0)
        assert carol["bodies"][0]["orbit"]["angle"] == pytest.approx(expected.angle)

    def test_existing_records_kept(self, tmp_path):
        from orrery.cli import run

        reg = _fresh_registry()
        kept_center = {"x": 100.0, "y": 0.0, "z": 100.0}
        kept_orbit = {"radius": 7.0, "angle": 0.5, "angular_speed": 0.2}
        reg["tenants"][1]["center"] = kept_center
        reg["tenants"][1]["bodies"][1]["orbit"] = kept_orbit
        src = _write(tmp_path / "in.json", reg)
        placed, allocated, registry = run(src, str(tmp_path / "out.json"))

        assert (placed, allocated) == (2, 2)
        alice = next(t for t in registry["tenants"] if t["id"] == "alice")
        assert alice["center"] == kept_center
        orbits = {b["id"]: b["orbit"] for b in alice["bodies"]}
        assert orbits["a-1"] == kept_orbit
        # a-2 (index 1) would take 7.0, which is occupied.
        assert orbits["a-2"]["radius"] == pytest.approx(10.0)

    def test_new_center_avoids_stored_center(self, tmp_path):
        from orrery.cli import run

        squatter = calculate_cluster_center(1)
        reg = {"tenants": [
            {"id": "old", "index": 0,
             "center": {"x": squatter.x, "y": squatter.y, "z": squatter.z}},
            {"id": "new", "index": 1},
        ]}
        src = _write(tmp_path / "in.json", reg)
        _, _, registry = run(src, str(tmp_path / "out.json"))
        new = next(t for t in registry["tenants"] if t["id"] == "new")
        c = ClusterCenter(**new["center"])
        assert cluster_distance(c, squatter) >= 15.0

    def test_placed_centers_pairwise_separated(self, tmp_path):
        from orrery.cli import run

        reg = {"tenants": [{"id": f"t{i}", "index": i} for i in range(25)]}
        src = _write(tmp_path / "in.json", reg)
        _, _, registry = run(src, str(tmp_path / "out.json"))
        centers = [ClusterCenter(**t["center"]) for t in registry["tenants"]]
        for i in range(len(centers)):
            for j in range(i + 1, len(centers)):
                assert cluster_distance(centers[i], centers[j]) >= 15.0

    def test_config_passed_through(self, tmp_path):
        from orrery.cli import run

        cfg = LayoutConfig(placement=PlacementConfig(base_radius=100.0))
        src = _write(tmp_path / "in.json", {"tenants": [{"id": "t", "index": 0}]})
        _, _, registry = run(src, str(tmp_path / "out.json"), cfg)
        assert registry["tenants"][0]["center"]["x"] == pytest.approx(100.0)


# ── Frames and risk ─────────────────────────────────────────────────

class TestFramesAndRisk:

    def _laid_out(self, tmp_path):
        from orrery.cli import run

        src = _write(tmp_path / "in.json", _fresh_registry())
        return run(src, str(tmp_path / "out.json"))[2]

    def test_render_frames(self, tmp_path):
        from orrery.cli import render_frames

        frames = render_frames(self._laid_out(tmp_path), 0.0, LayoutConfig())
        assert list(frames) == ["alice", "bob", "carol"]
        assert [p.id for p in frames["alice"]] == ["a-1", "a-2"]
        assert frames["bob"] == []
        x, y, z = frames["alice"][0].position
        assert (x, y, z) == pytest.approx((24.0, -10.0, 0.0))

    def test_render_frames_rejects_nan_time(self, tmp_path):
        from orrery.cli import render_frames

        with pytest.raises(ValueError, match="elapsed_time"):
            render_frames(self._laid_out(tmp_path), math.nan, LayoutConfig())

    def test_assess_risk_skips_empty_clusters(self, tmp_path):
        from orrery.cli import assess_risk

        reports = assess_risk(self._laid_out(tmp_path), 10.0, LayoutConfig())
        assert set(reports) == {"alice", "carol"}
        assert reports["carol"].closest_approach == math.inf

    def test_cluster_bodies_validates_runtime_bodies(self):
        from orrery.cli import cluster_bodies

        tenant = {"bodies": [
            {"id": "", "index": 0, "orbit": {"radius": 4.0, "angle": 0.0, "angular_speed": 0.1}},
        ]}
        with pytest.raises(ValueError, match="body id"):
            cluster_bodies(tenant)

    def test_cluster_bodies_orders_by_index(self):
        from orrery.cli import cluster_bodies

        orbit = {"radius": 4.0, "angle": 0.0, "angular_speed": 0.1}
        tenant = {"bodies": [
            {"id": "second", "index": 1, "orbit": orbit},
            {"id": "first", "index": 0, "orbit": orbit},
            {"id": "pending", "index": 2, "orbit": None},
        ]}
        assert [b.id for b in cluster_bodies(tenant)] == ["first", "second"]


# ── main ────────────────────────────────────────────────────────────

class TestMain:

    def test_basic(self, tmp_path, capsys, monkeypatch):
        from orrery.cli import main

        src = _write(tmp_path / "in.json", _fresh_registry())
        out = str(tmp_path / "out.json")
        monkeypatch.setattr(sys, 'argv', ['orrery', '-i', src, '-o', out])
        main()
        captured = capsys.readouterr()
        assert "placed 3 clusters" in captured.out
        assert "allocated 3 orbits" in captured.out

    def test_export_csv_and_risk(self, tmp_path, capsys, monkeypatch):
        from orrery.cli import main

        src = _write(tmp_path / "in.json", _fresh_registry())
        out = str(tmp_path / "out.json")
        frame_csv = str(tmp_path / "frame.csv")
        monkeypatch.setattr(sys, 'argv', [
            'orrery', '-i', src, '-o', out,
            '--export-csv', frame_csv, '--time', '2.5',
            '--risk', '--horizon', '5',
        ])
        main()
        captured = capsys.readouterr()
        assert "Exported 3 bodies" in captured.out
        assert "alice: low risk" in captured.out
        with open(frame_csv, newline='', encoding='utf-8') as f:
            rows = list(csv.reader(f))
        assert len(rows) == 4
        assert {r[2] for r in rows[1:]} == {"2.500"}

    def test_config_file(self, tmp_path, capsys, monkeypatch):
        from orrery.cli import main

        src = _write(tmp_path / "in.json", {"tenants": [{"id": "t", "index": 0}]})
        cfg = _write(tmp_path / "cfg.json", {"placement": {"base_radius": 50}})
        out = tmp_path / "out.json"
        monkeypatch.setattr(sys, 'argv', ['orrery', '-i', src, '-o', str(out), '--config', cfg])
        main()
        written = json.loads(out.read_text(encoding="utf-8"))
        assert written["tenants"][0]["center"]["x"] == pytest.approx(50.0)

    def test_missing_input_file(self, tmp_path, capsys, monkeypatch):
        from orrery.cli import main

        nonexistent = str(tmp_path / "nonexistent.json")
        monkeypatch.setattr(sys, 'argv', ['orrery', '-i', nonexistent, '-o', str(tmp_path / "o.json")])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "not found" in captured.err.lower()

    def test_invalid_registry(self, tmp_path, capsys, monkeypatch):
        from orrery.cli import main

        src = _write(tmp_path / "in.json", {"tenants": [{"id": "t", "index": -1}]})
        monkeypatch.setattr(sys, 'argv', ['orrery', '-i', src, '-o', str(tmp_path / "o.json")])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_oversized_horizon_reported(self, tmp_path, capsys, monkeypatch):
        from orrery.cli import main

        src = _write(tmp_path / "in.json", _fresh_registry())
        monkeypatch.setattr(sys, 'argv', [
            'orrery', '-i', src, '-o', str(tmp_path / "o.json"), '--risk', '--horizon', '1e9',
        ])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        assert "samples" in capsys.readouterr().err

    def test_requires_input_and_output(self, monkeypatch):
        from orrery.cli import main

        monkeypatch.setattr(sys, 'argv', ['orrery'])
        with pytest.raises(SystemExit):
            main()

    def test_log_file(self, tmp_path, monkeypatch):
        from orrery.cli import main

        src = _write(tmp_path / "in.json", _fresh_registry())
        log = tmp_path / "run.log"
        monkeypatch.setattr(sys, 'argv', [
            'orrery', '-i', src, '-o', str(tmp_path / "o.json"),
            '-v', '--log-file', str(log),
        ])
        main()
        assert "Placed 3 clusters" in log.read_text(encoding="utf-8")
