"""
Run folders for generated cut files.

Each generator run gets its own directory under the runs root:

    <runs_root>/<stamp>_<kind>_<design>/
        artifacts/<design>.svg, <design>.dxf
        manifest.json
        summary.md
    <runs_root>/LATEST      (id of the most recent run)
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

LATEST_MARKER = "LATEST"


@dataclass
class RunPaths:
    run_id: str
    design_name: str
    run_dir: Path
    artifacts_dir: Path

    @property
    def manifest_path(self) -> Path:
        return self.run_dir / "manifest.json"

    @property
    def summary_path(self) -> Path:
        return self.run_dir / "summary.md"

    def artifact(self, extension: str) -> Path:
        """Cut file for this run's design, e.g. artifacts/<design>.svg."""
        return self.artifacts_dir / f"{self.design_name}.{extension.lstrip('.')}"


def design_slug(design_name: str) -> str:
    """Lowercase the design name and keep it filesystem-safe."""
    slug = re.sub(r"[^a-z0-9_]+", "-", design_name.strip().lower()).strip("-_")
    return slug or "design"


def make_run_id(kind: str, design_name: str, now: Optional[datetime] = None) -> str:
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%d_%H%M%S")
    return f"{stamp}_{kind}_{design_slug(design_name)}"


def prepare_run_dir(runs_root: str, kind: str, design_name: str) -> RunPaths:
    """Create a fresh run directory; repeated ids within one second get a counter."""
    root = Path(runs_root)
    base_id = make_run_id(kind, design_name)
    run_id = base_id
    counter = 1
    while (root / run_id).exists():
        counter += 1
        run_id = f"{base_id}_{counter}"

    run_dir = root / run_id
    artifacts_dir = run_dir / "artifacts"
    artifacts_dir.mkdir(parents=True)
    return RunPaths(
        run_id=run_id,
        design_name=design_name,
        run_dir=run_dir,
        artifacts_dir=artifacts_dir,
    )


def write_manifest(paths: RunPaths, manifest: Dict[str, Any]) -> Path:
    paths.manifest_path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    return paths.manifest_path


def write_summary(paths: RunPaths, summary: str) -> Path:
    paths.summary_path.write_text(summary, encoding="utf-8")
    return paths.summary_path


def mark_latest(runs_root: str, paths: RunPaths) -> Path:
    """Record this run as the most recent one under the runs root."""
    marker = Path(runs_root) / LATEST_MARKER
    marker.write_text(paths.run_id + "\n", encoding="utf-8")
    return marker


def latest_run_dir(runs_root: str) -> Optional[Path]:
    """Directory of the most recent run, or None if nothing was recorded."""
    marker = Path(runs_root) / LATEST_MARKER
    if not marker.is_file():
        return None
    run_dir = Path(runs_root) / marker.read_text(encoding="utf-8").strip()
    return run_dir if run_dir.is_dir() else None
