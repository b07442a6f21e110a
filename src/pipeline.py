"""Generation pipeline: configuration -> polylines -> cut files in a run folder."""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import List, Optional, Tuple

from box_faces import BoxConfig, BoxFace, generate_box_faces
from dxf_exporter import DXFExportConfig, parts_to_dxf
from gear_profile import GearConfig, generate_gear_profile
from geometry_primitives import Polyline
from materials import thou_to_mm
from run_protocol import mark_latest, prepare_run_dir, write_manifest, write_summary
from sheet_layout import LayoutConfig
from svg_exporter import SVGExportConfig, parts_to_svg

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    runs_dir: str = "runs"
    export_svg: bool = True
    export_dxf: bool = False
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    svg_as_segments: Optional[bool] = None  # None = segments for boxes, polygons for gears
    grow_to_fit: bool = False


@dataclass
class PipelineResult:
    run_id: str
    run_dir: str
    manifest_path: str
    summary_path: str
    parts: List[Tuple[str, Polyline]] = field(default_factory=list)
    svg_path: Optional[str] = None
    dxf_path: Optional[str] = None
    faces: List[BoxFace] = field(default_factory=list)


def run_box_pipeline(
    box_config: BoxConfig,
    design_name: str = "box",
    config: Optional[PipelineConfig] = None,
) -> PipelineResult:
    """Generate a tabbed box and write its cut files."""
    if config is None:
        config = PipelineConfig()

    started = time.perf_counter()
    faces = generate_box_faces(box_config)
    parts = [(face.name, face.polyline) for face in faces]

    details = {
        "num_tabs": list(box_config.num_tabs),
        "faces": [
            {
                "name": face.name,
                "edges": face.spec.codes,
                "points": len(face.polyline),
                "bounds": list(face.bounds),
                "size_mm": [
                    round(thou_to_mm(face.polyline.width), 2),
                    round(thou_to_mm(face.polyline.height), 2),
                ],
            }
            for face in faces
        ],
    }
    result = _write_run(
        "box", design_name, parts, asdict(box_config), details,
        as_segments=True, config=config, started=started,
    )
    result.faces = faces
    return result


def run_gear_pipeline(
    gear_config: GearConfig,
    design_name: str = "gear",
    config: Optional[PipelineConfig] = None,
) -> PipelineResult:
    """Generate a gear or rack outline and write its cut files."""
    if config is None:
        config = PipelineConfig()

    started = time.perf_counter()
    profile = generate_gear_profile(gear_config)
    parts = [(design_name, profile)]

    details = {
        "kind": "gear" if gear_config.circular else "rack",
        "tooth_period": gear_config.tooth_period,
        "points": len(profile),
        "bounds": list(profile.bounds),
        "size_mm": [round(thou_to_mm(profile.width), 2), round(thou_to_mm(profile.height), 2)],
    }
    return _write_run(
        "gear", design_name, parts, asdict(gear_config), details,
        as_segments=False, config=config, started=started,
    )


# ─── Internal ─────────────────────────────────────────────────────────────────

def _write_run(
    kind: str,
    design_name: str,
    parts: List[Tuple[str, Polyline]],
    input_config: dict,
    details: dict,
    as_segments: bool,
    config: PipelineConfig,
    started: float,
) -> PipelineResult:
    paths = prepare_run_dir(config.runs_dir, kind, design_name)

    if config.svg_as_segments is not None:
        as_segments = config.svg_as_segments

    svg_path = None
    if config.export_svg:
        svg_path = str(paths.artifact("svg"))
        parts_to_svg(parts, svg_path, SVGExportConfig(
            as_segments=as_segments,
            grow_to_fit=config.grow_to_fit,
            layout=config.layout,
        ))

    dxf_path = None
    if config.export_dxf:
        dxf_path = str(paths.artifact("dxf"))
        parts_to_dxf(parts, dxf_path, DXFExportConfig(layout=config.layout))

    elapsed = time.perf_counter() - started

    manifest = {
        "run_id": paths.run_id,
        "kind": kind,
        "design_name": design_name,
        "created_utc": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "elapsed_s": round(elapsed, 3),
        "config": {
            "input": input_config,
            "pipeline": asdict(config),
        },
        "details": details,
        "artifacts": {
            "svg": svg_path,
            "dxf": dxf_path,
            "summary": str(paths.summary_path),
        },
    }
    write_manifest(paths, manifest)
    write_summary(paths, _build_summary(kind, paths.run_id, parts, elapsed, svg_path, dxf_path))
    mark_latest(config.runs_dir, paths)

    logger.info("Run %s written to %s", paths.run_id, paths.run_dir)
    return PipelineResult(
        run_id=paths.run_id,
        run_dir=str(paths.run_dir),
        manifest_path=str(paths.manifest_path),
        summary_path=str(paths.summary_path),
        parts=parts,
        svg_path=svg_path,
        dxf_path=dxf_path,
    )


def _build_summary(
    kind: str,
    run_id: str,
    parts: List[Tuple[str, Polyline]],
    elapsed_s: float,
    svg_path: Optional[str],
    dxf_path: Optional[str],
) -> str:
    lines = [
        f"# Run {run_id}",
        "",
        f"- Kind: {kind}",
        f"- Duration: {elapsed_s:.2f}s",
        f"- Parts: {len(parts)}",
        f"- SVG: {svg_path or 'not written'}",
        f"- DXF: {dxf_path or 'not written'}",
        "",
        "## Parts",
    ]
    for name, polyline in parts:
        lines.append(
            f"- {name}: {polyline.width:.1f} x {polyline.height:.1f} thou "
            f"({thou_to_mm(polyline.width):.1f} x {thou_to_mm(polyline.height):.1f} mm), "
            f"{len(polyline)} points"
        )
    return "\n".join(lines) + "\n"
