#!/usr/bin/env python3
"""
Generate the six panels of a laser-cut tabbed box.

Usage:
    # 6" x 7" x 8" box in 1/8" acrylic with an untabbed door panel
    python scripts/generate_box.py --size 6000 7000 8000

    # Fully closed box, tighter tabs, DXF alongside the SVG
    python scripts/generate_box.py --size 4000 4000 3000 --no-door \
        --tab-tolerance 3 --export-dxf

All lengths are in thou (1/1000 inch).
"""
import sys
import argparse
import logging
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from box_faces import BoxConfig
from geometry_primitives import ConfigurationError
from materials import DEFAULT_MATERIAL, MATERIALS
from pipeline import PipelineConfig, run_box_pipeline
from sheet_layout import LayoutConfig


def main():
    parser = argparse.ArgumentParser(
        description="Generate laser-cut panels for an interlocking tabbed box"
    )
    parser.add_argument(
        "--size", type=float, nargs=3, required=True, metavar=("X", "Y", "Z"),
        help="Outside box dimensions in thou; the door is the X by Y panel",
    )
    parser.add_argument(
        "--thou-per-tab", type=float, default=500.0,
        help="Length of one tab + gap cycle (default: 500)",
    )
    parser.add_argument(
        "--material", type=str, default=DEFAULT_MATERIAL,
        choices=list(MATERIALS.keys()),
        help=f"Sheet material; sets thickness and sheet size (default: {DEFAULT_MATERIAL})",
    )
    parser.add_argument(
        "--thickness", type=float, default=None,
        help="Material thickness in thou (default: catalog thickness of --material)",
    )
    parser.add_argument(
        "--tab-fraction", type=float, default=0.5,
        help="Fraction of each tab cycle that is tab, in (0, 1] (default: 0.5)",
    )
    parser.add_argument(
        "--tab-tolerance", type=float, default=0.0,
        help="Tab oversize in thou; positive is tighter (default: 0)",
    )
    parser.add_argument("--no-door", action="store_true", help="Tab all six panels")
    parser.add_argument(
        "--spacing", type=float, default=250.0,
        help="Gap between panels on the sheet (default: 250)",
    )
    parser.add_argument(
        "--grow-to-fit", action="store_true",
        help="Enlarge the SVG page when panels overflow the sheet",
    )
    parser.add_argument("--export-dxf", action="store_true", help="Also write a DXF file")
    parser.add_argument("--no-svg", action="store_true", help="Skip SVG export")
    parser.add_argument("--runs-dir", type=str, default="runs", help="Output runs directory")
    parser.add_argument("--name", type=str, default="box", help="Design name")
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides = {
        "thou_per_tab": args.thou_per_tab,
        "tab_fraction": args.tab_fraction,
        "tab_tolerance": args.tab_tolerance,
        "door": not args.no_door,
    }
    if args.thickness is not None:
        overrides["material_thickness"] = args.thickness

    pipeline_config = PipelineConfig(
        runs_dir=args.runs_dir,
        export_svg=not args.no_svg,
        export_dxf=args.export_dxf,
        layout=LayoutConfig.from_material(args.material, spacing=args.spacing),
        grow_to_fit=args.grow_to_fit,
    )

    try:
        box_config = BoxConfig.from_material(tuple(args.size), args.material, **overrides)
        result = run_box_pipeline(box_config, args.name, pipeline_config)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1

    print(f"\nRun ID: {result.run_id}")
    print(f"Tabs per axis: {box_config.num_tabs}")
    for face in result.faces:
        minx, miny, maxx, maxy = face.bounds
        print(
            f"  {face.name}: {maxx - minx:.0f} x {maxy - miny:.0f} thou "
            f"({face.spec.codes}, {len(face.polyline)} points)"
        )
    if result.svg_path:
        print(f"\nSVG: {result.svg_path}")
    if result.dxf_path:
        print(f"DXF: {result.dxf_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
