#!/usr/bin/env python3
"""
Generate a flat-faceted gear or rack outline for laser cutting.

Usage:
    # 24-tooth gear on a 750 thou pitch circle
    python scripts/generate_gear.py --teeth 24 --depth 75 --pitch-diameter 750

    # 10-tooth rack, 3 inches long
    python scripts/generate_gear.py --teeth 10 --depth 75 --stroke-length 3000 --rack

All lengths are in thou (1/1000 inch).
"""
import sys
import argparse
import logging
import math
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gear_profile import GearConfig
from geometry_primitives import ConfigurationError
from materials import DEFAULT_MATERIAL, MATERIALS
from pipeline import PipelineConfig, run_gear_pipeline
from sheet_layout import LayoutConfig


def main():
    parser = argparse.ArgumentParser(
        description="Generate a gear or rack outline for laser cutting"
    )
    parser.add_argument("--teeth", type=int, required=True, help="Number of teeth")
    parser.add_argument(
        "--depth", type=float, required=True, help="Tooth depth, tip to root, in thou",
    )
    length_group = parser.add_mutually_exclusive_group(required=True)
    length_group.add_argument(
        "--stroke-length", type=float,
        help="Pitch circumference (gear) or toothed length (rack) in thou",
    )
    length_group.add_argument(
        "--pitch-diameter", type=float, help="Pitch circle diameter in thou",
    )
    parser.add_argument(
        "--top-fraction", type=float, default=0.5,
        help="Fraction of the tooth period spent on tip and root flats, in [0, 1) (default: 0.5)",
    )
    parser.add_argument("--rack", action="store_true", help="Make a straight rack")
    parser.add_argument(
        "--material", type=str, default=DEFAULT_MATERIAL,
        choices=list(MATERIALS.keys()),
        help=f"Sheet material; sets the sheet size (default: {DEFAULT_MATERIAL})",
    )
    parser.add_argument("--margin", type=float, default=250.0, help="Sheet margin (default: 250)")
    parser.add_argument("--export-dxf", action="store_true", help="Also write a DXF file")
    parser.add_argument("--runs-dir", type=str, default="runs", help="Output runs directory")
    parser.add_argument("--name", type=str, default="gear", help="Design name")
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    stroke_length = args.stroke_length
    if stroke_length is None:
        stroke_length = math.pi * args.pitch_diameter

    gear_config = GearConfig(
        num_teeth=args.teeth,
        tooth_depth=args.depth,
        stroke_length=stroke_length,
        tooth_top_fraction=args.top_fraction,
        circular=not args.rack,
    )
    pipeline_config = PipelineConfig(
        runs_dir=args.runs_dir,
        export_dxf=args.export_dxf,
        layout=LayoutConfig.from_material(args.material, margin=args.margin),
    )

    try:
        result = run_gear_pipeline(gear_config, args.name, pipeline_config)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1

    name, profile = result.parts[0]
    print(f"\nRun ID: {result.run_id}")
    print(
        f"{'Rack' if args.rack else 'Gear'} {name}: {args.teeth} teeth, "
        f"period {gear_config.tooth_period:.1f} thou, {len(profile)} points"
    )
    print(f"  Extent: {profile.width:.0f} x {profile.height:.0f} thou")
    if result.svg_path:
        print(f"\nSVG: {result.svg_path}")
    if result.dxf_path:
        print(f"DXF: {result.dxf_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
