"""
DXF export for laser cut parts.

Uses ezdxf to produce one R2010 DXF with all parts laid out on a sheet:
  - CUT (red, ACI 1): closed part outlines
  - ENGRAVE (blue, ACI 5): sheet outline and part labels

Units: mils (thou), matching the generators.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import ezdxf
from ezdxf.enums import TextEntityAlignment

from geometry_primitives import Polyline
from sheet_layout import LayoutConfig, PlacedPart, nest_parts

logger = logging.getLogger(__name__)

DXF_UNITS_MILS = 9


@dataclass
class DXFExportConfig:
    """Configuration for DXF export."""
    cut_layer: str = "CUT"
    engrave_layer: str = "ENGRAVE"
    cut_color: int = 1       # ACI red
    engrave_color: int = 5   # ACI blue
    units: int = DXF_UNITS_MILS
    add_part_labels: bool = True
    add_sheet_outline: bool = True
    label_height: float = 200.0
    layout: LayoutConfig = field(default_factory=LayoutConfig)


def parts_to_dxf(
    parts: List[Tuple[str, Polyline]],
    filepath: str,
    config: Optional[DXFExportConfig] = None,
) -> str:
    """Export all parts laid out on a single sheet DXF.

    Args:
        parts: List of (name, polyline) tuples.
        filepath: Output DXF file path.
        config: DXF export settings.

    Returns:
        Path to created DXF file.
    """
    if config is None:
        config = DXFExportConfig()

    doc = ezdxf.new("R2010")
    doc.units = config.units
    msp = doc.modelspace()
    _setup_layers(doc, config)

    if config.add_sheet_outline:
        w, h = config.layout.sheet_width, config.layout.sheet_height
        msp.add_lwpolyline(
            [(0, 0), (w, 0), (w, h), (0, h)],
            close=True,
            dxfattribs={"layer": config.engrave_layer},
        )

    placed = nest_parts(parts, config.layout)
    for part in placed:
        _add_part(msp, part, config)

    os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)
    doc.saveas(filepath)
    logger.info("Exported DXF: %s (%d parts)", filepath, len(placed))
    return filepath


# ─── Internal helpers ────────────────────────────────────────────────────────

def _setup_layers(doc, config: DXFExportConfig) -> None:
    """Create CUT and ENGRAVE layers."""
    doc.layers.add(config.cut_layer, color=config.cut_color)
    doc.layers.add(config.engrave_layer, color=config.engrave_color)


def _add_part(msp, part: PlacedPart, config: DXFExportConfig) -> None:
    """Add a placed outline as a closed LWPolyline, plus its label."""
    coords = list(part.polyline.points)
    if part.polyline.is_closed():
        coords = coords[:-1]  # the closed flag supplies the last segment
    if len(coords) < 2:
        return
    msp.add_lwpolyline(
        coords,
        close=True,
        dxfattribs={"layer": config.cut_layer},
    )

    if config.add_part_labels:
        minx, miny, maxx, maxy = part.polyline.bounds
        msp.add_text(
            part.name,
            height=config.label_height,
            dxfattribs={"layer": config.engrave_layer},
        ).set_placement(
            ((minx + maxx) / 2, (miny + maxy) / 2),
            align=TextEntityAlignment.MIDDLE_CENTER,
        )
