"""
SVG export of laser cut parts.

Lays generated polylines out on a sheet and draws them into an SvgDocument
with the laser cutter style class. Box panels are written as individual
line segments, gears as closed polygons.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from box_faces import BoxFace
from geometry_primitives import Polyline
from sheet_layout import LayoutConfig, nest_parts, used_extent
from svg_document import LASER_CLASS, SvgDocument

logger = logging.getLogger(__name__)


@dataclass
class SVGExportConfig:
    """Configuration for SVG export."""
    class_name: str = LASER_CLASS
    as_segments: bool = True        # one <line> per segment instead of a <polygon>
    units_per_inch: float = 1000.0  # thou
    grow_to_fit: bool = False       # enlarge the page if parts overflow the sheet
    layout: LayoutConfig = field(default_factory=LayoutConfig)


def parts_to_document(
    parts: List[Tuple[str, Polyline]],
    config: Optional[SVGExportConfig] = None,
) -> SvgDocument:
    """Place parts on a sheet and draw them into a new document.

    Args:
        parts: List of (name, polyline) tuples.
        config: SVG export settings.

    Returns:
        The populated SvgDocument.
    """
    if config is None:
        config = SVGExportConfig()

    placed = nest_parts(parts, config.layout)
    width, height = config.layout.sheet_width, config.layout.sheet_height
    if config.grow_to_fit:
        used_w, used_h = used_extent(placed)
        width = max(width, used_w + config.layout.margin)
        height = max(height, used_h + config.layout.margin)

    doc = SvgDocument(width=width, height=height, units_per_inch=config.units_per_inch)
    for part in placed:
        if config.as_segments:
            # Open outlines such as racks still need their closing cut
            doc = doc.add_lines(list(part.polyline.closed()), class_names=config.class_name)
        else:
            doc = doc.add_polygon(list(part.polyline), class_names=config.class_name)
    logger.debug("Drew %d parts as %d SVG elements", len(placed), len(doc.elements))
    return doc


def parts_to_svg(
    parts: List[Tuple[str, Polyline]],
    filepath: Optional[str] = None,
    config: Optional[SVGExportConfig] = None,
) -> str:
    """Export parts to SVG text, and to a file when filepath is given.

    Returns:
        The SVG markup.
    """
    doc = parts_to_document(parts, config)
    if filepath is not None:
        os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)
        doc.save(filepath)
    return doc.to_svg()


def box_to_svg(
    faces: List[BoxFace],
    filepath: Optional[str] = None,
    config: Optional[SVGExportConfig] = None,
) -> str:
    """Export six box panels, drawn as line segments by default."""
    return parts_to_svg([(face.name, face.polyline) for face in faces], filepath, config)


def gear_to_svg(
    profile: Polyline,
    filepath: Optional[str] = None,
    config: Optional[SVGExportConfig] = None,
    name: str = "gear",
) -> str:
    """Export one gear or rack outline as a polygon."""
    if config is None:
        config = SVGExportConfig(as_segments=False)
    return parts_to_svg([(name, profile)], filepath, config)
