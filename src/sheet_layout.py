"""
Row-based placement of cut parts on a single sheet.

Parts are shifted so their bounding boxes start at the cursor and laid out
left to right, wrapping to a new row when the sheet width runs out. This is
a simple shelf layout, not a nesting optimizer.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from geometry_primitives import Polyline
from materials import DEFAULT_MATERIAL, MATERIALS

logger = logging.getLogger(__name__)


@dataclass
class LayoutConfig:
    """Sheet and spacing settings (thou)."""
    sheet_width: float = 24000.0
    sheet_height: float = 12000.0
    spacing: float = 250.0   # gap between neighbouring parts
    margin: float = 0.0      # gap between parts and the sheet edge
    wrap_rows: bool = True

    @classmethod
    def from_material(cls, material_key: str = DEFAULT_MATERIAL, **overrides) -> "LayoutConfig":
        """Create a LayoutConfig with the sheet size of a material."""
        mat = MATERIALS.get(material_key)
        if mat is None:
            return cls(**overrides)
        width, height = mat.max_size_thou
        overrides.setdefault("sheet_width", width)
        overrides.setdefault("sheet_height", height)
        return cls(**overrides)


@dataclass
class PlacedPart:
    """A part translated to its position on the sheet."""
    name: str
    polyline: Polyline
    offset: Tuple[float, float]  # translation applied to the source polyline


def nest_parts(
    parts: List[Tuple[str, Polyline]],
    config: Optional[LayoutConfig] = None,
) -> List[PlacedPart]:
    """Place parts on the sheet row by row.

    Args:
        parts: List of (name, polyline) tuples.
        config: Sheet settings.

    Returns:
        One PlacedPart per input part, in input order. Parts that overflow
        the sheet are still placed and logged as warnings.
    """
    if config is None:
        config = LayoutConfig()

    placed: List[PlacedPart] = []
    current_x = config.margin
    current_y = config.margin
    row_height = 0.0

    for name, polyline in parts:
        minx, miny, maxx, maxy = polyline.bounds
        w = maxx - minx
        h = maxy - miny

        if (
            config.wrap_rows
            and current_x > config.margin
            and current_x + w + config.margin > config.sheet_width
        ):
            current_x = config.margin
            current_y += row_height + config.spacing
            row_height = 0.0

        if current_x + w + config.margin > config.sheet_width or \
                current_y + h + config.margin > config.sheet_height:
            logger.warning("Part %s extends past the %gx%g sheet",
                           name, config.sheet_width, config.sheet_height)

        offset = (current_x - minx, current_y - miny)
        placed.append(PlacedPart(
            name=name,
            polyline=polyline.translated(*offset),
            offset=offset,
        ))

        current_x += w + config.spacing
        row_height = max(row_height, h)

    logger.debug("Placed %d parts", len(placed))
    return placed


def used_extent(placed: List[PlacedPart]) -> Tuple[float, float]:
    """Width and height of the region covered by placed parts, from the origin."""
    if not placed:
        return (0.0, 0.0)
    return (
        max(p.polyline.bounds[2] for p in placed),
        max(p.polyline.bounds[3] for p in placed),
    )
