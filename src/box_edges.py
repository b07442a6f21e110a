"""
Tab/gap edge generation for interlocking box panels.

Each panel edge is a run of alternating tabs and gaps. Perpendicular mating
panels occupy one material thickness at both ends of every edge, so the
tabbed stretch is shortened by 2 * thickness before it is divided up.
Edges are generated in the panel's local frame, walking counter-clockwise
from a corner, then concatenated into a closed face outline.
"""
import logging
from enum import Enum
from typing import Sequence

import numpy as np

from geometry_primitives import ConfigurationError, Polyline, rectangle, rotate_quarter_turns

logger = logging.getLogger(__name__)


class EdgeType(Enum):
    """Edge shapes, keyed by the single-letter codes used in the face tables."""
    OUTIE = "O"
    INNIE = "I"
    FLAT_OUT = "F"
    FLAT_IN = "f"

    @property
    def is_flat(self) -> bool:
        return self in (EdgeType.FLAT_OUT, EdgeType.FLAT_IN)

    @property
    def mate(self) -> "EdgeType":
        """The edge shape that interlocks with this one."""
        return _MATES[self]


_MATES = {
    EdgeType.OUTIE: EdgeType.INNIE,
    EdgeType.INNIE: EdgeType.OUTIE,
    EdgeType.FLAT_OUT: EdgeType.FLAT_IN,
    EdgeType.FLAT_IN: EdgeType.FLAT_OUT,
}

# Unit-square corners walked counter-clockwise, first corner repeated
UNIT_CORNERS = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [0.0, 0.0]])


def validate_tab_fraction(tab_fraction: float) -> None:
    if not 0.0 < tab_fraction <= 1.0:
        raise ConfigurationError(f"tab_fraction must be in (0, 1], got {tab_fraction}")


def create_edge_coordinates(
    corner: Sequence[float],
    edge_vector: Sequence[float],
    num_tabs: int,
    edge_type: EdgeType,
    tab_fraction: float,
    material_thickness: float,
    tab_tolerance: float,
) -> np.ndarray:
    """Generate the points of one tabbed edge.

    Args:
        corner: Starting corner of the edge in face coordinates.
        edge_vector: Vector from this corner to the next one, running
            counter-clockwise around the face.
        num_tabs: Number of tab cycles on the edge. Ignored for flat edges,
            which are always straight.
        edge_type: Shape of the edge.
        tab_fraction: Fraction of each tab cycle taken up by the tab.
        material_thickness: Sheet thickness; sets the tab depth and the
            inset at both ends of the edge.
        tab_tolerance: Amount each tab is oversized by (positive = tighter
            fit, negative = looser).

    Returns:
        (N, 2) array of points from the start of the edge to its end.
    """
    validate_tab_fraction(tab_fraction)
    if edge_type.is_flat:
        num_tabs = 0
    edge_vector = np.asarray(edge_vector, dtype=float)
    edge_length = float(np.linalg.norm(edge_vector))
    if edge_length == 0:
        raise ConfigurationError("Edge vector has zero length")
    if 2 * material_thickness >= edge_length:
        raise ConfigurationError(
            f"Material thickness {material_thickness} leaves no room on an edge "
            f"of length {edge_length}"
        )

    edge_hat = edge_vector / edge_length
    edge_vector = edge_vector - 2 * material_thickness * edge_hat
    edge_length = float(np.linalg.norm(edge_vector))

    tab_vector = edge_hat * edge_length / (1 + num_tabs / tab_fraction)
    gap_vector = tab_vector * (1 - tab_fraction) / tab_fraction

    if edge_type in (EdgeType.INNIE, EdgeType.FLAT_OUT):
        tab_tolerance = -tab_tolerance
        in_vector = material_thickness * rotate_quarter_turns(edge_vector, -1) / edge_length
        out_vector = material_thickness * rotate_quarter_turns(edge_vector, 1) / edge_length
        start = edge_hat * material_thickness
    else:
        in_vector = material_thickness * rotate_quarter_turns(edge_vector, 1) / edge_length
        out_vector = material_thickness * rotate_quarter_turns(edge_vector, -1) / edge_length
        start = out_vector + edge_hat * material_thickness
    # End is placed exactly rather than accumulated
    end = start + edge_vector

    coords = [start]
    for k in range(num_tabs):
        offset = np.zeros(2) if k == 0 else tab_tolerance * edge_hat
        coords.append(coords[-1] + tab_vector - offset)
        coords.append(coords[-1] + in_vector)
        coords.append(coords[-1] + gap_vector + offset)
        coords.append(coords[-1] + out_vector)
    if num_tabs > 0:
        coords.append(coords[-1] + tab_vector)
    coords.append(end)

    return np.array(coords) + np.asarray(corner, dtype=float)


def assemble_face(
    edge_shapes: Sequence[EdgeType],
    edge_directions: Sequence[int],
    box_size: Sequence[float],
    num_tabs: Sequence[int],
    material_thickness: float,
    tab_fraction: float,
    tab_tolerance: float,
) -> Polyline:
    """Concatenate four edges into one closed face outline.

    The face spans box_size[edge_directions[0]] along local x and
    box_size[edge_directions[1]] along local y. A face with four FLAT_OUT
    edges is a door panel and is returned as a plain rectangle.
    """
    if len(edge_shapes) != 4 or len(edge_directions) != 4:
        raise ConfigurationError("A face needs exactly four edge shapes and directions")

    edge_sizes = np.array([box_size[edge_directions[0]], box_size[edge_directions[1]]], dtype=float)

    if all(shape == EdgeType.FLAT_OUT for shape in edge_shapes):
        return rectangle(edge_sizes[0], edge_sizes[1])

    edges = []
    for edge_num, (shape, direction) in enumerate(zip(edge_shapes, edge_directions)):
        current_num_tabs = 0 if shape.is_flat else num_tabs[direction]
        corner = UNIT_CORNERS[edge_num] * edge_sizes
        next_corner = UNIT_CORNERS[edge_num + 1] * edge_sizes
        edges.append(create_edge_coordinates(
            corner,
            next_corner - corner,
            current_num_tabs,
            shape,
            tab_fraction,
            material_thickness,
            tab_tolerance,
        ))

    coords = np.vstack(edges)
    coords = np.vstack([coords, coords[:1]])
    return Polyline.from_array(coords)
