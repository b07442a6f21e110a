"""
Six-panel tabbed box generation.

Two fixed tables describe the box: the shape of every panel edge and the box
axis each edge runs along. One table leaves a single panel untabbed to act
as a door. Wherever two panels share a physical edge the tables pair an
OUTIE with an INNIE (or FLAT_OUT with FLAT_IN), so the tabs of one panel
drop into the gaps of the other.
"""
import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from box_edges import EdgeType, assemble_face, validate_tab_fraction
from geometry_primitives import ConfigurationError, Polyline
from materials import DEFAULT_MATERIAL, MATERIALS

logger = logging.getLogger(__name__)

AXIS_NAMES = ("x", "y", "z")
MIN_SIDE = "min"
MAX_SIDE = "max"


@dataclass(frozen=True)
class FaceSpec:
    """Edge shapes and edge axes of one panel, in counter-clockwise order."""
    shapes: Tuple[EdgeType, EdgeType, EdgeType, EdgeType]
    directions: Tuple[int, int, int, int]

    @classmethod
    def from_codes(cls, codes: str, directions: Tuple[int, int, int, int]) -> "FaceSpec":
        return cls(shapes=tuple(EdgeType(c) for c in codes), directions=directions)

    @property
    def codes(self) -> str:
        return "".join(shape.value for shape in self.shapes)

    @property
    def is_door(self) -> bool:
        return all(shape == EdgeType.FLAT_OUT for shape in self.shapes)


# Edge axes per face (0=x, 1=y, 2=z); shared by both tables
FACE_DIRECTIONS = (
    (1, 2, 1, 2),
    (1, 2, 1, 2),
    (0, 2, 0, 2),
    (0, 2, 0, 2),
    (1, 0, 1, 0),
    (1, 0, 1, 0),
)

# O=outie, I=innie, F=flat-out, f=flat-in
_DOOR_SHAPES = ("fOIO", "fOIO", "fIOI", "fIOI", "OIOI", "FFFF")
_CLOSED_SHAPES = ("IOIO", "IOIO", "OIOI", "OIOI", "OIOI", "OIOI")

FACE_TABLES: Mapping[bool, Tuple[FaceSpec, ...]] = MappingProxyType({
    True: tuple(FaceSpec.from_codes(c, d) for c, d in zip(_DOOR_SHAPES, FACE_DIRECTIONS)),
    False: tuple(FaceSpec.from_codes(c, d) for c, d in zip(_CLOSED_SHAPES, FACE_DIRECTIONS)),
})

# Where each face sits in the assembled box: (normal axis, side).
# The door panel (last face) closes the z-min end.
FACE_PLACEMENTS = (
    (0, MIN_SIDE),
    (0, MAX_SIDE),
    (1, MIN_SIDE),
    (1, MAX_SIDE),
    (2, MAX_SIDE),
    (2, MIN_SIDE),
)

FACE_NAMES = ("x_min", "x_max", "y_min", "y_max", "z_max", "z_min")


@dataclass(frozen=True)
class BoxConfig:
    """Parameters for a tabbed box. Lengths in thou."""
    box_size: Tuple[float, float, float]  # outside dimensions (x, y, z)
    thou_per_tab: float = 500.0           # length of one tab + gap cycle
    material_thickness: float = 125.0
    tab_fraction: float = 0.5             # share of each cycle that is tab
    tab_tolerance: float = 0.0            # oversize per tab; positive = tighter
    door: bool = True

    @classmethod
    def from_material(
        cls,
        box_size: Tuple[float, float, float],
        material_key: str = DEFAULT_MATERIAL,
        **overrides,
    ) -> "BoxConfig":
        """Create a BoxConfig using the catalog thickness of a material."""
        material = MATERIALS.get(material_key)
        if material is None:
            raise ConfigurationError(f"Unknown material: {material_key}")
        overrides.setdefault("material_thickness", material.default_thickness_thou)
        return cls(box_size=tuple(box_size), **overrides)

    @property
    def num_tabs(self) -> Tuple[int, int, int]:
        return tuple(int(math.ceil(dim / self.thou_per_tab)) for dim in self.box_size)

    def validate(self) -> None:
        if len(self.box_size) != 3:
            raise ConfigurationError(f"box_size needs 3 dimensions, got {len(self.box_size)}")
        for axis, dim in zip(AXIS_NAMES, self.box_size):
            if not (math.isfinite(dim) and dim > 0):
                raise ConfigurationError(f"Box {axis} dimension must be positive and finite, got {dim}")
        for name in ("thou_per_tab", "material_thickness", "tab_tolerance"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value}")
        if not self.thou_per_tab > 0:
            raise ConfigurationError(f"thou_per_tab must be positive, got {self.thou_per_tab}")
        if self.material_thickness < 0:
            raise ConfigurationError(
                f"material_thickness must not be negative, got {self.material_thickness}"
            )
        validate_tab_fraction(self.tab_fraction)
        shortest = min(self.box_size)
        if 2 * self.material_thickness >= shortest:
            raise ConfigurationError(
                f"Material thickness {self.material_thickness} is too thick for a "
                f"box dimension of {shortest}"
            )


@dataclass(frozen=True)
class BoxFace:
    """One generated panel."""
    name: str
    spec: FaceSpec
    polyline: Polyline

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return self.polyline.bounds


def generate_box_faces(config: BoxConfig) -> List[BoxFace]:
    """Generate the six panel outlines of a box.

    Args:
        config: Box parameters. The whole configuration is validated before
            any panel is built.

    Returns:
        Six BoxFace objects in table order; each polyline is closed.
    """
    config.validate()
    table = FACE_TABLES[config.door]
    num_tabs = config.num_tabs
    logger.debug("Tabs per axis: %s", num_tabs)
    for issue in check_complementary_edges(config.door, table):
        logger.debug("Joint mismatch: %s", issue)

    faces = []
    for name, spec in zip(FACE_NAMES, table):
        polyline = assemble_face(
            spec.shapes,
            spec.directions,
            config.box_size,
            num_tabs,
            config.material_thickness,
            config.tab_fraction,
            config.tab_tolerance,
        )
        faces.append(BoxFace(name=name, spec=spec, polyline=polyline))

    logger.info(
        "Generated %d box faces (%s door) for %s",
        len(faces), "with" if config.door else "no", config.box_size,
    )
    return faces


# ─── Joint analysis ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FaceEdgeRef:
    face_index: int
    edge_index: int
    shape: EdgeType


@dataclass
class SharedEdge:
    """A physical box edge and the two panel edges that meet on it."""
    axis: int
    sides: Tuple[Tuple[int, str], Tuple[int, str]]
    members: List[FaceEdgeRef] = field(default_factory=list)

    @property
    def is_complementary(self) -> bool:
        if len(self.members) != 2:
            return False
        a, b = self.members
        return a.shape.mate == b.shape


def find_shared_edges(door: bool, table: Optional[Tuple[FaceSpec, ...]] = None) -> List[SharedEdge]:
    """Match every panel edge to the physical box edge it lies on.

    Edge k of a face runs along directions[k]. Edges 0 and 2 sit at the min
    and max of the face's second axis, edges 3 and 1 at the min and max of
    its first axis; that position plus the face's own placement pins down
    the box edge.
    """
    if table is None:
        table = FACE_TABLES[door]

    shared: Dict[Tuple, SharedEdge] = {}
    for face_index, (spec, placement) in enumerate(zip(table, FACE_PLACEMENTS)):
        u_axis, v_axis = spec.directions[0], spec.directions[1]
        edge_positions = (
            (v_axis, MIN_SIDE),
            (u_axis, MAX_SIDE),
            (v_axis, MAX_SIDE),
            (u_axis, MIN_SIDE),
        )
        for edge_index, (shape, along) in enumerate(zip(spec.shapes, spec.directions)):
            sides = tuple(sorted((placement, edge_positions[edge_index])))
            key = (along, sides)
            if key not in shared:
                shared[key] = SharedEdge(axis=along, sides=sides)
            shared[key].members.append(FaceEdgeRef(face_index, edge_index, shape))

    return list(shared.values())


def check_complementary_edges(door: bool, table: Optional[Tuple[FaceSpec, ...]] = None) -> List[str]:
    """Check that every shared physical edge pairs mating shapes.

    Returns list of problem strings (empty = all edges interlock).
    """
    issues = []
    edges = find_shared_edges(door, table)
    for edge in edges:
        desc = f"{AXIS_NAMES[edge.axis]}-edge at {edge.sides}"
        if len(edge.members) != 2:
            issues.append(f"{desc} has {len(edge.members)} panel edges")
        elif not edge.is_complementary:
            a, b = edge.members
            issues.append(
                f"{desc}: face {a.face_index} edge {a.edge_index} ({a.shape.value}) "
                f"does not mate with face {b.face_index} edge {b.edge_index} ({b.shape.value})"
            )
    if len(edges) != 12:
        issues.append(f"Expected 12 physical edges, found {len(edges)}")
    return issues
