"""
Core geometry types for laser cut-path generation.

Provides Polyline (an immutable point sequence handed to the exporters),
the quarter-turn rotation used by the box edge generator, and conversions
to numpy arrays and Shapely polygons.
"""
import math
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

import numpy as np
from shapely.geometry import LinearRing, Polygon

Point2D = Tuple[float, float]

CLOSE_TOLERANCE = 1e-6


class ConfigurationError(ValueError):
    """Invalid generator input. Raised before any geometry is emitted."""


@dataclass(frozen=True)
class Polyline:
    """An ordered sequence of 2D points.

    Open or closed; closed means the first point equals the last within
    tolerance.
    """
    points: Tuple[Point2D, ...]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point2D]:
        return iter(self.points)

    def __getitem__(self, index):
        return self.points[index]

    @classmethod
    def from_array(cls, coords) -> "Polyline":
        """Build a Polyline from an (N, 2) array or sequence of pairs."""
        arr = np.asarray(coords, dtype=float).reshape(-1, 2)
        return cls(points=tuple((float(x), float(y)) for x, y in arr))

    @property
    def xs(self) -> List[float]:
        return [p[0] for p in self.points]

    @property
    def ys(self) -> List[float]:
        return [p[1] for p in self.points]

    def as_array(self) -> np.ndarray:
        return np.array(self.points, dtype=float).reshape(-1, 2)

    def is_closed(self, tolerance: float = CLOSE_TOLERANCE) -> bool:
        if len(self.points) < 2:
            return False
        (x0, y0), (x1, y1) = self.points[0], self.points[-1]
        return math.hypot(x1 - x0, y1 - y0) <= tolerance

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Axis-aligned bounding box as (minx, miny, maxx, maxy)."""
        if not self.points:
            return (0.0, 0.0, 0.0, 0.0)
        arr = self.as_array()
        minx, miny = arr.min(axis=0)
        maxx, maxy = arr.max(axis=0)
        return (float(minx), float(miny), float(maxx), float(maxy))

    @property
    def width(self) -> float:
        b = self.bounds
        return b[2] - b[0]

    @property
    def height(self) -> float:
        b = self.bounds
        return b[3] - b[1]

    def translated(self, dx: float, dy: float) -> "Polyline":
        return Polyline.from_array(self.as_array() + np.array([dx, dy]))

    def closed(self) -> "Polyline":
        """Return this polyline with the first point appended if it is open."""
        if self.is_closed() or not self.points:
            return self
        return Polyline(points=self.points + (self.points[0],))

    def to_polygon(self) -> Polygon:
        """Convert to a Shapely Polygon (the ring is closed implicitly)."""
        if len(self.points) < 3:
            return Polygon()
        return Polygon(self.points)

    def validate_geometry(self) -> List[str]:
        """Check the outline for cutting problems.

        Returns list of issue strings (empty = ok).
        """
        issues = []
        if len(self.points) < 4:
            issues.append(f"Too few points for a closed outline: {len(self.points)}")
            return issues
        if not self.is_closed():
            issues.append("Outline is not closed")
        ring = LinearRing(self.points)
        if not ring.is_simple:
            issues.append("Outline self-intersects")
        polygon = self.to_polygon()
        if polygon.area <= 0:
            issues.append("Outline encloses no area")
        return issues


# ─── Vector helpers ──────────────────────────────────────────────────────────

def rotate_quarter_turns(vector: Sequence[float], k: int) -> np.ndarray:
    """Rotate a 2D vector by k * 90 degrees.

    The vector is treated as a row and multiplied on the left of the
    rotation matrix, so positive k turns clockwise in a y-up frame. The box
    edge tables depend on this sign convention.
    """
    angle = k * math.pi / 2
    rotation = np.array([
        [math.cos(angle), -math.sin(angle)],
        [math.sin(angle), math.cos(angle)],
    ])
    return np.asarray(vector, dtype=float) @ rotation


def rectangle(width: float, height: float) -> Polyline:
    """Closed axis-aligned rectangle with its lower-left corner at the origin."""
    return Polyline(points=(
        (0.0, 0.0),
        (float(width), 0.0),
        (float(width), float(height)),
        (0.0, float(height)),
        (0.0, 0.0),
    ))
