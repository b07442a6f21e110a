"""
Procedural gear and rack tooth profiles.

Teeth are built from flat facets: a rising flank, a flat crest, a falling
flank and a flat root, repeated along a straight "stroke". A rack keeps the
stroke straight and gets a rectangular body; a circular gear wraps the
stroke around its pitch circle, so the stroke length is the pitch
circumference.
"""
import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from geometry_primitives import ConfigurationError, Polyline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GearConfig:
    """Parameters for one gear or rack outline."""
    num_teeth: int
    tooth_depth: float          # tip-to-root distance
    stroke_length: float        # pitch circumference (gear) or length (rack)
    tooth_top_fraction: float = 0.5  # share of the period spent on crest/root flats
    circular: bool = True

    @property
    def tooth_period(self) -> float:
        return self.stroke_length / self.num_teeth

    @property
    def pitch_radius(self) -> float:
        return self.stroke_length / (2 * math.pi)

    @classmethod
    def from_pitch_diameter(
        cls,
        num_teeth: int,
        tooth_depth: float,
        pitch_diameter: float,
        tooth_top_fraction: float = 0.5,
        circular: bool = True,
    ) -> "GearConfig":
        """Create a config from the pitch circle diameter instead of its circumference."""
        return cls(
            num_teeth=num_teeth,
            tooth_depth=tooth_depth,
            stroke_length=math.pi * pitch_diameter,
            tooth_top_fraction=tooth_top_fraction,
            circular=circular,
        )

    def validate(self) -> None:
        if isinstance(self.num_teeth, bool) or not isinstance(self.num_teeth, (int, np.integer)):
            raise ConfigurationError(
                f"num_teeth must be an integer, got {self.num_teeth!r}"
            )
        if self.num_teeth < 1:
            raise ConfigurationError(f"num_teeth must be at least 1, got {self.num_teeth}")
        if not 0.0 <= self.tooth_top_fraction < 1.0:
            raise ConfigurationError(
                f"tooth_top_fraction must be in [0, 1), got {self.tooth_top_fraction}"
            )
        for name in ("tooth_depth", "stroke_length"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value}")
        if not self.stroke_length > 0:
            raise ConfigurationError(
                f"stroke_length must be positive, got {self.stroke_length}"
            )


def generate_gear_profile(config: GearConfig) -> Polyline:
    """Build the outline of a gear or rack.

    Args:
        config: Gear parameters. Validated before any point is produced.

    Returns:
        Polyline. Circular gears close on themselves; racks end on the
        baseline and are closed implicitly by the exporter.
    """
    config.validate()

    xs, ys = _unwrapped_teeth(config)

    if config.circular:
        # Tangential distance becomes angle, depth offset becomes radius
        radius = config.pitch_radius
        angles = 2 * math.pi * ys / config.stroke_length
        coords = np.column_stack([
            (radius + xs) * np.cos(angles),
            (radius + xs) * np.sin(angles),
        ])
    else:
        # Rectangular body behind the teeth
        depth = config.stroke_length / (2 * math.pi)
        body = np.array([[-depth, ys[-1]], [-depth, 0.0]])
        coords = np.vstack([np.column_stack([xs, ys]), body])

    logger.debug(
        "Generated %s profile: %d teeth, %d points",
        "gear" if config.circular else "rack", config.num_teeth, len(coords),
    )
    return Polyline.from_array(coords)


def create_gear_coordinates(
    num_teeth: int,
    tooth_depth: float,
    stroke_length: float,
    tooth_top_fraction: float,
    circular: bool,
) -> Tuple[List[float], List[float]]:
    """Positional form of generate_gear_profile returning separate x and y lists."""
    profile = generate_gear_profile(GearConfig(
        num_teeth=num_teeth,
        tooth_depth=tooth_depth,
        stroke_length=stroke_length,
        tooth_top_fraction=tooth_top_fraction,
        circular=circular,
    ))
    return profile.xs, profile.ys


# ─── Internal helpers ────────────────────────────────────────────────────────

def _unwrapped_teeth(config: GearConfig) -> Tuple[np.ndarray, np.ndarray]:
    """Lay the teeth out along a straight stroke starting at (-depth/2, 0).

    x is the offset across the tooth depth, y the distance along the stroke.
    """
    period = config.tooth_period
    slope_width = (1 - config.tooth_top_fraction) * period / 2
    flat_width = config.tooth_top_fraction * period / 2
    steps = (
        (config.tooth_depth, slope_width),    # rising flank
        (0.0, flat_width),                    # crest
        (-config.tooth_depth, slope_width),   # falling flank
        (0.0, flat_width),                    # root
    )

    x = -config.tooth_depth / 2
    y = 0.0
    xs: List[float] = []
    ys: List[float] = []
    for _ in range(config.num_teeth):
        xs.append(x)
        ys.append(y)
        for dx, dy in steps:
            x += dx
            y += dy
            xs.append(x)
            ys.append(y)
    xs.append(x)
    ys.append(y)

    return np.array(xs), np.array(ys)
