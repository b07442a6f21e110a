"""
Laser-cuttable sheet stock catalog.

Nominal thicknesses and sheet sizes for the materials boxes and gears are
usually cut from. Lengths elsewhere in the package are in thou (1/1000 inch),
so the catalog exposes both inch and thou views.
"""

from dataclasses import dataclass
from typing import List, Tuple

THOU_PER_INCH = 1000.0
INCH_TO_MM = 25.4


def thou_to_mm(value: float) -> float:
    return value / THOU_PER_INCH * INCH_TO_MM


@dataclass
class Material:
    """A sheet material that fits the laser bed."""

    name: str
    thicknesses_inch: List[float]  # Available thicknesses in inches
    max_size_inch: Tuple[float, float] = (24, 12)  # Sheet size (w, h)

    @property
    def thicknesses_thou(self) -> List[float]:
        return [round(t * THOU_PER_INCH, 3) for t in self.thicknesses_inch]

    @property
    def default_thickness_thou(self) -> float:
        return self.thicknesses_thou[0]

    @property
    def max_size_thou(self) -> Tuple[float, float]:
        return (self.max_size_inch[0] * THOU_PER_INCH, self.max_size_inch[1] * THOU_PER_INCH)


# Default is 1/8" cast acrylic on a 24" x 12" bed
DEFAULT_MATERIAL = "acrylic_cast"

MATERIALS = {
    # Plastics
    "acrylic_cast": Material(
        name="Cast Acrylic",
        thicknesses_inch=[0.125, 0.0625, 0.1875, 0.250],
    ),
    "acrylic_extruded": Material(
        name="Extruded Acrylic",
        thicknesses_inch=[0.118, 0.220],
    ),
    "delrin": Material(
        name="Delrin (Acetal)",
        thicknesses_inch=[0.125, 0.0625, 0.250],
    ),
    # Wood-based
    "plywood_baltic_birch": Material(
        name="Baltic Birch Plywood",
        thicknesses_inch=[0.125, 0.187, 0.250],
        max_size_inch=(24, 18),
    ),
    "mdf": Material(
        name="MDF",
        thicknesses_inch=[0.125, 0.250],
        max_size_inch=(24, 18),
    ),
    "hardboard": Material(
        name="Hardboard",
        thicknesses_inch=[0.125],
        max_size_inch=(24, 18),
    ),
    # Paper
    "chipboard": Material(
        name="Chipboard",
        thicknesses_inch=[0.040, 0.060],
    ),
}
