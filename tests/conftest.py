"""
Shared test fixtures for gear and box generation tests.
"""
import sys
from pathlib import Path

import pytest

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from box_faces import BoxConfig
from gear_profile import GearConfig
from geometry_primitives import rectangle


@pytest.fixture
def door_box_config():
    """6" x 7" x 8" box in 1/8" stock with a door panel."""
    return BoxConfig(
        box_size=(6000.0, 7000.0, 8000.0),
        thou_per_tab=500.0,
        material_thickness=125.0,
        door=True,
    )


@pytest.fixture
def closed_box_config():
    """Same box with all six panels tabbed."""
    return BoxConfig(
        box_size=(6000.0, 7000.0, 8000.0),
        thou_per_tab=500.0,
        material_thickness=125.0,
        door=False,
    )


@pytest.fixture
def small_rack_config():
    """4-tooth rack with round numbers: period 10, slope width 2.5."""
    return GearConfig(
        num_teeth=4,
        tooth_depth=10.0,
        stroke_length=40.0,
        tooth_top_fraction=0.5,
        circular=False,
    )


@pytest.fixture
def gear_config():
    """24-tooth gear on a 750 thou pitch circle."""
    return GearConfig.from_pitch_diameter(
        num_teeth=24,
        tooth_depth=75.0,
        pitch_diameter=750.0,
        tooth_top_fraction=0.5,
        circular=True,
    )


@pytest.fixture
def two_rectangles():
    """Two named rectangular parts: 1000x500 and 2000x800."""
    return [
        ("small", rectangle(1000, 500)),
        ("large", rectangle(2000, 800).translated(-300, 40)),
    ]
