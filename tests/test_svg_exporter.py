"""Tests for svg_exporter module."""
import os
import tempfile
import xml.etree.ElementTree as ET

import pytest

from box_faces import generate_box_faces
from gear_profile import generate_gear_profile
from sheet_layout import LayoutConfig
from svg_document import LASER_CLASS
from svg_exporter import SVGExportConfig, box_to_svg, gear_to_svg, parts_to_document, parts_to_svg

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def tmp_dir():
    with tempfile.TemporaryDirectory() as d:
        yield d


class TestPartsToDocument:

    def test_segments(self, two_rectangles):
        doc = parts_to_document(two_rectangles)
        # Each closed rectangle has 5 points, so 4 segments
        assert len(doc.elements) == 8
        assert all(e.kind == "line" for e in doc.elements)
        assert all(e.class_names == (LASER_CLASS,) for e in doc.elements)

    def test_polygons(self, two_rectangles):
        doc = parts_to_document(two_rectangles, SVGExportConfig(as_segments=False))
        assert [e.kind for e in doc.elements] == ["polygon", "polygon"]

    def test_parts_are_laid_out(self, two_rectangles):
        doc = parts_to_document(two_rectangles, SVGExportConfig(as_segments=False))
        xs = [x for x, _ in doc.elements[1].points]
        assert min(xs) == pytest.approx(1250)

    def test_page_size_from_layout(self, two_rectangles):
        doc = parts_to_document(two_rectangles)
        assert (doc.width, doc.height) == (24000.0, 12000.0)

    def test_grow_to_fit(self, two_rectangles):
        config = SVGExportConfig(
            grow_to_fit=True,
            layout=LayoutConfig(sheet_width=2000, sheet_height=600, wrap_rows=False),
        )
        doc = parts_to_document(two_rectangles, config)
        assert doc.width == pytest.approx(3250)
        assert doc.height == pytest.approx(800)


class TestSVGFiles:

    def test_parts_to_svg_returns_markup_and_writes(self, two_rectangles, tmp_dir):
        path = os.path.join(tmp_dir, "sub", "parts.svg")
        svg = parts_to_svg(two_rectangles, path)
        assert os.path.isfile(path)
        root = ET.fromstring(svg.encode("utf-8"))
        assert len(root.findall(f"{SVG_NS}line")) == 8

    def test_box_to_svg(self, door_box_config, tmp_dir):
        faces = generate_box_faces(door_box_config)
        path = os.path.join(tmp_dir, "box.svg")
        svg = box_to_svg(faces, path, SVGExportConfig(grow_to_fit=True))
        root = ET.fromstring(svg.encode("utf-8"))
        expected = sum(len(face.polyline) - 1 for face in faces)
        assert len(root.findall(f"{SVG_NS}line")) == expected

    def test_gear_to_svg_single_polygon(self, gear_config):
        svg = gear_to_svg(generate_gear_profile(gear_config))
        root = ET.fromstring(svg.encode("utf-8"))
        polygons = root.findall(f"{SVG_NS}polygon")
        assert len(polygons) == 1
        assert polygons[0].get("class") == LASER_CLASS
        assert root.findall(f"{SVG_NS}line") == []

    def test_rack_segments_include_closing_baseline(self, small_rack_config):
        profile = generate_gear_profile(small_rack_config)
        svg = gear_to_svg(profile, config=SVGExportConfig())
        lines = ET.fromstring(svg.encode("utf-8")).findall(f"{SVG_NS}line")
        # 23 open points need 23 cuts once the outline is closed
        assert len(lines) == len(profile)
        last = lines[-1]
        first = lines[0]
        assert (last.get("x2"), last.get("y2")) == (first.get("x1"), first.get("y1"))

    def test_closed_outlines_not_doubled(self, two_rectangles):
        doc = parts_to_document(two_rectangles)
        assert len(doc.elements) == 8
