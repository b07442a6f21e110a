"""Tests for box_faces module."""
import pytest

from box_edges import EdgeType
from box_faces import (
    FACE_NAMES,
    FACE_TABLES,
    BoxConfig,
    FaceSpec,
    check_complementary_edges,
    find_shared_edges,
    generate_box_faces,
)
from geometry_primitives import ConfigurationError


class TestFaceTables:

    def test_door_table_codes(self):
        codes = [spec.codes for spec in FACE_TABLES[True]]
        assert codes == ["fOIO", "fOIO", "fIOI", "fIOI", "OIOI", "FFFF"]

    def test_closed_table_codes(self):
        codes = [spec.codes for spec in FACE_TABLES[False]]
        assert codes == ["IOIO", "IOIO", "OIOI", "OIOI", "OIOI", "OIOI"]

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            FACE_TABLES[True] = FACE_TABLES[False]

    def test_only_last_door_face_is_door(self):
        assert [spec.is_door for spec in FACE_TABLES[True]] == [False] * 5 + [True]
        assert not any(spec.is_door for spec in FACE_TABLES[False])

    @pytest.mark.parametrize("door", [True, False])
    def test_shared_edges_interlock(self, door):
        edges = find_shared_edges(door)
        assert len(edges) == 12
        assert all(len(edge.members) == 2 for edge in edges)
        assert check_complementary_edges(door) == []

    def test_mismatched_table_reported(self):
        table = list(FACE_TABLES[False])
        table[0] = FaceSpec.from_codes("OOIO", table[0].directions)
        issues = check_complementary_edges(False, tuple(table))
        assert len(issues) == 1
        assert "does not mate" in issues[0]


class TestBoxConfig:

    def test_num_tabs(self, door_box_config):
        assert door_box_config.num_tabs == (12, 14, 16)

    def test_num_tabs_rounds_up(self):
        assert BoxConfig(box_size=(6100, 500, 499)).num_tabs == (13, 1, 1)

    def test_from_material(self):
        config = BoxConfig.from_material((4000, 4000, 3000), "plywood_baltic_birch", door=False)
        assert config.material_thickness == pytest.approx(125.0)
        assert config.door is False

    def test_from_material_override_thickness(self):
        config = BoxConfig.from_material((4000, 4000, 3000), material_thickness=220.0)
        assert config.material_thickness == 220.0

    def test_unknown_material(self):
        with pytest.raises(ConfigurationError):
            BoxConfig.from_material((4000, 4000, 3000), "unobtainium")

    @pytest.mark.parametrize("kwargs", [
        {"box_size": (6000, 7000)},
        {"box_size": (6000, 0, 8000)},
        {"box_size": (6000, 7000, 8000), "thou_per_tab": 0},
        {"box_size": (6000, 7000, 8000), "material_thickness": -1},
        {"box_size": (6000, 7000, 8000), "tab_fraction": 0.0},
        {"box_size": (250, 7000, 8000), "material_thickness": 125},
        {"box_size": (6000, 7000, 8000), "material_thickness": float("nan")},
        {"box_size": (6000, float("inf"), 8000)},
        {"box_size": (float("nan"), 7000, 8000)},
        {"box_size": (6000, 7000, 8000), "thou_per_tab": float("inf")},
        {"box_size": (6000, 7000, 8000), "tab_tolerance": float("nan")},
    ])
    def test_invalid_configs_raise(self, kwargs):
        with pytest.raises(ConfigurationError):
            generate_box_faces(BoxConfig(**kwargs))


class TestGenerateBoxFaces:

    def test_six_closed_faces(self, door_box_config):
        faces = generate_box_faces(door_box_config)
        assert [face.name for face in faces] == list(FACE_NAMES)
        assert all(face.polyline.is_closed() for face in faces)

    def test_door_box_first_face(self, door_box_config):
        face = generate_box_faces(door_box_config)[0]
        assert face.spec.codes == "fOIO"
        # 2 + 67 + 59 + 67 edge points, plus the closing point
        assert len(face.polyline) == 196
        assert face.bounds == pytest.approx((0, 125, 7000, 8000))

    def test_door_panel(self, door_box_config):
        door = generate_box_faces(door_box_config)[5]
        assert door.spec.is_door
        assert len(door.polyline) == 5
        assert door.bounds == (0.0, 0.0, 7000.0, 6000.0)

    def test_closed_box_first_face_reaches_origin(self, closed_box_config):
        face = generate_box_faces(closed_box_config)[0]
        assert face.spec.codes == "IOIO"
        assert face.bounds == pytest.approx((0, 0, 7000, 8000))

    @pytest.mark.parametrize("door", [True, False])
    def test_faces_enclose_one_region(self, door_box_config, door):
        config = BoxConfig(
            box_size=door_box_config.box_size,
            thou_per_tab=door_box_config.thou_per_tab,
            material_thickness=door_box_config.material_thickness,
            door=door,
        )
        for face in generate_box_faces(config):
            polygon = face.polyline.to_polygon()
            # The last tab of an edge may overshoot its end point by float error
            cleaned = polygon.buffer(0)
            assert cleaned.geom_type == "Polygon", face.name
            assert cleaned.area == pytest.approx(polygon.area), face.name

    def test_zero_thickness_gives_flat_tabs(self):
        faces = generate_box_faces(BoxConfig(box_size=(1000, 1000, 1000), material_thickness=0.0))
        for face in faces:
            assert face.polyline.to_polygon().area == pytest.approx(1000 * 1000)

    def test_deterministic(self, closed_box_config):
        first = generate_box_faces(closed_box_config)
        second = generate_box_faces(closed_box_config)
        assert [f.polyline for f in first] == [f.polyline for f in second]

    def test_edge_types_drive_point_counts(self, closed_box_config):
        faces = generate_box_faces(closed_box_config)
        num_tabs = closed_box_config.num_tabs
        for face in faces:
            expected = 1
            for shape, direction in zip(face.spec.shapes, face.spec.directions):
                expected += 2 if shape in (EdgeType.FLAT_IN, EdgeType.FLAT_OUT) else 4 * num_tabs[direction] + 3
            assert len(face.polyline) == expected
