"""Tests for domain models to verify they work correctly."""

import math

import pytest

from platekit.domain import (
    PAGE_SIZES,
    CanvasState,
    Layer,
    LayerType,
    PageSize,
    Point,
    Project,
    ProjectMetadata,
    RenderTransform,
    VectorPath,
    get_page_size_info,
)


def _square(path_id: str = "sq", size: float = 10.0) -> VectorPath:
    return VectorPath.from_coords(path_id, [(0, 0), (size, 0), (size, size), (0, size)])


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        assert Point(100.0, 200.0).to_tuple() == (100.0, 200.0)

    def test_point_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p1 = Point(1.5, -2.0)
        data = p1.to_dict()
        assert data == {"x": 1.5, "y": -2.0}
        assert Point.from_dict(data) == p1

    def test_point_is_hashable(self) -> None:
        """Test points can be used in sets."""
        assert len({Point(1, 2), Point(1, 2), Point(2, 1)}) == 2


class TestVectorPath:
    """Tests for VectorPath class."""

    def test_from_coords(self) -> None:
        """Test building a path from coordinate pairs."""
        path = _square()
        assert path.id == "sq"
        assert path.closed
        assert path.points[2] == Point(10.0, 10.0)
        assert path.holes == ()

    def test_with_points_keeps_identity(self) -> None:
        """Test with_points returns a new path with the same id and flags."""
        path = VectorPath.from_coords("open", [(0, 0), (1, 1), (2, 0)], closed=False)
        moved = path.with_points([Point(5, 5), Point(6, 6), Point(7, 5)])
        assert moved is not path
        assert moved.id == "open"
        assert not moved.closed
        assert path.points[0] == Point(0, 0)

    def test_is_polygon(self) -> None:
        """Test polygon check requires a closed path with 3+ points."""
        assert _square().is_polygon()
        assert not VectorPath.from_coords("line", [(0, 0), (1, 1)]).is_polygon()
        assert not VectorPath.from_coords("open", [(0, 0), (1, 1), (2, 0)], closed=False).is_polygon()

    def test_serialization_with_holes(self) -> None:
        """Test serialization keeps holes and omits them when absent."""
        hole = VectorPath.from_coords("h", [(2, 2), (4, 2), (4, 4)])
        path = VectorPath(id="outer", points=_square().points, holes=(hole,))
        data = path.to_dict()
        assert "holes" in data
        assert "holes" not in _square().to_dict()

        restored = VectorPath.from_dict(data)
        assert restored == path


class TestPageSize:
    """Tests for page size lookup."""

    def test_known_sizes(self) -> None:
        """Test sheet dimensions are in points."""
        assert (PAGE_SIZES[PageSize.US_LETTER].width, PAGE_SIZES[PageSize.US_LETTER].height) == (612, 792)
        assert get_page_size_info("a4").height == 842
        assert get_page_size_info(PageSize.A5).width == 420

    def test_unknown_size(self) -> None:
        """Test unknown page sizes are rejected."""
        with pytest.raises(ValueError):
            get_page_size_info("tabloid")


class TestLayer:
    """Tests for Layer class."""

    def test_is_cut(self) -> None:
        """Test layer type check."""
        assert Layer(id="c", name="Cut", type=LayerType.CUT).is_cut()
        assert not Layer(id="p", name="Print", type=LayerType.PRINT).is_cut()

    def test_serialization_uses_project_keys(self) -> None:
        """Test layer fields are written with project file names."""
        layer = Layer(
            id="c",
            name="Cut",
            type=LayerType.CUT,
            vector_paths=[_square()],
            offset=-1.5,
            point_reduction=2.0,
            scale_x=0.5,
            z_index=1.1,
            image_width=10,
            image_height=10,
        )
        data = layer.to_dict()
        assert data["pointReduction"] == 2.0
        assert data["scaleX"] == 0.5
        assert data["zIndex"] == 1.1
        assert len(data["vectorPaths"]) == 1

        restored = Layer.from_dict(data)
        assert restored == layer

    def test_print_layer_has_no_paths(self) -> None:
        """Test print layers do not serialize contours."""
        data = Layer(id="p", name="Print", type=LayerType.PRINT).to_dict()
        assert "vectorPaths" not in data
        assert Layer.from_dict(data).vector_paths == []

    def test_image_and_trace_parameters(self) -> None:
        """Test embedded image data and tracer parameters survive serialization."""
        layer = Layer(
            id="p",
            name="Print",
            type=LayerType.PRINT,
            image_data="aGVsbG8=",
            trace_parameters={"alpha_threshold": 90},
        )
        data = layer.to_dict()
        assert data["imageData"] == "aGVsbG8="
        assert data["traceParameters"] == {"alpha_threshold": 90}
        assert Layer.from_dict(data) == layer

    def test_optional_fields_are_omitted(self) -> None:
        """Test layers without an image or tracer parameters do not write the keys."""
        data = Layer(id="c", name="Cut", type=LayerType.CUT).to_dict()
        assert "imageData" not in data
        assert "traceParameters" not in data


class TestRenderTransform:
    """Tests for RenderTransform class."""

    def test_identity(self) -> None:
        """Test identity leaves points alone."""
        t = RenderTransform.identity()
        assert t.is_identity()
        assert t.apply(Point(3, 4)) == Point(3, 4)

    def test_then_applies_in_order(self) -> None:
        """Test composition applies the receiver first."""
        t = RenderTransform.scaling(2, 2).then(RenderTransform.translation(10, 0))
        assert t.apply(Point(1, 1)) == Point(12, 2)

    def test_rotation_about_center(self) -> None:
        """Test a quarter turn around a centre point."""
        t = RenderTransform.rotation(90, 5, 5)
        p = t.apply(Point(10, 5))
        assert math.isclose(p.x, 5, abs_tol=1e-9)
        assert math.isclose(p.y, 10, abs_tol=1e-9)

    def test_from_layer(self) -> None:
        """Test pixel space is stretched onto the layer box and positioned."""
        layer = Layer(
            id="c",
            name="Cut",
            type=LayerType.CUT,
            x=100,
            y=50,
            width=50,
            height=25,
            image_width=100,
            image_height=50,
        )
        t = RenderTransform.from_layer(layer)
        assert t.apply(Point(0, 0)) == Point(100, 50)
        assert t.apply(Point(100, 50)) == Point(150, 75)

    def test_from_layer_without_image_size(self) -> None:
        """Test layers without native size map pixels one to one."""
        layer = Layer(id="c", name="Cut", type=LayerType.CUT)
        assert RenderTransform.from_layer(layer).is_identity()


class TestProject:
    """Tests for Project class."""

    def _project(self) -> Project:
        return Project(
            metadata=ProjectMetadata(name="sheet", page_size=PageSize.A4),
            layers=[
                Layer(id="p", name="Print", type=LayerType.PRINT),
                Layer(id="c2", name="Top", type=LayerType.CUT, z_index=2),
                Layer(id="c1", name="Bottom", type=LayerType.CUT, z_index=1),
                Layer(id="h", name="Hidden", type=LayerType.CUT, visible=False),
            ],
            canvas=CanvasState(zoom=2.0, selected_layer_id="c1"),
        )

    def test_get_layer(self) -> None:
        """Test layer lookup by id."""
        project = self._project()
        assert project.get_layer("c1").name == "Bottom"
        assert project.get_layer("missing") is None

    def test_get_cut_layers(self) -> None:
        """Test only visible cut layers are returned, in stacking order."""
        assert [layer.id for layer in self._project().get_cut_layers()] == ["c1", "c2"]

    def test_get_print_layers(self) -> None:
        """Test only visible print layers are returned."""
        assert [layer.id for layer in self._project().get_print_layers()] == ["p"]

    def test_replace_layer_returns_new_project(self) -> None:
        """Test replacing a layer leaves the original project unchanged."""
        project = self._project()
        updated = project.replace_layer(Layer(id="c1", name="Renamed", type=LayerType.CUT))
        assert updated.get_layer("c1").name == "Renamed"
        assert project.get_layer("c1").name == "Bottom"

    def test_round_trip(self) -> None:
        """Test project serialization and deserialization."""
        project = self._project()
        data = project.to_dict()
        assert data["metadata"]["pageSize"] == "a4"
        assert data["canvasState"]["selectedLayerId"] == "c1"

        restored = Project.from_dict(data)
        assert restored.metadata == project.metadata
        assert restored.canvas == project.canvas
        assert restored.layers == project.layers
