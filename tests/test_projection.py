from dataclasses import dataclass

import pytest

from sn2simulation.model.geometry_primitives import Point2D, Vector
from sn2simulation.model.kinematics import AtomRole, make_atom
from sn2simulation.model.projection import (
    DEFAULT_CAMERA,
    Camera,
    depth_opacity,
    depth_order,
    project_atom,
)


def test_origin_projects_to_scene_centre():
    point, scale = DEFAULT_CAMERA.project(Vector(0.0, 0.0, 0.0))
    assert point == Point2D(300.0, 160.0)
    assert scale == 1.0


def test_nearer_points_are_larger():
    assert DEFAULT_CAMERA.scale_at(100.0) > 1.0 > DEFAULT_CAMERA.scale_at(-100.0)
    assert DEFAULT_CAMERA.scale_at(300.0) == pytest.approx(2.0)


def test_projection_scales_offsets_from_origin():
    point, scale = DEFAULT_CAMERA.project(Vector(60.0, -30.0, 300.0))
    assert scale == pytest.approx(2.0)
    assert point.x == pytest.approx(420.0)
    assert point.y == pytest.approx(100.0)


def test_camera_rejects_non_positive_focal_length():
    with pytest.raises(ValueError):
        Camera(focal_length=0.0)


def test_point_behind_camera_is_rejected():
    with pytest.raises(ValueError):
        DEFAULT_CAMERA.scale_at(600.0)


@pytest.mark.parametrize("scale, opacity", [(0.0, 0.4), (0.5, 0.7), (1.0, 1.0), (3.0, 1.0)])
def test_depth_opacity_is_clamped(scale, opacity):
    assert depth_opacity(scale) == pytest.approx(opacity)
    assert 0.3 <= depth_opacity(scale) <= 1.0


def test_project_atom_carries_identity_and_depth():
    atom = make_atom(AtomRole.SUBSTITUENT_1, 0.0)
    projected = project_atom(atom, charge="")
    assert projected.role == AtomRole.SUBSTITUENT_1
    assert projected.symbol == "H"
    assert projected.z == pytest.approx(65.0)
    assert projected.draw_radius == pytest.approx(24.0 * projected.scale)
    assert projected.draw_radius > 24.0


@dataclass(frozen=True)
class _Item:
    name: str
    z: float


def test_depth_order_is_farthest_first_and_stable():
    items = [_Item("a", 10.0), _Item("b", -5.0), _Item("c", 10.0), _Item("d", 0.0)]
    assert [item.name for item in depth_order(items)] == ["b", "d", "a", "c"]
