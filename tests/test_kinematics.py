import math

import pytest

from sn2simulation.model.geometry_primitives import Vector
from sn2simulation.model.kinematics import (
    AtomRole,
    SUBSTITUENT_RING_RADIUS,
    SUBSTITUENT_ROLES,
    atoms_at,
    atoms_by_role,
    bond_distance,
    clamp_t,
    leaving_group_x,
    nucleophile_x,
    piecewise_linear,
    substituent_position,
    substituent_x,
)


@pytest.mark.parametrize("t, expected", [(0.0, -200.0), (0.25, -148.0), (0.5, -96.0), (0.75, -78.0), (1.0, -60.0)])
def test_nucleophile_path(t, expected):
    assert nucleophile_x(t) == pytest.approx(expected)


@pytest.mark.parametrize("t, expected", [(0.0, 75.0), (0.5, 108.0), (1.0, 200.0)])
def test_leaving_group_path(t, expected):
    assert leaving_group_x(t) == pytest.approx(expected)


def test_piecewise_linear_is_continuous_at_midpoint():
    below = piecewise_linear(0.5 - 1e-9, 0.0, 10.0, -4.0)
    above = piecewise_linear(0.5 + 1e-9, 0.0, 10.0, -4.0)
    assert below == pytest.approx(10.0, abs=1e-6)
    assert above == pytest.approx(10.0, abs=1e-6)


def test_out_of_range_t_is_clamped():
    assert clamp_t(-0.5) == 0.0
    assert clamp_t(7.0) == 1.0
    assert nucleophile_x(-1.0) == nucleophile_x(0.0)
    assert leaving_group_x(2.0) == leaving_group_x(1.0)


def test_umbrella_passes_through_the_carbon_plane():
    assert substituent_x(0.0) == pytest.approx(-20.0)
    assert substituent_x(0.5) == pytest.approx(0.0)
    assert substituent_x(1.0) == pytest.approx(20.0)


@pytest.mark.parametrize("t", [0.0, 0.3, 0.5, 0.9, 1.0])
@pytest.mark.parametrize("index", [0, 1, 2])
def test_substituents_stay_on_the_ring(index, t):
    position = substituent_position(index, t)
    assert math.hypot(position.y, position.z) == pytest.approx(SUBSTITUENT_RING_RADIUS)


def test_first_substituent_faces_the_viewer_at_start():
    position = substituent_position(0, 0.0)
    assert position.y == pytest.approx(0.0, abs=1e-9)
    assert position.z == pytest.approx(65.0)


def test_substituents_spin_about_the_reaction_axis():
    start = substituent_position(0, 0.0)
    end = substituent_position(0, 1.0)
    angle_start = math.atan2(start.z, start.y)
    angle_end = math.atan2(end.z, end.y)
    assert angle_end - angle_start == pytest.approx(1.5)


def test_rotate_x_keeps_the_axis_component():
    v = Vector(3.0, 1.0, 0.0).rotate_x(math.pi / 2)
    assert v.x == 3.0
    assert v.y == pytest.approx(0.0, abs=1e-12)
    assert v.z == pytest.approx(1.0)


def test_atoms_at_returns_six_atoms_in_role_order():
    atoms = atoms_at(0.4)
    assert [atom.role for atom in atoms] == list(AtomRole)
    central = atoms[0]
    assert central.position == Vector(0.0, 0.0, 0.0)
    assert central.symbol == "C"
    assert {atoms_by_role(0.4)[role].symbol for role in SUBSTITUENT_ROLES} == {"H"}


def test_reacting_atoms_stay_on_the_axis():
    atoms = atoms_by_role(0.37)
    for role in (AtomRole.NUCLEOPHILE, AtomRole.LEAVING_GROUP):
        assert atoms[role].y == 0.0
        assert atoms[role].z == 0.0


def test_bond_distances_in_angstrom():
    start = atoms_by_role(0.0)
    assert bond_distance(start, AtomRole.NUCLEOPHILE) == pytest.approx(5.0)
    assert bond_distance(start, AtomRole.LEAVING_GROUP) == pytest.approx(1.875)

    ts = atoms_by_role(0.5)
    assert bond_distance(ts, AtomRole.NUCLEOPHILE) == pytest.approx(2.4)
    assert bond_distance(ts, AtomRole.LEAVING_GROUP) == pytest.approx(2.7)
