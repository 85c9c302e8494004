"""
Kinematic Model
===============
Maps the normalized reaction progress ``t`` (0 = reactants, 1 = products)
to the 3-D geometry of the SN2 complex Nu⁻ + CH3Br -> Nu-CH3 + Br⁻.

Why is this file needed?
------------------------
1. Determinism: Every atom position is a pure function of ``t`` and the atom
   role. Nothing is stored between frames, so scrubbing and replay always
   produce identical geometry.
2. Geometry: It encodes the backside attack along the x (reaction) axis and
   the umbrella flip of the three hydrogens (Walden inversion).

Scene units: 40 units = 1 Å. The central carbon sits at the origin, the
nucleophile approaches from -x, the leaving group departs towards +x.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Mapping

from sn2simulation.model.geometry_primitives import Vector

SCENE_UNITS_PER_ANGSTROM: float = 40.0

# x-coordinates at t = 0, 0.5, 1
NUCLEOPHILE_PATH: tuple[float, float, float] = (-200.0, -96.0, -60.0)  # 5 Å -> 2.4 Å -> 1.5 Å
LEAVING_GROUP_PATH: tuple[float, float, float] = (75.0, 108.0, 200.0)  # 1.9 Å -> 2.7 Å -> 5 Å

SUBSTITUENT_X_RANGE: tuple[float, float] = (-20.0, 20.0)
SUBSTITUENT_RING_RADIUS: float = 65.0
SUBSTITUENT_BASE_ANGLES_DEG: tuple[float, float, float] = (90.0, 210.0, 330.0)
SUBSTITUENT_SPIN_RAD: float = 1.5  # extra rotation about the reaction axis over the full reaction


# ------------------------------------------------------------------------------
# Enums & Data Structures
# ------------------------------------------------------------------------------
class AtomRole(StrEnum):
    CENTRAL = "central"
    NUCLEOPHILE = "nucleophile"
    LEAVING_GROUP = "leaving_group"
    SUBSTITUENT_1 = "substituent_1"
    SUBSTITUENT_2 = "substituent_2"
    SUBSTITUENT_3 = "substituent_3"


SUBSTITUENT_ROLES: tuple[AtomRole, AtomRole, AtomRole] = (
    AtomRole.SUBSTITUENT_1,
    AtomRole.SUBSTITUENT_2,
    AtomRole.SUBSTITUENT_3,
)


@dataclass(frozen=True)
class AtomSpec:
    """Fixed visual identity of an atom role."""
    symbol: str
    radius: float
    color: str


ATOM_SPECS: dict[AtomRole, AtomSpec] = {
    AtomRole.CENTRAL: AtomSpec(symbol="C", radius=34.0, color="#334155"),
    AtomRole.NUCLEOPHILE: AtomSpec(symbol="Nu", radius=30.0, color="#d946ef"),
    AtomRole.LEAVING_GROUP: AtomSpec(symbol="Br", radius=32.0, color="#991b1b"),
    AtomRole.SUBSTITUENT_1: AtomSpec(symbol="H", radius=24.0, color="#f8fafc"),
    AtomRole.SUBSTITUENT_2: AtomSpec(symbol="H", radius=24.0, color="#f8fafc"),
    AtomRole.SUBSTITUENT_3: AtomSpec(symbol="H", radius=24.0, color="#f8fafc"),
}


@dataclass(frozen=True)
class Atom:
    """
    One atom of the complex at a given ``t``.
    Recomputed every frame; never mutated.
    """
    role: AtomRole
    position: Vector
    radius: float
    color: str
    symbol: str

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    @property
    def z(self) -> float:
        return self.position.z


# ------------------------------------------------------------------------------
# Pure functions of t
# ------------------------------------------------------------------------------
def clamp_t(t: float) -> float:
    """Clamp a normalized progress value into [0, 1]."""
    return min(1.0, max(0.0, float(t)))


def piecewise_linear(t: float, start: float, mid: float, end: float) -> float:
    """
    Two affine segments joined at t = 0.5.

    Both branches evaluate to ``mid`` at t = 0.5, so the path has no jump.
    """
    t = clamp_t(t)
    if t <= 0.5:
        slope = (mid - start) / 0.5
        return start + slope * t
    slope = (end - mid) / 0.5
    return mid + slope * (t - 0.5)


def nucleophile_x(t: float) -> float:
    return piecewise_linear(t, *NUCLEOPHILE_PATH)


def leaving_group_x(t: float) -> float:
    return piecewise_linear(t, *LEAVING_GROUP_PATH)


def substituent_x(t: float) -> float:
    """Linear inversion of the hydrogen umbrella: pointing left -> planar -> pointing right."""
    x_start, x_end = SUBSTITUENT_X_RANGE
    return x_start + (x_end - x_start) * clamp_t(t)


def substituent_position(index: int, t: float) -> Vector:
    """
    Position of the ``index``-th hydrogen (0, 1, 2).

    The hydrogens ride a ring of fixed radius in the plane perpendicular to the
    reaction axis, spinning by ``SUBSTITUENT_SPIN_RAD * t`` while the ring
    slides through the carbon.
    """
    t = clamp_t(t)
    base_angle = math.radians(SUBSTITUENT_BASE_ANGLES_DEG[index])
    angle = base_angle + SUBSTITUENT_SPIN_RAD * t
    return Vector(substituent_x(t), SUBSTITUENT_RING_RADIUS, 0.0).rotate_x(angle)


def atom_position(role: AtomRole, t: float) -> Vector:
    match role:
        case AtomRole.CENTRAL:
            return Vector(0.0, 0.0, 0.0)
        case AtomRole.NUCLEOPHILE:
            return Vector(nucleophile_x(t), 0.0, 0.0)
        case AtomRole.LEAVING_GROUP:
            return Vector(leaving_group_x(t), 0.0, 0.0)
        case _:
            return substituent_position(SUBSTITUENT_ROLES.index(role), t)


def make_atom(role: AtomRole, t: float) -> Atom:
    spec = ATOM_SPECS[role]
    return Atom(
        role=role,
        position=atom_position(role, t),
        radius=spec.radius,
        color=spec.color,
        symbol=spec.symbol,
    )


def atoms_at(t: float) -> tuple[Atom, ...]:
    """All six atoms at progress ``t``, in role declaration order."""
    return tuple(make_atom(role, t) for role in AtomRole)


def atoms_by_role(t: float) -> dict[AtomRole, Atom]:
    return {atom.role: atom for atom in atoms_at(t)}


def interatomic_distance(a: Atom, b: Atom) -> float:
    """Distance between two atom centres in Å."""
    return a.position.distance_to(b.position) / SCENE_UNITS_PER_ANGSTROM


def bond_distance(atoms: Mapping[AtomRole, Atom], other: AtomRole) -> float:
    """Distance (Å) from the central carbon to ``other``."""
    return interatomic_distance(atoms[AtomRole.CENTRAL], atoms[other])
