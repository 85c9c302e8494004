"""
Frame Assembly
==============
Combines the Kinematic Model, the Projection Engine and the Bond/Annotation
rules into the single per-frame render payload handed to the drawing surface.

``get_frame`` is a pure function of ``t``, the display options and the camera:
calling it twice with the same arguments returns equal frames.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from sn2simulation.model.annotations import Annotation, AnnotationKind, annotations_at, partial_charge
from sn2simulation.model.bonds import BondRole, BondState, bond_states
from sn2simulation.model.kinematics import AtomRole, atoms_at, clamp_t
from sn2simulation.model.options import DisplayOptions
from sn2simulation.model.projection import DEFAULT_CAMERA, Camera, ProjectedAtom, depth_order, project_atom


class DrawKind(StrEnum):
    BOND = "bond"
    ATOM = "atom"


@dataclass(frozen=True)
class DrawItem:
    """One entry of the painter's-algorithm draw list."""
    kind: DrawKind
    key: str  # AtomRole or BondRole value
    z: float


@dataclass(frozen=True)
class Frame:
    t: float
    atoms: tuple[ProjectedAtom, ...]  # farthest first
    bonds: tuple[BondState, ...]
    annotations: tuple[Annotation, ...]
    draw_order: tuple[DrawItem, ...]

    def atom(self, role: AtomRole) -> ProjectedAtom:
        for atom in self.atoms:
            if atom.role == role:
                return atom
        raise KeyError(role)

    def bond(self, role: BondRole) -> BondState:
        for bond in self.bonds:
            if bond.role == role:
                return bond
        raise KeyError(role)

    def annotation(self, kind: AnnotationKind) -> Annotation:
        for annotation in self.annotations:
            if annotation.kind == kind:
                return annotation
        raise KeyError(kind)


def build_draw_order(
    atoms: tuple[ProjectedAtom, ...],
    bonds: tuple[BondState, ...],
) -> tuple[DrawItem, ...]:
    """
    Merge visible bonds and atoms into one farthest-first list.

    A bond sits at the depth of its farther endpoint; bonds are listed before
    atoms so that, at equal depth, the atom covers the bond end.
    """
    z_by_role = {atom.role: atom.z for atom in atoms}
    bond_items = [
        DrawItem(DrawKind.BOND, bond.role.value, min(z_by_role[bond.atom_a], z_by_role[bond.atom_b]))
        for bond in bonds
        if bond.visible
    ]
    atom_items = [DrawItem(DrawKind.ATOM, atom.role.value, atom.z) for atom in atoms]
    return tuple(depth_order(bond_items + atom_items))


def get_frame(
    t: float,
    options: DisplayOptions = DisplayOptions(),
    camera: Camera = DEFAULT_CAMERA,
) -> Frame:
    """Render payload for normalized progress ``t`` (clamped into [0, 1])."""
    t = clamp_t(t)
    atoms = atoms_at(t)
    atoms_by_role = {atom.role: atom for atom in atoms}

    projected = tuple(
        depth_order(project_atom(atom, camera, charge=partial_charge(atom.role, t)) for atom in atoms)
    )
    projected_by_role = {atom.role: atom for atom in projected}

    bonds = bond_states(t, atoms_by_role, options)
    return Frame(
        t=t,
        atoms=projected,
        bonds=bonds,
        annotations=annotations_at(t, projected_by_role, options),
        draw_order=build_draw_order(projected, bonds),
    )
