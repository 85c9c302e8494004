"""
Bond Rule Engine
================
Derives, from ``t`` and the display toggles, which bonds are drawn and how.

Stroke weight and dash pattern are a visual proxy for bond order:
solid = full bond, medium dashes = partial bond near the transition state,
thin faint dashes = a bond just starting to form or about to break.
The thresholds below are exact; tests assert on them.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Mapping, Optional

from sn2simulation.model.kinematics import Atom, AtomRole, SUBSTITUENT_ROLES, bond_distance
from sn2simulation.model.options import DisplayOptions

BOND_ORDER_TEXT: str = "BO ≈ 0.5"
BOND_ORDER_PROXIMITY_THRESHOLD: float = 0.8

NUCLEOPHILE_APPEARS_AFTER: float = 0.1
NUCLEOPHILE_DISTANCE_AFTER: float = 0.15
LEAVING_GROUP_GONE_FROM: float = 0.85
PARTIAL_PHASE: tuple[float, float] = (0.2, 0.8)


# ------------------------------------------------------------------------------
# Enums & Data Structures
# ------------------------------------------------------------------------------
class BondRole(StrEnum):
    CENTRAL_NUCLEOPHILE = "C-Nu"
    CENTRAL_LEAVING_GROUP = "C-LG"
    CENTRAL_SUBSTITUENT_1 = "C-H1"
    CENTRAL_SUBSTITUENT_2 = "C-H2"
    CENTRAL_SUBSTITUENT_3 = "C-H3"


BOND_ENDPOINTS: dict[BondRole, tuple[AtomRole, AtomRole]] = {
    BondRole.CENTRAL_NUCLEOPHILE: (AtomRole.CENTRAL, AtomRole.NUCLEOPHILE),
    BondRole.CENTRAL_LEAVING_GROUP: (AtomRole.CENTRAL, AtomRole.LEAVING_GROUP),
    BondRole.CENTRAL_SUBSTITUENT_1: (AtomRole.CENTRAL, AtomRole.SUBSTITUENT_1),
    BondRole.CENTRAL_SUBSTITUENT_2: (AtomRole.CENTRAL, AtomRole.SUBSTITUENT_2),
    BondRole.CENTRAL_SUBSTITUENT_3: (AtomRole.CENTRAL, AtomRole.SUBSTITUENT_3),
}

BOND_COLORS: dict[BondRole, str] = {
    BondRole.CENTRAL_NUCLEOPHILE: "#d946ef",
    BondRole.CENTRAL_LEAVING_GROUP: "#991b1b",
    BondRole.CENTRAL_SUBSTITUENT_1: "#94a3b8",
    BondRole.CENTRAL_SUBSTITUENT_2: "#94a3b8",
    BondRole.CENTRAL_SUBSTITUENT_3: "#94a3b8",
}


class BondPhase(StrEnum):
    ABSENT = "absent"
    FORMING = "forming"
    PARTIAL = "partial"
    FULL = "full"
    BREAKING = "breaking"


@dataclass(frozen=True)
class BondStyle:
    width: float
    dash: tuple[float, ...]  # empty = solid
    opacity: float


FULL_STYLE = BondStyle(width=8.0, dash=(), opacity=1.0)
PARTIAL_STYLE = BondStyle(width=6.0, dash=(10.0, 6.0), opacity=0.8)
FAINT_STYLE = BondStyle(width=2.0, dash=(4.0, 6.0), opacity=0.3)
SUBSTITUENT_STYLE = BondStyle(width=6.0, dash=(), opacity=1.0)
HIDDEN_STYLE = BondStyle(width=0.0, dash=(), opacity=0.0)

PHASE_STYLES: dict[BondPhase, BondStyle] = {
    BondPhase.ABSENT: HIDDEN_STYLE,
    BondPhase.FORMING: FAINT_STYLE,
    BondPhase.PARTIAL: PARTIAL_STYLE,
    BondPhase.FULL: FULL_STYLE,
    BondPhase.BREAKING: FAINT_STYLE,
}


class LabelKind(StrEnum):
    DISTANCE = "distance"
    BOND_ORDER = "bond_order"


@dataclass(frozen=True)
class BondLabel:
    kind: LabelKind
    text: str
    value: Optional[float] = None  # Å for distance labels


@dataclass(frozen=True)
class BondState:
    """Render state of one bond at a given ``t``."""
    role: BondRole
    atom_a: AtomRole
    atom_b: AtomRole
    visible: bool
    phase: BondPhase
    width: float
    dash: tuple[float, ...]
    opacity: float
    color: str
    label: Optional[BondLabel] = None


# ------------------------------------------------------------------------------
# Rules
# ------------------------------------------------------------------------------
def ts_proximity(t: float) -> float:
    """1.0 at the transition state, falling linearly to 0 at |t - 0.5| = 0.25."""
    return 1.0 - min(1.0, abs(t - 0.5) * 4.0)


def in_partial_phase(t: float) -> bool:
    low, high = PARTIAL_PHASE
    return low <= t <= high


def nucleophile_bond_phase(t: float) -> BondPhase:
    if t <= NUCLEOPHILE_APPEARS_AFTER:
        return BondPhase.ABSENT
    if in_partial_phase(t):
        return BondPhase.PARTIAL
    if t < PARTIAL_PHASE[0]:
        return BondPhase.FORMING
    return BondPhase.FULL


def leaving_group_bond_phase(t: float) -> BondPhase:
    if t >= LEAVING_GROUP_GONE_FROM:
        return BondPhase.ABSENT
    if in_partial_phase(t):
        return BondPhase.PARTIAL
    if t > PARTIAL_PHASE[1]:
        return BondPhase.BREAKING
    return BondPhase.FULL


def _bond_order_label(t: float) -> Optional[BondLabel]:
    if ts_proximity(t) > BOND_ORDER_PROXIMITY_THRESHOLD:
        return BondLabel(kind=LabelKind.BOND_ORDER, text=BOND_ORDER_TEXT)
    return None


def _distance_label(distance: float) -> BondLabel:
    return BondLabel(kind=LabelKind.DISTANCE, text=f"{distance:.1f} Å", value=distance)


def _reacting_bond(
    role: BondRole,
    phase: BondPhase,
    label: Optional[BondLabel],
) -> BondState:
    atom_a, atom_b = BOND_ENDPOINTS[role]
    style = PHASE_STYLES[phase]
    visible = phase is not BondPhase.ABSENT
    return BondState(
        role=role,
        atom_a=atom_a,
        atom_b=atom_b,
        visible=visible,
        phase=phase,
        width=style.width,
        dash=style.dash,
        opacity=style.opacity,
        color=BOND_COLORS[role],
        label=label if visible else None,
    )


def nucleophile_bond(t: float, atoms: Mapping[AtomRole, Atom], options: DisplayOptions) -> BondState:
    label = None
    if options.show_distances:
        # distance label only once the nucleophile is close enough to matter
        if t > NUCLEOPHILE_DISTANCE_AFTER:
            label = _distance_label(bond_distance(atoms, AtomRole.NUCLEOPHILE))
    else:
        label = _bond_order_label(t)
    return _reacting_bond(BondRole.CENTRAL_NUCLEOPHILE, nucleophile_bond_phase(t), label)


def leaving_group_bond(t: float, atoms: Mapping[AtomRole, Atom], options: DisplayOptions) -> BondState:
    if options.show_distances:
        label = _distance_label(bond_distance(atoms, AtomRole.LEAVING_GROUP))
    else:
        label = _bond_order_label(t)
    return _reacting_bond(BondRole.CENTRAL_LEAVING_GROUP, leaving_group_bond_phase(t), label)


def substituent_bond(role: BondRole) -> BondState:
    atom_a, atom_b = BOND_ENDPOINTS[role]
    return BondState(
        role=role,
        atom_a=atom_a,
        atom_b=atom_b,
        visible=True,
        phase=BondPhase.FULL,
        width=SUBSTITUENT_STYLE.width,
        dash=SUBSTITUENT_STYLE.dash,
        opacity=SUBSTITUENT_STYLE.opacity,
        color=BOND_COLORS[role],
    )


def bond_states(
    t: float,
    atoms: Mapping[AtomRole, Atom],
    options: DisplayOptions = DisplayOptions(),
) -> tuple[BondState, ...]:
    """All five bonds at ``t``: the three C-H bonds, then C-Nu and C-LG."""
    substituent_bonds = tuple(
        substituent_bond(role)
        for role in BondRole
        if BOND_ENDPOINTS[role][1] in SUBSTITUENT_ROLES
    )
    return substituent_bonds + (
        nucleophile_bond(t, atoms, options),
        leaving_group_bond(t, atoms, options),
    )
