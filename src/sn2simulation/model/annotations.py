"""
Annotation Rule Engine
======================
Visibility, opacity and anchor geometry of the transient teaching overlays:
curved electron-flow arrows, the transition-state bracket, the orbital lobes,
the transition-state badge and the partial-charge markers on atoms.

Visibility windows and fade formulas are exact contracts. Anchor geometry is
derived from the already projected atoms so the overlays follow the molecule.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Mapping

from sn2simulation.model.bonds import PARTIAL_PHASE
from sn2simulation.model.geometry_primitives import Point2D
from sn2simulation.model.kinematics import AtomRole
from sn2simulation.model.options import DisplayOptions
from sn2simulation.model.projection import ProjectedAtom

ATTACK_ARROW_UNTIL: float = 0.45
LEAVING_ARROW_WINDOW: tuple[float, float] = (0.3, 0.7)
LEAVING_ARROW_FADE: float = 0.05
BRACKET_HALF_WIDTH: float = 0.1
BADGE_WINDOW: tuple[float, float] = (0.45, 0.55)

NEGATIVE_CHARGE: str = "−"
PARTIAL_NEGATIVE: str = "δ⁻"
PARTIAL_POSITIVE: str = "δ⁺"

BRACKET_TEXT: tuple[str, str, str] = ("Pentavalent Carbon", "[Nu ••• C ••• Br]⁻", "‡")
BADGE_TEXT: str = "Transition State ‡"


class AnnotationKind(StrEnum):
    ATTACK_ARROW = "attack_arrow"
    LEAVING_ARROW = "leaving_arrow"
    TRANSITION_STATE_BRACKET = "transition_state_bracket"
    ORBITAL_LOBES = "orbital_lobes"
    TRANSITION_STATE_BADGE = "transition_state_badge"


class AnnotationLayer(StrEnum):
    UNDERLAY = "underlay"  # below bonds and atoms
    OVERLAY = "overlay"  # above the molecule
    HUD = "hud"  # fixed to the viewport


ANNOTATION_LAYERS: dict[AnnotationKind, AnnotationLayer] = {
    AnnotationKind.ORBITAL_LOBES: AnnotationLayer.UNDERLAY,
    AnnotationKind.TRANSITION_STATE_BRACKET: AnnotationLayer.UNDERLAY,
    AnnotationKind.ATTACK_ARROW: AnnotationLayer.OVERLAY,
    AnnotationKind.LEAVING_ARROW: AnnotationLayer.OVERLAY,
    AnnotationKind.TRANSITION_STATE_BADGE: AnnotationLayer.HUD,
}


@dataclass(frozen=True)
class Annotation:
    """
    One overlay at a given ``t``.

    ``anchors`` depends on the kind:
      - arrows: (start, control, end) of a quadratic curve
      - bracket: (top-left, bottom-right) corners
      - orbital lobes: (left centre, right centre, (rx, ry))
      - badge: empty, positioned by the view
    """
    kind: AnnotationKind
    visible: bool
    opacity: float
    layer: AnnotationLayer
    anchors: tuple[Point2D, ...] = ()
    text: tuple[str, ...] = ()


# ------------------------------------------------------------------------------
# Visibility rules: (visible, opacity)
# ------------------------------------------------------------------------------
def attack_arrow_visibility(t: float, options: DisplayOptions) -> tuple[bool, float]:
    if not options.show_arrows or t > ATTACK_ARROW_UNTIL:
        return False, 0.0
    return True, 1.0 - t / ATTACK_ARROW_UNTIL


def leaving_arrow_visibility(t: float, options: DisplayOptions) -> tuple[bool, float]:
    start, end = LEAVING_ARROW_WINDOW
    if not options.show_arrows or not (start < t < end):
        return False, 0.0
    opacity = 1.0
    if t < start + LEAVING_ARROW_FADE:
        opacity = (t - start) / LEAVING_ARROW_FADE
    if t > end - LEAVING_ARROW_FADE:
        opacity = (end - t) / LEAVING_ARROW_FADE
    return True, opacity


def bracket_visibility(t: float) -> tuple[bool, float]:
    distance = abs(t - 0.5)
    if distance > BRACKET_HALF_WIDTH:
        return False, 0.0
    # rounding absorbs float noise at the window edges (abs(0.4 - 0.5) < 0.1)
    opacity = round(1.0 - distance * 10.0, 9)
    return opacity > 0.0, max(0.0, opacity)


def orbital_visibility(t: float, options: DisplayOptions) -> tuple[bool, float]:
    if not options.show_distances:
        return False, 0.0
    opacity = max(0.0, 1.0 - 4.0 * abs(t - 0.5))
    return opacity > 0.0, opacity


def badge_visibility(t: float) -> tuple[bool, float]:
    low, high = BADGE_WINDOW
    visible = low < t < high
    return visible, 1.0 if visible else 0.0


def partial_charge(role: AtomRole, t: float) -> str:
    """Charge marker drawn next to an atom; empty string when none."""
    low, high = PARTIAL_PHASE
    match role:
        case AtomRole.NUCLEOPHILE:
            if t < low:
                return NEGATIVE_CHARGE
            return PARTIAL_NEGATIVE if t <= high else ""
        case AtomRole.LEAVING_GROUP:
            if t < low:
                return ""
            return PARTIAL_NEGATIVE if t <= high else NEGATIVE_CHARGE
        case AtomRole.CENTRAL:
            return PARTIAL_POSITIVE if low <= t <= high else ""
        case _:
            return ""


# ------------------------------------------------------------------------------
# Anchor geometry
# ------------------------------------------------------------------------------
def _attack_arrow_anchors(nu: ProjectedAtom, c: ProjectedAtom) -> tuple[Point2D, ...]:
    start = nu.center.offset(dy=-25.0)
    control = Point2D((nu.draw_x + c.draw_x) / 2, nu.draw_y - 70.0)
    end = c.center.offset(dx=-15.0)
    return start, control, end


def _leaving_arrow_anchors(c: ProjectedAtom, lg: ProjectedAtom) -> tuple[Point2D, ...]:
    start = c.center.midpoint(lg.center)
    end = lg.center.offset(dx=lg.draw_radius * 0.6, dy=-lg.draw_radius * 0.9)
    control = Point2D(start.x + (end.x - start.x) / 2, start.y - 70.0)
    return start, control, end


def _bracket_anchors(nu: ProjectedAtom, c: ProjectedAtom, lg: ProjectedAtom) -> tuple[Point2D, ...]:
    padding_x, padding_y = 25.0, 110.0
    return (
        Point2D(nu.draw_x - padding_x, c.draw_y - padding_y),
        Point2D(lg.draw_x + padding_x, c.draw_y + padding_y),
    )


def _orbital_anchors(c: ProjectedAtom) -> tuple[Point2D, ...]:
    return (
        c.center.offset(dx=-45.0),
        c.center.offset(dx=45.0),
        Point2D(35.0 * 0.8, 22.0 * 0.8),
    )


def annotations_at(
    t: float,
    atoms: Mapping[AtomRole, ProjectedAtom],
    options: DisplayOptions = DisplayOptions(),
) -> tuple[Annotation, ...]:
    """Every annotation kind, visible or not, in drawing order within its layer."""
    nu = atoms[AtomRole.NUCLEOPHILE]
    c = atoms[AtomRole.CENTRAL]
    lg = atoms[AtomRole.LEAVING_GROUP]

    def build(
        kind: AnnotationKind,
        visibility: tuple[bool, float],
        anchors: tuple[Point2D, ...],
        text: tuple[str, ...] = (),
    ) -> Annotation:
        visible, opacity = visibility
        return Annotation(
            kind=kind,
            visible=visible,
            opacity=opacity,
            layer=ANNOTATION_LAYERS[kind],
            anchors=anchors if visible else (),
            text=text if visible else (),
        )

    return (
        build(AnnotationKind.ORBITAL_LOBES, orbital_visibility(t, options), _orbital_anchors(c)),
        build(AnnotationKind.TRANSITION_STATE_BRACKET, bracket_visibility(t),
              _bracket_anchors(nu, c, lg), BRACKET_TEXT),
        build(AnnotationKind.ATTACK_ARROW, attack_arrow_visibility(t, options),
              _attack_arrow_anchors(nu, c), ("Attack",)),
        build(AnnotationKind.LEAVING_ARROW, leaving_arrow_visibility(t, options),
              _leaving_arrow_anchors(c, lg), ("Leaving",)),
        build(AnnotationKind.TRANSITION_STATE_BADGE, badge_visibility(t), (), (BADGE_TEXT,)),
    )
