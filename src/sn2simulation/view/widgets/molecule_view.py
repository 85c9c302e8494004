"""Molecule canvas: paints one ``Frame`` with QPainter (painter's algorithm)."""
from __future__ import annotations

import logging
import math
from typing import Optional

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QFont, QLinearGradient, QPainter, QPainterPath, QPen, QPolygonF, QRadialGradient
from PySide6.QtWidgets import QSizePolicy, QWidget

from sn2simulation.model.annotations import Annotation, AnnotationKind, AnnotationLayer
from sn2simulation.model.bonds import BondLabel, BondRole, BondState, LabelKind
from sn2simulation.model.frame import DrawKind, Frame
from sn2simulation.model.geometry_primitives import Point2D
from sn2simulation.model.kinematics import AtomRole
from sn2simulation.model.projection import ProjectedAtom

logger = logging.getLogger(__name__)

# Visible part of the scene (x, y, width, height) in scene pixels
SCENE_VIEWPORT = QRectF(25.0, 25.0, 550.0, 350.0)

# (highlight, shade) of the radial gradient per element symbol
ATOM_GRADIENTS: dict[str, tuple[str, str]] = {
    "C": ("#64748b", "#1e293b"),
    "Nu": ("#f0abfc", "#c026d3"),
    "Br": ("#ef4444", "#7f1d1d"),
    "H": ("#f8fafc", "#cbd5e1"),
}

CHARGE_COLORS: dict[AtomRole, str] = {
    AtomRole.NUCLEOPHILE: "#c026d3",
    AtomRole.LEAVING_GROUP: "#991b1b",
    AtomRole.CENTRAL: "#3b82f6",
}

LABEL_COLORS: dict[BondRole, str] = {
    BondRole.CENTRAL_NUCLEOPHILE: "#a21caf",
    BondRole.CENTRAL_LEAVING_GROUP: "#7f1d1d",
}

LEGEND: tuple[tuple[str, str], ...] = (
    ("C", "#334155"),
    ("H", "#e2e8f0"),
    ("Nu", "#d946ef"),
    ("Br", "#b91c1c"),
)


def _qpoint(point: Point2D) -> QPointF:
    return QPointF(point.x, point.y)


def _font(pixel_size: float, bold: bool = True) -> QFont:
    font = QFont()
    font.setPixelSize(max(1, int(round(pixel_size))))
    font.setBold(bold)
    return font


def _draw_text(
    painter: QPainter,
    center: QPointF,
    text: str,
    pixel_size: float,
    color: str,
    bold: bool = True,
    alignment: Qt.AlignmentFlag = Qt.AlignmentFlag.AlignCenter,
) -> None:
    """Draw ``text`` inside a box centred on ``center``."""
    painter.setFont(_font(pixel_size, bold))
    painter.setPen(QColor(color))
    box = QRectF(center.x() - 150.0, center.y() - pixel_size, 300.0, 2.0 * pixel_size)
    painter.drawText(box, alignment, text)


class MoleculeView(QWidget):
    """
    Draws the SN2 complex for the current frame.

    Layers, back to front: orbital lobes and the TS bracket, bonds and atoms
    in depth order, bond labels, electron-flow arrows, HUD (badge, t, legend).
    """
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._frame: Optional[Frame] = None
        self.setMinimumSize(360, 240)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    # --------------------------------------------------------------------------
    # Public API
    # --------------------------------------------------------------------------

    def set_frame(self, frame: Frame) -> None:
        self._frame = frame
        self.update()

    def frame(self) -> Optional[Frame]:
        return self._frame

    # --------------------------------------------------------------------------
    # Painting
    # --------------------------------------------------------------------------

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            self._draw_background(painter)
            if self._frame is None:
                return

            painter.save()
            self._apply_scene_transform(painter)
            self._draw_scene(painter, self._frame)
            painter.restore()

            self._draw_legend(painter)
        finally:
            painter.end()

    def _apply_scene_transform(self, painter: QPainter) -> None:
        """Fit the scene viewport into the widget, keeping the aspect ratio."""
        scale = min(self.width() / SCENE_VIEWPORT.width(), self.height() / SCENE_VIEWPORT.height())
        painter.translate(
            (self.width() - SCENE_VIEWPORT.width() * scale) / 2,
            (self.height() - SCENE_VIEWPORT.height() * scale) / 2,
        )
        painter.scale(scale, scale)
        painter.translate(-SCENE_VIEWPORT.x(), -SCENE_VIEWPORT.y())

    def _draw_background(self, painter: QPainter) -> None:
        gradient = QLinearGradient(0.0, 0.0, float(self.width()), float(self.height()))
        gradient.setColorAt(0.0, QColor("#f8fafc"))
        gradient.setColorAt(0.5, QColor("#ffffff"))
        gradient.setColorAt(1.0, QColor("#f1f5f9"))
        painter.fillRect(self.rect(), QBrush(gradient))

    def _draw_scene(self, painter: QPainter, frame: Frame) -> None:
        for annotation in frame.annotations:
            if annotation.visible and annotation.layer == AnnotationLayer.UNDERLAY:
                self._draw_annotation(painter, frame, annotation)

        for item in frame.draw_order:
            if item.kind == DrawKind.BOND:
                self._draw_bond(painter, frame, frame.bond(BondRole(item.key)))
            else:
                self._draw_atom(painter, frame.atom(AtomRole(item.key)))

        for bond in frame.bonds:
            if bond.visible and bond.label is not None:
                self._draw_bond_label(painter, frame, bond, bond.label)

        for annotation in frame.annotations:
            if annotation.visible and annotation.layer != AnnotationLayer.UNDERLAY:
                self._draw_annotation(painter, frame, annotation)

        _draw_text(
            painter, QPointF(SCENE_VIEWPORT.right() - 60.0, SCENE_VIEWPORT.top() + 18.0),
            f"t = {frame.t:.2f}", 13, "#4f46e5",
        )

    # --- Bonds & Atoms ---

    def _draw_bond(self, painter: QPainter, frame: Frame, bond: BondState) -> None:
        start = frame.atom(bond.atom_a).center
        end = frame.atom(bond.atom_b).center

        pen = QPen(QColor(bond.color), bond.width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        if bond.dash:
            # Qt dash lengths are in units of the pen width
            pen.setDashPattern([length / bond.width for length in bond.dash])

        painter.save()
        painter.setOpacity(bond.opacity)
        painter.setPen(pen)
        painter.drawLine(_qpoint(start), _qpoint(end))
        painter.restore()

    def _draw_atom(self, painter: QPainter, atom: ProjectedAtom) -> None:
        center = _qpoint(atom.center)
        r = atom.draw_radius
        highlight, shade = ATOM_GRADIENTS.get(atom.symbol, (atom.color, atom.color))

        gradient = QRadialGradient(center, r)
        gradient.setColorAt(0.0, QColor(highlight))
        gradient.setColorAt(1.0, QColor(shade))

        painter.save()
        painter.setOpacity(atom.opacity)
        painter.setPen(QPen(QColor(0, 0, 0, 25), 1.0))
        painter.setBrush(QBrush(gradient))
        painter.drawEllipse(center, r, r)

        # Specular highlight
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(255, 255, 255, 77))
        painter.drawEllipse(center + QPointF(-0.3 * r, -0.3 * r), 0.4 * r, 0.4 * r)

        text_color = "#475569" if atom.symbol == "H" else "#ffffff"
        _draw_text(painter, center, atom.symbol, r * 0.9, text_color)

        if atom.charge:
            painter.setOpacity(atom.opacity * (0.8 if atom.role == AtomRole.CENTRAL else 1.0))
            _draw_text(
                painter, center + QPointF(r * 1.15, -r * 0.6), atom.charge, r * 0.8,
                CHARGE_COLORS.get(atom.role, "#0f172a"),
            )
        painter.restore()

    def _draw_bond_label(self, painter: QPainter, frame: Frame, bond: BondState, label: BondLabel) -> None:
        mid = frame.atom(bond.atom_a).center.midpoint(frame.atom(bond.atom_b).center)
        color = LABEL_COLORS.get(bond.role, "#334155")

        painter.save()
        if label.kind == LabelKind.DISTANCE:
            _draw_text(painter, QPointF(mid.x, mid.y + 24.0), label.text, 12, color, bold=False)
        else:
            pill = QRectF(mid.x - 30.0, mid.y + 50.0 - 14.0, 60.0, 18.0)
            painter.setPen(QPen(QColor("#ffffff"), 2.0))
            painter.setBrush(QColor(255, 255, 255, 230))
            painter.drawRoundedRect(pill, 9.0, 9.0)
            _draw_text(painter, pill.center(), label.text, 11, color)
        painter.restore()

    # --- Annotations ---

    def _draw_annotation(self, painter: QPainter, frame: Frame, annotation: Annotation) -> None:
        painter.save()
        painter.setOpacity(max(0.0, min(1.0, annotation.opacity)))
        match annotation.kind:
            case AnnotationKind.ATTACK_ARROW:
                self._draw_curved_arrow(painter, annotation, "#3b82f6", mark_start=True)
            case AnnotationKind.LEAVING_ARROW:
                self._draw_curved_arrow(painter, annotation, "#ef4444", mark_start=False)
            case AnnotationKind.TRANSITION_STATE_BRACKET:
                self._draw_bracket(painter, annotation)
            case AnnotationKind.ORBITAL_LOBES:
                self._draw_orbitals(painter, annotation)
            case AnnotationKind.TRANSITION_STATE_BADGE:
                self._draw_badge(painter, annotation)
        painter.restore()

    def _draw_curved_arrow(self, painter: QPainter, annotation: Annotation, color: str, mark_start: bool) -> None:
        start, control, end = (_qpoint(p) for p in annotation.anchors)

        path = QPainterPath(start)
        path.quadTo(control, end)
        pen = QPen(QColor(color), 4.0)
        pen.setDashPattern([6.0 / 4.0, 3.0 / 4.0])
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPath(path)

        # Arrow head along the curve tangent at the end point
        dx, dy = end.x() - control.x(), end.y() - control.y()
        length = math.hypot(dx, dy) or 1.0
        ux, uy = dx / length, dy / length
        head = QPolygonF([
            end + QPointF(ux * 4.0, uy * 4.0),
            end + QPointF(-ux * 10.0 - uy * 6.0, -uy * 10.0 + ux * 6.0),
            end + QPointF(-ux * 10.0 + uy * 6.0, -uy * 10.0 - ux * 6.0),
        ])
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(color))
        painter.drawPolygon(head)

        if mark_start:
            painter.drawEllipse(start, 4.0, 4.0)
        if annotation.text:
            _draw_text(painter, control + QPointF(0.0, -12.0), annotation.text[0], 14, color)

    def _draw_bracket(self, painter: QPainter, annotation: Annotation) -> None:
        top_left, bottom_right = annotation.anchors
        min_x, min_y, max_x, max_y = top_left.x, top_left.y, bottom_right.x, bottom_right.y

        painter.setPen(QPen(QColor("#64748b"), 3.0))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPolyline(QPolygonF([
            QPointF(min_x + 20.0, min_y), QPointF(min_x, min_y),
            QPointF(min_x, max_y), QPointF(min_x + 20.0, max_y),
        ]))
        painter.drawPolyline(QPolygonF([
            QPointF(max_x - 20.0, min_y), QPointF(max_x, min_y),
            QPointF(max_x, max_y), QPointF(max_x - 20.0, max_y),
        ]))

        title, formula, dagger = annotation.text
        _draw_text(painter, QPointF(max_x + 16.0, min_y + 4.0), dagger, 32, "#ef4444")
        center_x = (min_x + max_x) / 2
        _draw_text(painter, QPointF(center_x, max_y + 24.0), title, 16, "#475569")
        _draw_text(painter, QPointF(center_x, max_y + 44.0), formula, 14, "#64748b", bold=False)

    def _draw_orbitals(self, painter: QPainter, annotation: Annotation) -> None:
        left, right, extent = annotation.anchors
        lobes = (
            (left, QColor(147, 197, 253, 128), "#60a5fa"),  # bonding with Nu
            (right, QColor(252, 165, 165, 128), "#f87171"),  # anti-bonding towards Br
        )
        for center, fill, stroke in lobes:
            painter.setPen(QPen(QColor(stroke), 1.5))
            painter.setBrush(fill)
            painter.drawEllipse(_qpoint(center), extent.x, extent.y)

    def _draw_badge(self, painter: QPainter, annotation: Annotation) -> None:
        pill = QRectF(SCENE_VIEWPORT.center().x() - 85.0, SCENE_VIEWPORT.top() + 8.0, 170.0, 28.0)
        painter.setPen(QPen(QColor("#fde68a"), 1.0))
        painter.setBrush(QColor(254, 243, 199, 230))
        painter.drawRoundedRect(pill, 14.0, 14.0)
        _draw_text(painter, pill.center(), annotation.text[0], 14, "#92400e")

    # --- HUD ---

    def _draw_legend(self, painter: QPainter) -> None:
        box = QRectF(10.0, self.height() - 58.0, 120.0, 48.0)
        painter.setPen(QPen(QColor("#f1f5f9"), 1.0))
        painter.setBrush(QColor(255, 255, 255, 230))
        painter.drawRoundedRect(box, 6.0, 6.0)

        painter.setFont(_font(10, bold=False))
        for i, (symbol, color) in enumerate(LEGEND):
            col, row = i % 2, i // 2
            x = box.left() + 10.0 + col * 55.0
            y = box.top() + 16.0 + row * 18.0
            painter.setPen(QPen(QColor("#cbd5e1"), 1.0))
            painter.setBrush(QColor(color))
            painter.drawEllipse(QPointF(x + 5.0, y), 5.0, 5.0)
            painter.setPen(QColor("#334155"))
            painter.drawText(QPointF(x + 14.0, y + 4.0), symbol)
