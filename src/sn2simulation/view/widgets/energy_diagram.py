import logging
from typing import Optional

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QHBoxLayout, QLabel, QVBoxLayout, QWidget

from sn2simulation.model.energy import DEFAULT_PROFILE, get_energy_at, get_energy_series

logger = logging.getLogger(__name__)

Y_RANGE: tuple[float, float] = (-30.0, 140.0)
HIGH_ENERGY_THRESHOLD: float = 100.0  # read-out turns red above this

CURVE_COLOR = "#8b5cf6"
CURSOR_COLOR = "#3b82f6"
ACTIVATION_COLOR = "#ef4444"
FREE_ENERGY_COLOR = "#10b981"


class EnergyDiagramWidget(QWidget):
    """
    Reaction-coordinate diagram with a cursor following the current progress.

    The curve itself is static (sampled once from the energy model); only the
    cursor and the numeric read-out change per frame.
    """
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._current_energy: float = get_energy_at(0)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        # --- Header ---
        header = QHBoxLayout()
        title = QLabel("<b>Rxn Coordinate Diagram</b>")
        header.addWidget(title)
        header.addStretch()
        self.lbl_energy = QLabel()
        self.lbl_energy.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        header.addWidget(self.lbl_energy)
        layout.addLayout(header)

        # --- Plot ---
        self.plot_widget = pg.PlotWidget()
        self.plot_widget.setBackground('w')
        self.plot_widget.showGrid(x=False, y=True, alpha=0.3)
        self.plot_widget.setLabel('bottom', 'Reaction Coordinate', color='black')
        self.plot_widget.setLabel('left', 'Potential Energy (kJ/mol)', color='black')
        self.plot_widget.getAxis('bottom').setPen('k')
        self.plot_widget.getAxis('left').setPen('k')
        self.plot_widget.getAxis('bottom').setTextPen('k')
        self.plot_widget.getAxis('left').setTextPen('k')
        self.plot_widget.getAxis('bottom').setTicks([[(0, 'Reactants'), (100, 'Products')]])
        self.plot_widget.getAxis('left').setTicks([[(v, str(v)) for v in (-30, 0, 50, 100, 140)]])

        # Static view: no panning, zooming or context menu
        self.plot_widget.setMouseEnabled(x=False, y=False)
        self.plot_widget.setMenuEnabled(False)
        self.plot_widget.hideButtons()
        self.plot_widget.setXRange(0, 100, padding=0.02)
        self.plot_widget.setYRange(*Y_RANGE, padding=0)
        layout.addWidget(self.plot_widget)

        self._build_curve()
        self._build_reference_lines()
        self._build_energy_arrows()
        self._build_transition_state_marker()

        self.cursor = pg.ScatterPlotItem(
            size=16,
            brush=pg.mkBrush(CURSOR_COLOR),
            pen=pg.mkPen('w', width=3),
        )
        self.cursor.setZValue(10)
        self.plot_widget.addItem(self.cursor)

        self.set_progress(0.0)

    # --------------------------------------------------------------------------
    # Static decorations
    # --------------------------------------------------------------------------

    def _build_curve(self) -> None:
        series = get_energy_series()
        x = np.array([progress for progress, _ in series], dtype=float)
        y = np.array([energy for _, energy in series], dtype=float)
        self.curve = self.plot_widget.plot(
            x, y,
            pen=pg.mkPen(CURVE_COLOR, width=4),
            fillLevel=Y_RANGE[0],
            brush=pg.mkBrush(139, 92, 246, 40),
        )

    def _build_reference_lines(self) -> None:
        dashed = dict(width=1, style=Qt.PenStyle.DashLine)
        levels = (
            (DEFAULT_PROFILE.activation_energy, pg.mkPen('#cccccc', **dashed)),
            (0.0, pg.mkPen('#999999', **dashed)),
            (DEFAULT_PROFILE.reaction_free_energy, pg.mkPen('#cccccc', **dashed)),
        )
        for level, pen in levels:
            self.plot_widget.addItem(pg.InfiniteLine(pos=level, angle=0, pen=pen))

        # Transition state position
        self.plot_widget.addItem(pg.InfiniteLine(
            pos=50, angle=90, pen=pg.mkPen('#e2e8f0', width=1, style=Qt.PenStyle.DashLine)
        ))

    def _add_energy_arrow(self, x: float, y_from: float, y_to: float, color: str, text: str) -> None:
        """Double-headed vertical arrow from ``y_from`` to ``y_to`` with a label."""
        line = pg.PlotDataItem([x, x], [y_from, y_to], pen=pg.mkPen(color, width=2))
        self.plot_widget.addItem(line)

        top, bottom = max(y_from, y_to), min(y_from, y_to)
        for y_tip, angle in ((top, 90), (bottom, -90)):
            head = pg.ArrowItem(angle=angle, headLen=10, tipAngle=40, pen=None, brush=color)
            head.setPos(x, y_tip)
            self.plot_widget.addItem(head)

        label = pg.TextItem(text, color=color, anchor=(0, 0.5))
        font = QFont()
        font.setBold(True)
        label.setFont(font)
        label.setPos(x + 1.5, (y_from + y_to) / 2)
        self.plot_widget.addItem(label)

    def _build_energy_arrows(self) -> None:
        ea = DEFAULT_PROFILE.activation_energy
        dg = DEFAULT_PROFILE.reaction_free_energy
        self._add_energy_arrow(15, 0.0, ea, ACTIVATION_COLOR, f"Ea = {ea:.0f} kJ/mol")
        self._add_energy_arrow(85, 0.0, dg, FREE_ENERGY_COLOR, f"ΔG = {dg:.0f} kJ/mol")

    def _build_transition_state_marker(self) -> None:
        dagger = pg.TextItem("‡", color=ACTIVATION_COLOR, anchor=(0.5, 1.0))
        font = QFont()
        font.setPointSize(16)
        font.setBold(True)
        dagger.setFont(font)
        dagger.setPos(50, DEFAULT_PROFILE.activation_energy + 4)
        self.plot_widget.addItem(dagger)

        title = pg.TextItem("Transition State", color='#475569', anchor=(0.5, 1.0))
        title.setPos(50, DEFAULT_PROFILE.activation_energy + 20)
        self.plot_widget.addItem(title)

    # --------------------------------------------------------------------------
    # Dynamic state
    # --------------------------------------------------------------------------

    @property
    def current_energy(self) -> float:
        return self._current_energy

    def set_progress(self, progress: float) -> None:
        """Move the cursor to ``progress`` (0..100) and refresh the read-out."""
        energy = get_energy_at(progress)
        self._current_energy = energy
        self.cursor.setData([progress], [energy])

        color = '#dc2626' if energy > HIGH_ENERGY_THRESHOLD else '#4f46e5'
        self.lbl_energy.setText(
            f"Energy: <span style='color:{color}; font-weight:bold'>{energy:.1f} kJ/mol</span>"
        )
