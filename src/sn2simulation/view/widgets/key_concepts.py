from typing import Optional

from PySide6.QtWidgets import QGroupBox, QLabel, QVBoxLayout, QWidget

KEY_CONCEPTS: tuple[tuple[str, str], ...] = (
    (
        "Walden Inversion",
        "Backside attack forces the three substituents to flip like an umbrella in the wind, "
        "inverting the configuration of the carbon centre.",
    ),
    (
        "Steric Hindrance",
        "Bulky groups block the backside approach, which is why SN2 is fastest for methyl "
        "and primary substrates.",
    ),
    (
        "Concerted Mechanism",
        "The new bond forms while the old one breaks in a single step, passing through one "
        "pentavalent transition state without any intermediate.",
    ),
)


class KeyConceptsPanel(QGroupBox):
    """Static explanatory text next to the animation."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__("Key Concepts", parent)
        layout = QVBoxLayout(self)
        for title, body in KEY_CONCEPTS:
            label = QLabel(f"<b style='color:#4f46e5'>{title}</b><br/>{body}")
            label.setWordWrap(True)
            layout.addWidget(label)
        layout.addStretch()
