"""Display toggles passed explicitly into the rule engines."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DisplayOptions:
    show_arrows: bool = True
    show_distances: bool = False  # distances and orbital lobes
