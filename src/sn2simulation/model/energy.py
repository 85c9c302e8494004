"""
Reaction Energy Profile
=======================
Closed-form Gibbs free-energy curve along the reaction coordinate and the
immutable Energy Sample the diagram and the read-out are drawn from.

The displayed "current energy" is always a lookup into the sample at the
rounded progress, never a fresh evaluation, so the read-out and the cursor
dot sit exactly on the drawn curve.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np
from matplotlib.figure import Figure

if TYPE_CHECKING:
    import numpy.typing as npt
    from matplotlib.axes import Axes

SAMPLE_COUNT: int = 101  # one sample per integer progress value 0..100


# ==========================================
# ABSTRACT CLASS FOR ENERGY PROFILES
# ==========================================
class EnergyProfile(ABC):
    """
    Abstract base class for reaction energy profiles.
    """
    NAME: str = "Energy Profile"

    @abstractmethod
    def get_energy(
        self,
        t: float | npt.NDArray[np.float64],
    ) -> float | npt.NDArray[np.float64]:
        """
        Get the free energy at a given reaction progress.

        Args:
            t: Normalized reaction progress in [0, 1].

        Returns:
            Gibbs free energy in kJ/mol relative to the reactants.
        """
        pass

    def plot(self, ax: Optional[Axes] = None) -> Figure:
        """
        Plot the profile onto ``ax`` (or onto a new figure) and return the figure.
        """
        progress = np.linspace(0.0, 100.0, 501)
        energies = self.get_energy(progress / 100.0)

        if ax is None:
            fig = Figure(figsize=(7, 5), constrained_layout=True)
            ax = fig.add_subplot()
        else:
            fig = ax.figure

        ax.plot(progress, energies, color="#8b5cf6", lw=2)

        ax.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
        ax.minorticks_on()
        ax.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)

        ax.set_title(f"{self.NAME} Energy Profile")
        ax.set_xlabel("Reaction progress (%)")
        ax.set_ylabel("Gibbs Free Energy (kJ/mol)")

        ax.set_xlim(-5, 105)
        return fig


# ==========================================
# SN2 PROFILE
# ==========================================
class SN2EnergyProfile(EnergyProfile):
    """
    Single-barrier profile of a concerted SN2 step.

    E(t) = Barrier(t) + dG(t), where dG is a sigmoid from 0 to the reaction
    free energy and Barrier is a Gaussian bump whose height is chosen so that
    E(0.5) equals the activation energy exactly.
    """
    NAME = "SN2, Concerted"

    def __init__(
        self,
        activation_energy: float = 110.0,
        reaction_free_energy: float = -20.0,
        steepness: float = 10.0,
        width: float = 5.0,
    ) -> None:
        if steepness <= 0.0 or width <= 0.0:
            raise ValueError("Steepness and width of the energy profile must be positive.")
        self.activation_energy = activation_energy
        self.reaction_free_energy = reaction_free_energy
        self.steepness = steepness
        self.width = width

    def thermodynamic_term(
        self,
        t: float | npt.NDArray[np.float64],
    ) -> float | npt.NDArray[np.float64]:
        """Sigmoid from 0 (reactants) to the reaction free energy (products), centred at t = 0.5."""
        return self.reaction_free_energy / (1.0 + np.exp(-self.steepness * (t - 0.5)))

    @property
    def barrier_height(self) -> float:
        return self.activation_energy - float(self.thermodynamic_term(0.5))

    def barrier_term(
        self,
        t: float | npt.NDArray[np.float64],
    ) -> float | npt.NDArray[np.float64]:
        return self.barrier_height * np.exp(-((self.width * (t - 0.5)) ** 2))

    def get_energy(
        self,
        t: float | npt.NDArray[np.float64],
    ) -> float | npt.NDArray[np.float64]:
        return self.barrier_term(t) + self.thermodynamic_term(t)


# ==========================================
# ENERGY SAMPLE
# ==========================================
def progress_index(progress: float) -> int:
    """Round half up (as the scrubber does) and clamp into 0..100."""
    return min(SAMPLE_COUNT - 1, max(0, math.floor(float(progress) + 0.5)))


@dataclass(frozen=True)
class EnergySample:
    """
    Ordered (progress, energy) pairs for progress = 0..100.
    Immutable after generation.
    """
    progress: tuple[int, ...]
    energies: tuple[float, ...]

    @classmethod
    def from_profile(cls, profile: EnergyProfile) -> EnergySample:
        progress = np.arange(SAMPLE_COUNT)
        energies = profile.get_energy(progress / 100.0)
        return cls(
            progress=tuple(int(p) for p in progress),
            energies=tuple(float(e) for e in energies),
        )

    def __len__(self) -> int:
        return len(self.progress)

    def energy_at(self, progress: float) -> float:
        return self.energies[progress_index(progress)]

    def series(self) -> tuple[tuple[int, float], ...]:
        return tuple(zip(self.progress, self.energies))


DEFAULT_PROFILE = SN2EnergyProfile()
ENERGY_SAMPLE = EnergySample.from_profile(DEFAULT_PROFILE)


def get_energy_at(progress: float) -> float:
    """Energy (kJ/mol) displayed at ``progress`` (0..100)."""
    return ENERGY_SAMPLE.energy_at(progress)


def get_energy_series() -> tuple[tuple[int, float], ...]:
    """The static curve: 101 (progress, energy) pairs."""
    return ENERGY_SAMPLE.series()
