"""
Projection Engine
=================
Perspective-scaled orthographic projection of scene atoms onto the drawing
surface, plus the depth ordering used for painter's-algorithm compositing.

Camera model: ``scale = focal / (focal - z)``. Positive z is towards the
viewer, so atoms with larger z are drawn bigger and more opaque, and are
composited last.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, TypeVar

from sn2simulation.model.geometry_primitives import Point2D, Vector
from sn2simulation.model.kinematics import Atom, AtomRole

MIN_OPACITY: float = 0.3
MAX_OPACITY: float = 1.0


@dataclass(frozen=True)
class Camera:
    """Fixed camera: focal length and the 2-D origin the scene is centred on."""
    focal_length: float = 600.0
    origin_x: float = 300.0
    origin_y: float = 160.0

    def __post_init__(self) -> None:
        if self.focal_length <= 0.0:
            raise ValueError(f"Camera focal length must be positive, got {self.focal_length}.")

    @property
    def origin(self) -> Point2D:
        return Point2D(self.origin_x, self.origin_y)

    def scale_at(self, z: float) -> float:
        depth = self.focal_length - z
        if depth <= 0.0:
            raise ValueError(f"Point at z={z} lies behind the camera (focal length {self.focal_length}).")
        return self.focal_length / depth

    def project(self, position: Vector) -> tuple[Point2D, float]:
        """Return the draw position and the perspective scale of ``position``."""
        scale = self.scale_at(position.z)
        return Point2D(self.origin_x + position.x * scale, self.origin_y + position.y * scale), scale


DEFAULT_CAMERA = Camera()


@dataclass(frozen=True)
class ProjectedAtom:
    """Screen-space draw primitive for one atom."""
    role: AtomRole
    symbol: str
    color: str
    draw_x: float
    draw_y: float
    draw_radius: float
    opacity: float
    z: float
    scale: float
    charge: str = ""

    @property
    def center(self) -> Point2D:
        return Point2D(self.draw_x, self.draw_y)


def depth_opacity(scale: float) -> float:
    """Far atoms fade, but never below ``MIN_OPACITY``."""
    return max(MIN_OPACITY, min(MAX_OPACITY, 0.4 + 0.6 * scale))


def project_atom(atom: Atom, camera: Camera = DEFAULT_CAMERA, charge: str = "") -> ProjectedAtom:
    center, scale = camera.project(atom.position)
    return ProjectedAtom(
        role=atom.role,
        symbol=atom.symbol,
        color=atom.color,
        draw_x=center.x,
        draw_y=center.y,
        draw_radius=atom.radius * scale,
        opacity=depth_opacity(scale),
        z=atom.z,
        scale=scale,
        charge=charge,
    )


class _HasDepth(Protocol):
    @property
    def z(self) -> float: ...


DepthItem = TypeVar("DepthItem", bound=_HasDepth)


def depth_order(items: Iterable[DepthItem]) -> list[DepthItem]:
    """
    Farthest-first compositing order, keyed on raw z only.

    Sign convention: +z points towards the viewer (``scale = f / (f - z)``
    grows with z), so farthest-first is ascending z and nearer items are
    painted over farther ones. The sort is stable: items at equal depth keep their input order.
    """
    return sorted(items, key=lambda item: item.z)
