"""Keplerian orbit propagation.

Each planet carries a mean anomaly that advances linearly with time.  Every
tick we solve Kepler's equation ``M = E - e*sin(E)`` for the eccentric anomaly
with a fixed six-step Newton-Raphson iteration, place the body on its ellipse
(focus at the origin, orbit in the x/z plane) and then orient the ellipse in
3D with the classic node -> inclination -> periapsis rotations.

The fixed iteration count has no convergence check.  It is accurate to well
under 1e-6 for the eccentricities the generator produces, but it is a known
precision bound near ``MAX_ECCENTRICITY`` rather than a general solver.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..constants import (
    HIGH_ECCENTRICITY,
    KEPLER_ITERATIONS,
    MAX_ECCENTRICITY,
    ORBIT_PATH_SEGMENTS,
    TAU,
)
from .system import PlanetDescription

Vec3 = tuple[float, float, float]


def clamp_eccentricity(eccentricity: float) -> float:
    return max(0.0, min(MAX_ECCENTRICITY, eccentricity))


def wrap_angle(angle: float) -> float:
    """Wrap an angle into [0, 2pi)."""
    return ((angle % TAU) + TAU) % TAU


@dataclass(frozen=True)
class OrbitalElements:
    """Orbit shape, orientation and mean motion for one body."""

    semi_major_axis: float
    eccentricity: float = 0.0
    inclination: float = 0.0
    ascending_node: float = 0.0
    arg_periapsis: float = 0.0
    mean_motion: float = 0.0

    @classmethod
    def from_planet(cls, planet: PlanetDescription) -> OrbitalElements:
        return cls(
            semi_major_axis=planet.orbit_radius,
            eccentricity=clamp_eccentricity(planet.eccentricity),
            inclination=planet.inclination,
            ascending_node=planet.ascending_node,
            arg_periapsis=planet.arg_periapsis,
            mean_motion=planet.orbit_speed,
        )


@dataclass
class OrbitalState:
    """Mutable per-planet propagation state."""

    mean_anomaly: float = 0.0
    spin_angle: float = 0.0


# ---------------------------------------------------------------------------
# Kepler's equation
# ---------------------------------------------------------------------------


def solve_kepler(
    mean_anomaly: float, eccentricity: float, iterations: int = KEPLER_ITERATIONS
) -> float:
    """Eccentric anomaly for ``mean_anomaly`` via fixed-count Newton-Raphson."""
    e = clamp_eccentricity(eccentricity)
    m = mean_anomaly
    ecc_anomaly = m if e < HIGH_ECCENTRICITY else math.pi
    for _ in range(iterations):
        f = ecc_anomaly - e * math.sin(ecc_anomaly) - m
        f_prime = 1 - e * math.cos(ecc_anomaly)
        ecc_anomaly -= f / f_prime
    return ecc_anomaly


def semi_minor_axis(semi_major_axis: float, eccentricity: float) -> float:
    return semi_major_axis * math.sqrt(max(0.0, 1 - eccentricity * eccentricity))


def orbital_plane_position(
    semi_major_axis: float, eccentricity: float, ecc_anomaly: float
) -> Vec3:
    """Position on the ellipse with the focus (star) at the origin."""
    e = clamp_eccentricity(eccentricity)
    b = semi_minor_axis(semi_major_axis, e)
    x = semi_major_axis * (math.cos(ecc_anomaly) - e)
    z = b * math.sin(ecc_anomaly)
    return (x, 0.0, z)


# ---------------------------------------------------------------------------
# Orientation
# ---------------------------------------------------------------------------


def rotate_x(vec: Vec3, angle: float) -> Vec3:
    x, y, z = vec
    c, s = math.cos(angle), math.sin(angle)
    return (x, y * c - z * s, y * s + z * c)


def rotate_y(vec: Vec3, angle: float) -> Vec3:
    x, y, z = vec
    c, s = math.cos(angle), math.sin(angle)
    return (x * c + z * s, y, -x * s + z * c)


_ROTATIONS = {"x": rotate_x, "y": rotate_y}


def orientation_steps(elements: OrbitalElements) -> list[tuple[str, float]]:
    """Rotations orienting the orbital plane, in composition order.

    Node about the normal (y), inclination about the reference axis (x),
    then argument of periapsis about the normal again.
    """
    return [
        ("y", elements.ascending_node),
        ("x", elements.inclination),
        ("y", elements.arg_periapsis),
    ]


def orient(position: Vec3, elements: OrbitalElements) -> Vec3:
    """Apply the composed orientation ``R_node * R_incl * R_peri`` to a point.

    The innermost rotation (periapsis) acts on the vector first.
    """
    for axis, angle in reversed(orientation_steps(elements)):
        position = _ROTATIONS[axis](position, angle)
    return position


# ---------------------------------------------------------------------------
# Propagation
# ---------------------------------------------------------------------------


def advance(state: OrbitalState, elements: OrbitalElements, delta_time: float) -> Vec3:
    """Advance the mean anomaly and return the in-plane position."""
    state.mean_anomaly = wrap_angle(state.mean_anomaly + elements.mean_motion * delta_time)
    e = clamp_eccentricity(elements.eccentricity)
    ecc_anomaly = solve_kepler(state.mean_anomaly, e)
    return orbital_plane_position(elements.semi_major_axis, e, ecc_anomaly)


def spin(state: OrbitalState, rotation_speed: float, delta_time: float) -> float:
    """Advance self-rotation; unrelated to orbital position."""
    state.spin_angle += rotation_speed * delta_time
    return state.spin_angle


def orbit_path(
    elements: OrbitalElements, segments: int = ORBIT_PATH_SEGMENTS
) -> list[Vec3]:
    """Closed loop of oriented points along the ellipse, sampled by E."""
    points = []
    for i in range(segments + 1):
        ecc_anomaly = i / segments * TAU
        local = orbital_plane_position(
            elements.semi_major_axis, elements.eccentricity, ecc_anomaly
        )
        points.append(orient(local, elements))
    return points


class PlanetOrbit:
    """A planet's static elements plus its evolving orbital state."""

    def __init__(self, planet: PlanetDescription) -> None:
        self.planet = planet
        self.elements = OrbitalElements.from_planet(planet)
        self.state = OrbitalState(mean_anomaly=wrap_angle(planet.initial_anomaly))
        self.local_position: Vec3 = (0.0, 0.0, 0.0)
        self.position: Vec3 = (0.0, 0.0, 0.0)
        self._path: list[Vec3] | None = None
        self.update(0.0)

    @property
    def spin_angle(self) -> float:
        return self.state.spin_angle

    @property
    def path(self) -> list[Vec3]:
        if self._path is None:
            self._path = orbit_path(self.elements)
        return self._path

    def update(self, dt: float) -> Vec3:
        self.local_position = advance(self.state, self.elements, dt)
        self.position = orient(self.local_position, self.elements)
        spin(self.state, self.planet.rotation_speed, dt)
        return self.position
