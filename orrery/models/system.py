"""Procedural star system generation for Seeded Orrery."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..constants import (
    AXIAL_TILT_RANGE,
    ECCENTRICITY_RANGE,
    FIRST_ORBIT_STAR_FACTOR,
    INCLINATION_RANGE,
    MAX_ECCENTRICITY,
    ORBIT_GAP_RADIUS_FACTOR,
    ORBIT_GAP_RANGE,
    ORBIT_SPEED_SCALE,
    PLANET_COUNT_RANGE,
    ROTATION_SPEED_RANGE,
    STAR_HUE_RANGE,
    STAR_LIGHT_LIGHTNESS,
    STAR_LIGHT_SATURATION,
    STAR_LIGHTNESS_RANGE,
    STAR_RADIUS_RANGE,
    STAR_SATURATION_RANGE,
    SURFACE_SEED_RANGE,
    TAU,
)
from .colors import hsl_to_hex
from .rng import RandUtils, SeededStream, WeightedCategorySampler, resolve_seed

logger = logging.getLogger(__name__)


class PlanetType(enum.Enum):
    """Visual/physical planet categories."""

    ROCKY = "rocky"
    ICE = "ice"
    GAS = "gas"


# Weighted type bands by orbital index. The first two planets are always rocky.
_MIDDLE_BAND = WeightedCategorySampler([(PlanetType.ICE, 0.7), (PlanetType.ROCKY, 0.3)])
_OUTER_BAND = WeightedCategorySampler([(PlanetType.GAS, 0.6), (PlanetType.ICE, 0.4)])
_INNER_BAND_SIZE = 2
_MIDDLE_BAND_END = 4


@dataclass(frozen=True)
class Ring:
    inner_radius: float
    outer_radius: float
    color: int
    opacity: float


@dataclass(frozen=True)
class Atmosphere:
    thickness: float
    color: int
    intensity: float
    fresnel_power: float


@dataclass(frozen=True)
class StarDescription:
    """The central star."""

    radius: float
    color: int  # 0xRRGGBB
    light_color: int
    light_intensity: int


@dataclass(frozen=True)
class PlanetDescription:
    """Static configuration for one planet, consumed by the propagator."""

    name: str
    radius: float
    color: int
    planet_type: PlanetType
    orbit_radius: float  # Semi-major axis
    orbit_speed: float  # Mean motion, rad per time unit
    rotation_speed: float
    tilt: float
    eccentricity: float
    inclination: float
    ascending_node: float
    arg_periapsis: float
    initial_anomaly: float
    surface_seed: float
    ring: Optional[Ring] = None
    atmosphere: Optional[Atmosphere] = None


@dataclass(frozen=True)
class SystemDescription:
    """A complete generated system. Immutable once produced."""

    star: StarDescription
    planets: tuple[PlanetDescription, ...]
    max_orbit: float
    seed: int


# ---------------------------------------------------------------------------
# Name generation
# ---------------------------------------------------------------------------

_ONSETS = [
    "Ar", "Bel", "Cor", "Dar", "El", "Fen", "Gim", "Hel", "Ian", "Jar",
    "Kor", "Lum", "Mor", "Ner", "Or", "Pra", "Qua", "Rin", "Sol", "Tor",
    "Ur", "Vor", "Wen", "Xan", "Yor", "Zel",
]

_VOWELS = ["a", "e", "i", "o", "u", "ae", "ia", "eo", "ou"]

_CODAS = [
    "nos", "dun", "mir", "the", "ion", "mar", "tis", "phos", "x", "zar",
    "ron", "nix", "lith", "bor", "cus",
]


def _generate_planet_name(utils: RandUtils) -> str:
    """Generate a procedural planet name such as "Korionnix"."""
    parts = [utils.choice(_ONSETS), utils.choice(_VOWELS), utils.choice(_CODAS)]
    if utils.chance(0.3):
        parts.append(utils.choice(_CODAS))
    return "".join(parts)


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


class SystemGenerator:
    """Builds one ``SystemDescription`` from one seed and one stream."""

    def __init__(self, seed_input: int | str | None = None) -> None:
        self.seed = resolve_seed(seed_input)
        self.stream = SeededStream(self.seed)
        self.utils = RandUtils(self.stream)

    def generate(self) -> SystemDescription:
        star = self._generate_star()
        planets = self._generate_planets(star.radius)
        max_orbit = max(p.orbit_radius + p.radius for p in planets)
        logger.debug(
            "Generated system seed=%d planets=%d max_orbit=%.2f",
            self.seed, len(planets), max_orbit,
        )
        return SystemDescription(
            star=star, planets=tuple(planets), max_orbit=max_orbit, seed=self.seed
        )

    def _generate_star(self) -> StarDescription:
        rand = self.utils.rand
        hue = rand(*STAR_HUE_RANGE)  # Warm, roughly black-body tints
        saturation = rand(*STAR_SATURATION_RANGE)
        lightness = rand(*STAR_LIGHTNESS_RANGE)
        radius = rand(*STAR_RADIUS_RANGE)
        # Brightness grows roughly with surface area
        light_intensity = int(1200 + radius**2 * 12 + 0.5)
        return StarDescription(
            radius=radius,
            color=hsl_to_hex(hue, saturation, lightness),
            light_color=hsl_to_hex(hue, STAR_LIGHT_SATURATION, STAR_LIGHT_LIGHTNESS),
            light_intensity=light_intensity,
        )

    def _generate_planets(self, star_radius: float) -> list[PlanetDescription]:
        """Lay planets out on strictly widening orbits around the star."""
        rand = self.utils.rand
        count = self.utils.rand_int(*PLANET_COUNT_RANGE)
        orbit = star_radius * FIRST_ORBIT_STAR_FACTOR + rand(*ORBIT_GAP_RANGE)

        planets: list[PlanetDescription] = []
        for index in range(count):
            planet = self._generate_planet(index, orbit)
            planets.append(planet)
            orbit += rand(*ORBIT_GAP_RANGE) + planet.radius * ORBIT_GAP_RADIUS_FACTOR
        return planets

    def _planet_type(self, index: int) -> PlanetType:
        if index < _INNER_BAND_SIZE:
            return PlanetType.ROCKY
        if index < _MIDDLE_BAND_END:
            return _MIDDLE_BAND.sample(self.stream)
        return _OUTER_BAND.sample(self.stream)

    def _planet_radius(self, index: int, planet_type: PlanetType) -> float:
        rand = self.utils.rand
        if index < _INNER_BAND_SIZE:
            return rand(0.4, 1.2)
        if index < _MIDDLE_BAND_END:
            return rand(0.8, 1.8)
        if planet_type == PlanetType.GAS:
            return rand(2.0, 4.5)
        return rand(1.0, 2.2)

    def _planet_hsl(self, planet_type: PlanetType) -> tuple[float, float, float]:
        rand = self.utils.rand
        if planet_type == PlanetType.GAS:
            # Browns, oranges, yellows
            return rand(20, 60), rand(0.4, 0.8), rand(0.4, 0.7)
        if planet_type == PlanetType.ICE:
            # Pale blues and whites
            return rand(180, 240), rand(0.3, 0.7), rand(0.6, 0.9)
        return rand(0, 360), rand(0.3, 0.9), rand(0.3, 0.7)

    def _generate_planet(self, index: int, orbit_radius: float) -> PlanetDescription:
        """Generate a single planet with type-appropriate attributes."""
        utils = self.utils
        rand = utils.rand

        name = _generate_planet_name(utils)
        planet_type = self._planet_type(index)
        radius = self._planet_radius(index, planet_type)
        hue, saturation, lightness = self._planet_hsl(planet_type)
        color = hsl_to_hex(hue, saturation, lightness)

        # Farther out is slower (arbitrary time scale)
        orbit_speed = ORBIT_SPEED_SCALE / math.sqrt(orbit_radius + 1)
        rotation_speed = rand(*ROTATION_SPEED_RANGE)
        tilt = rand(*AXIAL_TILT_RANGE)

        eccentricity = min(MAX_ECCENTRICITY, max(0.0, rand(*ECCENTRICITY_RANGE)))
        inclination = rand(*INCLINATION_RANGE)
        ascending_node = rand(0, TAU)
        arg_periapsis = rand(0, TAU)
        initial_anomaly = rand(0, TAU)

        ring: Optional[Ring] = None
        ring_chance = 0.4 if planet_type == PlanetType.GAS else 0.15
        if utils.chance(ring_chance) and radius > 1.2:
            ring = Ring(
                inner_radius=radius * rand(1.2, 1.5),
                outer_radius=radius * rand(1.8, 2.6),
                color=hsl_to_hex(hue, min(1.0, saturation * 0.6), min(1.0, lightness + 0.2)),
                opacity=rand(0.35, 0.65),
            )

        atmosphere: Optional[Atmosphere] = None
        if planet_type == PlanetType.GAS:
            atmosphere = Atmosphere(
                thickness=radius * rand(0.08, 0.15),
                color=color,
                intensity=rand(0.2, 0.4),
                fresnel_power=rand(1.5, 2.5),
            )
        elif planet_type == PlanetType.ROCKY and utils.chance(0.3):
            atmosphere = Atmosphere(
                thickness=radius * rand(0.05, 0.1),
                color=0x88CCFF,
                intensity=rand(0.6, 1.0),
                fresnel_power=rand(2.0, 3.5),
            )

        return PlanetDescription(
            name=name,
            radius=radius,
            color=color,
            planet_type=planet_type,
            orbit_radius=orbit_radius,
            orbit_speed=orbit_speed,
            rotation_speed=rotation_speed,
            tilt=tilt,
            eccentricity=eccentricity,
            inclination=inclination,
            ascending_node=ascending_node,
            arg_periapsis=arg_periapsis,
            initial_anomaly=initial_anomaly,
            surface_seed=rand(*SURFACE_SEED_RANGE),
            ring=ring,
            atmosphere=atmosphere,
        )


def generate_system(seed_input: int | str | None = None) -> SystemDescription:
    """Generate a star system; ``None`` picks a wall-clock seed."""
    return SystemGenerator(seed_input).generate()
