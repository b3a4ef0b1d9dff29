"""Twinkling star field background, seeded from the system seed."""

from __future__ import annotations

import math
from dataclasses import dataclass

import pygame

from ..constants import NUM_BACKGROUND_STARS, SCREEN_HEIGHT, SCREEN_WIDTH, TAU
from ..models.rng import RandUtils, SeededStream, WeightedCategorySampler


@dataclass(frozen=True)
class StarClass:
    name: str
    color: tuple[float, float, float]  # 0–1 channels
    size_multiplier: float


# From ultra-common dim dwarfs to ultra-rare hot giants
STAR_CLASSES = WeightedCategorySampler(
    [
        (StarClass("M", (0.6, 0.7, 1.0), 0.8), 0.76),
        (StarClass("K", (1.0, 0.8, 0.6), 1.0), 0.12),
        (StarClass("G", (1.0, 1.0, 0.9), 1.2), 0.08),
        (StarClass("F", (1.0, 1.0, 1.0), 1.5), 0.03),
        (StarClass("A", (0.8, 0.9, 1.0), 1.8), 0.006),
        (StarClass("B", (0.7, 0.8, 1.0), 2.1), 0.003),
        (StarClass("O", (0.6, 0.7, 1.0), 2.5), 0.001),
    ]
)

_COLOR_VARIATION = 0.1


@dataclass
class BackgroundStar:
    x: int
    y: int
    radius: int
    color: tuple[int, int, int]
    star_class: str
    twinkle_speed: float
    twinkle_offset: float


class StarField:
    """Animated twinkling star background."""

    def __init__(self, seed: int, count: int = NUM_BACKGROUND_STARS) -> None:
        self.timer = 0.0
        stream = SeededStream(seed)
        utils = RandUtils(stream)
        self.stars: list[BackgroundStar] = []
        for _ in range(count):
            star_class = STAR_CLASSES.sample(stream)
            color = tuple(
                int(255 * max(0.0, min(1.0, channel * (1 + (stream.next() - 0.5) * _COLOR_VARIATION))))
                for channel in star_class.color
            )
            size = star_class.size_multiplier * (1.0 + 0.5 * stream.next())
            self.stars.append(
                BackgroundStar(
                    x=utils.rand_int(0, SCREEN_WIDTH),
                    y=utils.rand_int(0, SCREEN_HEIGHT),
                    radius=max(1, round(size)),
                    color=color,  # type: ignore[arg-type]
                    star_class=star_class.name,
                    twinkle_speed=utils.rand(0.5, 2.0),
                    twinkle_offset=utils.rand(0, TAU),
                )
            )

    def update(self, dt: float) -> None:
        self.timer += dt

    def draw(self, surface: pygame.Surface) -> None:
        for star in self.stars:
            brightness = 0.5 + 0.5 * math.sin(
                self.timer * star.twinkle_speed + star.twinkle_offset
            )
            r = int(star.color[0] * brightness)
            g = int(star.color[1] * brightness)
            b = int(star.color[2] * brightness)
            pygame.draw.circle(surface, (r, g, b), (star.x, star.y), star.radius)
