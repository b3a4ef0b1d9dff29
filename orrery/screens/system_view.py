"""System view: the orrery itself, with star, orbits and moving planets."""

from __future__ import annotations

import math

import pygame

from ..constants import (
    DEFAULT_TIME_SCALE_INDEX,
    HIGHLIGHT,
    HUD_HEIGHT,
    LIGHT_GREY,
    MIN_PLANET_PIXELS,
    ORBIT_LINE,
    PANEL_BG,
    PANEL_BORDER,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TIME_SCALE_STEPS,
    VIEW_CENTER_OFFSET,
    VIEW_MARGIN,
    WHITE,
)
from ..models.colors import hex_to_rgb, scale_rgb
from ..models.orbit import PlanetOrbit, Vec3
from ..models.system import PlanetDescription, SystemDescription
from ..states import ViewMode


def project(
    position: Vec3, view_mode: ViewMode, scale: float, center: tuple[int, int]
) -> tuple[int, int]:
    """World position -> screen pixel for the given projection."""
    x, y, z = position
    cx, cy = center
    if view_mode is ViewMode.TOP:
        return cx + int(x * scale), cy + int(z * scale)
    return cx + int(x * scale), cy - int(y * scale)


def view_extent(system: SystemDescription) -> float:
    """Farthest any body reaches from the star: apoapsis plus planet radius.

    Orientation is a pure rotation, so no projected orbit point lies beyond it.
    """
    return max(
        planet.orbit_radius * (1 + planet.eccentricity) + planet.radius
        for planet in system.planets
    )


def view_center(width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> tuple[int, int]:
    return width // 2, height // 2 + VIEW_CENTER_OFFSET


def fit_scale(extent: float, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> float:
    """Pixels per world unit so ``extent`` fits between the HUD bar and the edges."""
    cx, cy = view_center(width, height)
    half_view = min(cx, width - cx, cy - HUD_HEIGHT, height - cy)
    return half_view * VIEW_MARGIN / max(extent, 1e-6)


class SystemViewScreen:
    """Top-down / edge-on view of a generated system."""

    def __init__(self, system: SystemDescription) -> None:
        self.system = system
        self.orbits = [PlanetOrbit(planet) for planet in system.planets]
        self.font_name = pygame.font.Font(None, 28)
        self.font_info = pygame.font.Font(None, 22)

        self.view_mode = ViewMode.TOP
        self.time_scale_index = DEFAULT_TIME_SCALE_INDEX
        self.paused = False
        self.hovered: PlanetOrbit | None = None

        self.quit_requested = False
        self.reroll_requested = False

        self.center = view_center()
        self.scale = fit_scale(view_extent(system))

    @property
    def time_scale(self) -> float:
        return TIME_SCALE_STEPS[self.time_scale_index]

    def handle_events(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        if event.key == pygame.K_ESCAPE:
            self.quit_requested = True
        elif event.key == pygame.K_r:
            self.reroll_requested = True
        elif event.key == pygame.K_v:
            self.view_mode = self.view_mode.toggled()
        elif event.key == pygame.K_SPACE:
            self.paused = not self.paused
        elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self.time_scale_index = min(self.time_scale_index + 1, len(TIME_SCALE_STEPS) - 1)
        elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.time_scale_index = max(self.time_scale_index - 1, 0)

    def update(self, dt: float, mouse_pos: tuple[int, int] | None = None) -> None:
        if not self.paused:
            for orbit in self.orbits:
                orbit.update(dt * self.time_scale)

        if mouse_pos is not None:
            self.hovered = self.planet_at(*mouse_pos)

    def screen_position(self, orbit: PlanetOrbit) -> tuple[int, int]:
        return project(orbit.position, self.view_mode, self.scale, self.center)

    def planet_pixels(self, planet: PlanetDescription) -> int:
        return max(MIN_PLANET_PIXELS, int(planet.radius * self.scale))

    def planet_at(self, mx: int, my: int) -> PlanetOrbit | None:
        best: PlanetOrbit | None = None
        best_dist = float("inf")
        for orbit in self.orbits:
            px, py = self.screen_position(orbit)
            dist = math.hypot(mx - px, my - py)
            if dist <= self.planet_pixels(orbit.planet) + 6 and dist < best_dist:
                best = orbit
                best_dist = dist
        return best

    def draw_order(self) -> list[PlanetOrbit]:
        """Planets back to front for the current projection."""
        if self.view_mode is ViewMode.SIDE:
            # Edge-on camera sits on +z, so smaller z is farther away
            return sorted(self.orbits, key=lambda o: o.position[2])
        return list(self.orbits)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self, surface: pygame.Surface) -> None:
        for orbit in self.orbits:
            points = [
                project(p, self.view_mode, self.scale, self.center) for p in orbit.path
            ]
            pygame.draw.lines(surface, ORBIT_LINE, True, points, 1)

        self._draw_star(surface)

        for orbit in self.draw_order():
            self._draw_planet(surface, orbit)

        if self.hovered is not None:
            self._draw_planet_panel(surface, self.hovered.planet)

    def _draw_star(self, surface: pygame.Surface) -> None:
        star = self.system.star
        radius = max(MIN_PLANET_PIXELS * 2, int(star.radius * self.scale))
        light = hex_to_rgb(star.light_color)
        glow_surf = pygame.Surface((radius * 6, radius * 6), pygame.SRCALPHA)
        for i in range(3):
            alpha = 40 - i * 12
            pygame.draw.circle(glow_surf, (*light, alpha), (radius * 3, radius * 3), int(radius * (2 + i * 0.5)))
        surface.blit(glow_surf, (self.center[0] - radius * 3, self.center[1] - radius * 3))
        pygame.draw.circle(surface, hex_to_rgb(star.color), self.center, radius)

    def _draw_planet(self, surface: pygame.Surface, orbit: PlanetOrbit) -> None:
        planet = orbit.planet
        px, py = self.screen_position(orbit)
        radius = self.planet_pixels(planet)
        color = hex_to_rgb(planet.color)

        if planet.atmosphere is not None:
            halo = radius + max(1, int(planet.atmosphere.thickness * self.scale))
            alpha = int(255 * min(1.0, planet.atmosphere.intensity) * 0.5)
            halo_surf = pygame.Surface((halo * 2, halo * 2), pygame.SRCALPHA)
            pygame.draw.circle(halo_surf, (*hex_to_rgb(planet.atmosphere.color), alpha), (halo, halo), halo)
            surface.blit(halo_surf, (px - halo, py - halo))

        # Darker rim
        pygame.draw.circle(surface, scale_rgb(color, 0.45), (px, py), radius)
        pygame.draw.circle(surface, color, (px, py), max(1, radius - 1))

        if planet.ring is not None:
            ring = planet.ring
            outer = max(radius + 2, int(ring.outer_radius * self.scale))
            inner = max(radius + 1, int(ring.inner_radius * self.scale))
            ring_surf = pygame.Surface((outer * 2, outer * 2), pygame.SRCALPHA)
            rect = pygame.Rect(0, 0, outer * 2, outer * 2)
            if self.view_mode is ViewMode.SIDE:
                rect = pygame.Rect(0, outer - outer // 4, outer * 2, outer // 2)
            alpha = int(255 * ring.opacity)
            pygame.draw.ellipse(ring_surf, (*hex_to_rgb(ring.color), alpha), rect, max(1, outer - inner))
            surface.blit(ring_surf, (px - outer, py - outer))

        if orbit is self.hovered:
            pygame.draw.circle(surface, HIGHLIGHT, (px, py), radius + 4, 2)
            label = self.font_info.render(planet.name, True, WHITE)
            surface.blit(label, (px - label.get_width() // 2, py - radius - 22))

    def _draw_planet_panel(self, surface: pygame.Surface, planet: PlanetDescription) -> None:
        panel_w = 280
        panel_h = 150
        px = SCREEN_WIDTH - panel_w - 15
        py = 50

        bg = pygame.Surface((panel_w, panel_h), pygame.SRCALPHA)
        bg.fill(PANEL_BG)
        surface.blit(bg, (px, py))
        pygame.draw.rect(surface, PANEL_BORDER, (px, py, panel_w, panel_h), 1, border_radius=4)

        name_surf = self.font_name.render(planet.name, True, hex_to_rgb(planet.color))
        surface.blit(name_surf, (px + 12, py + 10))

        features = [planet.planet_type.value.title()]
        if planet.ring is not None:
            features.append("ringed")
        if planet.atmosphere is not None:
            features.append("atmosphere")
        lines = [
            ", ".join(features),
            f"a = {planet.orbit_radius:.1f}   e = {planet.eccentricity:.3f}",
            f"i = {math.degrees(planet.inclination):+.1f}°   r = {planet.radius:.2f}",
            f"n = {planet.orbit_speed:.3f} rad/s",
        ]
        for i, line in enumerate(lines):
            line_surf = self.font_info.render(line, True, LIGHT_GREY)
            surface.blit(line_surf, (px + 12, py + 40 + i * 24))
