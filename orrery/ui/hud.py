"""HUD overlay: seed, share link, time scale and frame rate."""

from __future__ import annotations

import pygame

from ..constants import (
    AMBER,
    CYAN,
    FPS_SAMPLE_WINDOW,
    HUD_HEIGHT,
    LIGHT_GREY,
    PANEL_BG,
    PANEL_BORDER,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    WHITE,
)
from ..models.seed_link import share_query
from ..states import ViewMode


class FpsCounter:
    """Frames per second, averaged over a fixed sample window."""

    def __init__(self, window: float = FPS_SAMPLE_WINDOW) -> None:
        self.window = window
        self.value: int | None = None
        self._frames = 0
        self._elapsed = 0.0

    def tick(self, dt: float) -> None:
        self._frames += 1
        self._elapsed += dt
        if self._elapsed >= self.window:
            self.value = round(self._frames / self._elapsed)
            self._frames = 0
            self._elapsed = 0.0

    @property
    def label(self) -> str:
        return "FPS: --" if self.value is None else f"FPS: {self.value}"


class HUD:
    """Persistent heads-up display drawn over the orrery."""

    def __init__(self) -> None:
        self.font = pygame.font.Font(None, 24)
        self.font_small = pygame.font.Font(None, 20)
        self.panel_height = HUD_HEIGHT
        self.fps = FpsCounter()

    def update(self, dt: float) -> None:
        self.fps.tick(dt)

    def draw(
        self,
        surface: pygame.Surface,
        seed: int,
        time_scale: float,
        paused: bool,
        view_mode: ViewMode,
    ) -> None:
        # Semi-transparent top bar
        bar = pygame.Surface((SCREEN_WIDTH, self.panel_height), pygame.SRCALPHA)
        bar.fill(PANEL_BG)
        surface.blit(bar, (0, 0))
        pygame.draw.line(
            surface, PANEL_BORDER, (0, self.panel_height), (SCREEN_WIDTH, self.panel_height)
        )

        x = 15
        y = 10
        x += self._draw_text(surface, f"seed={seed}", AMBER, x, y) + 30
        x += self._draw_text(surface, share_query(seed), CYAN, x, y) + 30

        speed = "paused" if paused else f"x{time_scale:g}"
        x += self._draw_text(surface, f"time {speed}", WHITE, x, y) + 30
        self._draw_text(surface, f"view: {view_mode.value}", LIGHT_GREY, x, y)

        fps_surf = self.font_small.render(self.fps.label, True, LIGHT_GREY)
        surface.blit(fps_surf, (16, SCREEN_HEIGHT - 16 - fps_surf.get_height()))

        hint = self.font_small.render(
            "V view  SPACE pause  +/- speed  S seed  R new system  ESC quit",
            True,
            LIGHT_GREY,
        )
        surface.blit(hint, hint.get_rect(bottomright=(SCREEN_WIDTH - 16, SCREEN_HEIGHT - 16)))

    def _draw_text(
        self, surface: pygame.Surface, text: str, color: tuple[int, int, int], x: int, y: int
    ) -> int:
        text_surf = self.font.render(text, True, color)
        surface.blit(text_surf, (x, y))
        return text_surf.get_width()
