"""Inline seed editor shown under the HUD bar."""

from __future__ import annotations

import pygame

from ..constants import (
    AMBER,
    HUD_HEIGHT,
    LIGHT_GREY,
    PANEL_BG,
    PANEL_BORDER,
    SEED_ENTRY_MAX_LENGTH,
    WHITE,
)


class SeedEntry:
    """Collects typed text until Enter applies it or Escape drops it.

    Text arrives through ``TEXTINPUT`` events and editing keys through
    ``KEYDOWN``. While active the entry consumes every key so shortcuts like
    R or ESC do not leak through to the viewer.
    """

    def __init__(self, max_length: int = SEED_ENTRY_MAX_LENGTH) -> None:
        self.max_length = max_length
        self.active = False
        self.text = ""
        self._swallow = ""
        self._font: pygame.font.Font | None = None

    def start(self, trigger: str = "") -> None:
        """Open the editor. ``trigger`` is the character of the key that opened it."""
        self.active = True
        self.text = ""
        # The key that opened the editor also produces a TEXTINPUT event
        self._swallow = trigger
        pygame.key.start_text_input()

    def cancel(self) -> None:
        self.active = False
        self.text = ""
        self._swallow = ""

    def handle_event(self, event: pygame.event.Event) -> str | None:
        """Feed one event. Returns the entered text when the user confirms."""
        if not self.active:
            return None

        if event.type == pygame.TEXTINPUT:
            text = event.text
            if self._swallow and text == self._swallow:
                self._swallow = ""
                return None
            self._swallow = ""
            room = self.max_length - len(self.text)
            self.text += "".join(ch for ch in text if ch.isprintable())[:max(room, 0)]
            return None

        if event.type != pygame.KEYDOWN:
            return None

        if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            entered = self.text.strip()
            self.cancel()
            return entered
        if event.key == pygame.K_ESCAPE:
            self.cancel()
        elif event.key == pygame.K_BACKSPACE:
            self.text = self.text[:-1]
        return None

    def draw(self, surface: pygame.Surface) -> None:
        if not self.active:
            return
        if self._font is None:
            self._font = pygame.font.Font(None, 24)

        box = pygame.Rect(15, HUD_HEIGHT + 8, 420, 34)
        bg = pygame.Surface(box.size, pygame.SRCALPHA)
        bg.fill(PANEL_BG)
        surface.blit(bg, box.topleft)
        pygame.draw.rect(surface, PANEL_BORDER, box, 1, border_radius=4)

        label = self._font.render("seed:", True, AMBER)
        surface.blit(label, (box.x + 10, box.y + 9))
        value = self._font.render(self.text + "_", True, WHITE)
        surface.blit(value, (box.x + 20 + label.get_width(), box.y + 9))

        hint = self._font.render("Enter apply (empty = random)  Esc cancel", True, LIGHT_GREY)
        surface.blit(hint, (box.x, box.bottom + 6))
