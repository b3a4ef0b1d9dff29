"""View state management for Seeded Orrery."""

import enum


class ViewMode(enum.Enum):
    """Camera projections of the orrery."""

    TOP = "top"  # Looking down the orbital normal (x/z plane)
    SIDE = "side"  # Edge-on, shows inclination (x/y plane)

    def toggled(self) -> "ViewMode":
        return ViewMode.SIDE if self is ViewMode.TOP else ViewMode.TOP
