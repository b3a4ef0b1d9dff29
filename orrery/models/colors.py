"""Colour helpers shared by the generator and the viewer."""

from __future__ import annotations


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> int:
    """Convert HSL (hue in degrees, s/l in 0–1) to a packed 0xRRGGBB int."""
    h = hue % 360
    s = _clamp(saturation, 0.0, 1.0)
    l = _clamp(lightness, 0.0, 1.0)
    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l - c / 2

    if h < 60:
        r, g, b = c, x, 0.0
    elif h < 120:
        r, g, b = x, c, 0.0
    elif h < 180:
        r, g, b = 0.0, c, x
    elif h < 240:
        r, g, b = 0.0, x, c
    elif h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    red = _round_half_up((r + m) * 255)
    green = _round_half_up((g + m) * 255)
    blue = _round_half_up((b + m) * 255)
    return (red << 16) + (green << 8) + blue


def hex_to_rgb(color: int) -> tuple[int, int, int]:
    """Unpack 0xRRGGBB into a pygame-friendly RGB tuple."""
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def scale_rgb(rgb: tuple[int, int, int], factor: float) -> tuple[int, int, int]:
    return tuple(int(_clamp(channel * factor, 0, 255)) for channel in rgb)  # type: ignore[return-value]


def _round_half_up(value: float) -> int:
    return int(value + 0.5)
