"""Headless viewer checks (SDL dummy video driver)."""

import pygame
import pytest

from orrery import game
from orrery.constants import HUD_HEIGHT, SCREEN_HEIGHT, SCREEN_WIDTH, TIME_SCALE_STEPS
from orrery.models.orbit import PlanetOrbit
from orrery.models.rng import resolve_seed
from orrery.models.system import generate_system
from orrery.screens.system_view import (
    SystemViewScreen,
    fit_scale,
    project,
    view_center,
    view_extent,
)
from orrery.states import ViewMode
from orrery.ui.hud import FpsCounter
from orrery.ui.starfield import StarField


@pytest.fixture
def pygame_headless():
    pygame.init()
    yield
    pygame.quit()


def _key(key, unicode=""):
    return pygame.event.Event(pygame.KEYDOWN, key=key, unicode=unicode)


def test_project_top_and_side():
    position = (10.0, 2.0, -5.0)
    assert project(position, ViewMode.TOP, 2.0, (100, 100)) == (120, 90)
    assert project(position, ViewMode.SIDE, 2.0, (100, 100)) == (120, 96)


@pytest.mark.parametrize("view_mode", [ViewMode.TOP, ViewMode.SIDE])
def test_every_orbit_path_point_stays_on_screen(view_mode):
    center = view_center()
    # 108 has a highly eccentric planet whose apoapsis left the screen
    for seed in list(range(120)) + [108, 0xDEADBEEF]:
        system = generate_system(seed)
        scale = fit_scale(view_extent(system))
        for planet in system.planets:
            for point in PlanetOrbit(planet).path:
                x, y = project(point, view_mode, scale, center)
                assert 0 <= x < SCREEN_WIDTH, (seed, planet.name)
                assert HUD_HEIGHT <= y < SCREEN_HEIGHT, (seed, planet.name)


def test_view_extent_covers_apoapsis():
    system = generate_system(108)
    assert view_extent(system) == max(
        p.orbit_radius * (1 + p.eccentricity) + p.radius for p in system.planets
    )
    assert view_extent(system) >= system.max_orbit


def test_view_mode_toggle():
    assert ViewMode.TOP.toggled() is ViewMode.SIDE
    assert ViewMode.SIDE.toggled() is ViewMode.TOP


def test_fps_counter_averages_over_window():
    fps = FpsCounter(window=0.5)
    assert fps.label == "FPS: --"
    for _ in range(31):
        fps.tick(1 / 60)
    assert fps.value == 60


def test_starfield_is_seeded(pygame_headless):
    first = StarField(42, count=50)
    second = StarField(42, count=50)
    other = StarField(43, count=50)
    assert first.stars == second.stars
    assert first.stars != other.stars
    assert {star.star_class for star in first.stars} <= set("MKGFABO")


def test_system_view_keys_and_update(pygame_headless):
    view = SystemViewScreen(generate_system(42))
    before = [orbit.position for orbit in view.orbits]

    view.handle_events(_key(pygame.K_v))
    assert view.view_mode is ViewMode.SIDE

    view.handle_events(_key(pygame.K_EQUALS))
    assert view.time_scale == TIME_SCALE_STEPS[5]
    view.handle_events(_key(pygame.K_MINUS))
    view.handle_events(_key(pygame.K_MINUS))
    assert view.time_scale == TIME_SCALE_STEPS[3]

    view.handle_events(_key(pygame.K_SPACE))
    view.update(1.0)
    assert [orbit.position for orbit in view.orbits] == before

    view.handle_events(_key(pygame.K_SPACE))
    view.update(1.0)
    assert [orbit.position for orbit in view.orbits] != before

    view.handle_events(_key(pygame.K_r))
    view.handle_events(_key(pygame.K_ESCAPE))
    assert view.reroll_requested and view.quit_requested


def test_hover_finds_planet_under_cursor(pygame_headless):
    view = SystemViewScreen(generate_system(7))
    target = view.orbits[-1]
    view.update(0.0, view.screen_position(target))
    assert view.hovered is not None


def test_side_view_draws_far_planets_first(pygame_headless):
    view = SystemViewScreen(generate_system(42))
    view.update(3.0)
    assert view.draw_order() == view.orbits

    view.view_mode = ViewMode.SIDE
    depths = [orbit.position[2] for orbit in view.draw_order()]
    assert depths == sorted(depths)
    assert len(depths) == len(view.orbits)


def test_draw_both_projections(pygame_headless):
    surface = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT))
    view = SystemViewScreen(generate_system(0xDEADBEEF))
    view.hovered = view.orbits[0]
    view.draw(surface)
    view.view_mode = ViewMode.SIDE
    view.draw(surface)


def test_game_reroll_keeps_view_preferences(pygame_headless):
    app = game.Game(42)
    assert app.system.seed == 42
    app.system_view.view_mode = ViewMode.SIDE
    app.system_view.reroll_requested = True
    app._update(0.016)
    assert app.system_view.view_mode is ViewMode.SIDE
    assert not app.system_view.reroll_requested
    app._draw()


def test_cli_describe_prints_summary(capsys):
    assert game.main(["--seed", "42", "--describe"]) == 0
    out = capsys.readouterr().out
    system = generate_system(42)
    assert out.startswith("seed 42  (?seed=42)")
    for planet in system.planets:
        assert planet.name in out


def test_cli_url_seed(capsys):
    game.main(["--url", "https://example.org/?seed=Vega", "--describe"])
    out = capsys.readouterr().out
    assert f"seed {generate_system('Vega').seed}" in out


def test_cli_rejects_seed_and_url_together():
    with pytest.raises(SystemExit) as excinfo:
        game.main(["--seed", "1", "--url", "?seed=2"])
    assert excinfo.value.code == 2


def _type_seed(app, text):
    app._handle_event(_key(pygame.K_s, "s"))
    app._handle_event(pygame.event.Event(pygame.TEXTINPUT, text="s"))
    for ch in text:
        app._handle_event(pygame.event.Event(pygame.TEXTINPUT, text=ch))


def test_seed_entry_loads_text_seed(pygame_headless):
    app = game.Game(42)
    app.system_view.view_mode = ViewMode.SIDE
    _type_seed(app, "Vega")
    assert app.seed_entry.active and app.seed_entry.text == "Vega"
    assert app.system.seed == 42

    app._handle_event(_key(pygame.K_RETURN))
    assert not app.seed_entry.active
    assert app.system.seed == resolve_seed("Vega")
    assert app.system_view.view_mode is ViewMode.SIDE
    app._draw()


def test_seed_entry_reads_digits_as_number(pygame_headless):
    app = game.Game(42)
    _type_seed(app, "12345")
    app._handle_event(_key(pygame.K_BACKSPACE))
    app._handle_event(_key(pygame.K_KP_ENTER))
    assert app.system.seed == 1234


def test_seed_entry_swallows_viewer_shortcuts(pygame_headless):
    app = game.Game(42)
    _type_seed(app, "r")
    app._handle_event(_key(pygame.K_r, "r"))
    app._handle_event(_key(pygame.K_v, "v"))
    app._update(0.016)
    assert app.system.seed == 42
    assert app.system_view.view_mode is ViewMode.TOP
    app._draw()

    app._handle_event(_key(pygame.K_ESCAPE))
    assert not app.seed_entry.active
    assert app.running and not app.system_view.quit_requested
    assert app.system.seed == 42


def test_empty_seed_entry_rolls_a_random_system(pygame_headless, monkeypatch):
    app = game.Game(42)
    requested = []
    monkeypatch.setattr(app, "load_system", requested.append)
    _type_seed(app, "   ")
    app._handle_event(_key(pygame.K_RETURN))
    assert requested == [None]
