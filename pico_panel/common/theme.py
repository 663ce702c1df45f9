from __future__ import annotations

import logging
from typing import Literal, cast, get_args

from nicegui import app, ui

from pico_panel.constants import STATUS_OFF_COLOR, STATUS_ON_COLOR

ThemeMode = Literal["light", "dark"]


def get_palette(mode: ThemeMode) -> dict[str, str]:
    """Return palette tokens for the given mode."""
    if mode == "dark":
        return {
            "primary": "#1F538D",
            "background": "#1A1A1A",
            "surface": "#212121",
            "text": "#D6D6D6",
            "muted": "#949A9F",
            "sky": "#16324F",
            "balloon": "#E53935",
            "positive": STATUS_ON_COLOR,
            "negative": "#DB2828",
            "warning": "#F2C037",
        }
    return {
        "primary": "#3B8ED0",
        "background": "#EBEBEB",
        "surface": "#DBDBDB",
        "text": STATUS_OFF_COLOR,
        "muted": "#A6A6A6",
        "sky": "#BFE3FF",
        "balloon": "#E53935",
        "positive": STATUS_ON_COLOR,
        "negative": "#DB2828",
        "warning": "#F2C037",
    }


def _inject_css(p: dict[str, str]) -> None:
    ui.add_css(
        f"""
:root {{
  --pico-bg: {p["background"]};
  --pico-surface: {p["surface"]};
  --pico-text: {p["text"]};
  --pico-muted: {p["muted"]};
  --pico-sky: {p["sky"]};
  --pico-balloon: {p["balloon"]};
}}

body, .q-page {{ background: var(--pico-bg); color: var(--pico-text); }}
.q-header, .q-footer, .q-card {{ background: var(--pico-surface); color: var(--pico-text); }}

/* Balloon field: children are absolutely positioned inside it */
.balloon-field {{ position: relative; overflow: hidden; background: var(--pico-sky); border-radius: 6px; }}
.balloon {{
  position: absolute; width: 70px; border-radius: 50% 50% 45% 45%;
  background: var(--pico-balloon); cursor: pointer; user-select: none;
  transition: height 80ms linear;
}}
"""
    )


def apply_theme(mode: ThemeMode) -> None:
    """Set Quasar colors, dark mode and the panel CSS variables."""
    pal = get_palette(mode)
    ui.colors(
        primary=pal["primary"],
        positive=pal["positive"],
        negative=pal["negative"],
        warning=pal["warning"],
    )
    if mode == "dark":
        ui.dark_mode().enable()
    else:
        ui.dark_mode().disable()
    _inject_css(pal)


def get_theme() -> ThemeMode:
    mode = app.storage.general.get("theme_mode", "light")
    if isinstance(mode, str) and mode in get_args(ThemeMode):
        return cast("ThemeMode", mode)
    return "light"


def toggle_theme() -> ThemeMode:
    """Flip light/dark, persist the choice and apply it."""
    next_mode: ThemeMode = "dark" if get_theme() == "light" else "light"
    app.storage.general["theme_mode"] = next_mode
    apply_theme(next_mode)
    logging.debug("Set theme to mode: %s", next_mode)
    return next_mode
