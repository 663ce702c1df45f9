from __future__ import annotations

import logging

from nicegui import ui

from pico_panel.constants import FIELD_HEIGHT_PX, FIELD_WIDTH_PX, GAME_TICK_S
from pico_panel.state import BalloonGame


class BalloonPage:
    """Balloon game tab page."""

    def __init__(self, game: BalloonGame | None = None, tick_interval: float = GAME_TICK_S) -> None:
        if tick_interval <= 0:
            raise ValueError(f"tick_interval must be > 0, got {tick_interval}")
        self.game = game or BalloonGame()
        self.tick_interval = tick_interval
        self.balloon: ui.element | None = None
        self.score_label: ui.label | None = None
        self.round_label: ui.label | None = None
        self.final_score_label: ui.label | None = None
        self.game_timer: ui.timer | None = None
        self.game_over_dialog: ui.dialog | None = None
        self.repositions = 0

    # ---- Handlers ----

    def pop(self) -> None:
        score = self.game.on_click()
        self._render()
        logging.debug("Balloon popped, score=%d", score)

    def tick(self) -> None:
        if self.game.finished:
            return
        game_over = self.game.on_tick()
        self.repositions += 1
        self._render()
        if game_over:
            if self.game_timer is not None:
                self.game_timer.active = False
                self.game_timer.cancel()
            logging.info("Game over after %d ticks, score=%d", self.game.count, self.game.score)
            if self.game_over_dialog is not None:
                self.game_over_dialog.open()

    def _render(self) -> None:
        if self.score_label is not None:
            self.score_label.text = f"Score: {self.game.score}"
        if self.final_score_label is not None:
            self.final_score_label.text = f"Final score: {self.game.score}"
        if self.round_label is not None:
            self.round_label.text = f"Round {self.game.count} / {self.game.tick_limit}"
        if self.balloon is not None:
            self.balloon.style(
                f"left: {self.game.x:.0f}px; top: {self.game.y:.0f}px; height: {self.game.balloon_height}px"
            )

    # ---- UI ----

    def build(self) -> None:
        """Build the game and start a fresh round."""
        self.game.reset()
        self.repositions = 0

        with ui.dialog().props("persistent") as self.game_over_dialog, ui.card():
            ui.label("Game Over").classes("text-lg font-medium")
            self.final_score_label = ui.label()
            ui.button("OK", on_click=self.game_over_dialog.close).props("unelevated color=primary")

        with ui.card().classes("w-full"):
            with ui.row().classes("items-center gap-6"):
                ui.label("Balloon").classes("text-md font-medium")
                self.score_label = ui.label().mark("scoreBox").classes("text-md")
                self.round_label = ui.label().classes("text-sm text-[var(--pico-muted)]")
            # leave room for the balloon itself past the 800x600 spawn area
            with ui.element("div").classes("balloon-field").style(
                f"width: {FIELD_WIDTH_PX + 80}px; height: {FIELD_HEIGHT_PX + 110}px"
            ):
                self.balloon = ui.element("div").classes("balloon").on("click", self.pop).mark("balloon")
        self._render()

        # first reposition one interval after load, not at load
        self.game_timer = ui.timer(self.tick_interval, self.tick, immediate=False)
