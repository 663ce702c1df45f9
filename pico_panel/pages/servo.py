from __future__ import annotations

import logging

from nicegui import ui

from pico_panel.services.servo_client import client
from pico_panel.services.servo_toggle import ToggleEffect, resolve_toggle
from pico_panel.state import ServoPanelState


class ServoPage:
    """Servo tab page."""

    def __init__(self) -> None:
        self.state = ServoPanelState()
        self.switch: ui.switch | None = None
        self.status_label: ui.label | None = None
        self.response_log: ui.log | None = None
        self.alert_dialog: ui.dialog | None = None
        self.alert_label: ui.label | None = None
        # set while the switch is being reverted so the revert is not sent
        self._reverting = False

    # ---- Actions ----

    def _on_switch_change(self, e):
        # returns the coroutine; _reverting is only True during the value assignment
        if self._reverting:
            return None
        if self.state.busy:
            # the switch is disabled while busy, but a change can still race in from the client
            logging.warning("Servo request already in flight; ignoring toggle")
            self._set_switch(not bool(e.value))
            return None
        return self.toggle_servo(bool(e.value))

    async def toggle_servo(self, desired_on: bool) -> ToggleEffect | None:
        """Send one /servo request for ``desired_on`` and apply the outcome."""
        if self.state.busy:
            logging.warning("Servo request already in flight; ignoring toggle")
            return None
        self.state.busy = True
        try:
            result = await client.set_servo_state(desired_on)
        finally:
            self.state.busy = False
        effect = resolve_toggle(desired_on, result)
        self.apply_effect(effect)
        return effect

    def apply_effect(self, effect: ToggleEffect) -> None:
        logging.log(effect.log_level, effect.log_message)
        if effect.status_text is not None:
            self.state.status_text = effect.status_text
        if effect.status_color is not None:
            self.state.status_color = effect.status_color
            if self.status_label is not None:
                self.status_label.style(f"color: {effect.status_color}")
        self._set_switch(effect.checked)
        if effect.alert:
            self._alert(effect.alert)

    def _set_switch(self, checked: bool) -> None:
        """Move the switch without sending a request."""
        if self.switch is None or self.switch.value == checked:
            return
        self._reverting = True
        try:
            self.switch.value = checked
        finally:
            self._reverting = False

    def _alert(self, message: str) -> None:
        if self.alert_dialog is None or self.alert_label is None:
            return
        self.alert_label.text = message
        self.alert_dialog.open()

    # ---- UI ----

    def build(self) -> None:
        with ui.dialog().props("persistent") as self.alert_dialog, ui.card():
            self.alert_label = ui.label("").classes("text-md")
            ui.button("OK", on_click=self.alert_dialog.close).props("unelevated color=primary")

        with ui.card().classes("w-full"):
            ui.label("Servo").classes("text-md font-medium")
            with ui.row().classes("items-center gap-4"):
                self.switch = (
                    ui.switch("Servo", value=False, on_change=self._on_switch_change)
                    .bind_enabled_from(self.state, "busy", backward=lambda b: not b)
                    .mark("servoSwitch")
                )
                self.status_label = (
                    ui.label()
                    .bind_text_from(self.state, "status_text")
                    .mark("status")
                    .classes("text-lg font-medium")
                    .style(f"color: {self.state.status_color}")
                )

        with ui.card().classes("w-full"):
            ui.label("Response log").classes("text-sm")
            self.response_log = ui.log(max_lines=200).classes("w-full h-48")
