from __future__ import annotations

import logging
from dataclasses import dataclass

from pico_panel.constants import (
    STATUS_OFF_COLOR,
    STATUS_OFF_TEXT,
    STATUS_ON_COLOR,
    STATUS_ON_TEXT,
    UNREACHABLE_ALERT,
)
from pico_panel.services.servo_client import ServoOutcome, ServoResult


@dataclass(frozen=True)
class ToggleEffect:
    """What the page must show after a toggle attempt.

    ``status_text``/``status_color`` are None when the display stays as it was.
    """

    checked: bool
    status_text: str | None
    status_color: str | None
    log_level: int
    log_message: str
    alert: str | None = None

    @property
    def reverted(self) -> bool:
        return self.status_text is None


def resolve_toggle(attempted_on: bool, result: ServoResult) -> ToggleEffect:
    """Map (attempted state, request outcome) to the final switch state and display."""
    label = "ON" if attempted_on else "OFF"
    if result.outcome is ServoOutcome.OK:
        return ToggleEffect(
            checked=attempted_on,
            status_text=STATUS_ON_TEXT if attempted_on else STATUS_OFF_TEXT,
            status_color=STATUS_ON_COLOR if attempted_on else STATUS_OFF_COLOR,
            log_level=logging.INFO,
            log_message=f"Servo turned {label}",
        )
    if result.outcome is ServoOutcome.REJECTED:
        return ToggleEffect(
            checked=not attempted_on,
            status_text=None,
            status_color=None,
            log_level=logging.ERROR,
            log_message=f"Failed to turn servo {label} (HTTP {result.status_code})",
        )
    return ToggleEffect(
        checked=not attempted_on,
        status_text=None,
        status_color=None,
        log_level=logging.ERROR,
        log_message=f"Error: {result.error}",
        alert=UNREACHABLE_ALERT,
    )
