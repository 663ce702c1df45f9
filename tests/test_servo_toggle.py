from __future__ import annotations

import logging

import pytest

from pico_panel.constants import (
    STATUS_OFF_COLOR,
    STATUS_OFF_TEXT,
    STATUS_ON_COLOR,
    STATUS_ON_TEXT,
    UNREACHABLE_ALERT,
)
from pico_panel.services.servo_client import ServoOutcome, ServoResult
from pico_panel.services.servo_toggle import resolve_toggle


def _result(attempted_on: bool, outcome: ServoOutcome) -> ServoResult:
    action = "on" if attempted_on else "off"
    if outcome is ServoOutcome.OK:
        return ServoResult(action, outcome, status_code=200)
    if outcome is ServoOutcome.REJECTED:
        return ServoResult(action, outcome, status_code=404)
    return ServoResult(action, outcome, error="timed out")


@pytest.mark.unit
@pytest.mark.parametrize(
    ("attempted_on", "text", "color"),
    [(True, STATUS_ON_TEXT, STATUS_ON_COLOR), (False, STATUS_OFF_TEXT, STATUS_OFF_COLOR)],
)
def test_ok_response_sets_status_and_keeps_switch(attempted_on, text, color):
    effect = resolve_toggle(attempted_on, _result(attempted_on, ServoOutcome.OK))
    assert effect.checked is attempted_on
    assert effect.status_text == text
    assert effect.status_color == color
    assert effect.alert is None
    assert effect.log_level == logging.INFO
    assert not effect.reverted


@pytest.mark.unit
@pytest.mark.parametrize("attempted_on", [True, False])
def test_rejected_response_reverts_switch_without_alert(attempted_on):
    effect = resolve_toggle(attempted_on, _result(attempted_on, ServoOutcome.REJECTED))
    assert effect.checked is (not attempted_on)
    assert effect.status_text is None
    assert effect.status_color is None
    assert effect.alert is None
    assert effect.log_level == logging.ERROR
    assert "404" in effect.log_message
    assert effect.reverted


@pytest.mark.unit
@pytest.mark.parametrize("attempted_on", [True, False])
def test_transport_failure_reverts_switch_and_alerts(attempted_on):
    effect = resolve_toggle(attempted_on, _result(attempted_on, ServoOutcome.TRANSPORT_FAILURE))
    assert effect.checked is (not attempted_on)
    assert effect.status_text is None
    assert effect.alert == UNREACHABLE_ALERT
    assert effect.log_level == logging.ERROR
    assert "timed out" in effect.log_message


@pytest.mark.unit
def test_log_message_names_attempted_state():
    assert resolve_toggle(True, _result(True, ServoOutcome.OK)).log_message == "Servo turned ON"
    assert "OFF" in resolve_toggle(False, _result(False, ServoOutcome.REJECTED)).log_message
