from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import requests

from pico_panel.services import servo_client as servo_client_mod
from pico_panel.services.servo_client import ServoClient, ServoOutcome

if TYPE_CHECKING:
    from pytest import MonkeyPatch


def _response(status_code: int) -> requests.Response:
    r = requests.Response()
    r.status_code = status_code
    return r


class FakeGet:
    """Replaces requests.get; records URLs and returns or raises a scripted value."""

    def __init__(self, result) -> None:
        self.result = result
        self.calls: list[tuple[str, float | None]] = []

    def __call__(self, url: str, timeout: float | None = None):
        self.calls.append((url, timeout))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture
def fake_get(monkeypatch: MonkeyPatch):
    def install(result) -> FakeGet:
        fake = FakeGet(result)
        monkeypatch.setattr(servo_client_mod.requests, "get", fake)
        return fake

    return install


@pytest.mark.unit
def test_origin_is_normalized_and_validated():
    c = ServoClient(origin="http://192.168.4.1/index.html")
    assert c.origin == "http://192.168.4.1"
    assert c.servo_url(True) == "http://192.168.4.1/servo?action=on"
    assert c.servo_url(False) == "http://192.168.4.1/servo?action=off"
    with pytest.raises(ValueError):
        ServoClient(origin="192.168.4.1")
    with pytest.raises(ValueError):
        ServoClient(origin="ftp://pico")


@pytest.mark.unit
async def test_ok_response_issues_exactly_one_get(fake_get):
    fake = fake_get(_response(200))
    c = ServoClient(origin="http://pico.test", timeout=None)

    result = await c.set_servo_state(True)

    assert result.ok
    assert result.action == "on"
    assert result.status_code == 200
    assert fake.calls == [("http://pico.test/servo?action=on", None)]


@pytest.mark.unit
async def test_non_ok_status_is_rejected_not_raised(fake_get):
    fake = fake_get(_response(503))
    c = ServoClient(origin="http://pico.test", timeout=2.0)

    result = await c.set_servo_state(False)

    assert result.outcome is ServoOutcome.REJECTED
    assert result.action == "off"
    assert result.status_code == 503
    # no retry
    assert fake.calls == [("http://pico.test/servo?action=off", 2.0)]


@pytest.mark.unit
async def test_connection_error_is_transport_failure(fake_get):
    fake = fake_get(requests.exceptions.ConnectionError("Connection refused"))
    c = ServoClient(origin="http://pico.test")

    result = await c.set_servo_state(True)

    assert result.outcome is ServoOutcome.TRANSPORT_FAILURE
    assert "Connection refused" in (result.error or "")
    assert result.status_code is None
    assert len(fake.calls) == 1


@pytest.mark.unit
async def test_ping_reports_reachability(fake_get):
    c = ServoClient(origin="http://pico.test")

    fake = fake_get(_response(404))
    assert await c.ping() is True
    assert fake.calls[0][0] == "http://pico.test/"

    fake_get(requests.exceptions.Timeout("timed out"))
    assert await c.ping() is False


@pytest.mark.unit
async def test_ping_is_bounded_even_when_servo_requests_are_not(fake_get):
    fake = fake_get(_response(200))

    unbounded = ServoClient(origin="http://pico.test", timeout=None, ping_timeout=1.5)
    await unbounded.ping()
    await unbounded.set_servo_state(True)
    assert fake.calls == [("http://pico.test/", 1.5), ("http://pico.test/servo?action=on", None)]

    tight = ServoClient(origin="http://pico.test", timeout=0.5, ping_timeout=1.5)
    assert tight.effective_ping_timeout == 0.5

    with pytest.raises(ValueError):
        ServoClient(origin="http://pico.test", ping_timeout=0)
