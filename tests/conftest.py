from __future__ import annotations

import os

import pytest

# pico_panel.constants reads these at import time, so they are set before any test module imports it.
# Port 9 (discard) refuses connections immediately instead of hanging on an unroutable address.
os.environ.setdefault("PICO_SERVO_ORIGIN", "http://127.0.0.1:9")
os.environ.setdefault("PICO_PING_INTERVAL_S", "3600")
os.environ.setdefault("PICO_GAME_TICK_S", "3600")

pytest_plugins = ["nicegui.testing.user_plugin"]

from tests.utils.fakes import RecorderClient  # noqa: E402


@pytest.fixture
def recorder() -> RecorderClient:
    return RecorderClient()
