from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlsplit

import requests
from nicegui import run

from pico_panel.constants import PING_INTERVAL_S, REQUEST_TIMEOUT_S, SERVO_ORIGIN, SERVO_PATH

logger = logging.getLogger(__name__)


class ServoOutcome(str, Enum):
    OK = "ok"
    REJECTED = "rejected"  # device answered with a non-ok status
    TRANSPORT_FAILURE = "transport_failure"  # no answer at all


@dataclass(frozen=True)
class ServoResult:
    action: str  # "on" | "off"
    outcome: ServoOutcome
    status_code: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is ServoOutcome.OK


class ServoClient:
    """
    HTTP client for the Pico servo endpoint.

    Each call issues exactly one GET; there is no retry. Failures come back as
    ServoResult values instead of exceptions.
    """

    def __init__(
        self,
        origin: str = SERVO_ORIGIN,
        timeout: float | None = REQUEST_TIMEOUT_S,
        ping_timeout: float = PING_INTERVAL_S,
    ) -> None:
        if ping_timeout <= 0:
            raise ValueError(f"ping_timeout must be > 0, got {ping_timeout}")
        self.origin = origin
        self.timeout = timeout
        self.ping_timeout = ping_timeout

    @property
    def origin(self) -> str:
        return self._origin

    @origin.setter
    def origin(self, value: str) -> None:
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Servo origin must be an http(s) URL, got {value!r}")
        self._origin = f"{parts.scheme}://{parts.netloc}"

    def servo_url(self, desired_on: bool) -> str:
        action = "on" if desired_on else "off"
        return f"{self.origin}{SERVO_PATH}?action={action}"

    def _get(self, url: str, timeout: float | None) -> requests.Response:
        return requests.get(url, timeout=timeout)

    async def set_servo_state(self, desired_on: bool) -> ServoResult:
        """Send GET /servo?action=on|off and classify the response."""
        action = "on" if desired_on else "off"
        url = self.servo_url(desired_on)
        try:
            response = await run.io_bound(self._get, url, self.timeout)
        except requests.exceptions.RequestException as e:
            logger.debug("GET %s failed: %s", url, e)
            return ServoResult(action, ServoOutcome.TRANSPORT_FAILURE, error=str(e))
        if response is None:
            # run.io_bound yields None while the app is shutting down
            return ServoResult(action, ServoOutcome.TRANSPORT_FAILURE, error="request cancelled")
        if not response.ok:
            return ServoResult(action, ServoOutcome.REJECTED, status_code=response.status_code)
        return ServoResult(action, ServoOutcome.OK, status_code=response.status_code)

    @property
    def effective_ping_timeout(self) -> float:
        """Pings are always bounded, even when servo requests are not."""
        if self.timeout is None:
            return self.ping_timeout
        return min(self.timeout, self.ping_timeout)

    async def ping(self) -> bool:
        """Reachability check: any HTTP answer from the device root counts."""
        try:
            response = await run.io_bound(self._get, f"{self.origin}/", self.effective_ping_timeout)
        except requests.exceptions.RequestException:
            return False
        return response is not None


# Module-level singleton instance
client = ServoClient()
