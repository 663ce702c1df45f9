from __future__ import annotations

import logging
import os
from pathlib import Path

# Repository root
REPO_ROOT = Path(__file__).resolve().parent.parent

# Device target (the Pico W serving /servo)
SERVO_ORIGIN: str = os.getenv("PICO_SERVO_ORIGIN", "http://192.168.4.1")
SERVO_PATH = "/servo"


def _resolve_timeout() -> float | None:
    s = os.getenv("PICO_REQUEST_TIMEOUT")
    if not s:
        return None
    return float(s)


# None means requests waits indefinitely, like the browser fetch it replaces
REQUEST_TIMEOUT_S: float | None = _resolve_timeout()
# Reachability check interval for the footer indicator
PING_INTERVAL_S: float = float(os.getenv("PICO_PING_INTERVAL_S", "2.0"))

# Webserver bind (NiceGUI host/port)
SERVER_HOST: str = os.getenv("PICO_SERVER_IP", "0.0.0.0")
SERVER_PORT: int = int(os.getenv("PICO_SERVER_PORT", "8080"))

# Status display
STATUS_ON_TEXT = "Servo: ON"
STATUS_OFF_TEXT = "Servo: OFF"
STATUS_ON_COLOR = "#4CAF50"
STATUS_OFF_COLOR = "#333"
UNREACHABLE_ALERT = "Failed to communicate with Pico. Please check connection."

# Balloon game
GAME_TICK_S: float = float(os.getenv("PICO_GAME_TICK_S", "1.0"))
GAME_TICK_LIMIT: int = int(os.getenv("PICO_GAME_TICK_LIMIT", "20"))
FIELD_WIDTH_PX = 800
FIELD_HEIGHT_PX = 600
BALLOON_VISIBLE_HEIGHT_PX = 100


def _resolve_log_level() -> int:
    s = os.getenv("PICO_LOG_LEVEL")
    if s:
        name = s.strip().upper()
        mapping = {
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "ERROR": logging.ERROR,
            "CRITICAL": logging.CRITICAL,
        }
        return mapping.get(name, logging.WARNING)
    else:
        return logging.WARNING


LOG_LEVEL: int = _resolve_log_level()
