import argparse
import logging
import sys
import time
from dataclasses import dataclass, field
from functools import partial

from nicegui import Client, ui
from nicegui.elements.tooltip import Tooltip

from pico_panel.common.logging_config import attach_ui_log, configure_logging
from pico_panel.common.theme import apply_theme, get_theme, toggle_theme
from pico_panel.constants import (
    LOG_LEVEL,
    PING_INTERVAL_S,
    SERVER_HOST,
    SERVER_PORT,
    SERVO_ORIGIN,
)
from pico_panel.pages.balloon import BalloonPage
from pico_panel.pages.servo import ServoPage
from pico_panel.services.servo_client import client

# Runtime configuration (resolved later from CLI/env)
RUNTIME_SERVER_HOST = SERVER_HOST
RUNTIME_SERVER_PORT = SERVER_PORT


# ------------------------ Per-client UI/state ------------------------


@dataclass
class Panel:
    """Everything one browser tab owns: its pages, footer widgets and ping timer."""

    servo: ServoPage = field(default_factory=ServoPage)
    balloon: BalloonPage = field(default_factory=BalloonPage)
    pico_status_label: ui.label | None = None
    pico_tooltip: Tooltip | None = None
    ping_timer: ui.timer | None = None


# Live panels by client id; entries of deleted clients are pruned on the next page load
panels: dict[str, Panel] = {}


def current_panel() -> Panel:
    """Panel of the client in the current UI context."""
    return panels[ui.context.client.id]


# --------------- Connectivity Check ---------------


async def check_ping(panel: Panel) -> None:
    """Ping the device root and update this panel's footer indicator."""
    reachable = await client.ping()
    state = panel.servo.state
    if reachable != state.reachable:
        logging.info("Pico %s", "reachable" if reachable else "unreachable")
    state.reachable = reachable
    state.last_ping_ts = time.time()

    if panel.pico_status_label:
        if panel.pico_tooltip:
            panel.pico_tooltip.text = "connected" if reachable else "unreachable"
        panel.pico_status_label.style("color: #21BA45" if reachable else "color: #DB2828")


# --------------- Layout ---------------


def build_header_and_tabs(panel: Panel) -> None:
    with (
        ui.header().classes("p-0"),
        ui.row().classes("w-full items-center justify-between"),
    ):
        with ui.tabs() as main_tabs:
            servo_tab = ui.tab("Servo")
            balloon_tab = ui.tab("Balloon")
        ui.label(client.origin).classes("text-sm text-center")
        ui.button(icon="contrast", on_click=toggle_theme).props("round flat")

    with ui.tab_panels(main_tabs, value=servo_tab).classes("w-full"):
        with ui.tab_panel(servo_tab):
            panel.servo.build()
        with ui.tab_panel(balloon_tab):
            panel.balloon.build()


def build_footer(panel: Panel) -> None:
    with ui.footer().classes("justify-between items-center px-3 py-1"):
        with ui.row().classes("items-center gap-4"):
            panel.pico_status_label = ui.label("PICO").classes("text-sm").style("color: #9E9E9E")
            with panel.pico_status_label:
                panel.pico_tooltip = ui.tooltip("unknown")
        ui.label().bind_text_from(
            panel.servo.state,
            "busy",
            backward=lambda b: "request in flight" if b else "",
        ).classes("text-sm text-[var(--pico-muted)]")


@ui.page("/")
def index() -> None:
    for client_id in [cid for cid in panels if cid not in Client.instances]:
        del panels[client_id]
    panel = Panel()
    panels[ui.context.client.id] = panel

    apply_theme(get_theme())
    ui.query(".nicegui-content").classes("p-0")

    build_header_and_tabs(panel)
    build_footer(panel)

    if panel.servo.response_log:
        attach_ui_log(panel.servo.response_log)

    panel.ping_timer = ui.timer(interval=PING_INTERVAL_S, callback=partial(check_ping, panel))


if __name__ in {"__main__", "__mp_main__"}:
    # CLI: web bind, device origin, and log level
    parser = argparse.ArgumentParser(description="Pico servo panel and balloon game")
    parser.add_argument("--host", default=SERVER_HOST, help="Webserver bind host")
    parser.add_argument(
        "--port", type=int, default=SERVER_PORT, help="Webserver bind port"
    )
    parser.add_argument(
        "--origin",
        default=SERVO_ORIGIN,
        help="Device origin serving /servo, e.g. http://192.168.4.1",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set log level",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity; -v=INFO, -vv=DEBUG",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Enable WARNING logging"
    )
    args, _ = parser.parse_known_args()

    RUNTIME_SERVER_HOST = args.host
    RUNTIME_SERVER_PORT = int(args.port)
    client.origin = args.origin

    # explicit --log-level > -v/-q > env default from constants
    if args.log_level:
        RUNTIME_LOG_LEVEL = getattr(logging, args.log_level)
    elif args.verbose >= 2:
        RUNTIME_LOG_LEVEL = logging.DEBUG
    elif args.verbose == 1:
        RUNTIME_LOG_LEVEL = logging.INFO
    elif args.quiet:
        RUNTIME_LOG_LEVEL = logging.WARNING
    else:
        RUNTIME_LOG_LEVEL = LOG_LEVEL

    configure_logging(RUNTIME_LOG_LEVEL)
    logging.info(
        f"Webserver bind: host={RUNTIME_SERVER_HOST} port={RUNTIME_SERVER_PORT}"
    )
    logging.info(f"Servo origin: {client.origin}")

    ui.run(
        title="Pico Panel",
        host=RUNTIME_SERVER_HOST,
        port=RUNTIME_SERVER_PORT,
        reload=False,
        show=False,
        loop="uvloop" if sys.platform != "win32" else "asyncio",
        http="httptools",
        ws="wsproto",
    )
