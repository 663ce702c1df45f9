from __future__ import annotations

import logging
import sys
import threading
import weakref

_LEVEL_COLORS = {
    "DEBUG": "\033[36m",  # cyan
    "INFO": "\033[37m",  # light gray
    "WARNING": "\033[33m",  # yellow
    "ERROR": "\033[31m",  # red
    "CRITICAL": "\033[41m",  # red background
}
_RESET = "\033[0m"
_DIM = "\033[2m"


class AnsiColorFormatter(logging.Formatter):
    """Compact "HH:MM:SS LEVEL name: msg" lines, colored when stderr is a tty."""

    def __init__(self, colored: bool = True) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S"
        )
        self.colored = colored and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        if not self.colored:
            return line
        ts, _, rest = line.partition(" ")
        color = _LEVEL_COLORS.get(record.levelname, "")
        if color:
            rest = rest.replace(record.levelname, f"{color}{record.levelname}{_RESET}", 1)
        return f"{_DIM}{ts}{_RESET} {rest}"


# ---- NiceGUI ui.log sink ----

_log_widgets: set[weakref.ref] = set()
_widgets_lock = threading.Lock()


class UiLogHandler(logging.Handler):
    """Mirror log records into every registered NiceGUI ui.log widget."""

    def __init__(self, level: int = logging.INFO) -> None:
        super().__init__(level=level)
        self.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", "%H:%M:%S"))

    def emit(self, record: logging.LogRecord) -> None:
        if not _log_widgets:
            return
        line = self.format(record)
        with _widgets_lock:
            for ref in list(_log_widgets):
                widget = ref()
                if widget is None:
                    _log_widgets.discard(ref)
                    continue
                try:
                    widget.push(line)
                except Exception:
                    # client disconnected; the widget will not come back
                    _log_widgets.discard(ref)


def attach_ui_log(log_widget) -> None:
    """Register a ui.log widget as a sink for log records."""
    with _widgets_lock:
        _log_widgets.add(weakref.ref(log_widget))


def detach_ui_log(log_widget) -> None:
    with _widgets_lock:
        _log_widgets.discard(weakref.ref(log_widget))


def configure_logging(
    level: int = logging.INFO, use_color: bool = True, add_ui_handler: bool = True
) -> logging.Logger:
    """
    Configure the root logger once:
      - stderr handler with AnsiColorFormatter
      - optional UiLogHandler feeding the in-page log
    Calling it again only updates the level.
    """
    root = logging.getLogger()
    root.setLevel(level)

    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        console = logging.StreamHandler(stream=sys.stderr)
        console.setFormatter(AnsiColorFormatter(colored=use_color))
        root.addHandler(console)

    if add_ui_handler and not any(isinstance(h, UiLogHandler) for h in root.handlers):
        root.addHandler(UiLogHandler(level=logging.INFO))

    for handler in root.handlers:
        if not isinstance(handler, UiLogHandler):
            handler.setLevel(level)

    return root
