from __future__ import annotations

import random
from dataclasses import dataclass, field

from nicegui import binding

from pico_panel.constants import (
    BALLOON_VISIBLE_HEIGHT_PX,
    FIELD_HEIGHT_PX,
    FIELD_WIDTH_PX,
    GAME_TICK_LIMIT,
    STATUS_OFF_COLOR,
    STATUS_OFF_TEXT,
)


@binding.bindable_dataclass
class ServoPanelState:
    status_text: str = STATUS_OFF_TEXT
    status_color: str = STATUS_OFF_COLOR
    busy: bool = False  # a /servo request is in flight
    reachable: bool = False  # last reachability check result
    last_ping_ts: float = 0.0


@dataclass
class BalloonGame:
    """
    Counters and balloon position for one game.

    ``on_tick`` relocates the balloon and counts the tick until ``tick_limit``
    is reached, after which the game is finished and ticks are ignored.
    ``on_click`` pops the balloon and scores; it keeps scoring after the game
    is finished but has no effect on progression.
    """

    tick_limit: int = GAME_TICK_LIMIT
    field_width: int = FIELD_WIDTH_PX
    field_height: int = FIELD_HEIGHT_PX
    rng: random.Random = field(default_factory=random.Random, repr=False)
    score: int = 0
    count: int = 0
    x: float = 0.0
    y: float = 0.0
    balloon_height: int = 0
    finished: bool = False

    def __post_init__(self) -> None:
        if self.tick_limit <= 0:
            raise ValueError(f"tick_limit must be > 0, got {self.tick_limit}")
        if self.field_width <= 0 or self.field_height <= 0:
            raise ValueError(f"field size must be positive, got {self.field_width}x{self.field_height}")

    def reset(self) -> None:
        self.score = 0
        self.count = 0
        self.x = 0.0
        self.y = 0.0
        self.balloon_height = 0
        self.finished = False

    def on_click(self) -> int:
        """Pop the balloon; returns the new score."""
        self.score += 1
        self.balloon_height = 0
        return self.score

    def on_tick(self) -> bool:
        """
        Show the balloon at a random spot and count the tick.

        Returns True when this tick finished the game. Ticks after that are
        no-ops and return False.
        """
        if self.finished:
            return False
        self.balloon_height = BALLOON_VISIBLE_HEIGHT_PX
        self.x = self.rng.random() * self.field_width
        self.y = self.rng.random() * self.field_height
        self.count += 1
        if self.count >= self.tick_limit:
            self.finished = True
            return True
        return False
