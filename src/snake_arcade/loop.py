# loop.py
"""
Fixed-timestep driver: turns clock readings and key presses into GameState calls
and hands a snapshot to the renderer on every iteration.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Protocol
import logging
import random

from .config import CFG, Config
from .game import Direction, GameState, Snapshot, new_game_state

logger = logging.getLogger(__name__)

# Milliseconds since some fixed point; never goes backwards.
Clock = Callable[[], int]


# ---------- Input ----------
class Key(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    N = "n"
    F = "f"
    ESCAPE = "escape"


class EventKind(Enum):
    QUIT = "quit"
    KEY_DOWN = "key_down"


@dataclass(frozen=True)
class InputEvent:
    kind: EventKind
    key: Optional[Key] = None

    @classmethod
    def quit(cls) -> "InputEvent":
        return cls(EventKind.QUIT)

    @classmethod
    def key_down(cls, key: Key) -> "InputEvent":
        return cls(EventKind.KEY_DOWN, key)


ARROWS = {
    Key.UP: Direction.UP,
    Key.DOWN: Direction.DOWN,
    Key.LEFT: Direction.LEFT,
    Key.RIGHT: Direction.RIGHT,
}


class EventSource(Protocol):
    def poll(self) -> Iterable[InputEvent]:
        """Return every pending event without blocking."""
        ...


class Renderer(Protocol):
    def render(self, snapshot: Snapshot) -> None: ...


# ---------- FPS ----------
class FpsCounter:
    """Counts frames and publishes the count once per window (display only)."""

    def __init__(self, now_ms: int, window_ms: int = CFG.fps_window_ms):
        self.window_ms = window_ms
        self.window_start = now_ms
        self.frames = 0
        self.fps = 0

    def frame(self, now_ms: int) -> None:
        if now_ms - self.window_start >= self.window_ms:
            self.fps = self.frames
            self.window_start = now_ms
            self.frames = 0
        self.frames += 1


# ---------- Loop ----------
class GameLoop:
    """
    One owned GameState, replaced wholesale on "new game".

    Each iteration: read the clock, advance the snake if a movement tick is due,
    count the frame, drain input, render. Drawing is not time-gated, so the
    render rate is whatever the host manages.
    """

    def __init__(
        self,
        clock: Clock,
        events: EventSource,
        renderer: Renderer,
        cfg: Config = CFG,
        rng: Optional[random.Random] = None,
    ):
        self.clock = clock
        self.events = events
        self.renderer = renderer
        self.cfg = cfg
        self.rng = rng if rng is not None else random.Random(cfg.seed)

        now = clock()
        self.state: GameState = self._fresh_state(now)
        self.move_time = now
        self.fps = FpsCounter(now, cfg.fps_window_ms)
        self.show_fps = cfg.show_fps
        self.running = True
        self.frames = 0

    def _fresh_state(self, now_ms: int) -> GameState:
        return new_game_state(
            self.cfg.grid_width,
            self.cfg.grid_height,
            self.cfg.initial_length,
            now_ms,
            rng=self.rng,
        )

    def new_game(self) -> None:
        logger.info("new game (previous score %d)", self.state.score)
        self.state = self._fresh_state(self.clock())

    def handle(self, event: InputEvent) -> None:
        if event.kind is EventKind.QUIT or event.key is Key.ESCAPE:
            self.running = False
        elif event.key in ARROWS:
            self.state.set_direction(ARROWS[event.key])
        elif event.key is Key.N:
            self.new_game()
        elif event.key is Key.F:
            self.show_fps = not self.show_fps

    def step(self) -> bool:
        """Run one loop iteration. Returns False once the player has quit."""
        now = self.clock()
        if now - self.move_time >= self.cfg.move_every_ms:
            was_playing = not self.state.game_over
            alive = self.state.advance(now)
            if was_playing and not alive:
                logger.info("game over, score %d", self.state.score)
            self.move_time = now

        self.fps.frame(now)

        for event in self.events.poll():
            self.handle(event)
            if not self.running:
                return False

        self.renderer.render(self.state.snapshot(
            fps=self.fps.fps,
            show_fps=self.show_fps,
            area=(self.cfg.screen_width, self.cfg.screen_height),
        ))
        self.frames += 1
        return True

    def run(self, max_frames: Optional[int] = None) -> GameState:
        """Loop until quit (or `max_frames` rendered frames); returns the final state."""
        while self.running:
            if max_frames is not None and self.frames >= max_frames:
                break
            self.step()
        return self.state
