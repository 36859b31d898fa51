# headless.py
"""
Window-less stand-ins for the clock, the keyboard and the screen, so the real
GameLoop can be driven frame by frame (tests, the --headless CLI mode).
"""
from collections import deque
from dataclasses import replace
from typing import Deque, Iterable, List, Optional
import random

from .config import CFG, Config
from .game import GameState, Snapshot
from .loop import GameLoop, InputEvent


class ManualClock:
    """A clock that only moves when told to."""

    def __init__(self, now_ms: int = 0):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        if ms < 0:
            raise ValueError("clock cannot go backwards")
        self.now_ms += ms


class ScriptedEvents:
    """Hands out one pre-recorded batch of events per poll, then nothing."""

    def __init__(self, batches: Iterable[Iterable[InputEvent]] = ()):
        self.batches: Deque[List[InputEvent]] = deque(list(b) for b in batches)

    def push(self, *events: InputEvent) -> None:
        self.batches.append(list(events))

    def poll(self) -> List[InputEvent]:
        return self.batches.popleft() if self.batches else []


class NullRenderer:
    """Keeps the last snapshot instead of drawing it."""

    def __init__(self) -> None:
        self.frames = 0
        self.last: Optional[Snapshot] = None

    def render(self, snapshot: Snapshot) -> None:
        self.frames += 1
        self.last = snapshot


def run_headless(frames: int, frame_ms: int = 1, seed: Optional[int] = None,
                 cfg: Config = CFG,
                 events: Optional[ScriptedEvents] = None) -> GameState:
    """
    Run the game loop for `frames` iterations without a window.
    The clock moves `frame_ms` after every frame, so a movement tick happens
    every `cfg.move_every_ms / frame_ms` frames.
    """
    if seed is not None:
        cfg = replace(cfg, seed=seed)
    clock = ManualClock()
    loop = GameLoop(clock, events or ScriptedEvents(), NullRenderer(), cfg,
                    rng=random.Random(cfg.seed))
    for _ in range(frames):
        if not loop.step():
            break
        clock.advance(frame_ms)
    return loop.state
