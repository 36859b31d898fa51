# game.py
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple
import logging
import random

from .config import CELL_SIZE

logger = logging.getLogger(__name__)

# Rejection sampling gives up after this many misses and scans for free cells.
SPAWN_ATTEMPTS = 1000

# ---------- Geometry ----------
class Cell(NamedTuple):
    x: int
    y: int


class Direction(Enum):
    LEFT  = (-1, 0)
    RIGHT = (1, 0)
    UP    = (0, -1)
    DOWN  = (0, 1)

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))


class Phase(Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


def next_cell(cell: Tuple[int, int], direction: Direction, grid_w: int, grid_h: int) -> Cell:
    """
    Move one cell in `direction`, wrapping around the grid edges.

    Stepping back from 0 lands on grid_w/grid_h (the cell count, not count - 1),
    and only stepping forward from exactly that value wraps to 0. So a snake
    crossing an edge spends one tick on the column/row just past the grid.
    """
    x, y = cell
    if direction is Direction.LEFT:
        x = grid_w if x == 0 else x - 1
    elif direction is Direction.RIGHT:
        x = 0 if x == grid_w else x + 1
    elif direction is Direction.UP:
        y = grid_h if y == 0 else y - 1
    else:
        y = 0 if y == grid_h else y + 1
    return Cell(x, y)


# ---------- Helpers ----------
def spawn_food(body: Sequence[Tuple[int, int]], grid_w: int, grid_h: int,
               rng: random.Random) -> Optional[Cell]:
    """Pick a uniformly random grid cell that is not on the body, or None if there is none."""
    occupied = set(body)
    for _ in range(SPAWN_ATTEMPTS):
        cell = Cell(rng.randrange(grid_w), rng.randrange(grid_h))
        if cell not in occupied:
            return cell

    free = [Cell(x, y) for y in range(grid_h) for x in range(grid_w) if (x, y) not in occupied]
    if not free:
        logger.warning("no free cell left for food on a %dx%d grid", grid_w, grid_h)
        return None
    return rng.choice(free)


def score_for(elapsed_ms: int) -> int:
    # elapsed is clamped to 1ms; two ticks can share a timestamp
    elapsed = max(elapsed_ms, 1)
    return int(1000 / elapsed * 100)


def initial_body(grid_w: int, grid_h: int, length: int) -> List[Cell]:
    """Horizontal snake, head at the grid center, tail trailing to the right."""
    if grid_w <= 0 or grid_h <= 0:
        raise ValueError(f"grid must be at least 1x1 cells, got {grid_w}x{grid_h}")
    if length <= 0:
        raise ValueError(f"initial snake length must be positive, got {length}")
    cx, cy = grid_w // 2, grid_h // 2
    if cx + length > grid_w:
        raise ValueError(f"a snake of length {length} does not fit a grid {grid_w} cells wide")
    return [Cell(cx + i, cy) for i in range(length)]


# ---------- Snapshot (what renderers get) ----------
@dataclass(frozen=True)
class Snapshot:
    area: Tuple[int, int]          # pixels
    phase: Phase
    body: Tuple[Cell, ...]         # head first
    food: Optional[Cell]
    score: int
    fps: int = 0
    show_fps: bool = False

    @property
    def playing(self) -> bool:
        return self.phase is Phase.PLAYING


# ---------- State ----------
@dataclass
class GameState:
    grid_w: int
    grid_h: int
    body: List[Cell]               # head at index 0
    direction: Direction
    food: Optional[Cell]
    score: int
    food_spawned_at: int           # ms timestamp the current food appeared
    phase: Phase = Phase.PLAYING
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def set_direction(self, direction: Direction) -> None:
        """Turn the snake; 180° reversals and turns after game over are ignored."""
        if self.game_over or direction is self.direction.opposite:
            return
        self.direction = direction

    def advance(self, now_ms: int) -> bool:
        """
        Advance the game by one tick.
        - Running into any body cell (tail included) ends the game and changes nothing else.
        - Otherwise every segment shifts one place toward the head.
        - Reaching the food grows the snake by its old tail cell and scores by time-to-eat.
        Returns True if alive, False if game over.
        """
        if self.game_over:
            return False

        head = self.body[0]
        new_head = next_cell(head, self.direction, self.grid_w, self.grid_h)

        # Self collision, checked against the body before it moves
        if new_head in self.body:
            self.phase = Phase.GAME_OVER
            logger.debug("game over at %s, score %d", new_head, self.score)
            return False

        last = self.body[-1]
        self.body.insert(0, new_head)
        self.body.pop()

        # food under the old head counts too
        if self.food is not None and self.food in (head, new_head):
            self.body.append(last)
            gained = score_for(now_ms - self.food_spawned_at)
            self.score += gained
            logger.debug("ate food at %s after %dms (+%d)", self.food,
                         now_ms - self.food_spawned_at, gained)
            self.food_spawned_at = now_ms
            self.food = spawn_food(self.body, self.grid_w, self.grid_h, self.rng)
        return True

    def reset(self, now_ms: int, initial_length: int) -> None:
        """Start over on the same grid, as if freshly constructed."""
        self.body = initial_body(self.grid_w, self.grid_h, initial_length)
        self.direction = Direction.LEFT
        self.phase = Phase.PLAYING
        self.score = 0
        self.food = spawn_food(self.body, self.grid_w, self.grid_h, self.rng)
        self.food_spawned_at = now_ms

    def snapshot(self, fps: int = 0, show_fps: bool = False,
                 area: Optional[Tuple[int, int]] = None) -> Snapshot:
        """Read-only view for a renderer; `area` defaults to the grid in pixels."""
        if area is None:
            area = (self.grid_w * CELL_SIZE, self.grid_h * CELL_SIZE)
        return Snapshot(
            area=area,
            phase=self.phase,
            body=tuple(self.body),
            food=self.food,
            score=self.score,
            fps=fps,
            show_fps=show_fps,
        )


def new_game_state(grid_w: int, grid_h: int, initial_length: int, now_ms: int,
                   rng: Optional[random.Random] = None) -> GameState:
    rng = rng if rng is not None else random.Random()
    body = initial_body(grid_w, grid_h, initial_length)
    food = spawn_food(body, grid_w, grid_h, rng)
    logger.debug("new %dx%d game, snake length %d, food at %s",
                 grid_w, grid_h, initial_length, food)
    return GameState(
        grid_w=grid_w,
        grid_h=grid_h,
        body=body,
        direction=Direction.LEFT,
        food=food,
        score=0,
        food_spawned_at=now_ms,
        rng=rng,
    )
