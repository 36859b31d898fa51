# config.py
from dataclasses import dataclass
from typing import Optional

# ----- Window & grid -----
SCREEN_WIDTH, SCREEN_HEIGHT = 800, 600
CELL_SIZE = 15
GRID_W, GRID_H = SCREEN_WIDTH // CELL_SIZE, SCREEN_HEIGHT // CELL_SIZE  # 53 x 40

# ----- Colors -----
BACKGROUND = (245, 40, 5)
FOOD       = (0, 100, 200)
SNAKE      = (100, 200, 0)
GAME_OVER  = (255, 255, 50)
TEXT       = (255, 255, 255)

# ----- Text -----
FONT_SIZE = 30
TEXT_MARGIN = 10

# ----- Timing -----
MOVE_EVERY_MS = 50
FPS_WINDOW_MS = 1000

INITIAL_LENGTH = 10

# ----- Tunables (what the CLI can override) -----
@dataclass
class Config:
    seed: Optional[int] = None        # None -> unseeded food placement
    move_every_ms: int = MOVE_EVERY_MS
    initial_length: int = INITIAL_LENGTH
    screen_width: int = SCREEN_WIDTH
    screen_height: int = SCREEN_HEIGHT
    cell_size: int = CELL_SIZE
    font_path: Optional[str] = None   # None -> pygame's default font
    font_size: int = FONT_SIZE
    show_fps: bool = False
    fps_window_ms: int = FPS_WINDOW_MS

    @property
    def grid_width(self) -> int:
        return self.screen_width // self.cell_size

    @property
    def grid_height(self) -> int:
        return self.screen_height // self.cell_size

CFG = Config()
