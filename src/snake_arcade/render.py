# render.py
from typing import List, Optional, Tuple
import pygame # type: ignore

from .config import (
    CELL_SIZE, TEXT_MARGIN,
    BACKGROUND, FOOD, SNAKE, GAME_OVER, TEXT,
    Config,
)
from .game import Snapshot
from .loop import InputEvent, Key

KEYMAP = {
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_n: Key.N,
    pygame.K_f: Key.F,
    pygame.K_ESCAPE: Key.ESCAPE,
}

# ---------- Helpers ----------
def pixel_rect(gx: int, gy: int, cell_size: int = CELL_SIZE) -> Tuple[int, int, int, int]:
    return (gx * cell_size, gy * cell_size, cell_size, cell_size)

def load_font(path: Optional[str], size: int) -> pygame.font.Font:
    """Font from `path`, or pygame's bundled default when no path is given."""
    if path is None:
        return pygame.font.SysFont(None, size)
    return pygame.font.Font(path, size)

# ---------- Output ----------
class PygameRenderer:
    def __init__(self, screen: pygame.Surface, font: pygame.font.Font,
                 cell_size: int = CELL_SIZE, flip: bool = True):
        self.screen = screen
        self.font = font
        self.cell_size = cell_size
        self.flip = flip  # False when drawing to an off-screen surface

    def render(self, snap: Snapshot) -> None:
        self.screen.fill(BACKGROUND, pygame.Rect((0, 0), snap.area))

        self.draw_text(snap)

        if snap.playing:
            for x, y in snap.body:
                self.draw_cell(x, y, SNAKE)
            if snap.food is not None:
                self.draw_cell(snap.food.x, snap.food.y, FOOD)

        if self.flip:
            pygame.display.flip()

    def draw_cell(self, gx: int, gy: int, color: Tuple[int, int, int]) -> None:
        pygame.draw.rect(self.screen, color, pygame.Rect(pixel_rect(gx, gy, self.cell_size)))

    def draw_text(self, snap: Snapshot) -> None:
        if not snap.playing:
            self.text_at("push 'N' for new game", GAME_OVER, 140, 180)
            self.text_at("GAMEOVER", GAME_OVER, 140, 140)
            self.text_at(f"your score: {snap.score}", GAME_OVER, 140, 220)
            return

        self.text_right(f"SCORE: {snap.score}", TEXT, TEXT_MARGIN, TEXT_MARGIN, snap.area[0])
        if snap.show_fps:
            self.text_at(f"FPS: {snap.fps}", TEXT, TEXT_MARGIN, TEXT_MARGIN)

    def text_at(self, text: str, color: Tuple[int, int, int], x: int, y: int) -> None:
        surface = self.font.render(text, True, color)
        self.screen.blit(surface, (x, y))

    def text_right(self, text: str, color: Tuple[int, int, int], margin: int, y: int, width: int) -> None:
        surface = self.font.render(text, True, color)
        self.screen.blit(surface, (width - margin - surface.get_width(), y))

# ---------- Input ----------
class PygameEvents:
    def poll(self) -> List[InputEvent]:
        """Drain pygame's queue; only quit and the keys the game knows survive."""
        events = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                events.append(InputEvent.quit())
            elif event.type == pygame.KEYDOWN:
                key = KEYMAP.get(event.key)
                if key is not None:
                    events.append(InputEvent.key_down(key))
        return events

def open_window(cfg: Config) -> PygameRenderer:
    """Create the display and load the font. pygame must already be initialised."""
    screen = pygame.display.set_mode((cfg.screen_width, cfg.screen_height))
    pygame.display.set_caption("Snake")
    font = load_font(cfg.font_path, cfg.font_size)
    return PygameRenderer(screen, font, cfg.cell_size)
