# pathviz/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinding Visualizer Viewer: grid editing + solver controls + metrics

- Mouse:
    left click/drag on empty cells -> toggle walls
    drag Start / End               -> move it
- Keyboard:
    [1]..[5]     -> select solver (BFS / DFS / Dijkstra / A* / Greedy)
    [SPACE]      -> run
    [C]          -> clear
    [G]          -> cycle maze generator (selection only)
    [+]/[-]      -> reveal speed
    [Q]/[ESC]    -> quit

Config: see pathviz.config (PATHVIZ_* env vars or --key=value args).
"""

# --- bootstrap import path so `from pathviz...` works when run as a script ---
import sys, os, logging
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# -------------------------------------------------------------------------

from typing import Dict, List, Optional, Tuple
import pygame

from pathviz.config import Settings, load_settings
from pathviz.core.session import GENERATORS, PathfinderSession
from pathviz.core.strategies import Strategy
from pathviz.core.types import Cell, CellChange, CellState

logger = logging.getLogger(__name__)

# ---------- Layout ----------
PANEL_W = 300            # right band: metrics + buttons
GRID_MARGIN = 16
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
GRID_LINE   = ( 60, 64, 72)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
NEON_CYAN   = (  0,150,255)
NEON_MINT   = (  0,255,200)
EMPTY_GRAY  = (200,200,200)

CARD_BG     = (24,28,36)
BUTTON_OFF  = (36, 40, 48)
BUTTON_ON   = (58, 86, 160)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

CELL_COLORS: Dict[CellState, Tuple[int, int, int]] = {
    CellState.EMPTY:   EMPTY_GRAY,
    CellState.WALL:    BLACK,
    CellState.START:   BLUE,
    CellState.END:     RED,
    CellState.VISITED: NEON_CYAN,
    CellState.PATH:    NEON_MINT,
}

SOLVER_KEYS = {
    pygame.K_1: Strategy.BFS,
    pygame.K_2: Strategy.DFS,
    pygame.K_3: Strategy.DIJKSTRA,
    pygame.K_4: Strategy.ASTAR,
    pygame.K_5: Strategy.GREEDY,
}


def color_for(state: CellState) -> Tuple[int, int, int]:
    return CELL_COLORS[state]


def cell_at(pos: Tuple[int, int], origin: Tuple[int, int], cell_size: int, size: int) -> Optional[Cell]:
    """Grid (row, col) under a pixel position, or None outside the grid."""
    x, y = pos
    ox, oy = origin
    if cell_size <= 0 or x < ox or y < oy:
        return None
    col = (x - ox) // cell_size
    row = (y - oy) // cell_size
    if row >= size or col >= size:
        return None
    return (int(row), int(col))


# ---------- Panel button ----------
class Button:
    """Solid panel button; `active` marks the selected solver."""

    def __init__(self, label: str, rect: pygame.Rect, callback):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.active = False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        pygame.draw.rect(screen, BUTTON_ON if self.active else BUTTON_OFF, self.rect, border_radius=8)
        text = font.render(self.label, True, TEXT_LIGHT)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def hit(self, pos: Tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


# ---------- Viewer ----------
class Viewer:
    def __init__(self, session: PathfinderSession):
        pygame.init()

        self.session = session
        self.cell_size = session.settings.cell_size
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        n = session.grid.size
        win_w = GRID_MARGIN*2 + n * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN*2 + n * self.cell_size, 560)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathfinding Visualizer")

        self._buttons: List[Button] = []
        self._layout(win_w, win_h)

        self.clock = pygame.time.Clock()
        self._painting = False
        self._last_painted: Optional[Cell] = None
        self._dragging: Optional[Cell] = None   # endpoint being dragged
        self._generator_idx = -1
        self._revealed = 0
        session.subscribe(self._on_change)

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and place the grid."""
        n = self.session.grid.size
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(4, min(avail_w // n, avail_h // n)))

        self._grid_origin = (GRID_MARGIN, GRID_MARGIN)
        grid_plate_w = n * self.cell_size + 2 * GRID_MARGIN
        self._right_band = pygame.Rect(grid_plate_w, 0, max(PANEL_W, win_w - grid_plate_w), win_h)
        self._build_buttons()

    def run(self):
        while True:
            self._handle_events()
            self.session.advance(self.clock.get_time())
            self._draw()
            self.clock.tick(60)

    # ---------- input ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key in (pygame.K_SPACE, pygame.K_RETURN):
                    self._run()
                elif e.key == pygame.K_c:
                    self._clear()
                elif e.key == pygame.K_g:
                    self._cycle_generator()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(2.0)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(0.5)
                elif e.key in SOLVER_KEYS:
                    self._select(SOLVER_KEYS[e.key])
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                btn = next((b for b in self._buttons if b.hit(e.pos)), None)
                if btn is not None:
                    btn.callback()
                    continue
                self._mouse_down(e.pos)
            elif e.type == pygame.MOUSEMOTION:
                self._mouse_over(e.pos)
            elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
                self._painting = False
                self._dragging = None
                self._last_painted = None

    def _cell_at(self, pos) -> Optional[Cell]:
        return cell_at(pos, self._grid_origin, self.cell_size, self.session.grid.size)

    def _mouse_down(self, pos):
        cell = self._cell_at(pos)
        if cell is None:
            return
        if self.session.grid.state_of(cell).is_endpoint:
            self._dragging = cell
            return
        self._painting = True
        self._last_painted = cell
        self.session.toggle_wall(*cell)

    def _mouse_over(self, pos):
        cell = self._cell_at(pos)
        if cell is None:
            return
        if self._dragging is not None and cell != self._dragging:
            if self.session.grid.state_of(cell) is not CellState.WALL and \
                    self.session.move_endpoint(*self._dragging, *cell):
                self._dragging = cell
        elif self._painting and cell != self._last_painted:
            self._last_painted = cell
            self.session.toggle_wall(*cell)

    # ---------- actions ----------
    def _on_change(self, change: CellChange):
        self._revealed += 1

    def _run(self):
        self._revealed = 0
        self.session.run()
        self._refresh_active_states()

    def _clear(self):
        self._revealed = 0
        self.session.clear()
        self._refresh_active_states()

    def _select(self, strategy: Strategy):
        self.session.select_solver(strategy)
        self._refresh_active_states()

    def _cycle_generator(self):
        self._generator_idx = (self._generator_idx + 1) % len(GENERATORS)
        self.session.select_generator(GENERATORS[self._generator_idx])

    def _bump_speed(self, factor: float):
        sched = self.session.scheduler
        sched.speed = max(0.25, min(16.0, sched.speed * factor))

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill((24, 26, 32))
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        for r, row in enumerate(self.session.snapshot()):
            for c, state in enumerate(row):
                rect = pygame.Rect(ox + c*cs, oy + r*cs, cs, cs)
                pygame.draw.rect(self.screen, color_for(state), rect)
                pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

        for cell, label in ((self.session.start, "S"), (self.session.end, "E")):
            if cs >= 12:
                r, c = cell
                txt = self.font_small.render(label, True, WHITE)
                self.screen.blit(txt, txt.get_rect(center=(ox + c*cs + cs//2, oy + r*cs + cs//2)))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        rb = self._right_band
        w, h, gap = max(160, rb.width - 32), 34, 8
        actions = [("Run", self._run), ("Clear", self._clear)]
        actions += [(f"Solver: {s.label}", lambda s=s: self._select(s)) for s in Strategy]
        actions.append(("Generator: next", self._cycle_generator))

        y = rb.y + 230  # below the metrics card
        self._buttons = []
        for label, cb in actions:
            self._buttons.append(Button(label, pygame.Rect(rb.x + 16, y, w, h), cb))
            y += h + gap
        self._solver_buttons: Dict[Strategy, Button] = dict(zip(Strategy, self._buttons[2:]))
        self._refresh_active_states()

    def _refresh_active_states(self):
        for strategy, btn in self._solver_buttons.items():
            btn.active = self.session.solver is strategy

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        pygame.draw.rect(self.screen, CARD_BG, (rb.x + 10, rb.y + 10, rb.width - 20, 210),
                         border_radius=14)

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        res = self.session.last_result
        m = res.metrics if res else {}
        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"Status: {self.session.status.value}")
        line(f"Visited: {m.get('visited', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        line(f"Revealed: {self._revealed}")
        line(f"Pending: {self.session.scheduler.pending}")
        line(f"Solver: {self.session.solver.label}")
        line(f"Speed: x{self.session.scheduler.speed:g}")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main(settings: Optional[Settings] = None):
    logging.basicConfig(
        level=os.getenv("PATHVIZ_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = settings or load_settings()
    except ValueError as ex:
        logger.error("Invalid settings: %s", ex)
        sys.exit(2)
    Viewer(PathfinderSession(settings)).run()

if __name__ == "__main__":
    main()
