from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from sand_puzzle_rl.game import PALETTE_RGB, Piece, RenderState
from sand_puzzle_rl.game.rules import color_rgb
from sand_puzzle_rl.game.session import GamePhase


BACKGROUND = (10, 10, 14)
BOARD = (0, 0, 0)
DANGER = (160, 30, 30)
TEXT = (230, 230, 230)


def _palette_lut() -> np.ndarray:
    lut = np.zeros((len(PALETTE_RGB) + 1, 3), dtype=np.uint8)
    lut[0] = BOARD
    lut[1:] = np.array(PALETTE_RGB, dtype=np.uint8)
    return lut


class Renderer:
    def __init__(self, cell_size: int = 4, margin: int = 20, preview_cell: int = 4) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.preview_cell = preview_cell
        self._lut = _palette_lut()
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, cols: int, rows: int) -> Tuple[int, int]:
        board_w = cols * self.cell_size
        board_h = rows * self.cell_size
        side_panel_w = 40 * self.preview_cell
        return self.margin * 3 + board_w + side_panel_w, self.margin * 2 + board_h

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        return self._font

    def _grid_surface(self, grid: np.ndarray) -> pygame.Surface:
        # surfarray expects (width, height, 3)
        rgb = self._lut[grid.astype(np.int16)].transpose(1, 0, 2)
        surf = pygame.surfarray.make_surface(rgb)
        h, w = grid.shape
        return pygame.transform.scale(surf, (w * self.cell_size, h * self.cell_size))

    def _draw_piece(self, screen: pygame.Surface, piece: Piece, x0: int, y0: int, cell: int) -> None:
        color = color_rgb(piece.color)
        for px, py in piece.cells_at(0, 0):
            rect = pygame.Rect(x0 + px * cell, y0 + py * cell, cell, cell)
            pygame.draw.rect(screen, color, rect)

    def draw(self, screen: pygame.Surface, state: RenderState) -> None:
        screen.fill(BACKGROUND)
        board = self._grid_surface(state.grid)
        screen.blit(board, (self.margin, self.margin))

        # Danger line
        limit_y = self.margin + state.danger_row * self.cell_size
        pygame.draw.line(screen, DANGER, (self.margin, limit_y), (self.margin + board.get_width(), limit_y), 1)

        if state.piece is not None:
            self._draw_piece(
                screen,
                state.piece,
                self.margin + state.piece.x * self.cell_size,
                self.margin + state.piece.y * self.cell_size,
                self.cell_size,
            )

        panel_x = self.margin * 2 + board.get_width()
        font = self._font_obj()
        screen.blit(font.render("Next", True, TEXT), (panel_x, self.margin))
        if state.next_piece is not None:
            self._draw_piece(screen, state.next_piece, panel_x, self.margin + 24, self.preview_cell)
        text_y = self.margin + 24 + 30 * self.preview_cell
        screen.blit(font.render(f"Score {state.score}", True, TEXT), (panel_x, text_y))
        screen.blit(font.render(f"Level {state.level}", True, TEXT), (panel_x, text_y + 24))
        if state.phase is GamePhase.GAME_OVER:
            screen.blit(font.render("Game Over", True, DANGER), (panel_x, text_y + 60))
            screen.blit(font.render("R: restart  Esc: quit", True, TEXT), (panel_x, text_y + 84))
