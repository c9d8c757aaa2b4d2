from __future__ import annotations

from typing import Optional, Tuple

import pygame

from blockfall.game import GameEngine, Phase


BACKGROUND = (10, 10, 14)
GRID_LINE = (51, 51, 51)
TEXT = (255, 255, 255)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (17, 17, 17),
        1: (0, 255, 255),  # I
        2: (255, 255, 0),  # O
        3: (128, 0, 128),  # T
        4: (0, 128, 0),    # S
        5: (255, 0, 0),    # Z
        6: (0, 0, 255),    # J
        7: (255, 165, 0),  # L
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, font_size: int = 28) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.font_size = font_size
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, engine: GameEngine) -> Tuple[int, int]:
        return (
            engine.width * self.cell_size + self.margin * 2,
            engine.height * self.cell_size + self.margin * 2,
        )

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.SysFont(None, self.font_size)
        return self._font

    def cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(
            self.margin + x * self.cell_size,
            self.margin + y * self.cell_size,
            self.cell_size,
            self.cell_size,
        )

    def _local_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size, self.cell_size)

    def _grid_surface(self, engine: GameEngine) -> pygame.Surface:
        state = engine.get_state()
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(_color_for_value(0))
        # Faint grid first, occupied cells are filled over it
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(surf, GRID_LINE, self._local_rect(x, y), 1)
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                if v != 0:
                    pygame.draw.rect(surf, _color_for_value(v), self._local_rect(x, y))
        return surf

    def _blit_centered(self, surface: pygame.Surface, text: str, center: Tuple[int, int]) -> None:
        img = self._get_font().render(text, True, TEXT)
        surface.blit(img, img.get_rect(center=center))

    def _draw_text(self, surface: pygame.Surface, engine: GameEngine) -> None:
        cx = self.margin + engine.width * self.cell_size // 2
        cy = self.margin + engine.height * self.cell_size // 2
        if engine.phase is Phase.NOT_STARTED:
            self._blit_centered(surface, "Press space to play", (cx, cy))
        elif engine.phase is Phase.GAME_OVER:
            self._blit_centered(surface, "Game over!", (cx, cy - 40))
            self._blit_centered(surface, f"Score: {engine.score}", (cx, cy))
            self._blit_centered(surface, "Press space to play again", (cx, cy + 40))
        else:
            self._blit_centered(surface, f"Score: {engine.score}", (cx, self.margin + 30))

    def render(self, surface: pygame.Surface, engine: GameEngine) -> None:
        surface.fill(BACKGROUND)
        surface.blit(self._grid_surface(engine), (self.margin, self.margin))
        self._draw_text(surface, engine)

    def draw(self, screen: pygame.Surface, engine: GameEngine) -> None:
        self.render(screen, engine)
        pygame.display.flip()
