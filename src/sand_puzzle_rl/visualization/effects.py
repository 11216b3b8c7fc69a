from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

import pygame

from sand_puzzle_rl.game import ClearedCell, GameListener
from sand_puzzle_rl.game.rules import color_rgb


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    color: int
    life: float = 1.0


class ParticleSystem(GameListener):
    """Cosmetic burst for every grain removed by a clear."""

    def __init__(self, cell_size: int, fade: float = 0.03, rng: Optional[random.Random] = None) -> None:
        self.cell_size = cell_size
        self.fade = fade
        self.rng = rng or random.Random()
        self.particles: List[Particle] = []

    def on_clear(self, cells: Sequence[ClearedCell]) -> None:
        for cell in cells:
            self.particles.append(
                Particle(
                    x=float(cell.x * self.cell_size),
                    y=float(cell.y * self.cell_size),
                    vx=(self.rng.random() - 0.5) * 2,
                    vy=(self.rng.random() - 0.5) * 2,
                    color=cell.color,
                )
            )

    def update(self) -> None:
        alive: List[Particle] = []
        for p in self.particles:
            p.x += p.vx
            p.y += p.vy
            p.life -= self.fade
            if p.life > 0:
                alive.append(p)
        self.particles = alive

    def clear(self) -> None:
        self.particles = []

    def draw(self, screen: pygame.Surface, offset_x: int, offset_y: int) -> None:
        size = self.cell_size
        for p in self.particles:
            surf = pygame.Surface((size, size))
            surf.fill(color_rgb(p.color))
            surf.set_alpha(int(255 * p.life))
            screen.blit(surf, (offset_x + int(p.x), offset_y + int(p.y)))
