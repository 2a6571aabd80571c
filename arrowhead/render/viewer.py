"""Pygame window hosting the fractal generators."""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import pygame

from arrowhead.config import AppConfig
from arrowhead.graphics.canvas import SegmentCanvas, SegmentSurface
from arrowhead.patterns.generators import FractalGenerator
from arrowhead.patterns.library import load_menu

logger = logging.getLogger(__name__)


class FractalViewer:
    """
    Selector, iterate action and segment-count label around one canvas.

    SPACE iterates, R re-runs setup, LEFT/RIGHT or 1-9 pick a fractal.
    The view auto-zooms so growing curves stay inside the window.
    """

    def __init__(self, cfg: AppConfig) -> None:
        pygame.init()
        pygame.display.set_caption("Arrowhead fractals")
        self.cfg = cfg
        self.width = cfg.view_width
        self.height = cfg.view_height
        self.screen = pygame.display.set_mode((self.width, self.height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("consolas", cfg.font_size)
        self.running = True

        self.surface = SegmentSurface()
        self.canvas = SegmentCanvas(self.surface, min_split_length=cfg.min_split_length)
        self.menu = load_menu(self.canvas, cfg)

        # transient status line, e.g. when the segment cap is hit
        self.flash_text: Optional[str] = None

        # view / camera (auto-zoom)
        self.view_scale = 1.0
        self.view_off_x = 0.0
        self.view_off_y = 0.0
        self.info_height = 110

        self.current_index = 0
        self.select(0)

    @property
    def current(self) -> FractalGenerator:
        return self.menu[self.current_index]

    # ---- selection / generations ----

    def select(self, index: int) -> None:
        self.current_index = index % len(self.menu)
        self.flash_text = None
        self.current.setup()
        logger.info("selected %s (%d segments)", self.current.name, self.canvas.count())

    def advance(self) -> bool:
        """Run one generation unless the canvas is already past max_segments."""
        if self.canvas.count() > self.cfg.max_segments:
            self.flash_text = f"Segment cap {self.cfg.max_segments} reached; press R to reset."
            logger.warning("%s: %d segments exceeds cap, not iterating", self.current.name, self.canvas.count())
            return False
        self.current.iterate()
        logger.info(
            "%s: generation %d, %d segments",
            self.current.name,
            self.current.generation,
            self.canvas.count(),
        )
        return True

    # ---- camera / transform ----

    def update_view(self) -> None:
        """Auto-zoom so all segments fit below the info panel."""
        xs: List[float] = []
        ys: List[float] = []
        for seg in self.surface:
            xs.extend((seg.x1, seg.x2))
            ys.extend((seg.y1, seg.y2))
        if xs:
            min_x, max_x = min(xs), max(xs)
            min_y, max_y = min(ys), max(ys)
        else:
            min_x, max_x = 0.0, float(self.width)
            min_y, max_y = 0.0, float(self.height)

        # avoid zero-width / zero-height
        if abs(max_x - min_x) < 1e-6:
            cx = 0.5 * (min_x + max_x)
            min_x, max_x = cx - 1.0, cx + 1.0
        if abs(max_y - min_y) < 1e-6:
            cy = 0.5 * (min_y + max_y)
            min_y, max_y = cy - 1.0, cy + 1.0

        margin = 30
        avail_w = self.width - 2 * margin
        avail_h = self.height - self.info_height - 2 * margin
        world_w = max_x - min_x
        world_h = max_y - min_y
        self.view_scale = min(avail_w / world_w, avail_h / world_h)

        # centre the bounding box in the free area
        self.view_off_x = margin + (avail_w - world_w * self.view_scale) / 2.0 - min_x * self.view_scale
        self.view_off_y = (
            self.info_height + margin + (avail_h - world_h * self.view_scale) / 2.0 - min_y * self.view_scale
        )

    def world_to_screen(self, x: float, y: float) -> Tuple[int, int]:
        sx = x * self.view_scale + self.view_off_x
        sy = y * self.view_scale + self.view_off_y
        return int(round(sx)), int(round(sy))

    # --- input handling ---

    def handle_keydown(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self.running = False
            return

        if key == pygame.K_SPACE:
            self.advance()
            return

        if key == pygame.K_r:
            self.select(self.current_index)
            return

        if key == pygame.K_RIGHT:
            self.select(self.current_index + 1)
        elif key == pygame.K_LEFT:
            self.select(self.current_index - 1)
        elif pygame.K_1 <= key <= pygame.K_9:
            index = key - pygame.K_1
            if index < len(self.menu):
                self.select(index)

    # --- drawing ---

    def draw_segments(self) -> None:
        for seg in self.surface:
            p1 = self.world_to_screen(seg.x1, seg.y1)
            p2 = self.world_to_screen(seg.x2, seg.y2)
            pygame.draw.line(self.screen, self.cfg.stroke, p1, p2, self.cfg.stroke_width)

    def info_lines(self) -> List[str]:
        gen = self.current
        lines = [
            "SPACE: iterate   R: reset   LEFT/RIGHT or 1-9: select   ESC: quit",
            f"Fractal: {gen.name}  [{self.current_index + 1}/{len(self.menu)}]",
            f"Generation: {gen.generation}",
            f"Segments: {self.canvas.count()}",
        ]
        if self.flash_text:
            lines.append(self.flash_text)
        return lines

    def draw_info(self) -> None:
        y = 10
        for line in self.info_lines():
            surf = self.font.render(line, True, (220, 230, 240))
            self.screen.blit(surf, (10, y))
            y += surf.get_height() + 2

    # --- main loop ---

    def run(self) -> None:
        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    self.handle_keydown(event.key)

            self.update_view()

            self.screen.fill(self.cfg.background)
            self.draw_segments()
            self.draw_info()

            pygame.display.flip()
            self.clock.tick(self.cfg.fps)

        pygame.quit()
