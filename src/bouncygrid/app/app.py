"""Top-level application orchestration."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import pygame

from bouncygrid.core.config import AppConfig
from bouncygrid.input.scroll import ScrollView
from bouncygrid.input.touch import TouchInput
from bouncygrid.layout.bouncy import BouncyLayout
from bouncygrid.physics.springs import SpringEngine
from bouncygrid.rendering.renderer import Renderer
from bouncygrid.utils.clock import FrameClock

logger = logging.getLogger(__name__)


@dataclass
class BouncyGridApp:
    config: AppConfig

    def __post_init__(self) -> None:
        pygame.init()
        window = self.config.window
        pygame.display.set_caption(window.title)

        flags = pygame.FULLSCREEN if window.fullscreen else 0
        self.screen = pygame.display.set_mode(window.size, flags)

        self.clock = FrameClock(target_fps=window.target_fps, max_frame_time=self.config.springs.max_frame_time)
        self.touch = TouchInput()
        self.engine = SpringEngine(config=self.config.springs)
        self.layout = BouncyLayout(
            flow_config=self.config.flow,
            layout_config=self.config.layout,
            engine=self.engine,
        )
        self.scroll_view = ScrollView(self.screen.get_size(), self.layout, self.touch)
        self.renderer = Renderer(config=window, screen=self.screen)
        self.layout.prepare_pass()
        logger.info(
            "Window %dx%d, %d sections, %d items attached",
            *self.screen.get_size(), len(self.layout.flow.section_counts), len(self.layout.visible_items),
        )

    def run(self) -> None:
        running = True
        while running:
            dt = self.clock.tick()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                self.touch.handle_event(event)

            self.scroll_view.scroll_by(self.touch.consume_scroll())
            self.engine.step(dt)
            # The running simulation keeps invalidating the layout, like a
            # dynamic animator does; passes with nothing to change are no-ops.
            self.layout.prepare_pass()

            self.renderer.draw(self.layout, self.scroll_view.bounds, self.touch.state)
            pygame.display.flip()

        self.layout.detach()
        pygame.quit()
        logger.info("Shut down")
