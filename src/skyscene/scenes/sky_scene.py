"""The only scene: the animated sky with its HUD.

Keys: `/` or `Enter` opens the override console, `Esc` closes it (or clears
the console output), `F5` forces a resolution pass.
"""
from __future__ import annotations

from datetime import datetime
import logging

import pygame

from skyscene.render import Compositor
from skyscene.scenes.base_scene import BaseScene
from skyscene.ui.hud import HUD

_logger = logging.getLogger("skyscene.sky_scene")


class SkyScene(BaseScene):
    def on_enter(self, context):
        _logger.info("Entering SkyScene")
        self.compositor = Compositor(context.config.window_size)
        self.hud = HUD()
        super().on_enter(context)

    def on_exit(self):
        _logger.info("Exiting SkyScene")
        super().on_exit()

    def handle_event(self, event):
        if event.type == pygame.VIDEORESIZE:
            size = (max(1, event.w), max(1, event.h))
            self.compositor.resize(size)
            self.engine.resize(*size)
            return
        if event.type != pygame.KEYDOWN:
            return
        if self.hud.console_open:
            self._console_key(event)
            return
        if event.key in (pygame.K_SLASH, pygame.K_RETURN):
            self.hud.open_console()
        elif event.key == pygame.K_ESCAPE:
            self.hud.show("")
        elif event.key == pygame.K_F5:
            self.engine.refresh()

    def _console_key(self, event):
        if event.key == pygame.K_ESCAPE:
            self.hud.close_console()
        elif event.key == pygame.K_RETURN:
            line = self.hud.prompt
            self.hud.close_console()
            self.hud.show(self.engine.console.execute(line))
        elif event.key == pygame.K_BACKSPACE:
            self.hud.prompt = self.hud.prompt[:-1]
        elif event.unicode and event.unicode.isprintable():
            self.hud.prompt += event.unicode

    def render(self, surface):
        frame = self.engine.frame()
        self.compositor.draw(surface, frame)
        self.hud.display(surface, frame, datetime.now().strftime("Local time %H:%M"))
