"""HUD for the sky scene.

Draws the status badge in the top-left corner, a footer line in the
weather-aware footer colour and, while it is open, the override console
prompt with the output of the last command. It tolerates a missing font.
"""
from __future__ import annotations
from typing import List, Optional
import pygame

from skyscene.engine import SceneFrame
from skyscene.sky import parse_hex

FOOTER_TEXT = "Time and weather sky"


class HUD:
    def __init__(self):
        self.console_open = False
        self.prompt = ""
        self.output: List[str] = []
        try:
            self.font = pygame.font.Font(None, 22)
        except Exception:
            # fallback if font creation fails
            self.font = None

    def open_console(self) -> None:
        self.console_open = True
        self.prompt = ""

    def close_console(self) -> None:
        self.console_open = False
        self.prompt = ""

    def show(self, text: str) -> None:
        self.output = text.splitlines()[-12:] if text else []

    def display(self, surface: pygame.Surface, frame: SceneFrame, footer: Optional[str] = None) -> None:
        font = self.font
        if font is None:
            return
        # status badge
        badge = font.render(frame.status, True, (240, 240, 240))
        panel = pygame.Surface((badge.get_width() + 16, badge.get_height() + 10), pygame.SRCALPHA)
        panel.fill((0, 0, 0, 110))
        surface.blit(panel, (8, 8))
        surface.blit(badge, (16, 13))

        # footer
        text = font.render(footer or FOOTER_TEXT, True, parse_hex(frame.footer_color))
        surface.blit(text, ((surface.get_width() - text.get_width()) // 2, surface.get_height() - 28))

        if not self.console_open and not self.output:
            return
        lines = list(self.output)
        if self.console_open:
            lines.append("> " + self.prompt + "_")
        line_h = font.get_linesize()
        box_h = line_h * len(lines) + 12
        box = pygame.Surface((min(surface.get_width() - 16, 560), box_h), pygame.SRCALPHA)
        box.fill((0, 0, 0, 170))
        top = surface.get_height() - 44 - box_h
        surface.blit(box, (8, top))
        for i, line in enumerate(lines):
            surface.blit(font.render(line, True, (230, 230, 230)), (16, top + 6 + i * line_h))
