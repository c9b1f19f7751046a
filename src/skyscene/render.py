"""Compositor: draws a SceneFrame onto a pygame surface.

The engine only produces values; this module turns them into pixels. Layers
are painted back to front: background, gradient, accent, stars, moon, sun,
clouds, gloom, fog, precipitation, lightning. Gradient surfaces are cached per
(size, gradient) because they only change when the keyframe choice does.
"""
from __future__ import annotations

import logging
from typing import Dict, Tuple

import pygame

from skyscene.clouds import VARIANT_COLORS
from skyscene.engine import SceneFrame
from skyscene.precipitation import RAIN, SNOW
from skyscene.sky import Accent, Gradient

_logger = logging.getLogger("skyscene.render")

SUN_RADIUS = 38
MOON_RADIUS = 28
SUN_COLOR = (255, 226, 120)
SUN_GLOW = (255, 200, 90)
MOON_COLOR = (236, 236, 228)
RAIN_COLOR = (174, 194, 224)
SNOW_COLOR = (255, 255, 255)
STAR_COLOR = (255, 255, 240)
FOG_COLOR = (200, 204, 210)


def _alpha(opacity: float) -> int:
    return max(0, min(255, int(round(opacity * 255))))


def _sample(stops, offset: float):
    if offset <= stops[0][0]:
        return stops[0][1]
    for (o1, c1), (o2, c2) in zip(stops, stops[1:]):
        if offset <= o2:
            t = 0.0 if o2 == o1 else (offset - o1) / (o2 - o1)
            return tuple(int(a + (b - a) * t) for a, b in zip(c1, c2))
    return stops[-1][1]


class Compositor:
    def __init__(self, size: Tuple[int, int]):
        self.size = size
        self._cache: Dict[Tuple[Tuple[int, int], object], pygame.Surface] = {}

    def resize(self, size: Tuple[int, int]) -> None:
        self.size = size
        self._cache.clear()

    # ------------------------------------------------------------ gradients
    def gradient_surface(self, gradient: Gradient) -> pygame.Surface:
        key = (self.size, gradient)
        surf = self._cache.get(key)
        if surf is not None:
            return surf
        w, h = self.size
        surf = pygame.Surface((w, h))
        if gradient.kind == "radial":
            cx, cy = gradient.center[0] * w, gradient.center[1] * h
            reach = max(cx, w - cx) + max(cy, h - cy)
            steps = 64
            surf.fill(_sample(gradient.stops, 1.0))
            for i in range(steps, 0, -1):
                frac = i / steps
                rx, ry = reach * frac * 1.2, reach * frac
                rect = pygame.Rect(0, 0, int(rx * 2), int(ry * 2))
                rect.center = (int(cx), int(cy))
                pygame.draw.ellipse(surf, _sample(gradient.stops, frac), rect)
        else:
            for y in range(h):
                # offsets are measured from the bottom edge
                pygame.draw.line(surf, _sample(gradient.stops, 1.0 - y / max(1, h - 1)), (0, y), (w, y))
        self._cache[key] = surf
        return surf

    def accent_surface(self, accent: Accent) -> pygame.Surface:
        key = (self.size, accent)
        surf = self._cache.get(key)
        if surf is not None:
            return surf
        w, h = self.size
        surf = pygame.Surface((w, h), pygame.SRCALPHA)
        r, g, b, a = accent.color
        radius = accent.extent * max(w, h)
        center = (int(accent.center[0] * w), int(accent.center[1] * h))
        rings = 24
        for i in range(rings, 0, -1):
            frac = i / rings
            ring = pygame.Surface((w, h), pygame.SRCALPHA)
            pygame.draw.circle(ring, (r, g, b, _alpha(a * (1 - frac) / rings * 3)), center, int(radius * frac))
            surf.blit(ring, (0, 0))
        self._cache[key] = surf
        return surf

    def _blit_layer(self, target: pygame.Surface, layer: pygame.Surface, opacity: float) -> None:
        if opacity <= 0:
            return
        layer.set_alpha(_alpha(opacity))
        target.blit(layer, (0, 0))

    # --------------------------------------------------------------- drawing
    def draw(self, target: pygame.Surface, frame: SceneFrame) -> None:
        w, h = self.size
        target.fill(frame.background)
        self._blit_layer(target, self.gradient_surface(frame.gradient), frame.gradient_opacity)
        if frame.accent_opacity > 0:
            accent = self.accent_surface(frame.accent).copy()
            accent.set_alpha(_alpha(frame.accent_opacity))
            target.blit(accent, (0, 0))
        self._draw_stars(target, frame)
        self._draw_body(target, frame.moon, MOON_RADIUS, MOON_COLOR, None)
        self._draw_body(target, frame.sun, SUN_RADIUS, SUN_COLOR, SUN_GLOW)
        self._draw_clouds(target, frame)
        if frame.gloom is not None:
            self._blit_layer(target, self.gradient_surface(frame.gloom), frame.gloom_opacity)
        if frame.fog_opacity > 0:
            fog = pygame.Surface((w, h), pygame.SRCALPHA)
            fog.fill((*FOG_COLOR, _alpha(frame.fog_opacity * 0.55)))
            target.blit(fog, (0, 0))
        self._draw_precipitation(target, frame)
        if frame.lightning_opacity > 0:
            flash = pygame.Surface((w, h), pygame.SRCALPHA)
            flash.fill((255, 255, 255, _alpha(frame.lightning_opacity)))
            target.blit(flash, (0, 0))

    def _draw_stars(self, target, frame: SceneFrame) -> None:
        if frame.star_opacity <= 0:
            return
        layer = pygame.Surface(self.size, pygame.SRCALPHA)
        for s in frame.stars:
            a = _alpha(s.alpha * frame.star_opacity)
            if a:
                pygame.draw.circle(layer, (*STAR_COLOR, a), (int(s.x), int(s.y)), max(1, int(round(s.rendered_radius))))
        target.blit(layer, (0, 0))

    def _draw_body(self, target, body, radius, color, glow) -> None:
        if body.opacity <= 0:
            return
        w, h = self.size
        r = int(radius * body.scale)
        pad = r * 2
        layer = pygame.Surface((pad * 2, pad * 2), pygame.SRCALPHA)
        if glow is not None:
            pygame.draw.circle(layer, (*glow, 60), (pad, pad), int(r * 1.6))
        pygame.draw.circle(layer, (*color, 255), (pad, pad), r)
        layer.set_alpha(_alpha(body.opacity))
        target.blit(layer, (int(body.x * w) - pad, int(body.y * h) - pad))

    def _draw_clouds(self, target, frame: SceneFrame) -> None:
        if frame.cloud_opacity <= 0:
            return
        w, h = self.size
        for sprite, x, y in frame.clouds:
            cw, ch = int(180 * sprite.size), int(60 * sprite.size)
            puff = pygame.Surface((cw, ch), pygame.SRCALPHA)
            color = (*VARIANT_COLORS[sprite.variant], 255)
            pygame.draw.ellipse(puff, color, pygame.Rect(0, ch // 3, cw, ch * 2 // 3))
            pygame.draw.ellipse(puff, color, pygame.Rect(cw // 5, 0, cw // 2, ch * 3 // 4))
            pygame.draw.ellipse(puff, color, pygame.Rect(cw // 2, ch // 6, cw * 2 // 5, ch * 2 // 3))
            puff.set_alpha(_alpha(sprite.opacity * frame.cloud_opacity))
            target.blit(puff, (int(x * w), int(y * h)))

    def _draw_precipitation(self, target, frame: SceneFrame) -> None:
        if not frame.particles:
            return
        layer = pygame.Surface(self.size, pygame.SRCALPHA)
        if frame.precipitation == RAIN:
            for p in frame.particles:
                start = (int(p.x), int(p.y))
                end = (int(p.x + p.wind * 2), int(p.y + p.length))
                pygame.draw.line(layer, (*RAIN_COLOR, _alpha(p.opacity)), start, end, 1)
        elif frame.precipitation == SNOW:
            for p in frame.particles:
                pygame.draw.circle(layer, (*SNOW_COLOR, _alpha(p.opacity)), (int(p.x), int(p.y)), max(1, int(p.radius)))
        target.blit(layer, (0, 0))
