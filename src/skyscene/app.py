from __future__ import annotations

"""Application bootstrap and main loop for the sky scene.

Sets up logging, the engine and a pygame window, then runs a cooperative
asyncio loop: each display frame advances the engine, and the one-shot
weather detection task makes progress between frames.
"""
import asyncio
import logging
from typing import Optional

from skyscene.config import Config
from skyscene.engine import SkyEngine
from skyscene.logger import configure_logging
from skyscene.scenes.sky_scene import SkyScene
from skyscene.systems.weather_service import WeatherDetectionService


_logger = logging.getLogger("skyscene.app")


class Application:
    def __init__(self, config: Optional[Config] = None, clock=None):
        self.config = config or Config()
        configure_logging(self.config.debug)
        self.running = False
        service = None
        if self.config.detect_weather:
            service = WeatherDetectionService(
                latitude=self.config.latitude,
                longitude=self.config.longitude,
                timeout=self.config.weather_timeout,
            )
        self.engine = SkyEngine(self.config, clock=clock, weather_service=service)
        self.scene: Optional[SkyScene] = None
        _logger.info("Application initialized. window=%s detect=%s", self.config.window_size,
                     self.config.detect_weather)

    def run(self) -> None:
        asyncio.run(self._main())

    async def _main(self) -> None:
        try:
            import pygame  # type: ignore

            pygame.init()
            pygame.font.init()
        except Exception as e:
            _logger.exception("Failed to initialize pygame: %s", e)
            raise

        screen = pygame.display.set_mode(self.config.window_size, pygame.RESIZABLE)
        pygame.display.set_caption("Sky")
        clock = pygame.time.Clock()

        self.scene = SkyScene()
        self.scene.on_enter(self)
        detection = asyncio.create_task(self.engine.detect_weather()) if self.config.detect_weather else None

        self.running = True
        try:
            while self.running:
                dt = clock.tick(self.config.fps) / 1000.0
                for ev in pygame.event.get():
                    if ev.type == pygame.QUIT:
                        self.running = False
                    else:
                        self.scene.handle_event(ev)

                tick = getattr(self.engine.clock, "update", None)
                if tick is not None:
                    tick(dt)
                self.scene.update(dt)
                self.scene.render(screen)
                pygame.display.flip()
                # let the detection task run between frames
                await asyncio.sleep(0)
        except Exception:
            _logger.exception("Unhandled exception in main loop")
        finally:
            if detection is not None and not detection.done():
                detection.cancel()
            self.shutdown()
            pygame.quit()

    def shutdown(self) -> None:
        _logger.info("Shutting down application")
        if self.scene is not None:
            self.scene.on_exit()
            self.scene = None
