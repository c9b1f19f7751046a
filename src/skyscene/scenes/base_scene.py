"""Base scene for the host window.

A scene is entered with the `Application` as context and drives that
application's `SkyEngine`. Subclasses supply input handling and drawing.
"""
from typing import Any, Optional


class BaseScene:
    def __init__(self):
        self.context: Any = None
        self.engine: Optional[Any] = None

    def on_enter(self, context: Any) -> None:  # context is the Application
        self.context = context
        self.engine = context.engine
        self.engine.start()

    def on_exit(self) -> None:
        if self.engine is not None:
            self.engine.stop()

    def handle_event(self, event: object) -> None:
        raise NotImplementedError()

    def update(self, dt: float) -> None:
        if self.engine is not None:
            self.engine.update(dt)

    def render(self, surface: object) -> None:
        raise NotImplementedError()
