"""Override console: the text control surface over StateResolver.

Commands are `set <code>`, `get`, `reset` and `help`. The console validates
nothing itself and never touches rendering state; everything goes through the
resolver, which triggers the render pass.
"""
from __future__ import annotations

import logging
from typing import Tuple

from skyscene.state import InvalidStateCode, StateResolver, WeatherCode

_logger = logging.getLogger("skyscene.console")


def _help_text() -> str:
    letters = "\n".join(f"  {w.letter} = {w.label}" for w in WeatherCode)
    return (
        "Sky override commands:\n"
        "  set <code>   force hour and weather, e.g. set 14a or set 6e\n"
        "  get          show the current state code\n"
        "  reset        return to the clock and detected weather\n"
        "  help         show this text\n"
        "A code is an hour 0-23 followed by a weather letter:\n" + letters
    )


HELP_TEXT = _help_text()


class OverrideConsole:
    def __init__(self, resolver: StateResolver):
        self.resolver = resolver

    def set(self, code: str) -> str:
        self.resolver.set_override(code)
        return "accepted"

    def get(self) -> Tuple[str, bool]:
        state = self.resolver.get_state()
        return state.code, state.is_override

    def reset(self) -> str:
        self.resolver.clear_override()
        return "reset"

    def help(self) -> str:
        return HELP_TEXT

    def execute(self, line: str) -> str:
        """Run one typed command and return the text to show."""
        parts = line.strip().split()
        if not parts:
            return ""
        cmd, args = parts[0].lower(), parts[1:]
        if cmd == "set":
            if len(args) != 1:
                return "usage: set <code>"
            try:
                return self.set(args[0])
            except InvalidStateCode as e:
                _logger.info("Rejected override %r", args[0])
                return str(e)
        if cmd == "get":
            code, override = self.get()
            return f"{code} (override)" if override else code
        if cmd == "reset":
            return self.reset()
        if cmd == "help":
            return self.help()
        return f"unknown command {cmd!r}; try help"
