"""Logging setup for the sky scene.

One call at startup configures the root logger; every module logs under the
`skyscene.` prefix. HTTP client libraries log each request, so they are held
at WARNING unless debug output was asked for.
"""
import logging

LOG_FORMAT = "%(asctime)s [%(levelname)5s] %(name)s: %(message)s"
CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(level if debug else logging.WARNING)
    logging.getLogger("skyscene").debug("Logging configured (debug=%s)", debug)
