"""
engine/app_logger.py — Loguru setup shared by every Infografix component.
The orchestrator, the infographic agent, the image studio and the chart
renderer each log through an ``AppLogger`` tagged with their name, so one
request can be followed from the prompt form to the Gemini call and back.
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

from loguru import logger

from config import LOG_DIR

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level:<8}</level> | "
    "<cyan>{extra[component]:<18}</cyan> | "
    "{message}"
)
FILE_FORMAT = "{time:YYYY-MM-DDTHH:mm:ss.SSS} | {level} | {extra[component]} | {message}"
LOG_FILE = LOG_DIR / "infografix_{time:YYYY-MM-DD}.log"

_configured = False


def configure_logging() -> None:
    """Replace loguru's default sink with the app's console and daily file sinks.

    Streamlit re-executes ``app.py`` on every interaction; the module-level
    flag keeps the sinks from being added again on each rerun.
    """
    global _configured
    if _configured:
        return

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level="INFO", colorize=True)
    # Debug detail and tracebacks only go to the file
    logger.add(
        str(LOG_FILE),
        format=FILE_FORMAT,
        level="DEBUG",
        rotation="10 MB",
        retention="7 days",
        encoding="utf-8",
    )
    _configured = True


@dataclass
class StepTiming:
    name: str
    elapsed: float = 0.0


class AppLogger:
    """Loguru logger bound to one component name.

    Besides the plain levels it has two tagged events: ``action`` for
    things a user or service does (submit, upload, a Gemini call) and
    ``decision`` for requests the app refuses or reroutes, with the reason.
    """

    def __init__(self, component: str) -> None:
        configure_logging()
        self.component = component
        self._logger = logger.bind(component=component)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._logger.error(message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """ERROR with the traceback of the exception being handled."""
        self._logger.exception(message, **kwargs)

    def _event(self, tag: str, name: str, suffix: str) -> None:
        self._logger.info(f"{tag}: {name}{suffix}")

    def action(self, action: str, detail: str = "") -> None:
        self._event("ACTION", action, f" | {detail}" if detail else "")

    def decision(self, decision: str, reason: str = "") -> None:
        self._event("DECISION", decision, f" | Reason: {reason}" if reason else "")

    @contextmanager
    def step(self, name: str) -> Iterator[StepTiming]:
        """Time a block such as a Gemini request.

        Failures are logged with their duration and re-raised.
        """
        timing = StepTiming(name)
        start = time.perf_counter()
        self.debug(f"STEP START: {name}")
        try:
            yield timing
        except Exception as e:
            timing.elapsed = time.perf_counter() - start
            self.error(f"STEP FAILED: {name} ({timing.elapsed:.2f}s) | {e}")
            raise
        timing.elapsed = time.perf_counter() - start
        self.info(f"STEP DONE: {name} ({timing.elapsed:.2f}s)")
