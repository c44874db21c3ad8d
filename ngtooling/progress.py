"""Progress reporting and cooperative cancellation for generation runs."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from .errors import GenerationCancelled
from .logging import get_logger


@dataclass
class ProgressEvent:
    """One progress update; ``total`` is the cumulative percentage after it."""

    message: Optional[str]
    increment: float
    total: float


class ProgressReporter:
    """Collects progress updates, logs them and forwards them to an optional sink."""

    def __init__(self, sink: Optional[Callable[[ProgressEvent], None]] = None) -> None:
        self._sink = sink
        self._total = 0.0
        self.events: List[ProgressEvent] = []
        self.logger = get_logger("progress")

    @property
    def total(self) -> float:
        return self._total

    def report(self, message: Optional[str] = None, increment: float = 0.0) -> None:
        self._total = min(100.0, self._total + increment)
        event = ProgressEvent(message=message, increment=increment, total=self._total)
        self.events.append(event)
        if message:
            self.logger.info("%s (%d%%)", message, round(self._total))
        if self._sink is not None:
            self._sink(event)

    @property
    def messages(self) -> List[str]:
        return [event.message for event in self.events if event.message]


class CancellationToken:
    """Thread-safe flag sampled by the generator between units of work."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, checkpoint: str) -> None:
        if self._event.is_set():
            raise GenerationCancelled(f"Cancelled before {checkpoint}")


__all__ = ["CancellationToken", "ProgressEvent", "ProgressReporter"]
