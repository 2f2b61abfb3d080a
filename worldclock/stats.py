"""Background CPU / memory sampling for the dashboard footer.

A daemon thread samples psutil on its own interval and publishes each result
as an immutable :class:`StatsSnapshot`. Readers always get the last complete
snapshot; a new sample replaces it wholesale.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

import psutil

from worldclock.text import GREEN, RED, YELLOW

logger = logging.getLogger(__name__)

PLACEHOLDER = "calculating..."


@dataclass(frozen=True)
class StatsSnapshot:
    cpu_percent: float | None = None
    ram_percent: float | None = None
    sampled_at: float | None = None

    @property
    def cpu_text(self) -> str:
        return PLACEHOLDER if self.cpu_percent is None else f"{self.cpu_percent:.1f}%"

    @property
    def ram_text(self) -> str:
        return PLACEHOLDER if self.ram_percent is None else f"{self.ram_percent:.1f}%"


def severity_color(value: float, warn: float, crit: float) -> str:
    if value >= crit:
        return RED
    if value >= warn:
        return YELLOW
    return GREEN


def sample_stats() -> StatsSnapshot:
    """Take one non-blocking CPU / RAM reading."""
    return StatsSnapshot(
        cpu_percent=psutil.cpu_percent(interval=None),
        ram_percent=psutil.virtual_memory().percent,
        sampled_at=time.time(),
    )


class StatsSampler:
    """Single-slot mailbox fed by a background sampling thread."""

    def __init__(self, interval: float = 2.0) -> None:
        self.interval = interval
        self._latest = StatsSnapshot()
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def latest(self) -> StatsSnapshot:
        with self._lock:
            return self._latest

    def publish(self, snapshot: StatsSnapshot) -> None:
        with self._lock:
            self._latest = snapshot

    def sample_once(self) -> None:
        try:
            snapshot = sample_stats()
        except (psutil.Error, OSError) as e:
            logger.warning("stats sample failed: %s", e)
            return
        self.publish(snapshot)

    def _run(self) -> None:
        # First cpu_percent(interval=None) call only primes psutil's deltas.
        try:
            psutil.cpu_percent(interval=None)
        except (psutil.Error, OSError) as e:
            logger.warning("stats warm-up failed: %s", e)
        while not self._stop.wait(self.interval):
            self.sample_once()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="worldclock-stats", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval + 1)
            self._thread = None
