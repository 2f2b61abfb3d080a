"""The ordered list of timezone slots shown on the dashboard.

Slot 0 is the focus cell; slots 1.. fill the secondary grid. The only
mutation is swapping a secondary slot into focus, which happens under a lock
so a render pass always sees a whole ordering.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def resolve_zone(location: str) -> tzinfo | None:
    """Look up an IANA location; ``None`` if it cannot be resolved."""
    try:
        return ZoneInfo(location)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        logger.warning("unknown timezone location %r: %s", location, e)
        return None


@dataclass(frozen=True)
class TimezoneSlot:
    name: str
    location: str

    @property
    def zone(self) -> tzinfo | None:
        return resolve_zone(self.location)

    @property
    def renderable(self) -> bool:
        return self.zone is not None

    def local_time(self, timestamp: float) -> datetime | None:
        """Wall-clock time of *timestamp* in this slot's zone."""
        zone = self.zone
        if zone is None:
            return None
        return datetime.fromtimestamp(timestamp, tz=zone)


class TimezoneOrdering:
    """Thread-safe ordered sequence of :class:`TimezoneSlot`."""

    def __init__(self, slots: Iterable[TimezoneSlot]) -> None:
        self._slots: tuple[TimezoneSlot, ...] = tuple(slots)
        if not self._slots:
            raise ValueError("at least one timezone slot is required")
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._slots)

    def snapshot(self) -> tuple[TimezoneSlot, ...]:
        with self._lock:
            return self._slots

    @property
    def focus(self) -> TimezoneSlot:
        return self.snapshot()[0]

    def swap(self, k: int) -> tuple[TimezoneSlot, TimezoneSlot] | None:
        """Exchange slot 0 with slot *k*.

        Returns ``(old_focus, new_focus)``, or ``None`` when *k* is out of
        range (or 0) and nothing changed.
        """
        with self._lock:
            if not 0 < k < len(self._slots):
                return None
            slots = list(self._slots)
            slots[0], slots[k] = slots[k], slots[0]
            self._slots = tuple(slots)
        logger.debug("swapped %s with %s", slots[k].name, slots[0].name)
        return slots[k], slots[0]
