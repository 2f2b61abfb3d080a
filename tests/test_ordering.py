"""Tests for worldclock.ordering."""

from __future__ import annotations

import threading
from datetime import timedelta

import pytest

from worldclock.ordering import TimezoneOrdering, TimezoneSlot, resolve_zone

NAMES = ["UTC", "PST", "GMT", "PHL", "CST", "MST", "EST"]
LOCATIONS = [
    "UTC",
    "America/Los_Angeles",
    "Etc/GMT",
    "Asia/Manila",
    "America/Chicago",
    "America/Denver",
    "America/New_York",
]


def _slots() -> list[TimezoneSlot]:
    return [TimezoneSlot(n, loc) for n, loc in zip(NAMES, LOCATIONS)]


# ── TimezoneSlot ───────────────────────────────────────────────────────────


class TestTimezoneSlot:
    def test_resolves_known_location(self) -> None:
        slot = TimezoneSlot("PHL", "Asia/Manila")
        assert slot.renderable
        t = slot.local_time(0)
        assert t is not None
        assert t.utcoffset() == timedelta(hours=8)
        assert (t.year, t.hour) == (1970, 8)

    def test_unknown_location_unrenderable(self) -> None:
        slot = TimezoneSlot("Nowhere", "Not/AZone")
        assert not slot.renderable
        assert slot.local_time(0) is None

    @pytest.mark.parametrize("location", ["", "../etc/passwd", "America"])
    def test_malformed_location(self, location: str) -> None:
        assert resolve_zone(location) is None

    def test_resolution_cached(self) -> None:
        assert resolve_zone("Europe/Paris") is resolve_zone("Europe/Paris")


# ── TimezoneOrdering ───────────────────────────────────────────────────────


class TestSwap:
    def test_exchanges_focus_and_target(self) -> None:
        ordering = TimezoneOrdering(_slots())
        result = ordering.swap(3)
        names = [s.name for s in ordering.snapshot()]
        assert names == ["PHL", "PST", "GMT", "UTC", "CST", "MST", "EST"]
        assert result is not None
        old, new = result
        assert (old.name, new.name) == ("UTC", "PHL")

    @pytest.mark.parametrize("k", range(1, 7))
    def test_other_slots_untouched(self, k: int) -> None:
        before = _slots()
        ordering = TimezoneOrdering(before)
        ordering.swap(k)
        after = ordering.snapshot()
        assert len(after) == len(before)
        assert after[0] == before[k]
        assert after[k] == before[0]
        for i in range(1, len(before)):
            if i != k:
                assert after[i] == before[i]

    def test_swap_twice_restores(self) -> None:
        ordering = TimezoneOrdering(_slots())
        ordering.swap(5)
        ordering.swap(5)
        assert list(ordering.snapshot()) == _slots()

    @pytest.mark.parametrize("k", [7, 8, 100, -1, -7, 0])
    def test_out_of_range_is_noop(self, k: int) -> None:
        ordering = TimezoneOrdering(_slots())
        assert ordering.swap(k) is None
        assert list(ordering.snapshot()) == _slots()

    def test_short_ordering(self) -> None:
        ordering = TimezoneOrdering(_slots()[:3])
        assert ordering.swap(4) is None
        assert ordering.swap(2) is not None
        assert ordering.focus.name == "GMT"


class TestOrderingBasics:
    def test_requires_a_slot(self) -> None:
        with pytest.raises(ValueError):
            TimezoneOrdering([])

    def test_len_and_focus(self) -> None:
        ordering = TimezoneOrdering(_slots())
        assert len(ordering) == 7
        assert ordering.focus.name == "UTC"

    def test_snapshot_is_immutable(self) -> None:
        ordering = TimezoneOrdering(_slots())
        snap = ordering.snapshot()
        ordering.swap(1)
        assert snap[0].name == "UTC"
        assert ordering.snapshot()[0].name == "PST"


def test_concurrent_readers_see_whole_orderings() -> None:
    ordering = TimezoneOrdering(_slots())
    stop = threading.Event()
    bad: list[tuple[TimezoneSlot, ...]] = []

    def swapper() -> None:
        k = 1
        while not stop.is_set():
            ordering.swap(k)
            k = k % 6 + 1

    def reader() -> None:
        for _ in range(5000):
            snap = ordering.snapshot()
            if sorted(s.name for s in snap) != sorted(NAMES):
                bad.append(snap)

    writer = threading.Thread(target=swapper)
    writer.start()
    try:
        reader()
    finally:
        stop.set()
        writer.join()
    assert bad == []
