"""Tests for the stats sampler."""

from __future__ import annotations

import time
from unittest.mock import MagicMock, patch

import pytest

from worldclock.stats import (
    PLACEHOLDER,
    StatsSampler,
    StatsSnapshot,
    sample_stats,
    severity_color,
)
from worldclock.text import GREEN, RED, YELLOW

# ── StatsSnapshot ──────────────────────────────────────────────────────────


def test_snapshot_defaults_to_placeholder() -> None:
    snap = StatsSnapshot()
    assert snap.cpu_text == PLACEHOLDER
    assert snap.ram_text == PLACEHOLDER


def test_snapshot_text() -> None:
    snap = StatsSnapshot(cpu_percent=12.34, ram_percent=50.0)
    assert snap.cpu_text == "12.3%"
    assert snap.ram_text == "50.0%"


# ── severity_color ─────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("value", "expected"),
    [(50.0, GREEN), (80.0, YELLOW), (85.0, YELLOW), (95.0, RED), (99.9, RED)],
)
def test_severity_color(value: float, expected: str) -> None:
    assert severity_color(value, 80.0, 95.0) == expected


# ── sample_stats (mocked) ──────────────────────────────────────────────────


@patch("worldclock.stats.psutil")
def test_sample_stats(mock_psutil: MagicMock) -> None:
    mock_psutil.cpu_percent.return_value = 37.5
    vm = MagicMock()
    vm.percent = 61.0
    mock_psutil.virtual_memory.return_value = vm

    snap = sample_stats()

    assert snap.cpu_percent == pytest.approx(37.5)
    assert snap.ram_percent == pytest.approx(61.0)
    assert snap.sampled_at is not None
    mock_psutil.cpu_percent.assert_called_once_with(interval=None)


# ── StatsSampler mailbox ───────────────────────────────────────────────────


class TestStatsSampler:
    def test_starts_with_placeholder(self) -> None:
        assert StatsSampler().latest() == StatsSnapshot()

    def test_publish_replaces_whole_snapshot(self) -> None:
        sampler = StatsSampler()
        first = StatsSnapshot(cpu_percent=1.0, ram_percent=2.0)
        second = StatsSnapshot(cpu_percent=3.0, ram_percent=4.0)
        sampler.publish(first)
        sampler.publish(second)
        assert sampler.latest() is second

    def test_sample_once_publishes(self) -> None:
        sampler = StatsSampler()
        snap = StatsSnapshot(cpu_percent=9.0, ram_percent=9.0)
        with patch("worldclock.stats.sample_stats", return_value=snap):
            sampler.sample_once()
        assert sampler.latest() is snap

    def test_failed_sample_keeps_last_value(self) -> None:
        sampler = StatsSampler()
        snap = StatsSnapshot(cpu_percent=9.0, ram_percent=9.0)
        sampler.publish(snap)
        with patch("worldclock.stats.sample_stats", side_effect=OSError("gone")):
            sampler.sample_once()
        assert sampler.latest() is snap

    def test_background_thread_samples_and_stops(self) -> None:
        snap = StatsSnapshot(cpu_percent=5.0, ram_percent=6.0)
        sampler = StatsSampler(interval=0.01)
        with (
            patch("worldclock.stats.psutil"),
            patch("worldclock.stats.sample_stats", return_value=snap),
        ):
            sampler.start()
            try:
                deadline = time.monotonic() + 5
                while sampler.latest() is not snap and time.monotonic() < deadline:
                    time.sleep(0.01)
            finally:
                sampler.stop()
        assert sampler.latest() is snap
        assert sampler._thread is None

    def test_start_is_idempotent(self) -> None:
        sampler = StatsSampler(interval=10)
        with patch("worldclock.stats.psutil"):
            sampler.start()
            thread = sampler._thread
            sampler.start()
            assert sampler._thread is thread
            sampler.stop()

    def test_stop_is_prompt(self) -> None:
        sampler = StatsSampler(interval=30)
        with patch("worldclock.stats.psutil"):
            sampler.start()
            started = time.monotonic()
            sampler.stop()
        assert time.monotonic() - started < 5
