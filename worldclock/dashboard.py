"""Interactive terminal dashboard — worldclock's multi-timezone clock wall.

Shows one focus clock across the top and up to six secondary clocks in a
3×2 grid underneath, with a footer carrying CPU / memory usage and the key
help. Pressing 1–6 swaps that secondary clock into focus.

Usage:
    uv run worldclock
    uv run worldclock --interval 0.5 --config path/to/config.toml
    uv run worldclock --list
"""

from __future__ import annotations

import argparse
import curses
import logging
import os
import re
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from worldclock.cell import CellFrame, render_cell, short_date
from worldclock.config import (
    DEFAULT_CONFIG,
    dump_default_config,
    load_config,
    load_timezones,
)
from worldclock.layout import MAX_SECONDARY, GridLayout, Rect, compute_layout
from worldclock.ordering import TimezoneOrdering, TimezoneSlot
from worldclock.stats import StatsSampler, StatsSnapshot, severity_color
from worldclock.text import (
    BOLD,
    CYAN,
    DIM,
    GREEN,
    RED,
    RESET,
    YELLOW,
    center_stripped,
    clip,
    display_width,
)

logger = logging.getLogger(__name__)

HELP_TEXT = "Keys [1-6]: Swap with Top | q/Ctrl+C: Quit"

_MARKER_RE = re.compile(r"(\x1b\[[0-9;]*m)")

# Curses colour-pair IDs
C_GREEN = 1
C_YELLOW = 2
C_RED = 3
C_CYAN = 4

_MARKER_PAIRS = {GREEN: C_GREEN, YELLOW: C_YELLOW, RED: C_RED, CYAN: C_CYAN}


# ── Render plan ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Notification:
    message: str
    expires_at: float

    def active(self, now: float) -> bool:
        return now < self.expires_at


@dataclass(frozen=True)
class CellPlan:
    """One cell to draw: its outer rectangle, whether it gets a border, and
    the frame rendered for the area inside."""

    rect: Rect
    slot_index: int
    boxed: bool
    frame: CellFrame


@dataclass(frozen=True)
class RenderPlan:
    layout: GridLayout
    cells: list[CellPlan]
    footer: list[str]


def _content_rect(rect: Rect) -> tuple[Rect, bool]:
    """Area left for content once a border fits around *rect*."""
    if rect.height >= 3 and rect.width >= 4:
        return rect.inset(1), True
    return rect, False


class Dashboard:
    """Owns the timezone ordering and turns it into render plans.

    *stats* returns the latest sampler snapshot; *clock* returns the current
    Unix time and is used both for the clocks and for notification expiry.
    """

    def __init__(
        self,
        ordering: TimezoneOrdering,
        stats: Callable[[], StatsSnapshot],
        thresholds: dict[str, Any] | None = None,
        notification_seconds: float = 3.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ordering = ordering
        self.stats = stats
        self.thresholds = thresholds or DEFAULT_CONFIG["thresholds"]
        self.notification_seconds = notification_seconds
        self.clock = clock
        self._notification: Notification | None = None

    # ── Actions ──

    def swap(self, k: int) -> bool:
        """Swap secondary slot *k* into focus; False if there is no slot *k*."""
        swapped = self.ordering.swap(k)
        if swapped is None:
            return False
        old, new = swapped
        self._notification = Notification(
            message=f"Swapped {old.name} with {new.name}",
            expires_at=self.clock() + self.notification_seconds,
        )
        return True

    def notification(self) -> Notification | None:
        note = self._notification
        if note is not None and not note.active(self.clock()):
            self._notification = None
            return None
        return note

    def handle_key(self, key: int) -> bool:
        """React to a key code from curses. Returns False when asked to quit."""
        if key in (ord("q"), ord("Q")):
            return False
        if ord("1") <= key <= ord(str(MAX_SECONDARY)):
            self.swap(key - ord("0"))
        return True

    # ── Rendering ──

    def stats_line(self) -> str:
        snap = self.stats()
        parts = []
        for label, value, text, metric in (
            ("CPU", snap.cpu_percent, snap.cpu_text, "cpu_percent"),
            ("MEM", snap.ram_percent, snap.ram_text, "ram_percent"),
        ):
            if value is None:
                parts.append(f"{label}: {DIM}{text}{RESET}")
                continue
            levels = self.thresholds.get(metric, {})
            color = severity_color(
                value,
                float(levels.get("warning", 80.0)),
                float(levels.get("critical", 95.0)),
            )
            parts.append(f"{label}: {color}{text}{RESET}")
        return " | ".join(parts)

    def footer_lines(self, width: int, height: int) -> list[str]:
        note = self.notification()
        if note is not None:
            status = f"{CYAN}{BOLD}{note.message}{RESET}"
        else:
            status = self.stats_line()
        lines = [center_stripped(status, width), center_stripped(HELP_TEXT, width)]
        return lines[:height]

    def render_plan(self, width: int, height: int) -> RenderPlan:
        """Lay out and render every cell for a *width* × *height* terminal."""
        slots = self.ordering.snapshot()
        layout = compute_layout(width, height, len(slots) - 1)
        now = self.clock()

        cells: list[CellPlan] = []
        for index, rect in enumerate([layout.focus, *layout.secondary]):
            slot = slots[index]
            inner, boxed = _content_rect(rect)
            frame = render_cell(
                inner,
                slot,
                slot.local_time(now),
                key=index if index else None,
            )
            cells.append(CellPlan(rect=rect, slot_index=index, boxed=boxed, frame=frame))

        footer = self.footer_lines(layout.footer.width, layout.footer.height)
        return RenderPlan(layout=layout, cells=cells, footer=footer)


# ── Curses drawing primitives ──────────────────────────────────────────────


def _init_colors() -> None:
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(C_GREEN, curses.COLOR_GREEN, -1)
    curses.init_pair(C_YELLOW, curses.COLOR_YELLOW, -1)
    curses.init_pair(C_RED, curses.COLOR_RED, -1)
    curses.init_pair(C_CYAN, curses.COLOR_CYAN, -1)


def _safe(win: curses.window, *args: Any) -> None:
    """addstr wrapper that swallows out-of-bounds errors."""
    try:
        win.addstr(*args)
    except curses.error:
        pass


def _marker_attr(marker: str, attr: int, base: int) -> int:
    if marker == RESET:
        return base
    if marker == BOLD:
        return attr | curses.A_BOLD
    if marker == DIM:
        return attr | curses.A_DIM
    pair = _MARKER_PAIRS.get(marker)
    if pair is None:
        return attr
    return (attr & ~curses.A_COLOR) | curses.color_pair(pair)


def _put_styled(
    win: curses.window, y: int, x: int, text: str, width: int, base: int = 0
) -> None:
    """Write *text* at (y, x), turning style markers into curses attributes
    and clipping to *width* columns."""
    attr = base
    col = 0
    for part in _MARKER_RE.split(text):
        if not part:
            continue
        if _MARKER_RE.fullmatch(part):
            attr = _marker_attr(part, attr, base)
            continue
        piece = clip(part, width - col)
        if piece:
            _safe(win, y, x + col, piece, attr)
            col += display_width(piece)
        if col >= width:
            return


def _draw_box(win: curses.window, rect: Rect, title: str) -> curses.window | None:
    """Draw a bordered box over *rect* and return it as a sub-window."""
    try:
        sub = win.subwin(rect.height, rect.width, rect.y0, rect.x0)
    except curses.error:
        return None
    sub.erase()
    try:
        sub.box()
    except curses.error:
        return None
    if title and display_width(title) + 4 <= rect.width:
        _safe(sub, 0, 2, title, curses.color_pair(C_CYAN) | curses.A_BOLD)
    return sub


def _draw_cell(stdscr: curses.window, cell: CellPlan) -> None:
    if cell.rect.empty:
        return
    frame = cell.frame
    if cell.boxed:
        sub = _draw_box(stdscr, cell.rect, frame.title)
        if sub is None:
            return
        origin_y, origin_x = 1, 1
        width = cell.rect.width - 2
    else:
        sub, origin_y, origin_x, width = stdscr, cell.rect.y0, cell.rect.x0, cell.rect.width

    for row, line in enumerate(frame.body[: frame.height]):
        _put_styled(sub, origin_y + row, origin_x, line, width)
    if frame.bottom is not None and frame.height:
        _put_styled(sub, origin_y + frame.height - 1, origin_x, frame.bottom, width)


def draw_plan(stdscr: curses.window, plan: RenderPlan) -> None:
    stdscr.erase()
    for cell in plan.cells:
        _draw_cell(stdscr, cell)
    footer = plan.layout.footer
    for row, line in enumerate(plan.footer):
        _put_styled(
            stdscr, footer.y0 + row, footer.x0, line, footer.width,
            curses.color_pair(C_CYAN) if row else 0,
        )
    stdscr.refresh()


def refresh(stdscr: curses.window, dashboard: Dashboard) -> None:
    """Redraw everything for the terminal's current size."""
    max_y, max_x = stdscr.getmaxyx()
    draw_plan(stdscr, dashboard.render_plan(max_x, max_y))


# ── Main loop ──────────────────────────────────────────────────────────────


def _dashboard_loop(
    stdscr: curses.window, dashboard: Dashboard, interval: float
) -> None:
    _init_colors()
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    stdscr.timeout(int(interval * 1000))

    while True:
        refresh(stdscr, dashboard)
        key = stdscr.getch()
        if not dashboard.handle_key(key):
            return
        if key == curses.KEY_RESIZE:
            stdscr.clear()


# ── CLI entry point ────────────────────────────────────────────────────────


def _configure_logging(log_level: str, log_file: Path | None) -> None:
    """Route log records to *log_file*, or drop them when none is given."""
    handlers: list[logging.Handler] = [logging.NullHandler()]
    if log_file is not None:
        handlers = [logging.FileHandler(os.path.expanduser(log_file), encoding="utf-8")]
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def print_timezones(slots: list[TimezoneSlot], now: float | None = None) -> None:
    """Print the configured timezones with their current local time."""
    ts = time.time() if now is None else now
    print(f"── worldclock [{len(slots)} timezones] ──")
    for i, slot in enumerate(slots):
        t = slot.local_time(ts)
        role = "focus" if i == 0 else f"key {i}" if i <= MAX_SECONDARY else "hidden"
        when = _describe(t) if t is not None else "invalid location"
        print(f"  {i:>2d}  {slot.name:20s}  {slot.location:24s}  {when:24s}  {role}")


def _describe(t: datetime) -> str:
    return f"{t:%I:%M:%S %p}  {short_date(t)}"


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Terminal world clock — large block-digit clocks for several timezones.",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between redraws (default: refresh_interval from config, 1.0)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help="Path to TOML config file",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the configured timezones and exit",
    )
    parser.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the default configuration as TOML and exit",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        metavar="PATH",
        help="Write log records to this file",
    )
    args = parser.parse_args()

    _configure_logging(args.log_level, args.log_file)

    if args.dump_config:
        print(dump_default_config(), end="")
        return

    config = load_config(args.config)
    slots = load_timezones(config)
    if not slots:
        print("worldclock: no timezones configured", file=sys.stderr)
        raise SystemExit(1)

    if args.list:
        print_timezones(slots)
        return

    logger.info("starting dashboard with %d timezones", len(slots))
    interval = args.interval or float(config.get("refresh_interval", 1.0))
    sampler = StatsSampler(float(config.get("stats_interval", 2.0)))
    dashboard = Dashboard(
        TimezoneOrdering(slots),
        sampler.latest,
        thresholds=config.get("thresholds"),
        notification_seconds=float(config.get("notification_seconds", 3.0)),
    )

    sampler.start()
    try:
        curses.wrapper(_dashboard_loop, dashboard, interval)
    except KeyboardInterrupt:
        pass
    finally:
        sampler.stop()


if __name__ == "__main__":
    main()
