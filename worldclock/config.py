"""Configuration loading for worldclock.

Loads settings from TOML config files with sensible defaults.
Search order: explicit --config path → ~/.config/worldclock/config.toml → defaults only.
"""

from __future__ import annotations

import logging
import sys
import tomllib
from pathlib import Path
from typing import Any

from worldclock.ordering import TimezoneSlot

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "refresh_interval": 1.0,
    "stats_interval": 2.0,
    "notification_seconds": 3.0,
    "thresholds": {
        "cpu_percent": {"warning": 80.0, "critical": 95.0},
        "ram_percent": {"warning": 85.0, "critical": 95.0},
    },
    "timezones": [
        {"name": "UTC", "location": "UTC"},
        {"name": "PST/DST", "location": "America/Los_Angeles"},
        {"name": "GMT", "location": "Etc/GMT"},
        {"name": "Philippine Time", "location": "Asia/Manila"},
        {"name": "CST", "location": "America/Chicago"},
        {"name": "MST", "location": "America/Denver"},
        {"name": "EST", "location": "America/New_York"},
    ],
}

_DEFAULT_PATH = Path.home() / ".config" / "worldclock" / "config.toml"


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Merge overlay into base. Nested dicts are merged at the first level only;
    lists are replaced."""
    merged = dict(base)
    for key, value in overlay.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration, merging user TOML over defaults.

    Args:
        path: Explicit config file path (from --config). If None, tries the
              default location ~/.config/worldclock/config.toml.

    Returns:
        Merged configuration dict.

    Raises:
        SystemExit: If an explicit path doesn't exist or can't be parsed.
    """
    if path is not None:
        if not path.is_file():
            print(f"worldclock: config file not found: {path}", file=sys.stderr)
            raise SystemExit(1)
        try:
            user_config = tomllib.loads(path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            print(f"worldclock: invalid TOML in {path}: {e}", file=sys.stderr)
            raise SystemExit(1) from e
        return _deep_merge(DEFAULT_CONFIG, user_config)

    if _DEFAULT_PATH.is_file():
        try:
            user_config = tomllib.loads(_DEFAULT_PATH.read_text(encoding="utf-8"))
            return _deep_merge(DEFAULT_CONFIG, user_config)
        except tomllib.TOMLDecodeError:
            print(
                f"worldclock: warning: ignoring invalid TOML in {_DEFAULT_PATH}",
                file=sys.stderr,
            )

    return dict(DEFAULT_CONFIG)


def load_timezones(config: dict[str, Any]) -> list[TimezoneSlot]:
    """Turn the ``timezones`` entries into slots, in file order.

    Entries without a string ``name`` and ``location``, and repeats of an
    earlier name, are skipped. Locations are not checked here; an unknown
    location only makes its cell blank.
    """
    slots: list[TimezoneSlot] = []
    seen: set[str] = set()
    for i, entry in enumerate(config.get("timezones", [])):
        if not isinstance(entry, dict):
            logger.warning("timezones[%d]: expected a table, got %r", i, entry)
            continue
        name = entry.get("name")
        location = entry.get("location")
        if not isinstance(name, str) or not isinstance(location, str):
            logger.warning("timezones[%d]: needs string 'name' and 'location'", i)
            continue
        if name in seen:
            logger.warning("timezones[%d]: duplicate name %r ignored", i, name)
            continue
        seen.add(name)
        slots.append(TimezoneSlot(name=name, location=location))
    return slots


def dump_default_config() -> str:
    """Return the default configuration as a TOML string."""
    lines = [
        "# worldclock configuration",
        "# Place this file at ~/.config/worldclock/config.toml",
        "",
        f"refresh_interval = {DEFAULT_CONFIG['refresh_interval']}",
        f"stats_interval = {DEFAULT_CONFIG['stats_interval']}",
        f"notification_seconds = {DEFAULT_CONFIG['notification_seconds']}",
        "",
    ]

    for metric, levels in DEFAULT_CONFIG["thresholds"].items():
        lines.append(f"[thresholds.{metric}]")
        lines.append(f"warning = {levels['warning']}")
        lines.append(f"critical = {levels['critical']}")
        lines.append("")

    # First entry is the focus clock; keys 1-6 swap the next six into focus.
    for tz in DEFAULT_CONFIG["timezones"]:
        lines.append("[[timezones]]")
        lines.append(f'name = "{tz["name"]}"')
        lines.append(f'location = "{tz["location"]}"')
        lines.append("")

    return "\n".join(lines) + "\n"
