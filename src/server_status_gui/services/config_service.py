from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from server_status_gui.services.usage_calculator import UsageThresholds

logger = logging.getLogger(__name__)

DEFAULT_FEED_URL = "http://127.0.0.1:8080/json/stats.json"


def _int_field(obj: dict[str, Any], key: str, default: int) -> int:
    raw = obj.get(key)
    if raw is None or isinstance(raw, bool):
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid %s %r in config, using %d", key, raw, default)
        return default


@dataclass(frozen=True)
class DashboardConfig:
    feed_url: str = DEFAULT_FEED_URL
    refresh_interval_s: int = 3
    timeout_s: int = 5
    thresholds: UsageThresholds = UsageThresholds()

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> DashboardConfig:
        thresholds = obj.get("thresholds")
        feed_url = obj.get("feed_url")
        return cls(
            feed_url=feed_url if isinstance(feed_url, str) and feed_url else DEFAULT_FEED_URL,
            refresh_interval_s=max(1, _int_field(obj, "refresh_interval_s", 3)),
            timeout_s=max(1, _int_field(obj, "timeout_s", 5)),
            thresholds=UsageThresholds.from_dict(thresholds if isinstance(thresholds, dict) else None),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "feed_url": self.feed_url,
            "refresh_interval_s": self.refresh_interval_s,
            "timeout_s": self.timeout_s,
            "thresholds": self.thresholds.to_dict(),
        }


class ConfigService:
    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path = Path(path) if path else self.default_path()

    @staticmethod
    def default_path() -> Path:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        if xdg:
            base = Path(xdg)
        else:
            base = Path.home() / ".config"
        return base / "server_status_gui" / "config.json"

    def load(self) -> DashboardConfig:
        p = self.path
        if not p.exists():
            return DashboardConfig()
        try:
            with open(p, "r", encoding="utf-8") as f:
                obj = json.load(f)
            if not isinstance(obj, dict):
                logger.warning("Config %s is not a JSON object, using defaults", p)
                return DashboardConfig()
            return DashboardConfig.from_dict(obj)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Failed to read config %s, using defaults: %s", p, e)
            return DashboardConfig()

    def save(self, cfg: DashboardConfig) -> None:
        p = self.path
        p.parent.mkdir(parents=True, exist_ok=True)
        tmp = p.with_suffix(p.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(cfg.to_dict(), f, ensure_ascii=False, indent=2, sort_keys=True)
        tmp.replace(p)
