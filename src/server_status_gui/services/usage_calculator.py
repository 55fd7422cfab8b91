from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from server_status_gui.models.disks import DiskRecord, Severity, UsageView
from server_status_gui.services.byte_format import format_bytes
from server_status_gui.services.disk_classifier import strip_pool_marker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UsageThresholds:
    warning: int = 70
    critical: int = 90

    def __post_init__(self) -> None:
        if not 0 <= self.warning <= self.critical <= 100:
            raise ValueError(
                f"thresholds must satisfy 0 <= warning <= critical <= 100 "
                f"(got warning={self.warning}, critical={self.critical})"
            )

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any] | None) -> UsageThresholds:
        """Build thresholds from a config section, falling back to defaults."""
        if not obj:
            return cls()
        try:
            return cls(
                warning=int(obj.get("warning", cls.warning)),
                critical=int(obj.get("critical", cls.critical)),
            )
        except (TypeError, ValueError) as e:
            logger.warning("Invalid thresholds %r, using defaults: %s", dict(obj), e)
            return cls()

    def to_dict(self) -> dict[str, int]:
        return {"warning": self.warning, "critical": self.critical}

    def severity_for(self, percent: int) -> Severity:
        if percent >= self.critical:
            return Severity.CRITICAL
        if percent >= self.warning:
            return Severity.WARNING
        return Severity.NORMAL


DEFAULT_THRESHOLDS = UsageThresholds()


def usage_percent(used: int, total: int) -> int:
    """Rounded (half-up) usage percentage clamped to 0..100; 0 when total is 0."""
    if total <= 0:
        return 0
    # exact integer form of floor(used * 100 / total + 0.5)
    pct = (used * 200 + total) // (2 * total)
    return max(0, min(100, pct))


def compute_usage(
    record: DiskRecord,
    thresholds: UsageThresholds = DEFAULT_THRESHOLDS,
    *,
    si: bool = False,
) -> UsageView:
    percent = usage_percent(record.used, record.total)
    formatted = (
        f"{format_bytes(record.used, si=si)} / {format_bytes(record.total, si=si)} ({percent}%)"
    )
    return UsageView(
        percent=percent,
        severity=thresholds.severity_for(percent),
        display_label=strip_pool_marker(record.name),
        formatted_usage=formatted,
        degenerate=record.total == 0,
    )
