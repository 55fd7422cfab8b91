from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class MalformedRecordError(ValueError):
    """A disk record from the feed is missing required fields or has invalid values."""


class Severity(str, Enum):
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


SEVERITY_COLORS: dict[Severity, str] = {
    Severity.NORMAL: "#2e7d32",
    Severity.WARNING: "#ef6c00",
    Severity.CRITICAL: "#c62828",
}


def _non_negative_int(obj: Mapping[str, Any], key: str) -> int:
    raw = obj.get(key)
    if raw is None:
        return 0
    try:
        value = int(raw)
    except (TypeError, ValueError) as e:
        raise MalformedRecordError(f"{key} is not a number: {raw!r}") from e
    if value < 0:
        raise MalformedRecordError(f"{key} must be non-negative: {value}")
    return value


@dataclass(frozen=True)
class DiskRecord:
    name: str
    mount_point: str = ""
    file_system: str = ""
    used: int = 0
    total: int = 0
    free: int | None = None

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> DiskRecord:
        if not isinstance(obj, Mapping):
            raise MalformedRecordError(f"disk entry is not an object: {obj!r}")
        name = obj.get("name")
        if name is None:
            raise MalformedRecordError("disk entry has no name")

        free = obj.get("free")
        return cls(
            name=str(name),
            mount_point=str(obj.get("mount_point") or ""),
            file_system=str(obj.get("file_system") or ""),
            used=_non_negative_int(obj, "used"),
            total=_non_negative_int(obj, "total"),
            free=None if free is None else _non_negative_int(obj, "free"),
        )


@dataclass(frozen=True)
class DiskGroups:
    regular: list[DiskRecord]
    pools: list[DiskRecord]
    # zfs-typed entries without the pool marker; never rendered
    unclassified: list[DiskRecord] = field(default_factory=list)


@dataclass(frozen=True)
class UsageView:
    percent: int
    severity: Severity
    display_label: str
    formatted_usage: str
    degenerate: bool = False


@dataclass(frozen=True)
class HostDisks:
    name: str
    alias: str
    disks: list[DiskRecord]
    si: bool = False
    online: bool = True

    @property
    def label(self) -> str:
        return self.alias or self.name


@dataclass(frozen=True)
class FeedSnapshot:
    source: str
    updated: int
    hosts: list[HostDisks]
