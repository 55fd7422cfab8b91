from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

T = TypeVar("T")

STATUS_OK = "OK"
STATUS_WARN = "WARN"


@dataclass(frozen=True)
class CollectorResult(Generic[T]):
    ts: datetime
    status: str
    data: T
    warnings: list[str] = field(default_factory=list)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @classmethod
    def from_warnings(cls, ts: datetime, data: T, warnings: list[str]) -> CollectorResult[T]:
        status = STATUS_OK if not warnings else STATUS_WARN
        return cls(ts=ts, status=status, data=data, warnings=list(warnings))
