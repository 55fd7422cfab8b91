from __future__ import annotations

import logging

from PySide6.QtWidgets import QGroupBox, QLabel, QVBoxLayout

from server_status_gui.gui.widgets.disk_bar import DiskBar
from server_status_gui.models.disks import DiskRecord, HostDisks
from server_status_gui.services.disk_classifier import classify_disks
from server_status_gui.services.usage_calculator import DEFAULT_THRESHOLDS, UsageThresholds

logger = logging.getLogger(__name__)

REGULAR_TITLE = "Filesystems"
POOLS_TITLE = "Storage Pools"


class ServerPanel(QGroupBox):
    """Disk section of one host's status card."""

    def __init__(self, host: HostDisks | None = None, thresholds: UsageThresholds = DEFAULT_THRESHOLDS) -> None:
        super().__init__("-")
        self._thresholds = thresholds
        self._host: HostDisks | None = None
        self._regular_box: QGroupBox | None = None
        self._pool_box: QGroupBox | None = None
        self._regular_bars: list[DiskBar] = []
        self._pool_bars: list[DiskBar] = []
        self._errors: list[QLabel] = []

        self._layout = QVBoxLayout(self)

        if host is not None:
            self.set_host(host)

    def set_thresholds(self, thresholds: UsageThresholds) -> None:
        self._thresholds = thresholds
        if self._host is not None:
            self.set_host(self._host)

    def set_host(self, host: HostDisks) -> None:
        self._host = host
        title = host.label if host.online else f"{host.label} (offline)"
        self.setTitle(title)

        self._clear()
        groups = classify_disks(host.disks)
        if groups.unclassified:
            logger.debug(
                "%s: %d disk(s) not shown: %s",
                host.name,
                len(groups.unclassified),
                ", ".join(d.name for d in groups.unclassified),
            )

        if groups.regular:
            self._regular_box = self._build_section(REGULAR_TITLE, groups.regular, self._regular_bars, host.si)
            self._layout.addWidget(self._regular_box)
        if groups.pools:
            self._pool_box = self._build_section(POOLS_TITLE, groups.pools, self._pool_bars, host.si)
            self._layout.addWidget(self._pool_box)

    def _build_section(self, title: str, records: list[DiskRecord], bars: list[DiskBar], si: bool) -> QGroupBox:
        gb = QGroupBox(title)
        l = QVBoxLayout(gb)
        for rec in records:
            try:
                bar = DiskBar(rec, thresholds=self._thresholds, si=si)
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning("Failed to render disk %r: %s", getattr(rec, "name", rec), e)
                err = QLabel(f"Invalid disk entry: {e}")
                err.setStyleSheet("color:#c62828;")
                self._errors.append(err)
                l.addWidget(err)
                continue
            bars.append(bar)
            l.addWidget(bar)
        return gb

    def _clear(self) -> None:
        for w in (self._regular_box, self._pool_box):
            if w is not None:
                self._layout.removeWidget(w)
                w.setParent(None)
                w.deleteLater()
        self._regular_box = None
        self._pool_box = None
        self._regular_bars = []
        self._pool_bars = []
        self._errors = []

    def host(self) -> HostDisks | None:
        return self._host

    def regular_bars(self) -> list[DiskBar]:
        return list(self._regular_bars)

    def pool_bars(self) -> list[DiskBar]:
        return list(self._pool_bars)

    def error_labels(self) -> list[QLabel]:
        return list(self._errors)

    def has_regular_section(self) -> bool:
        return self._regular_box is not None

    def has_pool_section(self) -> bool:
        return self._pool_box is not None

    def section_titles(self) -> list[str]:
        return [w.title() for w in (self._regular_box, self._pool_box) if w is not None]
