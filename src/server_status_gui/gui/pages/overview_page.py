from __future__ import annotations

from datetime import datetime

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QGridLayout, QGroupBox, QLabel, QScrollArea, QVBoxLayout, QWidget

from server_status_gui.gui.widgets.server_panel import ServerPanel
from server_status_gui.models.common import CollectorResult
from server_status_gui.models.disks import FeedSnapshot
from server_status_gui.services.usage_calculator import DEFAULT_THRESHOLDS, UsageThresholds


class OverviewPage(QWidget):
    """Scrollable column of per-host disk panels."""

    def __init__(self, thresholds: UsageThresholds = DEFAULT_THRESHOLDS) -> None:
        super().__init__()
        self._thresholds = thresholds
        self._panels: dict[str, ServerPanel] = {}

        self._last_update = QLabel("Last Update: -")
        self._status = QLabel("Status: -")
        self._hosts = QLabel("Hosts: -")
        self._warnings = QLabel("")
        self._warnings.setWordWrap(True)
        for lbl in (self._status, self._hosts, self._warnings):
            lbl.setTextInteractionFlags(Qt.TextSelectableByMouse)

        summary = QGroupBox("Feed")
        grid = QGridLayout(summary)
        grid.addWidget(self._last_update, 0, 0)
        grid.addWidget(self._status, 0, 1)
        grid.addWidget(self._hosts, 0, 2)
        grid.addWidget(self._warnings, 1, 0, 1, 3)

        self._container = QWidget()
        self._panels_layout = QVBoxLayout(self._container)
        self._panels_layout.addStretch(1)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._container)

        layout = QVBoxLayout(self)
        layout.addWidget(summary)
        layout.addWidget(scroll, 1)

    def set_thresholds(self, thresholds: UsageThresholds) -> None:
        self._thresholds = thresholds
        for panel in self._panels.values():
            panel.set_thresholds(thresholds)

    def set_data(self, result: CollectorResult[FeedSnapshot]) -> None:
        ts = result.ts.strftime("%F %T") if isinstance(result.ts, datetime) else str(result.ts)
        self._last_update.setText(f"Last Update: {ts}")
        self._status.setText(f"Status: {result.status}")
        self._hosts.setText(f"Hosts: {len(result.data.hosts)}")
        self._warnings.setText("\n".join(result.warnings))

        seen: set[str] = set()
        for host in result.data.hosts:
            seen.add(host.name)
            panel = self._panels.get(host.name)
            if panel is None:
                panel = ServerPanel(thresholds=self._thresholds)
                self._panels[host.name] = panel
                # keep the trailing stretch last
                self._panels_layout.insertWidget(self._panels_layout.count() - 1, panel)
            panel.set_host(host)

        for name in list(self._panels):
            if name not in seen:
                gone = self._panels.pop(name)
                self._panels_layout.removeWidget(gone)
                gone.setParent(None)
                gone.deleteLater()

    def panels(self) -> dict[str, ServerPanel]:
        return dict(self._panels)
