from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QProgressBar, QVBoxLayout, QWidget

from server_status_gui.models.disks import SEVERITY_COLORS, DiskRecord, Severity, UsageView
from server_status_gui.services.usage_calculator import DEFAULT_THRESHOLDS, UsageThresholds, compute_usage


def bar_stylesheet(severity: Severity) -> str:
    return (
        "QProgressBar{border:1px solid #9e9e9e;border-radius:3px;text-align:center;}"
        f"QProgressBar::chunk{{background-color:{SEVERITY_COLORS[severity]};}}"
    )


class DiskBar(QWidget):
    def __init__(
        self,
        record: DiskRecord | None = None,
        thresholds: UsageThresholds = DEFAULT_THRESHOLDS,
        si: bool = False,
    ) -> None:
        super().__init__()
        self._thresholds = thresholds
        self._si = si
        self._record: DiskRecord | None = None
        self._view: UsageView | None = None

        self._label = QLabel("-")
        self._mount = QLabel("")
        self._mount.setStyleSheet("color:#757575;")
        self._label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self._mount.setTextInteractionFlags(Qt.TextSelectableByMouse)

        self._bar = QProgressBar()
        self._bar.setRange(0, 100)
        self._bar.setTextVisible(True)

        head = QHBoxLayout()
        head.addWidget(self._label)
        head.addWidget(self._mount)
        head.addStretch(1)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 2, 0, 2)
        layout.addLayout(head)
        layout.addWidget(self._bar)

        if record is not None:
            self.set_record(record)

    def set_record(self, record: DiskRecord) -> None:
        # always re-derive: the same name can arrive with new numbers
        view = compute_usage(record, self._thresholds, si=self._si)
        self._record = record
        self._view = view

        self._label.setText(view.display_label)
        self._mount.setText(record.mount_point)
        self._mount.setVisible(bool(record.mount_point))

        self._bar.setValue(view.percent)
        self._bar.setFormat(view.formatted_usage)
        self._bar.setProperty("severity", view.severity.value)
        self._bar.setStyleSheet(bar_stylesheet(view.severity))
        self.setToolTip(f"{record.name} [{record.file_system or '?'}]")

    def record(self) -> DiskRecord | None:
        return self._record

    def view(self) -> UsageView | None:
        return self._view

    def label_text(self) -> str:
        return self._label.text()

    def mount_text(self) -> str:
        return self._mount.text()

    def bar_value(self) -> int:
        return self._bar.value()

    def bar_text(self) -> str:
        return self._bar.format()
