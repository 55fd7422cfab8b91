from __future__ import annotations

import html
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from server_status_gui.models.common import CollectorResult
from server_status_gui.models.disks import SEVERITY_COLORS, DiskRecord, FeedSnapshot, HostDisks
from server_status_gui.services.disk_classifier import classify_disks
from server_status_gui.services.usage_calculator import DEFAULT_THRESHOLDS, UsageThresholds, compute_usage


@dataclass(frozen=True)
class ReportBundle:
    text: str
    html: str


class ReportService:
    def __init__(self, thresholds: UsageThresholds = DEFAULT_THRESHOLDS) -> None:
        self.thresholds = thresholds

    def build_report(self, feed: CollectorResult[FeedSnapshot] | None) -> ReportBundle:
        now = datetime.now().strftime("%F %T")
        title = f"Server Status Report @ {now}"

        if feed is None:
            text_out = f"{title}\n\n- no data\n"
            return ReportBundle(text=text_out, html=self._wrap_html(title, "<p>no data</p>"))

        lines: list[str] = [title, f"source: {feed.data.source} (status={feed.status}, warnings={feed.warning_count})", ""]
        blocks: list[str] = []
        for host in feed.data.hosts:
            lines.append(self._section_text(host))
            blocks.append(self._section_html(host))
        if feed.warnings:
            lines.append("[Warnings]")
            lines.extend(f"- {w}" for w in feed.warnings)
            blocks.append(
                "<section class='warn'><h2>Warnings</h2><ul>"
                + "".join(f"<li>{html.escape(w)}</li>" for w in feed.warnings)
                + "</ul></section>"
            )

        text_out = "\n".join(lines).strip() + "\n"
        return ReportBundle(text=text_out, html=self._wrap_html(title, "".join(blocks)))

    def default_report_path(self) -> Path:
        base = Path.home() / "server_status_reports"
        base.mkdir(parents=True, exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d-%H%M%S")
        return base / f"status_report_{ts}.html"

    def write_html(self, path: str | os.PathLike[str], html_str: str) -> str:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(html_str, encoding="utf-8")
        return str(p)

    def _section_text(self, host: HostDisks) -> str:
        groups = classify_disks(host.disks)
        out = [f"[{host.label}]" + ("" if host.online else " (offline)")]
        if not groups.regular and not groups.pools:
            out.append("- no disks")
        if groups.regular:
            out.append("  Filesystems:")
            out.extend(self._row_text(d, host.si) for d in groups.regular)
        if groups.pools:
            out.append("  Storage Pools:")
            out.extend(self._row_text(d, host.si) for d in groups.pools)
        return "\n".join(out) + "\n"

    def _row_text(self, d: DiskRecord, si: bool) -> str:
        v = compute_usage(d, self.thresholds, si=si)
        mount = f" {d.mount_point}" if d.mount_point else ""
        return f"  - {v.display_label}{mount}: {v.formatted_usage} [{v.severity.value.upper()}]"

    def _section_html(self, host: HostDisks) -> str:
        groups = classify_disks(host.disks)
        parts = [f"<section class='host'><h2>{html.escape(host.label)}</h2>"]
        if groups.regular:
            parts.append("<h3>Filesystems</h3>")
            parts.extend(self._bar_html(d, host.si) for d in groups.regular)
        if groups.pools:
            parts.append("<h3>Storage Pools</h3>")
            parts.extend(self._bar_html(d, host.si) for d in groups.pools)
        parts.append("</section>")
        return "".join(parts)

    def _bar_html(self, d: DiskRecord, si: bool) -> str:
        v = compute_usage(d, self.thresholds, si=si)
        mount = f" <span class='mount'>{html.escape(d.mount_point)}</span>" if d.mount_point else ""
        return (
            f"<div class='disk {v.severity.value}'>"
            f"<div class='label'>{html.escape(v.display_label)}{mount}</div>"
            "<div class='bar'>"
            f"<div class='fill' style='width:{v.percent}%;background:{SEVERITY_COLORS[v.severity]}'></div>"
            f"<span class='text'>{html.escape(v.formatted_usage)}</span>"
            "</div></div>"
        )

    def _wrap_html(self, title: str, body: str) -> str:
        return (
            "<!doctype html>"
            "<html><head><meta charset='utf-8'>"
            "<meta name='viewport' content='width=device-width, initial-scale=1'>"
            "<title>Server Status Report</title>"
            "<style>body{font-family:system-ui,sans-serif;margin:24px;}"
            ".host{border:1px solid #ccc;border-radius:6px;padding:8px 16px;margin-bottom:16px;}"
            ".mount{color:#757575;}"
            ".bar{position:relative;height:20px;background:#eee;border-radius:3px;margin:2px 0 8px;}"
            ".fill{height:100%;border-radius:3px;}"
            ".text{position:absolute;top:0;left:0;right:0;text-align:center;line-height:20px;font-size:12px;}"
            "</style></head><body>"
            f"<h1>{html.escape(title)}</h1>"
            f"{body}"
            "</body></html>"
        )
