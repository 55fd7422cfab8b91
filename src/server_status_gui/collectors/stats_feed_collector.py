from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import requests

from server_status_gui.models.common import CollectorResult
from server_status_gui.models.disks import DiskRecord, FeedSnapshot, HostDisks, MalformedRecordError

logger = logging.getLogger(__name__)


class FeedError(Exception):
    """The stats feed could not be fetched or parsed."""


class StatsFeedCollector:
    """Reads the monitoring server's ``stats.json`` snapshot.

    ``source`` is either an ``http(s)://`` URL or a path to a local JSON file.
    Disk entries that cannot be parsed are skipped and reported as warnings;
    anything wrong with the document as a whole raises :class:`FeedError`.
    """

    def __init__(
        self,
        source: str,
        timeout_s: int = 5,
        session: requests.Session | None = None,
    ) -> None:
        self.source = source
        self.timeout_s = int(timeout_s)
        self._session = session

    def collect(self) -> CollectorResult[FeedSnapshot]:
        ts = datetime.now()
        doc = self._load_document()
        warnings: list[str] = []

        servers = doc.get("servers")
        if servers is None:
            servers = []
        if not isinstance(servers, list):
            raise FeedError(f"'servers' is not a list in {self.source}")

        hosts: list[HostDisks] = []
        seen: set[str] = set()
        for idx, srv in enumerate(servers):
            if not isinstance(srv, dict) or not srv.get("name"):
                warnings.append(f"Server entry #{idx} has no name, skipped")
                continue
            name = str(srv["name"])
            # panels are keyed by host name; first entry wins
            if name in seen:
                warnings.append(f"Server entry #{idx} duplicates host {name}, skipped")
                continue
            seen.add(name)
            hosts.append(self._parse_host(srv, warnings))

        for w in warnings:
            logger.warning(w)

        try:
            updated = int(doc.get("updated") or 0)
        except (TypeError, ValueError):
            updated = 0

        snapshot = FeedSnapshot(source=self.source, updated=updated, hosts=hosts)
        return CollectorResult.from_warnings(ts, snapshot, warnings)

    def _load_document(self) -> dict[str, Any]:
        if self.source.startswith(("http://", "https://")):
            doc = self._fetch_http()
        else:
            doc = self._read_file()
        if not isinstance(doc, dict):
            raise FeedError(f"Stats document from {self.source} is not a JSON object")
        return doc

    def _fetch_http(self) -> Any:
        session = self._session or requests.Session()
        logger.debug("Fetching stats from %s", self.source)
        try:
            resp = session.get(self.source, timeout=self.timeout_s)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            raise FeedError(f"Failed to fetch {self.source}: {e}") from e
        except ValueError as e:
            raise FeedError(f"Invalid JSON from {self.source}: {e}") from e
        finally:
            if self._session is None:
                session.close()

    def _read_file(self) -> Any:
        p = Path(self.source).expanduser()
        logger.debug("Reading stats from %s", p)
        try:
            with open(p, "r", encoding="utf-8") as f:
                return json.load(f)
        except OSError as e:
            raise FeedError(f"Failed to read {p}: {e}") from e
        except ValueError as e:
            raise FeedError(f"Invalid JSON in {p}: {e}") from e

    def _parse_host(self, srv: dict[str, Any], warnings: list[str]) -> HostDisks:
        name = str(srv["name"])
        disks: list[DiskRecord] = []
        raw_disks = srv.get("disks") or []
        if not isinstance(raw_disks, list):
            warnings.append(f"{name}: 'disks' is not a list, ignored")
            raw_disks = []

        for idx, raw in enumerate(raw_disks):
            try:
                disks.append(DiskRecord.from_dict(raw))
            except MalformedRecordError as e:
                warnings.append(f"{name}: disk #{idx} skipped: {e}")

        online = bool(srv.get("online4", True) or srv.get("online6", False))
        return HostDisks(
            name=name,
            alias=str(srv.get("alias") or name),
            disks=disks,
            si=bool(srv.get("si", False)),
            online=online,
        )
