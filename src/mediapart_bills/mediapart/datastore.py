#!/usr/bin/env python3
"""
Mediapart DataStore Implementation

Folder-backed storage for billing records: a JSON index plus one PDF per bill.
Incoming records are reconciled against the index by their deduplication key.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import requests

from ..core.json_utils import read_json, write_json
from .records import BANK_IDENTIFIERS, DEDUP_KEYS, BillingRecord

logger = logging.getLogger(__name__)

INDEX_FILENAME = "bills.json"


@dataclass
class SaveResult:
    """Outcome of one save_bills() call."""

    saved: list[BillingRecord] = field(default_factory=list)
    skipped: list[BillingRecord] = field(default_factory=list)
    # Not indexed, so the next run retries them
    failed: list[BillingRecord] = field(default_factory=list)


class BillStore:
    """
    DataStore for Mediapart billing records.

    Manages bills.json (the record index) and the downloaded bill documents
    in a single folder.
    """

    def __init__(self, bills_dir: Path):
        """
        Initialize bill store.

        Args:
            bills_dir: Destination folder (data/mediapart/bills)
        """
        self.bills_dir = bills_dir
        self.index_file = bills_dir / INDEX_FILENAME

    def exists(self) -> bool:
        """Check if a bill index exists."""
        return self.index_file.exists()

    def load(self) -> list[BillingRecord]:
        """
        Load all indexed billing records.

        Raises:
            FileNotFoundError: If no index exists
        """
        if not self.exists():
            raise FileNotFoundError(f"Bill index not found: {self.index_file}")

        data = read_json(self.index_file)
        return [BillingRecord.from_dict(bill) for bill in data.get("bills", [])]

    def save(self, data: list[BillingRecord]) -> None:
        """Overwrite the index with the given records."""
        self._write_index(data, DEDUP_KEYS, BANK_IDENTIFIERS)

    def save_bills(
        self,
        records: Iterable[BillingRecord],
        keys: tuple[str, ...] = DEDUP_KEYS,
        identifiers: tuple[str, ...] = BANK_IDENTIFIERS,
        fetch: Callable[[BillingRecord], bytes] | None = None,
    ) -> SaveResult:
        """
        Store new records, skipping those already indexed.

        Args:
            records: Records of the current run, in order
            keys: Serialized field names forming the deduplication key
            identifiers: Tokens used to match bills against bank operations
            fetch: Downloads a record's document; no files are written when None

        Returns:
            SaveResult listing saved, skipped and failed records. A record whose
            document cannot be downloaded or written is logged and left out of
            the index; the remaining records are still stored.
        """
        existing = self.load() if self.exists() else []
        known = {record.dedup_key(keys) for record in existing}

        result = SaveResult()
        for record in records:
            key = record.dedup_key(keys)
            if key in known:
                logger.debug(f"Bill already stored: {key}")
                result.skipped.append(record)
                continue

            if fetch is not None:
                try:
                    self._download(record, fetch)
                except (requests.RequestException, OSError, ValueError) as e:
                    logger.warning(f"Could not store {record.filename}: {e}")
                    result.failed.append(record)
                    continue

            known.add(key)
            result.saved.append(record)

        self._write_index(existing + result.saved, keys, identifiers)
        logger.info(
            f"Saved {len(result.saved)} new bills, {len(result.skipped)} already stored, "
            f"{len(result.failed)} failed"
        )
        return result

    def document_path(self, record: BillingRecord) -> Path:
        """
        Get the path of a record's document inside the bills folder.

        Raises:
            ValueError: If the filename would place the document outside the folder
        """
        target = (self.bills_dir / record.filename).resolve()
        if target.parent != self.bills_dir.resolve():
            raise ValueError(f"Bill filename escapes the bills folder: {record.filename!r}")
        return target

    def _download(self, record: BillingRecord, fetch: Callable[[BillingRecord], bytes]) -> None:
        target = self.document_path(record)
        content = fetch(record)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.info(f"Downloaded {record.filename}")

    def _write_index(
        self, records: list[BillingRecord], keys: tuple[str, ...], identifiers: tuple[str, ...]
    ) -> None:
        write_json(
            self.index_file,
            {
                "keys": list(keys),
                "identifiers": list(identifiers),
                "bills": [record.to_dict() for record in records],
            },
        )

    def last_modified(self) -> datetime | None:
        """Get timestamp of the index file."""
        if not self.exists():
            return None
        return datetime.fromtimestamp(self.index_file.stat().st_mtime)

    def age_days(self) -> int | None:
        """Get age in days of the index file."""
        last_mod = self.last_modified()
        if last_mod is None:
            return None
        return (datetime.now() - last_mod).days

    def item_count(self) -> int | None:
        """Get count of indexed bills."""
        if not self.exists():
            return None
        return len(read_json(self.index_file).get("bills", []))

    def size_bytes(self) -> int | None:
        """Get total size of the folder's files."""
        if not self.exists():
            return None
        return sum(f.stat().st_size for f in self.bills_dir.iterdir() if f.is_file())

    def summary_text(self) -> str:
        """Get human-readable summary."""
        count = self.item_count()
        if count is None:
            return "No Mediapart bills stored"
        return f"Mediapart bills: {count} stored"
