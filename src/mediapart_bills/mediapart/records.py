#!/usr/bin/env python3
"""
Billing Record Module

The normalized billing record produced for every bill line, and the pure
builder that assembles it from parsed fields, the resolved link and the
run's provenance metadata.
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..core.currency import amount_to_cents
from ..core.dates import FinancialDate
from ..core.money import Money
from .fields import BillFields
from .identifiers import BillLink

VENDOR = "Mediapart"
SCHEMA_VERSION = 1

# Deduplication key used by the bill store
DEDUP_KEYS = ("vendor", "billId")
# Token matched against bank operation labels
BANK_IDENTIFIERS = ("mediapart",)


@dataclass(frozen=True)
class ExtractionMetadata:
    """Provenance of a record: when it was extracted and with which schema."""

    date: datetime
    version: int = SCHEMA_VERSION

    @classmethod
    def now(cls) -> "ExtractionMetadata":
        return cls(date=datetime.now())

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date.isoformat(), "version": self.version}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExtractionMetadata":
        return cls(date=datetime.fromisoformat(data["date"]), version=data.get("version", SCHEMA_VERSION))


@dataclass(frozen=True)
class BillingRecord:
    """One bill, fully populated."""

    title: str
    vendor: str
    bill_id: str
    start_date: FinancialDate
    end_date: FinancialDate
    date: FinancialDate
    amount: Money
    currency: str
    filename: str
    fileurl: str
    metadata: ExtractionMetadata
    request_options: dict[str, Any] | None = field(default=None, compare=False)

    def dedup_key(self, keys: tuple[str, ...] = DEDUP_KEYS) -> tuple:
        """Return the values of the given serialized keys, in order."""
        data = self.to_dict()
        return tuple(data[key] for key in keys)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Note: Uses the camelCase keys expected by the storage layer; amount is
        exported as a decimal number and dates as ISO strings.
        """
        result = {
            "title": self.title,
            "vendor": self.vendor,
            "billId": self.bill_id,
            "startDate": self.start_date.to_iso_string(),
            "endDate": self.end_date.to_iso_string(),
            "date": self.date.to_iso_string(),
            "amount": self.amount.to_amount(),
            "currency": self.currency,
            "filename": self.filename,
            "fileurl": self.fileurl,
            "metadata": self.metadata.to_dict(),
        }
        if self.request_options:
            result["requestOptions"] = self.request_options
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BillingRecord":
        """Create BillingRecord from dictionary (inverse of to_dict)."""
        return cls(
            title=data["title"],
            vendor=data["vendor"],
            bill_id=data["billId"],
            start_date=FinancialDate.from_string(data["startDate"]),
            end_date=FinancialDate.from_string(data["endDate"]),
            date=FinancialDate.from_string(data["date"]),
            amount=Money.from_cents(amount_to_cents(data["amount"])),
            currency=data["currency"],
            filename=data["filename"],
            fileurl=data["fileurl"],
            metadata=ExtractionMetadata.from_dict(data["metadata"]),
            request_options=data.get("requestOptions"),
        )


def build_title(vendor: str, bill_id: str, start_date: FinancialDate, end_date: FinancialDate) -> str:
    return f"{vendor} {bill_id} {start_date} - {end_date}"


def build_filename(vendor: str, bill_id: str, start_date: FinancialDate, end_date: FinancialDate) -> str:
    return f"{vendor.lower()}_{bill_id}_{start_date}_{end_date}.pdf"


def build_record(
    fields: BillFields,
    link: BillLink,
    metadata: ExtractionMetadata,
    vendor: str = VENDOR,
    request_options: dict[str, Any] | None = None,
) -> BillingRecord:
    """
    Combine parsed fields and the resolved link into a BillingRecord.

    Args:
        fields: Period, amount and currency of the line
        link: Bill id and absolute file URL
        metadata: Extraction timestamp and schema version shared by the run
        vendor: Vendor name
        request_options: Transport hints needed to download fileurl

    Returns:
        BillingRecord whose reference date is the end of the billed period
    """
    return BillingRecord(
        title=build_title(vendor, link.bill_id, fields.start_date, fields.end_date),
        vendor=vendor,
        bill_id=link.bill_id,
        start_date=fields.start_date,
        end_date=fields.end_date,
        date=fields.end_date,
        amount=fields.amount,
        currency=fields.currency,
        filename=build_filename(vendor, link.bill_id, fields.start_date, fields.end_date),
        fileurl=link.fileurl,
        metadata=metadata,
        # Each record owns its transport hints
        request_options=copy.deepcopy(request_options) if request_options else None,
    )
