#!/usr/bin/env python3
"""
Mediapart Bill Loader Module

Loads stored billing records and provides DataFrame conversion and summary
statistics for reporting.
"""

import logging
from pathlib import Path
from typing import Any

import pandas as pd

from ..core.config import get_config
from .datastore import BillStore
from .records import BillingRecord

logger = logging.getLogger(__name__)


def load_bills(bills_dir: Path | None = None) -> list[BillingRecord]:
    """
    Load stored billing records as domain models.

    Args:
        bills_dir: Bill folder (uses configuration if None)

    Returns:
        List of BillingRecord in index order

    Raises:
        FileNotFoundError: If no bill index exists
    """
    if bills_dir is None:
        bills_dir = get_config().mediapart.bills_dir

    records = BillStore(bills_dir).load()
    logger.info("Loaded %d Mediapart bills from %s", len(records), bills_dir)
    return records


def bills_to_dataframe(records: list[BillingRecord]) -> pd.DataFrame:
    """
    Convert BillingRecord domain models to a DataFrame.

    Amounts are kept in integer cents; dates become pandas timestamps.
    """
    rows = [
        {
            "bill_id": record.bill_id,
            "vendor": record.vendor,
            "date": pd.Timestamp(record.date.date),
            "start_date": pd.Timestamp(record.start_date.date),
            "end_date": pd.Timestamp(record.end_date.date),
            "amount": record.amount.to_cents(),
            "currency": record.currency,
            "filename": record.filename,
        }
        for record in records
    ]

    df = pd.DataFrame(rows)

    # Sort by billing date for easier processing
    if not df.empty:
        df = df.sort_values("date").reset_index(drop=True)

    logger.info("Converted %d bills to DataFrame", len(df))
    return df


def get_bill_summary(bills_df: pd.DataFrame) -> dict[str, Any]:
    """
    Generate summary statistics for stored bills.

    Args:
        bills_df: DataFrame from bills_to_dataframe()

    Returns:
        Dictionary with count, totals per currency and date range
    """
    if bills_df.empty:
        return {"total_bills": 0}

    return {
        "total_bills": len(bills_df),
        "total_amount": {
            currency: int(total) for currency, total in bills_df.groupby("currency")["amount"].sum().items()
        },
        "date_range": {
            "earliest": bills_df["date"].min().strftime("%Y-%m-%d"),
            "latest": bills_df["date"].max().strftime("%Y-%m-%d"),
        },
        "average_amount": int(bills_df["amount"].mean()),
    }
