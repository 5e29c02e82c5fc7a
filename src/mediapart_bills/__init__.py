"""
Mediapart Bills - Billing History Scraper

Logs into a Mediapart subscriber account, reads the billing history page and
extracts structured billing records for a personal-data store.

Domain Packages:
- core: Amounts, dates, configuration, JSON helpers
- mediapart: Page parsing, HTTP client, bill storage
- cli: Command-line interface

Example Usage:
    from mediapart_bills.mediapart import MediapartBillParser

    extraction = MediapartBillParser().parse_html_content(html)
    for record in extraction.records:
        print(record.title)

Version: 1.0.0
"""

__version__ = "1.0.0"
__author__ = "Mediapart Bills contributors"

from .core.config import Environment, get_config
from .core.dates import FinancialDate
from .core.money import Money

__all__ = [
    "Environment",
    "FinancialDate",
    "Money",
    "get_config",
]
