"""
Mediapart Bills Package

Scrapes the billing history of a Mediapart subscriber account.

This package provides:
- Billing page parsing with layout detection (table-era and modern markup)
- Field extraction with ordered fallback line shapes
- Bill id and download URL derivation per link scheme
- Authenticated HTTP client for login, listing and downloads
- Folder-backed bill storage with (vendor, billId) deduplication

Key Components:
- parser: layout detection and orchestration
- extractor: per-shape line extraction with per-line fault isolation
- fields / identifiers / records: pure field, link and record builders
- client: requests-based session
- datastore / loader: storage and reporting
"""

from .client import MediapartClient
from .datastore import BillStore, SaveResult
from .errors import (
    AuthenticationError,
    MediapartError,
    UnparseableLine,
    UnrecognizedLayout,
    UnresolvableLink,
)
from .extractor import FailureReason, LineFailure, ListItemShape, TableRowShape, extract_lines
from .fields import BillFields, parse_amount, parse_line, parse_period, parse_row
from .identifiers import PATH_SEGMENT, QUERY_PARAMETER, BillLink, IdentifierStrategy, LinkResolution, resolve_link
from .loader import bills_to_dataframe, get_bill_summary, load_bills
from .markup import MarkupNode, SoupNode
from .parser import MODERN_LAYOUT, TABLE_LAYOUT, BillExtraction, DocumentLayout, MediapartBillParser
from .records import BillingRecord, ExtractionMetadata, build_record

__all__ = [
    "MODERN_LAYOUT",
    "PATH_SEGMENT",
    "QUERY_PARAMETER",
    "TABLE_LAYOUT",
    "AuthenticationError",
    "BillExtraction",
    "BillFields",
    "BillLink",
    "BillStore",
    "BillingRecord",
    "DocumentLayout",
    "ExtractionMetadata",
    "FailureReason",
    "IdentifierStrategy",
    "LineFailure",
    "LinkResolution",
    "ListItemShape",
    "MarkupNode",
    "MediapartBillParser",
    "MediapartClient",
    "MediapartError",
    "SaveResult",
    "SoupNode",
    "TableRowShape",
    "UnparseableLine",
    "UnrecognizedLayout",
    "UnresolvableLink",
    "bills_to_dataframe",
    "build_record",
    "extract_lines",
    "get_bill_summary",
    "load_bills",
    "parse_amount",
    "parse_line",
    "parse_period",
    "parse_row",
    "resolve_link",
]
