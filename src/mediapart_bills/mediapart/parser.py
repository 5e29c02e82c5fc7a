#!/usr/bin/env python3
"""
Mediapart Billing Page Parser Module

Turns one fetched billing page into the ordered list of billing records.
Accounts of different ages are rendered with different markup, so the parser
first detects the layout, then runs that layout's extractors in a fixed order:
recent bills first, then old bills.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..core.config import DEFAULT_USER_AGENT
from .errors import UnrecognizedLayout
from .extractor import BillShape, LineExtraction, LineFailure, ListItemShape, TableRowShape, extract_lines
from .identifiers import PATH_SEGMENT, QUERY_PARAMETER, IdentifierStrategy
from .markup import DEFAULT_FEATURES, MarkupNode, SoupNode
from .records import BillingRecord, ExtractionMetadata

logger = logging.getLogger(__name__)

MODERN_CONTAINER = "#factures"


@dataclass(frozen=True)
class DocumentLayout:
    """One era of the billing page markup."""

    name: str
    recent: BillShape
    old: BillShape | None
    strategies: tuple[IdentifierStrategy, ...]
    # Download needs a browser User-Agent header
    requires_user_agent: bool = False

    def shapes(self) -> list[BillShape]:
        return [shape for shape in (self.recent, self.old) if shape is not None]


# Recent bills as list items in any table, older bills as rows of the second
# table; the first two rows of that table are layout junk.
TABLE_LAYOUT = DocumentLayout(
    name="table_layout",
    recent=ListItemShape(name="recent_list", selector="table li"),
    old=TableRowShape(name="old_table", table_index=1, skip_leading_rows=2, required_attribute="align"),
    strategies=(QUERY_PARAMETER,),
)

MODERN_LAYOUT = DocumentLayout(
    name="modern_layout",
    recent=ListItemShape(name="invoice_list", selector=f"{MODERN_CONTAINER} li"),
    old=None,
    strategies=(PATH_SEGMENT,),
    requires_user_agent=True,
)


@dataclass
class BillExtraction:
    """All records of one billing page, plus per-line diagnostics."""

    layout: str
    records: list[BillingRecord] = field(default_factory=list)
    failures: list[LineFailure] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "layout": self.layout,
            "records": [record.to_dict() for record in self.records],
            "failures": [failure.to_dict() for failure in self.failures],
        }


class MediapartBillParser:
    """
    Billing page parser supporting every known markup layout.

    Layout detection is authoritative: it decides which extractors run and
    which link scheme identifies the bills.
    """

    def __init__(self, user_agent: str | None = DEFAULT_USER_AGENT, features: str = DEFAULT_FEATURES):
        self.user_agent = user_agent
        self.features = features

    def parse_html_content(self, html_content: str, metadata: ExtractionMetadata | None = None) -> BillExtraction:
        """Parse raw HTML of a billing page."""
        return self.parse_document(SoupNode.from_html(html_content, self.features), metadata)

    def parse_file(self, html_path: Path, metadata: ExtractionMetadata | None = None) -> BillExtraction:
        """
        Parse a billing page saved on disk.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        if not html_path.exists():
            raise FileNotFoundError(f"HTML file not found: {html_path}")

        with open(html_path, encoding="utf-8") as f:
            content = f.read()

        return self.parse_html_content(content, metadata)

    def parse_document(self, document: MarkupNode, metadata: ExtractionMetadata | None = None) -> BillExtraction:
        """
        Extract all billing records of a parsed billing page.

        Args:
            document: Parsed billing page
            metadata: Provenance for the run (default: now, current schema version)

        Returns:
            BillExtraction with recent records first, then old records

        Raises:
            UnrecognizedLayout: If the page contains no known bill container
        """
        layout = self.detect_layout(document)
        logger.info(f"Detected layout: {layout.name}")

        if metadata is None:
            metadata = ExtractionMetadata.now()
        request_options = self._request_options(layout)

        combined = LineExtraction()
        for shape in layout.shapes():
            combined.extend(extract_lines(document, shape, layout.strategies, metadata, request_options))

        logger.info(f"Extracted {len(combined.records)} bills ({len(combined.failures)} lines skipped)")
        return BillExtraction(layout=layout.name, records=combined.records, failures=combined.failures)

    def detect_layout(self, document: MarkupNode) -> DocumentLayout:
        """
        Detect which billing page layout this document uses.

        Returns:
            MODERN_LAYOUT: single list container with a dedicated id
            TABLE_LAYOUT: recent bills listed in a table, optionally a second table of old bills

        Raises:
            UnrecognizedLayout: If neither container is present
        """
        if document.select(MODERN_CONTAINER):
            return MODERN_LAYOUT

        if document.select("table li") or len(document.select("table")) >= 2:
            return TABLE_LAYOUT

        raise UnrecognizedLayout("No known bill container found in document")

    def _request_options(self, layout: DocumentLayout) -> dict[str, Any] | None:
        if layout.requires_user_agent and self.user_agent:
            return {"headers": {"User-Agent": self.user_agent}}
        return None
