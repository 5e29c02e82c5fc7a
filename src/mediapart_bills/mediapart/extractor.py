#!/usr/bin/env python3
"""
Bill Line Extractor Module

Walks one structural shape of a billing page (list items, or rows of a table),
drops lines that are not bills, and turns each remaining line into a
BillingRecord. A line that cannot be parsed is logged, recorded as a
LineFailure and skipped; it never stops the remaining lines.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import UnparseableLine, UnresolvableLink
from .fields import BillFields, parse_line, parse_row
from .identifiers import IdentifierStrategy, resolve_link
from .markup import MarkupNode
from .records import BillingRecord, ExtractionMetadata, build_record

logger = logging.getLogger(__name__)

LINK_SELECTOR = "a[href]"


class FailureReason(Enum):
    """Why a candidate line produced no record."""

    UNPARSEABLE_LINE = "unparseable_line"
    UNRESOLVABLE_LINK = "unresolvable_link"


@dataclass(frozen=True)
class LineFailure:
    """Diagnostic for one skipped candidate line."""

    shape: str
    index: int
    reason: FailureReason
    message: str
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "shape": self.shape,
            "index": self.index,
            "reason": self.reason.value,
            "message": self.message,
            "text": self.text,
        }


@dataclass
class LineExtraction:
    """Records and failures produced by one extractor, in document order."""

    records: list[BillingRecord] = field(default_factory=list)
    failures: list[LineFailure] = field(default_factory=list)

    def extend(self, other: "LineExtraction") -> None:
        self.records.extend(other.records)
        self.failures.extend(other.failures)


@dataclass(frozen=True)
class ListItemShape:
    """Bill lines are elements matching a selector; all fields sit in one text."""

    name: str
    selector: str

    def candidates(self, document: MarkupNode) -> list[MarkupNode]:
        return document.select(self.selector)

    def read_fields(self, candidate: MarkupNode) -> BillFields:
        return parse_line(candidate.text())


@dataclass(frozen=True)
class TableRowShape:
    """
    Bill lines are rows of one table; period and amount sit in separate cells.

    Rows are kept only if they carry required_attribute, after dropping the
    first skip_leading_rows rows of the table.
    """

    name: str
    table_index: int
    skip_leading_rows: int = 0
    required_attribute: str | None = "align"
    amount_cell_index: int = 1

    def candidates(self, document: MarkupNode) -> list[MarkupNode]:
        tables = document.select("table")
        if len(tables) <= self.table_index:
            logger.debug("No table #%d for shape %s, nothing to extract", self.table_index, self.name)
            return []

        rows = tables[self.table_index].select("tr")[self.skip_leading_rows :]
        if self.required_attribute is None:
            return rows
        return [row for row in rows if row.attr(self.required_attribute) is not None]

    def read_fields(self, candidate: MarkupNode) -> BillFields:
        cells = candidate.select("td")
        if len(cells) <= self.amount_cell_index:
            raise UnparseableLine(f"Row has {len(cells)} cells, expected an amount in cell {self.amount_cell_index}")
        period_text = " ".join(cell.text() for cell in cells)
        return parse_row(period_text, cells[self.amount_cell_index].text())


BillShape = ListItemShape | TableRowShape


def _link_target(candidate: MarkupNode) -> str | None:
    links = candidate.select(LINK_SELECTOR)
    if not links:
        return None
    return links[0].attr("href")


def extract_lines(
    document: MarkupNode,
    shape: BillShape,
    strategies: tuple[IdentifierStrategy, ...],
    metadata: ExtractionMetadata,
    request_options: dict[str, Any] | None = None,
) -> LineExtraction:
    """
    Extract billing records from every bill line of one shape.

    Args:
        document: Parsed billing page
        shape: Where the candidate lines live and how to read their fields
        strategies: Identifier strategies for the page's link scheme
        metadata: Provenance shared by all records of the run
        request_options: Transport hints attached to every record

    Returns:
        LineExtraction with records and failures in document order
    """
    extraction = LineExtraction()

    for index, candidate in enumerate(shape.candidates(document)):
        href = _link_target(candidate)
        if href is None:
            # Nothing to download: promotional or gift-card line
            logger.debug("Skipping %s line %d without link", shape.name, index)
            continue

        text = candidate.text()
        try:
            fields = shape.read_fields(candidate)
            link = resolve_link(href, strategies)
        except UnparseableLine as e:
            failure = LineFailure(shape.name, index, FailureReason.UNPARSEABLE_LINE, str(e), text)
        except UnresolvableLink as e:
            failure = LineFailure(shape.name, index, FailureReason.UNRESOLVABLE_LINK, str(e), text)
        else:
            extraction.records.append(build_record(fields, link, metadata, request_options=request_options))
            continue

        logger.warning("Unparseable bill line (%s #%d, %s): %s", shape.name, index, failure.reason.value, failure.message)
        extraction.failures.append(failure)

    logger.info(
        "Shape %s: %d records, %d failures", shape.name, len(extraction.records), len(extraction.failures)
    )
    return extraction
