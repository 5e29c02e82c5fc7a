#!/usr/bin/env python3
"""
Bill Identifier Module

Derives the bill id and the absolute download URL from a bill line's link.
Each site era used its own link scheme, so identifiers are read through an
ordered tuple of strategies; the document layout decides which apply.
"""

import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urljoin

from .errors import UnresolvableLink

ACCOUNT_ROOT_URL = "https://moncompte.mediapart.fr/"
LEGACY_BASE_URL = "https://moncompte.mediapart.fr/base/moncompte/"


class LinkResolution(Enum):
    """How a link target is turned into an absolute URL."""

    CONCATENATE = "concatenate"  # base_url + href
    ROOT_RELATIVE = "root_relative"  # urljoin(base_url, href)


@dataclass(frozen=True)
class IdentifierStrategy:
    """One link scheme: where the bill id lives and how to build the file URL."""

    name: str
    pattern: re.Pattern
    base_url: str
    resolution: LinkResolution

    def resolve_url(self, href: str) -> str:
        if self.resolution == LinkResolution.CONCATENATE:
            return f"{self.base_url}{href}"
        return urljoin(self.base_url, href)


QUERY_PARAMETER = IdentifierStrategy(
    name="query_parameter",
    pattern=re.compile(r"get_facture=([^&#/\\]+)(?:[&#]|$)"),
    base_url=LEGACY_BASE_URL,
    resolution=LinkResolution.CONCATENATE,
)

PATH_SEGMENT = IdentifierStrategy(
    name="path_segment",
    pattern=re.compile(r"facture/([^/?#\\]+)/"),
    base_url=ACCOUNT_ROOT_URL,
    resolution=LinkResolution.ROOT_RELATIVE,
)


@dataclass(frozen=True)
class BillLink:
    """Identity and download location of one bill document."""

    bill_id: str
    fileurl: str


def resolve_link(href: str | None, strategies: tuple[IdentifierStrategy, ...]) -> BillLink:
    """
    Derive bill id and absolute file URL from a link target.

    Args:
        href: Link target, usually relative
        strategies: Ordered identifier strategies to try

    Returns:
        BillLink from the first matching strategy

    Raises:
        UnresolvableLink: If there is no link or no strategy matches it
    """
    if not href or not href.strip():
        raise UnresolvableLink("Bill line has no link target")

    href = href.strip()
    for strategy in strategies:
        match = strategy.pattern.search(href)
        # Bill ids end up in filenames
        if match and ".." not in match.group(1):
            return BillLink(bill_id=match.group(1), fileurl=strategy.resolve_url(href))

    names = ", ".join(strategy.name for strategy in strategies)
    raise UnresolvableLink(f"No bill id in link {href!r} (tried: {names})")
