"""Unit tests for bill id and download URL derivation."""

import pytest

from mediapart_bills.mediapart.errors import UnresolvableLink
from mediapart_bills.mediapart.identifiers import (
    PATH_SEGMENT,
    QUERY_PARAMETER,
    LinkResolution,
    resolve_link,
)


@pytest.mark.mediapart
class TestQueryParameterLinks:
    """Links of the table-era listing: index.php?get_facture=<id>."""

    def test_bill_id_and_concatenated_url(self):
        link = resolve_link("index.php?get_facture=ABC123&sess=a1b2c3", (QUERY_PARAMETER,))

        assert link.bill_id == "ABC123"
        assert link.fileurl == "https://moncompte.mediapart.fr/base/moncompte/index.php?get_facture=ABC123&sess=a1b2c3"

    def test_bill_id_last_parameter(self):
        link = resolve_link("index.php?sess=a1&get_facture=XYZ", (QUERY_PARAMETER,))
        assert link.bill_id == "XYZ"

    def test_surrounding_whitespace_ignored(self):
        link = resolve_link("  index.php?get_facture=ABC123\n", (QUERY_PARAMETER,))
        assert link.fileurl.endswith("index.php?get_facture=ABC123")


@pytest.mark.mediapart
class TestPathSegmentLinks:
    """Links of the modern listing: /facture/<id>/..."""

    def test_root_relative_link(self):
        link = resolve_link("/facture/F2023-04/", (PATH_SEGMENT,))

        assert link.bill_id == "F2023-04"
        assert link.fileurl == "https://moncompte.mediapart.fr/facture/F2023-04/"

    def test_relative_link_joined_against_root(self):
        link = resolve_link("facture/F2023-03/telecharger", (PATH_SEGMENT,))
        assert link.fileurl == "https://moncompte.mediapart.fr/facture/F2023-03/telecharger"

    def test_absolute_link_kept(self):
        link = resolve_link("https://cdn.mediapart.fr/facture/F1/doc.pdf", (PATH_SEGMENT,))
        assert link.bill_id == "F1"
        assert link.fileurl == "https://cdn.mediapart.fr/facture/F1/doc.pdf"

    def test_resolution_modes(self):
        assert QUERY_PARAMETER.resolution == LinkResolution.CONCATENATE
        assert PATH_SEGMENT.resolution == LinkResolution.ROOT_RELATIVE


@pytest.mark.mediapart
class TestUnresolvableLinks:
    """Test links that identify no bill."""

    @pytest.mark.parametrize("href", [None, "", "   "])
    def test_missing_link(self, href):
        with pytest.raises(UnresolvableLink, match="no link target"):
            resolve_link(href, (QUERY_PARAMETER, PATH_SEGMENT))

    def test_unknown_link(self):
        with pytest.raises(UnresolvableLink, match=r"tried: query_parameter, path_segment"):
            resolve_link("aide.php", (QUERY_PARAMETER, PATH_SEGMENT))

    def test_only_given_strategies_apply(self):
        """A path-segment link is not accepted on a query-parameter page."""
        with pytest.raises(UnresolvableLink):
            resolve_link("/facture/F2023-04/", (QUERY_PARAMETER,))

    @pytest.mark.parametrize(
        "href",
        [
            "index.php?get_facture=x/../../../escaped",
            "index.php?get_facture=..\\..\\escaped",
            "index.php?get_facture=..",
            "/facture/../",
            "/facture/x\\..\\y/",
        ],
        ids=["slash", "backslash", "dot_dot", "path_dot_dot", "path_backslash"],
    )
    def test_ids_that_are_not_plain_names(self, href):
        """Bill ids become filenames, so path-like ids are refused."""
        with pytest.raises(UnresolvableLink):
            resolve_link(href, (QUERY_PARAMETER, PATH_SEGMENT))

    def test_first_matching_strategy_wins(self):
        href = "/facture/P1/?get_facture=Q1"
        assert resolve_link(href, (QUERY_PARAMETER, PATH_SEGMENT)).bill_id == "Q1"
        assert resolve_link(href, (PATH_SEGMENT, QUERY_PARAMETER)).bill_id == "P1"
