"""Unit tests for billing record construction and serialization."""

from datetime import datetime

import pytest

from mediapart_bills.core import FinancialDate, Money
from mediapart_bills.mediapart.fields import parse_line
from mediapart_bills.mediapart.identifiers import QUERY_PARAMETER, resolve_link
from mediapart_bills.mediapart.records import (
    BillingRecord,
    ExtractionMetadata,
    build_filename,
    build_record,
    build_title,
)


@pytest.fixture
def january_record(metadata) -> BillingRecord:
    fields = parse_line("du 01/01/2020 au 31/01/2020 9,99 €")
    link = resolve_link("index.php?get_facture=ABC123", (QUERY_PARAMETER,))
    return build_record(fields, link, metadata)


@pytest.mark.mediapart
class TestBuildRecord:
    """Test record assembly."""

    def test_list_item_produces_complete_record(self, january_record, metadata):
        """du 01/01/2020 au 31/01/2020 9,99 € with get_facture=ABC123."""
        record = january_record

        assert record.vendor == "Mediapart"
        assert record.bill_id == "ABC123"
        assert record.start_date == FinancialDate.from_string("2020-01-01")
        assert record.end_date == FinancialDate.from_string("2020-01-31")
        assert record.amount == Money.from_cents(999)
        assert record.currency == "€"
        assert record.title == "Mediapart ABC123 2020-01-01 - 2020-01-31"
        assert record.filename == "mediapart_ABC123_2020-01-01_2020-01-31.pdf"
        assert record.fileurl == "https://moncompte.mediapart.fr/base/moncompte/index.php?get_facture=ABC123"
        assert record.metadata == metadata

    def test_reference_date_is_end_of_period(self, january_record):
        assert january_record.date == january_record.end_date

    def test_title_and_filename_helpers(self):
        start = FinancialDate.from_string("2019-10-01")
        end = FinancialDate.from_string("2019-10-31")
        assert build_title("Mediapart", "OLD1", start, end) == "Mediapart OLD1 2019-10-01 - 2019-10-31"
        assert build_filename("Mediapart", "OLD1", start, end) == "mediapart_OLD1_2019-10-01_2019-10-31.pdf"


@pytest.mark.mediapart
class TestRecordSerialization:
    """Test the storage-facing dictionary form."""

    def test_to_dict_uses_storage_keys(self, january_record):
        data = january_record.to_dict()

        assert data == {
            "title": "Mediapart ABC123 2020-01-01 - 2020-01-31",
            "vendor": "Mediapart",
            "billId": "ABC123",
            "startDate": "2020-01-01",
            "endDate": "2020-01-31",
            "date": "2020-01-31",
            "amount": 9.99,
            "currency": "€",
            "filename": "mediapart_ABC123_2020-01-01_2020-01-31.pdf",
            "fileurl": "https://moncompte.mediapart.fr/base/moncompte/index.php?get_facture=ABC123",
            "metadata": {"date": "2024-03-01T09:30:00", "version": 1},
        }

    def test_request_options_serialized_when_present(self, metadata):
        fields = parse_line("du 01/01/2020 au 31/01/2020 9,99 €")
        link = resolve_link("index.php?get_facture=ABC123", (QUERY_PARAMETER,))
        options = {"headers": {"User-Agent": "Mozilla/5.0"}}

        record = build_record(fields, link, metadata, request_options=options)

        assert record.to_dict()["requestOptions"] == options

    def test_request_options_not_shared_between_records(self, metadata):
        fields = parse_line("du 01/01/2020 au 31/01/2020 9,99 €")
        options = {"headers": {"User-Agent": "Mozilla/5.0"}}
        first_link = resolve_link("index.php?get_facture=A1", (QUERY_PARAMETER,))
        second_link = resolve_link("index.php?get_facture=A2", (QUERY_PARAMETER,))

        first = build_record(fields, first_link, metadata, request_options=options)
        second = build_record(fields, second_link, metadata, request_options=options)

        first.request_options["headers"]["User-Agent"] = "curl/8.0"

        assert second.request_options == {"headers": {"User-Agent": "Mozilla/5.0"}}
        assert options == {"headers": {"User-Agent": "Mozilla/5.0"}}

    def test_from_dict_restores_record(self, january_record):
        restored = BillingRecord.from_dict(january_record.to_dict())
        assert restored == january_record
        assert restored.amount.to_cents() == 999

    def test_dedup_key(self, january_record):
        assert january_record.dedup_key() == ("Mediapart", "ABC123")
        assert january_record.dedup_key(("billId",)) == ("ABC123",)


@pytest.mark.mediapart
def test_extraction_metadata_now():
    before = datetime.now()
    metadata = ExtractionMetadata.now()
    assert metadata.version == 1
    assert before <= metadata.date <= datetime.now()
