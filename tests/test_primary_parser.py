import pytest

from warrant.models import ActiveVendor, VendorState, WarrantRecord
from warrant.normalizer import split_lines
from warrant.primary_parser import PrimaryLineParser, clean_description, match_vendor_header


@pytest.fixture
def parser():
    return PrimaryLineParser()


def run(parser, text):
    return parser.parse(split_lines(text))


def test_vendor_header_then_item_on_same_line(parser):
    records = run(parser, "12345 ACME SUPPLY CO\n1001 24567 03 Office supplies 150.00 20.00")
    assert records == [
        WarrantRecord(
            vendor_code="12345",
            vendor_name="ACME SUPPLY CO",
            check_number="24567",
            month="03",
            description="Office supplies",
            account="",
            department_category="",
            amount=150.00,
        )
    ]


def test_amount_two_lines_below_with_fund_line(parser):
    text = "\n".join([
        "12345 ACME SUPPLY CO",
        "1001 24567 03 Road salt",
        "FUND 1 / HIGHWAYS",
        "E 4-1-10 2,500.00 0.00",
    ])
    (record,) = run(parser, text)
    assert record.amount == 2500.00
    assert record.department_category == "FUND 1 / HIGHWAYS"
    assert record.account == "E 4-1-10"
    assert record.description == "Road salt"


def test_full_sample(parser, sample_text):
    records = run(parser, sample_text)
    assert [r.vendor_name for r in records] == [
        "ACME SUPPLY CO",
        "BOB'S PLUMBING & HEATING",
        "CITY OF AUGUSTA",
    ]
    acme, bobs, city = records
    assert acme.account == "E 1-2-34"
    assert acme.department_category == "GENERAL GOVT - ADMIN / Supplies"
    assert bobs.amount == 1250.50
    assert bobs.account == "G 2-10-05"
    assert bobs.department_category == "FUND 1 / GENERAL FUND"
    assert bobs.description == "Boiler repair"
    # account embedded in the item line is scrubbed from the description only
    assert city.description == "Sewer fee"
    assert city.account == ""
    assert city.amount == 75.25


def test_first_match_wins_inside_window(parser):
    text = "\n".join([
        "12345 ACME SUPPLY CO",
        "1001 24567 03 Parts",
        "E 1-2-34",
        "PUBLIC WORKS - HIGHWAY / Parts",
        "G 9-9-99 10.00 0.00",
        "GENERAL GOVT - ADMIN / Other 20.00 0.00",
    ])
    (record,) = run(parser, text)
    assert record.account == "E 1-2-34"
    assert record.department_category == "PUBLIC WORKS - HIGHWAY / Parts"
    assert record.amount == 10.00


def test_lookahead_is_bounded_to_four_lines(parser):
    text = "\n".join([
        "12345 ACME SUPPLY CO",
        "1001 24567 03 Parts",
        "note one",
        "note two",
        "note three",
        "note four",
        "E 1-2-34 10.00 0.00",
    ])
    assert run(parser, text) == []


def test_custom_lookahead_reaches_further():
    text = "\n".join([
        "12345 ACME SUPPLY CO",
        "1001 24567 03 Parts",
        "note one",
        "note two",
        "note three",
        "note four",
        "E 1-2-34 10.00 0.00",
    ])
    (record,) = PrimaryLineParser(lookahead=5).parse(split_lines(text))
    assert record.amount == 10.00


def test_lookahead_stops_at_next_item(parser):
    text = "\n".join([
        "12345 ACME SUPPLY CO",
        "1001 24567 03 No amount here",
        "1002 24568 03 Second 40.00 0.00",
        "E 1-2-34",
    ])
    records = run(parser, text)
    assert len(records) == 1
    assert records[0].check_number == "24568"
    assert records[0].account == "E 1-2-34"


def test_lookahead_stops_at_next_vendor(parser):
    text = "\n".join([
        "12345 ACME SUPPLY CO",
        "1001 24567 03 Parts",
        "23456 OTHER VENDOR",
        "E 1-2-34 99.00 0.00",
    ])
    assert run(parser, text) == []


def test_item_without_vendor_is_dropped(parser):
    assert run(parser, "1001 24567 03 Orphan 10.00 0.00") == []


def test_zero_amount_is_dropped(parser):
    assert run(parser, "12345 ACME\n1001 24567 03 Void 0.00 0.00") == []


def test_boilerplate_does_not_reset_vendor(parser):
    text = "\n".join([
        "12345 ACME SUPPLY CO",
        "Page 1 of 2",
        "Vendor Jrnl Check Month",
        "1001 24567 03 Parts 10.00 0.00",
    ])
    (record,) = run(parser, text)
    assert record.vendor_code == "12345"


def test_vendor_is_never_taken_from_a_later_header(parser):
    text = "\n".join([
        "12345 FIRST VENDOR",
        "1001 24567 03 Parts",
        "E 1-2-34 10.00 0.00",
        "23456 SECOND VENDOR",
        "1002 24568 03 Tools 20.00 0.00",
    ])
    first, second = run(parser, text)
    assert (first.vendor_code, first.vendor_name) == ("12345", "FIRST VENDOR")
    assert (second.vendor_code, second.vendor_name) == ("23456", "SECOND VENDOR")


def test_double_code_line_is_not_a_vendor_header():
    assert match_vendor_header("12345 24567 ACME") is None
    assert match_vendor_header("12345   ACME    SUPPLY   CO") == ("12345", "ACME SUPPLY CO")


def test_description_defaults_to_payment():
    assert clean_description("   ") == "Payment"
    assert clean_description("E 1-2-34 10.00 0.00") == "Payment"
    assert clean_description("Fuel  G 2-10-05   oil") == "Fuel oil"


def test_active_vendor_state():
    vendor = ActiveVendor()
    assert vendor.state is VendorState.NO_VENDOR
    vendor.switch("12345", "ACME")
    assert vendor.state is VendorState.VENDOR_ACTIVE


def test_non_ascii_digits_do_not_form_vendors_or_amounts(parser):
    text = "１２３４５ ACME\n1001 24567 03 x ١٢.٣٤ 0.00"
    assert run(parser, text) == []
