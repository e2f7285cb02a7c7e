from warrant.fallback_parser import FallbackLineParser, first_plausible_amount
from warrant.normalizer import split_lines


def run(text):
    return FallbackLineParser().parse(split_lines(text))


def test_low_signal_document(low_signal_text):
    records = run(low_signal_text)
    assert [(r.vendor_code, r.check_number, r.amount) for r in records] == [
        ("12345", "24501", 2500.00),
        ("12345", "", 300.00),
    ]
    for r in records:
        assert r.month == "03"
        assert r.description == "Payment"
        assert r.department_category == ""


def test_lines_before_any_vendor_are_ignored():
    assert run("Opening balance 1,000.00\nMisc 12.00") == []


def test_total_lines_are_skipped():
    text = "12345 ACME\nVendor Total 150.00\nTotal 99.00\nfuel 10.00"
    assert [r.amount for r in run(text)] == [10.00]


def test_account_is_extracted_from_the_same_line():
    (record,) = run("12345 ACME\n1001 25001 03 G 2-10-05 44.10 0.00")
    assert record.account == "G 2-10-05"
    assert record.check_number == "25001"
    assert record.amount == 44.10


def test_header_followed_directly_by_numbers_is_a_vendor():
    (record,) = run("12345 ACME SUPPLY 24501 10.00")
    assert record.vendor_name == "ACME SUPPLY"
    assert record.amount == 10.00


def test_first_plausible_amount_skips_out_of_range_values():
    assert first_plausible_amount("0.00 12,000,000.00 45.10 7.00") == 45.10
    assert first_plausible_amount("0.00 0.00") is None
    assert first_plausible_amount("no amounts") is None


def test_check_heuristic_ignores_other_years():
    (record,) = run("12345 ACME\npaid 23001 10.00")
    assert record.check_number == ""
