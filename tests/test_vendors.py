import pytest

from willcall.vendors import (
    UnknownVendorError,
    extract_bpt_row,
    extract_extra_row,
    extract_goldstar_row,
    extract_groupon_row,
    get_vendor,
    is_bpt_row,
    is_extra_row,
    is_goldstar_row,
    is_groupon_row,
    is_purchased_groupon_row,
)


def test_classifier_boundary_between_bpt_and_extra():
    line = "abc,Smith,John"
    assert not is_bpt_row(line)
    assert is_extra_row(line)

def test_bpt_row_needs_numeric_serial():
    assert is_bpt_row("101,Smith,John")
    assert is_bpt_row(" 101,Smith,John")
    assert not is_bpt_row("Ticket,Last,First")
    assert not is_bpt_row("")

def test_bpt_extract():
    record = extract_bpt_row("101,SMITH,john", "BPT Season")
    assert record.last_name == "Smith"
    assert record.first_name == "John"
    assert record.quantity == 1
    assert record.source == "BPT Season"
    assert record.ticket_ids == ["101"]

def test_goldstar_row_uses_quantity_column():
    assert is_goldstar_row(",Smith,John,5,,,,T9")
    assert not is_goldstar_row("Order,Last,First,Qty,Date,Time,Offer,Ticket")
    # a name-only row with no quantity is not a data row
    assert not is_goldstar_row(",Smith,John")

def test_goldstar_zero_quantity_is_not_a_data_row():
    line = ",Smith,John,0,,,,T1"
    assert not is_goldstar_row(line)
    assert get_vendor("goldstar").reject_reason(line) == "non_positive_quantity"

def test_goldstar_extract_uses_caller_source():
    assert extract_goldstar_row(",smith,john,2,,,,T1", "GoldStar Season").source == "GoldStar Season"

def test_goldstar_extract():
    record = extract_goldstar_row(",van dyke,DICK,5,,,,T9")
    assert record.last_name == "Van Dyke"
    assert record.first_name == "Dick"
    assert record.quantity == 5
    assert record.source == "GoldStar"
    assert record.ticket_ids == ["T9"]

def test_groupon_strict_needs_purchased():
    assert is_groupon_row("LG-2,bob ray,Refunded")
    assert not is_purchased_groupon_row("LG-2,bob ray,Refunded")
    assert is_purchased_groupon_row('LG-1,bob ray,"Purchased, not redeemed"')
    assert not is_purchased_groupon_row("Voucher,Name,Purchased")
    # case-sensitive
    assert not is_purchased_groupon_row("LG-3,bob ray,purchased")

def test_groupon_extract_splits_full_name():
    record = extract_groupon_row('LG-1,  mary jane   watson ,"Purchased, not redeemed"', "Groupon Season")
    assert record.last_name == "Watson"
    assert record.first_name == "Mary Jane"
    assert record.quantity == 1
    assert record.source == "Groupon Season"
    assert record.ticket_ids == ["LG-1"]

def test_groupon_quoted_name_is_unquoted():
    record = extract_groupon_row('LG-1,"doe, jane",Purchased')
    assert record.last_name == "Jane"
    assert record.first_name == "Doe"

def test_groupon_single_name():
    record = extract_groupon_row("LG-1,cher,Purchased")
    assert record.last_name == "Cher"
    assert record.first_name == ""

def test_extra_source_is_always_reserved():
    record = extract_extra_row("doe,jane,2,Box Office,R1")
    assert record.last_name == "doe"
    assert record.first_name == "jane"
    assert record.quantity == 2
    assert record.source == "(Reserved)"
    assert record.ticket_ids == ["R1"]

def test_extra_short_row_extracts_with_gaps():
    record = extract_extra_row("Doe,Jane")
    assert record.quantity == 1
    assert record.source == "(Reserved)"
    assert record.ticket_ids == [""]

def test_extra_bad_quantity_defaults_to_one():
    assert extract_extra_row("Doe,Jane,two,x,R1").quantity == 1
    assert extract_extra_row("Doe,Jane,0,x,R1").quantity == 1

def test_get_vendor_strategy_flag():
    strict = get_vendor("groupon")
    lenient = get_vendor("groupon", groupon_require_purchased=False)
    line = "LG-2,bob ray,Refunded"
    assert not strict.classify(line)
    assert strict.reject_reason(line) == "not_purchased"
    assert lenient.classify(line)
    assert lenient.reject_reason is None

def test_get_vendor_unknown():
    with pytest.raises(UnknownVendorError):
        get_vendor("ticketmaster")
