import logging

import pytest

from orderdesk_bridge.services.transform import (
    extract_order_number,
    format_shipments,
    map_shipment_method,
    map_store_id,
    parse_shipped_via,
)


def row(po="12345/1", via="UPS - G", customer="RTSCS", tracking="1Z000"):
    data = {"Cust_PO_Number": po, "Shipped_VIA": via, "Customer_Number": customer, "Tracking_Number": tracking}
    return {k: v for k, v in data.items() if v is not None}


@pytest.mark.parametrize("raw, expected", [
    ("12345/1", "12345"),
    ("12345", "12345"),
    ("PO#12345/2", "12345"),
    (" 98 76 /3", "9876"),
    ("ABC/123", ""),
    ("/123", ""),
])
def test_extract_order_number(raw, expected):
    assert extract_order_number(raw) == expected


def test_parse_shipped_via():
    assert parse_shipped_via("UPS - G") == ("UPS", "G")
    assert parse_shipped_via("FEDEX-2ND") == ("FEDEX", "2ND")
    assert parse_shipped_via("UPS") == ("UPS", "")
    assert parse_shipped_via("") == ("", "")


def test_map_shipment_method():
    assert map_shipment_method("G") == "Ground"
    assert map_shipment_method("3RD") == "3 Day Select"
    assert map_shipment_method("2ND") == "2nd Day Air"
    assert map_shipment_method("NDA") == "NDA"
    assert map_shipment_method("") == "Residential"


def test_map_store_id_known_and_unknown(caplog):
    assert map_store_id("RTFMS") == "118741"
    assert map_store_id("HERO") == "14077"
    with caplog.at_level(logging.WARNING):
        assert map_store_id("UNKNOWN1") == "UNKNOWN1"
    assert "UNKNOWN1" in caplog.text


def test_rtscs_row_maps_to_store_and_order():
    [record] = format_shipments([row()])
    assert record.source_id == "68125-12345"
    assert record.tracking_number == "1Z000"
    assert record.carrier_code == "UPS"
    assert record.shipment_method == "Ground"


def test_unknown_customer_falls_back_to_raw_value():
    [record] = format_shipments([row(customer="UNKNOWN1")])
    assert record.source_id.startswith("UNKNOWN1-")


@pytest.mark.parametrize("po", ["", None])
def test_rows_without_cust_po_number_are_dropped(po):
    records = format_shipments([row(po=po), row(po="2/1")])
    assert [r.source_id for r in records] == ["68125-2"]


def test_rows_without_digits_in_order_number_are_dropped():
    assert format_shipments([row(po="N/A")]) == []


def test_first_row_wins_for_duplicate_order_numbers():
    records = format_shipments([
        row(po="100/1", tracking="FIRST"),
        row(po="200/1", tracking="OTHER"),
        row(po="100/2", tracking="SECOND"),
    ])
    assert [r.tracking_number for r in records] == ["FIRST", "OTHER"]


def test_duplicates_across_customers_still_collapse():
    records = format_shipments([row(po="100/1", customer="RTSCS"), row(po="100/1", customer="HERO")])
    assert [r.source_id for r in records] == ["68125-100"]


@pytest.mark.parametrize("via", ["", None])
def test_missing_shipped_via_defaults_to_residential(via):
    [record] = format_shipments([row(via=via)])
    assert record.carrier_code == ""
    assert record.shipment_method == "Residential"


def test_unmapped_method_code_passes_through():
    [record] = format_shipments([row(via="USPS - PRIORITY")])
    assert record.carrier_code == "USPS"
    assert record.shipment_method == "PRIORITY"


def test_seen_orders_are_not_shared_between_calls():
    assert len(format_shipments([row()])) == 1
    assert len(format_shipments([row()])) == 1
