import logging
import re
from types import MappingProxyType
from typing import Dict, Iterable, List, Tuple

from orderdesk_bridge.schemas import ShipmentRecord

logger = logging.getLogger(__name__)

DEFAULT_SHIPMENT_METHOD = "Residential"

SHIPMENT_METHODS = MappingProxyType({
    "G": "Ground",
    "3RD": "3 Day Select",
    "2ND": "2nd Day Air",
})

# Back-office customer number -> OrderDesk store id
STORE_IDS = MappingProxyType({
    "RTSCS": "68125",
    "RTFMS": "118741",
    "HERO": "14077",
})

NON_DIGITS = re.compile(r"\D")


def extract_order_number(cust_po_number: str) -> str:
    """
    Order number is the digits of the first '/'-separated segment.
    '12345/1' -> '12345', 'PO 77-12/3' -> '7712'. Returns '' if there are none.
    """
    first_segment = cust_po_number.split("/")[0]
    return NON_DIGITS.sub("", first_segment).strip()


def parse_shipped_via(shipped_via: str) -> Tuple[str, str]:
    """'UPS - G' -> ('UPS', 'G'). Missing parts come back as ''."""
    parts = [part.strip() for part in shipped_via.split("-")]
    carrier_code = parts[0] if parts else ""
    method_code = parts[1] if len(parts) > 1 else ""
    return carrier_code, method_code


def map_shipment_method(code: str) -> str:
    return SHIPMENT_METHODS.get(code, code) or DEFAULT_SHIPMENT_METHOD


def map_store_id(customer_number: str) -> str:
    store_id = STORE_IDS.get(customer_number)
    if store_id is None:
        logger.warning("No store id mapped for customer number %r, using it as-is", customer_number)
        return customer_number
    return store_id


def format_shipments(rows: Iterable[Dict[str, str]]) -> List[ShipmentRecord]:
    """
    Turns normalized CSV rows into OrderDesk shipment records.

    Rows without a usable Cust_PO_Number are skipped, and only the first row
    for each order number is kept. Input order is preserved.
    """
    seen_orders = set()
    records = []

    for row in rows:
        cust_po = row.get("Cust_PO_Number")
        if not cust_po:
            continue

        order_number = extract_order_number(cust_po)
        if not order_number or order_number in seen_orders:
            continue
        seen_orders.add(order_number)

        carrier_code, method_code = parse_shipped_via(row.get("Shipped_VIA") or "")
        store_id = map_store_id(row.get("Customer_Number") or "")

        records.append(ShipmentRecord(
            source_id=f"{store_id}-{order_number}",
            tracking_number=row.get("Tracking_Number") or "",
            carrier_code=carrier_code,
            shipment_method=map_shipment_method(method_code),
        ))

    logger.info("Data formatted: %d shipment records", len(records))
    return records
