import csv
import io
import logging
import re
from typing import Dict, List

from orderdesk_bridge.errors import ParseError

logger = logging.getLogger(__name__)

BANNER_LINES = 4
HEADER_SEPARATORS = re.compile(r"[- ]")


def normalize_header(name: str) -> str:
    """'Cust PO-Number' -> 'Cust_PO_Number'"""
    return HEADER_SEPARATORS.sub("_", name)


def parse_csv_bytes(data: bytes, skip_lines: int = BANNER_LINES) -> List[Dict[str, str]]:
    """
    Reads an exported shipment CSV into one dict per data line.

    The first `skip_lines` lines are report banner text and are discarded
    unconditionally; the next line is the column header. Column names are
    normalized with `normalize_header`.
    """
    text = data.decode("utf-8-sig", errors="replace")
    if "\ufffd" in text:
        logger.warning("Upload is not clean UTF-8, undecodable bytes were replaced")

    stream = io.StringIO(text, newline="")
    for _ in range(skip_lines):
        stream.readline()

    rows = []
    try:
        reader = csv.reader(stream, strict=True)
        header = next(reader, None)
        if header is None:
            logger.info("CSV contained no header line after %d banner lines", skip_lines)
            return rows

        columns = [normalize_header(col) for col in header]
        for values in reader:
            if not values:
                continue
            rows.append(dict(zip(columns, values)))
    except csv.Error as e:
        raise ParseError(f"Malformed CSV near line {reader.line_num + skip_lines}: {e}") from e

    logger.info("CSV parsing completed: %d rows", len(rows))
    return rows
