# catalog.py
from models import ColumnSpec, ColumnType

# -----------------------------
# Column type membership (line items)
# -----------------------------
PRIMARY_TEXT_IDS = frozenset({"sku"})
NUMERIC_IDS = frozenset({
    "ctn", "pcs", "rp", "tp", "tpVal", "tradeOffer", "slabDisc",
    "grossValue", "others", "getValue", "advanceTax", "gst",
})
SECONDARY_TEXT_IDS = frozenset({"ctSize"})

INDEX_COLUMN_ID = "index"


def classify(column_id: str) -> ColumnType:
    """
    Column type used to pick width constraints.
    Anything unrecognised (aggregation outputs included) is a numeric sum.
    """
    if column_id == INDEX_COLUMN_ID:
        return ColumnType.INDEX
    if column_id in PRIMARY_TEXT_IDS:
        return ColumnType.PRIMARY_TEXT
    if column_id in SECONDARY_TEXT_IDS:
        return ColumnType.SECONDARY_TEXT
    return ColumnType.NUMERIC


# -----------------------------
# Available fields per section
# -----------------------------
_TEXT = ColumnType.SECONDARY_TEXT


def _spec(field_id: str, label: str, column_type: ColumnType | None = None) -> ColumnSpec:
    return ColumnSpec(id=field_id, type=column_type or classify(field_id), label=label)


HEADER_FIELDS = {
    "top_row": (
        _spec("companyName", "Company/Distributor Name", _TEXT),
        _spec("invoiceType", "Invoice Type", _TEXT),
    ),
    "left": (
        _spec("customerName", "Customer Name", _TEXT),
        _spec("cnic", "CNIC", _TEXT),
        _spec("phone", "Phone", _TEXT),
        _spec("address", "Address", _TEXT),
    ),
    "right": (
        _spec("tcn", "TCN", _TEXT),
        _spec("invoiceNo", "Invoice No", _TEXT),
        _spec("bookingDate", "Booking", _TEXT),
        _spec("deliveryDate", "Delivery", _TEXT),
        _spec("booker", "Booker", _TEXT),
        _spec("salesman", "Salesman", _TEXT),
    ),
}

LINE_ITEM_FIELDS = (
    _spec("sku", "SKU / Product"),
    _spec("ctSize", "Ct.Size"),
    _spec("ctn", "Ctn"),
    _spec("pcs", "Pcs"),
    _spec("rp", "R.P"),
    _spec("tp", "T.P"),
    _spec("tpVal", "TP Val"),
    _spec("tradeOffer", "Trade Offer"),
    _spec("slabDisc", "Slab Disc"),
    _spec("grossValue", "Gross Value"),
    _spec("others", "Others"),
    _spec("getValue", "Get Value"),
    _spec("advanceTax", "Advance Tax"),
    _spec("gst", "GST"),
)

SUMMARY_FIELDS = (
    _spec("totalQty", "Total Qty", _TEXT),
    _spec("tpValue", "TP Value"),
    _spec("totalDiscount", "Total Discount"),
    _spec("grossValue", "Gross Value"),
    _spec("others", "Others"),
    _spec("netValue", "Net Value"),
)


def _index(specs) -> dict[str, ColumnSpec]:
    return {s.id: s for s in specs}


LINE_ITEMS_BY_ID = _index(LINE_ITEM_FIELDS)
SUMMARY_BY_ID = _index(SUMMARY_FIELDS)
HEADER_BY_ID = {sub: _index(specs) for sub, specs in HEADER_FIELDS.items()}


def line_item_spec(field_id: str) -> ColumnSpec | None:
    return LINE_ITEMS_BY_ID.get(field_id)


def is_catalog_id(field_id: str) -> bool:
    if field_id in LINE_ITEMS_BY_ID or field_id in SUMMARY_BY_ID:
        return True
    return any(field_id in by_id for by_id in HEADER_BY_ID.values())


def catalog_dict() -> dict:
    def rows(specs):
        return [{"id": s.id, "label": s.label, "type": s.type.value} for s in specs]

    return {
        "header": {sub: rows(specs) for sub, specs in HEADER_FIELDS.items()},
        "line_items": rows(LINE_ITEM_FIELDS),
        "summary": rows(SUMMARY_FIELDS),
    }


# -----------------------------
# Placeholder invoice (preview only)
# -----------------------------
PLACEHOLDER_DATA = {
    "header": {
        "companyName": "Test Distributor",
        "invoiceType": "Commercial Invoice",
        "cnic": "12345-6789012-3",
        "phone": "0321-1234567",
        "address": "Potohhar Rd, I-8/3 I-9 I-9, Islamabad, 44000, Pakistan",
        "invoiceNo": "OBD97395",
        "bookingDate": "2026-01-08",
        "deliveryDate": "2026-01-08",
        "booker": "waqas",
        "salesman": "waqas",
        "customerName": "Waqas Gs (Waqas)",
        "tcn": "TCN30317",
    },
    "line_items": [
        {
            "sku": "ISLAMABAD TEA LEAF BLEND 430 GM",
            "ctSize": "24",
            "barcode": "1234567890123",
            "ctn": 5, "pcs": 0, "rp": 851, "tp": 102120,
            "tpVal": 2400.0, "tradeOffer": 1548.0, "slabDisc": 98172,
            "grossValue": 490.86, "others": 98663, "getValue": 0,
            "advanceTax": 0, "gst": 0,
        },
        {
            "sku": "REFINED PINK SALT 800 GM",
            "ctSize": "24",
            "barcode": "2345678901234",
            "ctn": 0, "pcs": 1, "rp": 55, "tp": 55,
            "tpVal": 19.33, "tradeOffer": 0.0, "slabDisc": 35.67,
            "grossValue": 0.18, "others": 36, "getValue": 0,
            "advanceTax": 0, "gst": 0,
        },
        {
            "sku": "PREMIUM GREEN TEA 250 GM",
            "ctSize": "12",
            "barcode": "3456789012345",
            "ctn": 3, "pcs": 0, "rp": 450, "tp": 5400,
            "tpVal": 1200.0, "tradeOffer": 540.0, "slabDisc": 4860,
            "grossValue": 250.0, "others": 5110, "getValue": 0,
            "advanceTax": 0, "gst": 0,
        },
    ],
    "summary": {
        "totalQty": "8Ctn, 1 Pcs",
        "tpValue": 102226.0,
        "totalDiscount": 3948.0,
        "grossValue": 98278.0,
        "others": 490.86,
        "netValue": 98662.86,
    },
}
