# test/conftest.py
from __future__ import annotations

import pytest

from models import Source, Transaction

SCENARIO_HEADERS = (
    "Date", "Invoice No", "Name", "Taxable Value", "IGST",
    "Rate", "Qty", "Item", "Invoice Amount",
)

SCENARIO_MAPPING = {
    "taxableValue": "Taxable Value",
    "totalAmount": "Invoice Amount",
    "gstRate": "Rate",
    "igst": "IGST",
    "date": "Date",
    "invoiceNo": "Invoice No",
    "customerName": "Name",
    "productName": "Item",
    "quantity": "Qty",
}


@pytest.fixture
def scenario_source():
    return Source(
        name="amazon.csv",
        headers=SCENARIO_HEADERS,
        rows=(("2024-04-15", "INV001", "Alice", "1000", "180", "18", "2", "Widget", "18000"),),
    )


@pytest.fixture
def scenario_mapping():
    return dict(SCENARIO_MAPPING)


@pytest.fixture
def make_tx():
    def _make(**kwargs):
        base = dict(
            date="2024-04-15", invoice_no="INV001", customer_name="Alice", state="Karnataka",
            taxable_value=1000.0, total_amount=1180.0, gst_rate=18.0,
            product_name="Widget", quantity=2.0,
        )
        base.update(kwargs)
        return Transaction(**base)
    return _make
