"""Shared test fixtures for Dispute Delta."""

import pytest

from dispute_delta.models.records import BookingRecord, CaptureRecord, LedgerRecord

LEDGER_HEADERS = [
    "Cycle",
    "Merchant Name",
    "Reply By",
    "Case Ref",
    "Reason Code",
    "Reason Category",
    "Transaction Date",
    "Transaction Amount",
    "Post Date",
    "Dispute Amount",
    "Card Number",
]


def ledger_row(
    case_ref: str,
    amount: object = "£100.00",
    card: object = "************5678",
    reason: str = "4837",
    txn_date: object = "45321",
) -> dict:
    return dict(
        zip(
            LEDGER_HEADERS,
            ["1", "ACME TRAVEL", "02/03/2024", case_ref, reason, "Fraud",
             txn_date, amount, "31/01/2024", amount, card],
        )
    )


@pytest.fixture
def baseline_rows() -> list[dict]:
    return [
        ledger_row("CB-1001", amount="£45.00", card="************1111"),
        ledger_row("CB-1002", amount="£60.00", card="************2222"),
    ]


@pytest.fixture
def updated_rows() -> list[dict]:
    return [
        ledger_row("CB-1001", amount="£45.00", card="************1111"),
        ledger_row("CB-1002", amount="£60.00", card="************2222"),
        ledger_row("CB-2001", amount="£100.00", card="************5678", reason="4837"),
        ledger_row("CB-2002", amount="£250.00", card="************9999", reason="4853"),
        ledger_row("CB-2003", amount="", card="************4321", reason="4837"),
    ]


@pytest.fixture
def capture_rows() -> list[dict]:
    return [
        {
            "Amount(Inc. Surcharge)": "£100.03",
            "Last 4 Digits": "**** 5678",
            "Reference": "55012.0",
            "Billing Address": "1 High Street",
            "Delivery Address": "2 Low Road",
        },
        {
            "Amount(Inc. Surcharge)": "£250.00",
            "Last 4 Digits": "**** 1234",
            "Reference": "55099",
            "Billing Address": "",
            "Delivery Address": "",
        },
    ]


@pytest.fixture
def booking_rows() -> list[dict]:
    return [
        {
            "Inet Ref": 55012,
            "Folder Number": "F-7781",
            "Travel Date": 45400,
            "Origin": "LHR",
            "Destination": "JFK",
            "Airline Code": "BA",
            "Invoice Date": "15/01/2024",
            "Return Date": "",
            "Email ID": "traveller@example.com",
        },
    ]


@pytest.fixture
def anomaly() -> LedgerRecord:
    return LedgerRecord(
        case_reference="CB-2001",
        merchant="ACME TRAVEL",
        transaction_amount="$100.00",
        card_last4="5678",
        reason_code="4837",
    )


@pytest.fixture
def capture_record() -> CaptureRecord:
    return CaptureRecord(
        amount=100.03,
        last4="5678",
        reference="R-99",
        booking_address="1 High Street",
        transaction_address="2 Low Road",
    )


@pytest.fixture
def booking_record() -> BookingRecord:
    return BookingRecord(
        reference="55012",
        folder_number="F-7781",
        travel_date="18/04/2024",
        origin="LHR",
        destination="JFK",
        airline_code="BA",
        invoice_date="15/01/2024",
        return_date="",
        email="traveller@example.com",
    )
