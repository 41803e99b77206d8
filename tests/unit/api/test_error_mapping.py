"""Unit tests for HTTP error mapping"""

import pytest
from libs.result import Error
from src.api.error import ClientError, status_for


@pytest.mark.parametrize(
    "reason, code, expected",
    [
        ("not_found", "INVOICE_NOT_FOUND", 404),
        ("precondition_failed", "INVOICE_NOT_DRAFT", 409),
        ("validation_failed", "INVALID_PAYMENT_AMOUNT", 422),
        ("authorization_failed", "VOID_NOT_PERMITTED", 403),
        ("conflict_retry_exhausted", "CONFLICT_RETRY_EXHAUSTED", 503),
        (None, "INVOICE_NOT_FOUND", 404),
        (None, "UNABLE_TO_LOAD", 400),
        ("internal", "GET_PUBLIC_INVOICE_FAILED", 400),
        ("connection refused", "ISSUE_INVOICE_FAILED", 400),
    ],
)
def test_status_for(reason, code, expected):
    assert status_for(Error(code=code, message="x", reason=reason)) == expected


def test_client_error_explicit_status_wins():
    error = ClientError(Error(code="INVOICE_NOT_FOUND", message="Invoice not found"), status_code=410)

    assert error.status_code == 410
    assert str(error) == "Invoice not found"
